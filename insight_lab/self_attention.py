import math

import numpy as np

from .vector_math import softmax, layer_norm, mat_mul_vector
from .weights import get_default_weights

class AttentionResult:
    def __init__(self, vectors, attention_weights):
        # rows = sequence positions, columns = dimensions
        self.vectors = vectors
        # row i = how much position i attends to every position j
        self.attention_weights = attention_weights

    def __len__(self):
        return len(self.vectors)

class SelfAttentionBlock:
    """A single-head encoder layer on top of fixed weights.

    Q/K/V projections, scaled dot-product attention, output projection,
    residual connection and layer normalisation. The weights are only read,
    so one block (or one set of weights) can serve any number of runs.
    """

    def __init__(self, weights=None):
        self.weights = weights if weights is not None else get_default_weights()
        self.dim = self.weights.dim
        # Single head, so we scale by the full model dimension
        self.scaling_factor = math.sqrt(self.dim)

    def run(self, inputs):
        inputs = np.asarray(inputs, dtype=np.float64)

        if len(inputs) == 0:
            return AttentionResult(np.zeros((0, self.dim)), np.zeros((0, 0)))

        # A. Linear projections
        # Row vector times matrix: out[j] = sum_i x[i] * W[i][j]
        queries = mat_mul_vector(inputs, self.weights.query)
        keys = mat_mul_vector(inputs, self.weights.key)
        values = mat_mul_vector(inputs, self.weights.value)

        # B. Scaled dot-product attention
        scores = (queries @ keys.T) / self.scaling_factor
        attention_weights = softmax(scores)

        # Weighted sum of the values, one context vector per query position
        context = attention_weights @ values

        # C. Output projection, residual connection and layer norm
        projected = mat_mul_vector(context, self.weights.output)
        residual = inputs + projected
        vectors = layer_norm(residual)

        return AttentionResult(vectors, attention_weights)

def run_self_attention_block(inputs, weights=None):
    return SelfAttentionBlock(weights).run(inputs)
