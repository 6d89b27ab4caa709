import math
import threading

import numpy as np
from tqdm.auto import tqdm

from .pseudo_random import PseudoRandom
from .settings import D_MODEL, WEIGHT_SEEDS, WEIGHT_GAIN

# Smallest non-zero value the generator can produce
SMALLEST_UNIFORM = 1 / PseudoRandom.MODULUS

def create_weight_matrix(rows, cols, seed):
    rng = PseudoRandom(seed)
    std_dev = math.sqrt(2 / rows) * WEIGHT_GAIN

    # Draws are consumed pairwise (u, v), row-major, exactly like a nested loop would
    draws = np.array(rng.take(rows * cols * 2), dtype=np.float64)
    u = draws[0::2]
    v = draws[1::2]

    # The generator has full period, so u can be exactly 0 for some seeds
    u = np.where(u == 0, SMALLEST_UNIFORM, u)

    # Box-Muller transform
    z = np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)

    matrix = (z * std_dev).reshape(rows, cols)
    matrix.flags.writeable = False

    return matrix

class EncoderWeights:
    """The four projection matrices of the encoder layer.

    Instances are immutable: every matrix is a read-only array. Build them once
    with ``EncoderWeights.create`` and hand the same instance to every
    attention block.
    """

    def __init__(self, query, key, value, output, seeds=None):
        self.query = query
        self.key = key
        self.value = value
        self.output = output
        self.seeds = dict(seeds) if seeds is not None else None

        shapes = { matrix.shape for matrix in [ query, key, value, output ] }
        if len(shapes) != 1:
            raise ValueError("All weight matrices should have the same shape")

        rows, cols = query.shape
        if rows != cols:
            raise ValueError("Weight matrices should be square")

        self.dim = rows

    @classmethod
    def create(cls, dim=D_MODEL, seeds=WEIGHT_SEEDS):
        if dim <= 0:
            raise ValueError("Dimensionality should be positive")

        print(f"Initialising encoder weights ({dim}x{dim})...")

        matrices = {}
        for name in tqdm([ "query", "key", "value", "output" ]):
            matrices[name] = create_weight_matrix(dim, dim, seeds[name])

        return cls(seeds=seeds, **matrices)

# Process-wide default weights, built on first use
_default_weights = {}
_default_weights_lock = threading.Lock()

def get_default_weights(dim=D_MODEL):
    weights = _default_weights.get(dim)
    if weights is not None:
        return weights

    with _default_weights_lock:
        # Another thread may have built them while we were waiting
        if dim not in _default_weights:
            _default_weights[dim] = EncoderWeights.create(dim)

        return _default_weights[dim]

def reset_default_weights():
    with _default_weights_lock:
        _default_weights.clear()
