import numpy as np

from .settings import D_MODEL, LAYER_NORM_EPSILON

# All helpers are pure: they build new arrays and never touch their inputs.
# Vectors of different lengths going into dot / mat_mul_vector are a caller error.

def dot(v1, v2):
    return float(np.dot(np.asarray(v1, dtype=np.float64), np.asarray(v2, dtype=np.float64)))

def add_vectors(v1, v2):
    # Lenient on purpose: only the overlapping part is added
    length = min(len(v1), len(v2))

    return np.asarray(v1[:length], dtype=np.float64) + np.asarray(v2[:length], dtype=np.float64)

def scale_vector(v, factor):
    return np.asarray(v, dtype=np.float64) * factor

def magnitude(v):
    return float(np.sqrt(dot(v, v)))

def normalize(v):
    v = np.asarray(v, dtype=np.float64)
    length = magnitude(v)

    # A zero vector stays a zero vector
    if length == 0:
        return v.copy()

    return v / length

def cosine_similarity(v1, v2):
    magnitude_1 = magnitude(v1)
    magnitude_2 = magnitude(v2)

    if magnitude_1 == 0 or magnitude_2 == 0:
        return 0.0

    return dot(v1, v2) / (magnitude_1 * magnitude_2)

def get_mean_vector(vectors, dim=D_MODEL):
    if len(vectors) == 0:
        return np.zeros(dim)

    mean = np.mean(np.asarray(vectors, dtype=np.float64), axis=0)

    return normalize(mean)

def mat_mul_vector(v, matrix):
    # out[j] = sum_i v[i] * matrix[i][j], also row by row when v is a stack of vectors
    return np.asarray(v, dtype=np.float64) @ np.asarray(matrix, dtype=np.float64)

def softmax(scores):
    scores = np.asarray(scores, dtype=np.float64)

    # Subtract the maximum so exp() cannot overflow
    exps = np.exp(scores - np.max(scores, axis=-1, keepdims=True))

    return exps / np.sum(exps, axis=-1, keepdims=True)

def layer_norm(v, epsilon=LAYER_NORM_EPSILON):
    # Normalises over the last axis, i.e. each vector over its own dimensions
    v = np.asarray(v, dtype=np.float64)
    mean = np.mean(v, axis=-1, keepdims=True)
    variance = np.mean((v - mean) ** 2, axis=-1, keepdims=True)

    return (v - mean) / np.sqrt(variance + epsilon)

def stack_vectors(vectors, dim=D_MODEL):
    # Keeps the (0, dim) shape for empty sequences
    if len(vectors) == 0:
        return np.zeros((0, dim))

    return np.stack([ np.asarray(vector, dtype=np.float64) for vector in vectors ])
