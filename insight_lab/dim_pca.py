import numpy as np

from .dimension_reduction_technique import DimensionReductionTechnique
from .settings import PCA_ITERATIONS, DEFAULT_PCA_SEED
from .vector_math import normalize

def remove_component(direction, exclude_direction):
    # Gram-Schmidt: take out whatever lies along the excluded (unit) direction
    projection = np.dot(direction, exclude_direction)

    return normalize(direction - projection * exclude_direction)

def get_principal_component(centered, rng, iterations=PCA_ITERATIONS, exclude_direction=None):
    """Power iteration towards the dominant direction of ``centered``.

    The iteration count is a fixed budget, so the result approximates the
    eigenvector; it is not an exact eigendecomposition.
    """
    dim = centered.shape[1]

    direction = normalize(rng.random(dim) - 0.5)
    if exclude_direction is not None:
        direction = remove_component(direction, exclude_direction)

    for _ in range(iterations):
        # X^T X d, without ever building the covariance matrix
        scores = centered @ direction
        direction = normalize(scores @ centered)

        if exclude_direction is not None:
            direction = remove_component(direction, exclude_direction)

    return direction

def compute_pca(vectors, iterations=PCA_ITERATIONS, rng=None):
    if len(vectors) == 0:
        return np.zeros((0, 2))

    # Without a generator we fall back on fresh OS entropy (not reproducible)
    if rng is None:
        rng = np.random.default_rng()

    data = np.asarray(vectors, dtype=np.float64)

    # Center the data
    centered = data - np.mean(data, axis=0)

    first_component = get_principal_component(centered, rng, iterations)
    second_component = get_principal_component(centered, rng, iterations,
                                               exclude_direction=first_component)

    return np.column_stack([ centered @ first_component,
                             centered @ second_component ])

class DimPca(DimensionReductionTechnique):
    def __init__(self, seed=DEFAULT_PCA_SEED, settings=None):
        super().__init__("pca", settings)
        # seed=None gives a different (but geometrically equivalent) layout on every run
        self.seed = seed

    def reduce(self, data):
        iterations = self.settings.get("iterations", PCA_ITERATIONS)
        rng = np.random.default_rng(self.seed)

        return compute_pca(data, iterations, rng)
