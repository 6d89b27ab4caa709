import numpy as np
from sklearn.manifold import MDS
from .dimension_reduction_technique import DimensionReductionTechnique

class DimMds(DimensionReductionTechnique):
    def __init__(self, settings=None):
        super().__init__("mds", settings)

    def reduce(self, data):
        data = np.asarray(data, dtype=np.float64)

        if len(data) < 2:
            return self.empty_solution(len(data))

        self.mds = MDS(n_components=2, random_state=0, **self.settings) # Euclidean distances on the raw vectors
        
        return self.mds.fit_transform(data)
