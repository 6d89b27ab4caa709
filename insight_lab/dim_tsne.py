import numpy as np
from sklearn.manifold import TSNE
from .dimension_reduction_technique import DimensionReductionTechnique

class DimTsne(DimensionReductionTechnique):
    def __init__(self, settings=None):
        super().__init__("tsne", settings)

    def reduce(self, data):
        data = np.asarray(data, dtype=np.float64)

        if len(data) < 2:
            return self.empty_solution(len(data))

        settings = { "perplexity": 30.0, **self.settings }
        # t-SNE refuses a perplexity that is not below the number of points,
        # which is easily the case with two short phrases
        settings["perplexity"] = min(settings["perplexity"], len(data) - 1)

        self.tsne = TSNE(n_components=2, random_state=0, init="random", **settings)
        
        return self.tsne.fit_transform(data)
