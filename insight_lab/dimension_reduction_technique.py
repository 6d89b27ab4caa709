import numpy as np

class DimensionReductionTechnique:
    def __init__(self, name, settings=None):
        self.name = name
        self.settings = settings if settings is not None else {}
        
    def reduce(self, data):
        raise Exception("Reduction not implemented. Please override this method.")

    # Every technique returns one (x, y) row per input vector, in input order
    def empty_solution(self, count):
        return np.zeros((count, 2))
