POINT_COLUMNS = [ "token", "position", "stage", "source", "x", "y" ]

class ProjectedPoint:
    def __init__(self, token, position, stage, source_id, vector):
        self.token = token
        self.position = position
        self.stage = stage
        self.source_id = source_id
        self.vector = vector

        # Filled in after dimension reduction
        self.coords = None

    def as_row(self):
        return { "token": self.token,
                 "position": self.position,
                 "stage": self.stage,
                 "source": self.source_id,
                 "x": self.coords[0] if self.coords is not None else None,
                 "y": self.coords[1] if self.coords is not None else None }

class PointCollection:
    def __init__(self):
        self.points = []

    def add(self, token, position, stage, source_id, vector):
        point = ProjectedPoint(token, position, stage, source_id, vector)
        self.points.append(point)

        return point

    def add_phrase(self, phrase_analysis, stages):
        # Token by token, so the stages of one token instance stay together
        for position, token in enumerate(phrase_analysis.tokens):
            for stage in stages:
                self.add(token,
                         position,
                         stage,
                         phrase_analysis.source_id,
                         phrase_analysis.get_stage_vectors(stage)[position])

    def get_vectors(self):
        return [ point.vector for point in self.points ]

    def attach_solution(self, solution):
        # One row of coordinates per point, in insertion order
        if len(solution) != len(self.points):
            raise Exception(f"Solution has {len(solution)} rows, expected {len(self.points)}")

        for point, coords in zip(self.points, solution):
            point.coords = (float(coords[0]), float(coords[1]))

    def __len__(self):
        return len(self.points)
