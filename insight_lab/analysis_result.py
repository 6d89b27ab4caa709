from .phrase_analysis import PhraseAnalysis

class AnalysisResult:
    def __init__(self):
        self.phrases = {}

        # Cosine similarity of the pooled sentence vectors
        self.sentence_similarity = None

        # Every stage of both phrases, projected into one shared 2D space
        self.points = []
        self.dimension_reduction_technique = None
        
    def register_phrase(self, phrase_analysis):
        if not type(phrase_analysis) == PhraseAnalysis:
            raise Exception("Phrase input should be of type \"PhraseAnalysis\"")
        
        self.phrases[phrase_analysis.source_id] = phrase_analysis
    
    def get_phrase(self, source_id):
        return self.phrases[source_id]
    
    def get_source_ids(self):
        return list(self.phrases.keys())

    def get_points(self, stage=None, source_id=None):
        return [ point for point in self.points
                 if (stage is None or point.stage == stage) and
                    (source_id is None or point.source_id == source_id) ]

    @property
    def tokens_a(self):
        return self.phrases["A"].tokens

    @property
    def tokens_b(self):
        return self.phrases["B"].tokens

    @property
    def final_vectors_a(self):
        return self.phrases["A"].final_vectors

    @property
    def final_vectors_b(self):
        return self.phrases["B"].final_vectors

    @property
    def attention_matrix_a(self):
        return self.phrases["A"].attention_weights

    @property
    def attention_matrix_b(self):
        return self.phrases["B"].attention_weights
