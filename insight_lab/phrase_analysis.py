class PhraseAnalysis:
    def __init__(self, source_id, phrase, tokens):
        self.source_id = source_id
        self.phrase = phrase
        self.tokens = tokens
        
        # --- Vectors per pipeline stage ---
        # rows = token positions, columns = dimensions
        # Embeddings scaled by sqrt(D)
        self.raw_vectors = None
        # Scaled embeddings + positional encoding
        self.positional_vectors = None
        # Output of the self-attention block
        self.final_vectors = None

        # --- Attention ---
        # Square matrix, row i = distribution of position i over all positions
        self.attention_weights = None

        # --- Sentence level ---
        # Normalised mean of the final vectors
        self.pooled_vector = None

    def is_empty(self):
        return len(self.tokens) == 0

    def get_stage_vectors(self, stage):
        if stage == "raw":
            return self.raw_vectors
        elif stage == "positional":
            return self.positional_vectors
        elif stage == "attended":
            return self.final_vectors

        raise ValueError(f"Unknown stage \"{stage}\"")
