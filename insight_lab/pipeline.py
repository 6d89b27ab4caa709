import asyncio
import math

from .analysis_result import AnalysisResult
from .dim_pca import DimPca
from .phrase_analysis import PhraseAnalysis
from .point_collection import PointCollection
from .positional_encoding import get_positional_encoding_matrix
from .self_attention import SelfAttentionBlock
from .settings import D_MODEL, STAGES, SOURCE_IDS
from .vector_math import add_vectors, scale_vector, get_mean_vector, cosine_similarity, stack_vectors
from .weights import get_default_weights

class Pipeline:
    def __init__(self,
                 embedding_provider,
                 weights=None,
                 dimension_reduction_technique=None,
                 dim=None,
                 on_status=None):
        self.embedding_provider = embedding_provider

        # Encoder weights are shared read-only, so we take the process-wide
        # default set unless a specific one is injected
        if weights is None:
            weights = get_default_weights(dim if dim is not None else D_MODEL)

        if dim is not None and dim != weights.dim:
            raise ValueError(f"Weights are {weights.dim}-dimensional, but dimensionality {dim} was requested")

        self.weights = weights
        self.dim = weights.dim
        self.attention_block = SelfAttentionBlock(weights)

        self.dimension_reduction_technique = dimension_reduction_technique \
                                             if dimension_reduction_technique is not None \
                                             else DimPca()

        # Optional callback receiving short status lines (e.g. for a host UI)
        self.on_status = on_status

        # As in "Attention Is All You Need", embeddings are multiplied by sqrt(d_model).
        # Normalised embeddings are tiny compared to the positional encoding (range -1 to 1),
        # so without this the position would drown out the meaning.
        self.scale_factor = math.sqrt(self.dim)

    def report_status(self, message):
        print(message)

        if self.on_status is not None:
            self.on_status(message)

    def tokenize(self, phrase):
        return [ token for token in phrase.strip().split() if len(token) > 0 ]

    async def get_embeddings(self, source_id, phrase):
        # The provider call is the only blocking part of an analysis, so it runs
        # in a worker thread and the event loop stays free in the meantime
        try:
            vectors = await asyncio.to_thread(self.embedding_provider.embed, phrase)
        except Exception as e:
            print(f"Warning: could not retrieve embeddings for phrase {source_id} (\"{phrase}\"): {e}")
            self.report_status(f"Error loading embeddings for phrase {source_id}.")

            # No embeddings means no tokens, the rest of the pipeline copes with that
            return []

        return list(vectors)

    def process_phrase(self, source_id, phrase, embeddings):
        tokens = self.tokenize(phrase)

        if len(embeddings) != len(tokens) and len(embeddings) > 0:
            print(f"Warning: phrase {source_id} has {len(tokens)} tokens but {len(embeddings)} embeddings; " +
                  "only the aligned part is kept.")

        # One vector per token instance, extra vectors or extra tokens are dropped
        count = min(len(tokens), len(embeddings))
        tokens = tokens[:count]
        embeddings = embeddings[:count]

        phrase_analysis = PhraseAnalysis(source_id, phrase, tokens)

        # 1. Embedding scaling + positional encoding
        phrase_analysis.raw_vectors = stack_vectors([ scale_vector(embedding, self.scale_factor)
                                                      for embedding in embeddings ], self.dim)
        positional_encodings = get_positional_encoding_matrix(len(tokens), self.dim)
        phrase_analysis.positional_vectors = stack_vectors([ add_vectors(vector, positional_encodings[position])
                                                             for position, vector in enumerate(phrase_analysis.raw_vectors) ],
                                                           self.dim)

        # 2. Self-attention encoder layer
        attention_result = self.attention_block.run(phrase_analysis.positional_vectors)
        phrase_analysis.final_vectors = attention_result.vectors
        phrase_analysis.attention_weights = attention_result.attention_weights

        # 3. Sentence vector, using the output of the encoder
        phrase_analysis.pooled_vector = get_mean_vector(phrase_analysis.final_vectors, self.dim)

        return phrase_analysis

    def project(self, result):
        # All stages of both phrases go through one reduction, so they share a coordinate space
        collection = PointCollection()
        for source_id in result.get_source_ids():
            collection.add_phrase(result.get_phrase(source_id), STAGES)

        solution = self.dimension_reduction_technique.reduce(stack_vectors(collection.get_vectors(), self.dim))
        collection.attach_solution(solution)

        result.points = collection.points
        result.dimension_reduction_technique = self.dimension_reduction_technique.name

    async def analyze(self, phrase_a, phrase_b):
        print("Processing \"{}\" and \"{}\"".format(phrase_a, phrase_b))

        phrases = dict(zip(SOURCE_IDS, [ phrase_a, phrase_b ]))
        result = AnalysisResult()

        self.report_status("Loading embeddings...")
        embeddings = {}
        for source_id, phrase in phrases.items():
            embeddings[source_id] = await self.get_embeddings(source_id, phrase)

        # From here on everything is synchronous, the shared weights are only read
        self.report_status("Computing attention...")
        for source_id, phrase in phrases.items():
            result.register_phrase(self.process_phrase(source_id, phrase, embeddings[source_id]))

        result.sentence_similarity = cosine_similarity(result.get_phrase("A").pooled_vector,
                                                       result.get_phrase("B").pooled_vector)

        self.report_status(f"Running {self.dimension_reduction_technique.name.upper()}...")
        # Give the host a chance to repaint before the projection
        await asyncio.sleep(0)

        self.project(result)

        return result

    def analyze_sync(self, phrase_a, phrase_b):
        return asyncio.run(self.analyze(phrase_a, phrase_b))
