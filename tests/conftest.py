import numpy as np
import pytest

from insight_lab.embedding_provider import EmbeddingProvider, LookupEmbeddingProvider
from insight_lab.vector_math import normalize
from insight_lab.weights import EncoderWeights

# Small dimensionality keeps the weight initialisation fast
DIM = 16

WORDS = [ "dog", "bites", "human", "hello", "the", "cat", "sat", "on", "mat" ]

def make_table(words, dim=DIM, seed=42):
    rng = np.random.default_rng(seed)

    return { word: normalize(rng.normal(size=dim)) for word in words }

class FailingEmbeddingProvider(EmbeddingProvider):
    """Fails for every phrase containing one of the given words."""

    def __init__(self, provider, failing_words):
        super().__init__(provider.dim)
        self.provider = provider
        self.failing_words = failing_words

    def embed(self, text):
        for word in text.split():
            if word in self.failing_words:
                raise RuntimeError(f"model crashed on \"{word}\"")

        return self.provider.embed(text)

@pytest.fixture(scope="session")
def weights():
    return EncoderWeights.create(DIM)

@pytest.fixture
def provider():
    return LookupEmbeddingProvider(make_table(WORDS), dim=DIM)
