import threading

import numpy as np

from .settings import D_MODEL, DEFAULT_MODEL_NAME
from .vector_math import normalize

class EmbeddingProvider:
    """Turns a phrase into one vector per whitespace-separated word."""

    def __init__(self, dim=D_MODEL):
        self.dim = dim

    def embed(self, text):
        raise Exception("Embedding not implemented. Please override this method.")

class TransformerEmbeddingProvider(EmbeddingProvider):
    """Token vectors from a pretrained Hugging Face encoder.

    The last hidden state is used as the "base meaning" of every word. Word
    pieces are averaged back onto the words they came from and special tokens
    ([CLS], [SEP]) are dropped, so the output lines up with ``phrase.split()``.
    """

    def __init__(self, model_name=DEFAULT_MODEL_NAME, dim=D_MODEL, device="cpu"):
        super().__init__(dim)
        self.model_name = model_name
        self.device = device

        self.tokenizer = None
        self.model = None
        self.load_lock = threading.Lock()

    def load(self):
        if self.model is not None:
            return

        with self.load_lock:
            # Another analysis may have loaded the model while we were waiting
            if self.model is not None:
                return

            # Heavy imports, only paid for when a real model is requested
            from transformers import AutoTokenizer, AutoModel

            print(f"Loading model {self.model_name}...")
            tokenizer = AutoTokenizer.from_pretrained(self.model_name)
            model = AutoModel.from_pretrained(self.model_name).to(self.device)

            # A model of the wrong width is never kept, so every call fails the same way
            hidden_size = model.config.hidden_size
            if hidden_size != self.dim:
                raise ValueError(f"Model {self.model_name} produces {hidden_size}-dimensional vectors, expected {self.dim}")

            model.eval()

            self.tokenizer = tokenizer
            self.model = model

    def embed(self, text):
        import torch

        self.load()

        words = text.split()
        if len(words) == 0:
            return []

        encoding = self.tokenizer(words, is_split_into_words=True, return_tensors="pt")

        with torch.no_grad():
            outputs = self.model(**encoding.to(self.device))

        hidden_states = outputs.last_hidden_state[0].cpu().numpy()

        # word_ids() maps every word piece to the index of its word, None for special tokens
        word_ids = encoding.word_ids(0)

        vectors = []
        for word_index in range(len(words)):
            piece_indices = [ piece_index for piece_index, word_id in enumerate(word_ids) if word_id == word_index ]

            # Words can be truncated away for very long inputs
            if len(piece_indices) == 0:
                break

            vectors.append(normalize(np.mean(hidden_states[piece_indices], axis=0)))

        return vectors

class LookupEmbeddingProvider(EmbeddingProvider):
    """Precomputed word -> vector table, for tests and offline demos."""

    def __init__(self, table, dim=D_MODEL, default=None):
        super().__init__(dim)
        self.table = { word: np.asarray(vector, dtype=np.float64) for word, vector in table.items() }
        self.default = np.asarray(default, dtype=np.float64) if default is not None else None

        for word, vector in self.table.items():
            if len(vector) != self.dim:
                raise ValueError(f"Vector for \"{word}\" has {len(vector)} dimensions, expected {self.dim}")

    def embed(self, text):
        vectors = []
        for word in text.split():
            if word in self.table:
                vectors.append(self.table[word].copy())
            elif self.default is not None:
                vectors.append(self.default.copy())
            else:
                raise KeyError(f"No embedding available for \"{word}\"")

        return vectors
