import numpy as np
from sklearn.metrics import pairwise_distances

from .helpers import unique
from .vector_math import cosine_similarity

# Changes in similarity smaller than this are reported as "stable"
EVOLUTION_THRESHOLD = 0.05

COMPARISON_COLUMNS = [ "token_a", "position_a", "source_a",
                       "token_b", "position_b", "source_b",
                       "similarity" ]

DISTANCE_EVOLUTION_COLUMNS = [ "token_a", "position_a", "source_a",
                               "token_b", "position_b", "source_b",
                               "base_similarity", "final_similarity", "delta", "effect" ]

def create_similarity_matrix(vectors):
    if len(vectors) == 0:
        return np.zeros((0, 0))

    # Compute cosine similarity among tokens
    # https://stackoverflow.com/questions/17627219/whats-the-fastest-way-in-python-to-calculate-cosine-similarity-given-sparse-mat
    return 1 - pairwise_distances(np.asarray(vectors), metric="cosine")

def make_comparison(token_a, position_a, source_a, token_b, position_b, source_b, similarity):
    return { "token_a": token_a,
             "position_a": position_a,
             "source_a": source_a,
             "token_b": token_b,
             "position_b": position_b,
             "source_b": source_b,
             "similarity": similarity }

def find_cosine_comparisons(result):
    """Compares the final vectors of every pair of identical tokens.

    Repeated words within phrase A, then within phrase B, then the same word
    across the two phrases.
    """
    comparisons = []

    # Repeated words within a single phrase
    for source_id in result.get_source_ids():
        phrase = result.get_phrase(source_id)
        for i, token in enumerate(phrase.tokens):
            for j in range(i + 1, len(phrase.tokens)):
                if phrase.tokens[j] != token:
                    continue

                comparisons.append(make_comparison(token, i, source_id,
                                                   phrase.tokens[j], j, source_id,
                                                   cosine_similarity(phrase.final_vectors[i],
                                                                     phrase.final_vectors[j])))

    # The same word across phrases
    phrase_a = result.get_phrase("A")
    phrase_b = result.get_phrase("B")
    for i, token_a in enumerate(phrase_a.tokens):
        for j, token_b in enumerate(phrase_b.tokens):
            if token_a != token_b:
                continue

            comparisons.append(make_comparison(token_a, i, "A",
                                               token_b, j, "B",
                                               cosine_similarity(phrase_a.final_vectors[i],
                                                                 phrase_b.final_vectors[j])))

    return comparisons

def describe_delta(delta):
    if delta > EVOLUTION_THRESHOLD:
        return "converged"
    elif delta < -EVOLUTION_THRESHOLD:
        return "diverged"

    return "stable"

def compute_distance_evolution(result, limit=10):
    # Every token instance of both phrases, with its vector before and after the encoder
    instances = []
    for source_id in result.get_source_ids():
        phrase = result.get_phrase(source_id)
        for position, token in enumerate(phrase.tokens):
            instances.append({ "token": token,
                               "position": position,
                               "source": source_id,
                               "raw": phrase.raw_vectors[position],
                               "attended": phrase.final_vectors[position] })

    pairs = []

    # Upper triangle only, so every pair is listed once
    for i in range(len(instances)):
        for j in range(i + 1, len(instances)):
            instance_a = instances[i]
            instance_b = instances[j]

            base_similarity = cosine_similarity(instance_a["raw"], instance_b["raw"])
            final_similarity = cosine_similarity(instance_a["attended"], instance_b["attended"])
            delta = final_similarity - base_similarity

            pairs.append({ "token_a": instance_a["token"],
                           "position_a": instance_a["position"],
                           "source_a": instance_a["source"],
                           "token_b": instance_b["token"],
                           "position_b": instance_b["position"],
                           "source_b": instance_b["source"],
                           "base_similarity": base_similarity,
                           "final_similarity": final_similarity,
                           "delta": delta,
                           "effect": describe_delta(delta) })

    # Most significant changes first
    pairs.sort(key=lambda pair: abs(pair["delta"]), reverse=True)

    if limit is not None:
        pairs = pairs[:limit]

    return pairs

def get_common_tokens(result):
    tokens_b = { token.lower() for token in result.tokens_b }

    return unique([ token.lower() for token in result.tokens_a if token.lower() in tokens_b ])

def get_neighbours(phrase, focus_index):
    return [ { "token": token,
               "position": position,
               "similarity": cosine_similarity(phrase.final_vectors[focus_index],
                                               phrase.final_vectors[position]) }
             for position, token in enumerate(phrase.tokens) if position != focus_index ]

def compute_context_influence(result, token=None):
    """How a word shared by both phrases relates to its neighbours in each.

    Without a ``token``, the first common word (case-insensitive) is used.
    Returns None when the phrases have no word in common.
    """
    common_tokens = get_common_tokens(result)

    if token is None:
        if len(common_tokens) == 0:
            return None

        token = common_tokens[0]

    token = token.lower()
    if token not in common_tokens:
        return None

    influence = { "token": token,
                  "common_tokens": common_tokens }

    for source_id in result.get_source_ids():
        phrase = result.get_phrase(source_id)
        focus_index = [ phrase_token.lower() for phrase_token in phrase.tokens ].index(token)

        influence[source_id] = { "position": focus_index,
                                 "neighbours": get_neighbours(phrase, focus_index) }

    return influence
