import numpy as np
import pytest

from insight_lab.comparisons import find_cosine_comparisons, compute_distance_evolution, \
                                    compute_context_influence, create_similarity_matrix, describe_delta
from insight_lab.pipeline import Pipeline
from insight_lab.vector_math import cosine_similarity

@pytest.fixture
def result(provider, weights):
    return Pipeline(provider, weights=weights).analyze_sync("the cat sat on the mat", "the dog bites the cat")

def test_cosine_comparisons(result):
    comparisons = find_cosine_comparisons(result)

    pairs = [ (c["source_a"], c["position_a"], c["source_b"], c["position_b"]) for c in comparisons ]
    assert pairs == [ ("A", 0, "A", 4),
                      ("B", 0, "B", 3),
                      ("A", 0, "B", 0),
                      ("A", 0, "B", 3),
                      ("A", 1, "B", 4),
                      ("A", 4, "B", 0),
                      ("A", 4, "B", 3) ]

    first = comparisons[0]
    assert first["token_a"] == first["token_b"] == "the"
    assert first["similarity"] == pytest.approx(cosine_similarity(result.final_vectors_a[0],
                                                                  result.final_vectors_a[4]))

def test_distance_evolution(result):
    pairs = compute_distance_evolution(result, limit=None)

    # 6 + 5 token instances
    assert len(pairs) == 11 * 10 // 2

    deltas = [ abs(pair["delta"]) for pair in pairs ]
    assert deltas == sorted(deltas, reverse=True)

    for pair in pairs:
        assert pair["delta"] == pytest.approx(pair["final_similarity"] - pair["base_similarity"])
        assert pair["effect"] == describe_delta(pair["delta"])

    assert len(compute_distance_evolution(result)) == 10

def test_same_word_starts_identical(result):
    pairs = compute_distance_evolution(result, limit=None)

    the_pair = [ pair for pair in pairs if (pair["source_a"], pair["position_a"], pair["source_b"], pair["position_b"]) == ("A", 0, "B", 0) ][0]
    assert the_pair["base_similarity"] == pytest.approx(1.0)

def test_describe_delta():
    assert describe_delta(0.2) == "converged"
    assert describe_delta(-0.2) == "diverged"
    assert describe_delta(0.01) == "stable"

def test_context_influence(result):
    influence = compute_context_influence(result)

    assert influence["common_tokens"] == [ "the", "cat" ]
    assert influence["token"] == "the"
    assert influence["A"]["position"] == 0
    assert len(influence["A"]["neighbours"]) == 5
    assert len(influence["B"]["neighbours"]) == 4

    cat = compute_context_influence(result, "Cat")
    assert cat["A"]["position"] == 1
    assert cat["B"]["position"] == 4
    assert [ neighbour["token"] for neighbour in cat["B"]["neighbours"] ] == [ "the", "dog", "bites", "the" ]

def test_context_influence_without_common_words(provider, weights):
    result = Pipeline(provider, weights=weights).analyze_sync("dog bites", "the cat")

    assert compute_context_influence(result) is None
    assert compute_context_influence(result, "dog") is None

def test_similarity_matrix():
    vectors = np.random.default_rng(5).normal(size=(3, 8))
    matrix = create_similarity_matrix(vectors)

    assert matrix.shape == (3, 3)
    assert matrix[0, 1] == pytest.approx(cosine_similarity(vectors[0], vectors[1]))
    assert np.allclose(np.diag(matrix), 1.0)
    assert create_similarity_matrix([]).shape == (0, 0)
