import numpy as np
import pytest

from insight_lab.self_attention import SelfAttentionBlock, run_self_attention_block
from insight_lab.vector_math import layer_norm, softmax

from conftest import DIM

def random_inputs(count, dim=DIM, seed=7):
    return np.random.default_rng(seed).normal(size=(count, dim)) * 4

@pytest.mark.parametrize("count", [ 1, 2, 3, 8 ])
def test_output_shapes_and_rows_sum_to_one(weights, count):
    result = run_self_attention_block(random_inputs(count), weights)

    assert result.vectors.shape == (count, DIM)
    assert result.attention_weights.shape == (count, count)
    assert np.all(result.attention_weights >= 0)
    assert np.allclose(result.attention_weights.sum(axis=1), 1.0, atol=1e-6)

def test_empty_sequence(weights):
    result = run_self_attention_block([], weights)

    assert result.vectors.tolist() == []
    assert result.attention_weights.tolist() == []
    assert len(result) == 0

def test_single_token_attends_to_itself(weights):
    inputs = random_inputs(1)
    result = run_self_attention_block(inputs, weights)

    assert result.attention_weights.tolist() == [[1.0]]

    # With one key, the context is just that key's value
    expected = layer_norm(inputs[0] + (inputs[0] @ weights.value) @ weights.output)
    assert np.allclose(result.vectors[0], expected)

def test_matches_the_step_by_step_formula(weights):
    inputs = random_inputs(3)
    result = run_self_attention_block(inputs, weights)

    for i in range(3):
        query = inputs[i] @ weights.query
        scores = [ np.dot(query, inputs[j] @ weights.key) / np.sqrt(DIM) for j in range(3) ]
        row = softmax(scores)
        context = sum(row[j] * (inputs[j] @ weights.value) for j in range(3))
        expected = layer_norm(inputs[i] + context @ weights.output)

        assert np.allclose(result.attention_weights[i], row)
        assert np.allclose(result.vectors[i], expected)

def test_outputs_are_layer_normalised(weights):
    result = run_self_attention_block(random_inputs(4), weights)

    assert np.allclose(result.vectors.mean(axis=1), 0.0, atol=1e-9)
    assert np.allclose(result.vectors.std(axis=1), 1.0, atol=1e-3)

def test_is_deterministic_and_leaves_inputs_alone(weights):
    inputs = random_inputs(5)
    copy = inputs.copy()

    block = SelfAttentionBlock(weights)
    first = block.run(inputs)
    second = block.run(inputs)

    assert np.array_equal(first.vectors, second.vectors)
    assert np.array_equal(first.attention_weights, second.attention_weights)
    assert np.array_equal(inputs, copy)

def test_attention_is_permutation_equivariant_without_positions(weights):
    inputs = random_inputs(3)
    reordered = inputs[[2, 1, 0]]

    first = run_self_attention_block(inputs, weights)
    second = run_self_attention_block(reordered, weights)

    # Without positional information attention is permutation-equivariant
    assert np.allclose(second.attention_weights, first.attention_weights[[2, 1, 0]][:, [2, 1, 0]])
