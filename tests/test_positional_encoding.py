import math

import numpy as np
import pytest

from insight_lab.positional_encoding import get_positional_encoding, get_positional_encoding_matrix

@pytest.mark.parametrize("dim", [ 2, 8, 384 ])
def test_position_zero(dim):
    pe = get_positional_encoding(0, dim)

    assert np.all(pe[0::2] == 0)
    assert np.all(pe[1::2] == 1)

def test_formula():
    pe = get_positional_encoding(3, 8)

    for i in range(4):
        argument = 3 / math.pow(10000, (2 * i) / 8)
        assert pe[2 * i] == pytest.approx(math.sin(argument))
        assert pe[2 * i + 1] == pytest.approx(math.cos(argument))

def test_odd_dimension_leaves_last_slot_zero():
    pe = get_positional_encoding(5, 7)

    assert len(pe) == 7
    assert pe[6] == 0
    assert pe[0] == pytest.approx(math.sin(5))

def test_positions_are_distinct():
    assert not np.allclose(get_positional_encoding(1, 16), get_positional_encoding(2, 16))

def test_negative_position_is_rejected():
    with pytest.raises(ValueError):
        get_positional_encoding(-1, 8)

def test_matrix_rows_match_single_positions():
    matrix = get_positional_encoding_matrix(4, 10)

    assert matrix.shape == (4, 10)
    assert np.array_equal(matrix[2], get_positional_encoding(2, 10))
    assert get_positional_encoding_matrix(0, 10).shape == (0, 10)
