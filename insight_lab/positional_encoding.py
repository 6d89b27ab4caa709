import numpy as np

from .settings import D_MODEL, PE_BASE

def get_positional_encoding(pos, dim=D_MODEL):
    """Sinusoidal encoding of a single position.

    Even slots hold sin(pos / 10000^(2i/dim)), odd slots the matching cosine.
    With an odd ``dim`` there is no partner for the last slot, so it stays 0.
    """
    if pos < 0:
        raise ValueError("Position should be zero or positive")

    pe = np.zeros(dim)

    pairs = dim // 2
    i = np.arange(pairs)
    argument = pos / np.power(PE_BASE, (2 * i) / dim)

    pe[0:2 * pairs:2] = np.sin(argument)
    pe[1:2 * pairs:2] = np.cos(argument)

    return pe

def get_positional_encoding_matrix(length, dim=D_MODEL):
    if length == 0:
        return np.zeros((0, dim))

    return np.stack([ get_positional_encoding(pos, dim) for pos in range(length) ])
