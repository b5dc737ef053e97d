from itertools import product

import numpy as np
import pytest


def all_sequences(alphabet: str, max_len: int) -> list[str]:
    """Every sequence over ``alphabet`` of length 0 to ``max_len``."""
    return [''.join(p) for n in range(max_len + 1) for p in product(alphabet, repeat=n)]


def random_sequence(rng, alphabet: str, max_len: int) -> str:
    n = int(rng.integers(0, max_len + 1))
    return ''.join(rng.choice(list(alphabet), size=n))


@pytest.fixture(scope='session')
def small_sequences() -> list[str]:
    return all_sequences('AC', 4)


@pytest.fixture
def rng():
    return np.random.default_rng(20220501)
