import numpy as np
import pytest

from rational import Rational


def _sample_pairs(seed: int, count: int, bound: int):
    rng = np.random.default_rng(seed)
    pairs = []
    while len(pairs) < count:
        p, q = (int(v) for v in rng.integers(-bound, bound + 1, size=2))
        if q != 0:
            pairs.append((p, q))
    return pairs


@pytest.fixture(scope="session")
def sample_pairs():
    """Provide a fixed set of (p, q) pairs with q != 0 and mixed signs."""
    return _sample_pairs(seed=20240611, count=60, bound=40)


@pytest.fixture(scope="session")
def sample_rationals(sample_pairs):
    return [Rational(p, q) for p, q in sample_pairs]
