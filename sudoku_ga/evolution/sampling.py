"""Index sampling helpers drawn from a shared random generator."""

from __future__ import annotations

import numpy as np
from numpy.random import Generator


def two_distinct_indices(rng: Generator, max_index: int) -> tuple[int, int]:
    """Pick two different indices from [0, max_index].

    The second draw covers one value fewer and is shifted past the first,
    so the pair is always distinct. Draw order matters for seeded runs.
    """
    if max_index < 1:
        raise ValueError("need at least two indices to choose from")
    i = int(rng.integers(0, max_index + 1))
    j = int(rng.integers(0, max_index))
    if j >= i:
        j += 1
    return i, j


def sample_indices(rng: Generator, n: int, k: int) -> np.ndarray:
    """Pick k distinct indices from range(n)."""
    return rng.choice(n, size=k, replace=False)
