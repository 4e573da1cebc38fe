"""
Sieve of Eratosthenes over a NumPy boolean array.

Useful for generating reference primes (tests, benchmarks); the
factorization strategies themselves do not depend on it.
"""
import math
from typing import Iterator

import numpy as np


class Sieve:
    """Primality table for every integer in [0, limit]."""

    def __init__(self, limit: int):
        if limit < 0:
            raise ValueError(f"sieve limit must be non-negative, got {limit}")
        self.limit = limit

        sieve = np.ones(limit + 1, dtype=bool)
        sieve[:2] = False
        # Vectorized sieve: mark multiples as composite
        for i in range(2, math.isqrt(limit) + 1):
            if sieve[i]:
                sieve[i*i::i] = False
        self._sieve = sieve

    def primes(self) -> Iterator[int]:
        for p in np.flatnonzero(self._sieve):
            yield int(p)

    def is_prime(self, n: int) -> bool:
        if not 0 <= n <= self.limit:
            raise IndexError(f"{n} is outside the sieve range [0, {self.limit}]")
        return bool(self._sieve[n])

    def __len__(self):
        return int(np.count_nonzero(self._sieve))
