"""
Arbitrary-precision arithmetic helpers for the factorization library.

Every strategy computes on gmpy2 ``mpz`` values. This module keeps the
gmpy2 calls in one place so the algorithms read as plain arithmetic.

PROVIDES:
1. Coercion: int / mpz / decimal string -> mpz
2. Number theory: gcd, modular exponentiation, exact absolute difference
3. Square roots: integer square root and perfect-square detection
4. Random sampling: private random states, uniform sampling below a bound
"""

import secrets
from typing import Any, Iterable, List, Optional

import gmpy2
from gmpy2 import mpz


# ============================================================================
# PART 1: COERCION
# ============================================================================

def to_mpz(value: Any) -> mpz:
    """
    Convert a user supplied value to an ``mpz``.

    Accepts ints, mpz values and decimal strings. Surrounding whitespace and
    ``_`` digit separators are ignored in strings.

    Raises:
        ValueError: if the value is not an integer
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode()
    if isinstance(value, str):
        text = value.strip().replace("_", "")
        try:
            return mpz(text, 10)
        except ValueError:
            raise ValueError(f"invalid integer: {value!r}") from None
    if isinstance(value, (int, type(mpz(0)))):
        return mpz(value)
    raise ValueError(f"invalid integer: {value!r}")


def product(values: Iterable[Any]) -> mpz:
    """Exact product of a sequence of integers (1 for an empty sequence)."""
    result = mpz(1)
    for v in values:
        result *= v
    return result


# ============================================================================
# PART 2: NUMBER THEORY
# ============================================================================

def gcd(a: Any, b: Any) -> mpz:
    return gmpy2.gcd(a, b)


def powmod(base: Any, exp: Any, mod: Any) -> mpz:
    return gmpy2.powmod(base, exp, mod)


def abs_diff(a: Any, b: Any) -> mpz:
    """|a - b| computed on unbounded integers."""
    return abs(mpz(a) - b)


# ============================================================================
# PART 3: SQUARE ROOTS
# ============================================================================

def isqrt(n: Any) -> mpz:
    """Floor of the square root of ``n`` (``n >= 0``)."""
    return gmpy2.isqrt(n)


def is_square(n: Any) -> bool:
    if n < 0:
        return False
    return bool(gmpy2.is_square(n))


# ============================================================================
# PART 4: RANDOM SAMPLING
# ============================================================================

def new_random_state(seed: Optional[int] = None):
    """
    Create a private gmpy2 random state.

    Without a seed the state is seeded from the OS entropy pool, so two
    calls never share a witness sequence.
    """
    if seed is None:
        seed = secrets.randbits(64)
    return gmpy2.random_state(seed)


def random_below(bound: Any, state) -> mpz:
    """Uniform sample in ``[0, bound)``."""
    return gmpy2.mpz_random(state, bound)


__all__: List[str] = [
    'to_mpz',
    'product',
    'gcd',
    'powmod',
    'abs_diff',
    'isqrt',
    'is_square',
    'new_random_state',
    'random_below',
]
