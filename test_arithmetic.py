"""
Tests for the gmpy2 arithmetic layer.

Tests verify:
1. Coercion: ints, mpz and strings convert; junk is rejected
2. Exactness: results stay exact far beyond 64 bits
3. Random sampling: bounds and reproducibility of seeded states
"""

import pytest
from gmpy2 import mpz

from arithmetic import (
    abs_diff,
    gcd,
    is_square,
    isqrt,
    new_random_state,
    powmod,
    product,
    random_below,
    to_mpz,
)


# ============================================================================
# PART 1: COERCION
# ============================================================================

class TestToMpz:

    @pytest.mark.parametrize("value, expected", [
        (42, 42),
        (mpz(42), 42),
        ("42", 42),
        ("  42\n", 42),
        ("1_000_003", 1000003),
        ("-7", -7),
        (b"15", 15),
    ])
    def test_accepted(self, value, expected):
        assert to_mpz(value) == expected

    @pytest.mark.parametrize("value", ["12a", "0x1f", 3.5, None])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            to_mpz(value)

    def test_large_string(self):
        n = to_mpz(str(2**200 + 1))
        assert n == 2**200 + 1


# ============================================================================
# PART 2: NUMBER THEORY
# ============================================================================

class TestNumberTheory:

    def test_gcd(self):
        assert gcd(194, 8051) == 97
        assert gcd(0, 25) == 25

    def test_powmod_matches_builtin(self):
        base, exp, mod = 2**100 + 3, 2**64 + 1, 2**127 - 1
        assert powmod(base, exp, mod) == pow(base, exp, mod)

    def test_abs_diff(self):
        big = 2**128
        assert abs_diff(3, big) == big - 3
        assert abs_diff(big, 3) == big - 3
        assert abs_diff(5, 5) == 0

    def test_product(self):
        assert product([]) == 1
        assert product([2, 2, 3]) == 12
        assert product([2**64, 2**64]) == 2**128


# ============================================================================
# PART 3: SQUARE ROOTS
# ============================================================================

class TestSquareRoots:

    def test_isqrt(self):
        assert isqrt(0) == 0
        assert isqrt(10) == 3
        assert isqrt(2**200) == 2**100
        assert isqrt(2**200 - 1) == 2**100 - 1

    def test_is_square(self):
        assert is_square(0)
        assert is_square(49)
        assert not is_square(50)
        assert not is_square(-4)
        assert is_square((10**30 + 7) ** 2)


# ============================================================================
# PART 4: RANDOM SAMPLING
# ============================================================================

class TestRandomSampling:

    def test_below_bound(self):
        state = new_random_state()
        samples = [random_below(10, state) for _ in range(500)]
        assert all(0 <= s < 10 for s in samples)
        assert len(set(samples)) > 1

    def test_seeded_states_repeat(self):
        a = new_random_state(99)
        b = new_random_state(99)
        bound = 2**100
        assert [random_below(bound, a) for _ in range(5)] == [random_below(bound, b) for _ in range(5)]
