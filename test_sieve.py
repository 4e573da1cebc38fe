import pytest

from factorization import is_probably_prime
from sieve import Sieve

PRIMES_BELOW_100 = [
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79,
    83, 89, 97,
]


class TestSieve:

    def test_primes_below_100(self):
        sieve = Sieve(100)
        assert list(sieve.primes()) == PRIMES_BELOW_100
        assert len(sieve) == 25

    def test_is_prime(self):
        sieve = Sieve(100)
        for n in range(101):
            assert sieve.is_prime(n) == (n in PRIMES_BELOW_100)

    def test_limit_is_inclusive(self):
        assert Sieve(97).is_prime(97)

    def test_tiny_limits(self):
        assert list(Sieve(0).primes()) == []
        assert list(Sieve(1).primes()) == []
        assert list(Sieve(2).primes()) == [2]

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            Sieve(10).is_prime(11)
        with pytest.raises(IndexError):
            Sieve(10).is_prime(-1)

    def test_negative_limit(self):
        with pytest.raises(ValueError):
            Sieve(-1)

    def test_agrees_with_miller_rabin(self):
        sieve = Sieve(5000)
        for n in range(5001):
            assert sieve.is_prime(n) == is_probably_prime(n), n
