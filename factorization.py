"""
Integer factorization using trial division, Pollard's Rho algorithm (Brent's
variant) and Fermat's difference of squares.

STRATEGIES:
1. Trial Division: divides by 2, 3, 5, 7, ... until the quotient reaches 1
   - No square-root cut-off, so a large prime costs time linear in itself
   - Baseline for comparing the other two strategies
2. Brent's Rho: tortoise/hare cycle detection on x -> x^2 + c (mod m)
   - Retries with c = 1, 2, ..., 99 when a cycle collapses to m itself
   - Raises SplittingExhaustedError when every offset fails
3. Fermat: searches a^2 - m = b^2 starting at the ceiling square root
   - Fast when m has a factor near its square root
   - Degrades to a near-linear search when the factors are far apart

Brent's Rho and Fermat only know how to split one composite into two
factors. decompose() drives them to a full factorization: it strips the
factors of 2, then runs a FIFO worklist in which every value is classified
by the Miller-Rabin oracle and either accepted as prime or split again.

DEPENDENCIES:
- gmpy2: arbitrary-precision arithmetic (see arithmetic.py)
"""
import enum
import logging
import time
from collections import deque
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Any, Callable, List, Optional, Protocol, Tuple

from gmpy2 import mpz

from arithmetic import (
    abs_diff,
    gcd,
    is_square,
    isqrt,
    new_random_state,
    powmod,
    random_below,
    to_mpz,
)

logger = logging.getLogger(__name__)

# Miller-Rabin rounds used by the worklist; false positive rate <= 4^-40
PRIMALITY_ITERATIONS = 40

# Brent's Rho tries offsets 1 .. BRENTS_RHO_MAX_OFFSET - 1
BRENTS_RHO_MAX_OFFSET = 100

# Worker processes used by factor_many() when processes=0
DEFAULT_PROCESSES = 4


class FactorizationError(Exception):
    """Base class for errors raised while factoring a number."""


class SplittingExhaustedError(FactorizationError):
    """Brent's Rho failed to split a composite for every offset."""

    def __init__(self, number: int, attempts: int):
        self.number = number
        self.attempts = attempts
        super().__init__(
            f"Brent's rho found no factor of {number} after {attempts} offsets"
        )


class UnknownAlgorithmError(ValueError):
    """An algorithm name did not match any strategy."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown algorithm '{name}'")


# ============================================================================
# PRIMALITY ORACLE
# ============================================================================

class MillerRabinResult(enum.Enum):
    COMPOSITE = "composite"
    PROBABLY_PRIME = "probably prime"


def factor_out_twos(n: Any) -> Tuple[int, mpz]:
    """
    Represent ``n`` as ``2^s * d`` with ``d`` odd.

    Returns:
        (s, d)
    """
    d = to_mpz(n)
    if d <= 0:
        raise ValueError(f"cannot factor out twos of {n}")
    s: int = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1
    return s, d


def miller_rabin(n: Any, iterations: int, random_state=None) -> MillerRabinResult:
    """
    Miller-Rabin probabilistic primality test.

    Each round draws a witness uniformly from [2, n-2]. A COMPOSITE verdict
    is certain; PROBABLY_PRIME is wrong with probability at most
    4^-iterations.

    Args:
        n: Candidate (n >= 0)
        iterations: Number of witnesses to try
        random_state: gmpy2 random state; a fresh private one when omitted

    Returns:
        MillerRabinResult
    """
    n = to_mpz(n)
    if n == 2 or n == 3:
        return MillerRabinResult.PROBABLY_PRIME
    if (n & 1) == 0 or n < 3:
        return MillerRabinResult.COMPOSITE

    if random_state is None:
        random_state = new_random_state()
    n_minus_one = n - 1
    s, d = factor_out_twos(n_minus_one)

    for _ in range(iterations):
        witness = random_below(n - 3, random_state) + 2
        x = powmod(witness, d, n)
        if x == 1 or x == n_minus_one:
            continue
        # at most s-1 squarings looking for n-1
        for _ in range(s - 1):
            x = powmod(x, 2, n)
            if x == n_minus_one:
                break
        else:
            return MillerRabinResult.COMPOSITE

    return MillerRabinResult.PROBABLY_PRIME


def is_probably_prime(n: Any, iterations: int = PRIMALITY_ITERATIONS, random_state=None) -> bool:
    return miller_rabin(n, iterations, random_state) is MillerRabinResult.PROBABLY_PRIME


# ============================================================================
# WORKLIST DRIVER
# ============================================================================

SplittingProcedure = Callable[[mpz], Tuple[mpz, mpz]]


def decompose(n: Any, split: SplittingProcedure, iterations: int = PRIMALITY_ITERATIONS) -> List[mpz]:
    """
    Fully factor ``n`` given a procedure that splits one odd composite.

    Factors of 2 are removed first, so ``split`` only ever sees odd
    composites. The result is in discovery order, not sorted.

    Args:
        n: Number to factor (n >= 0)
        split: Returns two nontrivial factors whose product is its argument
        iterations: Miller-Rabin rounds per worklist entry

    Returns:
        List of (probable) prime factors
    """
    n = to_mpz(n)
    factors: List[mpz] = []
    if n == 0:
        return factors

    while (n & 1) == 0:
        factors.append(mpz(2))
        n >>= 1

    worklist = deque()
    if n != 1:
        worklist.append(n)
    random_state = new_random_state()

    while worklist:
        m = worklist.popleft()
        if m == 1:
            continue
        if is_probably_prime(m, iterations, random_state):
            factors.append(m)
            continue

        a, b = split(m)
        if a * b != m or a == 1 or b == 1:
            raise FactorizationError(f"trivial split of {m}: ({a}, {b})")
        logger.debug("split %s into %s * %s", m, a, b)
        worklist.append(a)
        worklist.append(b)

    return factors


# ============================================================================
# BRENT'S RHO
# ============================================================================

def brents_rho_single(m: Any, offset: int) -> Optional[mpz]:
    """
    One cycle-detection attempt with g(x) = (x*x + offset) mod m.

    Returns:
        A nontrivial factor of m, or None when the cycle collapsed to m
    """
    m = to_mpz(m)
    slow = mpz(2)
    fast = mpz(2)
    d = mpz(1)

    while d == 1:
        slow = (slow * slow + offset) % m
        fast = (fast * fast + offset) % m
        fast = (fast * fast + offset) % m
        d = gcd(abs_diff(slow, fast), m)

    if d == m:
        return None
    return d


def brents_rho_split(m: Any) -> Tuple[mpz, mpz]:
    """Split an odd composite, retrying offsets until one resolves."""
    m = to_mpz(m)
    for offset in range(1, BRENTS_RHO_MAX_OFFSET):
        d = brents_rho_single(m, offset)
        if d is not None:
            return d, m // d
        logger.debug("Brent's rho failed for %s, retrying with offset=%d", m, offset + 1)
    raise SplittingExhaustedError(int(m), BRENTS_RHO_MAX_OFFSET - 1)


# ============================================================================
# FERMAT
# ============================================================================

def fermat_split(m: Any) -> Tuple[mpz, mpz]:
    """
    Split an odd composite as (a - b)(a + b) with a^2 - m = b^2.

    The search starts at the smallest a with a^2 > m and moves up one at a
    time, so it is quick only when m has a factor close to sqrt(m).
    """
    m = to_mpz(m)
    root = isqrt(m)
    if root * root == m:
        # starting above root would only reach the trivial pair (1, m) for p^2
        return root, root

    a = root + 1
    while True:
        b2 = a * a - m
        if is_square(b2):
            d = a - isqrt(b2)
            return d, m // d
        a += 1


# ============================================================================
# FACTORIZATION CONTRACT
# ============================================================================

def _check_input(n: Any) -> mpz:
    n = to_mpz(n)
    if n < 0:
        raise ValueError(f"cannot factor negative number {n}")
    return n


class Factorize(Protocol):
    @staticmethod
    def factor(n: Any) -> List[int]:
        ...


class TrialDivision:
    """Exhaustive division by 2 and then every odd number."""

    @staticmethod
    def factor(n: Any) -> List[int]:
        n = _check_input(n)
        factors: List[int] = []
        if n == 0:
            return factors

        candidate = 2
        while n > 1:
            while n % candidate == 0:
                factors.append(candidate)
                n //= candidate
            candidate = 3 if candidate == 2 else candidate + 2

        return factors


class BrentsRho:
    """Worklist factorization with Brent's Rho as the splitting procedure."""

    @staticmethod
    def factor(n: Any) -> List[int]:
        return sorted(int(p) for p in decompose(_check_input(n), brents_rho_split))


class Fermat:
    """Worklist factorization with Fermat's method as the splitting procedure."""

    @staticmethod
    def factor(n: Any) -> List[int]:
        return sorted(int(p) for p in decompose(_check_input(n), fermat_split))


# ============================================================================
# ALGORITHM SELECTION
# ============================================================================

_ALIASES = {
    "TRIALDIVISION": "TRIAL_DIVISION",
    "BRENTSRHO": "BRENTS_RHO",
    "BRENTSSRHO": "BRENTS_RHO",
    "FERMAT": "FERMAT",
    "FERMATS": "FERMAT",
}


class Algorithm(enum.Enum):
    TRIAL_DIVISION = "trial division"
    BRENTS_RHO = "Brent's Rho"
    FERMAT = "Fermat"

    def __str__(self):
        return self.value

    @property
    def factorizer(self) -> Factorize:
        return {
            Algorithm.TRIAL_DIVISION: TrialDivision,
            Algorithm.BRENTS_RHO: BrentsRho,
            Algorithm.FERMAT: Fermat,
        }[self]

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        """
        Look up an algorithm by a loose name.

        Case, spaces, underscores, hyphens and apostrophes are ignored, so
        "Brent's Rho", "brents_rho" and "BRENTSRHO" all match.
        """
        key = name.upper()
        for ch in " _-'":
            key = key.replace(ch, "")
        try:
            return cls[_ALIASES[key]]
        except KeyError:
            raise UnknownAlgorithmError(name) from None


def factor(n: Any, algorithm: Algorithm = Algorithm.BRENTS_RHO) -> List[int]:
    """
    Factorize n into prime factors.

    Args:
        n: Non-negative integer (int, mpz or decimal string)
        algorithm: Strategy to use

    Returns:
        List of prime factors in ascending order; [] for 0 and 1
    """
    return algorithm.factorizer.factor(n)


# ============================================================================
# BATCH FACTORING
# ============================================================================

@dataclass
class FactorResult:
    number: int
    factors: List[int]
    elapsed: float
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _factor_worker(n: Any, algorithm: Algorithm) -> FactorResult:
    """Factor one number, recording a factorization failure instead of raising."""
    number = int(to_mpz(n))
    start = time.perf_counter()
    try:
        factors = factor(number, algorithm)
    except FactorizationError as exc:
        logger.warning("factoring %d with %s failed: %s", number, algorithm, exc)
        return FactorResult(number, [], time.perf_counter() - start, str(exc))
    return FactorResult(number, factors, time.perf_counter() - start)


def factor_many(numbers: List[Any], algorithm: Algorithm = Algorithm.BRENTS_RHO,
                processes: Optional[int] = None) -> List[FactorResult]:
    """
    Factor independent numbers, optionally in a process pool.

    Every factorization owns its own state, so inputs are simply mapped
    over the workers. A failure for one input is recorded in its result and
    the rest of the batch still runs.

    Args:
        numbers: Inputs to factor
        algorithm: Strategy used for every input
        processes: None or 1 runs in this process, 0 uses DEFAULT_PROCESSES

    Returns:
        One FactorResult per input, in input order
    """
    if processes == 0:
        processes = DEFAULT_PROCESSES
    if processes is None or processes == 1 or len(numbers) < 2:
        return [_factor_worker(n, algorithm) for n in numbers]

    with Pool(processes) as pool:
        return pool.starmap(_factor_worker, [(n, algorithm) for n in numbers])


# Example usage
if __name__ == "__main__":
    n = 123456789101112  # test number
    print("Factors of", n, ":", factor(n))
