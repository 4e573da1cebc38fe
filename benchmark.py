"""
Benchmark suite for the factorization strategies.

Benchmarks:
1. Primality Testing: Miller-Rabin with 40 rounds on primes of growing size
2. Small Inputs: each strategy on 5, 11 and 15
3. Large Input: 79447834793 with Trial Division and Brent's Rho
4. Random Low Numbers: each strategy on random inputs below 1000
5. Close Factors: Fermat against Brent's Rho on semiprimes p*q with p ~ q
"""

import time
import sys
import random
import statistics
from typing import List, Callable

from factorization import Algorithm, factor, is_probably_prime
from sieve import Sieve


# ============================================================================
# BENCHMARK UTILITIES
# ============================================================================

class BenchmarkResult:
    """Store benchmark results with statistics."""

    def __init__(self, name: str, times: List[float]):
        self.name = name
        self.times = sorted(times)

        self.min = min(times)
        self.max = max(times)
        self.mean = statistics.mean(times)
        self.median = statistics.median(times)
        self.stdev = statistics.stdev(times) if len(times) > 1 else 0

    def __str__(self):
        return (f"{self.name:40} | "
                f"Mean: {self.mean*1000:8.3f}ms | "
                f"Median: {self.median*1000:8.3f}ms | "
                f"StdDev: {self.stdev*1000:8.3f}ms | "
                f"Min: {self.min*1000:8.3f}ms | "
                f"Max: {self.max*1000:8.3f}ms")


def benchmark(func: Callable, *args, iterations: int = 5, **kwargs) -> BenchmarkResult:
    """
    Benchmark a function and return statistics.

    Args:
        func: Function to benchmark
        *args: Positional arguments to function
        iterations: Number of iterations to run
        **kwargs: Keyword arguments to function

    Returns:
        BenchmarkResult with timing statistics
    """
    times = []

    # Warm up
    func(*args, **kwargs)

    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return BenchmarkResult(func.__name__, times)


def _header(title: str):
    print("\n" + "="*100)
    print(title)
    print("="*100)


# ============================================================================
# 1. PRIMALITY TESTING
# ============================================================================

def benchmark_primality():
    _header("PRIMALITY TESTING BENCHMARKS")

    test_primes = [
        (104729, "Small prime (6 digits)"),
        (982451653, "Large prime (9 digits)"),
        (885027563087, "Larger prime (12 digits)"),
        (2**127 - 1, "Mersenne prime M127"),
    ]
    for prime, description in test_primes:
        result = benchmark(is_probably_prime, prime, iterations=10)
        result.name = description
        print(result)


# ============================================================================
# 2-4. STRATEGY BENCHMARKS
# ============================================================================

def benchmark_small_inputs():
    _header("SMALL INPUTS")
    for n in (5, 11, 15):
        for alg in Algorithm:
            result = benchmark(factor, n, alg, iterations=100)
            result.name = f"{n} with {alg}"
            print(result)


def benchmark_large_input():
    _header("LARGE INPUT")
    n = 79447834793
    for alg in (Algorithm.TRIAL_DIVISION, Algorithm.BRENTS_RHO):
        result = benchmark(factor, n, alg, iterations=3)
        result.name = f"{n} with {alg}"
        print(result)


def benchmark_random_low_numbers():
    _header("RANDOM LOW NUMBERS")
    numbers = [random.randrange(0, 1000) for _ in range(200)]
    for alg in Algorithm:
        times = []
        for n in numbers:
            start = time.perf_counter()
            factor(n, alg)
            times.append(time.perf_counter() - start)
        print(BenchmarkResult(f"random < 1000 with {alg}", times))


# ============================================================================
# 5. CLOSE FACTORS
# ============================================================================

def benchmark_close_factors():
    """Fermat shines when both factors are near sqrt(n)."""
    _header("CLOSE FACTORS (p * q, p ~ q)")
    primes = list(Sieve(200000).primes())
    pairs = [(primes[i], primes[i + 1]) for i in range(-20, -1)]
    for alg in (Algorithm.FERMAT, Algorithm.BRENTS_RHO):
        times = []
        for p, q in pairs:
            start = time.perf_counter()
            factor(p * q, alg)
            times.append(time.perf_counter() - start)
        print(BenchmarkResult(f"close semiprimes with {alg}", times))


# ============================================================================
# MAIN BENCHMARK SUITE
# ============================================================================

def run_all_benchmarks():
    """Run all benchmarks."""
    try:
        benchmark_primality()
        benchmark_small_inputs()
        benchmark_large_input()
        benchmark_random_low_numbers()
        benchmark_close_factors()

        print("\n" + "="*100)
        print("BENCHMARK COMPLETE")
        print("="*100 + "\n")

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    run_all_benchmarks()
