"""Command line front-end: factorize one or more numbers with a chosen strategy."""
import argparse
import logging
import sys
from typing import List, Optional

from arithmetic import product, to_mpz
from factorization import Algorithm, UnknownAlgorithmError, factor_many


def _number(text: str) -> int:
    try:
        n = int(to_mpz(text))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"cannot factor negative number {n}")
    return n


def _algorithm(text: str) -> Algorithm:
    try:
        return Algorithm.from_name(text)
    except UnknownAlgorithmError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="factorize", description="Factorize integers into primes.")
    ap.add_argument("numbers", nargs="+", type=_number, help="numbers to factorize")
    ap.add_argument("--alg", type=_algorithm, default=Algorithm.TRIAL_DIVISION,
                    help="trial_division, brents_rho or fermat (default: trial_division)")
    ap.add_argument("--assert", dest="check", action="store_true",
                    help="check that the factors multiply back to the number")
    ap.add_argument("-j", "--jobs", type=int, default=None,
                    help="worker processes (0 = default pool size)")
    ap.add_argument("-v", "--verbose", action="store_true", help="log retries and splits")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rc = 0
    for result in factor_many(args.numbers, args.alg, processes=args.jobs):
        if not result.ok:
            print(f"{result.number} => error: {result.error}", file=sys.stderr)
            rc = 1
            continue
        print(f'{result.number} => {result.factors}, took {result.elapsed:.6f}s with "{args.alg}"')
        if args.check and product(result.factors) != result.number:
            print(f"{result.number} => assertion failed: product is {product(result.factors)}",
                  file=sys.stderr)
            rc = 1
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
