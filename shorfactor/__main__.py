"""
Find a non-trivial factor of an integer with Shor's algorithm.

The order-finding step runs on a simulated quantum circuit, or with --fake
on a direct sample of the circuit's output distribution. The factor is
printed on standard output.
"""

import logging
import sys
from argparse import ArgumentParser

import numpy as np

from shorfactor import FakeQuantumPhaseOracle, QuantumPhaseOracle, ShorError, find_factor


def main(argv=None):
    parser = ArgumentParser(prog="shorfactor", description=__doc__)
    parser.add_argument("number", type=int, nargs="?", default=15, help="The number to factor. Default: 15")
    parser.add_argument("--fake", action="store_true", help="Sample phases from the known distribution instead of simulating the circuit.")
    parser.add_argument("--samples", type=int, default=4, help="Number of phase samples combined per witness. Default: 4")
    parser.add_argument("--max-iters", type=int, default=None, help="Give up after this many witnesses.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random number generator.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every step.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    rng = np.random.default_rng(args.seed)
    oracle = FakeQuantumPhaseOracle(rng=rng) if args.fake else QuantumPhaseOracle()
    try:
        factor = find_factor(args.number, oracle=oracle, rng=rng, max_iters=args.max_iters, n_samples=args.samples)
    except ShorError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(factor)
    return 0


if __name__ == "__main__":
    sys.exit(main())
