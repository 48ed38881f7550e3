from __future__ import annotations

import logging

import numpy as np

from shorfactor.errors import InvalidInputError, NoFactorFoundError
from shorfactor.oracle import PhaseEstimationOracle, QuantumPhaseOracle
from shorfactor.order import OrderEstimator
from shorfactor.utils_math import gcd, is_perfect_power, is_probable_prime, mod_pow

# Largest value numpy can pass to `Generator.integers`.
_INT64_MAX = int(np.iinfo(np.int64).max)


def random_witness(rng: np.random.Generator, N: int) -> int:
    """Draw a witness uniformly from [2, N-2].

    Moduli beyond int64 are handled by rejection sampling on random bytes.
    """
    if N - 1 <= _INT64_MAX:
        return int(rng.integers(2, N - 1))
    span = N - 3  # number of admissible witnesses
    n_bits = (span - 1).bit_length()
    n_bytes = (n_bits + 7) // 8
    while True:
        x = int.from_bytes(rng.bytes(n_bytes), "little") & ((1 << n_bits) - 1)
        if x < span:
            return 2 + x


def find_factor(
    N: int,
    oracle: PhaseEstimationOracle | None = None,
    rng: np.random.Generator | None = None,
    max_iters: int | None = None,
    **kwargs,
) -> int:
    """Given a composite integer N that is not a prime power, return a
    non-trivial factor of N. Returns 2 for any even N.

    Args:
        N: The number to find a factor of.
        oracle: The phase estimation oracle. Defaults to simulating the
            quantum circuit; use `FakeQuantumPhaseOracle` for testing.
        rng: The source of random witnesses.
        max_iters: The maximum number of witnesses to try. If None, loops
            until a factor is found.
        kwargs: Passed to `OrderEstimator`.

    Raises:
        InvalidInputError: if N < 2, or N is a prime power or a prime.
        NoFactorFoundError: if a factor was not found after `max_iters`
            iterations.
    """
    if N < 2:
        msg = f"find_factor: `N` ({N}) must be >= 2."
        raise InvalidInputError(msg)

    # check that N is odd
    if N % 2 == 0:
        return 2

    # check that N is not an integer power
    if is_perfect_power(N):
        msg = f"find_factor: `N` ({N}) is a perfect power."
        raise InvalidInputError(msg)

    # check that N is composite
    if is_probable_prime(N):
        msg = f"find_factor: `N` ({N}) is prime."
        raise InvalidInputError(msg)

    oracle = oracle or QuantumPhaseOracle()
    rng = rng or np.random.default_rng()

    iters = 0
    while max_iters is None or iters < max_iters:
        iters += 1
        a = random_witness(rng, N)
        d = gcd(a, N)
        if d >= 2:
            logging.debug(f"Witness a={a} shares the factor {d} with N.")
            return d  # got lucky!

        # find period of a modulo N
        r = OrderEstimator(a, N, oracle, **kwargs).find()

        if r % 2 == 1:
            logging.debug(f"Order r={r} of a={a} is odd. Trying another witness ...")
            continue

        # gcd(x, N) == gcd(x mod N, N), and x >= 0 since mod_pow returns a residue
        d = gcd(mod_pow(a, r // 2, N) - 1, N)
        if 1 < d < N:
            logging.debug(f"Found factor {d} of {N} in {iters} iterations.")
            return d
        logging.debug(f"Witness a={a} gave trivial factor {d}. Trying another witness ...")

    msg = f"find_factor: failed to find factor in {max_iters} iterations."
    raise NoFactorFoundError(msg)
