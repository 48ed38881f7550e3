from __future__ import annotations

import logging
from functools import cached_property

from shorfactor.errors import OracleFailureError
from shorfactor.oracle import PhaseEstimationOracle
from shorfactor.utils import precision_bits
from shorfactor.utils_math import extract_denominator, gcd, lcm, mod_pow, multiplicative_order


class OrderFinder(object):
    def __init__(self, a: int, N: int):
        """Class that finds the multiplicative order of `a` modulo `N`.

        Args:
            a: The number to find the order of. Must satisfy 0 < a < N and
                gcd(a, N) = 1.
            N: The modulus. Must be > 1.

        Raises:
            ValueError: if any of the conditions above are not met.
        """
        if not (0 < a and a < N and gcd(a, N) == 1):
            msg = f"OrderFinder: invalid arguments a={a} and N={N}."
            raise ValueError(msg)
        self.a = a
        self.N = N

    @cached_property
    def _order(self) -> int:
        """Find the order by brute force. Runs in O(N) time."""
        return multiplicative_order(self.a, self.N)

    def find(self) -> int:
        """Find the order."""
        return self._order


class OrderEstimator(OrderFinder):
    def __init__(
        self,
        a: int,
        N: int,
        oracle: PhaseEstimationOracle,
        n_samples: int = 4,
        precision: int | None = None,
        max_oracle_calls: int | None = None,
    ):
        """Order estimation from phase estimation samples.

        Each sample j / 2^m is turned into a denominator by continued
        fractions. A sample measured near k/r only reveals r / gcd(k, r), so
        `n_samples` independent denominators are combined by their least
        common multiple. The result is wrong when every sample misses the
        same prime power factor of r, which becomes geometrically less likely
        with more samples, or when a sample lands far from any k/r. Four
        samples is an empirical choice. The caller is responsible for
        checking the result.

        Args:
            a: The number to find the order of. Must satisfy 0 < a < N and
                gcd(a, N) = 1.
            N: The modulus. Must be > 1.
            oracle: The source of phase estimation samples.
            n_samples: The number of non-zero samples to combine.
            precision: The number of bits of phase precision. If None, will
                be inferred from `N`.
            max_oracle_calls: The maximum number of oracle calls spent on one
                sample, i.e. one non-zero phase. If None, zero phases are
                re-drawn indefinitely.

        Raises:
            ValueError: if `a` and `N` are invalid or `n_samples` < 1.
        """
        super().__init__(a, N)
        if n_samples < 1:
            msg = f"OrderEstimator: `n_samples` ({n_samples}) must be >= 1."
            raise ValueError(msg)
        self.oracle = oracle
        self.n_samples = n_samples
        self.m = precision or precision_bits(N)
        self.max_oracle_calls = max_oracle_calls
        self.oracle_calls = 0

    def _sample(self) -> int:
        """Query the oracle until it returns a non-zero phase numerator.

        Raises:
            OracleFailureError: if the oracle returns a value outside
                [0, 2^m), or only zeros within `max_oracle_calls` calls.
        """
        calls = 0
        while self.max_oracle_calls is None or calls < self.max_oracle_calls:
            calls += 1
            self.oracle_calls += 1
            j = self.oracle.estimate_phase(self.a, self.N, self.m)
            if not 0 <= j < 2**self.m:
                msg = f"OrderEstimator: oracle returned j={j} outside [0, 2^{self.m})."
                raise OracleFailureError(msg)
            if j != 0:
                return j
            logging.debug("\tMeasured j=0, sampling again ...")

        msg = f"OrderEstimator: oracle gave no usable sample in {self.max_oracle_calls} calls."
        raise OracleFailureError(msg)

    def find(self) -> int:
        """Estimate the order."""
        logging.debug(f"Estimating order of {self.a} modulo {self.N} ...")
        logging.debug(f"- precision={self.m}")
        logging.debug(f"- n_samples={self.n_samples}")

        self.oracle_calls = 0
        r = 1
        for _ in range(self.n_samples):
            j = self._sample()
            q = extract_denominator(j, self.m, self.N)
            logging.debug(f"\tMeasured j={j}, candidate order q={q}")
            r = lcm(r, q)

        if mod_pow(self.a, r, self.N) != 1:
            logging.debug(f"Estimate r={r} is not the order of {self.a} modulo {self.N}.")
        else:
            logging.debug(f"Estimated order r={r} with {self.oracle_calls} oracle calls.")
        return r
