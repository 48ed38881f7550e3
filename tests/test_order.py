from fractions import Fraction
from itertools import cycle

import numpy as np
import pytest

from shorfactor import (
    FakeQuantumPhaseOracle,
    OracleFailureError,
    OrderEstimator,
    OrderFinder,
    PhaseEstimationOracle,
    multiplicative_order,
)

TEST_RNG = np.random.default_rng(seed=2022)
TEST_N_TRIALS = 3


class ScriptedOracle(PhaseEstimationOracle):
    """Returns the phases k/r from a fixed list, in a loop."""

    def __init__(self, phases):
        self.phases = cycle(phases)

    def estimate_phase(self, a, N, m):
        phase = Fraction(next(self.phases))
        return (2 * phase.numerator * 2**m + phase.denominator) // (2 * phase.denominator)


def test_order_finder():
    assert OrderFinder(1, 5).find() == 1
    assert OrderFinder(2, 5).find() == 4
    assert OrderFinder(3, 5).find() == 4
    assert OrderFinder(4, 5).find() == 2
    # Check exceptions raised on invalid arguments.
    with pytest.raises(ValueError):
        OrderFinder(5, 5)
    with pytest.raises(ValueError):
        OrderFinder(-1, 5)
    with pytest.raises(ValueError):
        OrderFinder(1, 1)
    with pytest.raises(ValueError):
        OrderFinder(3, 15)


def test_order_estimator():
    assert OrderEstimator(2, 15, ScriptedOracle([Fraction(1, 4)])).find() == 4
    assert OrderEstimator(2, 21, ScriptedOracle([Fraction(1, 6)])).find() == 6
    # Check exceptions raised on invalid arguments.
    with pytest.raises(ValueError):
        OrderEstimator(3, 15, ScriptedOracle([Fraction(1, 4)]))
    with pytest.raises(ValueError):
        OrderEstimator(2, 15, ScriptedOracle([Fraction(1, 4)]), n_samples=0)


def test_order_estimator_combines_samples():
    # 1/2 and 1/3 each reveal a proper divisor of the order 6
    oracle = ScriptedOracle([Fraction(1, 2), Fraction(1, 3)])
    assert OrderEstimator(2, 21, oracle).find() == 6
    oracle = ScriptedOracle([Fraction(1, 2), Fraction(1, 3)])
    assert OrderEstimator(2, 21, oracle, n_samples=1).find() == 2


def test_order_estimator_all_phases():
    for n in range(2, 8):
        for _ in range(TEST_N_TRIALS):
            N = max(3, int(TEST_RNG.integers(2 ** (n - 1), 2**n)))
            a = N
            while np.gcd(a, N) != 1:
                a = int(TEST_RNG.integers(2, N))
            r = multiplicative_order(a, N)
            if r == 1:
                continue
            phases = [Fraction(k, r) for k in range(1, r)]
            estimator = OrderEstimator(a, N, ScriptedOracle(phases), n_samples=len(phases))
            assert estimator.find() == estimator._order == r


def test_order_estimator_zero_phase():
    oracle = ScriptedOracle([0, 0, Fraction(1, 4)])
    estimator = OrderEstimator(2, 15, oracle)
    assert estimator.find() == 4
    assert estimator.oracle_calls == 12
    # Check timeout.
    with pytest.raises(OracleFailureError):
        OrderEstimator(2, 15, ScriptedOracle([0]), max_oracle_calls=5).find()
    # the bound applies to the zero re-draws of each sample, not to all calls
    estimator = OrderEstimator(2, 15, ScriptedOracle([Fraction(1, 2)]), max_oracle_calls=2)
    assert estimator.find() == 2
    assert estimator.oracle_calls == 4
    oracle = ScriptedOracle([0, 0, Fraction(1, 4)])
    assert OrderEstimator(2, 15, oracle, max_oracle_calls=3).find() == 4
    with pytest.raises(OracleFailureError):
        OrderEstimator(2, 15, ScriptedOracle([0, 0, Fraction(1, 4)]), max_oracle_calls=2).find()


def test_order_estimator_out_of_range():
    with pytest.raises(OracleFailureError):
        OrderEstimator(2, 15, ScriptedOracle([1])).find()


def test_order_estimator_precision():
    oracle = ScriptedOracle([Fraction(1, 4)])
    assert OrderEstimator(2, 15, oracle).m == 10
    assert OrderEstimator(2, 21, oracle).m == 11
    estimator = OrderEstimator(2, 15, oracle, precision=8)
    assert estimator.m == 8
    assert estimator.find() == 4


def test_order_estimator_fake_oracle():
    oracle = FakeQuantumPhaseOracle(rng=TEST_RNG)
    # j is always a multiple of 2^10 / 4 here, and k = 1 or 3 reveals the order
    assert OrderEstimator(2, 15, oracle, n_samples=12).find() == 4
