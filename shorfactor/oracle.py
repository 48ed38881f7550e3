from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import cirq
import numpy as np

from shorfactor.arithmetic import ModularExp
from shorfactor.errors import OracleFailureError
from shorfactor.utils import size_in_bits, prepare_state, bits_to_integer
from shorfactor.utils_math import multiplicative_order


class PhaseEstimationOracle(ABC):
    """Source of phase estimation samples for modular multiplication by `a`.

    One call returns an integer j in [0, 2^m) such that j / 2^m estimates
    k/r for some unknown integer k, where r is the order of `a` modulo `N`.
    Samples may be zero or noisy; callers are expected to re-sample and to
    combine several samples.
    """

    @abstractmethod
    def estimate_phase(self, a: int, N: int, m: int) -> int:
        """Return one phase numerator j, 0 <= j < 2^m.

        Args:
            a: The witness. Must satisfy 0 < a < N and gcd(a, N) = 1.
            N: The modulus.
            m: The number of bits of precision.

        Raises:
            OracleFailureError: if no definite outcome could be produced.
        """


class QuantumPhaseOracle(PhaseEstimationOracle):
    def __init__(self, simulator: cirq.Sampler | None = None):
        """Phase estimation by simulating the quantum circuit.

        The circuit uses m + n qubits, where n is the number of bits of `N`.
        The circuit of the most recent (a, N, m) is kept, since one order
        estimate samples the same witness several times.

        Args:
            simulator: The sampler to run circuits on. Defaults to
                `cirq.Simulator()`.
        """
        self.simulator = simulator or cirq.Simulator()
        self.cached = None  # (key, circuit)

    def circuit(self, a: int, N: int, m: int) -> cirq.Circuit:
        """Return the phase estimation circuit for multiplication by `a`."""
        key = (a, N, m)
        if self.cached is None or self.cached[0] != key:
            n = size_in_bits(N)
            k = cirq.GridQubit.rect(1, m, top=0)
            x = cirq.GridQubit.rect(1, n, top=1)
            circuit = cirq.Circuit()
            circuit.append(prepare_state(x, 1))
            circuit.append(cirq.H(ki) for ki in k)
            # both registers are little-endian, the gate reads big-endian
            circuit.append(ModularExp(m, n, a, N).on(*x[::-1], *k[::-1]))
            circuit.append(cirq.qft(*k[::-1], inverse=True))
            circuit.append(cirq.measure(*k, key="phase"))
            self.cached = (key, circuit)
        return self.cached[1]

    def estimate_phase(self, a: int, N: int, m: int) -> int:
        """Runs quantum circuit once and returns a measurement."""
        result = self.simulator.run(self.circuit(a, N, m), repetitions=1)
        raw_output = result.measurements.get("phase")
        if raw_output is None or len(raw_output) != 1 or len(raw_output[0]) != m:
            msg = f"QuantumPhaseOracle: no definite measurement for a={a} and N={N}."
            raise OracleFailureError(msg)
        return bits_to_integer(raw_output[0])


class FakeQuantumPhaseOracle(PhaseEstimationOracle):
    """Since the output distribution of phase estimation is theoretically
    known, we can avoid simulating the quantum circuit by directly sampling
    the distribution. This is fast for small inputs on a classical computer
    and allows us to quickly debug the classical parts of the algorithm.

    It is important to emphasize that the runtime complexity of this method is
    O(N) and it does not scale well to large inputs. This is because
    formulating the distribution requires knowing the order in the first
    place, so we need to first compute the order by brute force.
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng or np.random.default_rng()

    def _distribution(self, M: int, x: float | np.ndarray, eps: float = 1e-12) -> float | np.ndarray:
        """f(x) = sin^2(M * x) / [M * sin(x)]^2."""
        x = np.maximum(np.abs(x), eps)  # regularize behavior at x=0
        return (np.sin(M * x) ** 2) / ((M * np.sin(x)) ** 2)

    def estimate_phase(self, a: int, N: int, m: int) -> int:
        """Sample directly from known distribution."""
        logging.debug("\tSampling from known distribution ...")
        r = multiplicative_order(a, N)
        M = 2**m
        k = self.rng.integers(r)
        deltas = np.pi * (k * 1.0 / r - np.linspace(0, 1, M, endpoint=False))
        probs = self._distribution(M, deltas)
        total = probs.sum()
        if not np.isfinite(total) or total <= 0:
            msg = f"FakeQuantumPhaseOracle: degenerate distribution for a={a} and N={N}."
            raise OracleFailureError(msg)
        return int(self.rng.choice(M, p=probs / total))
