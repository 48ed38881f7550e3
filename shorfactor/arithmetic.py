from __future__ import annotations

from typing import Sequence, Union

import cirq


# Note: cirq.ArithmeticGate reads each register big-endian, i.e. the first
# qubit is the most significant. Callers holding little-endian registers
# should pass them reversed.


class ModularExp(cirq.ArithmeticGate):
    def __init__(self, m: int, n: int, a: int, N: int):
        """Multiply qubit x by a^k, modulo N, where a is classical integer and
        gcd(a, N) = 1. Basis states with x >= N are left unchanged, so the
        gate is a permutation of the computational basis.

        |x; k> --> |x * a^k mod N; k>

        Input to the gate is n+m qubits split into two registers:
        - n qubits for x, 0 <= x < 2^n. x * a^k mod N is saved here.
        - m qubits for k, 0 <= k < 2^m. These are unchanged by the gate.

        Args:
            m: number of qubits for k.
            n: number of qubits for x. Must satisfy N < 2 ** n.
            a: 0 < a < N and gcd(a, N) = 1.
            N: the modulus, N > 1.

        Raises:
            ValueError: if N does not fit into n qubits.
        """
        if N >= 2**n:
            msg = f"ModularExp: `N` ({N}) cannot fit into {n} qubits."
            raise ValueError(msg)
        super().__init__()
        self.m = m
        self.n = n
        self.a = a
        self.N = N

    def registers(self) -> Sequence[Union[int, Sequence[int]]]:
        return [2] * self.n, [2] * self.m

    def with_registers(self, *new_registers: Union[int, Sequence[int]]) -> ModularExp:
        x, k = new_registers
        if isinstance(x, int) or isinstance(k, int):
            msg = "ModularExp: registers must be quantum registers."
            raise ValueError(msg)
        return ModularExp(len(k), len(x), self.a, self.N)

    def apply(self, x: int, k: int) -> int:
        if x >= self.N:
            return x
        return (x * pow(self.a, k, self.N)) % self.N

    def _circuit_diagram_info_(self, args):
        return ["MExp_x"] * self.n + ["MExp_k"] * self.m
