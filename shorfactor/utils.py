from __future__ import annotations

import logging

import cirq

# Note: an integer a = 2^(n-1) a_(n-1) + ... + 2 a_1 + a_0 is represented
# by n bits with the convention that the ith bit is a_i.


def size_in_bits(x: int) -> int:
    """Return the minimum number of bits required to represent an integer.

    Args:
        x: The integer to represent. Must be non-negative.

    Returns:
        The number of bits required to represent `x`.

    Raises:
        ValueError: If `x` is negative.
    """
    if x < 0:
        msg = f"size_in_bits: `x` ({x}) must be non-negative."
        raise ValueError(msg)
    return max(int(x).bit_length(), 1)


def precision_bits(N: int) -> int:
    """Return the number of phase bits m = ceil(2 * (1 + log2(N - 1))).

    With 2^m >= (N - 1)^2 any fraction k/r with r < N is the unique such
    fraction within 1/2^(m+1) of the measured phase.

    Args:
        N: The modulus. Must be >= 2.

    Raises:
        ValueError: If `N` < 2.
    """
    if N < 2:
        msg = f"precision_bits: `N` ({N}) must be >= 2."
        raise ValueError(msg)
    # ceil(log2(y)) == (y - 1).bit_length() for integers y >= 1
    return 2 + ((N - 1) ** 2 - 1).bit_length()


def prepare_state(qubits: list[cirq.Qid], x: int) -> list[cirq.Gate]:
    """Prepare qubits into an initial state.

    Args:
        qubits: The qubits to prepare.
        x: The initial state of the qubits. Must be non-negative.

    Returns:
        A list of gates to prepare the qubits.

    Raises:
        ValueError: If `x` is negative.
    """
    gates = list()
    if size_in_bits(x) > len(qubits):
        logging.warning(f"prepare_state: `x` ({x}) cannot fit into {len(qubits)} qubits; some bits will be dropped.")
    for q in qubits:
        if x % 2:
            gates.append(cirq.X(q))
        x >>= 1
    return gates


def bits_to_integer(bits: list[int]) -> int:
    """Return the integer representation of a string of bits."""
    x = 0
    for b in bits[::-1]:
        x <<= 1
        x += int(b)
    return x

