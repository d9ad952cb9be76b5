"""
Index generation for gate application.

A k-qubit gate acting on an n-qubit state touches the state vector in
2^(n-k) independent blocks of 2^k amplitudes. The functions here compute
which positions form each block without building the full 2^n x 2^n
operator.

Bit ordering convention:
    qubit 0 is the most significant bit of a state index, so qubit i has
    weight 2^(num_qubits - 1 - i).
"""

import numpy as np
from typing import List, Sequence


def complement_of(target_qubits: Sequence[int], num_qubits: int) -> List[int]:
    """
    Return the qubits of an n-qubit register that are not targeted.

    Args:
        target_qubits: Qubits to exclude (each in [0, num_qubits))
        num_qubits: Total number of qubits

    Returns:
        Ascending list of the remaining qubit indices
    """
    excluded = set(target_qubits)
    return [q for q in range(num_qubits) if q not in excluded]


def enumerate_offsets(qubit_indices: Sequence[int], num_qubits: int) -> np.ndarray:
    """
    Enumerate every bit pattern over the given qubits, other qubits held at 0.

    The patterns come out in nested-loop order: qubit_indices[0] is the
    outermost (slowest varying) loop and qubit_indices[-1] the innermost.
    With 5 qubits:

        [0, 1] -> 00000, 01000, 10000, 11000 -> 0, 8, 16, 24
        [1, 0] -> 00000, 10000, 01000, 11000 -> 0, 16, 8, 24

    Entry j of the result lines up with row/column j of a gate matrix whose
    wires are qubit_indices.

    Args:
        qubit_indices: Qubits that make up the pattern, in matrix order
        num_qubits: Total number of qubits

    Returns:
        Integer array of length 2^len(qubit_indices)
    """
    offsets = np.zeros(1, dtype=np.intp)
    for q in qubit_indices:
        weight = 1 << (num_qubits - 1 - q)
        offsets = (offsets[:, None] + np.array([0, weight], dtype=np.intp)).reshape(-1)
    return offsets


def index_groups(wires: Sequence[int], num_qubits: int) -> np.ndarray:
    """
    Build every index group for one gate application.

    Row s holds the 2^k positions of block s, ordered to match the gate
    matrix. Rows are pairwise disjoint and together cover every position
    of the state vector exactly once.

    Args:
        wires: Target qubits of the gate, in matrix order
        num_qubits: Total number of qubits

    Returns:
        Integer array of shape (2^(num_qubits - k), 2^k)
    """
    affected = enumerate_offsets(wires, num_qubits)
    spectators = enumerate_offsets(complement_of(wires, num_qubits), num_qubits)
    return spectators[:, None] + affected[None, :]
