"""
Kernel applier: one gate on one index group (or a stack of them).

The generic path gathers the 2^k amplitudes named by an index group,
multiplies them by the gate matrix and scatters the result back. Gates with
a specialized transform may instead update the named positions directly.
Either way only the positions in the index group are read or written.
"""

import numpy as np

from .variants import Gate


def apply_generic(state: np.ndarray, indices: np.ndarray, matrix: np.ndarray):
    """
    Apply a dense matrix to the amplitudes named by ``indices``.

    Args:
        state: State vector, modified in place
        indices: One index group of length N, or an array of shape (..., N)
                 holding one group per row
        matrix: N x N gate matrix; column j pairs with indices[..., j]
    """
    v = state[indices]                    # gather (fancy indexing copies)
    state[indices] = v @ matrix.T         # result[i] = sum_j M[i, j] v[j]


def apply_kernel(state: np.ndarray, indices: np.ndarray, gate: Gate,
                 use_specialized: bool = True):
    """
    Apply ``gate`` to the amplitudes named by ``indices``.

    Uses the gate's specialized transform when it has one and
    ``use_specialized`` is set, the dense gather/multiply/scatter otherwise.
    Both give the same state up to floating-point rounding.

    Args:
        state: State vector, modified in place
        indices: One index group, or a 2-D stack of disjoint groups
        gate: Gate variant whose size matches indices.shape[-1]
        use_specialized: Allow the closed-form transform
    """
    indices = np.asarray(indices, dtype=np.intp)
    if indices.shape[-1] != gate.size:
        raise ValueError(
            f"{gate.label}: index group must have {gate.size} entries, got {indices.shape[-1]}"
        )

    if use_specialized and gate.specialized:
        gate.apply_specialized(state, indices)
    else:
        apply_generic(state, indices, gate.matrix)
