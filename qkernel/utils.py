"""
Utility functions for working with state vectors and gate matrices.

This module provides helpers for:
- Preparing state vectors (all-zeros, basis states, random states)
- Checking gate matrices for unitarity
- Comparing quantum states (accounting for global phase)

The engine itself never allocates the states it mutates; these helpers are
for callers and tests.
"""

import numpy as np
from typing import Optional


# =============================================================================
# State preparation
# =============================================================================

def zero_state(num_qubits: int) -> np.ndarray:
    """Return |0...0⟩ on num_qubits qubits as a complex128 vector."""
    return basis_state(0, num_qubits)


def basis_state(index: int, num_qubits: int) -> np.ndarray:
    """
    Return the computational basis state |index⟩.

    Args:
        index: Basis index, qubit 0 being the most significant bit
        num_qubits: Number of qubits

    Returns:
        complex128 vector of length 2^num_qubits
    """
    dim = 1 << num_qubits
    if not 0 <= index < dim:
        raise ValueError(f"basis index {index} out of range for {num_qubits} qubits")
    state = np.zeros(dim, dtype=np.complex128)
    state[index] = 1.0
    return state


def random_state(num_qubits: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Return a normalized state with random complex amplitudes.

    Args:
        num_qubits: Number of qubits
        rng: Random generator (a fresh default_rng() if None)
    """
    if rng is None:
        rng = np.random.default_rng()
    dim = 1 << num_qubits
    state = rng.normal(size=dim) + 1j * rng.normal(size=dim)
    return state / np.linalg.norm(state)


# =============================================================================
# Matrix and state comparison
# =============================================================================

def is_unitary(matrix, atol: float = 1e-10) -> bool:
    """Check M · M† = I within ``atol``."""
    matrix = np.asarray(matrix)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        return False
    return np.allclose(matrix @ matrix.conj().T, np.eye(matrix.shape[0]), atol=atol)


def allclose_up_to_global_phase(v, w, atol: float = 1e-9) -> bool:
    """
    Check if two quantum states are equal up to a global phase.

    Args:
        v: First quantum state (array-like)
        w: Second quantum state (array-like)
        atol: Absolute tolerance for comparison

    Returns:
        True if states are equal up to global phase
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)

    # Find a stable pivot amplitude in w
    idx = np.argmax(np.abs(w))
    if np.abs(w[idx]) < atol:
        return np.allclose(v, w, atol=atol)

    phase = v[idx] / w[idx]
    return np.allclose(v, phase * w, atol=atol)


def state_fidelity(v, w) -> float:
    """
    Compute the fidelity |⟨v|w⟩|² between two pure quantum states.

    Ranges from 0 (orthogonal) to 1 (identical up to phase).
    """
    v = np.asarray(v).reshape(-1)
    w = np.asarray(w).reshape(-1)
    return float(np.abs(np.vdot(v, w)) ** 2)
