"""
Quantum gate matrices.

This module contains the unitary matrix of every gate kind known to the
engine: single-qubit gates (Pauli, Hadamard, phase, rotation), two-qubit
gates (CNOT, SWAP, CZ, controlled rotations) and three-qubit gates
(Toffoli, controlled SWAP).

Multi-qubit matrices use big-endian sub-space ordering: the first wire an
operation lists is the most significant bit of the row/column index, so for
a controlled gate the control is wire 0.
"""

import numpy as np


def _mat(*rows) -> np.ndarray:
    return np.array(rows, dtype=complex)


# =============================================================================
# Single-qubit gates
# =============================================================================

X_gate = _mat([0, 1],      # Pauli X gate (NOT gate)
              [1, 0])

Y_gate = _mat([ 0, -1j],   # Pauli Y gate
              [1j,   0])

Z_gate = _mat([1,  0],     # Pauli Z gate = P(π) = S²
              [0, -1])

H_gate = _mat([1,  1],     # Hadamard gate
              [1, -1]) * np.sqrt(1/2)

S_gate = _mat([1,  0],     # Phase gate = P(π/2) = T²
              [0, 1j])

T_gate = _mat([1,                  0],   # T gate = P(π/4)
              [0, np.exp(np.pi / -4j)])

I_gate = _mat([1, 0],      # Identity gate
              [0, 1])


def P_gate(phi):
    """Phase shift gate P(φ) = diag(1, e^{iφ})"""
    return _mat([1,              0],
                [0, np.exp(phi * 1j)])


def Rx_gate(theta):
    """X rotation gate Rx(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _mat([c,    -1j * s],
                [-1j * s,    c])


def Ry_gate(theta):
    """Y rotation gate Ry(θ)"""
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _mat([c, -s],
                [s,  c])


def Rz_gate(theta):
    """Z rotation gate Rz(θ)"""
    return _mat([np.exp(-1j * theta / 2),                    0],
                [                      0, np.exp(1j * theta / 2)])


def Rot_gate(phi, theta, omega):
    """
    General single-qubit rotation Rot(φ, θ, ω) = Rz(ω) · Ry(θ) · Rz(φ).

    Args:
        phi: First Z rotation angle
        theta: Y rotation angle
        omega: Final Z rotation angle
    """
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return _mat([ c * np.exp(-0.5j * (phi + omega)), -s * np.exp(0.5j * (phi - omega))],
                [s * np.exp(-0.5j * (phi - omega)),  c * np.exp(0.5j * (phi + omega))])


# =============================================================================
# Two-qubit gates
# =============================================================================

CNOT_gate = _mat([1, 0, 0, 0],   # Controlled NOT gate (XOR)
                 [0, 1, 0, 0],
                 [0, 0, 0, 1],
                 [0, 0, 1, 0])

CZ_gate = _mat([1, 0, 0,  0],    # Controlled Z gate
               [0, 1, 0,  0],
               [0, 0, 1,  0],
               [0, 0, 0, -1])

SWAP_gate = _mat([1, 0, 0, 0],   # Swap gate
                 [0, 0, 1, 0],
                 [0, 1, 0, 0],
                 [0, 0, 0, 1])


def controlled(U) -> np.ndarray:
    """
    Build the controlled version of a single-qubit gate.

    The result acts as the identity when the control (first wire) is |0⟩
    and as ``U`` on the target when the control is |1⟩.

    Args:
        U: 2x2 unitary

    Returns:
        4x4 block-diagonal matrix diag(I, U)
    """
    U = np.asarray(U, dtype=complex)
    if U.shape != (2, 2):
        raise ValueError(f"controlled() expects a 2x2 matrix, got shape {U.shape}")
    CU = np.eye(4, dtype=complex)
    CU[2:, 2:] = U
    return CU


def CRX_gate(theta):
    """Controlled X rotation CRX(θ)"""
    return controlled(Rx_gate(theta))


def CRY_gate(theta):
    """Controlled Y rotation CRY(θ)"""
    return controlled(Ry_gate(theta))


def CRZ_gate(theta):
    """Controlled Z rotation CRZ(θ)"""
    return controlled(Rz_gate(theta))


def CRot_gate(phi, theta, omega):
    """Controlled general rotation CRot(φ, θ, ω)"""
    return controlled(Rot_gate(phi, theta, omega))


# =============================================================================
# Three-qubit gates
# =============================================================================

TOFF_gate = _mat([1, 0, 0, 0, 0, 0, 0, 0],   # Toffoli gate (CCNOT)
                 [0, 1, 0, 0, 0, 0, 0, 0],
                 [0, 0, 1, 0, 0, 0, 0, 0],
                 [0, 0, 0, 1, 0, 0, 0, 0],
                 [0, 0, 0, 0, 1, 0, 0, 0],
                 [0, 0, 0, 0, 0, 1, 0, 0],
                 [0, 0, 0, 0, 0, 0, 0, 1],
                 [0, 0, 0, 0, 0, 0, 1, 0])

CSWAP_gate = _mat([1, 0, 0, 0, 0, 0, 0, 0],  # Controlled SWAP (Fredkin)
                  [0, 1, 0, 0, 0, 0, 0, 0],
                  [0, 0, 1, 0, 0, 0, 0, 0],
                  [0, 0, 0, 1, 0, 0, 0, 0],
                  [0, 0, 0, 0, 1, 0, 0, 0],
                  [0, 0, 0, 0, 0, 0, 1, 0],
                  [0, 0, 0, 0, 0, 1, 0, 0],
                  [0, 0, 0, 0, 0, 0, 0, 1])
