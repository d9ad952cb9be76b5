"""
Gate variants.

Each supported gate kind is a small class deriving from ``Gate``. An
instance carries its qubit arity, its frozen unitary matrix and, for most
kinds, a specialized in-place transform that exploits the structure of the
matrix (a permutation or a sparse diagonal) instead of a dense multiply.

Specialized transforms take an index group, or a 2-D stack of index groups
with one group per row, and must leave the state exactly as the dense
gather/multiply/scatter would.
"""

import numpy as np
from typing import Sequence, Tuple

from .errors import InvalidArityError
from .gates import (
    X_gate, Y_gate, Z_gate, H_gate, S_gate, T_gate,
    P_gate, Rx_gate, Ry_gate, Rz_gate, Rot_gate,
    CNOT_gate, CZ_gate, SWAP_gate,
    CRX_gate, CRY_gate, CRZ_gate, CRot_gate,
    TOFF_gate, CSWAP_gate,
)

SQRT2INV = np.sqrt(1/2)


def _swap(state: np.ndarray, i: np.ndarray, j: np.ndarray):
    state[i], state[j] = state[j], state[i]


def _rotate_pair(state: np.ndarray, i: np.ndarray, j: np.ndarray, U: np.ndarray):
    """Apply the 2x2 matrix U to the amplitude pairs (state[i], state[j])."""
    a, b = state[i], state[j]
    state[i] = U[0, 0] * a + U[0, 1] * b
    state[j] = U[1, 0] * a + U[1, 1] * b


class Gate:
    """
    Base class of all gate variants.

    Subclasses set ``label``, ``num_wires`` and ``num_params`` and pass
    their matrix to ``__init__``. Kinds with a closed-form transform set
    ``specialized`` and override ``apply_specialized``.
    """

    label: str = ""
    num_wires: int = 1
    num_params: int = 0
    specialized: bool = False

    def __init__(self, matrix):
        matrix = np.array(matrix, dtype=complex)
        size = 1 << self.num_wires
        if matrix.shape != (size, size):
            raise ValueError(f"{self.label}: matrix must be {size}x{size}, got shape {matrix.shape}")
        matrix.flags.writeable = False
        self.matrix = matrix

    @classmethod
    def create(cls, params: Sequence[float] = ()) -> "Gate":
        """
        Validate the parameter count and construct the gate.

        Raises:
            InvalidArityError: if len(params) differs from num_params
        """
        params = list(params)
        if len(params) != cls.num_params:
            raise InvalidArityError(cls.label, cls.num_params, len(params))
        return cls(*(float(p) for p in params))

    @property
    def size(self) -> int:
        """Number of amplitudes in one block (2^num_wires)."""
        return 1 << self.num_wires

    @property
    def params(self) -> Tuple[float, ...]:
        return ()

    def apply_specialized(self, state: np.ndarray, indices: np.ndarray):
        raise NotImplementedError(f"{self.label} has no specialized transform")

    def __repr__(self):
        args = ", ".join(repr(p) for p in self.params)
        return f"{type(self).__name__}({args})"


# =============================================================================
# Single-qubit gates
# =============================================================================

class PauliX(Gate):
    label = "PauliX"
    specialized = True

    def __init__(self):
        super().__init__(X_gate)

    def apply_specialized(self, state, indices):
        _swap(state, indices[..., 0], indices[..., 1])


class PauliY(Gate):
    label = "PauliY"
    specialized = True

    def __init__(self):
        super().__init__(Y_gate)

    def apply_specialized(self, state, indices):
        i0, i1 = indices[..., 0], indices[..., 1]
        a, b = state[i0], state[i1]
        state[i0] = -1j * b
        state[i1] = 1j * a


class PauliZ(Gate):
    label = "PauliZ"
    specialized = True

    def __init__(self):
        super().__init__(Z_gate)

    def apply_specialized(self, state, indices):
        state[indices[..., 1]] *= -1


class Hadamard(Gate):
    label = "Hadamard"
    specialized = True

    def __init__(self):
        super().__init__(H_gate)

    def apply_specialized(self, state, indices):
        i0, i1 = indices[..., 0], indices[..., 1]
        a, b = state[i0], state[i1]
        state[i0] = SQRT2INV * (a + b)
        state[i1] = SQRT2INV * (a - b)


class S(Gate):
    label = "S"
    specialized = True

    def __init__(self):
        super().__init__(S_gate)

    def apply_specialized(self, state, indices):
        state[indices[..., 1]] *= 1j


class T(Gate):
    label = "T"
    specialized = True

    def __init__(self):
        super().__init__(T_gate)
        self.shift = T_gate[1, 1]

    def apply_specialized(self, state, indices):
        state[indices[..., 1]] *= self.shift


class RX(Gate):
    label = "RX"
    num_params = 1

    def __init__(self, theta):
        self.theta = theta
        super().__init__(Rx_gate(theta))

    @property
    def params(self):
        return (self.theta,)


class RY(Gate):
    label = "RY"
    num_params = 1

    def __init__(self, theta):
        self.theta = theta
        super().__init__(Ry_gate(theta))

    @property
    def params(self):
        return (self.theta,)


class RZ(Gate):
    label = "RZ"
    num_params = 1
    specialized = True

    def __init__(self, theta):
        self.theta = theta
        super().__init__(Rz_gate(theta))
        self.first, self.second = self.matrix[0, 0], self.matrix[1, 1]

    @property
    def params(self):
        return (self.theta,)

    def apply_specialized(self, state, indices):
        state[indices[..., 0]] *= self.first
        state[indices[..., 1]] *= self.second


class PhaseShift(Gate):
    label = "PhaseShift"
    num_params = 1
    specialized = True

    def __init__(self, phi):
        self.phi = phi
        super().__init__(P_gate(phi))
        self.shift = self.matrix[1, 1]

    @property
    def params(self):
        return (self.phi,)

    def apply_specialized(self, state, indices):
        state[indices[..., 1]] *= self.shift


class Rot(Gate):
    label = "Rot"
    num_params = 3

    def __init__(self, phi, theta, omega):
        self.phi, self.theta, self.omega = phi, theta, omega
        super().__init__(Rot_gate(phi, theta, omega))

    @property
    def params(self):
        return (self.phi, self.theta, self.omega)


# =============================================================================
# Two-qubit gates (wire 0 is the control where there is one)
# =============================================================================

class CNOT(Gate):
    label = "CNOT"
    num_wires = 2
    specialized = True

    def __init__(self):
        super().__init__(CNOT_gate)

    def apply_specialized(self, state, indices):
        _swap(state, indices[..., 2], indices[..., 3])


class SWAP(Gate):
    label = "SWAP"
    num_wires = 2
    specialized = True

    def __init__(self):
        super().__init__(SWAP_gate)

    def apply_specialized(self, state, indices):
        _swap(state, indices[..., 1], indices[..., 2])


class CZ(Gate):
    label = "CZ"
    num_wires = 2
    specialized = True

    def __init__(self):
        super().__init__(CZ_gate)

    def apply_specialized(self, state, indices):
        state[indices[..., 3]] *= -1


class _ControlledRotation(Gate):
    """Controlled 2x2 rotation: identity on the control=0 half of the block."""

    num_wires = 2
    specialized = True

    def apply_specialized(self, state, indices):
        _rotate_pair(state, indices[..., 2], indices[..., 3], self.matrix[2:, 2:])


class CRX(_ControlledRotation):
    label = "CRX"
    num_params = 1

    def __init__(self, theta):
        self.theta = theta
        super().__init__(CRX_gate(theta))

    @property
    def params(self):
        return (self.theta,)


class CRY(_ControlledRotation):
    label = "CRY"
    num_params = 1

    def __init__(self, theta):
        self.theta = theta
        super().__init__(CRY_gate(theta))

    @property
    def params(self):
        return (self.theta,)


class CRZ(Gate):
    label = "CRZ"
    num_wires = 2
    num_params = 1
    specialized = True

    def __init__(self, theta):
        self.theta = theta
        super().__init__(CRZ_gate(theta))
        self.first, self.second = self.matrix[2, 2], self.matrix[3, 3]

    @property
    def params(self):
        return (self.theta,)

    def apply_specialized(self, state, indices):
        state[indices[..., 2]] *= self.first
        state[indices[..., 3]] *= self.second


class CRot(_ControlledRotation):
    label = "CRot"
    num_params = 3

    def __init__(self, phi, theta, omega):
        self.phi, self.theta, self.omega = phi, theta, omega
        super().__init__(CRot_gate(phi, theta, omega))

    @property
    def params(self):
        return (self.phi, self.theta, self.omega)


# =============================================================================
# Three-qubit gates
# =============================================================================

class Toffoli(Gate):
    label = "Toffoli"
    num_wires = 3
    specialized = True

    def __init__(self):
        super().__init__(TOFF_gate)

    def apply_specialized(self, state, indices):
        _swap(state, indices[..., 6], indices[..., 7])


class CSWAP(Gate):
    label = "CSWAP"
    num_wires = 3
    specialized = True

    def __init__(self):
        super().__init__(CSWAP_gate)

    def apply_specialized(self, state, indices):
        _swap(state, indices[..., 5], indices[..., 6])


ALL_GATES = (
    PauliX, PauliY, PauliZ, Hadamard, S, T,
    RX, RY, RZ, PhaseShift, Rot,
    CNOT, SWAP, CZ, CRX, CRY, CRZ, CRot,
    Toffoli, CSWAP,
)
