"""
Errors raised by the gate-application engine.

Every error is a ``ValueError`` subclass tagged with an ``ErrorKind``, so a
caller can either catch the concrete class or branch on ``err.kind``.
"""

from enum import Enum
from typing import Optional, Sequence


class ErrorKind(Enum):
    """Failure categories of the engine."""
    UNKNOWN_GATE = "UnknownGate"
    INVALID_ARITY = "InvalidArity"
    INVALID_WIRE_COUNT = "InvalidWireCount"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_STATE = "InvalidState"


class GateError(ValueError):
    """Base class for all engine errors."""

    kind: Optional[ErrorKind] = None


class UnknownGateError(GateError):
    """The operation label is not present in the registry."""

    kind = ErrorKind.UNKNOWN_GATE

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"{label} is not a supported gate type")


class InvalidArityError(GateError):
    """The number of parameters does not match the gate kind."""

    kind = ErrorKind.INVALID_ARITY

    def __init__(self, label: str, expected: int, actual: int):
        self.label = label
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{label}: requires {expected} arguments but got {actual} arguments instead"
        )


class InvalidWireCountError(GateError):
    """The number of wires does not match the gate's qubit arity."""

    kind = ErrorKind.INVALID_WIRE_COUNT

    def __init__(self, label: str, expected: int, actual: int):
        self.label = label
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{label}: acts on {expected} wires but got {actual} wires instead"
        )


class OutOfRangeError(GateError):
    """A wire is outside [0, num_qubits) or occurs twice in one operation."""

    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, label: str, wires: Sequence[int], num_qubits: int, reason: str):
        self.label = label
        self.wires = tuple(wires)
        self.num_qubits = num_qubits
        super().__init__(f"{label} on wires {list(wires)} with {num_qubits} qubits: {reason}")


class InvalidStateError(GateError):
    """The state buffer cannot hold a state of the requested size."""

    kind = ErrorKind.INVALID_STATE
