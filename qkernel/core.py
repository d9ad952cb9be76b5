"""
Core gate-application functionality.

This module applies sequences of named gate operations to a state vector in
place. The state vector is borrowed from the caller: a one-dimensional
complex numpy array of length 2^num_qubits that the engine reads and writes
for the duration of a call but never allocates, resizes or keeps.

Bit ordering convention:
    qubit 0 is the most significant bit of a state index, so
    |q0 q1 ... q(n-1)⟩ has index q0 * 2^(n-1) + ... + q(n-1).
"""

import logging
import operator
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_CONFIG, EngineConfig
from .errors import InvalidStateError, InvalidWireCountError, OutOfRangeError
from .indices import index_groups
from .kernel import apply_kernel
from .registry import GateRegistry
from .variants import Gate

log = logging.getLogger(__name__)


class Operation(NamedTuple):
    """One gate application: label, target wires (in matrix order), parameters."""
    label: str
    wires: Tuple[int, ...]
    params: Tuple[float, ...] = ()


def _as_operation(op) -> Operation:
    if isinstance(op, Operation):
        return op
    label, wires, *rest = op
    params = rest[0] if rest else ()
    return Operation(label, tuple(wires), tuple(params))


def check_state(state: np.ndarray, num_qubits: int):
    """
    Check that ``state`` can be mutated in place as an n-qubit state.

    Raises:
        InvalidStateError: if state is not a writeable 1-D complex array of
                           length 2^num_qubits
    """
    if not isinstance(state, np.ndarray):
        raise InvalidStateError(f"state must be a numpy array, got {type(state).__name__}")
    if num_qubits < 0:
        raise InvalidStateError(f"num_qubits must be non-negative, got {num_qubits}")
    if state.ndim != 1 or state.shape[0] != 1 << num_qubits:
        raise InvalidStateError(
            f"state of shape {state.shape} does not hold {num_qubits} qubits "
            f"(expected length {1 << num_qubits})"
        )
    if not np.iscomplexobj(state):
        raise InvalidStateError(f"state must have a complex dtype, got {state.dtype}")
    if not state.flags.writeable:
        raise InvalidStateError("state must be writeable")


def check_wires(gate: Gate, wires: Sequence[int], num_qubits: int) -> Tuple[int, ...]:
    """
    Check that ``wires`` is a valid target list for ``gate``.

    Returns:
        The wires as a tuple of plain ints

    Raises:
        InvalidWireCountError: if the number of wires differs from the arity
        OutOfRangeError: if a wire is not an integer, is outside
                         [0, num_qubits) or is repeated
    """
    if len(wires) != gate.num_wires:
        raise InvalidWireCountError(gate.label, gate.num_wires, len(wires))
    checked = []
    for w in wires:
        try:
            w = operator.index(w)
        except TypeError:
            raise OutOfRangeError(gate.label, wires, num_qubits,
                                  f"wire {w!r} is not an integer") from None
        if not 0 <= w < num_qubits:
            raise OutOfRangeError(gate.label, wires, num_qubits, f"wire {w} is out of range")
        checked.append(w)
    if len(set(checked)) != len(checked):
        raise OutOfRangeError(gate.label, wires, num_qubits,
                              "the same qubit cannot occur twice")
    return tuple(checked)


class Applier:
    """
    Applies gate operations to borrowed state vectors.

    The applier owns a read-only ``GateRegistry`` and an ``EngineConfig``;
    both are fixed at construction. It holds no state between calls, and
    callers must not run two calls against the same buffer at once.

    Example:
        >>> state = np.array([1, 0, 0, 0], dtype=complex)
        >>> Applier().apply(state, 2, [("Hadamard", [0]), ("CNOT", [0, 1])])
        >>> np.round(state.real, 3)
        array([0.707, 0.   , 0.   , 0.707])
    """

    def __init__(self, registry: Optional[GateRegistry] = None,
                 config: Optional[EngineConfig] = None):
        self.registry = registry if registry is not None else GateRegistry.default()
        self.config = config if config is not None else DEFAULT_CONFIG

    def apply(self, state: np.ndarray, num_qubits: int, operations: Iterable):
        """
        Apply ``operations`` to ``state`` in order.

        Each operation is fully applied before the next one starts. When an
        operation is rejected, the operations before it remain applied, the
        state is otherwise untouched, and the rest are not attempted.

        Args:
            state: State vector of length 2^num_qubits, modified in place
            num_qubits: Number of qubits
            operations: Iterable of Operation or (label, wires[, params])

        Raises:
            GateError: subclass describing the first rejected operation
        """
        check_state(state, num_qubits)
        for op in operations:
            self._apply_one(state, num_qubits, _as_operation(op))

    def apply_operation(self, state: np.ndarray, num_qubits: int, label: str,
                        wires: Sequence[int], params: Sequence[float] = ()):
        """Apply a single named gate to ``state``."""
        check_state(state, num_qubits)
        self._apply_one(state, num_qubits, Operation(label, tuple(wires), tuple(params)))

    def apply_lists(self, state: np.ndarray, ops: Sequence[str],
                    wires: Sequence[Sequence[int]], params: Sequence[Sequence[float]],
                    num_qubits: int):
        """
        Apply operations given as parallel lists of labels, wires and params.

        Raises:
            ValueError: if the three lists differ in length
        """
        if not len(ops) == len(wires) == len(params):
            raise ValueError(
                f"ops, wires and params must have equal length, "
                f"got {len(ops)}, {len(wires)} and {len(params)}"
            )
        self.apply(state, num_qubits, zip(ops, wires, params))

    def _apply_one(self, state: np.ndarray, num_qubits: int, op: Operation):
        try:
            gate = self.registry.create(op.label, op.params)
            wires = check_wires(gate, op.wires, num_qubits)
        except ValueError as err:
            log.debug("rejected %s on %s: %s", op.label, list(op.wires), err)
            raise

        groups = index_groups(wires, num_qubits)
        log.debug("applying %r on wires %s (%d blocks)", gate, list(wires), len(groups))
        self._run_blocks(state, groups, gate)

    def _run_blocks(self, state: np.ndarray, groups: np.ndarray, gate: Gate):
        cfg = self.config
        if not cfg.batch_blocks:
            for group in groups:
                apply_kernel(state, group, gate, cfg.use_specialized)
            return

        n_workers = min(cfg.max_workers, len(groups) // cfg.min_blocks_per_worker)
        if n_workers <= 1:
            apply_kernel(state, groups, gate, cfg.use_specialized)
            return

        # Groups are disjoint, so chunks can run concurrently on the same buffer
        with ThreadPoolExecutor(max_workers=n_workers) as pool:
            futures = [pool.submit(apply_kernel, state, chunk, gate, cfg.use_specialized)
                       for chunk in np.array_split(groups, n_workers)]
            for future in futures:
                future.result()


# =============================================================================
# Module-level entry points using a default applier
# =============================================================================

_default_applier = Applier()


def get_default_applier() -> Applier:
    """Return the applier behind the module-level functions."""
    return _default_applier


def apply(state: np.ndarray, num_qubits: int, operations: Iterable):
    """Apply a sequence of operations with the default applier."""
    _default_applier.apply(state, num_qubits, operations)


def apply_operation(state: np.ndarray, num_qubits: int, label: str,
                    wires: Sequence[int], params: Sequence[float] = ()):
    """Apply one named gate with the default applier."""
    _default_applier.apply_operation(state, num_qubits, label, wires, params)


def apply_lists(state: np.ndarray, ops: Sequence[str], wires: Sequence[Sequence[int]],
                params: Sequence[Sequence[float]], num_qubits: int):
    """Apply parallel lists of labels, wires and params with the default applier."""
    _default_applier.apply_lists(state, ops, wires, params, num_qubits)
