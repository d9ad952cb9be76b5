"""Tests for the sequence applier."""

import logging

import numpy as np
import pytest

from qkernel import (
    Applier, EngineConfig, GateRegistry, Operation,
    apply, apply_operation, apply_lists, get_default_applier,
    basis_state, zero_state, random_state, state_fidelity,
    allclose_up_to_global_phase,
    ErrorKind, GateError, UnknownGateError, InvalidArityError,
    InvalidWireCountError, OutOfRangeError, InvalidStateError,
)
from qkernel.variants import PauliX, Hadamard

CIRCUIT = [
    ("Hadamard", [0]),
    ("RX", [2], [0.3]),
    ("CNOT", [0, 3]),
    ("Rot", [1], [0.1, 0.7, -0.4]),
    ("CRY", [3, 1], [1.2]),
    ("Toffoli", [2, 0, 1]),
    ("CSWAP", [1, 3, 2]),
    ("PhaseShift", [3], [0.9]),
    ("CRZ", [0, 2], [-2.2]),
    ("SWAP", [3, 0]),
    ("T", [1]),
]


def run(config, n=4, seed=11):
    state = random_state(n, np.random.default_rng(seed))
    Applier(config=config).apply(state, n, CIRCUIT)
    return state


class TestEndToEnd:
    """End-to-end scenarios."""

    def test_bell_state(self):
        """H on qubit 0 then CNOT(0, 1) on |00⟩ gives (|00⟩ + |11⟩)/√2."""
        state = np.array([1, 0, 0, 0], dtype=complex)
        apply(state, 2, [("Hadamard", [0]), ("CNOT", [0, 1])])
        assert np.allclose(state, [1 / np.sqrt(2), 0, 0, 1 / np.sqrt(2)])

    def test_ghz_state(self):
        """H then a CNOT chain gives the 3-qubit GHZ state."""
        state = zero_state(3)
        apply(state, 3, [("Hadamard", [0]), ("CNOT", [0, 1]), ("CNOT", [1, 2])])
        expected = np.zeros(8, dtype=complex)
        expected[0] = expected[7] = 1 / np.sqrt(2)
        assert np.allclose(state, expected)

    @pytest.mark.parametrize("label", ["PauliX", "Hadamard", "PauliY", "PauliZ"])
    def test_involutions(self, label):
        """Applying a self-inverse gate twice restores the state."""
        state = random_state(3, np.random.default_rng(5))
        original = state.copy()
        apply(state, 3, [(label, [0]), (label, [0])])
        assert np.allclose(state, original)

    @pytest.mark.parametrize("phi", [np.pi / 4, 0.9, -2.3])
    def test_phase_shift_is_rz_up_to_global_phase(self, phi):
        """PhaseShift(φ) and RZ(φ) differ only by the global phase e^{iφ/2}."""
        rng = np.random.default_rng(12)
        shifted = random_state(3, rng)
        rotated = shifted.copy()
        apply(shifted, 3, [("PhaseShift", [1], [phi])])
        apply(rotated, 3, [("RZ", [1], [phi])])
        assert not np.allclose(shifted, rotated)
        assert allclose_up_to_global_phase(shifted, rotated)
        assert np.allclose(shifted, np.exp(0.5j * phi) * rotated)

    def test_rot_matches_zyz_sequence_up_to_phase(self):
        """Rot(φ, θ, ω) equals PhaseShift(φ), RY(θ), PhaseShift(ω) up to phase."""
        phi, theta, omega = 0.4, 1.1, -0.8
        rot = random_state(2, np.random.default_rng(13))
        seq = rot.copy()
        apply(rot, 2, [("Rot", [0], [phi, theta, omega])])
        apply(seq, 2, [("PhaseShift", [0], [phi]), ("RY", [0], [theta]),
                       ("PhaseShift", [0], [omega])])
        assert not np.allclose(rot, seq)
        assert allclose_up_to_global_phase(rot, seq)

    def test_rotation_then_inverse(self):
        """RX(θ) followed by RX(-θ) is the identity."""
        state = random_state(2, np.random.default_rng(6))
        original = state.copy()
        apply(state, 2, [("RX", [1], [0.8]), ("RX", [1], [-0.8])])
        assert np.allclose(state, original)

    def test_norm_preserved(self):
        """A long circuit keeps the state normalized."""
        state = run(EngineConfig())
        assert np.isclose(np.linalg.norm(state), 1.0)

    def test_state_mutated_in_place(self):
        """The caller's array object is the one that changes."""
        state = zero_state(2)
        buffer = state
        apply(state, 2, [("PauliX", [1])])
        assert buffer is state
        assert np.allclose(buffer, basis_state(1, 2))

    def test_matches_full_operator(self):
        """The result equals the full 2^n x 2^n operator built by kron."""
        from qkernel.gates import H_gate, I_gate, CNOT_gate
        state = random_state(3, np.random.default_rng(9))
        expected = np.kron(np.kron(I_gate, H_gate), I_gate) @ state
        expected = np.kron(CNOT_gate, I_gate) @ expected
        apply(state, 3, [("Hadamard", [1]), ("CNOT", [0, 1])])
        assert np.allclose(state, expected)


class TestEntryPoints:
    """Tests for the different ways of submitting operations."""

    def test_operation_tuples_and_namedtuples(self):
        """Plain tuples, tuples without params and Operation all work."""
        a, b, c = zero_state(2), zero_state(2), zero_state(2)
        apply(a, 2, [("RY", [0], [0.5]), ("CNOT", [0, 1])])
        apply(b, 2, [Operation("RY", (0,), (0.5,)), Operation("CNOT", (0, 1))])
        apply(c, 2, [("RY", (0,), (0.5,)), ("CNOT", (0, 1), ())])
        assert np.allclose(a, b)
        assert np.allclose(a, c)

    def test_single_gate_entry_point(self):
        """apply_operation applies exactly one gate."""
        state = zero_state(2)
        apply_operation(state, 2, "PauliX", [0])
        assert np.allclose(state, basis_state(0b10, 2))

    def test_parallel_lists(self):
        """apply_lists takes labels, wires and params separately."""
        a, b = zero_state(2), zero_state(2)
        apply_lists(a, ["Hadamard", "CRX"], [[0], [0, 1]], [[], [0.4]], 2)
        apply(b, 2, [("Hadamard", [0]), ("CRX", [0, 1], [0.4])])
        assert np.allclose(a, b)

    def test_parallel_lists_length_mismatch(self):
        """Mismatched list lengths are rejected before anything runs."""
        state = zero_state(2)
        with pytest.raises(ValueError):
            apply_lists(state, ["Hadamard", "CNOT"], [[0]], [[], []], 2)
        assert np.allclose(state, zero_state(2))

    def test_default_applier_uses_full_registry(self):
        """Module-level functions share one applier with every gate."""
        assert len(get_default_applier().registry) == 20

    def test_custom_registry_is_used(self):
        """An applier resolves labels only through its own registry."""
        applier = Applier(registry=GateRegistry([PauliX, Hadamard]))
        state = zero_state(2)
        applier.apply(state, 2, [("Hadamard", [0])])
        with pytest.raises(UnknownGateError):
            applier.apply(state, 2, [("CNOT", [0, 1])])


class TestValidation:
    """Operations are validated before they touch the state."""

    @pytest.mark.parametrize("op, error, kind", [
        (("Bogus", [0]), UnknownGateError, ErrorKind.UNKNOWN_GATE),
        (("RX", [0]), InvalidArityError, ErrorKind.INVALID_ARITY),
        (("RX", [0], [0.1, 0.2]), InvalidArityError, ErrorKind.INVALID_ARITY),
        (("PauliX", [0], [1.0]), InvalidArityError, ErrorKind.INVALID_ARITY),
        (("CNOT", [0]), InvalidWireCountError, ErrorKind.INVALID_WIRE_COUNT),
        (("PauliX", [0, 1]), InvalidWireCountError, ErrorKind.INVALID_WIRE_COUNT),
        (("PauliX", [3]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        (("PauliX", [-1]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        (("CNOT", [1, 1]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        (("Toffoli", [0, 2, 0]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        (("PauliX", [1.0]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        (("CNOT", [0, "1"]), OutOfRangeError, ErrorKind.OUT_OF_RANGE),
        ((["PauliX"], [0]), UnknownGateError, ErrorKind.UNKNOWN_GATE),
    ])
    def test_rejected_operation(self, op, error, kind):
        """Each kind of bad operation raises its error and leaves the state alone."""
        state = random_state(3, np.random.default_rng(0))
        original = state.copy()
        with pytest.raises(error) as excinfo:
            apply(state, 3, [op])
        assert excinfo.value.kind is kind
        assert isinstance(excinfo.value, GateError)
        assert isinstance(excinfo.value, ValueError)
        assert np.array_equal(state, original)

    def test_numpy_integer_wires_accepted(self):
        """Wires given as numpy integers behave like plain ints."""
        a, b = zero_state(3), zero_state(3)
        apply(a, 3, [("PauliX", np.array([2])), ("CNOT", np.array([2, 0]))])
        apply(b, 3, [("PauliX", [2]), ("CNOT", [2, 0])])
        assert np.allclose(a, b)
        assert np.allclose(a, basis_state(0b101, 3))

    def test_failure_keeps_earlier_operations(self):
        """Operations before the failing one stay applied; later ones never run."""
        state = zero_state(2)
        with pytest.raises(UnknownGateError):
            apply(state, 2, [("PauliX", [0]), ("Bogus", [1]), ("PauliX", [1])])
        assert np.allclose(state, basis_state(0b10, 2))

    @pytest.mark.parametrize("state, n", [
        (np.zeros(4, dtype=complex), 3),
        (np.zeros((2, 2), dtype=complex), 2),
        (np.zeros(4, dtype=float), 2),
        ([1, 0, 0, 0], 2),
    ])
    def test_invalid_state(self, state, n):
        """States of the wrong shape, dtype or type are rejected."""
        with pytest.raises(InvalidStateError) as excinfo:
            apply(state, n, [("PauliX", [0])])
        assert excinfo.value.kind is ErrorKind.INVALID_STATE

    def test_read_only_state(self):
        """A read-only buffer is rejected."""
        state = zero_state(1)
        state.flags.writeable = False
        with pytest.raises(InvalidStateError):
            apply_operation(state, 1, "PauliX", [0])

    def test_empty_sequence_is_noop(self):
        """No operations leaves the state untouched."""
        state = random_state(2, np.random.default_rng(4))
        original = state.copy()
        apply(state, 2, [])
        assert np.array_equal(state, original)

    def test_rejection_is_logged(self, caplog):
        """Rejected operations are logged at DEBUG before being raised."""
        with caplog.at_level(logging.DEBUG, logger="qkernel"):
            with pytest.raises(UnknownGateError):
                apply(zero_state(1), 1, [("Bogus", [0])])
        assert "Bogus" in caplog.text


class TestExecutionModes:
    """Batched, per-group and threaded execution give the same state."""

    def test_per_group_matches_batched(self):
        """One kernel call per group equals one call per operation."""
        batched = run(EngineConfig(batch_blocks=True))
        per_group = run(EngineConfig(batch_blocks=False))
        assert np.allclose(batched, per_group)

    def test_dense_only_matches_specialized(self):
        """Disabling specialized transforms does not change the result."""
        fast = run(EngineConfig(use_specialized=True))
        dense = run(EngineConfig(use_specialized=False))
        assert np.allclose(fast, dense)

    def test_threaded_matches_batched(self):
        """Splitting blocks over a thread pool does not change the result."""
        batched = run(EngineConfig(), n=8)
        threaded = run(EngineConfig(max_workers=4, min_blocks_per_worker=2), n=8)
        assert np.allclose(batched, threaded)
        assert np.isclose(state_fidelity(batched, threaded), 1.0)

    def test_threaded_errors_raise_before_pool(self):
        """Validation errors surface the same way with a thread pool."""
        applier = Applier(config=EngineConfig(max_workers=4, min_blocks_per_worker=1))
        with pytest.raises(OutOfRangeError):
            applier.apply(zero_state(3), 3, [("PauliX", [5])])
