"""
qkernel - In-place quantum gate application on dense state vectors.

This package applies sequences of named gate operations (label, target
wires, real parameters) to a caller-owned complex amplitude vector, in place.

Modules:
    gates     - Gate matrix catalogue (X, H, RX, CNOT, Toffoli, ...)
    variants  - Gate variants: arity, frozen matrix, specialized transform
    indices   - Index generation (complement_of, enumerate_offsets)
    kernel    - Gather/multiply/scatter kernel and specialized dispatch
    registry  - Immutable label -> gate factory table
    core      - Sequence applier (Applier, apply, apply_operation)
    config    - Engine configuration
    errors    - Error kinds raised by the engine
    utils     - State preparation and comparison helpers

Quick Start:
    >>> import numpy as np
    >>> from qkernel import apply
    >>> state = np.array([1, 0, 0, 0], dtype=complex)
    >>> apply(state, 2, [("Hadamard", [0]), ("CNOT", [0, 1])])
    >>> # state is now the Bell state (|00⟩ + |11⟩) / √2
"""

import logging

# Core functionality
from .core import (
    Operation,
    Applier,
    apply,
    apply_operation,
    apply_lists,
    get_default_applier,
    check_state,
    check_wires,
)

# Configuration
from .config import EngineConfig, DEFAULT_CONFIG

# Errors
from .errors import (
    ErrorKind,
    GateError,
    UnknownGateError,
    InvalidArityError,
    InvalidWireCountError,
    OutOfRangeError,
    InvalidStateError,
)

# Index generation
from .indices import (
    complement_of,
    enumerate_offsets,
    index_groups,
)

# Kernel
from .kernel import (
    apply_generic,
    apply_kernel,
)

# Registry and gate variants
from .registry import GateRegistry
from .variants import Gate, ALL_GATES

# Utilities
from .utils import (
    zero_state,
    basis_state,
    random_state,
    is_unitary,
    allclose_up_to_global_phase,
    state_fidelity,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Core
    "Operation",
    "Applier",
    "apply",
    "apply_operation",
    "apply_lists",
    "get_default_applier",
    "check_state",
    "check_wires",
    # Config
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Errors
    "ErrorKind",
    "GateError",
    "UnknownGateError",
    "InvalidArityError",
    "InvalidWireCountError",
    "OutOfRangeError",
    "InvalidStateError",
    # Indices
    "complement_of",
    "enumerate_offsets",
    "index_groups",
    # Kernel
    "apply_generic",
    "apply_kernel",
    # Registry
    "GateRegistry",
    "Gate",
    "ALL_GATES",
    # Utils
    "zero_state",
    "basis_state",
    "random_state",
    "is_unitary",
    "allclose_up_to_global_phase",
    "state_fidelity",
]
