# Core Layer (Level 0)
#
# State representation and the gate-application kernel.
#
# Submodules:
#   - state_vector: StateVector / Qubit, normalized immutable amplitude arrays
#   - gates: Closed gate catalogue (X, Y, Z, H, S, T) and custom unitaries
#   - apply: In-place k-qubit contraction with optional control qubits
#
# Everything above this layer (circuit, simulator) talks to amplitudes only
# through these three modules.

from .state_vector import StateVector, Qubit, tensor
from .gates import (
    Gate,
    GateKind,
    X, Y, Z, H, S, T,
    CATALOGUE,
    CONTROLLED_GATES,
    get_gate,
    verify_unitary,
)
from .apply import validate_operation, apply_gate, apply_gate_copy

__all__ = [
    "StateVector",
    "Qubit",
    "tensor",
    "Gate",
    "GateKind",
    "X", "Y", "Z", "H", "S", "T",
    "CATALOGUE",
    "CONTROLLED_GATES",
    "get_gate",
    "verify_unitary",
    "validate_operation",
    "apply_gate",
    "apply_gate_copy",
]
