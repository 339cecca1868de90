"""
Gate Catalogue
==============

A closed catalogue of single-qubit gates plus user-supplied unitaries.

SINGLE-QUBIT GATES
------------------

    X = [[0, 1],      Y = [[0, -i],     Z = [[1,  0],
         [1, 0]]           [i,  0]]          [0, -1]]

    H = 1/√2 [[1,  1],    S = [[1, 0],      T = [[1, 0],
              [1, -1]]         [0, i]]           [0, e^{iπ/4}]]

CONTROLLED GATES
----------------
CNOT, CZ and Toffoli are NOT stored as 4×4 / 8×8 matrices. They are a
single-qubit base gate plus a set of control qubits:

    CNOT    = X with 1 control
    CZ      = Z with 1 control
    Toffoli = X with 2 controls

Gate application skips every amplitude group whose control bits are not all
1, which is exactly the identity block of the expanded matrix. Keeping the
controls separate means one contraction routine serves every gate.

CUSTOM GATES
------------
``Gate.custom(matrix)`` accepts any 2^k × 2^k complex matrix. Unitarity is
not checked unless asked for (``verify_unitary=True`` or
``gate.verify_unitary()``), because the check costs a k-qubit matrix product.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

import numpy as np

from ..constants import AMPLITUDE_DTYPE, DEFAULT_TOLERANCE, SQRT2_INV, T_PHASE
from ..errors import DimensionMismatch, NonUnitaryGateError
from ..utils.math_utils import is_unitary, num_qubits_for_dimension


class GateKind(Enum):
    """Tags of the closed gate catalogue."""
    X = "X"
    Y = "Y"
    Z = "Z"
    H = "H"
    S = "S"
    T = "T"
    CUSTOM = "CUSTOM"


@dataclass(frozen=True, eq=False)
class Gate:
    """
    Immutable gate: a tag, a read-only 2^k × 2^k matrix and display labels.

    Attributes
    ----------
    kind : GateKind
        Catalogue tag. Everything user-supplied is GateKind.CUSTOM.
    matrix : np.ndarray
        Read-only complex128 matrix. Row/column index bits follow the order
        of the operation's targets, targets[0] most significant.
    name : str
        Long name, e.g. "Hadamard".
    symbol : str
        Short label for circuit summaries, e.g. "H".
    """
    kind: GateKind
    matrix: np.ndarray
    name: str
    symbol: str

    def __post_init__(self):
        m = np.array(self.matrix, dtype=AMPLITUDE_DTYPE)
        if m.ndim != 2 or m.shape[0] != m.shape[1]:
            raise DimensionMismatch(f"Gate matrix must be square, got shape {m.shape}")
        if num_qubits_for_dimension(m.shape[0]) is None:
            raise DimensionMismatch(
                f"Gate matrix dimension must be a power of two >= 2, got {m.shape[0]}"
            )
        m.flags.writeable = False
        object.__setattr__(self, "matrix", m)

    @classmethod
    def custom(
        cls,
        matrix,
        name: str = "Custom",
        symbol: str = "U",
        verify_unitary: bool = False,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> "Gate":
        """
        Wrap a user-supplied matrix as a gate.

        Parameters
        ----------
        matrix : array_like
            2^k × 2^k complex matrix.
        name, symbol : str
            Display labels.
        verify_unitary : bool
            Check UU† ≈ I now and raise NonUnitaryGateError on failure.
        tolerance : float
            ε for the unitarity check.
        """
        gate = cls(GateKind.CUSTOM, matrix, name, symbol)
        if verify_unitary:
            gate.verify_unitary(tolerance)
        return gate

    @property
    def num_qubits(self) -> int:
        return num_qubits_for_dimension(self.matrix.shape[0])

    @property
    def dimension(self) -> int:
        return self.matrix.shape[0]

    @property
    def is_custom(self) -> bool:
        return self.kind is GateKind.CUSTOM

    def is_unitary(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return is_unitary(self.matrix, tolerance)

    def verify_unitary(self, tolerance: float = DEFAULT_TOLERANCE) -> "Gate":
        """Raise NonUnitaryGateError unless UU† ≈ I; returns self."""
        verify_unitary(self.matrix, tolerance, label=self.name)
        return self

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"Gate({self.name}, {self.num_qubits} qubit(s))"


def verify_unitary(matrix: np.ndarray, tolerance: float = DEFAULT_TOLERANCE, label: str = "matrix") -> None:
    """Explicit opt-in unitarity check."""
    if not is_unitary(matrix, tolerance):
        U = np.asarray(matrix, dtype=AMPLITUDE_DTYPE)
        residual = float(np.max(np.abs(U @ U.conj().T - np.eye(U.shape[0]))))
        raise NonUnitaryGateError(
            f"{label} is not unitary: max |UU† - I| = {residual:.3e} "
            f"exceeds tolerance {tolerance:g}"
        )


# =============================================================================
# CATALOGUE CONSTANTS
# =============================================================================

X = Gate(GateKind.X, [[0, 1], [1, 0]], "Pauli-X", "X")
Y = Gate(GateKind.Y, [[0, -1j], [1j, 0]], "Pauli-Y", "Y")
Z = Gate(GateKind.Z, [[1, 0], [0, -1]], "Pauli-Z", "Z")
H = Gate(GateKind.H, SQRT2_INV * np.array([[1, 1], [1, -1]]), "Hadamard", "H")
S = Gate(GateKind.S, [[1, 0], [0, 1j]], "S", "S")
T = Gate(GateKind.T, [[1, 0], [0, T_PHASE]], "T", "T")

CATALOGUE: Dict[str, Gate] = {g.symbol: g for g in (X, Y, Z, H, S, T)}

# name -> (base gate, number of controls)
CONTROLLED_GATES: Dict[str, Tuple[Gate, int]] = {
    "CNOT": (X, 1),
    "CZ": (Z, 1),
    "TOFFOLI": (X, 2),
}


def get_gate(symbol: str) -> Gate:
    """Look up a single-qubit catalogue gate by symbol (case-insensitive)."""
    key = symbol.upper()
    if key not in CATALOGUE:
        raise ValueError(f"Unknown gate: {symbol}. Available: {list(CATALOGUE)}")
    return CATALOGUE[key]
