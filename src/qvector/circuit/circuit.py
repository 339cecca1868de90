"""
Quantum Circuit Model
=====================

A circuit is a fixed qubit count plus an ordered, straight-line list of
operations. There is no branching and no classical control: a circuit is a
static description that the simulator reads from front to back.

Building a Bell-state circuit:

    >>> qc = Circuit(2)
    >>> qc.h(0).cnot(0, 1)
    Circuit(num_qubits=2, num_operations=2)

VALIDATION
----------
Every operation is checked when it is appended, not when it is simulated:

- IndexOutOfRange:   a target or control ≥ num_qubits (or negative)
- QubitOverlapError: a qubit repeated, or used as both target and control
- DimensionMismatch: gate matrix is not 2^k × 2^k for k targets

A failed append leaves the circuit exactly as it was.

LAYERS
------
``layers()`` assigns each operation the earliest time step at which all of
its qubits are free (as-soon-as-possible scheduling). ``depth`` is the
number of distinct steps. Layers are derived on demand and never change the
stored order.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

import numpy as np

from ..core.apply import validate_operation
from ..core.gates import CONTROLLED_GATES, Gate, H, S, T, X, Y, Z
from ..constants import DEFAULT_TOLERANCE
from ..errors import WidthMismatch


QubitSpec = Union[int, Sequence[int]]


@dataclass(frozen=True)
class Operation:
    """
    One gate application.

    Attributes
    ----------
    gate : Gate
        The k-qubit gate.
    targets : tuple of int
        k target qubits, in the order of the gate matrix's index bits.
    controls : tuple of int
        Qubits that must be |1⟩ for the gate to act. Empty for plain gates.
    """
    gate: Gate
    targets: Tuple[int, ...]
    controls: Tuple[int, ...] = field(default=())

    def __post_init__(self):
        object.__setattr__(self, "targets", _as_tuple(self.targets))
        object.__setattr__(self, "controls", _as_tuple(self.controls))

    @property
    def qubits(self) -> Tuple[int, ...]:
        """Every qubit the operation touches, controls first."""
        return self.controls + self.targets

    @property
    def label(self) -> str:
        """Gate symbol with one "C" per control: "H", "CX", "CCX"."""
        return "C" * len(self.controls) + self.gate.symbol

    def __str__(self) -> str:
        targets = ", ".join(str(q) for q in self.targets)
        noun = "qubit" if len(self.targets) == 1 else "qubits"
        text = f"{self.label} on {noun} {targets}"
        if self.controls:
            text += " controlled by " + ", ".join(str(q) for q in self.controls)
        return text


class Circuit:
    """
    Ordered sequence of validated operations over ``num_qubits`` qubits.

    Parameters
    ----------
    num_qubits : int
        Register width, fixed for the circuit's lifetime. Must be ≥ 1.
    name : str, optional
        Free-form label.
    """

    def __init__(self, num_qubits: int, name: str = None):
        num_qubits = operator.index(num_qubits)
        if num_qubits < 1:
            raise ValueError(f"A circuit needs at least 1 qubit, got {num_qubits}")
        self._num_qubits = num_qubits
        self._operations: List[Operation] = []
        self.name = name

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def num_operations(self) -> int:
        return len(self._operations)

    @property
    def operations(self) -> Tuple[Operation, ...]:
        """Snapshot of the operations in order."""
        return tuple(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self) -> Iterator[Operation]:
        # Iterate over a snapshot so appends during iteration are not seen
        return iter(tuple(self._operations))

    def __getitem__(self, index: int) -> Operation:
        return self._operations[index]

    def __repr__(self) -> str:
        return f"Circuit(num_qubits={self._num_qubits}, num_operations={len(self._operations)})"

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def append(self, operation: Operation) -> "Circuit":
        """Validate ``operation`` against this circuit and append it."""
        self._operations.append(self._validated(operation))
        return self

    def extend(self, operations: Iterable[Operation]) -> "Circuit":
        """Append several operations; all are validated before any is added."""
        checked = [self._validated(op) for op in operations]
        self._operations.extend(checked)
        return self

    def add_gate(self, gate: Gate, targets: QubitSpec, controls: QubitSpec = ()) -> "Circuit":
        return self.append(Operation(gate, _as_tuple(targets), _as_tuple(controls)))

    def h(self, target: int) -> "Circuit":
        return self.add_gate(H, target)

    def x(self, target: int) -> "Circuit":
        return self.add_gate(X, target)

    def y(self, target: int) -> "Circuit":
        return self.add_gate(Y, target)

    def z(self, target: int) -> "Circuit":
        return self.add_gate(Z, target)

    def s(self, target: int) -> "Circuit":
        return self.add_gate(S, target)

    def t(self, target: int) -> "Circuit":
        return self.add_gate(T, target)

    def cnot(self, control: int, target: int) -> "Circuit":
        return self._controlled("CNOT", (control,), target)

    cx = cnot

    def cz(self, control: int, target: int) -> "Circuit":
        return self._controlled("CZ", (control,), target)

    def toffoli(self, control_1: int, control_2: int, target: int) -> "Circuit":
        return self._controlled("TOFFOLI", (control_1, control_2), target)

    ccx = toffoli

    def unitary(
        self,
        matrix,
        targets: QubitSpec,
        name: str = "Custom",
        symbol: str = "U",
        controls: QubitSpec = (),
        verify_unitary: bool = False,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> "Circuit":
        """Append a user-supplied matrix (optionally controlled)."""
        gate = Gate.custom(
            np.asarray(matrix), name=name, symbol=symbol,
            verify_unitary=verify_unitary, tolerance=tolerance,
        )
        return self.add_gate(gate, targets, controls)

    # -------------------------------------------------------------------------
    # Combination
    # -------------------------------------------------------------------------

    def compose(self, other: "Circuit") -> "Circuit":
        """New circuit: this circuit's operations followed by ``other``'s."""
        if other.num_qubits != self._num_qubits:
            raise WidthMismatch(
                f"Cannot compose a {self._num_qubits}-qubit circuit with a "
                f"{other.num_qubits}-qubit circuit"
            )
        combined = Circuit(self._num_qubits, name=self.name)
        combined._operations = self._operations + list(other)
        return combined

    def __add__(self, other: "Circuit") -> "Circuit":
        if not isinstance(other, Circuit):
            return NotImplemented
        return self.compose(other)

    def copy(self) -> "Circuit":
        clone = Circuit(self._num_qubits, name=self.name)
        clone._operations = list(self._operations)
        return clone

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    def layers(self) -> List[int]:
        """ASAP layer index of each operation, in operation order."""
        free_at = [0] * self._num_qubits
        result = []
        for op in self._operations:
            step = max(free_at[q] for q in op.qubits)
            for q in op.qubits:
                free_at[q] = step + 1
            result.append(step)
        return result

    @property
    def depth(self) -> int:
        steps = self.layers()
        return max(steps) + 1 if steps else 0

    def custom_gates(self) -> List[Gate]:
        """Distinct user-supplied gates, in first-use order."""
        seen = []
        for op in self._operations:
            if op.gate.is_custom and not any(op.gate is g for g in seen):
                seen.append(op.gate)
        return seen

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _controlled(self, kind: str, controls: Tuple[int, ...], target: int) -> "Circuit":
        base, _ = CONTROLLED_GATES[kind]
        return self.add_gate(base, target, controls)

    def _validated(self, operation: Operation) -> Operation:
        targets, controls = validate_operation(
            operation.gate.matrix, operation.targets, operation.controls, self._num_qubits
        )
        if targets == operation.targets and controls == operation.controls:
            return operation
        return Operation(operation.gate, targets, controls)


def _as_tuple(qubits: QubitSpec) -> Tuple[int, ...]:
    if isinstance(qubits, (int, np.integer)):
        return (int(qubits),)
    return tuple(qubits)
