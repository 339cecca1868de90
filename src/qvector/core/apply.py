"""
Gate Application
================

Apply a k-qubit gate to an n-qubit state vector without building the
2^n × 2^n operator.

ALGORITHM
---------
Partition the 2^n basis indices into groups of 2^k that agree on every bit
except the k target bits. Each group is one small vector; the gate acts on
it independently:

    for each group g:
        if some control bit of g is 0:  skip       (identity block)
        v = amplitudes[g]                          (canonical target order)
        amplitudes[g] = U @ v

The groups are disjoint and cover every index exactly once, so this equals
the full Kronecker-expanded operator applied to the whole vector.

NUMPY REALISATION
-----------------
The loop over groups is vectorised with a tensor view:

1. ``psi = amps.reshape([2] * n)``: axis q is qubit q (qubit 0 is the most
   significant bit, so row-major order matches basis-index order).
2. Index every control axis with 1. Basic indexing returns a VIEW, so the
   remaining sub-tensor is exactly the groups satisfying the control
   condition.
3. Move the target axes to the front in the order given and flatten to
   (2^k, rest). Column j is one group in canonical sub-order, with
   targets[0] as the most significant bit of the row index.
4. ``U @ block`` and write the result back through the same view.

Cost is O(2^n · 2^k) time; scratch memory is one copy of the selected slice.

Each column is computed independently with no cross-group accumulation, so
the result does not depend on how the columns are batched.
"""

from __future__ import annotations

import operator
from typing import Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatch, IndexOutOfRange, QubitOverlapError
from ..utils.math_utils import num_qubits_for_dimension


def validate_operation(
    matrix: np.ndarray,
    targets: Sequence[int],
    controls: Sequence[int],
    num_qubits: int,
) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """
    Check a gate application against an n-qubit register.

    Returns the targets and controls as tuples of plain ints.

    Raises
    ------
    IndexOutOfRange
        Any index < 0 or ≥ num_qubits.
    QubitOverlapError
        Repeated target, repeated control, or a qubit used as both.
    DimensionMismatch
        No targets, or matrix is not 2^k × 2^k for k = len(targets).
    """
    targets = tuple(operator.index(q) for q in targets)
    controls = tuple(operator.index(q) for q in controls)

    if len(targets) == 0:
        raise DimensionMismatch("An operation needs at least one target qubit")

    for q in targets + controls:
        if not 0 <= q < num_qubits:
            raise IndexOutOfRange(
                f"Qubit index {q} is out of bounds for circuit with {num_qubits} qubits"
            )

    if len(set(targets)) != len(targets):
        raise QubitOverlapError(f"Repeated target qubit in {targets}")
    if len(set(controls)) != len(controls):
        raise QubitOverlapError(f"Repeated control qubit in {controls}")
    shared = set(targets) & set(controls)
    if shared:
        raise QubitOverlapError(
            f"Qubit(s) {sorted(shared)} used as both target and control"
        )

    expected = 1 << len(targets)
    shape = np.shape(matrix)
    if shape != (expected, expected):
        raise DimensionMismatch(
            f"Gate matrix shape {shape} does not match {len(targets)} target(s); "
            f"expected ({expected}, {expected})"
        )
    return targets, controls


def apply_gate(
    amplitudes: np.ndarray,
    matrix: np.ndarray,
    targets: Sequence[int],
    controls: Sequence[int] = (),
) -> np.ndarray:
    """
    Apply ``matrix`` to ``targets`` of a state buffer, IN PLACE.

    Preconditions are NOT re-checked here (see validate_operation); this is
    the inner loop of a simulation.

    Parameters
    ----------
    amplitudes : np.ndarray
        Writable, C-contiguous complex128 buffer of length 2^n.
    matrix : np.ndarray
        2^k × 2^k gate matrix.
    targets : sequence of int
        k target qubits; targets[0] is the most significant bit of the
        matrix row/column index.
    controls : sequence of int
        Qubits that must all be |1⟩ for the gate to act.

    Returns
    -------
    np.ndarray
        ``amplitudes`` (same object) for convenience.
    """
    n = num_qubits_for_dimension(amplitudes.size)
    k = len(targets)

    psi = amplitudes.reshape([2] * n)

    # Fix control axes to |1⟩; the result is still a view into psi
    index = [slice(None)] * n
    for c in controls:
        index[c] = 1
    sub = psi[tuple(index)]

    # Axis positions of the targets once control axes are gone
    sub_targets = [t - sum(1 for c in controls if c < t) for t in targets]
    front = list(range(k))

    moved = np.moveaxis(sub, sub_targets, front)
    block = moved.reshape(1 << k, -1)
    result = (matrix @ block).reshape(moved.shape)
    sub[...] = np.moveaxis(result, front, sub_targets)
    return amplitudes


def apply_gate_copy(
    amplitudes: np.ndarray,
    matrix: np.ndarray,
    targets: Sequence[int],
    controls: Sequence[int] = (),
) -> np.ndarray:
    """Out-of-place variant of apply_gate."""
    out = np.array(amplitudes, dtype=np.complex128, copy=True)
    return apply_gate(out, matrix, targets, controls)
