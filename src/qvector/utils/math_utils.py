"""
Mathematical Utilities
======================

Small linear-algebra and formatting helpers shared across the simulator.

Functions
---------
- kron_n(): Kronecker product of a sequence of arrays
- num_qubits_for_dimension(): n such that 2^n = dim, or None
- to_bitstring(): basis index → zero-padded bitstring (qubit 0 leftmost)
- is_unitary(): UU† ≈ I check within a tolerance
- round_if_close(): snap near-canonical values for display
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..constants import DEFAULT_TOLERANCE


def kron_n(ops: Sequence[np.ndarray]) -> np.ndarray:
    """Kronecker product ops[0] ⊗ ops[1] ⊗ ... (left to right)."""
    if len(ops) == 0:
        raise ValueError("kron_n needs at least one operand")
    out = np.asarray(ops[0])
    for op in ops[1:]:
        out = np.kron(out, op)
    return out


def num_qubits_for_dimension(dim: int) -> Optional[int]:
    """
    Return n with 2^n == dim, or None if dim is not a power of two ≥ 2.

    A one-element vector is a 0-qubit system, which the simulator does not
    model.
    """
    if dim < 2 or dim & (dim - 1):
        return None
    return dim.bit_length() - 1


def to_bitstring(index: int, n_qubits: int) -> str:
    """Basis index → bitstring, MSB first, so qubit 0 is the leftmost char."""
    return format(index, f"0{n_qubits}b")


def is_unitary(matrix: np.ndarray, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """
    Check UU† ≈ I entrywise within ``tolerance``.

    Non-square input is never unitary.
    """
    U = np.asarray(matrix, dtype=np.complex128)
    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        return False
    residual = U @ U.conj().T - np.eye(U.shape[0], dtype=np.complex128)
    return bool(np.max(np.abs(residual)) <= tolerance)


def round_if_close(val: float, tol: float = 1e-10) -> float:
    """
    Round off to the nearest canonical value, or to 8 decimal places.

    Values within ``tol`` of 0, ±0.5 or ±1 snap exactly onto them; this
    keeps 0.7071067811865475² from printing as 0.4999999999999999.
    """
    for cand in (0.0, 0.5, -0.5, 1.0, -1.0):
        if abs(val - cand) < tol:
            return cand
    return round(val, 8)
