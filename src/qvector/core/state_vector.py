"""
State Vector Representation
===========================

An n-qubit pure state is stored as 2^n complex amplitudes:

    |ψ⟩ = Σᵢ aᵢ |i⟩,    i = 0 … 2^n - 1

BIT ORDERING
------------
Index i denotes the basis state whose bits are the binary expansion of i,
with qubit 0 in the MOST significant bit:

    n = 2:   index 0 → |00⟩   index 1 → |01⟩   index 2 → |10⟩   index 3 → |11⟩
                        q0q1

This matches the left-to-right reading of a ket and the row-major layout of
the (2, 2, …, 2) tensor view used by gate application (axis q = qubit q).

INVARIANTS
----------
- Length is a power of two ≥ 2 (otherwise DimensionMismatch).
- Σ|aᵢ|² = 1 within ε (otherwise NormalizationError).
- The amplitude array is read-only. Evolution happens on a private copy
  owned by the Simulator; every StateVector handed to a caller is final.

Presentation
------------
Formatting (Dirac notation, histograms) is not done here. ``items()``
yields ``(basis_index, amplitude)`` pairs in ascending index order for any
formatter to consume.
"""

from __future__ import annotations

import operator
from typing import Iterator, Sequence, Tuple

import numpy as np

try:
    from qutip import Qobj
except ImportError:
    raise ImportError(
        "QuTiP is required for state interop. Install with: pip install qutip"
    )

from ..constants import AMPLITUDE_DTYPE, DEFAULT_TOLERANCE
from ..errors import DimensionMismatch, IndexOutOfRange, NormalizationError
from ..utils.math_utils import kron_n, num_qubits_for_dimension, to_bitstring


class StateVector:
    """
    Normalized, immutable n-qubit state vector.

    Parameters
    ----------
    amplitudes : array_like
        2^n complex amplitudes in basis-index order. Copied on construction.
    tolerance : float
        ε for the normalization check.

    Raises
    ------
    DimensionMismatch
        If the number of amplitudes is not a power of two ≥ 2.
    NormalizationError
        If |Σ|aᵢ|² - 1| > tolerance.

    Example
    -------
    >>> psi = StateVector([1 / np.sqrt(2), 0, 0, 1 / np.sqrt(2)])
    >>> psi.num_qubits
    2
    >>> round(psi.probability(3), 12)
    0.5
    """

    def __init__(self, amplitudes, tolerance: float = DEFAULT_TOLERANCE):
        amps = np.array(amplitudes, dtype=AMPLITUDE_DTYPE).reshape(-1)
        n_qubits = num_qubits_for_dimension(amps.size)
        if n_qubits is None:
            raise DimensionMismatch(
                f"State vector length must be a power of two >= 2, got {amps.size}"
            )
        norm = _norm_squared(amps)
        # Written as "not <=" so a NaN norm fails the check
        if not abs(norm - 1.0) <= tolerance:
            raise NormalizationError(
                f"State vector must be normalized: sum |a_i|^2 = {norm!r} "
                f"(tolerance {tolerance:g})"
            )
        amps.flags.writeable = False
        self._amplitudes = amps
        self._num_qubits = n_qubits

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, n_qubits: int = 1) -> "StateVector":
        """|0…0⟩ on ``n_qubits`` qubits."""
        return cls.basis(0, n_qubits)

    @classmethod
    def one(cls) -> "StateVector":
        """Single-qubit |1⟩."""
        return cls.basis(1, 1)

    @classmethod
    def basis(cls, index: int, n_qubits: int) -> "StateVector":
        """Computational basis state |index⟩ on ``n_qubits`` qubits."""
        n_qubits = operator.index(n_qubits)
        if n_qubits < 1:
            raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")
        dim = 1 << n_qubits
        index = operator.index(index)
        if not 0 <= index < dim:
            raise IndexOutOfRange(
                f"Basis index {index} is out of range for {n_qubits} qubits (dim {dim})"
            )
        amps = np.zeros(dim, dtype=AMPLITUDE_DTYPE)
        amps[index] = 1.0
        return cls(amps)

    @classmethod
    def from_bitstring(cls, bits: str) -> "StateVector":
        """
        Basis state from a bitstring, qubit 0 first.

        >>> StateVector.from_bitstring("10").probability(2)
        1.0
        """
        if not bits or set(bits) - {"0", "1"}:
            raise ValueError(f"Not a bitstring: {bits!r}")
        return cls.basis(int(bits, 2), len(bits))

    @classmethod
    def from_qobj(cls, ket: Qobj, tolerance: float = DEFAULT_TOLERANCE) -> "StateVector":
        """Build from a QuTiP ket. Qubit order follows the ket's tensor order."""
        if not ket.isket:
            raise TypeError(f"Expected a ket Qobj, got type {ket.type!r}")
        return StateVector(ket.full().reshape(-1), tolerance=tolerance)

    # -------------------------------------------------------------------------
    # Read-only queries
    # -------------------------------------------------------------------------

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dimension(self) -> int:
        return self._amplitudes.size

    @property
    def amplitudes(self) -> np.ndarray:
        """Read-only view of the amplitude array."""
        return self._amplitudes

    def __len__(self) -> int:
        return self.dimension

    def amplitude(self, basis_index: int) -> complex:
        return complex(self._amplitudes[self._check_index(basis_index)])

    def probability(self, basis_index: int) -> float:
        """|a_i|² for one basis state. Never mutates the state."""
        a = self._amplitudes[self._check_index(basis_index)]
        return float(a.real * a.real + a.imag * a.imag)

    def probabilities(self) -> np.ndarray:
        """All |aᵢ|² in basis-index order (fresh read-only array)."""
        probs = self._amplitudes.real ** 2 + self._amplitudes.imag ** 2
        probs.flags.writeable = False
        return probs

    def norm_squared(self) -> float:
        return _norm_squared(self._amplitudes)

    def items(self) -> Iterator[Tuple[int, complex]]:
        """(basis_index, amplitude) pairs in ascending index order."""
        for i, a in enumerate(self._amplitudes):
            yield i, complex(a)

    def bitstring(self, basis_index: int) -> str:
        return to_bitstring(self._check_index(basis_index), self._num_qubits)

    # -------------------------------------------------------------------------
    # Combination and comparison
    # -------------------------------------------------------------------------

    def tensor(self, other: "StateVector") -> "StateVector":
        """
        Joint state self ⊗ other.

        The qubits of ``self`` come first (most significant), so
        |1⟩.tensor(|0⟩) == |10⟩.
        """
        return StateVector(np.kron(self._amplitudes, other.amplitudes))

    def inner(self, other: "StateVector") -> complex:
        """⟨self|other⟩."""
        self._check_same_width(other)
        return complex(np.vdot(self._amplitudes, other.amplitudes))

    def fidelity(self, other: "StateVector") -> float:
        """|⟨self|other⟩|², insensitive to global phase."""
        return float(abs(self.inner(other)) ** 2)

    def allclose(self, other: "StateVector", atol: float = DEFAULT_TOLERANCE) -> bool:
        """Amplitude-for-amplitude comparison (global phase matters)."""
        if self.dimension != other.dimension:
            return False
        return bool(np.allclose(self._amplitudes, other.amplitudes, rtol=0.0, atol=atol))

    def to_qobj(self) -> Qobj:
        """QuTiP ket with dims [[2]*n, [1]*n]."""
        n = self._num_qubits
        return Qobj(self._amplitudes.reshape(-1, 1).copy(), dims=[[2] * n, [1] * n])

    def __eq__(self, other) -> bool:
        if not isinstance(other, StateVector):
            return NotImplemented
        return bool(np.array_equal(self._amplitudes, other.amplitudes))

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_qubits={self._num_qubits}, "
            f"amplitudes={np.array2string(self._amplitudes, precision=6, separator=', ')})"
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_index(self, basis_index: int) -> int:
        i = operator.index(basis_index)
        if not 0 <= i < self.dimension:
            raise IndexOutOfRange(
                f"Basis index {i} is out of range for dimension {self.dimension}"
            )
        return i

    def _check_same_width(self, other: "StateVector") -> None:
        if other.dimension != self.dimension:
            raise DimensionMismatch(
                f"Dimensions differ: {self.dimension} vs {other.dimension}"
            )


class Qubit(StateVector):
    """
    Single-qubit state |ψ⟩ = α|0⟩ + β|1⟩ with |α|² + |β|² = 1.

    Example
    -------
    >>> q = Qubit(1 / np.sqrt(2), 1j / np.sqrt(2))
    >>> round(q.probability_one(), 12)
    0.5
    """

    def __init__(self, alpha: complex, beta: complex, tolerance: float = DEFAULT_TOLERANCE):
        super().__init__([alpha, beta], tolerance=tolerance)

    @classmethod
    def zero(cls) -> "Qubit":
        return cls.basis(0)

    @classmethod
    def one(cls) -> "Qubit":
        return cls.basis(1)

    @classmethod
    def basis(cls, index: int, n_qubits: int = 1) -> "Qubit":
        """|0⟩ or |1⟩; a Qubit is always a single-qubit register."""
        if operator.index(n_qubits) != 1:
            raise ValueError(f"A Qubit has exactly 1 qubit, got n_qubits={n_qubits}")
        index = operator.index(index)
        if index not in (0, 1):
            raise IndexOutOfRange(f"Basis index {index} is out of range for 1 qubit (dim 2)")
        return cls(1.0 - index, float(index))

    @property
    def alpha(self) -> complex:
        return complex(self._amplitudes[0])

    @property
    def beta(self) -> complex:
        return complex(self._amplitudes[1])

    def probability_zero(self) -> float:
        return self.probability(0)

    def probability_one(self) -> float:
        return self.probability(1)

    def is_basis_state(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """True for |0⟩ or |1⟩ up to a global phase."""
        p0 = self.probability_zero()
        return abs(p0 - 1.0) <= tolerance or p0 <= tolerance


def tensor(states: Sequence[StateVector]) -> StateVector:
    """states[0] ⊗ states[1] ⊗ …, qubits numbered left to right."""
    if len(states) == 0:
        raise ValueError("tensor needs at least one state")
    return StateVector(kron_n([s.amplitudes for s in states]))


def _norm_squared(amps: np.ndarray) -> float:
    return float(np.sum(amps.real ** 2 + amps.imag ** 2))
