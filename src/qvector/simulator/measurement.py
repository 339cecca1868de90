"""
Measurement: Sampling and Collapse
==================================

Measurement is split into two independent transitions:

**Sampling** (read-only)
    Draw a basis index i with probability pᵢ = |aᵢ|². The state is not
    touched, so drawing many shots from one evolved state is equivalent to
    re-running the circuit once per shot:

        sample_many(ψ, rng, 10_000)   # one evolution, 10 000 outcomes

**Collapse** (destructive)
    Replace the state with the single surviving basis state |i⟩. The
    surviving amplitude is renormalized to unit magnitude with its phase
    kept: aᵢ → aᵢ / |aᵢ|.

RANDOMNESS
----------
Every sampling call takes an explicit ``numpy.random.Generator``. Nothing
here touches numpy's global random state, so a fixed seed and a fixed call
order reproduce the same outcomes:

    >>> rng = np.random.default_rng(1234)
    >>> outcome = sample(StateVector.zero(2), rng)
    >>> outcome.bitstring
    '00'
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..constants import AMPLITUDE_DTYPE
from ..core.state_vector import StateVector
from ..errors import IndexOutOfRange, NormalizationError, QubitOverlapError
from ..utils.math_utils import to_bitstring


@dataclass(frozen=True)
class MeasurementOutcome:
    """
    One sampled basis state.

    Attributes
    ----------
    basis_index : int
        Index of the drawn basis state.
    bitstring : str
        ``basis_index`` as n bits, qubit 0 leftmost.
    probability : float
        |a_i|² of the drawn state in the distribution it was drawn from.
    """
    basis_index: int
    bitstring: str
    probability: float


def sample(state: StateVector, rng: np.random.Generator) -> MeasurementOutcome:
    """Draw one basis index with probability |aᵢ|². Does not mutate ``state``."""
    probs = _distribution(state, rng)
    index = int(rng.choice(state.dimension, p=probs))
    return _outcome(state, index)


def sample_many(state: StateVector, rng: np.random.Generator, shots: int) -> List[MeasurementOutcome]:
    """
    ``shots`` independent draws from the same (unmeasured) distribution.

    Valid because sampling is read-only: the distribution only changes on an
    explicit collapse.
    """
    shots = operator.index(shots)
    if shots < 0:
        raise ValueError(f"shots must be >= 0, got {shots}")
    probs = _distribution(state, rng)
    indices = rng.choice(state.dimension, size=shots, p=probs)
    return [_outcome(state, int(i)) for i in indices]


def collapse(state: StateVector, basis_index: int) -> StateVector:
    """
    Destructive measurement result: only ``basis_index`` survives.

    Raises
    ------
    IndexOutOfRange
        Index outside [0, 2^n).
    NormalizationError
        The amplitude at ``basis_index`` is exactly zero, so the outcome was
        impossible and there is nothing to renormalize.
    """
    amplitude = state.amplitude(basis_index)
    magnitude = abs(amplitude)
    if magnitude == 0.0:
        raise NormalizationError(
            f"Cannot collapse onto basis state {state.bitstring(basis_index)}: "
            f"its amplitude is zero"
        )
    amps = np.zeros(state.dimension, dtype=AMPLITUDE_DTYPE)
    amps[basis_index] = amplitude / magnitude
    return StateVector(amps)


def measure(state: StateVector, rng: np.random.Generator) -> Tuple[MeasurementOutcome, StateVector]:
    """Sample once, then collapse onto the sampled state."""
    outcome = sample(state, rng)
    return outcome, collapse(state, outcome.basis_index)


def counts(outcomes: Iterable[MeasurementOutcome]) -> Dict[str, int]:
    """Histogram of outcomes keyed by bitstring, in ascending bitstring order."""
    tally: Dict[str, int] = {}
    for outcome in outcomes:
        tally[outcome.bitstring] = tally.get(outcome.bitstring, 0) + 1
    return dict(sorted(tally.items()))


def marginal_probabilities(state: StateVector, qubits: Sequence[int]) -> Dict[str, float]:
    """
    Probability distribution of a subset of qubits, the others summed out.

    Keys are bitstrings over ``qubits`` in the order given, so
    ``marginal_probabilities(ψ, [1, 0])["10"]`` is P(q1 = 1, q0 = 0).

    >>> bell = StateVector([1 / np.sqrt(2), 0, 0, 1 / np.sqrt(2)])
    >>> {k: round(v, 12) for k, v in marginal_probabilities(bell, [0]).items()}
    {'0': 0.5, '1': 0.5}
    """
    n = state.num_qubits
    qubits = [operator.index(q) for q in qubits]
    if not qubits:
        raise ValueError("marginal_probabilities needs at least one qubit")
    for q in qubits:
        if not 0 <= q < n:
            raise IndexOutOfRange(f"Qubit index {q} is out of bounds for {n} qubits")
    if len(set(qubits)) != len(qubits):
        raise QubitOverlapError(f"Repeated qubit in {qubits}")

    probs = state.probabilities().reshape([2] * n)
    others = tuple(q for q in range(n) if q not in qubits)
    reduced = probs.sum(axis=others) if others else probs
    # Axes of `reduced` are the kept qubits in ascending order
    kept = sorted(qubits)
    reduced = np.transpose(reduced, [kept.index(q) for q in qubits]).reshape(-1)
    k = len(qubits)
    return {to_bitstring(i, k): float(p) for i, p in enumerate(reduced)}


# =============================================================================
# INTERNALS
# =============================================================================

def _distribution(state: StateVector, rng) -> np.ndarray:
    if not isinstance(rng, np.random.Generator):
        raise TypeError(
            f"rng must be a numpy.random.Generator (e.g. np.random.default_rng(seed)), "
            f"got {type(rng).__name__}"
        )
    probs = np.array(state.probabilities(), dtype=float)
    # State is normalized within ε; rescale so numpy's sum-to-one check holds exactly
    return probs / probs.sum()


def _outcome(state: StateVector, index: int) -> MeasurementOutcome:
    return MeasurementOutcome(
        basis_index=index,
        bitstring=state.bitstring(index),
        probability=state.probability(index),
    )
