"""
Error Taxonomy
==============

Every failure in the simulator is local and synchronous: it is raised at the
point of misuse (state construction, circuit append, run) and never retried.

Each error also derives from the matching builtin (ValueError, IndexError) so
callers that only know the builtins still catch them.
"""


class QVectorError(Exception):
    """Base class for all simulator errors."""


class NormalizationError(QVectorError, ValueError):
    """Squared magnitudes of a state's amplitudes do not sum to 1 within ε."""


class IndexOutOfRange(QVectorError, IndexError):
    """A qubit or basis index lies outside the valid range."""


class DimensionMismatch(QVectorError, ValueError):
    """A matrix or vector has the wrong dimension for its qubit count."""


class WidthMismatch(DimensionMismatch):
    """
    Two objects disagree on the number of qubits.

    A width mismatch is a dimension mismatch of whole registers, so it is
    also caught by ``except DimensionMismatch``.
    """


class NonUnitaryGateError(QVectorError, ValueError):
    """Explicitly requested unitarity verification failed (UU† ≠ I)."""


class QubitOverlapError(QVectorError, ValueError):
    """Targets and controls of an operation are not disjoint, or repeat."""


class QVectorWarning(UserWarning):
    """Non-fatal diagnostic, e.g. a state vector too wide for comfort."""
