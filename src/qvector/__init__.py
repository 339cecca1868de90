# qvector: State-Vector Quantum Circuit Simulator
#
# Classical simulation of pure-state quantum circuits: amplitude vectors,
# k-qubit gate contraction, read-only sampling and explicit collapse.
#
# Architecture:
#   Layer 0 (Core): StateVector, gate catalogue, contraction kernel
#   Layer 1 (Circuit): Straight-line, validated operation sequences
#   Layer 2 (Simulator): Evolution, sampling, collapse, shot statistics
#
# Presentation helpers (Dirac text, count histograms) live in
# qvector.utils.visualization and are not imported here.

__version__ = "0.1.0"

from .constants import DEFAULT_TOLERANCE
from .configurations import SimulatorConfig
from .errors import (
    QVectorError,
    NormalizationError,
    IndexOutOfRange,
    DimensionMismatch,
    WidthMismatch,
    NonUnitaryGateError,
    QubitOverlapError,
    QVectorWarning,
)
from .core import (
    StateVector,
    Qubit,
    tensor,
    Gate,
    GateKind,
    X, Y, Z, H, S, T,
    CATALOGUE,
    CONTROLLED_GATES,
    apply_gate,
)
from .circuit import Circuit, Operation
from .simulator import (
    Simulator,
    SimulationResult,
    SimulationStage,
    MeasurementOutcome,
    sample,
    sample_many,
    collapse,
    measure,
    counts,
    marginal_probabilities,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "SimulatorConfig",
    # Errors
    "QVectorError",
    "NormalizationError",
    "IndexOutOfRange",
    "DimensionMismatch",
    "WidthMismatch",
    "NonUnitaryGateError",
    "QubitOverlapError",
    "QVectorWarning",
    # Core
    "StateVector",
    "Qubit",
    "tensor",
    "Gate",
    "GateKind",
    "X", "Y", "Z", "H", "S", "T",
    "CATALOGUE",
    "CONTROLLED_GATES",
    "apply_gate",
    # Circuit
    "Circuit",
    "Operation",
    # Simulator
    "Simulator",
    "SimulationResult",
    "SimulationStage",
    "MeasurementOutcome",
    "sample",
    "sample_many",
    "collapse",
    "measure",
    "counts",
    "marginal_probabilities",
]
