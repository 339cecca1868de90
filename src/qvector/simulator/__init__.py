# Simulator Layer (Level 2)
#
# Executes circuits and measures the results.
#
#   - simulator: Simulator (run / execute), SimulationResult, SimulationStage
#   - measurement: read-only sampling, explicit collapse, counts, marginals
#
# Randomness is always passed in as a numpy.random.Generator; there is no
# module-level random state anywhere in this layer.

from .measurement import (
    MeasurementOutcome,
    sample,
    sample_many,
    collapse,
    measure,
    counts,
    marginal_probabilities,
)
from .simulator import Simulator, SimulationResult, SimulationStage

__all__ = [
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
