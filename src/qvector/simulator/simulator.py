"""
State-Vector Simulator
======================

Executes a Circuit against an initial StateVector.

LIFECYCLE
---------

    INITIALIZED ──run──▶ EVOLVED ──measure──▶ MEASURED
     (initial state)     (final state)        (outcome + collapsed state)

1. **Initialize**: take the initial state (default |0…0⟩), check it has
   2^width amplitudes, and copy it into a private evolution buffer. The
   simulator owns this buffer exclusively for the whole run.

2. **Evolve**: apply every operation in circuit order with the in-place
   contraction kernel (qvector.core.apply). Intermediate states are not
   kept. A ``callback(step, operation, state)`` can observe them as
   explicit checkpoints.

3. **Finalize**: wrap the buffer in a new StateVector. Catalogue gates are
   exactly unitary, so normalization can only break through an unverified
   non-unitary custom gate. That raises NormalizationError here instead of
   returning a state that violates the invariant.

4. **Measure** (optional): sample read-only with a caller-supplied
   ``numpy.random.Generator``, and/or collapse explicitly.

Example
-------
>>> qc = Circuit(2).h(0).cnot(0, 1)
>>> sim = Simulator()
>>> bell = sim.run(qc)
>>> [round(p, 12) for p in bell.probabilities()]
[0.5, 0.0, 0.0, 0.5]
>>> result = sim.execute(qc, shots=1000, rng=np.random.default_rng(7))
>>> sorted(result.counts)
['00', '11']
"""

from __future__ import annotations

import time
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ..circuit.circuit import Circuit, Operation
from ..configurations import SimulatorConfig
from ..core.apply import apply_gate
from ..core.state_vector import StateVector
from ..errors import NormalizationError, QVectorWarning, WidthMismatch
from . import measurement
from .measurement import MeasurementOutcome


StepCallback = Callable[[int, Operation, StateVector], None]


class SimulationStage(Enum):
    INITIALIZED = "initialized"
    EVOLVED = "evolved"
    MEASURED = "measured"


@dataclass
class SimulationResult:
    """
    Container for a shot-based simulation.

    Attributes
    ----------
    shots : int
        Number of samples drawn.
    final_state : StateVector
        State after evolution, before any collapse.
    counts : Dict[str, int]
        Outcome histogram keyed by bitstring (qubit 0 leftmost), ascending.
    outcomes : List[MeasurementOutcome]
        Individual samples in draw order.
    """
    shots: int
    final_state: StateVector
    counts: Dict[str, int]
    outcomes: List[MeasurementOutcome] = field(default_factory=list, repr=False)

    def frequencies(self) -> Dict[str, float]:
        """counts / shots (empty if no shots were taken)."""
        if self.shots == 0:
            return {}
        return {k: v / self.shots for k, v in self.counts.items()}

    def most_frequent(self) -> str:
        if not self.counts:
            raise ValueError("No outcomes recorded")
        return max(self.counts, key=lambda k: (self.counts[k], k))


class Simulator:
    """
    Deterministic unitary evolution plus probabilistic measurement.

    Parameters
    ----------
    config : SimulatorConfig, optional
        Defaults to ``SimulatorConfig()``.

    Attributes
    ----------
    stage : SimulationStage
        Last lifecycle stage reached. INITIALIZED until a run completes.
    """

    def __init__(self, config: Optional[SimulatorConfig] = None):
        self.config = config if config is not None else SimulatorConfig()
        self.stage = SimulationStage.INITIALIZED

    @property
    def name(self) -> str:
        return self.config.name

    def __repr__(self) -> str:
        return f"Simulator(name={self.name!r}, backend={self.config.backend!r})"

    # =========================================================================
    # EVOLUTION
    # =========================================================================

    def run(
        self,
        circuit: Circuit,
        initial_state: Optional[StateVector] = None,
        callback: Optional[StepCallback] = None,
    ) -> StateVector:
        """
        Apply every operation of ``circuit`` in order.

        Parameters
        ----------
        circuit : Circuit
            Circuit to execute; read only.
        initial_state : StateVector, optional
            Starting state, |0…0⟩ if omitted. Never modified.
        callback : callable, optional
            ``callback(step, operation, state)`` after each operation, with
            a snapshot StateVector of the state at that point.

        Returns
        -------
        StateVector
            Final state.

        Raises
        ------
        WidthMismatch
            ``initial_state`` does not have 2^circuit.num_qubits amplitudes.
        NonUnitaryGateError
            ``config.verify_unitary`` is set and a custom gate fails.
        NormalizationError
            Evolution broke normalization (non-unitary custom gate).
        """
        cfg = self.config
        n = circuit.num_qubits

        if n > cfg.memory_warning_qubits:
            warnings.warn(
                f"{n}-qubit circuit needs a {2 ** n * 16 / 2 ** 20:.0f} MiB state vector "
                f"(warning threshold: {cfg.memory_warning_qubits} qubits).",
                QVectorWarning,
            )

        if initial_state is None:
            initial_state = StateVector.zero(n)
        elif initial_state.dimension != 1 << n:
            raise WidthMismatch(
                f"Initial state has dimension {initial_state.dimension} "
                f"({initial_state.num_qubits} qubits) but the circuit has {n} qubits "
                f"(dimension {1 << n})"
            )

        if cfg.verify_unitary:
            for gate in circuit.custom_gates():
                gate.verify_unitary(cfg.tolerance)

        # =====================================================================
        # INITIALIZED: private, writable copy of the amplitudes
        # =====================================================================
        buffer = np.array(initial_state.amplitudes, copy=True)
        self.stage = SimulationStage.INITIALIZED

        if cfg.verbose:
            print(f"[{cfg.name}] Running {n}-qubit circuit with {len(circuit)} operations")
        t_start = time.perf_counter()

        for step, op in enumerate(circuit):
            apply_gate(buffer, op.gate.matrix, op.targets, op.controls)
            if callback is not None:
                callback(step, op, self._finalize(buffer, step))
            if cfg.verbose:
                print(f"  [{step + 1}/{len(circuit)}] {op}")

        final = self._finalize(buffer, len(circuit) - 1)
        self.stage = SimulationStage.EVOLVED

        if cfg.verbose:
            print(f"  Done in {(time.perf_counter() - t_start) * 1e3:.2f} ms")
        return final

    # =========================================================================
    # MEASUREMENT
    # =========================================================================

    def sample(self, state: StateVector, rng: np.random.Generator) -> MeasurementOutcome:
        """One read-only draw; see qvector.simulator.measurement.sample."""
        return measurement.sample(state, rng)

    def sample_many(
        self, state: StateVector, rng: np.random.Generator, shots: int
    ) -> List[MeasurementOutcome]:
        """``shots`` read-only draws from the same distribution."""
        return measurement.sample_many(state, rng, shots)

    def collapse(self, state: StateVector, basis_index: int) -> StateVector:
        """Destructive collapse onto ``basis_index``."""
        collapsed = measurement.collapse(state, basis_index)
        self.stage = SimulationStage.MEASURED
        return collapsed

    def measure(
        self, state: StateVector, rng: np.random.Generator
    ) -> Tuple[MeasurementOutcome, StateVector]:
        """Sample once and collapse; the terminal transition."""
        outcome = measurement.sample(state, rng)
        return outcome, self.collapse(state, outcome.basis_index)

    def execute(
        self,
        circuit: Circuit,
        shots: int,
        rng: np.random.Generator,
        initial_state: Optional[StateVector] = None,
    ) -> SimulationResult:
        """
        Evolve once, then take ``shots`` samples of the final state.

        Returns
        -------
        SimulationResult
            Final state, per-shot outcomes and bitstring counts.
        """
        final_state = self.run(circuit, initial_state)
        outcomes = measurement.sample_many(final_state, rng, shots)
        tally = measurement.counts(outcomes)
        if self.config.verbose:
            print(f"[{self.name}] {shots} shots: {tally}")
        return SimulationResult(
            shots=shots,
            final_state=final_state,
            counts=tally,
            outcomes=outcomes,
        )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _finalize(self, buffer: np.ndarray, step: int) -> StateVector:
        try:
            return StateVector(buffer, tolerance=self.config.tolerance)
        except NormalizationError as exc:
            raise NormalizationError(
                f"State lost normalization after operation {step + 1}; a custom gate "
                f"is probably not unitary (enable SimulatorConfig(verify_unitary=True) "
                f"to catch this at run start). {exc}"
            ) from exc
