"""
Configuration Dataclasses for the Simulator
============================================

Simulator behaviour is configured through a single dataclass instead of a
growing list of keyword arguments:

    sim = Simulator(SimulatorConfig(verify_unitary=True, verbose=True))

Attributes are validated in ``__post_init__`` so that a bad configuration
fails when it is built, not halfway through a run.
"""

from dataclasses import dataclass

from .constants import DEFAULT_TOLERANCE, MAX_RECOMMENDED_QUBITS


SUPPORTED_BACKENDS = ("statevector",)


@dataclass
class SimulatorConfig:
    """
    Parameters controlling a Simulator.

    Attributes
    ----------
    name : str
        Label used in verbose output and result summaries.

    backend : str
        Simulation backend. Only "statevector" exists.

    tolerance : float
        ε used for the final normalization check and for unitarity
        verification. Must be positive.

    verify_unitary : bool
        If True, every custom gate in a circuit is checked for UU† ≈ I
        before evolution starts. Catalogue gates are exact and skipped.
        Off by default because the check costs O(8^k) per gate.

    memory_warning_qubits : int
        Circuits wider than this emit a QVectorWarning before allocating
        the 2^n amplitude buffer.

    verbose : bool
        Print progress lines while running.

    Example
    -------
    >>> config = SimulatorConfig(name="bell", verify_unitary=True)
    >>> config.backend
    'statevector'
    """
    name: str = "Simulator"
    backend: str = "statevector"
    tolerance: float = DEFAULT_TOLERANCE
    verify_unitary: bool = False
    memory_warning_qubits: int = MAX_RECOMMENDED_QUBITS
    verbose: bool = False

    def __post_init__(self):
        backend = self.backend.lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown backend: {self.backend}. Available: {list(SUPPORTED_BACKENDS)}"
            )
        self.backend = backend
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.memory_warning_qubits < 1:
            raise ValueError(
                f"memory_warning_qubits must be >= 1, got {self.memory_warning_qubits}"
            )
