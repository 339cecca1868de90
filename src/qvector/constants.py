"""
Numerical Constants for State-Vector Simulation
================================================

Fixed constants shared by every layer of the simulator.

**DEFAULT_TOLERANCE (ε)**
    The single place where "approximately correct" is accepted. A state is
    normalized when |Σ|aᵢ|² - 1| ≤ ε, a gate is unitary when every entry of
    UU† - I is within ε of zero. Floating-point evolution through a few
    thousand gates stays far inside 1e-9 for complex128 amplitudes.

**SQRT2_INV**
    1/√2, the Hadamard normalization.

**T_PHASE**
    e^{iπ/4}, the non-trivial entry of the T gate.

**MAX_RECOMMENDED_QUBITS**
    Above this width a complex128 state vector needs 2^n × 16 bytes
    (256 MiB at n = 24). Wider circuits still run, with a warning.
"""

import numpy as np

DEFAULT_TOLERANCE = 1e-9

SQRT2_INV = 1.0 / np.sqrt(2.0)

T_PHASE = np.exp(1j * np.pi / 4)

MAX_RECOMMENDED_QUBITS = 24

AMPLITUDE_DTYPE = np.complex128
