# Utility Functions
#
# Common utilities used across the simulator.
#
# Submodules:
#   - math_utils: Kronecker products, unitarity checks, bit helpers
#   - visualization: Dirac-notation text, circuit summaries, count histograms
#
# visualization imports matplotlib and is not imported here; use
#   from qvector.utils.visualization import plot_counts

from .math_utils import (
    kron_n,
    num_qubits_for_dimension,
    to_bitstring,
    is_unitary,
    round_if_close,
)

__all__ = [
    "kron_n",
    "num_qubits_for_dimension",
    "to_bitstring",
    "is_unitary",
    "round_if_close",
]
