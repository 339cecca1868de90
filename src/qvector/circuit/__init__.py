# Circuit Layer (Level 1)
#
# Static, straight-line circuit descriptions.
#
#   - Operation: gate + ordered targets + controls (immutable)
#   - Circuit: fixed-width, append-only sequence of validated operations
#
# Circuits are consumed read-only by the simulator and by presentation
# helpers (qvector.utils.visualization).

from .circuit import Circuit, Operation

__all__ = ["Circuit", "Operation"]
