# Tests for qvector
#
# Test organization mirrors source structure:
#   - test_core/: StateVector, gate catalogue, contraction kernel
#   - test_circuit/: Circuit building, validation, layers
#   - test_simulator/: Evolution, sampling, collapse, shot statistics
#   - test_utils/: Math helpers, Dirac text, histograms
#
# Running tests:
#   pytest tests/
#   pytest tests/test_core/ -v
#   pytest tests/ -k "measurement"
