"""
Test Suite: State Vector Representation
=======================================

Verifies construction, validation and read-only queries of StateVector and
Qubit.

Test Categories:
1. Basis constructors (zero, one, basis, from_bitstring)
2. Validation: normalization and dimension
3. Read-only guarantees (no aliasing, immutable arrays)
4. Queries: probability, items, inner product, fidelity
5. Tensor product, cross-checked against QuTiP
6. Qubit specialisation
"""

import numpy as np
import pytest
from qutip import basis, tensor as qt_tensor

from qvector import (
    DimensionMismatch,
    IndexOutOfRange,
    NormalizationError,
    Qubit,
    StateVector,
    tensor,
)


SQ = 1 / np.sqrt(2)


# =============================================================================
# CONSTRUCTORS
# =============================================================================

class TestBasisConstructors:
    """Known basis states are normalized by construction."""

    def test_zero_single_qubit(self):
        psi = StateVector.zero()
        assert psi.num_qubits == 1
        assert np.array_equal(psi.amplitudes, [1, 0])

    def test_zero_multi_qubit(self):
        psi = StateVector.zero(3)
        assert psi.dimension == 8
        assert psi.probability(0) == 1.0
        assert psi.norm_squared() == 1.0

    def test_one(self):
        psi = StateVector.one()
        assert np.array_equal(psi.amplitudes, [0, 1])

    def test_basis_index(self):
        psi = StateVector.basis(2, 2)
        assert psi.probability(2) == 1.0
        assert psi.bitstring(2) == "10"

    def test_basis_index_out_of_range(self):
        with pytest.raises(IndexOutOfRange):
            StateVector.basis(4, 2)

    def test_basis_needs_a_qubit(self):
        with pytest.raises(ValueError):
            StateVector.basis(0, 0)

    def test_from_bitstring_qubit_zero_is_leftmost(self):
        # "10": qubit 0 = 1, qubit 1 = 0 -> index 2
        psi = StateVector.from_bitstring("10")
        assert psi.probability(2) == 1.0

    @pytest.mark.parametrize("bits", ["", "012", "ab"])
    def test_from_bitstring_rejects_non_binary(self, bits):
        with pytest.raises(ValueError):
            StateVector.from_bitstring(bits)


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:
    """Normalization and dimension are checked on construction."""

    def test_unnormalized_raises(self):
        with pytest.raises(NormalizationError):
            StateVector([0.5, 0.5])

    def test_normalization_error_is_value_error(self):
        with pytest.raises(ValueError):
            StateVector([1.0, 1.0])

    def test_within_tolerance_accepted(self):
        psi = StateVector([1.0 + 1e-11, 0.0])
        assert psi.num_qubits == 1

    def test_custom_tolerance(self):
        with pytest.raises(NormalizationError):
            StateVector([1.001, 0.0])
        psi = StateVector([1.001, 0.0], tolerance=1e-2)
        assert psi.dimension == 2

    @pytest.mark.parametrize("amps", [[np.nan, 1.0], [np.inf, 0.0], [complex(np.nan, 0.0), 0.0]])
    def test_non_finite_amplitudes_raise(self, amps):
        with pytest.raises(NormalizationError):
            StateVector(amps)

    @pytest.mark.parametrize("amps", [[1.0], [1.0, 0.0, 0.0]])
    def test_non_power_of_two_raises(self, amps):
        with pytest.raises(DimensionMismatch):
            StateVector(amps)

    def test_complex_amplitudes(self):
        psi = StateVector([0.5 + 0.5j, 0.5 - 0.5j])
        assert np.isclose(psi.probability(0), 0.5)
        assert np.isclose(psi.probability(1), 0.5)


# =============================================================================
# READ-ONLY GUARANTEES
# =============================================================================

class TestImmutability:
    """A StateVector never changes once built."""

    def test_input_is_copied(self):
        source = np.array([1.0, 0.0], dtype=complex)
        psi = StateVector(source)
        source[0] = 0.0
        assert psi.amplitude(0) == 1.0

    def test_amplitudes_are_read_only(self):
        psi = StateVector.zero(2)
        with pytest.raises(ValueError):
            psi.amplitudes[0] = 0.0

    def test_probabilities_are_read_only(self):
        psi = StateVector.zero(2)
        probs = psi.probabilities()
        with pytest.raises(ValueError):
            probs[0] = 0.0

    def test_probability_does_not_mutate(self):
        psi = StateVector([SQ, SQ])
        before = psi.amplitudes.copy()
        psi.probability(0)
        psi.probabilities()
        assert np.array_equal(psi.amplitudes, before)


# =============================================================================
# QUERIES
# =============================================================================

class TestQueries:

    def test_probability_is_squared_magnitude(self):
        psi = StateVector([0.6, 0.8j])
        assert np.isclose(psi.probability(0), 0.36)
        assert np.isclose(psi.probability(1), 0.64)

    def test_probability_bad_index(self):
        psi = StateVector.zero(2)
        with pytest.raises(IndexOutOfRange):
            psi.probability(4)
        with pytest.raises(IndexError):
            psi.probability(-1)

    def test_items_ascending(self):
        psi = StateVector([SQ, 0, 0, SQ])
        items = list(psi.items())
        assert [i for i, _ in items] == [0, 1, 2, 3]
        assert np.isclose(items[3][1], SQ)

    def test_items_restartable(self):
        psi = StateVector([SQ, SQ])
        assert list(psi.items()) == list(psi.items())

    def test_inner_and_fidelity(self):
        zero = StateVector.zero()
        plus = StateVector([SQ, SQ])
        assert np.isclose(zero.inner(plus), SQ)
        assert np.isclose(zero.fidelity(plus), 0.5)

    def test_fidelity_ignores_global_phase(self):
        a = StateVector([SQ, SQ])
        b = StateVector([1j * SQ, 1j * SQ])
        assert np.isclose(a.fidelity(b), 1.0)
        assert not a.allclose(b)

    def test_inner_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            StateVector.zero(1).inner(StateVector.zero(2))

    def test_equality(self):
        assert StateVector.zero(2) == StateVector.from_bitstring("00")
        assert StateVector.zero(2) != StateVector.from_bitstring("01")

    def test_len(self):
        assert len(StateVector.zero(3)) == 8


# =============================================================================
# TENSOR PRODUCT
# =============================================================================

class TestTensor:
    """Kronecker combination of independent systems."""

    def test_basis_tensor_matches_direct(self):
        joint = StateVector.one().tensor(StateVector.zero())
        assert joint == StateVector.from_bitstring("10")

    def test_superposition_tensor_matches_direct(self):
        plus = StateVector([SQ, SQ])
        a = Qubit(0.6, 0.8j)
        joint = plus.tensor(a)
        direct = StateVector([SQ * 0.6, SQ * 0.8j, SQ * 0.6, SQ * 0.8j])
        assert joint.allclose(direct)

    def test_tensor_matches_qutip(self):
        a = Qubit(0.6, 0.8)
        b = Qubit(SQ, -1j * SQ)
        expected = qt_tensor(a.to_qobj(), b.to_qobj()).full().reshape(-1)
        assert np.allclose(a.tensor(b).amplitudes, expected)

    def test_tensor_associative(self):
        a, b, c = Qubit(0.6, 0.8), StateVector([SQ, SQ]), StateVector.one()
        left = a.tensor(b).tensor(c)
        right = a.tensor(b.tensor(c))
        assert left.allclose(right)
        assert tensor([a, b, c]).allclose(left)

    def test_tensor_dimension(self):
        assert StateVector.zero(2).tensor(StateVector.zero(3)).dimension == 32

    def test_tensor_needs_states(self):
        with pytest.raises(ValueError):
            tensor([])


# =============================================================================
# QUTIP INTEROP
# =============================================================================

class TestQobjInterop:

    def test_to_qobj_dims(self):
        ket = StateVector.zero(2).to_qobj()
        assert ket.isket
        assert ket.dims == [[2, 2], [1, 1]]

    def test_from_qobj(self):
        ket = qt_tensor(basis(2, 1), basis(2, 0))
        psi = StateVector.from_qobj(ket)
        assert psi == StateVector.from_bitstring("10")

    def test_from_qobj_rejects_bra(self):
        with pytest.raises(TypeError):
            StateVector.from_qobj(basis(2, 0).dag())


# =============================================================================
# QUBIT
# =============================================================================

class TestQubit:

    def test_zero_state(self):
        q = Qubit.zero()
        assert q.alpha == 1.0 and q.beta == 0.0
        assert q.probability_zero() == 1.0
        assert q.probability_one() == 0.0
        assert isinstance(q, Qubit)

    def test_one_state(self):
        q = Qubit.one()
        assert q.probability_zero() == 0.0
        assert q.probability_one() == 1.0

    def test_custom_state(self):
        q = Qubit(SQ, SQ)
        assert abs(q.probability_zero() - 0.5) < 1e-10
        assert abs(q.probability_one() - 0.5) < 1e-10

    def test_complex_state(self):
        q = Qubit(0.5 + 0.5j, 0.5 - 0.5j)
        assert abs(q.probability_zero() - 0.5) < 1e-10

    def test_invalid_state(self):
        with pytest.raises(NormalizationError):
            Qubit(0.5, 0.5)

    def test_is_basis_state(self):
        assert Qubit.zero().is_basis_state()
        assert Qubit(0.0, 1j).is_basis_state()
        assert not Qubit(SQ, SQ).is_basis_state()

    def test_basis_constructors_return_qubits(self):
        assert isinstance(Qubit.basis(1), Qubit)
        assert isinstance(Qubit.from_bitstring("0"), Qubit)
        assert Qubit.basis(1).probability_one() == 1.0

    def test_basis_rejects_wider_registers(self):
        with pytest.raises(ValueError):
            Qubit.basis(0, 2)
        with pytest.raises(IndexOutOfRange):
            Qubit.basis(2)

    def test_qubit_is_a_state_vector(self):
        q = Qubit(SQ, SQ)
        assert isinstance(q, StateVector)
        assert q.num_qubits == 1
