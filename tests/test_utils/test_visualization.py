"""
Tests for the text and plot helpers in qvector.utils.visualization.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from qvector import Circuit, Simulator, StateVector
from qvector.utils.visualization import (
    format_amplitude,
    format_circuit,
    format_dirac,
    plot_counts,
    plot_probabilities,
)


SQ = 1 / np.sqrt(2)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestFormatAmplitude:

    @pytest.mark.parametrize("value,text", [
        (1.0, "1"),
        (-0.5, "-0.5"),
        (1j, "1i"),
        (-1j, "-1i"),
        (0.5 + 0.5j, "(0.5+0.5i)"),
        (0.5 - 0.5j, "(0.5-0.5i)"),
    ])
    def test_values(self, value, text):
        assert format_amplitude(complex(value)) == text


class TestFormatDirac:

    def test_basis_state(self):
        assert format_dirac(StateVector.from_bitstring("01")) == "|ψ⟩ = |01⟩"

    def test_bell(self):
        bell = StateVector([SQ, 0, 0, SQ])
        assert format_dirac(bell) == "|ψ⟩ = 0.707107|00⟩ + 0.707107|11⟩"

    def test_negative_terms(self):
        minus = StateVector([SQ, -SQ])
        assert format_dirac(minus, label="-") == "|-⟩ = 0.707107|0⟩ - 0.707107|1⟩"

    def test_negative_unit(self):
        assert format_dirac(StateVector([0, -1])) == "|ψ⟩ = -|1⟩"

    def test_does_not_mutate(self):
        bell = StateVector([SQ, 0, 0, SQ])
        before = bell.amplitudes.copy()
        format_dirac(bell)
        assert np.array_equal(bell.amplitudes, before)


class TestFormatCircuit:

    def test_bell_listing(self):
        text = format_circuit(Circuit(2).h(0).cnot(0, 1))
        assert text == (
            "Quantum Circuit (2 qubits, 2 operations):\n"
            "  1. H on qubit 0 (Step: 0)\n"
            "  2. CX on qubit 1 controlled by 0 (Step: 1)"
        )

    def test_parallel_steps(self):
        text = format_circuit(Circuit(3).h(0).x(2))
        assert "(Step: 0)" in text.splitlines()[2]

    def test_empty(self):
        assert format_circuit(Circuit(1)) == "Quantum Circuit (1 qubits, 0 operations):"


class TestPlots:

    def test_plot_counts_dict(self):
        ax = plot_counts({"00": 480, "11": 520})
        assert len(ax.patches) == 2
        assert ax.get_ylabel() == "Counts"
        assert ax.get_title() == "1000 shots"

    def test_plot_counts_result_normalized(self):
        qc = Circuit(2).h(0).cnot(0, 1)
        result = Simulator().execute(qc, shots=200, rng=np.random.default_rng(0))
        ax = plot_counts(result, normalize=True)
        heights = [p.get_height() for p in ax.patches]
        assert abs(sum(heights) - 1.0) < 1e-12
        assert ax.get_ylabel() == "Frequency"

    def test_plot_counts_existing_axes(self):
        fig, ax = plt.subplots()
        assert plot_counts({"0": 1}, ax=ax) is ax

    def test_plot_probabilities_hides_zeros(self):
        ax = plot_probabilities(StateVector([SQ, 0, 0, SQ]))
        assert len(ax.patches) == 2

    def test_plot_probabilities_all(self):
        ax = plot_probabilities(StateVector([SQ, 0, 0, SQ]), hide_zero=False)
        assert len(ax.patches) == 4
        assert ax.get_title() == "2-qubit state"
