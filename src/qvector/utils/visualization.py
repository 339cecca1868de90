"""
Presentation Helpers
====================

Text and plot output built only on the public presentation interface:

- ``StateVector.items()``: (basis_index, amplitude) in ascending order
- iteration over a ``Circuit``: operations in sequence order
- ``SimulationResult.counts``: bitstring histogram

Key Functions
-------------
- format_dirac(): |ψ⟩ = a|00⟩ + b|11⟩ text
- format_circuit(): numbered operation listing with ASAP steps
- plot_counts(): bar chart of measurement counts
- plot_probabilities(): bar chart of |aᵢ|² for a state
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

import matplotlib.pyplot as plt

from ..circuit.circuit import Circuit
from ..core.state_vector import StateVector
from ..simulator.simulator import SimulationResult
from .math_utils import round_if_close, to_bitstring


def format_amplitude(amplitude: complex, tol: float = 1e-10) -> str:
    """
    Compact text for one amplitude.

    >>> format_amplitude(0.5 + 0.5j)
    '(0.5+0.5i)'
    >>> format_amplitude(-1j)
    '-1i'
    """
    re = round_if_close(amplitude.real, tol)
    im = round_if_close(amplitude.imag, tol)
    if im == 0.0:
        return f"{re:g}"
    if re == 0.0:
        return f"{im:g}i"
    return f"({re:g}{im:+g}i)"


def format_dirac(state: StateVector, tol: float = 1e-10, label: str = "ψ") -> str:
    """
    Dirac-notation text of a state, dropping zero amplitudes.

    >>> format_dirac(StateVector.from_bitstring("01"))
    '|ψ⟩ = |01⟩'
    """
    n = state.num_qubits
    terms = []
    for index, amplitude in state.items():
        if abs(amplitude) <= tol:
            continue
        coeff = format_amplitude(amplitude, tol)
        ket = f"|{to_bitstring(index, n)}⟩"
        if coeff == "1":
            coeff = ""
        elif coeff == "-1":
            coeff = "-"
        terms.append(coeff + ket)

    text = " + ".join(terms).replace("+ -", "- ")
    return f"|{label}⟩ = {text}"


def format_circuit(circuit: Circuit) -> str:
    """
    Numbered listing of a circuit's operations.

    >>> print(format_circuit(Circuit(2).h(0).cnot(0, 1)))
    Quantum Circuit (2 qubits, 2 operations):
      1. H on qubit 0 (Step: 0)
      2. CX on qubit 1 controlled by 0 (Step: 1)
    """
    lines = [
        f"Quantum Circuit ({circuit.num_qubits} qubits, {circuit.num_operations} operations):"
    ]
    for i, (op, step) in enumerate(zip(circuit, circuit.layers()), start=1):
        lines.append(f"  {i}. {op} (Step: {step})")
    return "\n".join(lines)


def plot_counts(
    counts: Union[SimulationResult, Dict[str, int]],
    ax: Optional[plt.Axes] = None,
    normalize: bool = False,
    title: Optional[str] = None,
    figsize: Tuple[float, float] = (8, 5),
    color: str = "tab:blue",
) -> plt.Axes:
    """
    Bar chart of measurement outcomes.

    Parameters
    ----------
    counts : SimulationResult or dict
        Result of ``Simulator.execute`` or a {bitstring: count} dict.
    ax : plt.Axes, optional
        Axes to plot on. If None, creates new figure.
    normalize : bool
        Plot frequencies instead of raw counts.
    title : str, optional
        Plot title. Auto-generated if None.
    figsize : tuple
        Figure size (width, height) in inches
    color : str
        Bar colour

    Returns
    -------
    plt.Axes
        The axes with the plot
    """
    if isinstance(counts, SimulationResult):
        tally = counts.counts
    else:
        tally = dict(counts)
    total = sum(tally.values())

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    labels = sorted(tally)
    heights = [tally[k] for k in labels]
    if normalize and total > 0:
        heights = [h / total for h in heights]

    ax.bar(labels, heights, color=color, edgecolor="black", linewidth=0.5)
    ax.set_xlabel("Outcome", fontsize=12)
    ax.set_ylabel("Frequency" if normalize else "Counts", fontsize=12)
    if title is None:
        title = f"{total} shots"
    ax.set_title(title, fontsize=14)
    ax.tick_params(axis="x", rotation=90 if len(labels) > 16 else 0)
    return ax


def plot_probabilities(
    state: StateVector,
    ax: Optional[plt.Axes] = None,
    hide_zero: bool = True,
    tol: float = 1e-10,
    title: Optional[str] = None,
    figsize: Tuple[float, float] = (8, 5),
    color: str = "tab:purple",
) -> plt.Axes:
    """
    Bar chart of |aᵢ|² for every basis state of ``state``.

    With ``hide_zero`` the basis states with probability ≤ ``tol`` are left
    out, which keeps wide registers readable.
    """
    n = state.num_qubits
    labels, heights = [], []
    for index, amplitude in state.items():
        p = abs(amplitude) ** 2
        if hide_zero and p <= tol:
            continue
        labels.append(to_bitstring(index, n))
        heights.append(p)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    ax.bar(labels, heights, color=color, edgecolor="black", linewidth=0.5)
    ax.set_xlabel("Basis state", fontsize=12)
    ax.set_ylabel("Probability", fontsize=12)
    ax.set_ylim(0, 1)
    if title is None:
        title = f"{n}-qubit state"
    ax.set_title(title, fontsize=14)
    return ax
