#!/usr/bin/env python3
"""
Circuit Gallery
===============

Runs a handful of textbook circuits through the state-vector simulator and
saves a histogram of the measured counts for each one:

1. Bell pair (H + CNOT)
2. 3-qubit GHZ state
3. Two-qubit Grover search marking |11⟩
4. Phase kickback with a custom controlled unitary

Every final state is printed in Dirac notation alongside the circuit listing.
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

# Import simulator components
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from qvector import Circuit, Simulator, SimulatorConfig
from qvector.utils.visualization import format_circuit, format_dirac, plot_counts


SHOTS = 4096
SEED = 2024


def bell() -> Circuit:
    return Circuit(2, name="bell").h(0).cnot(0, 1)


def ghz() -> Circuit:
    return Circuit(3, name="ghz").h(0).cnot(0, 1).cnot(1, 2)


def grover_11() -> Circuit:
    qc = Circuit(2, name="grover").h(0).h(1)
    qc.cz(0, 1)                                    # oracle
    qc.h(0).h(1).x(0).x(1).cz(0, 1).x(0).x(1).h(0).h(1)  # diffuser
    return qc


def phase_kickback() -> Circuit:
    # Controlled-S† kicks a -π/2 phase back onto the control
    s_dag = np.diag([1, -1j])
    qc = Circuit(2, name="kickback").x(1).h(0)
    qc.unitary(s_dag, targets=1, controls=0, name="S-dagger", symbol="Sdg")
    return qc.h(0)


def main():
    output_dir = Path(__file__).parent / "gallery_figures"
    output_dir.mkdir(exist_ok=True)

    sim = Simulator(SimulatorConfig(name="gallery", verify_unitary=True))
    rng = np.random.default_rng(SEED)

    circuits = [bell(), ghz(), grover_11(), phase_kickback()]
    fig, axes = plt.subplots(1, len(circuits), figsize=(4 * len(circuits), 4))

    for ax, qc in zip(axes, circuits):
        print("\n" + "=" * 60)
        print(format_circuit(qc))
        print(f"Depth: {qc.depth}")

        result = sim.execute(qc, shots=SHOTS, rng=rng)
        print(format_dirac(result.final_state))
        print(f"Counts: {result.counts}")
        print(f"Most frequent: {result.most_frequent()}")

        plot_counts(result, ax=ax, normalize=True, title=qc.name)

    fig.tight_layout()
    path = output_dir / "gallery_counts.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print("\n" + "=" * 60)
    print("Figure saved to:", path)
    print("=" * 60)


if __name__ == "__main__":
    main()
