import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from qcomputer import gates  # noqa: E402
from qcomputer.errors import ValidationError  # noqa: E402
from qcomputer.register import QuantumRegister  # noqa: E402
from qcomputer.viz import bloch_vector, plot_counts, plot_probabilities  # noqa: E402


def test_plot_probabilities_from_register():
    reg = QuantumRegister(2)
    reg.apply(gates.hadamard(2))

    fig = plot_probabilities(reg)
    bars = fig.axes[0].patches
    assert len(bars) == 4
    assert np.allclose([b.get_height() for b in bars], 0.25)
    assert [t.get_text() for t in fig.axes[0].get_xticklabels()] == ["00", "01", "10", "11"]
    plt.close(fig)


def test_plot_probabilities_from_raw_state_needs_width():
    psi = np.array([1, 0], dtype=complex)
    with pytest.raises(ValidationError):
        plot_probabilities(psi)
    with pytest.raises(ValidationError):
        plot_probabilities(psi, 2)

    fig = plot_probabilities(psi, 1)
    assert len(fig.axes[0].patches) == 2
    plt.close(fig)


def test_plot_counts_sorting():
    counts = {"11": 5, "00": 9}

    fig = plot_counts(counts)
    assert [b.get_height() for b in fig.axes[0].patches] == [9, 5]
    plt.close(fig)

    fig = plot_counts(counts, sort="count")
    assert [b.get_height() for b in fig.axes[0].patches] == [9, 5]
    plt.close(fig)

    with pytest.raises(ValidationError):
        plot_counts(counts, sort="random")
    with pytest.raises(ValidationError):
        plot_counts({})


def test_bloch_vector():
    assert np.allclose(bloch_vector(np.array([1, 0])), [0, 0, 1])
    assert np.allclose(bloch_vector(np.array([0, 1])), [0, 0, -1])

    reg = QuantumRegister(1)
    reg.apply(gates.hadamard())
    assert np.allclose(bloch_vector(reg), [1, 0, 0])

    with pytest.raises(ValidationError):
        bloch_vector(np.ones(4))
