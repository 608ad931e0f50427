from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt

from .errors import ValidationError
from .state import bitstring, probabilities


def _basis_labels(num_qubits: int) -> list[str]:
    dim = 2 ** num_qubits
    return [bitstring(i, num_qubits) for i in range(dim)]


def plot_probabilities(source, num_qubits: int | None = None, *, title: str = "Basis state probabilities"):
    """
    Bar chart of |a_i|^2. `source` is a QuantumRegister, or a raw
    amplitude vector together with `num_qubits`.
    """
    if hasattr(source, "amplitudes"):
        state = np.asarray(source.amplitudes, dtype=complex)
        num_qubits = source.num_qubits
    else:
        state = np.asarray(source, dtype=complex)
        if num_qubits is None:
            raise ValidationError("num_qubits is required when plotting a raw statevector")

    if state.shape != (2 ** num_qubits,):
        raise ValidationError(f"state must have shape ({2 ** num_qubits},), got {state.shape}")

    probs = probabilities(state)
    labels = _basis_labels(num_qubits)

    fig = plt.figure()
    plt.bar(range(len(probs)), probs)
    plt.xticks(range(len(probs)), labels, rotation=90)
    plt.ylabel("Probability")
    plt.title(title)
    plt.tight_layout()
    return fig


def plot_counts(counts: dict[str, int], *, title: str = "Measurement counts", sort: str = "bitstring"):

    if not counts:
        raise ValidationError("counts is empty")

    items = list(counts.items())
    if sort == "bitstring":
        items.sort(key=lambda kv: kv[0])
    elif sort == "count":
        items.sort(key=lambda kv: kv[1], reverse=True)
    elif sort == "none":
        pass
    else:
        raise ValidationError("sort must be one of: 'bitstring', 'count', 'none'")

    labels = [k for k, _ in items]
    values = [v for _, v in items]

    fig = plt.figure()
    plt.bar(range(len(values)), values)
    plt.xticks(range(len(values)), labels, rotation=90)
    plt.ylabel("Counts")
    plt.title(title)
    plt.tight_layout()
    return fig


def bloch_vector(state_1q) -> np.ndarray:

    if hasattr(state_1q, "amplitudes"):
        state_1q = state_1q.amplitudes
    state_1q = np.asarray(state_1q, dtype=complex).reshape(-1)
    if state_1q.shape[0] != 2:
        raise ValidationError("bloch_vector expects a 1-qubit statevector of length 2")

    alpha, beta = state_1q[0], state_1q[1]

    x = 2.0 * np.real(np.conjugate(alpha) * beta)
    y = 2.0 * np.imag(np.conjugate(alpha) * beta)
    z = (np.abs(alpha) ** 2) - (np.abs(beta) ** 2)

    return np.array([x, y, z], dtype=float)
