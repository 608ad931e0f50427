from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .gate import Gate
from .register import QuantumRegister


class QuantumComputer:
    """
    A quantum computer of one register, with a classical interface:
    initialize to an integer, apply gates, collapse, read the integer.

    Randomness comes from `rng`, or a generator seeded with `seed`.
    """

    def __init__(
        self,
        num_qubits: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if rng is None:
            rng = np.random.default_rng(seed)
        self._register = QuantumRegister(num_qubits, rng=rng)

    @property
    def num_qubits(self) -> int:
        return self._register.num_qubits

    @property
    def register(self) -> QuantumRegister:
        return self._register

    def initialize(self, value: int) -> None:
        """Hard reset to the basis state encoding `value`."""
        self._register.set_state(value)

    def reset(self) -> None:
        self._register.set_state(0)

    def apply(self, gate: Gate, targets: Optional[Sequence[int]] = None) -> None:
        self._register.apply(gate, targets)

    def collapse(self) -> int:
        return self._register.collapse()

    def value(self) -> int:
        return self._register.value()

    def probabilities(self) -> np.ndarray:
        """Outcome probabilities of every basis state, without collapsing."""
        return self._register.probabilities()

    def __repr__(self):
        return f"QuantumComputer(num_qubits={self.num_qubits})"
