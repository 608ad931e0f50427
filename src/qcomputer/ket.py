from __future__ import annotations

from dataclasses import dataclass
from numbers import Number

import numpy as np

from .errors import ValidationError
from .state import bitstring, num_states


@dataclass(frozen=True)
class Ket:
    """
    One term a|index> of a register state: the amplitude of a single
    computational basis state.
    """
    index: int
    amplitude: complex = 1.0 + 0.0j

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, (int, np.integer)):
            raise ValidationError(f"Ket index must be an int, got {type(self.index).__name__}")
        if self.index < 0:
            raise ValidationError(f"Ket index must be non-negative, got {self.index}")
        if not isinstance(self.amplitude, Number):
            raise ValidationError(f"Ket amplitude must be a number, got {type(self.amplitude).__name__}")

        object.__setattr__(self, "index", int(self.index))
        object.__setattr__(self, "amplitude", complex(self.amplitude))

    @property
    def probability(self) -> float:
        a = self.amplitude
        return a.real * a.real + a.imag * a.imag

    def check_width(self, num_qubits: int) -> Ket:
        dim = num_states(num_qubits)
        if self.index >= dim:
            raise ValidationError(f"Ket index {self.index} out of range for {num_qubits} qubit(s)")
        return self

    def label(self, num_qubits: int) -> str:
        return f"|{bitstring(self.index, num_qubits)}⟩"

    def __add__(self, other):
        if not isinstance(other, Ket):
            return NotImplemented
        if other.index != self.index:
            raise ValidationError(f"Cannot add kets of different basis states ({self.index} and {other.index})")
        return Ket(self.index, self.amplitude + other.amplitude)

    def __mul__(self, scalar):
        if not isinstance(scalar, Number):
            return NotImplemented
        return Ket(self.index, self.amplitude * complex(scalar))

    __rmul__ = __mul__

    def __neg__(self):
        return Ket(self.index, -self.amplitude)
