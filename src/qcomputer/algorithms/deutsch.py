"""
Deutsch's algorithm: decide whether f: {0, 1} -> {0, 1} is constant or
balanced with a single oracle query.
"""

from __future__ import annotations

import enum
from typing import Callable, Optional

import numpy as np

from .. import gates
from ..computer import QuantumComputer
from ..errors import StateError, ValidationError
from ..gate import Gate


class DeutschResult(enum.Enum):
    CONSTANT = "constant"
    BALANCED = "balanced"


def _check_boolean_function(f: Callable[[int], int]) -> tuple[int, int]:
    values = (f(0), f(1))
    if any(v not in (0, 1) for v in values):
        raise ValidationError(f"f must map {{0, 1}} to {{0, 1}}, got f(0)={values[0]!r}, f(1)={values[1]!r}")
    return int(values[0]), int(values[1])


def deutsch_gate(f: Callable[[int], int]) -> Gate:
    """
    Oracle taking |x, y> to |x, y xor f(x)>, with x on qubit 0 and y on qubit 1.
    """
    f0, f1 = _check_boolean_function(f)

    m = np.eye(4, dtype=complex)
    exchange = gates.X

    if f0 == 1:
        m[0:2, 0:2] = exchange
    if f1 == 1:
        m[2:4, 2:4] = exchange

    return Gate(2, m)


def deutsch(f: Callable[[int], int], *, rng: Optional[np.random.Generator] = None) -> DeutschResult:
    c = QuantumComputer(2, rng=rng)

    # |01>
    c.initialize(1)

    c.apply(gates.hadamard(2))
    c.apply(deutsch_gate(f))
    c.apply(gates.hadamard(2))

    value = c.collapse()
    if value == 1:
        return DeutschResult.CONSTANT
    if value == 3:
        return DeutschResult.BALANCED
    raise StateError(f"Deutsch circuit collapsed to unexpected value {value}")
