from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from . import gates as g
from .apply import check_targets
from .errors import ValidationError
from .gate import Gate
from .state import check_num_qubits


@dataclass(frozen=True)
class Operation:
    gate: Gate
    targets: tuple[int, ...]
    label: str = "GATE"

    @property
    def U(self):
        return self.gate.matrix


class Circuit:
    """
    An ordered list of gate applications on a fixed number of qubits.

    Builders return the circuit, so calls chain:

        Circuit(2).h(0).cx(0, 1)
    """

    def __init__(self, num_qubits: int):
        self.num_qubits = check_num_qubits(num_qubits)
        self.ops: list[Operation] = []

    def append(self, gate: Gate, targets, label: Optional[str] = None) -> Circuit:
        if not isinstance(gate, Gate):
            raise ValidationError(f"expected Gate, got {type(gate).__name__}")
        targets = check_targets(targets, gate.width, self.num_qubits)
        self.ops.append(Operation(gate, targets, label or "GATE"))
        return self

    ## 1 qubit gates

    def i(self, q: int) -> Circuit:
        return self.append(g.identity(), [q], "I")

    def x(self, q: int) -> Circuit:
        return self.append(g.pauli_x(), [q], "X")

    def y(self, q: int) -> Circuit:
        return self.append(g.pauli_y(), [q], "Y")

    def z(self, q: int) -> Circuit:
        return self.append(g.pauli_z(), [q], "Z")

    def h(self, q: int) -> Circuit:
        return self.append(g.hadamard(), [q], "H")

    def s(self, q: int) -> Circuit:
        return self.append(g.s(), [q], "S")

    def t(self, q: int) -> Circuit:
        return self.append(g.t(), [q], "T")

    def phase(self, q: int, angle: float) -> Circuit:
        return self.append(g.phase_shift(angle), [q], f"PHASE({float(angle)})")

    def rx(self, q: int, theta: float) -> Circuit:
        return self.append(g.rx(theta), [q], f"RX({float(theta)})")

    def ry(self, q: int, theta: float) -> Circuit:
        return self.append(g.ry(theta), [q], f"RY({float(theta)})")

    def rz(self, q: int, theta: float) -> Circuit:
        return self.append(g.rz(theta), [q], f"RZ({float(theta)})")

    ## multi qubit gates

    def cx(self, control: int, target: int) -> Circuit:
        return self.append(g.controlled_not(), [control, target], "CNOT")

    def cz(self, q1: int, q2: int) -> Circuit:
        return self.append(g.controlled_z(), [q1, q2], "CZ")

    def swap(self, q1: int, q2: int) -> Circuit:
        return self.append(g.swap(), [q1, q2], "SWAP")

    def tof(self, c1: int, c2: int, target: int) -> Circuit:
        return self.append(g.toffoli(), [c1, c2, target], "TOFFOLI")

    def fred(self, control: int, q1: int, q2: int) -> Circuit:
        return self.append(g.fredkin(), [control, q1, q2], "FREDKIN")

    def __len__(self):
        return len(self.ops)

    def __repr__(self):
        return f"Circuit(num_qubits={self.num_qubits}, ops={len(self.ops)})"
