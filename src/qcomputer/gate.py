from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from .apply import apply_k_qubit_gate
from .config import get_config
from .errors import ValidationError

logger = logging.getLogger(__name__)


def unitarity_error(U: np.ndarray) -> float:
    """Frobenius norm of U^H U - I."""
    U = np.asarray(U, dtype=complex)
    return float(np.linalg.norm(U.conj().T @ U - np.eye(U.shape[0]), ord="fro"))


def is_unitary(U, atol: float | None = None) -> bool:
    if atol is None:
        atol = get_config().unitary_atol
    U = np.asarray(U, dtype=complex)
    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        return False
    return unitarity_error(U) <= atol


class Gate:
    """
    An immutable unitary acting on `width` qubits.

    The matrix is expressed in the computational basis of the gate's own
    qubits, with the first target qubit as the most significant bit.
    Every constructor path (factories, composition, permutation) goes
    through validation, so a Gate instance is always unitary.
    """

    __slots__ = ("_width", "_matrix")

    def __init__(self, width: int, matrix, *, atol: float | None = None):
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
            raise ValidationError(f"Gate width must be a positive int, got {width!r}")
        width = int(width)

        try:
            m = np.array(matrix, dtype=complex)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Gate matrix is not a complex array: {e}") from e

        dim = 2 ** width
        if m.shape != (dim, dim):
            raise ValidationError(f"Gate of width {width} needs a {dim}x{dim} matrix, got shape {m.shape}")

        if not np.all(np.isfinite(m)):
            raise ValidationError("Gate matrix contains non-finite entries")

        if atol is None:
            atol = get_config().unitary_atol
        err = unitarity_error(m)
        if err > atol:
            raise ValidationError(f"Gate matrix is not unitary: ||U^H U - I||_F = {err:.3e} > {atol:.1e}")

        m.flags.writeable = False
        self._width = width
        self._matrix = m

    @property
    def width(self) -> int:
        return self._width

    @property
    def dim(self) -> int:
        return self._matrix.shape[0]

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def apply_to(self, register, targets: Sequence[int]) -> np.ndarray:
        """
        Compute the register's amplitudes after this gate acts on `targets`.

        `register` is anything exposing `num_qubits` and `amplitudes`
        (normally a QuantumRegister). Nothing is mutated: the caller
        decides whether to commit the returned vector.
        """
        num_qubits = register.num_qubits
        out = apply_k_qubit_gate(register.amplitudes, self._matrix, targets, num_qubits)
        logger.debug("applied %d-qubit gate to targets %s of %d-qubit register",
                     self._width, targets, num_qubits)
        return out

    # --- composition ---

    def _check_same_width(self, other: Gate, op: str) -> None:
        if not isinstance(other, Gate):
            raise ValidationError(f"Cannot {op} Gate with {type(other).__name__}")
        if other.width != self.width:
            raise ValidationError(f"Cannot {op} gates of width {self.width} and {other.width}")

    def then(self, other: Gate) -> Gate:
        """Apply self, then other."""
        self._check_same_width(other, "compose")
        return Gate(self.width, other.matrix @ self._matrix)

    def __matmul__(self, other):
        # operator order: (a @ b) applies b first
        if not isinstance(other, Gate):
            return NotImplemented
        self._check_same_width(other, "compose")
        return Gate(self.width, self._matrix @ other.matrix)

    def tensor(self, other: Gate) -> Gate:
        """self on the leading qubits, other on the trailing ones."""
        if not isinstance(other, Gate):
            raise ValidationError(f"Cannot tensor Gate with {type(other).__name__}")
        return Gate(self.width + other.width, np.kron(self._matrix, other.matrix))

    def controlled(self, num_controls: int = 1) -> Gate:
        """
        Controlled version of this gate. The controls are the leading
        qubits; the gate acts only when all of them are 1.
        """
        if isinstance(num_controls, bool) or not isinstance(num_controls, (int, np.integer)) or num_controls < 1:
            raise ValidationError(f"num_controls must be a positive int, got {num_controls!r}")

        width = self.width + int(num_controls)
        dim = 2 ** width
        m = np.eye(dim, dtype=complex)
        m[dim - self.dim:, dim - self.dim:] = self._matrix
        return Gate(width, m)

    def adjoint(self) -> Gate:
        return Gate(self.width, self._matrix.conj().T)

    def power(self, n: int) -> Gate:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
            raise ValidationError(f"power must be a non-negative int, got {n!r}")
        return Gate(self.width, np.linalg.matrix_power(self._matrix, int(n)))

    def permute(self, permutation: Sequence[int]) -> Gate:
        """
        Reorder the qubits this gate acts on: qubit i of the new gate
        plays the role qubit permutation[i] played before.
        """
        perm = list(permutation)
        if sorted(perm) != list(range(self.width)):
            raise ValidationError(f"permutation must reorder range({self.width}), got {perm}")

        k = self.width
        t = self._matrix.reshape((2,) * (2 * k))
        axes = perm + [k + p for p in perm]
        return Gate(k, t.transpose(axes).reshape(self.dim, self.dim))

    # --- comparison ---

    def allclose(self, other: Gate, atol: float = 1e-12) -> bool:
        return (
            isinstance(other, Gate)
            and other.width == self.width
            and np.allclose(self._matrix, other.matrix, atol=atol, rtol=0.0)
        )

    def __eq__(self, other):
        if not isinstance(other, Gate):
            return NotImplemented
        return self.width == other.width and np.array_equal(self._matrix, other.matrix)

    __hash__ = None

    def __repr__(self):
        return f"Gate(width={self.width}, dim={self.dim})"


def tensor(*gates: Gate) -> Gate:
    if not gates:
        raise ValidationError("tensor needs at least one gate")
    out = gates[0]
    for g in gates[1:]:
        out = out.tensor(g)
    return out
