from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from .config import get_config
from .errors import StateError, ValidationError
from .gate import Gate
from .ket import Ket
from .measurement import measure_all, measure_qubit
from .state import (
    basis_state,
    bitstring,
    check_index,
    check_num_qubits,
    norm_squared,
    probabilities,
    zero_state,
)

logger = logging.getLogger(__name__)


class QuantumRegister:
    """
    The joint state of `num_qubits` qubits, stored as a dense vector of
    2**num_qubits complex amplitudes (qubit 0 is the most significant
    bit of a basis index).

    The register owns its amplitude buffer. `amplitudes` hands out a
    read-only view, and every mutation swaps in a freshly computed
    vector, so a failed operation leaves the state as it was.

    Reading `value()` is only allowed after `collapse()`; applying a gate
    or resetting the state makes the register uncollapsed again.
    """

    def __init__(self, num_qubits: int, *, rng: Optional[np.random.Generator] = None):
        self._num_qubits = check_num_qubits(num_qubits)
        self._state = zero_state(self._num_qubits)
        self._collapsed: Optional[int] = None
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_kets(
        cls,
        num_qubits: int,
        kets: Iterable[Ket],
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> QuantumRegister:
        """
        Build a superposition from kets. Kets sharing an index are summed;
        the result must be normalised.
        """
        reg = cls(num_qubits, rng=rng)

        terms: dict[int, Ket] = {}
        for ket in kets:
            if not isinstance(ket, Ket):
                raise ValidationError(f"expected Ket, got {type(ket).__name__}")
            ket.check_width(reg.num_qubits)
            terms[ket.index] = terms[ket.index] + ket if ket.index in terms else ket

        state = np.zeros(reg.dim, dtype=complex)
        for index, ket in terms.items():
            state[index] = ket.amplitude

        total = norm_squared(state)
        if abs(total - 1.0) > get_config().norm_atol:
            raise ValidationError(f"kets are not normalised: sum |a|^2 = {total}")

        reg._state = state
        return reg

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def dim(self) -> int:
        return self._state.shape[0]

    @property
    def amplitudes(self) -> np.ndarray:
        view = self._state.view()
        view.flags.writeable = False
        return view

    @property
    def is_collapsed(self) -> bool:
        return self._collapsed is not None

    def norm(self) -> float:
        return float(np.sqrt(norm_squared(self._state)))

    def probabilities(self) -> np.ndarray:
        return probabilities(self._state)

    def set_state(self, value: int) -> None:
        self._state = basis_state(check_index(value, self._num_qubits), self._num_qubits)
        self._collapsed = None

    def apply(self, gate: Gate, targets: Optional[Sequence[int]] = None) -> None:
        """
        Apply `gate` to `targets` (all qubits, in order, when omitted).
        """
        if not isinstance(gate, Gate):
            raise ValidationError(f"expected Gate, got {type(gate).__name__}")

        if targets is None:
            if gate.width > self._num_qubits:
                raise StateError(f"gate of width {gate.width} is wider than the {self._num_qubits}-qubit register")
            targets = range(self._num_qubits)

        new_state = gate.apply_to(self, targets)

        config = get_config()
        if config.check_norm:
            total = norm_squared(new_state)
            drift = abs(total - 1.0)
            if drift > config.drift_atol:
                raise StateError(f"State norm drifted: sum |a|^2 = {total} (expected ~1.0)")
            # rounding accumulated by gates accepted within unitary_atol
            if drift > config.norm_atol:
                logger.debug("renormalising state, sum |a|^2 = %.17g", total)
                new_state = new_state / np.sqrt(total)

        self._state = new_state
        self._collapsed = None

    def collapse(self, rng: Optional[np.random.Generator] = None) -> int:
        """
        Measure every qubit. The state becomes the observed basis state,
        which is returned as an int. Collapsing again without an
        intervening gate returns the same value.
        """
        if rng is None:
            rng = self._rng

        outcome, prob, post = measure_all(self._state, self._num_qubits, rng=rng, validate=False)

        self._state = post
        self._collapsed = outcome
        logger.debug("register collapsed to |%s> with probability %.6f",
                     bitstring(outcome, self._num_qubits), prob)
        return outcome

    def value(self) -> int:
        if self._collapsed is None:
            raise StateError("register has not been collapsed; call collapse() first")
        return self._collapsed

    def measure_qubit(self, qubit: int, rng: Optional[np.random.Generator] = None) -> int:
        """
        Measure a single qubit, leaving the rest of the register in the
        renormalised conditional state.
        """
        if rng is None:
            rng = self._rng

        res = measure_qubit(self._state, qubit, self._num_qubits, rng=rng, validate=False)
        self._state = res.post_state
        self._collapsed = None
        return res.outcome

    def ket(self, index: int) -> Ket:
        index = check_index(index, self._num_qubits)
        return Ket(index, complex(self._state[index]))

    def kets(self, tol: float = 1e-12) -> Iterator[Ket]:
        for index in np.flatnonzero(np.abs(self._state) >= tol):
            yield Ket(int(index), complex(self._state[index]))

    def copy(self, *, rng: Optional[np.random.Generator] = None) -> QuantumRegister:
        other = QuantumRegister(self._num_qubits, rng=rng if rng is not None else self._rng)
        other._state = self._state.copy()
        other._collapsed = self._collapsed
        return other

    def describe(self, tol: float = 1e-12, max_terms: int | None = 32) -> str:
        """
        The state as a sum of basis kets, most probable first.

        Args:
          tol: ignore amplitudes with |amp| < tol
          max_terms: limit number of listed terms (None for no limit)
        """
        terms = sorted(self.kets(tol), key=lambda k: k.probability, reverse=True)

        if max_terms is not None:
            terms = terms[:max_terms]

        lines = [f"{self._num_qubits}-qubit state |ψ⟩ with {len(terms)} shown term(s):"]
        for k in terms:
            a = k.amplitude
            lines.append(f"  {a.real:+.6f}{a.imag:+.6f}j  {k.label(self._num_qubits)}   P={k.probability:.6f}")
        return "\n".join(lines)

    def __repr__(self):
        return f"QuantumRegister(num_qubits={self._num_qubits}, dim={self.dim})"
