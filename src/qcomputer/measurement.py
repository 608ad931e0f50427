from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .errors import StateError, ValidationError
from .state import copy_state, probabilities, validate_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeasurementResult:
    outcome: int
    probability: float
    post_state: np.ndarray


def _bit_mask(qubit: int, num_qubits: int) -> np.ndarray:
    """Boolean mask over basis indices whose bit for `qubit` is 1."""
    shift = (num_qubits - 1) - qubit
    return ((np.arange(2 ** num_qubits) >> shift) & 1).astype(bool)


def sample_index(probs: np.ndarray, rng: np.random.Generator) -> int:
    """
    Cumulative-distribution sampling.

    Draw u ~ U[0, 1) and pick the first index whose running total of
    probabilities exceeds u. When rounding leaves the total below u,
    the last index carrying any probability is returned rather than the
    final index, which may have probability zero. A warning is logged.
    """
    probs = np.asarray(probs, dtype=float)
    if probs.ndim != 1 or probs.size == 0:
        raise ValidationError(f"probabilities must be a non-empty 1-d array, got shape {probs.shape}")
    if np.any(probs < 0) or not np.all(np.isfinite(probs)):
        raise ValidationError("probabilities must be finite and non-negative")

    u = float(rng.random())
    cumulative = np.cumsum(probs)

    # strict comparison so zero-probability states are never chosen
    index = int(np.searchsorted(cumulative, u, side="right"))
    if index < probs.size:
        return index

    nonzero = np.flatnonzero(probs)
    if nonzero.size == 0:
        raise StateError("Cannot sample from an all-zero distribution")

    fallback = int(nonzero[-1])
    logger.warning(
        "cumulative probability %.17g below draw %.17g; falling back to index %d",
        float(cumulative[-1]), u, fallback,
    )
    return fallback


def measure_qubit(
    state: np.ndarray,
    qubit: int,
    num_qubits: int,
    *,
    rng: Optional[np.random.Generator] = None,
    validate: bool = True,
) -> MeasurementResult:

    if validate:
        validate_state(state, num_qubits)

    if isinstance(qubit, bool) or not isinstance(qubit, (int, np.integer)):
        raise ValidationError(f"qubit must be an int, got {qubit!r}")
    if qubit < 0 or qubit >= num_qubits:
        raise StateError(f"qubit {qubit} out of range for num_qubits={num_qubits}")

    psi = copy_state(state)

    ones = _bit_mask(int(qubit), num_qubits)

    probs = probabilities(psi)
    p1 = float(probs[ones].sum())
    p0 = float(probs[~ones].sum())

    if rng is None:
        rng = np.random.default_rng()

    outcome = sample_index(np.array([p0, p1]), rng)
    prob = p1 if outcome == 1 else p0

    post = psi
    if outcome == 1:
        post[~ones] = 0.0
    else:
        post[ones] = 0.0

    if prob == 0.0:
        raise StateError("Measured an outcome with zero probability")

    post /= np.sqrt(prob)

    return MeasurementResult(outcome=outcome, probability=prob, post_state=post)


def measure_all(
    state: np.ndarray,
    num_qubits: int,
    *,
    rng: Optional[np.random.Generator] = None,
    validate: bool = True,
) -> Tuple[int, float, np.ndarray]:

    if validate:
        validate_state(state, num_qubits)

    psi = copy_state(state)
    probs = probabilities(psi)

    if rng is None:
        rng = np.random.default_rng()

    outcome_index = sample_index(probs, rng)
    prob = float(probs[outcome_index])

    post = np.zeros_like(psi)
    post[outcome_index] = 1.0 + 0.0j

    logger.debug("collapsed %d-qubit state to index %d (p=%.6f)", num_qubits, outcome_index, prob)
    return outcome_index, prob, post
