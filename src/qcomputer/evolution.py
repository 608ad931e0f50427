from __future__ import annotations

import numpy as np

from .errors import ValidationError
from .gate import Gate


def unitary_from_hamiltonian(H: np.ndarray, t: float, *, atol: float = 1e-10) -> np.ndarray:
    """Build U = exp(-i H t) for Hermitian H."""

    H = np.asarray(H, dtype=complex)
    if H.ndim != 2 or H.shape[0] != H.shape[1]:
        raise ValidationError(f"H must be a square matrix, got shape {H.shape}")

    if not np.allclose(H, H.conj().T, atol=atol, rtol=0.0):
        raise ValidationError("H must be Hermitian")

    w, V = np.linalg.eigh(H)
    phases = np.exp(-1j * w * float(t))
    return V @ np.diag(phases) @ V.conj().T


def evolution_gate(H: np.ndarray, t: float) -> Gate:
    """Gate for time evolution under Hamiltonian H for time t."""
    U = unitary_from_hamiltonian(H, t)
    width = U.shape[0].bit_length() - 1
    if U.shape[0] != 2 ** width or width < 1:
        raise ValidationError(f"H must be 2**k x 2**k for some k >= 1, got shape {U.shape}")
    return Gate(width, U)
