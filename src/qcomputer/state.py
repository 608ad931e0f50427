import numpy as np

from .config import get_config
from .errors import ValidationError


def num_states(num_qubits: int) -> int:
    return 2 ** num_qubits


def check_num_qubits(num_qubits) -> int:
    max_qubits = get_config().max_qubits
    if isinstance(num_qubits, bool) or not isinstance(num_qubits, (int, np.integer)):
        raise ValidationError(f"num_qubits must be an int, got {type(num_qubits).__name__}")
    if num_qubits <= 0 or num_qubits > max_qubits:
        raise ValidationError(f"num_qubits must be between 1 and {max_qubits}, got {num_qubits}")
    return int(num_qubits)


def check_index(index, num_qubits: int) -> int:
    dim = num_states(num_qubits)
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise ValidationError(f"classical value must be an int, got {type(index).__name__}")
    if index < 0 or index >= dim:
        raise ValidationError(f"classical value must be between 0 and {dim - 1}, got {index}")
    return int(index)


def basis_state(index: int, num_qubits: int) -> np.ndarray:
    dim = num_states(num_qubits)
    index = check_index(index, num_qubits)

    state = np.zeros(dim, dtype=complex)
    state[index] = 1.0
    return state


def zero_state(num_qubits: int) -> np.ndarray:
    return basis_state(0, num_qubits)


def probabilities(state: np.ndarray) -> np.ndarray:
    return state.real * state.real + state.imag * state.imag


def norm_squared(state: np.ndarray) -> float:
    return float(probabilities(state).sum())


def is_normalized(state: np.ndarray, atol: float | None = None) -> bool:
    if atol is None:
        atol = get_config().norm_atol
    return abs(norm_squared(state) - 1.0) <= atol


def normalize(state: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(state)
    if norm == 0:
        raise ValidationError("Cannot normalise zero vector!")
    return state / norm


def validate_state(state, num_qubits: int, *, atol: float | None = None) -> None:
    """
    Check shape, dtype and normalisation of a raw amplitude vector.
    """
    state = np.asarray(state)
    dim = num_states(num_qubits)

    if state.shape != (dim,):
        raise ValidationError(f"state must have shape ({dim},), got {state.shape}")

    if not np.all(np.isfinite(state)):
        raise ValidationError("state contains non-finite amplitudes")

    if not is_normalized(state.astype(complex), atol):
        raise ValidationError(f"state is not normalised: sum |a|^2 = {norm_squared(state.astype(complex))}")


def copy_state(state) -> np.ndarray:
    return np.array(state, dtype=complex, copy=True)


def bitstring(index: int, num_qubits: int) -> str:
    # qubit 0 is the most significant bit
    return format(index, f"0{num_qubits}b")
