import numpy as np

from .errors import StateError, ValidationError


def _inverse_permutation(perm: list[int]) -> list[int]:
    inv = [0] * len(perm)
    for i, p in enumerate(perm):
        inv[p] = i
    return inv


def check_targets(targets, width: int, num_qubits: int) -> tuple[int, ...]:
    try:
        targets = tuple(targets)
    except TypeError:
        raise ValidationError(f"targets must be a sequence of ints, got {targets!r}") from None

    if any(isinstance(t, bool) or not isinstance(t, (int, np.integer)) for t in targets):
        raise ValidationError(f"targets must be ints, got {targets}")

    if len(targets) != width:
        raise ValidationError(f"gate of width {width} needs {width} target(s), got {len(targets)}: {targets}")

    if len(set(targets)) != len(targets):
        raise ValidationError(f"targets must be unique, got {targets}")

    if any((t < 0 or t >= num_qubits) for t in targets):
        raise StateError(f"targets out of range for num_qubits={num_qubits}: {targets}")

    return tuple(int(t) for t in targets)


def apply_k_qubit_gate(state, U, targets, num_qubits: int) -> np.ndarray:
    """
    Apply a k-qubit unitary U to the given statevector on the specified target qubits.
    Conventions:
    - Statevector length 2**num_qubits.
    - qubit indices are 0...num_qubits-1.
    - qubit 0 is most significant in basis ordering
    - targets[0] is the most significant bit of U's local index

    Never builds the full 2**n x 2**n operator: the target axes are moved
    to the front so U acts on a (2**k, 2**(n-k)) view, O(2**n * 2**k).
    Returns a new array; `state` is not modified.
    """
    U = np.asarray(U, dtype=complex)
    state = np.asarray(state, dtype=complex)

    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        raise ValidationError(f"U must be a square matrix, got shape {U.shape}")

    k = U.shape[0].bit_length() - 1
    dim_k = 2 ** k
    if k < 1 or U.shape != (dim_k, dim_k):
        raise ValidationError(f"U must be 2**k x 2**k with k >= 1, got shape {U.shape}")

    targets = check_targets(targets, k, num_qubits)

    if state.shape != (2 ** num_qubits,):
        raise ValidationError(f"state must have shape ({2 ** num_qubits},), got {state.shape}")

    psi = state.reshape((2,) * num_qubits)

    remaining = [q for q in range(num_qubits) if q not in targets]
    perm = list(targets) + remaining

    psi_perm = np.transpose(psi, axes=perm)

    psi_mat = psi_perm.reshape(dim_k, -1)

    psi_mat2 = U @ psi_mat

    psi_perm2 = psi_mat2.reshape((2,) * num_qubits)
    inv_perm = _inverse_permutation(perm)
    psi2 = np.transpose(psi_perm2, axes=inv_perm)

    return np.ascontiguousarray(psi2).reshape(-1)


def expand_gate(U, targets, num_qubits: int) -> np.ndarray:
    """
    Full 2**n x 2**n operator of U acting on `targets`.

    Built entry by entry: big[i, j] = U[i_local, j_local] when i and j
    agree on every non-target bit, 0 otherwise. Exponential in memory;
    meant for checking the kernel on small registers.
    """
    U = np.asarray(U, dtype=complex)
    k = U.shape[0].bit_length() - 1
    targets = check_targets(targets, k, num_qubits)

    n = num_qubits
    dim = 2 ** n
    masks = [1 << (n - 1 - t) for t in targets]
    target_mask = sum(masks)

    def local(index: int) -> int:
        sub = 0
        for mask in masks:
            sub = (sub << 1) | (1 if index & mask else 0)
        return sub

    big = np.zeros((dim, dim), dtype=complex)
    for i in range(dim):
        for j in range(dim):
            if (i & ~target_mask) == (j & ~target_mask):
                big[i, j] = U[local(i), local(j)]
    return big
