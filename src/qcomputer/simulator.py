from __future__ import annotations
from typing     import Optional

import numpy as np

from .state       import zero_state, validate_state, copy_state, bitstring, norm_squared
from .config      import get_config
from .apply       import apply_k_qubit_gate
from .circuit     import Circuit
from .errors      import StateError, ValidationError
from .register    import QuantumRegister


def run_statevector(
    circuit: Circuit,
    initial_state: Optional[np.ndarray] = None,
    *, validate: bool = True,
) -> np.ndarray:

    num_qubits = circuit.num_qubits

    if initial_state is None:
        state = zero_state(num_qubits)
    else:
        validate_state(initial_state, num_qubits)
        state = copy_state(initial_state)

    for op in circuit.ops:
        state = apply_k_qubit_gate(
            state=state,
            U=op.U,
            targets=op.targets,
            num_qubits=num_qubits,
        )

    if validate:
        config = get_config()
        total = norm_squared(state)
        if abs(total - 1.0) > config.drift_atol:
            raise StateError(f"State norm drifted: ||psi||={np.sqrt(total)} (expected ~1.0)")
        if abs(total - 1.0) > config.norm_atol:
            state = state / np.sqrt(total)

    return state


def run_register(
    circuit: Circuit,
    initial: int = 0,
    *,
    rng: Optional[np.random.Generator] = None,
) -> QuantumRegister:
    reg = QuantumRegister(circuit.num_qubits, rng=rng)
    reg.set_state(initial)
    for op in circuit.ops:
        reg.apply(op.gate, op.targets)
    return reg


def run_counts(
    circuit: Circuit,
    shots: int = 1024,
    seed: Optional[int] = None,
    *,
    initial: int = 0,
) -> dict[str, int]:
    """
    Run the circuit once and collapse `shots` copies of the final state.
    Keys are bitstrings with qubit 0 first.
    """
    if shots <= 0:
        raise ValidationError(f"shots must be positive, got {shots}")

    num_qubits = circuit.num_qubits
    rng = np.random.default_rng(seed)
    reg = run_register(circuit, initial, rng=rng)

    counts: dict[str, int] = {}
    for _ in range(shots):
        outcome_index = reg.copy().collapse()
        key = bitstring(outcome_index, num_qubits)
        counts[key] = counts.get(key, 0) + 1
    return counts
