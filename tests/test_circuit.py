import numpy as np
import pytest

from qcomputer import gates
from qcomputer.circuit import Circuit, Operation
from qcomputer.errors import StateError, ValidationError
from qcomputer.gate import Gate
from qcomputer.simulator import run_counts, run_register, run_statevector


def test_builders_record_operations():
    c = Circuit(3).h(0).cx(0, 1).rz(2, 0.5).swap(1, 2)

    assert len(c) == 4
    assert [op.label for op in c.ops] == ["H", "CNOT", "RZ(0.5)", "SWAP"]
    assert c.ops[1].targets == (0, 1)
    assert isinstance(c.ops[0], Operation)
    assert np.allclose(c.ops[0].U, gates.H)


def test_append_validates_targets():
    c = Circuit(2)
    with pytest.raises(StateError):
        c.x(2)
    with pytest.raises(ValidationError):
        c.append(gates.swap(), [0])
    with pytest.raises(ValidationError):
        c.cx(1, 1)
    with pytest.raises(ValidationError):
        c.append(gates.X, [0])
    assert len(c) == 0


def test_circuit_needs_qubits():
    with pytest.raises(ValidationError):
        Circuit(0)


def test_run_register_matches_statevector():
    c = Circuit(3).h(0).cx(0, 2).t(2).ry(1, 0.3).cz(1, 2)
    reg = run_register(c)
    assert np.allclose(reg.amplitudes, run_statevector(c), atol=1e-12)


def test_run_register_from_initial_value():
    c = Circuit(2).x(1)
    reg = run_register(c, initial=2)
    assert reg.collapse() == 3


def test_bell_counts_only_correlated_outcomes():
    c = Circuit(2).h(0).cx(0, 1)

    counts = run_counts(c, shots=2000, seed=4)

    assert set(counts) <= {"00", "11"}
    assert sum(counts.values()) == 2000
    assert 800 < counts["00"] < 1200


def test_counts_are_reproducible_with_seed():
    c = Circuit(3).h(0).h(1).h(2)
    assert run_counts(c, shots=200, seed=9) == run_counts(c, shots=200, seed=9)


def test_counts_need_positive_shots():
    with pytest.raises(ValidationError):
        run_counts(Circuit(1), shots=0)


def test_phase_gates_change_interference():
    # H P(pi) H = X
    c = Circuit(1).h(0).phase(0, np.pi).h(0)
    assert np.allclose(np.abs(run_statevector(c)) ** 2, [0.0, 1.0], atol=1e-12)

    c = Circuit(1).h(0).s(0).s(0).h(0)
    assert np.allclose(np.abs(run_statevector(c)) ** 2, [0.0, 1.0], atol=1e-12)


def test_run_statevector_rejects_bad_initial_state():
    with pytest.raises(ValidationError):
        run_statevector(Circuit(1), initial_state=np.array([1, 1], dtype=complex))


def test_run_statevector_renormalises_accumulated_rounding():
    g = Gate(1, np.diag([1.0, np.sqrt(1 + 4e-11)]))
    c = Circuit(1).x(0)
    for _ in range(20):
        c.append(g, [0])

    psi = run_statevector(c)
    assert abs(np.vdot(psi, psi).real - 1.0) <= 1e-10


def test_run_statevector_rejects_gross_drift():
    leaky = Gate(1, np.diag([1.0, 1.1]), atol=1.0)
    c = Circuit(1).x(0).append(leaky, [0])
    with pytest.raises(StateError, match="norm drifted"):
        run_statevector(c)
