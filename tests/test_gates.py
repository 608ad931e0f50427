import numpy as np
import pytest

from qcomputer import gates
from qcomputer.errors import ValidationError
from qcomputer.gate import Gate

TOF = np.array([
    [1,0,0,0,0,0,0,0],
    [0,1,0,0,0,0,0,0],
    [0,0,1,0,0,0,0,0],
    [0,0,0,1,0,0,0,0],
    [0,0,0,0,1,0,0,0],
    [0,0,0,0,0,1,0,0],
    [0,0,0,0,0,0,0,1],
    [0,0,0,0,0,0,1,0],
], dtype=complex)

FRED = np.array([
    [1,0,0,0,0,0,0,0],
    [0,1,0,0,0,0,0,0],
    [0,0,1,0,0,0,0,0],
    [0,0,0,1,0,0,0,0],
    [0,0,0,0,1,0,0,0],
    [0,0,0,0,0,0,1,0],
    [0,0,0,0,0,1,0,0],
    [0,0,0,0,0,0,0,1],
], dtype=complex)

CNOT = np.array([
    [1,0,0,0],
    [0,1,0,0],
    [0,0,0,1],
    [0,0,1,0],
], dtype=complex)

CZ = np.diag([1, 1, 1, -1]).astype(complex)


FACTORIES = [
    lambda: gates.identity(3),
    lambda: gates.hadamard(2),
    lambda: gates.pauli_x(2),
    lambda: gates.pauli_y(),
    lambda: gates.pauli_z(3),
    lambda: gates.phase_shift(0.3),
    gates.s,
    gates.t,
    lambda: gates.rx(1.1),
    lambda: gates.ry(-0.4),
    lambda: gates.rz(2.5),
    gates.swap,
    gates.sqrt_swap,
    gates.controlled_not,
    gates.controlled_x,
    gates.controlled_y,
    gates.controlled_z,
    lambda: gates.controlled_phase(0.7),
    lambda: gates.controlled_u(2, gates.swap()),
    gates.toffoli,
    gates.fredkin,
]


@pytest.mark.parametrize("factory", FACTORIES)
def test_every_named_gate_is_unitary(factory):
    g = factory()
    m = g.matrix
    assert m.shape == (2 ** g.width, 2 ** g.width)
    assert np.allclose(m.conj().T @ m, np.eye(m.shape[0]), atol=1e-12)


def test_identity_width():
    assert np.array_equal(gates.identity(3).matrix, np.eye(8))


def test_multi_qubit_hadamard_is_tensor_power():
    assert np.allclose(gates.hadamard(2).matrix, np.kron(gates.H, gates.H))
    assert np.allclose(np.abs(gates.hadamard(3).matrix), np.full((8, 8), 1 / np.sqrt(8)))


def test_multi_qubit_paulis():
    assert np.allclose(gates.pauli_x(2).matrix, np.kron(gates.X, gates.X))
    assert np.allclose(gates.pauli_y(2).matrix, np.kron(gates.Y, gates.Y))
    assert np.allclose(gates.pauli_z(2).matrix, np.diag([1, -1, -1, 1]))


@pytest.mark.parametrize("factory", [gates.identity, gates.hadamard, gates.pauli_x, gates.pauli_y, gates.pauli_z])
def test_zero_width_is_rejected(factory):
    with pytest.raises(ValidationError):
        factory(0)


def test_phase_shift_special_angles():
    assert gates.phase_shift(np.pi).allclose(gates.pauli_z())
    assert gates.phase_shift(np.pi / 2).allclose(gates.s())
    assert gates.phase_shift(np.pi / 4).allclose(gates.t())
    assert gates.phase_shift(0.0) == gates.identity()


def test_rotations_at_pi_match_paulis_up_to_phase():
    assert np.allclose(gates.rx(np.pi).matrix, -1j * gates.X)
    assert np.allclose(gates.ry(np.pi).matrix, -1j * gates.Y)
    assert np.allclose(gates.rz(np.pi).matrix, -1j * gates.Z)


def test_sqrt_swap_squared_is_swap():
    g = gates.sqrt_swap()
    assert g.then(g).allclose(gates.swap())


def test_controlled_gates_match_explicit_matrices():
    assert np.array_equal(gates.controlled_not().matrix, CNOT)
    assert gates.controlled_x() == gates.controlled_not()
    assert np.array_equal(gates.controlled_z().matrix, CZ)
    assert gates.controlled_phase(np.pi).allclose(gates.controlled_z())


def test_controlled_y():
    expected = np.eye(4, dtype=complex)
    expected[2:, 2:] = gates.Y
    assert np.array_equal(gates.controlled_y().matrix, expected)


def test_toffoli_and_fredkin_match_explicit_matrices():
    assert np.array_equal(gates.toffoli().matrix, TOF)
    assert np.array_equal(gates.fredkin().matrix, FRED)


def test_controlled_u_accepts_matrix_or_gate():
    assert gates.controlled_u(1, gates.Y) == gates.controlled_u(1, Gate(1, gates.Y))
    assert gates.controlled_u(2, gates.controlled_not()) == gates.toffoli()


def test_controlled_u_width_mismatch():
    with pytest.raises(ValidationError):
        gates.controlled_u(2, gates.pauli_x())


def test_controlled_u_rejects_non_unitary():
    with pytest.raises(ValidationError):
        gates.controlled_u(1, np.ones((2, 2)))
