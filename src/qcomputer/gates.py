import numpy as np

from .errors import ValidationError
from .gate import Gate, tensor


## 1 qubit matrices

I = np.array([
    [1, 0],
    [0, 1],
], dtype=complex)

X = np.array([
    [0, 1],
    [1, 0],
], dtype=complex)

Y = np.array([
    [0, -1j],
    [1j, 0],
], dtype=complex)

Z = np.array([
    [1, 0],
    [0, -1],
], dtype=complex)

H = (1 / np.sqrt(2)) * np.array([
    [1, 1],
    [1, -1],
], dtype=complex)

S = np.array([
    [1, 0],
    [0, 1j],
], dtype=complex)

T = np.array([
    [1, 0],
    [0, np.exp(1j * np.pi / 4)],
], dtype=complex)


## 2 qubit matrices

SWAP = np.array([
    [1,0,0,0],
    [0,0,1,0],
    [0,1,0,0],
    [0,0,0,1],
], dtype=complex)

SQRT_SWAP = np.array([
    [1, 0, 0, 0],
    [0, (1 + 1j) / 2, (1 - 1j) / 2, 0],
    [0, (1 - 1j) / 2, (1 + 1j) / 2, 0],
    [0, 0, 0, 1],
], dtype=complex)


def _power(matrix: np.ndarray, width: int) -> Gate:
    """`matrix` on each of `width` qubits."""
    if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
        raise ValidationError(f"width must be a positive int, got {width!r}")
    return tensor(*[Gate(1, matrix)] * int(width))


def identity(width: int = 1) -> Gate:
    """The identity gate, not mutating the state at all."""
    if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
        raise ValidationError(f"width must be a positive int, got {width!r}")
    return Gate(width, np.eye(2 ** int(width), dtype=complex))


def hadamard(width: int = 1) -> Gate:
    return _power(H, width)


def pauli_x(width: int = 1) -> Gate:
    return _power(X, width)


def pauli_y(width: int = 1) -> Gate:
    return _power(Y, width)


def pauli_z(width: int = 1) -> Gate:
    return _power(Z, width)


def s() -> Gate:
    return Gate(1, S)


def t() -> Gate:
    return Gate(1, T)


def phase_shift(angle: float) -> Gate:
    """
    R(phi) = [[1, 0],
              [0, e^{i phi}]]
    """
    return Gate(1, np.array([
        [1, 0],
        [0, np.exp(1j * float(angle))],
    ], dtype=complex))


def rz(theta: float) -> Gate:
    """
    RZ(theta) = exp(-i theta Z/2) =
    [[e^{-iθ/2}, 0],
     [0, e^{+iθ/2}]]
    """
    t = float(theta) / 2.0
    return Gate(1, np.array([
        [np.exp(-1j * t), 0.0],
        [0.0, np.exp(1j * t)],
    ], dtype=complex))


def ry(theta: float) -> Gate:
    """
    RY(theta) = exp(-i theta Y/2) =
    [[cos(θ/2), -sin(θ/2)],
     [sin(θ/2),  cos(θ/2)]]
    """
    t = float(theta) / 2.0
    c = np.cos(t)
    s = np.sin(t)
    return Gate(1, np.array([
        [c, -s],
        [s,  c],
    ], dtype=complex))


def rx(theta: float) -> Gate:
    """
    RX(theta) = exp(-i theta X/2) =
    [[cos(θ/2), -i sin(θ/2)],
     [-i sin(θ/2), cos(θ/2)]]
    """
    t = float(theta) / 2.0
    c = np.cos(t)
    s = np.sin(t)
    return Gate(1, np.array([
        [c, -1j * s],
        [-1j * s, c],
    ], dtype=complex))


def swap() -> Gate:
    return Gate(2, SWAP)


def sqrt_swap() -> Gate:
    return Gate(2, SQRT_SWAP)


## controlled gates: control is qubit 0 of the resulting gate

def controlled_u(width: int, u) -> Gate:
    """
    Single-control version of `u`, where `width` is the width of `u`.
    `u` may be a Gate or a 2**width x 2**width matrix.
    """
    if not isinstance(u, Gate):
        u = Gate(width, u)
    if u.width != width:
        raise ValidationError(f"controlled_u: width {width} does not match gate of width {u.width}")
    return u.controlled()


def controlled_not() -> Gate:
    return controlled_u(1, X)


def controlled_x() -> Gate:
    return controlled_not()


def controlled_y() -> Gate:
    return controlled_u(1, Y)


def controlled_z() -> Gate:
    return controlled_u(1, Z)


def controlled_phase(angle: float) -> Gate:
    return controlled_u(1, phase_shift(angle))


def toffoli() -> Gate:
    return Gate(1, X).controlled(2)


def fredkin() -> Gate:
    return controlled_u(2, SWAP)
