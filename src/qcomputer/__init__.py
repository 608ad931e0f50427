from .errors   import QuantumError, ValidationError, StateError
from .config   import SimulatorConfig, get_config, set_config, override
from .ket      import Ket
from .gate     import Gate, tensor
from .register import QuantumRegister
from .computer import QuantumComputer
from .circuit  import Circuit, Operation
from .gates    import (
    identity, hadamard, pauli_x, pauli_y, pauli_z, phase_shift,
    s, t, rx, ry, rz,
    swap, sqrt_swap,
    controlled_u, controlled_not, controlled_x, controlled_y, controlled_z,
    controlled_phase, toffoli, fredkin,
)

__version__ = "0.1.0"
