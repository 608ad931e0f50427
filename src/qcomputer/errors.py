class QuantumError(Exception):
    """Base class for every error raised by qcomputer."""


class ValidationError(QuantumError, ValueError):
    """
    Raised at construction time for malformed input:
    non-unitary or mis-sized gates, bad qubit counts,
    classical values outside the register, bad target lists.
    """


class StateError(QuantumError, RuntimeError):
    """
    Raised when an operation makes no sense in the current state,
    e.g. reading a value before any collapse or targeting qubits
    the register does not have.
    """
