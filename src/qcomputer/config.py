"""Numerical tolerances and limits for the simulator."""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Callable, Iterator, TypeVar

from .errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class SimulatorConfig:
    unitary_atol: float = 1e-10   # Frobenius norm of U^H U - I
    norm_atol: float = 1e-10      # | sum |a|^2 - 1 | before a state is renormalised
    drift_atol: float = 1e-6      # | sum |a|^2 - 1 | treated as a broken gate
    max_qubits: int = 24          # 2**24 complex128 amplitudes = 256 MiB
    check_norm: bool = True       # verify normalisation after every apply


def _env(name: str, default: str, parse: Callable[[str], T]) -> T:
    raw = os.getenv(name, default)
    try:
        return parse(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid value for {name}: {raw!r} ({e})") from e


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError("expected true or false")


def _from_env() -> SimulatorConfig:
    return SimulatorConfig(
        unitary_atol=_env("QCOMPUTER_UNITARY_ATOL", "1e-10", float),
        norm_atol=_env("QCOMPUTER_NORM_ATOL", "1e-10", float),
        drift_atol=_env("QCOMPUTER_DRIFT_ATOL", "1e-6", float),
        max_qubits=_env("QCOMPUTER_MAX_QUBITS", "24", int),
        check_norm=_env("QCOMPUTER_CHECK_NORM", "true", _parse_bool),
    )


_config = _from_env()


def get_config() -> SimulatorConfig:
    return _config


def set_config(**changes) -> SimulatorConfig:
    """
    Replace fields of the active configuration and return the new one.

    Unknown field names raise TypeError.
    """
    global _config

    known = {f.name for f in fields(SimulatorConfig)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Unknown config field(s): {sorted(unknown)}")

    _config = replace(_config, **changes)
    return _config


@contextmanager
def override(**changes) -> Iterator[SimulatorConfig]:
    """
    Temporarily change tolerances, e.g. in tests:

        with override(unitary_atol=1e-3):
            Gate(1, almost_unitary)
    """
    global _config

    saved = _config
    try:
        yield set_config(**changes)
    finally:
        _config = saved
