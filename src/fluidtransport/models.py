"""Result records for viscosity and conductivity evaluations."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional, Union

import numpy as np

Value = Union[float, np.ndarray]


def as_value(value: Any) -> Value:
    """Return a plain float for 0-d input, an ndarray otherwise."""
    array = np.asarray(value, dtype=float)
    if array.ndim == 0:
        return float(array)
    return array


class _Record:
    """Field-wise equality that also holds for array-valued fields."""

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return all(
            _values_equal(getattr(self, f.name), getattr(other, f.name)) for f in fields(self)
        )

    __hash__ = None


def _values_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return bool(np.array_equal(np.asarray(a), np.asarray(b)))
    return bool(a == b)


@dataclass(frozen=True, eq=False)
class ViscosityState(_Record):
    mu: Value  # Pa*s
    dmudrho_T: Value = 0.0  # Pa*s / (kg/m^3)
    dmudT_rho: Value = 0.0  # Pa*s / K
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, eq=False)
class ConductivityState(_Record):
    kt: Value  # W/(m*K)
    dktdrho_T: Value = 0.0
    dktdT_rho: Value = 0.0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, eq=False)
class TransportState(_Record):
    """Viscosity and conductivity evaluated at one (T, rho, cp) point."""

    temperature: Value
    density: Value
    heat_capacity: Value
    viscosity: ViscosityState
    conductivity: ConductivityState

    @property
    def prandtl(self) -> Value:
        with np.errstate(divide="ignore", invalid="ignore"):
            return as_value(
                np.asarray(self.viscosity.mu) * np.asarray(self.heat_capacity)
                / np.asarray(self.conductivity.kt)
            )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "T": self.temperature,
            "rho": self.density,
            "cp": self.heat_capacity,
            "viscosity": asdict(self.viscosity),
            "conductivity": asdict(self.conductivity),
            "Pr": self.prandtl,
        }
        return _jsonable(payload)


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, np.ndarray):
        return [_jsonable(item) for item in value.tolist()]
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    if isinstance(value, np.generic):
        value = value.item()
    # JSON has no inf/NaN
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def zeros_at(*point: Any) -> Value:
    """Zero with the broadcast shape of the evaluation point."""
    shape = np.broadcast(*[np.asarray(p, dtype=float) for p in point]).shape
    return as_value(np.zeros(shape))


def constant_at(value: float, *point: Any) -> Value:
    shape = np.broadcast(*[np.asarray(p, dtype=float) for p in point]).shape
    return as_value(np.full(shape, value, dtype=float))
