"""Thermal conductivity models and their partial derivatives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np

from fluidtransport.fluidprop.base import RealFluidService, query_transport, report_service_error
from fluidtransport.models import ConductivityState, Value, ViscosityState, as_value, constant_at, zeros_at


class ConductivityModel(Protocol):
    def conductivity(self, temperature: Value, density: Value, viscosity: Value, heat_capacity: Value) -> Value:
        """Thermal conductivity at (T, rho) given mu and cp at the same point."""
        ...

    def conductivity_derivatives(
        self,
        temperature: Value,
        density: Value,
        dmudrho_T: Value,
        dmudT_rho: Value,
        heat_capacity: Value,
    ) -> Tuple[Value, Value]:
        """Return ``(dkt/drho at constant T, dkt/dT at constant rho)``."""
        ...

    def evaluate(
        self, temperature: Value, density: Value, heat_capacity: Value, viscosity: ViscosityState
    ) -> ConductivityState:
        ...


@dataclass(frozen=True)
class ConstantConductivity:
    value: float = 0.0

    def conductivity(self, temperature, density, viscosity=0.0, heat_capacity=0.0) -> Value:
        return constant_at(self.value, temperature, density)

    def conductivity_derivatives(
        self, temperature, density, dmudrho_T=0.0, dmudT_rho=0.0, heat_capacity=0.0
    ) -> Tuple[Value, Value]:
        zero = zeros_at(temperature, density)
        return zero, zero

    def evaluate(self, temperature, density, heat_capacity, viscosity: ViscosityState) -> ConductivityState:
        dktdrho, dktdT = self.conductivity_derivatives(temperature, density)
        return ConductivityState(self.conductivity(temperature, density), dktdrho, dktdT)


@dataclass(frozen=True)
class ConstantPrandtl:
    """Conductivity tied to viscosity through a fixed Prandtl number.

    kt = mu * cp / Pr. Temperature and density enter only through the
    viscosity passed in, which must be evaluated at the same point.
    """

    prandtl: float = 0.0

    uses_viscosity = True

    def conductivity(self, temperature, density, viscosity: Value, heat_capacity: Value) -> Value:
        return self._scale(viscosity, heat_capacity)

    def conductivity_derivatives(
        self, temperature, density, dmudrho_T: Value, dmudT_rho: Value, heat_capacity: Value
    ) -> Tuple[Value, Value]:
        return self._scale(dmudrho_T, heat_capacity), self._scale(dmudT_rho, heat_capacity)

    def evaluate(self, temperature, density, heat_capacity, viscosity: ViscosityState) -> ConductivityState:
        dktdrho, dktdT = self.conductivity_derivatives(
            temperature, density, viscosity.dmudrho_T, viscosity.dmudT_rho, heat_capacity
        )
        return ConductivityState(
            kt=self.conductivity(temperature, density, viscosity.mu, heat_capacity),
            dktdrho_T=dktdrho,
            dktdT_rho=dktdT,
        )

    def _scale(self, quantity: Value, heat_capacity: Value) -> Value:
        with np.errstate(divide="ignore", invalid="ignore"):
            return as_value(np.asarray(quantity, dtype=float) * heat_capacity / self.prandtl)


@dataclass(frozen=True)
class ExternalConductivity:
    """Conductivity looked up from a real-fluid property service.

    Reads the conductivity slot of the service output; viscosity and surface
    tension are discarded. Error policy as ``ExternalViscosity``.
    """

    service: RealFluidService
    strict: bool = False

    def conductivity(self, temperature, density, viscosity=None, heat_capacity=None) -> float:
        return self._lookup(temperature, density).kt

    def conductivity_derivatives(
        self, temperature, density, dmudrho_T=None, dmudT_rho=None, heat_capacity=None
    ) -> Tuple[float, float]:
        state = self._lookup(temperature, density)
        return state.dktdrho_T, state.dktdT_rho

    def evaluate(self, temperature, density, heat_capacity=None, viscosity=None) -> ConductivityState:
        return self._lookup(temperature, density)

    def _lookup(self, temperature: float, density: float) -> ConductivityState:
        result = query_transport(self.service, temperature, density)
        props = result.properties
        state = ConductivityState(
            kt=props.conductivity,
            dktdrho_T=props.dconductivity_drho,
            dktdT_rho=props.dconductivity_dT,
            error=result.error,
        )
        report_service_error(
            result,
            "conductivity",
            temperature,
            density,
            {"kt": state.kt, "dktdT_rho": state.dktdT_rho, "dktdrho_T": state.dktdrho_T},
            strict=self.strict,
        )
        return state
