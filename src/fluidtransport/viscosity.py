"""Dynamic viscosity models and their partial derivatives.

Every model returns ``mu`` together with ``(dmu/drho)_T`` and ``(dmu/dT)_rho``.
The analytic models accept scalars or numpy arrays; division by zero and
out-of-domain powers produce inf/NaN rather than raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

import numpy as np

from fluidtransport.fluidprop.base import RealFluidService, query_transport, report_service_error
from fluidtransport.models import Value, ViscosityState, as_value, constant_at, zeros_at


class ViscosityModel(Protocol):
    def viscosity(self, temperature: Value, density: Value) -> Value:
        """Dynamic viscosity at (T, rho)."""
        ...

    def viscosity_derivatives(self, temperature: Value, density: Value) -> Tuple[Value, Value]:
        """Return ``(dmu/drho at constant T, dmu/dT at constant rho)``."""
        ...

    def evaluate(self, temperature: Value, density: Value) -> ViscosityState:
        ...


@dataclass(frozen=True)
class ConstantViscosity:
    value: float = 0.0

    def viscosity(self, temperature: Value, density: Value) -> Value:
        return constant_at(self.value, temperature, density)

    def viscosity_derivatives(self, temperature: Value, density: Value) -> Tuple[Value, Value]:
        zero = zeros_at(temperature, density)
        return zero, zero

    def evaluate(self, temperature: Value, density: Value) -> ViscosityState:
        dmudrho, dmudT = self.viscosity_derivatives(temperature, density)
        return ViscosityState(self.viscosity(temperature, density), dmudrho, dmudT)


@dataclass(frozen=True)
class SutherlandViscosity:
    """Sutherland's law.

    mu = mu_ref * (T / T_ref)^1.5 * (T_ref + S) / (T + S)

    The temperature derivative is the solver's closed form:

    dmu/dT = mu_ref * [1.5 (T/T_ref)^0.5 (T_ref+S)/(T+S) - (T/T_ref)^1.5 (T_ref+S)/(T+S)^2]

    Its first term carries no 1/T_ref factor, so it equals the true slope of
    ``viscosity`` only when ``t_ref == 1``.
    """

    mu_ref: float = 0.0  # Pa*s
    t_ref: float = 0.0  # K
    s: float = 0.0  # K

    @property
    def exact_derivatives(self) -> bool:
        return self.t_ref == 1.0

    def viscosity(self, temperature: Value, density: Value = 0.0) -> Value:
        T = np.asarray(temperature, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            mu = self.mu_ref * (T / self.t_ref) ** 1.5 * ((self.t_ref + self.s) / (T + self.s))
        return as_value(mu + zeros_at(density))

    def viscosity_derivatives(self, temperature: Value, density: Value = 0.0) -> Tuple[Value, Value]:
        T = np.asarray(temperature, dtype=float)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            dmudT = self.mu_ref * (
                1.5 * (T / self.t_ref) ** 0.5 * ((self.t_ref + self.s) / (T + self.s))
                - (T / self.t_ref) ** 1.5 * (self.t_ref + self.s) / (T + self.s) / (T + self.s)
            )
        # no density dependence
        dmudrho = zeros_at(temperature, density)
        return dmudrho, as_value(dmudT + dmudrho)

    def evaluate(self, temperature: Value, density: Value = 0.0) -> ViscosityState:
        dmudrho, dmudT = self.viscosity_derivatives(temperature, density)
        return ViscosityState(self.viscosity(temperature, density), dmudrho, dmudT)


@dataclass(frozen=True)
class ExternalViscosity:
    """Viscosity looked up from a real-fluid property service.

    Service errors are logged together with the offending state and the
    returned values. With ``strict`` set they raise ``PropertyLookupError``.
    Scalar inputs only.
    """

    service: RealFluidService
    strict: bool = False

    def viscosity(self, temperature: float, density: float) -> float:
        return self.evaluate(temperature, density).mu

    def viscosity_derivatives(self, temperature: float, density: float) -> Tuple[float, float]:
        state = self.evaluate(temperature, density)
        return state.dmudrho_T, state.dmudT_rho

    def evaluate(self, temperature: float, density: float) -> ViscosityState:
        result = query_transport(self.service, temperature, density)
        props = result.properties
        state = ViscosityState(
            mu=props.viscosity,
            dmudrho_T=props.dviscosity_drho,
            dmudT_rho=props.dviscosity_dT,
            error=result.error,
        )
        report_service_error(
            result,
            "viscosity",
            temperature,
            density,
            {"mu": state.mu, "dmudT_rho": state.dmudT_rho, "dmudrho_T": state.dmudrho_T},
            strict=self.strict,
        )
        return state
