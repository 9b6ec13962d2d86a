"""CoolProp-backed real-fluid transport service."""

from __future__ import annotations

import logging
import math

from CoolProp.CoolProp import PropsSI

from fluidtransport.constants import FLASH_TD, NO_ERROR_STATUS
from fluidtransport.fluidprop.base import RealFluidService, TransportPropertySet

logger = logging.getLogger(__name__)

_NAN = float("nan")


class CoolPropService(RealFluidService):
    """Transport properties from CoolProp's HEOS backend.

    CoolProp reports failures by raising ``ValueError``; this service records
    the message instead so callers can read it back through ``last_error``.
    Derivatives are central differences with a relative step.
    """

    def __init__(self, fluid: str, relative_step: float = 1e-6):
        self.fluid = fluid
        self.relative_step = relative_step
        self._last_error = NO_ERROR_STATUS
        self._t_triple = PropsSI("Ttriple", fluid)
        self._t_crit = PropsSI("Tcrit", fluid)

    def last_error(self) -> str:
        return self._last_error

    def all_transport_properties(
        self, flash_spec: str, first: float, second: float
    ) -> TransportPropertySet:
        if flash_spec != FLASH_TD:
            raise ValueError(f"Unsupported flash specification: {flash_spec}")
        temperature, density = float(first), float(second)
        self._last_error = NO_ERROR_STATUS

        try:
            mu, dmu_dT, dmu_drho = self._with_derivatives("V", temperature, density)
            kt, dkt_dT, dkt_drho = self._with_derivatives("L", temperature, density)
        except ValueError as exc:
            self._last_error = str(exc) or "CoolProp evaluation failed"
            logger.debug("CoolProp failed for %s at T=%g, rho=%g: %s", self.fluid, temperature, density, exc)
            return TransportPropertySet(_NAN, _NAN, _NAN, _NAN, _NAN, _NAN, _NAN)

        return TransportPropertySet(
            viscosity=mu,
            dviscosity_dT=dmu_dT,
            dviscosity_drho=dmu_drho,
            conductivity=kt,
            dconductivity_dT=dkt_dT,
            dconductivity_drho=dkt_drho,
            surface_tension=self._surface_tension(temperature),
        )

    def _props(self, output: str, temperature: float, density: float) -> float:
        return PropsSI(output, "T", temperature, "Dmass", density, self.fluid)

    def _with_derivatives(self, output: str, temperature: float, density: float):
        value = self._props(output, temperature, density)

        dT = self.relative_step * temperature
        d_dT = (
            self._props(output, temperature + dT, density)
            - self._props(output, temperature - dT, density)
        ) / (2.0 * dT)

        drho = self.relative_step * density
        d_drho = (
            self._props(output, temperature, density + drho)
            - self._props(output, temperature, density - drho)
        ) / (2.0 * drho)

        return value, d_dT, d_drho

    def _surface_tension(self, temperature: float) -> float:
        # only defined along the saturation curve
        if not (self._t_triple <= temperature < self._t_crit):
            return _NAN
        try:
            sigma = PropsSI("I", "T", temperature, "Q", 0, self.fluid)
        except ValueError as exc:
            # not every fluid file carries a surface tension correlation
            logger.debug("No surface tension for %s: %s", self.fluid, exc)
            return _NAN
        return sigma if math.isfinite(sigma) else _NAN
