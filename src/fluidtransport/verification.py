"""Finite-difference checks of analytic transport derivatives.

Models that expose ``exact_derivatives = False`` (Sutherland with
``t_ref != 1``) still get their temperature derivative reported, but the
check is marked as not enforced. Conductivity models with
``uses_viscosity`` inherit that flag from the viscosity model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from fluidtransport.conductivity import ConductivityModel
from fluidtransport.viscosity import ViscosityModel


@dataclass(frozen=True)
class DerivativeCheck:
    quantity: str
    analytic: float
    numeric: float
    enforced: bool = True

    @property
    def relative_error(self) -> float:
        scale = max(abs(self.analytic), abs(self.numeric))
        if scale == 0.0:
            return 0.0
        return abs(self.analytic - self.numeric) / scale

    def passed(self, tolerance: float = 1e-6) -> bool:
        return bool(np.isfinite(self.relative_error) and self.relative_error <= tolerance)


def central_difference(function, x: float, step: float) -> float:
    return (function(x + step) - function(x - step)) / (2.0 * step)


def has_exact_derivatives(model) -> bool:
    return bool(getattr(model, "exact_derivatives", True))


def check_viscosity_derivatives(
    model: ViscosityModel, temperature: float, density: float, step: float = 1e-4
) -> List[DerivativeCheck]:
    """Compare ``viscosity_derivatives`` with central differences of ``viscosity``."""
    dmudrho, dmudT = model.viscosity_derivatives(temperature, density)
    return [
        DerivativeCheck(
            "dmudT_rho",
            float(dmudT),
            central_difference(lambda T: float(model.viscosity(T, density)), temperature, step),
            enforced=has_exact_derivatives(model),
        ),
        DerivativeCheck(
            "dmudrho_T",
            float(dmudrho),
            central_difference(lambda rho: float(model.viscosity(temperature, rho)), density, step),
        ),
    ]


def check_conductivity_derivatives(
    viscosity_model: ViscosityModel,
    conductivity_model: ConductivityModel,
    temperature: float,
    density: float,
    heat_capacity: float,
    step: float = 1e-4,
) -> List[DerivativeCheck]:
    """Same check for conductivity, with viscosity re-evaluated at every perturbed point.

    ``heat_capacity`` is held fixed across the perturbation.
    """

    def kt(T: float, rho: float) -> float:
        viscosity = viscosity_model.evaluate(T, rho)
        return float(conductivity_model.evaluate(T, rho, heat_capacity, viscosity).kt)

    coupled = bool(getattr(conductivity_model, "uses_viscosity", False))
    state = conductivity_model.evaluate(
        temperature, density, heat_capacity, viscosity_model.evaluate(temperature, density)
    )
    return [
        DerivativeCheck(
            "dktdT_rho",
            float(state.dktdT_rho),
            central_difference(lambda T: kt(T, density), temperature, step),
            enforced=not coupled or has_exact_derivatives(viscosity_model),
        ),
        DerivativeCheck(
            "dktdrho_T",
            float(state.dktdrho_T),
            central_difference(lambda rho: kt(temperature, rho), density, step),
        ),
    ]
