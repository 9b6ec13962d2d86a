"""Stateful per-point evaluation of a viscosity/conductivity model pair."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from fluidtransport.conductivity import ConductivityModel
from fluidtransport.errors import EvaluationOrderError
from fluidtransport.models import ConductivityState, TransportState, Value, ViscosityState
from fluidtransport.viscosity import ViscosityModel

logger = logging.getLogger(__name__)


class TransportEvaluator:
    """Cache of the last evaluated transport point.

    Mirrors the set-then-read usage of a flow solver: ``set_viscosity`` and
    ``set_der_viscosity`` fill ``mu``, ``dmudrho_T`` and ``dmudT_rho``;
    ``set_conductivity`` and ``set_der_conductivity`` then read those cached
    viscosity values, so they raise ``EvaluationOrderError`` unless viscosity
    was evaluated at the same (T, rho) first.

    Not thread safe; use one evaluator per evaluation thread.
    """

    def __init__(self, viscosity_model: ViscosityModel, conductivity_model: ConductivityModel):
        self.viscosity_model = viscosity_model
        self.conductivity_model = conductivity_model

        self.mu: Value = 0.0
        self.dmudrho_T: Value = 0.0
        self.dmudT_rho: Value = 0.0
        self.kt: Value = 0.0
        self.dktdrho_T: Value = 0.0
        self.dktdT_rho: Value = 0.0

        self._mu_point: Optional[Tuple[Value, Value]] = None
        self._dmu_point: Optional[Tuple[Value, Value]] = None

    def set_viscosity(self, temperature: Value, density: Value) -> None:
        self.mu = self.viscosity_model.viscosity(temperature, density)
        self._mu_point = (temperature, density)

    def set_der_viscosity(self, temperature: Value, density: Value) -> None:
        self.dmudrho_T, self.dmudT_rho = self.viscosity_model.viscosity_derivatives(temperature, density)
        self._dmu_point = (temperature, density)

    def set_conductivity(self, temperature: Value, density: Value, heat_capacity: Value) -> None:
        self._require(self._mu_point, "viscosity", temperature, density)
        self.kt = self.conductivity_model.conductivity(temperature, density, self.mu, heat_capacity)

    def set_der_conductivity(self, temperature: Value, density: Value, heat_capacity: Value) -> None:
        self._require(self._dmu_point, "viscosity derivatives", temperature, density)
        self.dktdrho_T, self.dktdT_rho = self.conductivity_model.conductivity_derivatives(
            temperature, density, self.dmudrho_T, self.dmudT_rho, heat_capacity
        )

    def evaluate(self, temperature: Value, density: Value, heat_capacity: Value) -> TransportState:
        """Evaluate viscosity, then conductivity, and refresh the cache."""
        viscosity = self.viscosity_model.evaluate(temperature, density)
        conductivity = self.conductivity_model.evaluate(temperature, density, heat_capacity, viscosity)

        self.mu, self.dmudrho_T, self.dmudT_rho = viscosity.mu, viscosity.dmudrho_T, viscosity.dmudT_rho
        self.kt, self.dktdrho_T, self.dktdT_rho = conductivity.kt, conductivity.dktdrho_T, conductivity.dktdT_rho
        self._mu_point = self._dmu_point = (temperature, density)

        return TransportState(
            temperature=temperature,
            density=density,
            heat_capacity=heat_capacity,
            viscosity=viscosity,
            conductivity=conductivity,
        )

    @property
    def viscosity_state(self) -> ViscosityState:
        return ViscosityState(self.mu, self.dmudrho_T, self.dmudT_rho)

    @property
    def conductivity_state(self) -> ConductivityState:
        return ConductivityState(self.kt, self.dktdrho_T, self.dktdT_rho)

    def _require(self, point, what: str, temperature: Value, density: Value) -> None:
        if point is None:
            raise EvaluationOrderError(f"Conductivity requested before {what} was evaluated")
        if not (_same(point[0], temperature) and _same(point[1], density)):
            logger.debug("Stale %s point %s, requested (%s, %s)", what, point, temperature, density)
            raise EvaluationOrderError(
                f"Cached {what} belongs to a different state point; evaluate it at "
                f"T = {temperature}, rho = {density} first"
            )


def _same(a: Value, b: Value) -> bool:
    return bool(np.array_equal(np.asarray(a, dtype=float), np.asarray(b, dtype=float), equal_nan=True))
