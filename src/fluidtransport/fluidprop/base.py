"""Interface to external real-fluid property services."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping, Optional

from fluidtransport.constants import FLASH_TD, NO_ERROR_STATUS
from fluidtransport.errors import PropertyLookupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportPropertySet:
    """Full output of one real-fluid transport query."""

    viscosity: float  # Pa*s
    dviscosity_dT: float
    dviscosity_drho: float
    conductivity: float  # W/(m*K)
    dconductivity_dT: float
    dconductivity_drho: float
    surface_tension: float  # N/m


@dataclass(frozen=True)
class ServiceResult:
    properties: TransportPropertySet
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RealFluidService(ABC):
    """Abstract base class for real-fluid transport property engines."""

    @abstractmethod
    def all_transport_properties(
        self, flash_spec: str, first: float, second: float
    ) -> TransportPropertySet:
        """Evaluate every transport property at the given flash state."""
        pass

    @abstractmethod
    def last_error(self) -> str:
        """Status message of the most recent call."""
        pass


def query_transport(service: RealFluidService, temperature: float, density: float) -> ServiceResult:
    """Query ``service`` at (T, rho) and fold its status string into the result."""
    properties = service.all_transport_properties(FLASH_TD, temperature, density)
    status = service.last_error()
    if status and status != NO_ERROR_STATUS:
        return ServiceResult(properties=properties, error=status)
    return ServiceResult(properties=properties)


def report_service_error(
    result: ServiceResult,
    quantity: str,
    temperature: float,
    density: float,
    values: Mapping[str, float],
    strict: bool = False,
) -> None:
    """Log a failed service call and raise when ``strict`` is set."""
    if result.ok:
        return
    shown = ", ".join(f"{name} = {value:g}" for name, value in values.items())
    logger.warning(
        "Real-fluid service error while evaluating %s: %s (T = %g, rho = %g, %s)",
        quantity,
        result.error,
        temperature,
        density,
        shown,
    )
    if strict:
        raise PropertyLookupError(result.error, temperature, density, result.properties)
