"""Exception types for transport property models."""

from __future__ import annotations


class TransportModelError(RuntimeError):
    """Base class for transport model failures."""


class PropertyLookupError(TransportModelError):
    """Raised when the real-fluid service reports an error for a state point."""

    def __init__(self, message: str, temperature: float, density: float, properties=None):
        super().__init__(
            f"Property service error at T = {temperature} K, rho = {density} kg/m^3: {message}"
        )
        self.status = message
        self.temperature = temperature
        self.density = density
        self.properties = properties


class EvaluationOrderError(TransportModelError):
    """Raised when conductivity is requested before viscosity at the same point."""


class ConfigurationError(ValueError):
    """Raised for unknown or incomplete model configuration."""
