"""Viscosity and thermal conductivity models with analytic derivatives."""

from fluidtransport.conductivity import ConstantConductivity, ConstantPrandtl, ExternalConductivity
from fluidtransport.errors import (
    ConfigurationError,
    EvaluationOrderError,
    PropertyLookupError,
    TransportModelError,
)
from fluidtransport.evaluator import TransportEvaluator
from fluidtransport.models import ConductivityState, TransportState, ViscosityState
from fluidtransport.viscosity import ConstantViscosity, ExternalViscosity, SutherlandViscosity

__all__ = [
    "ConstantViscosity",
    "SutherlandViscosity",
    "ExternalViscosity",
    "ConstantConductivity",
    "ConstantPrandtl",
    "ExternalConductivity",
    "ViscosityState",
    "ConductivityState",
    "TransportState",
    "TransportEvaluator",
    "TransportModelError",
    "PropertyLookupError",
    "EvaluationOrderError",
    "ConfigurationError",
]
