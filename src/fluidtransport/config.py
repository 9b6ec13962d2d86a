"""Build transport models from JSON-style configuration mappings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from fluidtransport.conductivity import (
    ConductivityModel,
    ConstantConductivity,
    ConstantPrandtl,
    ExternalConductivity,
)
from fluidtransport.constants import AIR_MU_REF, AIR_PRANDTL, AIR_SUTHERLAND_S, AIR_T_REF
from fluidtransport.errors import ConfigurationError
from fluidtransport.evaluator import TransportEvaluator
from fluidtransport.fluidprop.base import RealFluidService
from fluidtransport.viscosity import (
    ConstantViscosity,
    ExternalViscosity,
    SutherlandViscosity,
    ViscosityModel,
)

logger = logging.getLogger(__name__)


def build_service(data: Optional[Mapping[str, Any]]) -> RealFluidService:
    if not data:
        raise ConfigurationError("External transport models need a 'fluid' section")
    backend = data.get("backend", "coolprop").lower()
    if backend == "coolprop":
        # CoolProp is only loaded when a configuration asks for it
        from fluidtransport.fluidprop.coolprop import CoolPropService

        return CoolPropService(data["name"], relative_step=float(data.get("relative_step", 1e-6)))
    raise ConfigurationError(f"Unknown real-fluid backend: {backend}")


def build_viscosity_model(
    data: Mapping[str, Any],
    service: Optional[RealFluidService] = None,
    strict: bool = False,
) -> ViscosityModel:
    v_type = data.get("type", "sutherland").lower()

    if v_type == "constant":
        return ConstantViscosity(value=float(data["value"]))
    elif v_type == "sutherland":
        return SutherlandViscosity(
            mu_ref=float(data.get("mu_ref", AIR_MU_REF)),
            t_ref=float(data.get("t_ref", AIR_T_REF)),
            s=float(data.get("s", AIR_SUTHERLAND_S)),
        )
    elif v_type == "external":
        if service is None:
            raise ConfigurationError("External viscosity requires a real-fluid service")
        return ExternalViscosity(service=service, strict=strict)
    else:
        raise ConfigurationError(f"Unknown viscosity model type: {v_type}")


def build_conductivity_model(
    data: Mapping[str, Any],
    service: Optional[RealFluidService] = None,
    strict: bool = False,
) -> ConductivityModel:
    k_type = data.get("type", "constant_prandtl").lower()

    if k_type == "constant":
        return ConstantConductivity(value=float(data["value"]))
    elif k_type == "constant_prandtl":
        return ConstantPrandtl(prandtl=float(data.get("prandtl", AIR_PRANDTL)))
    elif k_type == "external":
        if service is None:
            raise ConfigurationError("External conductivity requires a real-fluid service")
        return ExternalConductivity(service=service, strict=strict)
    else:
        raise ConfigurationError(f"Unknown conductivity model type: {k_type}")


def build_evaluator(
    config: Mapping[str, Any], service: Optional[RealFluidService] = None
) -> TransportEvaluator:
    """Create the viscosity/conductivity pair described by ``config``.

    A service is only built from the ``fluid`` section when one of the models
    is external and none was passed in.
    """
    viscosity_data: Dict[str, Any] = dict(config.get("viscosity", {}))
    conductivity_data: Dict[str, Any] = dict(config.get("conductivity", {}))
    strict = bool(config.get("strict", False))

    types = {viscosity_data.get("type", "").lower(), conductivity_data.get("type", "").lower()}
    if "external" in types and service is None:
        service = build_service(config.get("fluid"))

    viscosity = build_viscosity_model(viscosity_data, service, strict)
    conductivity = build_conductivity_model(conductivity_data, service, strict)
    logger.debug("Configured %r with %r", viscosity, conductivity)
    return TransportEvaluator(viscosity, conductivity)


def load_config(config_file: str | Path, service: Optional[RealFluidService] = None) -> TransportEvaluator:
    with open(config_file, "r") as f:
        config = json.load(f)
    return build_evaluator(config, service)
