from .base import (
    RealFluidService,
    ServiceResult,
    TransportPropertySet,
    query_transport,
    report_service_error,
)

__all__ = [
    "RealFluidService",
    "ServiceResult",
    "TransportPropertySet",
    "query_transport",
    "report_service_error",
]
