from . import invite_codes
from . import join_registry
from . import tripcrew_service
from . import traveler_service
from . import trip_service

__all__ = [
    "invite_codes",
    "join_registry",
    "tripcrew_service",
    "traveler_service",
    "trip_service",
]
