from .logger import setup_api_logger, get_logger
from .trip_metadata import compute_trip_metadata, format_date_range

__all__ = [
    "setup_api_logger",
    "get_logger",
    "compute_trip_metadata",
    "format_date_range",
]
