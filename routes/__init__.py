from . import errors
from . import auth
from . import travelers
from . import tripcrews
from . import join
from . import trips

__all__ = [
    "errors",
    "auth",
    "travelers",
    "tripcrews",
    "join",
    "trips",
]
