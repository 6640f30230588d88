from .Enterprise import Enterprise
from .Traveler import Traveler
from .TripCrew import TripCrew
from .TripCrewMember import TripCrewMember
from .TripCrewRole import TripCrewRole, CrewRole, ROLE_VALUES
from .JoinCode import JoinCode
from .Trip import Trip

__all__ = [
    "Enterprise",
    "Traveler",
    "TripCrew",
    "TripCrewMember",
    "TripCrewRole",
    "CrewRole",
    "ROLE_VALUES",
    "JoinCode",
    "Trip",
]
