from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType


@dataclass(frozen=True)
class RoverLocation:
    name: str
    longitude: float  # degrees, east positive
    latitude: float
    landing_date: datetime
    landing_sol: int = 0


ROVER_LOCATIONS = MappingProxyType(
    {
        "curiosity": RoverLocation(
            name="Curiosity",
            longitude=137.4417,  # Gale Crater
            latitude=-4.5895,
            landing_date=datetime(2012, 8, 6, 5, 17, 57, tzinfo=timezone.utc),
        ),
        "perseverance": RoverLocation(
            name="Perseverance",
            longitude=77.4509,  # Jezero Crater
            latitude=18.4447,
            landing_date=datetime(2021, 2, 18, 20, 55, 0, tzinfo=timezone.utc),
        ),
    }
)


class InvalidRoverError(ValueError):
    def __init__(self, message: str, code: str):
        super().__init__(message)
        self.code = code


def validate_rover(rover) -> str:
    """
    Normalizes a rover name ("  Curiosity " -> "curiosity").

    Raises:
        InvalidRoverError: code INVALID_TYPE for non-strings,
            INVALID_ROVER for names not in ROVER_LOCATIONS.
    """
    if not isinstance(rover, str):
        raise InvalidRoverError("Rover must be a string", "INVALID_TYPE")

    name = rover.strip().lower()
    if name not in ROVER_LOCATIONS:
        raise InvalidRoverError(
            f"Invalid rover name. Must be one of: {', '.join(ROVER_LOCATIONS)}",
            "INVALID_ROVER",
        )
    return name
