import math
from dataclasses import dataclass, fields

from gpx_speed_sim.errors import InvalidParameterError


@dataclass(frozen=True)
class TrackPoint:
    lat: float
    lon: float
    elevation: float = 0.0  # meters


@dataclass(frozen=True)
class Segment:
    distance: float  # meters, 3D
    grade: float  # rise/run, 0 when horizontal distance is 0
    elevation: float  # meters, trailing point
    cumulative_distance: float  # meters
    lat: float
    lon: float


@dataclass(frozen=True)
class SimulationPoint:
    distance: float  # cumulative meters
    elevation: float  # meters
    speed: float  # km/h
    power: float  # watts
    time: float  # cumulative seconds
    grade: float  # percent
    elevation_gain: float  # cumulative meters
    lat: float | None = None  # absent on the synthetic start point
    lon: float | None = None


@dataclass(frozen=True)
class RiderParams:
    total_mass: float = 80.0  # kg (rider + bike)
    cda: float = 0.3  # m² (drag coefficient * frontal area)
    max_power: float = 250.0  # watts
    max_speed: float = 40.0  # km/h

    @property
    def max_speed_ms(self) -> float:
        return self.max_speed / 3.6

    def validate(self) -> None:
        """Raise InvalidParameterError unless every field is finite and positive."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(f"{f.name} must be a positive number, got {value!r}")


@dataclass(frozen=True)
class RangeSummary:
    start_index: int
    end_index: int
    total_time: float  # seconds
    total_distance: float  # meters
    avg_speed: float  # km/h
    avg_power: float  # watts (time-weighted)


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east
