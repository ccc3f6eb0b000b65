import logging
from dataclasses import dataclass
from typing import Sequence

from gpx_speed_sim.aggregate import aggregate
from gpx_speed_sim.errors import InsufficientDataError
from gpx_speed_sim.models import RangeSummary, RiderParams, SimulationPoint, TrackPoint
from gpx_speed_sim.physics import power_needed, solve_speed
from gpx_speed_sim.segments import build_segments

logger = logging.getLogger(__name__)

# Speeds this close to the cap count as speed-limited
SPEED_LIMIT_EPSILON_MS = 0.01


@dataclass(frozen=True)
class SimulationResult:
    points: tuple[SimulationPoint, ...]
    params: RiderParams
    total_distance: float  # meters
    total_time: float  # seconds
    elevation_gain: float  # meters
    avg_speed: float  # km/h
    avg_power: float  # watts (time-weighted)

    def summary(self, start_index: int = 0, end_index: int | None = None) -> RangeSummary:
        """Aggregate a sub-range of this result (defaults to the whole route)."""
        return aggregate(self.points, start_index, end_index)


def segment_power(speed_ms: float, grade: float, params: RiderParams) -> float:
    """Power the rider actually puts out on a segment.

    At the speed cap the rider only needs enough power to hold it, which can
    be well under max_power (or nothing at all on a descent). Below the cap
    the rider is power-limited and rides at max_power.
    """
    if speed_ms >= params.max_speed_ms - SPEED_LIMIT_EPSILON_MS:
        return max(0.0, power_needed(speed_ms, grade, params.total_mass, params.cda))
    return params.max_power


def simulate(points: Sequence[TrackPoint], params: RiderParams) -> SimulationResult:
    """Simulate riding a route at the rider's power and speed limits.

    Returns one SimulationPoint per track point. The first is a synthetic
    origin with zero distance, time, speed and power at the first point's
    elevation; each following point carries cumulative distance, time and
    elevation gain up to that track point.

    Raises:
        InvalidParameterError: if any rider parameter is not positive
        InsufficientDataError: if fewer than 2 track points are supplied
    """
    params.validate()
    if len(points) < 2:
        raise InsufficientDataError(
            f"Route contains fewer than 2 track points ({len(points)})"
        )

    segments = build_segments(points)
    max_speed_ms = params.max_speed_ms

    total_time = 0.0
    elevation_gain = 0.0
    energy = 0.0
    previous_elevation = points[0].elevation

    results = [
        SimulationPoint(
            distance=0.0,
            elevation=points[0].elevation,
            speed=0.0,
            power=0.0,
            time=0.0,
            grade=0.0,
            elevation_gain=0.0,
        )
    ]

    for segment in segments:
        speed_ms = solve_speed(
            segment.grade, params.total_mass, params.cda, params.max_power, max_speed_ms
        )

        previous_time = total_time
        total_time += segment.distance / speed_ms

        delta_elev = segment.elevation - previous_elevation
        if delta_elev > 0:
            elevation_gain += delta_elev
        previous_elevation = segment.elevation

        power = segment_power(speed_ms, segment.grade, params)
        energy += power * (total_time - previous_time)

        results.append(
            SimulationPoint(
                distance=segment.cumulative_distance,
                elevation=segment.elevation,
                speed=speed_ms * 3.6,
                power=power,
                time=total_time,
                grade=segment.grade * 100,
                elevation_gain=elevation_gain,
                lat=segment.lat,
                lon=segment.lon,
            )
        )

    total_distance = segments[-1].cumulative_distance
    avg_speed = total_distance / total_time * 3.6 if total_time > 0 else 0.0
    avg_power = energy / total_time if total_time > 0 else 0.0

    logger.debug(
        "Simulated %d points: %.0f m in %.0f s, avg %.1f km/h @ %.0f W",
        len(results), total_distance, total_time, avg_speed, avg_power,
    )

    return SimulationResult(
        points=tuple(results),
        params=params,
        total_distance=total_distance,
        total_time=total_time,
        elevation_gain=elevation_gain,
        avg_speed=avg_speed,
        avg_power=avg_power,
    )
