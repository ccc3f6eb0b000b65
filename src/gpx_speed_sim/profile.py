"""Chart-ready series built from simulation results."""

import math
from dataclasses import dataclass
from typing import Sequence

from gpx_speed_sim.models import SimulationPoint

# Charts get unreadable with more samples than this across the width
DEFAULT_MAX_POINTS = 150


@dataclass(frozen=True)
class ProfileSample:
    distance: float  # meters
    elevation: float
    speed: float  # km/h
    power: float
    grade: float  # percent
    time: float  # seconds
    elevation_gain: float


def _average(window: Sequence[SimulationPoint]) -> ProfileSample:
    n = len(window)
    return ProfileSample(
        distance=sum(p.distance for p in window) / n,
        elevation=sum(p.elevation for p in window) / n,
        speed=sum(p.speed for p in window) / n,
        power=sum(p.power for p in window) / n,
        grade=sum(p.grade for p in window) / n,
        time=sum(p.time for p in window) / n,
        elevation_gain=sum(p.elevation_gain for p in window) / n,
    )


def downsample(
    data: Sequence[SimulationPoint], max_points: int = DEFAULT_MAX_POINTS
) -> list[ProfileSample]:
    """Reduce the series to at most max_points by averaging fixed-size windows.

    Series already within the limit are converted one-to-one.
    """
    if len(data) <= max_points:
        return [_average([p]) for p in data]

    step = math.ceil(len(data) / max_points)
    return [_average(data[i:i + step]) for i in range(0, len(data), step)]


def calculate_profile_data(
    data: Sequence[SimulationPoint], max_points: int = DEFAULT_MAX_POINTS
) -> dict:
    """Build per-metric lists for plotting, downsampled to max_points."""
    samples = downsample(data, max_points)
    return {
        "distances_km": [s.distance / 1000 for s in samples],
        "elevations": [s.elevation for s in samples],
        "grades": [s.grade for s in samples],
        "speeds_kmh": [s.speed for s in samples],
        "powers": [s.power for s in samples],
        "times_hours": [s.time / 3600 for s in samples],
        "elevation_gains": [s.elevation_gain for s in samples],
    }


def map_range_to_downsampled(
    data: Sequence[SimulationPoint],
    samples: Sequence[ProfileSample],
    start_index: int,
    end_index: int,
) -> tuple[int, int]:
    """Translate a range of result indices into the matching sample indices.

    Series that were not downsampled map one-to-one. Otherwise matching is
    by distance: the first sample at or beyond the start point and the last
    sample at or before the end point.
    """
    if len(samples) == len(data):
        return start_index, end_index

    start_dist = data[start_index].distance
    end_dist = data[end_index].distance

    ds_start = 0
    for i, s in enumerate(samples):
        if s.distance >= start_dist:
            ds_start = i
            break

    ds_end = len(samples) - 1
    for i, s in enumerate(samples):
        if s.distance <= end_dist:
            ds_end = i

    return ds_start, max(ds_start, ds_end)
