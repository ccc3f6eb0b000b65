"""Turn map and chart selections into index ranges over simulation results."""

from typing import Sequence

from gpx_speed_sim.distance import haversine_distance
from gpx_speed_sim.models import BoundingBox, SimulationPoint


def select_in_bounds(
    data: Sequence[SimulationPoint], bbox: BoundingBox
) -> tuple[int, int] | None:
    """Return the first and last indices whose coordinates fall inside bbox.

    The synthetic origin point has no coordinates and is never selected.
    Returns None when no point lies inside the box.
    """
    start_idx = None
    end_idx = None
    for i in range(1, len(data)):
        pt = data[i]
        if pt.lat is None or pt.lon is None:
            continue
        if bbox.contains(pt.lat, pt.lon):
            if start_idx is None:
                start_idx = i
            end_idx = i

    if start_idx is None:
        return None
    return start_idx, end_idx


def select_distance_range(
    data: Sequence[SimulationPoint], start_km: float, end_km: float
) -> tuple[int, int] | None:
    """Return the index range covering a distance window along the route.

    The start index is the first point at or beyond start_km and the end
    index is the last point at or before end_km. Returns None when the
    window does not span at least one segment.
    """
    if start_km > end_km:
        start_km, end_km = end_km, start_km
    start_m = start_km * 1000
    end_m = end_km * 1000

    start_idx = None
    for i, pt in enumerate(data):
        if pt.distance >= start_m:
            start_idx = i
            break
    if start_idx is None:
        return None

    end_idx = len(data) - 1
    for i, pt in enumerate(data):
        if pt.distance <= end_m:
            end_idx = i

    if start_idx < end_idx:
        return start_idx, end_idx
    return None


def find_closest_point(data: Sequence[SimulationPoint], lat: float, lon: float) -> int | None:
    """Index of the simulation point nearest to (lat, lon), or None."""
    best_idx = None
    best_dist = float("inf")
    for i in range(1, len(data)):
        pt = data[i]
        if pt.lat is None or pt.lon is None:
            continue
        d = haversine_distance(lat, lon, pt.lat, pt.lon)
        if d < best_dist:
            best_dist = d
            best_idx = i
    return best_idx


def selection_mask(length: int, start_index: int, end_index: int) -> list[bool]:
    """Boolean mask marking indices inside [start_index, end_index]."""
    return [start_index <= i <= end_index for i in range(length)]


def is_full_range(data: Sequence[SimulationPoint], start_index: int, end_index: int) -> bool:
    return start_index == 0 and end_index == len(data) - 1
