from typing import Sequence

from gpx_speed_sim.errors import InsufficientDataError
from gpx_speed_sim.models import RangeSummary, SimulationPoint


def aggregate(
    data: Sequence[SimulationPoint], start_index: int = 0, end_index: int | None = None
) -> RangeSummary:
    """Summarize time, distance, speed and power between two result indices.

    Totals are differences of the cumulative series at the range ends, so
    any sub-range can be recomputed without re-running the simulation.
    Average power is weighted by the time each segment takes, since
    segments have unequal durations.

    Args:
        data: Simulation points, starting with the synthetic origin point
        start_index: First index of the range (inclusive)
        end_index: Last index of the range (inclusive), defaults to the last point

    Raises:
        InsufficientDataError: if data is empty
        IndexError: if the indices do not satisfy 0 <= start <= end < len(data)
    """
    if not data:
        raise InsufficientDataError("No simulation data to aggregate")
    if end_index is None:
        end_index = len(data) - 1
    if not 0 <= start_index <= end_index <= len(data) - 1:
        raise IndexError(
            f"Invalid range [{start_index}, {end_index}] for {len(data)} points"
        )

    start = data[start_index]
    end = data[end_index]
    total_time = end.time - start.time
    total_distance = end.distance - start.distance

    avg_speed = total_distance / total_time * 3.6 if total_time > 0 else 0.0

    energy = 0.0
    for i in range(start_index + 1, end_index + 1):
        energy += data[i].power * (data[i].time - data[i - 1].time)
    avg_power = energy / total_time if total_time > 0 else 0.0

    return RangeSummary(
        start_index=start_index,
        end_index=end_index,
        total_time=total_time,
        total_distance=total_distance,
        avg_speed=avg_speed,
        avg_power=avg_power,
    )
