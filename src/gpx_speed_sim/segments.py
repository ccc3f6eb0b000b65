import math

from gpx_speed_sim.distance import haversine_distance
from gpx_speed_sim.models import Segment, TrackPoint


def build_segments(points: list[TrackPoint]) -> list[Segment]:
    """Convert consecutive track points into segments.

    Each segment carries the 3D distance between the pair, the grade
    (rise over horizontal run) and the cumulative 3D distance so far.
    Stacked points with no horizontal separation get a grade of 0.

    Returns an empty list when fewer than 2 points are supplied.
    """
    segments: list[Segment] = []
    cumulative = 0.0

    for i in range(1, len(points)):
        p1 = points[i - 1]
        p2 = points[i]

        horizontal = haversine_distance(p1.lat, p1.lon, p2.lat, p2.lon)
        delta_elev = p2.elevation - p1.elevation
        distance = math.sqrt(horizontal * horizontal + delta_elev * delta_elev)
        grade = delta_elev / horizontal if horizontal > 0 else 0.0

        cumulative += distance
        segments.append(
            Segment(
                distance=distance,
                grade=grade,
                elevation=p2.elevation,
                cumulative_distance=cumulative,
                lat=p2.lat,
                lon=p2.lon,
            )
        )

    return segments
