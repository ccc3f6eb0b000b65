import logging

import gpxpy
import gpxpy.gpx

from gpx_speed_sim.models import TrackPoint

logger = logging.getLogger(__name__)


def _points_from_gpx(gpx: gpxpy.gpx.GPX) -> list[TrackPoint]:
    """Extract track points, falling back to route points when there are none."""
    raw = [pt for track in gpx.tracks for segment in track.segments for pt in segment.points]
    if not raw:
        raw = [pt for route in gpx.routes for pt in route.points]
        if raw:
            logger.debug("No track points, using %d route points", len(raw))

    return [
        TrackPoint(
            lat=pt.latitude,
            lon=pt.longitude,
            elevation=pt.elevation if pt.elevation is not None else 0.0,
        )
        for pt in raw
    ]


def parse_gpx_text(text: str) -> list[TrackPoint]:
    """Parse GPX XML text and return a list of TrackPoints."""
    return _points_from_gpx(gpxpy.parse(text))


def parse_gpx(filepath: str) -> list[TrackPoint]:
    """Parse a GPX file and return a list of TrackPoints."""
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)
    points = _points_from_gpx(gpx)
    logger.debug("Parsed %d points from %s", len(points), filepath)
    return points
