import pytest

from gpx_speed_sim.models import RiderParams, TrackPoint


@pytest.fixture
def rider_params():
    return RiderParams()


@pytest.fixture
def simple_track_points():
    """A short list of track points for unit testing: flat, ~139m apart."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=10.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=10.0),
    ]


@pytest.fixture
def uphill_track_points():
    """Track points going uphill."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=20.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=35.0),
    ]


@pytest.fixture
def downhill_track_points():
    """Track points going downhill."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=50.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=30.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=10.0),
    ]


@pytest.fixture
def rolling_track_points():
    """Climb, descent and a stacked duplicate point."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=100.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=105.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=112.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=113.0),
        TrackPoint(lat=37.7776, lon=-122.4161, elevation=100.0),
        TrackPoint(lat=37.7785, lon=-122.4150, elevation=85.0),
        TrackPoint(lat=37.7794, lon=-122.4139, elevation=85.0),
        TrackPoint(lat=37.7803, lon=-122.4128, elevation=90.0),
    ]
