"""Profile chart generation."""

import io
import math

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

from gpx_speed_sim.models import SimulationPoint
from gpx_speed_sim.profile import calculate_profile_data, downsample, map_range_to_downsampled
from gpx_speed_sim.selection import selection_mask

SELECTION_COLOR = '#ef4444'

# metric -> (series key, axis label, line color)
METRICS = {
    'elevation': ('elevations', 'Elevation (m)', '#4a90d9'),
    'grade': ('grades', 'Grade (%)', '#333333'),
    'speed': ('speeds_kmh', 'Speed (km/h)', '#2196F3'),
    'power': ('powers', 'Power (W)', '#ff6600'),
}


def _selection_bounds(data: list[SimulationPoint], selection: tuple[int, int] | None) -> tuple[int, int] | None:
    if selection is None:
        return None
    return map_range_to_downsampled(data, downsample(data), selection[0], selection[1])


def _to_png(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=100, facecolor='white', edgecolor='none')
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()


def generate_profile_chart(
    data: list[SimulationPoint],
    metric: str,
    selection: tuple[int, int] | None = None,
    aspect_ratio: float = 3.5,
) -> bytes:
    """Generate a metric-vs-distance chart.

    Args:
        data: Simulation points
        metric: One of "elevation", "grade", "speed" or "power"
        selection: Optional (start_index, end_index) into data, drawn highlighted
        aspect_ratio: Width/height ratio

    Returns PNG image as bytes.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric: {metric}. Use one of {', '.join(METRICS)}.")
    key, label, color = METRICS[metric]

    profile = calculate_profile_data(data)
    distances = profile['distances_km']
    values = profile[key]

    fig_height = 3
    fig, ax = plt.subplots(figsize=(fig_height * aspect_ratio, fig_height), facecolor='white')

    ax.plot(distances, values, color=color, linewidth=1.5)
    if metric == 'elevation':
        ax.fill_between(distances, min(values), values, color=color, alpha=0.2)
    if metric == 'grade':
        ax.axhline(y=0, color='#333333', linewidth=0.5, alpha=0.3, linestyle='--')

    bounds = _selection_bounds(data, selection)
    if bounds is not None:
        lo, hi = bounds
        # NaN outside the selection breaks the highlight line there
        mask = selection_mask(len(values), lo, hi)
        selected = [v if inside else math.nan for v, inside in zip(values, mask)]
        ax.plot(distances, selected, color=SELECTION_COLOR, linewidth=3)
        ax.axvspan(distances[lo], distances[hi], color=SELECTION_COLOR, alpha=0.15, zorder=0.5)

    if distances:
        ax.set_xlim(distances[0], distances[-1])
    ax.set_xlabel('Distance (km)', fontsize=10)
    ax.set_ylabel(label, fontsize=10)
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.grid(axis='y', alpha=0.3, linestyle='-', linewidth=0.5)
    fig.tight_layout()

    return _to_png(fig)


def generate_progress_chart(
    data: list[SimulationPoint],
    selection: tuple[int, int] | None = None,
    aspect_ratio: float = 3.5,
) -> bytes:
    """Generate cumulative distance and elevation gain against elapsed time.

    Returns PNG image as bytes.
    """
    profile = calculate_profile_data(data)
    times = profile['times_hours']
    distances = profile['distances_km']
    gains = profile['elevation_gains']

    fig_height = 3
    fig, ax = plt.subplots(figsize=(fig_height * aspect_ratio, fig_height), facecolor='white')

    ax.plot(times, distances, color='#4a90d9', linewidth=1.5)
    ax.set_xlabel('Time (hours)', fontsize=10)
    ax.set_ylabel('Distance (km)', fontsize=10, color='#4a90d9')
    ax.tick_params(axis='y', labelcolor='#4a90d9')

    ax2 = ax.twinx()
    ax2.plot(times, gains, color='#4CAF50', linewidth=1.2, alpha=0.8)
    ax2.set_ylabel('Elevation Gain (m)', fontsize=10, color='#4CAF50')
    ax2.tick_params(axis='y', labelcolor='#4CAF50')
    ax2.spines['top'].set_visible(False)

    bounds = _selection_bounds(data, selection)
    if bounds is not None:
        lo, hi = bounds
        ax.axvspan(times[lo], times[hi], color=SELECTION_COLOR, alpha=0.15, zorder=0.5)

    if times:
        ax.set_xlim(0, times[-1])
    ax.spines['top'].set_visible(False)
    ax.grid(axis='y', alpha=0.3, linestyle='-', linewidth=0.5)
    fig.tight_layout()

    return _to_png(fig)
