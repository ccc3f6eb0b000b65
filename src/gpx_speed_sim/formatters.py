"""Formatting utilities for display."""

from gpx_speed_sim.models import RangeSummary


def format_duration_long(seconds: float) -> str:
    """Format seconds as Xh Ym Zs string."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    return f"{hours}h {minutes:02d}m {secs:02d}s"


def format_distance_km(meters: float) -> str:
    return f"{meters / 1000:.2f} km"


def format_range_label(start_m: float, end_m: float) -> str:
    """Format a selected distance window as (a - b km)."""
    return f"({start_m / 1000:.1f} - {end_m / 1000:.1f} km)"


def format_summary(summary: RangeSummary) -> str:
    """Format a range summary as aligned label/value lines."""
    return "\n".join([
        f"Distance:       {format_distance_km(summary.total_distance)}",
        f"Total Time:     {format_duration_long(summary.total_time)}",
        f"Avg Speed:      {summary.avg_speed:.1f} km/h",
        f"Avg Power:      {summary.avg_power:.0f} W",
    ])
