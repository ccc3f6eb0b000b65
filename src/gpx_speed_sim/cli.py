import argparse
import logging
import sys
from pathlib import Path

import gpxpy.gpx

from gpx_speed_sim import __version__, get_git_hash
from gpx_speed_sim.charts import METRICS, generate_profile_chart, generate_progress_chart
from gpx_speed_sim.config import DEFAULTS, load_config
from gpx_speed_sim.formatters import format_range_label, format_summary
from gpx_speed_sim.models import BoundingBox, RiderParams
from gpx_speed_sim.parser import parse_gpx
from gpx_speed_sim.selection import is_full_range, select_distance_range, select_in_bounds
from gpx_speed_sim.simulator import SimulationResult, simulate


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str) -> float:
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        prog="gpx-speed-sim",
        description="Simulate riding a GPX route at a power and speed limit.",
    )
    parser.add_argument("gpx_file", help="Path to GPX file")
    parser.add_argument(
        "--mass",
        type=float,
        default=get_default("mass"),
        help=f"Total mass of rider + bike in kg (default: {DEFAULTS['mass']})",
    )
    parser.add_argument(
        "--cda",
        type=float,
        default=get_default("cda"),
        help=f"Drag coefficient * frontal area in m² (default: {DEFAULTS['cda']})",
    )
    parser.add_argument(
        "--power",
        type=float,
        default=get_default("power"),
        help=f"Maximum sustained power in watts (default: {DEFAULTS['power']})",
    )
    parser.add_argument(
        "--max-speed",
        type=float,
        default=get_default("max_speed"),
        help=f"Maximum speed in km/h (default: {DEFAULTS['max_speed']})",
    )
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument(
        "--range",
        type=float,
        nargs=2,
        metavar=("START_KM", "END_KM"),
        help="Also summarize the section between two distances along the route",
    )
    selection.add_argument(
        "--bbox",
        type=float,
        nargs=4,
        metavar=("SOUTH", "WEST", "NORTH", "EAST"),
        help="Also summarize the section of the route inside a lat/lon box",
    )
    parser.add_argument(
        "--charts",
        type=str,
        default=None,
        metavar="DIR",
        help="Write elevation, grade, speed, power and progress charts (PNG) to DIR",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__} ({get_git_hash()})",
    )
    return parser


def _selected_range(args: argparse.Namespace, result: SimulationResult) -> tuple[int, int] | None:
    if args.range:
        return select_distance_range(result.points, args.range[0], args.range[1])
    if args.bbox:
        south, west, north, east = args.bbox
        return select_in_bounds(result.points, BoundingBox(south=south, west=west, north=north, east=east))
    return None


def write_charts(result: SimulationResult, out_dir: Path, selection: tuple[int, int] | None) -> list[Path]:
    """Write one PNG per chart to out_dir and return the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for metric in METRICS:
        path = out_dir / f"{metric}.png"
        path.write_bytes(generate_profile_chart(list(result.points), metric, selection))
        written.append(path)
    path = out_dir / "progress.png"
    path.write_bytes(generate_progress_chart(list(result.points), selection))
    written.append(path)
    return written


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    params = RiderParams(
        total_mass=args.mass,
        cda=args.cda,
        max_power=args.power,
        max_speed=args.max_speed,
    )

    gpx_path = args.gpx_file
    try:
        points = parse_gpx(gpx_path)
    except FileNotFoundError:
        print(f"Error: File not found: {gpx_path}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError, gpxpy.gpx.GPXException) as e:
        print(f"Error parsing GPX file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = simulate(points, params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("=== GPX Speed Simulation ===")
    print(
        f"Config: mass={params.total_mass}kg cda={params.cda} "
        f"power={params.max_power}W max_speed={params.max_speed}km/h"
    )
    print(format_summary(result.summary()))
    print(f"Elevation Gain: {result.elevation_gain:.0f} m")

    selection = _selected_range(args, result)
    if (args.range or args.bbox) and selection is None:
        print("Warning: selection does not cover any part of the route", file=sys.stderr)
    elif selection is not None and not is_full_range(result.points, *selection):
        start, end = selection
        label = format_range_label(result.points[start].distance, result.points[end].distance)
        print("")
        print(f"--- Selection {label} ---")
        print(format_summary(result.summary(start, end)))

    if args.charts:
        try:
            written = write_charts(result, Path(args.charts), selection)
        except OSError as e:
            print(f"Error writing charts: {e}", file=sys.stderr)
            sys.exit(1)
        print("")
        for path in written:
            print(f"Wrote {path}")
