import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "gpx-speed-sim" / "gpx-speed-sim.json"
LOCAL_CONFIG_PATH = Path("gpx-speed-sim.json")

# Default values for rider parameters
DEFAULTS = {
    "mass": 80.0,
    "cda": 0.3,
    "power": 250.0,
    "max_speed": 40.0,
}


def load_config(paths: list[Path] | None = None) -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/gpx-speed-sim/gpx-speed-sim.json (global, loaded first)
    2. ./gpx-speed-sim.json (local, overrides global)

    Files that are missing are ignored; unreadable or malformed files are
    skipped with a warning.

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    if paths is None:
        paths = [CONFIG_PATH, LOCAL_CONFIG_PATH]

    config = {}
    for config_path in paths:
        if not config_path.exists():
            continue
        try:
            with config_path.open() as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring config file %s: %s", config_path, e)
            continue
        if not isinstance(loaded, dict):
            logger.warning("Ignoring config file %s: expected a JSON object", config_path)
            continue
        logger.debug("Loaded config from %s", config_path)
        config.update(loaded)
    return config
