import json
import os
import subprocess
import sys

import pytest

from gpx_speed_sim import __version__

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "data", "sample_route.gpx"
)
SRC_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "src")


@pytest.fixture
def run_cli(tmp_path):
    """Run the CLI in an isolated home and working directory."""
    env = dict(os.environ)
    env["HOME"] = str(tmp_path)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in [os.path.abspath(SRC_PATH), env.get("PYTHONPATH")] if p
    )

    def run(*args):
        return subprocess.run(
            [sys.executable, "-m", "gpx_speed_sim", *args],
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env=env,
        )

    return run


class TestCli:
    def test_run_with_sample_file(self, run_cli):
        result = run_cli(SAMPLE_GPX_PATH)
        assert result.returncode == 0
        output = result.stdout
        assert "GPX Speed Simulation" in output
        assert "Distance:" in output
        assert "Elevation Gain: 45 m" in output
        assert "Total Time:" in output
        assert "Avg Speed:" in output
        assert "Avg Power:" in output
        assert "Selection" not in output

    def test_config_line(self, run_cli):
        result = run_cli("--mass", "75", "--cda", "0.25", "--power", "300", "--max-speed", "50", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "mass=75.0kg cda=0.25 power=300.0W max_speed=50.0km/h" in result.stdout

    def test_distance_range_selection(self, run_cli):
        result = run_cli("--range", "0.5", "1.5", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "--- Selection (" in result.stdout
        assert result.stdout.count("Avg Power:") == 2

    def test_bbox_selection(self, run_cli):
        result = run_cli("--bbox", "37.780", "-122.412", "37.785", "-122.406", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "--- Selection (" in result.stdout

    def test_empty_selection_warns(self, run_cli):
        result = run_cli("--bbox", "10", "10", "11", "11", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "Warning" in result.stderr
        assert "Selection" not in result.stdout

    def test_writes_charts(self, run_cli, tmp_path):
        out_dir = tmp_path / "charts"
        result = run_cli("--charts", str(out_dir), "--range", "0.5", "1.5", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        for name in ["elevation", "grade", "speed", "power", "progress"]:
            path = out_dir / f"{name}.png"
            assert path.exists()
            assert path.read_bytes().startswith(b"\x89PNG")

    def test_local_config_file(self, run_cli, tmp_path):
        (tmp_path / "gpx-speed-sim.json").write_text(json.dumps({"power": 321}))
        result = run_cli(SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "power=321W" in result.stdout

    def test_invalid_parameter(self, run_cli):
        result = run_cli("--power", "0", SAMPLE_GPX_PATH)
        assert result.returncode != 0
        assert "Error" in result.stderr
        assert "max_power" in result.stderr

    def test_single_point_file(self, run_cli, tmp_path):
        gpx = tmp_path / "one.gpx"
        gpx.write_text(
            '<?xml version="1.0"?>'
            '<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">'
            '<trk><trkseg><trkpt lat="37.0" lon="-122.0"><ele>5</ele></trkpt></trkseg></trk>'
            '</gpx>'
        )
        result = run_cli(str(gpx))
        assert result.returncode != 0
        assert "fewer than 2 track points" in result.stderr

    def test_malformed_file(self, run_cli, tmp_path):
        gpx = tmp_path / "bad.gpx"
        gpx.write_text("<gpx><trk>")
        result = run_cli(str(gpx))
        assert result.returncode != 0
        assert "Error parsing GPX file" in result.stderr

    def test_binary_file(self, run_cli, tmp_path):
        gpx = tmp_path / "bin.gpx"
        gpx.write_bytes(b"\xff\xfe\x00\x81garbage\x9c")
        result = run_cli(str(gpx))
        assert result.returncode == 1
        assert "Error parsing GPX file" in result.stderr
        assert "Traceback" not in result.stderr

    def test_range_past_end_warns(self, run_cli):
        result = run_cli("--range", "50", "60", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "Warning" in result.stderr
        assert "Selection" not in result.stdout

    def test_version(self, run_cli):
        result = run_cli("--version")
        assert result.returncode == 0
        assert __version__ in result.stdout

    def test_nonexistent_file(self, run_cli):
        result = run_cli("/nonexistent/file.gpx")
        assert result.returncode != 0
        assert "Error" in result.stderr

    def test_no_arguments(self, run_cli):
        result = run_cli()
        assert result.returncode != 0

    def test_verbose_logs_debug(self, run_cli):
        result = run_cli("-v", SAMPLE_GPX_PATH)
        assert result.returncode == 0
        assert "DEBUG gpx_speed_sim.simulator" in result.stderr
