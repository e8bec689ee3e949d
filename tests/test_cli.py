"""Tests for the CLI."""

from click.testing import CliRunner
from PIL import Image

from randviz.cli import main


class TestCLI:
    def test_version(self):
        r = CliRunner().invoke(main, ["--version"])
        assert r.exit_code == 0
        assert "0.1.0" in r.output

    def test_fetch_lcg(self):
        r = CliRunner().invoke(main, ["fetch", "--source", "lcg", "--seed", "1", "--count", "1000", "--frames", "3"])
        assert r.exit_code == 0
        assert "Samples:         3,000" in r.output
        assert "Shannon entropy" in r.output

    def test_fetch_unknown_source(self):
        r = CliRunner().invoke(main, ["fetch", "--source", "bogus"])
        assert r.exit_code != 0

    def test_fetch_missing_device(self, tmp_path):
        r = CliRunner().invoke(main, ["fetch", "--source", "urandom", "--device", str(tmp_path / "none")])
        assert r.exit_code == 1
        assert "Error" in r.output

    def test_snapshot(self, tmp_path):
        out = tmp_path / "lcg.png"
        r = CliRunner().invoke(main, [
            "snapshot", "--source", "lcg", "--mode", "scatter", "--seed", "5",
            "--count", "2000", "--width", "120", "--height", "90", "--output", str(out),
        ])
        assert r.exit_code == 0, r.output
        with Image.open(out) as img:
            assert img.size == (120, 90)

    def test_sources(self):
        r = CliRunner().invoke(main, ["sources"])
        assert r.exit_code == 0
        for name in ("lcg", "math", "urandom"):
            assert name in r.output

    def test_sources_reports_missing_device(self, tmp_path):
        r = CliRunner().invoke(main, ["sources", "--device", str(tmp_path / "missing")])
        assert r.exit_code == 0, r.output
        row = next(line for line in r.output.splitlines() if line.startswith("urandom"))
        assert "✗" in row
        assert any(line.startswith("lcg") and "✓" in line for line in r.output.splitlines())

    def test_monitor_unreachable_server(self):
        r = CliRunner().invoke(main, [
            "monitor", "--url", "http://127.0.0.1:1", "--ticks", "1", "--interval", "0", "--timeout", "1",
        ])
        assert r.exit_code == 0
        assert "0 ok, 1 failed" in r.output
