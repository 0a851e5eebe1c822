"""Tests for cli.py — command-line entry points."""

import json

from click.testing import CliRunner

from vestmon.cli import format_frame, main


def run(*args):
    return CliRunner().invoke(main, list(args))


class TestCommands:
    def test_breeds(self):
        result = run("breeds")
        assert result.exit_code == 0
        assert "husky" in result.output
        assert "-0.3" in result.output

    def test_ranges(self):
        result = run("ranges", "--breed", "husky", "--age", "5")
        assert result.exit_code == 0
        assert "100.7 - 102.2°F" in result.output
        assert "60 - 100 BPM" in result.output

    def test_ranges_explicit_size_and_age_shift(self):
        result = run("ranges", "--breed", "labrador", "--size", "large", "--age", "1")
        assert result.exit_code == 0
        assert "70 - 110 BPM" in result.output

    def test_ranges_unknown_breed(self):
        result = run("ranges", "--breed", "corgi")
        assert result.exit_code == 2
        assert "unknown breed" in result.output

    def test_demo(self):
        result = run("demo", "--duration", "0.2", "--seed", "3", "--ppg-mode", "tachycardia")
        assert result.exit_code == 0, result.output
        assert "Manual: Tachycardia" in result.output
        assert "HR 180 BPM [Alert]" in result.output

    def test_demo_json(self):
        result = run("demo", "--duration", "0.2", "--seed", "3", "--json", "--activity", "active")
        assert result.exit_code == 0, result.output
        frames = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert frames
        assert frames[-1]["activity"] == "active"


class TestFormatFrame:
    def test_empty_frame(self, session):
        line = format_frame(session.snapshot())
        assert line.startswith("AT REST")
        assert "Temp --" in line

    def test_populated_frame(self, session):
        session.set_temperature_mode("fever")
        session.set_accel_mode("walking")
        line = format_frame(session.snapshot())
        assert "104.2°F" in line
        assert "[Alert]" in line
        assert "1.067g Walking Detected" in line
