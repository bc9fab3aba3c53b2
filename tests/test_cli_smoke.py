"""
Minimal smoke tests for the lift-engine CLI.

Tests basic functionality:
- App runs and lists its commands
- Each command produces JSON output for valid input
- Invalid input exits with status 1 and an error message
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lift_engine.cli.main import app


runner = CliRunner()


@pytest.fixture
def home(tmp_path):
    """Isolated HOME so no user config is picked up."""
    return {"HOME": str(tmp_path)}


def _write_log(path: Path, rows: list[dict]) -> Path:
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n", encoding="utf-8")
    return path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("convert", "load", "e1rm", "quality", "warmup", "records", "readiness"):
            assert command in result.output

    def test_convert(self, home):
        result = runner.invoke(app, ["convert", "100", "--from", "kg", "--to", "lb", "--json"], env=home)
        assert result.exit_code == 0
        assert json.loads(result.output)["result"] == pytest.approx(220.462)

    def test_convert_bad_unit(self, home):
        result = runner.invoke(app, ["convert", "100", "--to", "stone"], env=home)
        assert result.exit_code == 1
        assert "Invalid unit" in result.output

    def test_round(self, home):
        result = runner.invoke(app, ["round", "61.3", "--unit", "kg", "--json"], env=home)
        assert result.exit_code == 0
        assert json.loads(result.output)["rounded"] == pytest.approx(62.5)

    def test_load_weighted(self, home):
        result = runner.invoke(
            app, ["load", "--bodyweight", "80", "--mod", "weighted", "--added", "20", "--json"], env=home
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["effectiveLoadKg"] == pytest.approx(100.0)
        assert data["percentBodyweight"] == 125

    def test_load_band_text(self, home):
        result = runner.invoke(app, ["load", "--bodyweight", "80", "--mod", "assisted", "--band", "black"], env=home)
        assert result.exit_code == 0
        assert "Effective load" in result.output
        assert "65.3 kg" in result.output

    def test_load_missing_bodyweight(self, home):
        result = runner.invoke(app, ["load", "--bodyweight", "0"], env=home)
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_e1rm(self, home):
        result = runner.invoke(app, ["e1rm", "100", "5", "--table", "--json"], env=home)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["e1rm_kg"] == pytest.approx(116.67)
        assert data["formulas_kg"]["brzycki"] == pytest.approx(112.5)

    def test_e1rm_zero_reps(self, home):
        result = runner.invoke(app, ["e1rm", "100", "0"], env=home)
        assert result.exit_code == 1

    def test_quality_single_set(self, home):
        result = runner.invoke(
            app, ["quality", "--range", "8-12", "--rir", "2", "--reps", "10", "--rpe", "8", "--json"], env=home
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["quality"] == "stimulative"

    def test_quality_invalid_rpe(self, home):
        result = runner.invoke(app, ["quality", "--range", "8-12", "--reps", "10", "--rpe", "11"], env=home)
        assert result.exit_code == 1

    def test_quality_bad_range(self, home):
        result = runner.invoke(app, ["quality", "--range", "eight", "--reps", "10", "--rpe", "8"], env=home)
        assert result.exit_code == 1

    def test_quality_from_log(self, home, tmp_path):
        log = _write_log(tmp_path / "session.jsonl", [
            {"exerciseId": "bench", "weightKg": 40, "reps": 10, "isWarmup": True},
            {"exerciseId": "bench", "weightKg": 80, "reps": 10, "rpe": 8},
            {"exerciseId": "bench", "weightKg": 60, "reps": 10, "rpe": 5},
        ])
        result = runner.invoke(
            app, ["quality", "--range", "8-12", "--log", str(log), "--exercise", "bench", "--json"], env=home
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["sets"][0] is None
        assert data["sets"][1]["quality"] == "stimulative"
        assert data["junk_sets"] == 1

    def test_warmup(self, home):
        result = runner.invoke(app, ["warmup", "100", "--unit", "kg", "--json"], env=home)
        assert result.exit_code == 0
        steps = json.loads(result.output)
        assert [s["weight"] for s in steps] == pytest.approx([30.0, 50.0, 70.0, 85.0])

    def test_warmup_table(self, home):
        result = runner.invoke(app, ["warmup", "60", "--first"], env=home)
        assert result.exit_code == 0
        assert "Empty bar" in result.output

    def test_warmup_bad_unit(self, home):
        result = runner.invoke(app, ["warmup", "100", "--unit", "stone"], env=home)
        assert result.exit_code == 1

    def test_records(self, home, tmp_path):
        history = _write_log(tmp_path / "history.jsonl", [
            {"exerciseId": "bench", "weightKg": 95, "reps": 5, "rpe": 8},
            {"exerciseId": "squat", "weightKg": 140, "reps": 5, "rpe": 8},
        ])
        session = _write_log(tmp_path / "session.jsonl", [
            {"exerciseId": "bench", "weightKg": 100, "reps": 5, "rpe": 9},
            {"exerciseId": "deadlift", "weightKg": 180, "reps": 3, "rpe": 8},
        ])
        result = runner.invoke(
            app, ["records", "--session", str(session), "--history", str(history), "--json"], env=home
        )
        assert result.exit_code == 0
        records = json.loads(result.output)
        assert len(records) == 1
        assert records[0]["exercise_id"] == "bench"
        assert records[0]["type"] == "e1rm"

    def test_records_missing_file(self, home, tmp_path):
        result = runner.invoke(
            app, ["records", "--session", str(tmp_path / "a.jsonl"), "--history", str(tmp_path / "b.jsonl")], env=home
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_readiness(self, home):
        result = runner.invoke(
            app, ["readiness", "--sleep", "8", "--sleep-quality", "5", "--stress", "5", "--nutrition", "5", "--json"],
            env=home,
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["score"] == 100
        assert data["band"] == "well_recovered"

    def test_readiness_out_of_range(self, home):
        result = runner.invoke(
            app, ["readiness", "--sleep", "8", "--sleep-quality", "5", "--stress", "6", "--nutrition", "5"],
            env=home,
        )
        assert result.exit_code == 1
        assert "stress_level" in result.output

    def test_load_band_ignored_without_assistance(self, home):
        result = runner.invoke(app, ["load", "--bodyweight", "80", "--band", "red", "--json"], env=home)
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["modification"] == "none"
        assert "bandColor" not in data
        assert "assistanceType" not in data

    def test_load_nan_bodyweight(self, home):
        result = runner.invoke(app, ["load", "--bodyweight", "nan"], env=home)
        assert result.exit_code == 1
        assert "finite" in result.output


class TestCLIUserConfig:
    """Commands keep working when ~/.lift-engine/engine.yaml is incomplete or wrong."""

    def _write_user_config(self, tmp_path: Path, text: str) -> dict:
        config_dir = tmp_path / ".lift-engine"
        config_dir.mkdir()
        (config_dir / "engine.yaml").write_text(text, encoding="utf-8")
        return {"HOME": str(tmp_path)}

    def test_empty_readiness_section(self, tmp_path):
        env = self._write_user_config(tmp_path, "readiness:\n")
        result = runner.invoke(
            app, ["readiness", "--sleep", "8", "--sleep-quality", "5", "--stress", "5", "--nutrition", "5", "--json"],
            env=env,
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["score"] == 100

    def test_non_numeric_quality_threshold(self, tmp_path):
        env = self._write_user_config(tmp_path, "set_quality:\n  stimulative_band: wide\n")
        with pytest.warns(UserWarning, match="Ignoring user config"):
            result = runner.invoke(
                app, ["quality", "--range", "8-12", "--rir", "2", "--reps", "10", "--rpe", "8", "--json"], env=env
            )
        assert result.exit_code == 0
        assert json.loads(result.output)["quality"] == "stimulative"
