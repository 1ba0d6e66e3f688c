"""
Sensor log loading, score explanation and the command-line report.
Run from project root: python -m pytest tests/test_data_loader.py -v
"""

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from farm_expert.data_loader import load_readings, latest_reading
from farm_expert.crop_params import get_profile
from farm_expert.explainer import explain_score, plot_score_breakdown
from farm_expert.scorer import score_breakdown
import run_advisor

CSV_TEXT = """Timestamp,pH,N,P,Temp,Soil_Moisture
2024-03-02 06:00,6.1,72,38,24.5,78
2024-03-03 06:00,5.8,70,35,25.0,81
2024-03-01 06:00,6.4,65,,23.0,75
"""


@pytest.fixture
def readings_csv(tmp_path):
    path = tmp_path / "sensor_readings.csv"
    path.write_text(CSV_TEXT)
    return path


def test_load_readings_normalises_aliases(readings_csv):
    df = load_readings(readings_csv)
    assert list(df.columns) == ["temperature", "moisture", "ph_level", "npk_n", "npk_p", "npk_k", "timestamp"]
    assert len(df) == 3
    assert df["npk_k"].isna().all()
    assert df["npk_p"].isna().sum() == 1


def test_latest_reading_uses_timestamp(readings_csv):
    reading = latest_reading(load_readings(readings_csv))
    assert reading.ph_level == 5.8
    assert reading.moisture == 81.0
    assert reading.npk_k is None


def test_latest_reading_without_timestamp(tmp_path):
    path = tmp_path / "log.csv"
    path.write_text("moisture,ph_level\n30,6.0\n25,6.2\n")
    reading = latest_reading(load_readings(path))
    assert reading.moisture == 25.0
    assert reading.temperature is None


def test_load_readings_kaggle_headers(tmp_path):
    """Kaggle crop dataset export: humidity stands in for moisture."""
    path = tmp_path / "kaggle.csv"
    path.write_text("N,P,K,temperature,humidity,ph,rainfall\n90,42,43,20.9,82.0,6.5,202.9\n")
    df = load_readings(path)
    assert df["moisture"].notna().all()
    reading = latest_reading(df)
    assert reading.moisture == 82.0
    assert reading.npk_n == 90.0
    assert reading.ph_level == 6.5


def test_load_readings_two_aliases_for_one_column(tmp_path):
    """n and nitrogen both present: the first alias is used, no duplicate columns."""
    path = tmp_path / "both.csv"
    path.write_text("n,nitrogen,ph\n70,10,6.0\n")
    df = load_readings(path)
    assert list(df.columns).count("npk_n") == 1
    assert df.loc[0, "npk_n"] == 70.0
    assert latest_reading(df).npk_n == 70.0


def test_load_readings_case_colliding_headers(tmp_path):
    path = tmp_path / "dupes.csv"
    path.write_text("N,n,ph\n70,10,6.0\n")
    with pytest.raises(ValueError):
        load_readings(path)


def test_load_readings_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_readings(tmp_path / "missing.csv")
    bad = tmp_path / "bad.csv"
    bad.write_text("field,crop\n1,rice\n")
    with pytest.raises(ValueError):
        load_readings(bad)
    empty = tmp_path / "empty.csv"
    empty.write_text("moisture,ph_level\n")
    with pytest.raises(ValueError):
        latest_reading(load_readings(empty))


# ---------------------------------------------------------------------------
# Explanation
# ---------------------------------------------------------------------------

def test_explain_score_full_match():
    rice = get_profile("Rice (Boro)")
    reading = {"ph_level": 5.5, "moisture": 80, "temperature": 25, "npk_n": 70, "npk_p": 35, "npk_k": 35}
    text = explain_score(rice, "Clay", reading)
    assert text.startswith("Rice (Boro) scores 100.0/100.")
    assert "Limiting factors" not in text
    assert "No reading" not in text


def test_explain_score_limiting_and_missing():
    potato = get_profile("Potato")
    text = explain_score(potato, "Clay", {"npk_k": 20, "moisture": 70})
    assert "Within range: moisture." in text
    assert "Limiting factors: potassium, soil type." in text
    assert "No reading for nitrogen, phosphorus, pH, temperature" in text


def test_plot_score_breakdown(tmp_path):
    pytest.importorskip("matplotlib")
    wheat = get_profile("Wheat")
    out = plot_score_breakdown(score_breakdown(wheat, "Loamy", {"npk_n": 100}), save_path=tmp_path / "b.png")
    assert out.exists()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_json_report(capsys):
    code = run_advisor.main([
        "--soil-type", "Clay", "--ph", "5.5", "--moisture", "80", "--temperature", "25",
        "--n", "70", "--p", "35", "--k", "35", "--json",
    ])
    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["recommendations"][0]["name"] == "Rice (Boro)"
    assert report["recommendations"][0]["suitability"] == 100
    assert report["reading"] == {
        "temperature": 25.0, "moisture": 80.0, "ph_level": 5.5,
        "npk_n": 70.0, "npk_p": 35.0, "npk_k": 35.0,
    }


def test_cli_json_report_marks_missing_sensors(capsys):
    assert run_advisor.main(["--soil-type", "Clay", "--moisture", "40", "--json"]) == 0
    reading = json.loads(capsys.readouterr().out)["reading"]
    assert reading["moisture"] == 40.0
    assert reading["npk_k"] is None


def test_cli_bad_headers_exit_code(tmp_path):
    path = tmp_path / "dupes.csv"
    path.write_text("P,p,ph\n30,31,6.0\n")
    assert run_advisor.main(["--readings", str(path)]) == 1


def test_cli_csv_with_both_nitrogen_headers(tmp_path, capsys):
    path = tmp_path / "both.csv"
    path.write_text("n,nitrogen,ph\n70,10,6.0\n")
    assert run_advisor.main(["--soil-type", "Clay", "--readings", str(path), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["reading"]["npk_n"] == 70.0


def test_cli_text_report_from_csv(readings_csv, capsys):
    code = run_advisor.main(["--soil-type", "Clay", "--size", "2", "--readings", str(readings_csv)])
    assert code == 0
    out = capsys.readouterr().out
    assert "Recommended crops:" in out
    assert "Rice (Boro)" in out
    assert "Roadmap:" in out


def test_cli_all_rows(readings_csv, capsys):
    code = run_advisor.main(["--soil-type", "Clay", "--readings", str(readings_csv), "--all"])
    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert all(line.startswith("row ") for line in lines)


def test_cli_missing_file(tmp_path):
    assert run_advisor.main(["--readings", str(tmp_path / "nope.csv")]) == 1


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))
