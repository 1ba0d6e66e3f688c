"""
Field advisor tests: remote-first report with local fallback, and the quick single-crop pick.
Run from project root: python -m pytest tests/test_advisor.py -v
"""

import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from farm_expert.advisor import advise_field, quick_suggestion
from farm_expert.schema import FieldDescriptor, SensorReading

FIELD = {"field_name": "North Plot", "soil_type": "Clay", "size": 1.5}
READING = {"ph_level": 5.5, "moisture": 80, "temperature": 25, "npk_n": 70, "npk_p": 35, "npk_k": 35}


class FailingRemote:
    def crop_analysis(self, field, reading):
        raise RuntimeError("quota exceeded")

    def soil_insight(self, field, reading):
        raise RuntimeError("quota exceeded")

    def prescription(self, field, reading):
        raise TimeoutError("timed out")

    def management_plan(self, field, reading):
        raise RuntimeError("quota exceeded")


class EmptyRemote:
    def crop_analysis(self, field, reading):
        return []

    def soil_insight(self, field, reading):
        return {}

    def prescription(self, field, reading):
        return None

    def management_plan(self, field, reading):
        return []


class CropOnlyRemote:
    def __init__(self):
        self.calls = []

    def crop_analysis(self, field, reading):
        self.calls.append((field, reading))
        return [{"name": f"AI crop {i}", "suitability": 90 - i} for i in range(5)]


def test_local_only_report():
    report = advise_field(FIELD, READING)
    assert set(report) == {"recommendations", "soil_insight", "prescription", "roadmap", "sources"}
    assert set(report["sources"].values()) == {"local"}
    assert report["recommendations"][0]["name"] == "Rice (Boro)"
    assert report["recommendations"][0]["suitability"] == 100
    assert len(report["recommendations"]) == 3
    assert report["prescription"]["irrigation"]["needed"] is False
    assert len(report["roadmap"]) == 4


def test_failing_remote_falls_back_to_local(caplog):
    with caplog.at_level(logging.WARNING, logger="farm_expert.advisor"):
        report = advise_field(FIELD, READING, remote=FailingRemote())
    assert set(report["sources"].values()) == {"local"}
    assert report == advise_field(FIELD, READING)
    assert any("quota exceeded" in r.getMessage() for r in caplog.records)


def test_empty_remote_results_fall_back_to_local():
    report = advise_field(FIELD, READING, remote=EmptyRemote())
    assert set(report["sources"].values()) == {"local"}
    assert report["soil_insight"]["summary"].startswith("Analysis based on Kaggle & BARI guidelines for Clay soil.")


def test_partial_remote_mixes_sources():
    remote = CropOnlyRemote()
    report = advise_field(FIELD, READING, remote=remote)
    assert report["sources"] == {
        "recommendations": "remote",
        "soil_insight":    "local",
        "prescription":    "local",
        "roadmap":         "local",
    }
    # remote list trimmed to top_n
    assert [r["name"] for r in report["recommendations"]] == ["AI crop 0", "AI crop 1", "AI crop 2"]
    field, reading = remote.calls[0]
    assert isinstance(field, FieldDescriptor)
    assert isinstance(reading, SensorReading)


def test_report_top_n():
    report = advise_field(FIELD, READING, top_n=5)
    assert len(report["recommendations"]) == 5


def test_quick_suggestion_soil_rules():
    assert quick_suggestion("Clay")["crop"] == "Rice"
    assert quick_suggestion("Clayey")["crop"] == "Rice"
    assert quick_suggestion("Black")["crop"] == "Cotton"
    assert quick_suggestion("Sandy", ph=4.0)["crop"] == "Watermelon"


def test_quick_suggestion_reading_rules():
    assert quick_suggestion("Peaty", ph=5.0)["crop"] == "Boro Rice"
    assert quick_suggestion("Loamy", ph=6.5, nitrogen=95)["crop"] == "Wheat"
    fallback = quick_suggestion("Loamy", ph=6.5, nitrogen=50)
    assert fallback == {"crop": "General Crop", "reason": "Based on balanced soil parameters."}
    assert quick_suggestion("Loamy")["crop"] == "General Crop"


if __name__ == "__main__":
    import subprocess
    sys.exit(subprocess.call([sys.executable, "-m", "pytest", __file__, "-v", "-s"]))
