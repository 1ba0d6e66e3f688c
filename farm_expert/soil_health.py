"""
Soil health interpretation for the local expert advisor.
- THRESHOLDS: pH / moisture bands from the BARI fertilizer recommendation guide.
- soil_insight: one-paragraph summary plus a soil amendment strategy,
  the fallback for the AI soil-health diagnostic.
"""

from farm_expert.config import (
    DEFAULT_PH,
    DEFAULT_MOISTURE,
    DEFAULT_SOIL_TYPE,
    PH_THRESHOLDS,
    MOISTURE_CRITICAL,
)
from farm_expert.schema import FieldDescriptor, SensorReading, SoilInsight

THRESHOLDS = {
    "ph_level": PH_THRESHOLDS,
    "moisture": {"low": MOISTURE_CRITICAL},
}

# (summary clause, amendment clause) per level
PH_MESSAGES = {
    "low":  ("Soil is acidic. ", "Apply Lime (Dolomite) to increase pH. "),
    "high": ("Soil is alkaline. ", "Apply Gypsum to lower pH. "),
    "ok":   ("pH level is optimal. ", "Maintain organic matter. "),
}
MOISTURE_MESSAGES = {
    "low": ("Critically low moisture detected.", "Immediate irrigation required."),
    "ok":  ("Moisture levels are stable.", ""),
}


def _get_level(value: float, key: str) -> str:
    """Return 'low', 'ok', or 'high' based on thresholds."""
    t = THRESHOLDS.get(key, {})
    if "low" in t and value < t["low"]:
        return "low"
    if "high" in t and value > t["high"]:
        return "high"
    return "ok"


def soil_insight(field, reading) -> SoilInsight:
    """
    Summarise soil condition from pH and moisture.
    Absent pH counts as 7 and absent moisture as 50, both in the neutral band.
    """
    field = FieldDescriptor.coerce(field)
    reading = SensorReading.coerce(reading)
    ph = DEFAULT_PH if reading.ph_level is None else reading.ph_level
    moisture = DEFAULT_MOISTURE if reading.moisture is None else reading.moisture

    ph_summary, ph_strategy = PH_MESSAGES[_get_level(ph, "ph_level")]
    moisture_summary, moisture_strategy = MOISTURE_MESSAGES[_get_level(moisture, "moisture")]

    summary = (
        f"Analysis based on Kaggle & BARI guidelines for {field.soil_type or DEFAULT_SOIL_TYPE} soil. "
        + ph_summary
        + moisture_summary
    )
    strategy = "Recommended: " + ph_strategy + moisture_strategy
    return SoilInsight(summary=summary, soil_fertilizer=strategy)
