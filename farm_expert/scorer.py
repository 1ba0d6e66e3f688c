"""
Suitability scorer: rank the crop catalogue against one sensor reading.

Each of the six range attributes contributes weight × factor, where the factor is
  - 0.5 when the sensor is not reporting (uncertainty, not mismatch),
  - 1.0 inside the crop's tolerance range (inclusive),
  - a linear decay outside it: max(0, 1 - |value - mid| / (2 × span)).
The soil term adds the full soil weight when the field's soil type is one the
crop favours, half of it for the literal "Unknown", else nothing.
Weights sum to 100, so the total is already a 0-100 suitability percentage.

score_frame() applies the same formula column-wise with numpy so a whole sensor
history can be scored in one pass; results match score_crop() row for row.
"""

import logging
import math

import numpy as np
import pandas as pd

from farm_expert.config import (
    SCORE_WEIGHTS,
    RANGE_READING_MAP,
    NEUTRAL_FACTOR,
    UNKNOWN_SOIL_TYPE,
    UNKNOWN_SOIL_FACTOR,
    DEFAULT_SOIL_TYPE,
    TOP_N_CROPS,
    READING_COLUMNS,
)
from farm_expert.crop_params import CROP_PROFILES, RANGE_FIELDS, CropProfile
from farm_expert.schema import FieldDescriptor, SensorReading, Recommendation

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Factor helpers
# ---------------------------------------------------------------------------

def range_factor(value: float | None, bounds: tuple[float, float]) -> float:
    """Match factor (0-1) of one reading value against an inclusive range."""
    if value is None:
        return NEUTRAL_FACTOR
    lo, hi = bounds
    if lo <= value <= hi:
        return 1.0
    mid = (lo + hi) / 2
    span = (hi - lo) or 1
    return max(0.0, 1 - abs(value - mid) / (span * 2))


def soil_factor(soil_type: str, profile: CropProfile) -> float:
    """1.0 for a favoured soil, 0.5 for the "Unknown" sentinel, else 0."""
    if soil_type.lower() in profile.soil_types:
        return 1.0
    if soil_type == UNKNOWN_SOIL_TYPE:
        return UNKNOWN_SOIL_FACTOR
    return 0.0


def resolve_soil_type(field: FieldDescriptor) -> str:
    """Field soil type, or the default when the field record leaves it blank."""
    return field.soil_type or DEFAULT_SOIL_TYPE


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def score_breakdown(profile: CropProfile, soil_type: str, reading) -> dict[str, float]:
    """
    Weighted contribution of every attribute for one crop.
    Keys: n, p, k, ph, temp, moisture, soil, total.
    """
    reading = SensorReading.coerce(reading)
    out = {}
    total = 0.0
    for attr in RANGE_FIELDS:
        value = getattr(reading, RANGE_READING_MAP[attr])
        contribution = range_factor(value, profile.range_for(attr)) * SCORE_WEIGHTS[attr]
        out[attr] = contribution
        total += contribution
    out["soil"] = soil_factor(soil_type, profile) * SCORE_WEIGHTS["soil"]
    out["total"] = total + out["soil"]
    return out


def score_crop(profile: CropProfile, soil_type: str, reading) -> float:
    """Raw suitability score (0-100) of one crop."""
    return score_breakdown(profile, soil_type, reading)["total"]


def score_crops(
    soil_type: str,
    reading,
    profiles=CROP_PROFILES,
) -> list[tuple[CropProfile, float]]:
    """
    Score every profile and sort descending.
    sorted() is stable, so equal scores keep catalogue declaration order.
    """
    if not isinstance(soil_type, str):
        raise TypeError(f"soil_type must be a string, got {type(soil_type).__name__}")
    reading = SensorReading.coerce(reading)
    scored = [(profile, score_crop(profile, soil_type, reading)) for profile in profiles]
    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    if ranked:
        log.debug(
            "Scored %d crops for soil=%r (%d sensors reporting); best=%s %.2f",
            len(ranked), soil_type, len(reading.present()), ranked[0][0].name, ranked[0][1],
        )
    return ranked


def recommend(field, reading, top_n: int = TOP_N_CROPS, profiles=CROP_PROFILES) -> list[Recommendation]:
    """
    Top-N crop recommendations for a field and its latest (possibly partial) reading.

    Parameters
    ----------
    field : FieldDescriptor, mapping or None
        Only soil_type is used; blank falls back to "Alluvial".
    reading : SensorReading, mapping, pandas row or None
        Missing sensors count as neutral, not as zero.
    top_n : int
        Maximum number of crops returned. Fewer come back if the catalogue is
        smaller; nothing is padded.

    Returns
    -------
    list of Recommendation, best first. suitability is the raw score rounded
    half-up to an integer percentage.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")
    field = FieldDescriptor.coerce(field)
    ranked = score_crops(resolve_soil_type(field), reading, profiles)
    return [
        Recommendation(
            name=profile.name,
            suitability=_round_half_up(score / 100 * 100),
            expected_yield=profile.expected_yield,
            requirements=profile.requirements,
            fertilizer=profile.fertilizer_plan,
            icon=profile.icon,
        )
        for profile, score in ranked[:top_n]
    ]


# ---------------------------------------------------------------------------
# Batch scoring
# ---------------------------------------------------------------------------

def _range_factor_array(values: np.ndarray, bounds: tuple[float, float]) -> np.ndarray:
    lo, hi = bounds
    mid = (lo + hi) / 2
    span = (hi - lo) or 1
    with np.errstate(invalid="ignore"):
        inside = (values >= lo) & (values <= hi)
        decay = np.maximum(0.0, 1 - np.abs(values - mid) / (span * 2))
    return np.where(np.isnan(values), NEUTRAL_FACTOR, np.where(inside, 1.0, decay))


def score_frame(readings: pd.DataFrame, soil_type: str, profiles=CROP_PROFILES) -> pd.DataFrame:
    """
    Score every reading row against every crop.
    readings: DataFrame with any subset of the reading columns (NaN = absent).
    Returns a DataFrame indexed like readings with one column per crop, in catalogue order.
    """
    if not isinstance(soil_type, str):
        raise TypeError(f"soil_type must be a string, got {type(soil_type).__name__}")
    n_rows = len(readings)
    columns = {}
    for col in READING_COLUMNS:
        if col in readings.columns:
            columns[col] = pd.to_numeric(readings[col], errors="raise").to_numpy(dtype=float)
        else:
            columns[col] = np.full(n_rows, np.nan)

    scores = {}
    for profile in profiles:
        total = np.zeros(n_rows)
        for attr in RANGE_FIELDS:
            values = columns[RANGE_READING_MAP[attr]]
            total = total + _range_factor_array(values, profile.range_for(attr)) * SCORE_WEIGHTS[attr]
        scores[profile.name] = total + soil_factor(soil_type, profile) * SCORE_WEIGHTS["soil"]
    log.debug("Batch-scored %d readings against %d crops", n_rows, len(scores))
    return pd.DataFrame(scores, index=readings.index)
