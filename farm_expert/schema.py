"""
Input and output value types for the local expert advisor.

Inputs arrive from the dashboard layer as loose records (database rows, form
values, pandas rows). FieldDescriptor.coerce / SensorReading.coerce turn them
into typed, immutable values; a missing sensor value is carried as None,
never as zero.

Outputs are frozen dataclasses. as_dict() returns the JSON-ready shape the
dashboard renders (same keys as the remote AI responses).
"""

import math
from dataclasses import dataclass, field, fields
from numbers import Real
from collections.abc import Mapping
from typing import Any

from farm_expert.config import READING_COLUMNS


def _as_mapping(obj: Any) -> Mapping:
    """Accept a mapping or anything exposing to_dict() (pandas Series)."""
    if isinstance(obj, Mapping):
        return obj
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Expected a mapping, got {type(obj).__name__}")


def _optional_number(name: str, value: Any) -> float | None:
    """None / NaN -> None (absent); real numbers -> float; anything else is rejected."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a number or None, got {type(value).__name__}")
    value = float(value)
    if math.isnan(value):
        return None
    return value


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldDescriptor:
    """The subset of a field record the advisors read."""
    soil_type: str = ""
    field_name: str = ""
    location: str = ""
    size: float | None = None   # acres

    def __post_init__(self):
        if not isinstance(self.soil_type, str):
            raise TypeError(f"soil_type must be a string, got {type(self.soil_type).__name__}")
        object.__setattr__(self, "size", _optional_number("size", self.size))

    @classmethod
    def coerce(cls, obj: Any) -> "FieldDescriptor":
        if obj is None:
            return cls()
        if isinstance(obj, cls):
            return obj
        data = _as_mapping(obj)
        soil_type = data.get("soil_type")
        return cls(
            soil_type="" if soil_type is None else soil_type,
            field_name=str(data.get("field_name") or ""),
            location=str(data.get("location") or ""),
            size=data.get("size"),
        )


@dataclass(frozen=True)
class SensorReading:
    """A partial sensor snapshot; any attribute may be None (sensor not reporting)."""
    temperature: float | None = None
    moisture: float | None = None
    ph_level: float | None = None
    npk_n: float | None = None
    npk_p: float | None = None
    npk_k: float | None = None

    def __post_init__(self):
        for name in READING_COLUMNS:
            object.__setattr__(self, name, _optional_number(name, getattr(self, name)))

    @classmethod
    def coerce(cls, obj: Any) -> "SensorReading":
        """
        Build a reading from a mapping, a pandas row, or an existing reading.
        Keys outside the six reading columns (data_id, field_id, timestamp, ...) are ignored.
        """
        if obj is None:
            return cls()
        if isinstance(obj, cls):
            return obj
        data = _as_mapping(obj)
        return cls(**{name: data.get(name) for name in READING_COLUMNS})

    def present(self) -> dict[str, float]:
        """Only the attributes that are reporting."""
        return {name: getattr(self, name) for name in READING_COLUMNS if getattr(self, name) is not None}

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in READING_COLUMNS}


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Recommendation:
    name: str
    suitability: int
    expected_yield: str
    requirements: str
    fertilizer: str
    icon: str

    def as_dict(self) -> dict:
        return {
            "name":         self.name,
            "suitability":  self.suitability,
            "yield":        self.expected_yield,
            "requirements": self.requirements,
            "fertilizer":   self.fertilizer,
            "icon":         self.icon,
        }


@dataclass(frozen=True)
class SoilInsight:
    summary: str
    soil_fertilizer: str

    def as_dict(self) -> dict:
        return {"summary": self.summary, "soil_fertilizer": self.soil_fertilizer}


@dataclass(frozen=True)
class IrrigationPlan:
    needed: bool
    volume: str
    schedule: str

    def as_dict(self) -> dict:
        return {"needed": self.needed, "volume": self.volume, "schedule": self.schedule}


@dataclass(frozen=True)
class FertilizerDose:
    type: str
    amount: str

    def as_dict(self) -> dict:
        return {"type": self.type, "amount": self.amount}


@dataclass(frozen=True)
class NutrientPlan:
    needed: bool
    fertilizers: tuple[FertilizerDose, ...] = field(default_factory=tuple)
    advice: str = ""

    def as_dict(self) -> dict:
        return {
            "needed":      self.needed,
            "fertilizers": [f.as_dict() for f in self.fertilizers],
            "advice":      self.advice,
        }


@dataclass(frozen=True)
class ManagementPrescription:
    irrigation: IrrigationPlan
    nutrient: NutrientPlan

    def as_dict(self) -> dict:
        return {"irrigation": self.irrigation.as_dict(), "nutrient": self.nutrient.as_dict()}


@dataclass(frozen=True)
class ManagementTask:
    priority: str   # "HIGH" | "MEDIUM" | "LOW"
    title: str
    description: str
    icon: str

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
