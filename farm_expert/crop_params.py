"""
Crop knowledge base for the local expert recommender.

Each crop profile holds inclusive agronomic tolerance ranges for N, P, K (ppm),
pH, temperature (°C) and soil moisture (%), plus the soil types it favours
and the advisory text shown with a recommendation.

Sources: Kaggle Crop Recommendation dataset ranges, cross-checked against
BARI (Bangladesh Agricultural Research Institute) crop production guides.

The catalogue is compiled in, built once at import and never mutated.
Declaration order matters: it breaks ties when two crops score the same.
"""

from dataclasses import dataclass

import pandas as pd

RANGE_FIELDS = ("n", "p", "k", "ph", "temp", "moisture")


@dataclass(frozen=True)
class CropProfile:
    name: str
    n: tuple[float, float]
    p: tuple[float, float]
    k: tuple[float, float]
    ph: tuple[float, float]
    temp: tuple[float, float]
    moisture: tuple[float, float]
    soil_types: frozenset[str]
    expected_yield: str
    requirements: str
    fertilizer_plan: str
    icon: str

    def range_for(self, attribute: str) -> tuple[float, float]:
        """Tolerance range for one of RANGE_FIELDS."""
        if attribute not in RANGE_FIELDS:
            raise KeyError(attribute)
        return getattr(self, attribute)


# ──────────────────────────────────────────────────────────────────────────────
# Crop profiles: ranges are (low, high), both inclusive
# ──────────────────────────────────────────────────────────────────────────────

CROP_PROFILES: tuple[CropProfile, ...] = (
    # Cereals
    CropProfile(
        name="Rice (Boro)",
        n=(60, 100), p=(30, 50), k=(30, 50), ph=(5.0, 6.5), temp=(20, 35), moisture=(70, 95),
        soil_types=frozenset({"clay", "peaty", "alluvial"}),
        expected_yield="4.5-6.0 Ton/Ha",
        requirements="Requires standing water and high nitrogen.",
        fertilizer_plan="Urea (150kg), TSP (80kg), MoP (70kg)",
        icon="fa-seedling",
    ),
    CropProfile(
        name="Wheat",
        n=(80, 120), p=(40, 60), k=(20, 40), ph=(6.0, 7.5), temp=(15, 25), moisture=(30, 60),
        soil_types=frozenset({"loamy", "alluvial"}),
        expected_yield="3.5-4.5 Ton/Ha",
        requirements="Cool climate and well-drained loamy soil.",
        fertilizer_plan="DAP (100kg), Urea (80kg), Gypsum (20kg)",
        icon="fa-wheat-awn",
    ),
    CropProfile(
        name="Maize",
        n=(90, 130), p=(45, 70), k=(30, 60), ph=(5.5, 7.0), temp=(20, 30), moisture=(50, 80),
        soil_types=frozenset({"loamy", "alluvial", "red"}),
        expected_yield="7.0-10.0 Ton/Ha",
        requirements="High nutrient feeder, needs good drainage.",
        fertilizer_plan="Urea (200kg), TSP (100kg), MoP (80kg)",
        icon="fa-sun",
    ),

    # Fibre
    CropProfile(
        name="Jute",
        n=(40, 80), p=(20, 40), k=(20, 40), ph=(6.0, 7.5), temp=(24, 35), moisture=(70, 90),
        soil_types=frozenset({"alluvial", "silty", "clay"}),
        expected_yield="2.5-3.5 Ton/Ha",
        requirements="High humidity and standing water during growth.",
        fertilizer_plan="Urea (100kg), TSP (50kg)",
        icon="fa-leaf",
    ),

    # Tuber
    CropProfile(
        name="Potato",
        n=(80, 120), p=(60, 90), k=(100, 150), ph=(5.5, 6.5), temp=(15, 22), moisture=(60, 80),
        soil_types=frozenset({"loamy", "sandy"}),
        expected_yield="25-35 Ton/Ha",
        requirements="Potassium heavy crop, needs loose soil.",
        fertilizer_plan="MoP (150kg), Urea (120kg), TSP (100kg)",
        icon="fa-circle",
    ),

    # Cash crops
    CropProfile(
        name="Cotton",
        n=(100, 140), p=(40, 60), k=(20, 40), ph=(7.0, 8.5), temp=(22, 32), moisture=(40, 70),
        soil_types=frozenset({"black", "alluvial"}),
        expected_yield="2.0-3.0 Ton/Ha",
        requirements="Deep soil and moderate rainfall.",
        fertilizer_plan="Urea (120kg), DAP (80kg)",
        icon="fa-shirt",
    ),

    # Fruit
    CropProfile(
        name="Watermelon",
        n=(80, 120), p=(20, 40), k=(40, 80), ph=(6.0, 7.0), temp=(24, 32), moisture=(20, 50),
        soil_types=frozenset({"sandy", "red"}),
        expected_yield="40-60 Ton/Ha",
        requirements="Warm weather and sandy soil for root expansion.",
        fertilizer_plan="Urea (100kg), MoP (60kg)",
        icon="fa-apple-whole",
    ),

    # Cereals (dryland)
    CropProfile(
        name="Millet",
        n=(40, 70), p=(20, 40), k=(20, 40), ph=(5.5, 7.5), temp=(25, 35), moisture=(10, 40),
        soil_types=frozenset({"red", "sandy", "loamy"}),
        expected_yield="1.5-2.5 Ton/Ha",
        requirements="Drought resistant, low water requirement.",
        fertilizer_plan="Urea (50kg), TSP (30kg)",
        icon="fa-bowl-rice",
    ),

    # Pulses
    CropProfile(
        name="Pulses (Lentil)",
        n=(20, 40), p=(40, 60), k=(20, 40), ph=(6.0, 7.5), temp=(15, 25), moisture=(30, 50),
        soil_types=frozenset({"loamy", "alluvial"}),
        expected_yield="1.2-1.8 Ton/Ha",
        requirements="Nitrogen fixing crop, needs moderate moisture.",
        fertilizer_plan="Urea (20kg), TSP (60kg), MoP (30kg)",
        icon="fa-seedling",
    ),

    # Oilseeds
    CropProfile(
        name="Mustard",
        n=(60, 90), p=(30, 50), k=(20, 40), ph=(6.0, 7.5), temp=(10, 25), moisture=(30, 50),
        soil_types=frozenset({"loamy", "alluvial"}),
        expected_yield="1.5-2.2 Ton/Ha",
        requirements="Cool weather crop, sensitive to frost.",
        fertilizer_plan="Urea (100kg), TSP (70kg), Gypsum (20kg)",
        icon="fa-oil-can",
    ),
    CropProfile(
        name="Soyabean",
        n=(30, 60), p=(60, 100), k=(40, 70), ph=(6.0, 7.0), temp=(20, 30), moisture=(50, 70),
        soil_types=frozenset({"loamy", "clay"}),
        expected_yield="2.5-3.5 Ton/Ha",
        requirements="High protein crop, needs phosphorus.",
        fertilizer_plan="Urea (40kg), TSP (120kg), MoP (60kg)",
        icon="fa-leaf",
    ),
)


def validate_catalogue(profiles=CROP_PROFILES) -> None:
    """
    Raise ValueError if any profile breaks the catalogue invariants:
    low <= high for every range, non-empty lower-case soil types, unique names.
    """
    seen = set()
    for profile in profiles:
        if profile.name in seen:
            raise ValueError(f"Duplicate crop profile '{profile.name}'")
        seen.add(profile.name)
        for attr in RANGE_FIELDS:
            lo, hi = profile.range_for(attr)
            if lo > hi:
                raise ValueError(f"{profile.name}: {attr} range ({lo}, {hi}) has low > high")
        if not profile.soil_types:
            raise ValueError(f"{profile.name}: soil_types is empty")
        if any(s != s.lower() for s in profile.soil_types):
            raise ValueError(f"{profile.name}: soil_types must be lower-case")


validate_catalogue()

_BY_NAME = {p.name.lower(): p for p in CROP_PROFILES}


def get_profile(name: str) -> CropProfile:
    """Case-insensitive lookup by display name; raises KeyError for an unknown crop."""
    key = (name or "").strip().lower()
    if key not in _BY_NAME:
        raise KeyError(f"No crop profile named '{name}'")
    return _BY_NAME[key]


def catalogue_frame(profiles=CROP_PROFILES) -> pd.DataFrame:
    """
    Tabular view of the catalogue: one row per crop, in declaration order,
    with <attr>_low / <attr>_high columns and soil types joined as a sorted string.
    """
    rows = []
    for profile in profiles:
        row = {"name": profile.name}
        for attr in RANGE_FIELDS:
            lo, hi = profile.range_for(attr)
            row[f"{attr}_low"] = float(lo)
            row[f"{attr}_high"] = float(hi)
        row["soil_types"] = ", ".join(sorted(profile.soil_types))
        row["expected_yield"] = profile.expected_yield
        rows.append(row)
    return pd.DataFrame(rows)
