"""
Configuration and constants for the local expert crop advisor.
Centralizes paths, reading column names, scoring weights, advisor defaults and thresholds.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Base paths (project root = parent of 'farm_expert')
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
REPORTS_DIR = PROJECT_ROOT / "reports"
FIGURES_DIR = REPORTS_DIR / "figures"

# ---------------------------------------------------------------------------
# Sensor reading columns
#
# Expected schema for a readings CSV (place in data/raw/):
#   sensor_readings.csv : temperature, moisture, ph_level, npk_n, npk_p, npk_k
#                         (+ optional timestamp, field_id, data_id)
# ---------------------------------------------------------------------------
READINGS_FNAME = "sensor_readings.csv"

READING_COLUMNS = ["temperature", "moisture", "ph_level", "npk_n", "npk_p", "npk_k"]
TIMESTAMP_COLUMN = "timestamp"

# Common header variants seen in exported sensor logs and the Kaggle dataset
READING_ALIASES: dict[str, str] = {
    "temp": "temperature",
    "soil_moisture": "moisture",
    "humidity": "moisture",
    "ph": "ph_level",
    "n": "npk_n",
    "nitrogen": "npk_n",
    "p": "npk_p",
    "phosphorus": "npk_p",
    "k": "npk_k",
    "potassium": "npk_k",
}

# ---------------------------------------------------------------------------
# Suitability scoring
# ---------------------------------------------------------------------------
# Weight per attribute; sums to 100 so the raw score is already a percentage.
SCORE_WEIGHTS: dict[str, float] = {
    "n":        15,
    "p":        10,
    "k":        10,
    "ph":       20,
    "temp":     15,
    "moisture": 20,
    "soil":     10,
}

# Profile range attribute -> SensorReading attribute
RANGE_READING_MAP: dict[str, str] = {
    "n":        "npk_n",
    "p":        "npk_p",
    "k":        "npk_k",
    "ph":       "ph_level",
    "temp":     "temperature",
    "moisture": "moisture",
}

NEUTRAL_FACTOR = 0.5          # contribution of a range attribute whose sensor is not reporting
UNKNOWN_SOIL_TYPE = "Unknown" # literal sentinel, matched case-sensitively
UNKNOWN_SOIL_FACTOR = 0.5
DEFAULT_SOIL_TYPE = "Alluvial"
TOP_N_CROPS = 3

# ---------------------------------------------------------------------------
# Soil insight / prescription defaults and thresholds
# ---------------------------------------------------------------------------
DEFAULT_PH = 7.0
DEFAULT_MOISTURE = 50.0
DEFAULT_NITROGEN = 50.0

PH_THRESHOLDS = {"low": 5.5, "high": 7.5}
MOISTURE_CRITICAL = 30        # soil insight: "critically low" below this
IRRIGATION_NEEDED_BELOW = 40
IRRIGATION_HEAVY_BELOW = 20
NITROGEN_NEEDED_BELOW = 60
NITROGEN_HEAVY_BELOW = 40

# ---------------------------------------------------------------------------
# Management hub targets
# ---------------------------------------------------------------------------
TARGET_MOISTURE = 65          # % volumetric; fields below this get a water prescription
LITRES_PER_PCT_ACRE = 1000    # rough: 1 % moisture deficit on 1 acre ~ 1000 litres
NUTRIENT_TARGETS: dict[str, float] = {"npk_n": 60, "npk_p": 50, "npk_k": 70}
NUTRIENT_PRODUCTS: dict[str, str] = {
    "npk_n": "Urea (N)",
    "npk_p": "DAP (P)",
    "npk_k": "MOP (K)",
}


# ---------------------------------------------------------------------------
# Ensure directories exist (called by the CLI before writing reports)
# ---------------------------------------------------------------------------
def ensure_dirs():
    RAW_DATA_DIR.mkdir(parents=True, exist_ok=True)
    FIGURES_DIR.mkdir(parents=True, exist_ok=True)
