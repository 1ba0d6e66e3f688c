"""
Data loading for sensor reading logs.
Loads a readings CSV from data/raw/ (or any path), normalizes column names, and
returns the six reading columns plus timestamp when present.
- Header variants (ph, N, soil_moisture, ...) are mapped to the standard names.
- Missing reading columns are added as NaN; NaN is treated as "sensor not reporting",
  so rows are never dropped for partial data.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from farm_expert.config import (
    RAW_DATA_DIR,
    READINGS_FNAME,
    READING_COLUMNS,
    READING_ALIASES,
    TIMESTAMP_COLUMN,
)
from farm_expert.schema import SensorReading

log = logging.getLogger(__name__)


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Strip / lower-case headers and map known aliases to reading column names.
    Each reading column takes at most one alias (the first found in READING_ALIASES);
    headers that collide after lower-casing raise ValueError.
    """
    cols = [c.strip().lower() for c in df.columns]
    dupes = sorted({c for c in cols if cols.count(c) > 1})
    if dupes:
        raise ValueError(f"Duplicate column headers (case-insensitive): {dupes}")
    df = df.set_axis(cols, axis=1)
    renames = {}
    for a, target in READING_ALIASES.items():
        if a in df.columns and target not in df.columns and target not in renames.values():
            renames[a] = target
        elif a in df.columns:
            log.debug("Ignoring column %r; %s already mapped.", a, target)
    if renames:
        df = df.rename(columns=renames)
    return df


def get_data_path() -> Path:
    """Default readings CSV location."""
    return RAW_DATA_DIR / READINGS_FNAME


def load_readings(csv_path: Path | str | None = None) -> pd.DataFrame:
    """
    Load sensor readings from CSV.
    Returns a DataFrame with columns READING_COLUMNS (+ timestamp if the file has one).
    Raises FileNotFoundError for a missing file and ValueError when none of the
    reading columns are present.
    """
    path = Path(csv_path) if csv_path is not None else get_data_path()
    if not path.exists():
        raise FileNotFoundError(
            f"Readings file not found at {path}. "
            f"Export sensor data as CSV with columns {READING_COLUMNS} (timestamp optional)."
        )
    df = _normalize_columns(pd.read_csv(path))
    present = [c for c in READING_COLUMNS if c in df.columns]
    if not present:
        raise ValueError(f"No reading columns found. Expected any of {READING_COLUMNS}. Got: {list(df.columns)}")
    for col in READING_COLUMNS:
        if col not in df.columns:
            df[col] = np.nan
        else:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    use_cols = list(READING_COLUMNS)
    if TIMESTAMP_COLUMN in df.columns:
        df[TIMESTAMP_COLUMN] = pd.to_datetime(df[TIMESTAMP_COLUMN], errors="coerce")
        use_cols.append(TIMESTAMP_COLUMN)
    log.info("Loaded %d readings from %s (%d of %d sensor columns present).",
             len(df), path, len(present), len(READING_COLUMNS))
    return df[use_cols].reset_index(drop=True)


def latest_reading(df: pd.DataFrame) -> SensorReading:
    """
    Most recent reading: the row with the latest timestamp when a timestamp
    column exists, otherwise the last row.
    """
    if df.empty:
        raise ValueError("No readings available")
    if TIMESTAMP_COLUMN in df.columns and df[TIMESTAMP_COLUMN].notna().any():
        row = df.loc[df[TIMESTAMP_COLUMN].idxmax()]
    else:
        row = df.iloc[-1]
    return SensorReading.coerce({c: row.get(c) for c in READING_COLUMNS})
