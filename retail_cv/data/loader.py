"""
Raw dataset loading and schema validation.

This module handles:
- Loading raw store x brand x week sales rows from CSV
- Checking the key fields every downstream step relies on
"""

import logging
import os
from typing import List

import numpy as np
import pandas as pd

from ..exceptions import SchemaError

logger = logging.getLogger(__name__)

STORE_COL = "store"
BRAND_COL = "brand"
WEEK_COL = "week"
TARGET_COL = "logmove"
TIME_COL = "yearweek"

KEY_COLS: List[str] = [STORE_COL, BRAND_COL]
REQUIRED_COLUMNS: List[str] = [STORE_COL, BRAND_COL, WEEK_COL]


def load_raw_data(filepath: str) -> pd.DataFrame:
    """
    Load raw sales rows from CSV.

    Parameters
    ----------
    filepath : str
        Path to the CSV file.

    Returns
    -------
    pd.DataFrame
        Raw dataframe, one row per observed (store, brand, week).
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Raw data file not found: {filepath}")

    logger.info(f"Loading data from {filepath}")
    df = pd.read_csv(filepath)
    logger.info(f"Loaded {len(df)} records")
    return df


def validate_raw_schema(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate the key fields of raw rows.

    Parameters
    ----------
    df : pd.DataFrame
        Raw rows with at least ``store``, ``brand`` and ``week``.

    Returns
    -------
    pd.DataFrame
        Copy of the input with ``week`` cast to int64.

    Raises
    ------
    SchemaError
        If a key column is missing or null, ``week`` is not integral, or a
        (store, brand, week) key occurs more than once.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing required columns: {missing}")

    null_counts = df[REQUIRED_COLUMNS].isna().sum()
    null_counts = null_counts[null_counts > 0]
    if not null_counts.empty:
        raise SchemaError(f"Null values in key columns: {null_counts.to_dict()}")

    df = df.copy()

    weeks = pd.to_numeric(df[WEEK_COL], errors="coerce")
    if weeks.isna().any() or not np.all(np.mod(weeks, 1) == 0):
        bad = df.loc[weeks.isna() | (np.mod(weeks.fillna(0), 1) != 0), WEEK_COL]
        raise SchemaError(
            f"Column '{WEEK_COL}' must hold integer week offsets; "
            f"invalid values (first 5): {bad.head().tolist()}"
        )
    df[WEEK_COL] = weeks.astype("int64")

    duplicated = df.duplicated(subset=REQUIRED_COLUMNS, keep=False)
    if duplicated.any():
        examples = df.loc[duplicated, REQUIRED_COLUMNS].head().to_dict("records")
        raise SchemaError(
            f"Found {int(duplicated.sum())} rows with duplicated "
            f"(store, brand, week) keys, e.g. {examples}"
        )

    return df
