"""
Panel completion for sparse store x brand x week data.

The raw data only has rows for observed weeks. Completion builds the full
cross-product of stores, brands and the global week range, keeps observed
values untouched and leaves every inserted row's measurements null.
"""

import logging
from datetime import date

import numpy as np
import pandas as pd

from .calendar import weeks_to_yearweeks
from .loader import (
    BRAND_COL,
    KEY_COLS,
    REQUIRED_COLUMNS,
    STORE_COL,
    TARGET_COL,
    TIME_COL,
    WEEK_COL,
    validate_raw_schema,
)

logger = logging.getLogger(__name__)


def build_key_grid(df: pd.DataFrame) -> pd.DataFrame:
    """
    Build the full (store, brand, week) key grid of a raw frame.

    Weeks span the contiguous integer range between the smallest and
    largest observed offsets, so weeks missing for every key are included.
    An empty frame yields an empty grid.
    """
    if df.empty:
        return df[REQUIRED_COLUMNS].copy()

    stores = np.sort(df[STORE_COL].unique())
    brands = np.sort(df[BRAND_COL].unique())
    weeks = np.arange(df[WEEK_COL].min(), df[WEEK_COL].max() + 1, dtype="int64")

    index = pd.MultiIndex.from_product([stores, brands, weeks], names=REQUIRED_COLUMNS)
    return index.to_frame(index=False)


def complete_panel(raw: pd.DataFrame, start_date: date) -> pd.DataFrame:
    """
    Expand raw rows to the complete store x brand x week panel.

    Parameters
    ----------
    raw : pd.DataFrame
        Raw rows with ``store``, ``brand``, integer ``week`` and any number
        of measurement columns. Not modified.
    start_date : date
        Calendar date of week offset 0.

    Returns
    -------
    pd.DataFrame
        One row per (store, brand, week) with a ``yearweek`` time index,
        ordered by store, brand and week. Measurement values of raw rows are
        kept. When rows are inserted, integer measurement columns (e.g.
        ``deal``) become float64 so they can hold NaN.
    """
    df = validate_raw_schema(raw)

    grid = build_key_grid(df)
    panel = grid.merge(df, how="left", on=REQUIRED_COLUMNS, validate="one_to_one")
    panel[TIME_COL] = weeks_to_yearweeks(panel[WEEK_COL], start_date)
    panel = panel.sort_values(REQUIRED_COLUMNS).reset_index(drop=True)

    n_inserted = len(panel) - len(df)
    logger.info(
        f"Completed panel: {panel[STORE_COL].nunique()} stores x "
        f"{panel[BRAND_COL].nunique()} brands x {panel[WEEK_COL].nunique()} weeks "
        f"= {len(panel)} rows ({n_inserted} inserted)"
    )
    return panel


def panel_coverage(panel: pd.DataFrame, target_col: str = TARGET_COL) -> pd.DataFrame:
    """
    Summarise observed target values per (store, brand).

    Parameters
    ----------
    panel : pd.DataFrame
        Completed panel.
    target_col : str
        Measurement column whose presence is counted.

    Returns
    -------
    pd.DataFrame
        Columns: store, brand, n_weeks, n_observed, first_observed_week,
        last_observed_week. The week columns are NaN for keys never observed.
    """
    observed_weeks = panel[WEEK_COL].where(panel[target_col].notna())
    coverage = (
        panel.assign(_observed_week=observed_weeks)
        .groupby(KEY_COLS, as_index=False)
        .agg(
            n_weeks=(WEEK_COL, "size"),
            n_observed=(target_col, "count"),
            first_observed_week=("_observed_week", "min"),
            last_observed_week=("_observed_week", "max"),
        )
    )

    truncated = coverage[coverage["last_observed_week"] < panel[WEEK_COL].max()]
    for row in truncated.itertuples(index=False):
        logger.info(
            f"Store {row.store}, brand {row.brand}: no observations after week "
            f"{int(row.last_observed_week)}"
        )
    return coverage
