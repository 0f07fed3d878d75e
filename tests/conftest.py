import os
import sys
from datetime import date

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from configs import Settings

START_DATE = date(1989, 9, 14)


def _make_raw(weeks=range(40, 161), stores=(1, 2, 3), brands=(1, 2), seed=42):
    rng = np.random.default_rng(seed)
    rows = []
    for store in stores:
        for brand in brands:
            for week in weeks:
                rows.append({
                    "store": store,
                    "brand": brand,
                    "week": week,
                    "logmove": rng.normal(9.0, 1.0),
                    "price": round(rng.uniform(0.02, 0.06), 4),
                    "deal": int(rng.integers(0, 2)),
                })
    return pd.DataFrame(rows)


@pytest.fixture
def make_raw():
    """Factory for complete synthetic raw panels."""
    return _make_raw


@pytest.fixture
def raw_data():
    """
    Sparse raw panel over weeks 40-160: store 3 / brand 2 lacks week 80 and
    store 2 / brand 1 has no observations after week 130.
    """
    df = _make_raw()
    missing = (df["store"] == 3) & (df["brand"] == 2) & (df["week"] == 80)
    truncated = (df["store"] == 2) & (df["brand"] == 1) & (df["week"] > 130)
    return df[~(missing | truncated)].reset_index(drop=True)


@pytest.fixture
def settings():
    return Settings(
        n_splits=3,
        horizon=2,
        gap=2,
        first_week=40,
        last_week=156,
        start_date=START_DATE,
    )
