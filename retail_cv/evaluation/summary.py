"""
Descriptive summaries of generated splits.

Reports window bounds, row counts and the share of missing target values in
each subset. Completed panels keep gaps as nulls, so the missing rates show
how much of each window downstream models will actually see.
"""

from typing import Sequence

import pandas as pd

from ..data.loader import TARGET_COL
from ..data.splits import Split


def _missing_rate(df: pd.DataFrame, target_col: str) -> float:
    if df.empty:
        return float("nan")
    return float(df[target_col].isna().mean())


def summarize_splits(
    splits: Sequence[Split],
    target_col: str = TARGET_COL
) -> pd.DataFrame:
    """
    Create a summary DataFrame with one row per split.

    Parameters
    ----------
    splits : Sequence[Split]
        Generated splits.
    target_col : str
        Target column used for the missing-value rates.

    Returns
    -------
    pd.DataFrame
        Summary table ordered by split index.
    """
    rows = []
    for split in splits:
        w = split.window
        rows.append({
            "split_idx": w.split_idx,
            "train_start": w.train_start,
            "train_end": w.train_end,
            "test_start": w.test_start,
            "test_end": w.test_end,
            "embargo_weeks": w.embargo_weeks,
            "n_train": len(split.train),
            "n_test": len(split.test),
            "train_missing_rate": _missing_rate(split.train, target_col),
            "test_missing_rate": _missing_rate(split.test, target_col),
        })

    columns = [
        "split_idx", "train_start", "train_end", "test_start", "test_end",
        "embargo_weeks", "n_train", "n_test",
        "train_missing_rate", "test_missing_rate",
    ]
    return pd.DataFrame(rows, columns=columns).sort_values("split_idx").reset_index(drop=True)
