"""
Rolling-origin train/test splits with an embargo gap.

Each split trains on weeks ``[first_week, t]`` and tests on
``[t + gap, t + gap + horizon - 1]``. The origins ``t`` are spaced
``horizon`` weeks apart and the last one is anchored so that the final
test window ends exactly at ``last_week``. For ``gap > 1`` the weeks
``t + 1 .. t + gap - 1`` belong to neither window. ``gap = 0`` starts the
test window at ``t + 1``, the same as ``gap = 1``, so the two windows never
share a week.
"""

import logging
import warnings
from dataclasses import dataclass
from datetime import date
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..exceptions import ConfigurationError, EmptyWindowWarning, SchemaError
from .calendar import YearWeek, week_to_yearweek
from .loader import REQUIRED_COLUMNS, TARGET_COL, TIME_COL, load_raw_data
from .panel import complete_panel

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass(frozen=True)
class SplitWindow:
    """Week-offset bounds of one split, inclusive on both ends."""
    split_idx: int
    train_start: int
    train_end: int
    test_start: int
    test_end: int

    @property
    def embargo_weeks(self) -> int:
        """Number of weeks strictly between train end and test start."""
        return self.test_start - self.train_end - 1

    @property
    def horizon(self) -> int:
        return self.test_end - self.test_start + 1

    def to_yearweeks(self, start_date: date) -> Tuple[YearWeek, YearWeek, YearWeek, YearWeek]:
        """Bounds as ``(train_start, train_end, test_start, test_end)`` year-weeks."""
        return tuple(
            week_to_yearweek(w, start_date)
            for w in (self.train_start, self.train_end, self.test_start, self.test_end)
        )

    def summary(self) -> str:
        return (
            f"Split {self.split_idx}: "
            f"Train weeks {self.train_start}-{self.train_end} | "
            f"Test weeks {self.test_start}-{self.test_end} | "
            f"Embargo {self.embargo_weeks} week(s)"
        )


@dataclass
class Split:
    """
    Container for one train/test split of the completed panel.

    ``aux`` optionally holds known-in-advance covariates for the weeks after
    the train window up to the end of the test window.
    """
    train: pd.DataFrame
    test: pd.DataFrame
    window: SplitWindow
    aux: Optional[pd.DataFrame] = None

    @property
    def split_idx(self) -> int:
        return self.window.split_idx

    def __iter__(self) -> Iterator[pd.DataFrame]:
        # unpacks as (train, test)
        return iter((self.train, self.test))

    def summary(self) -> str:
        return f"{self.window.summary()} | Train={len(self.train)}, Test={len(self.test)}"


# =============================================================================
# WINDOW ARITHMETIC
# =============================================================================

def _test_start_offset(settings) -> int:
    """Weeks from the train end to the test start; at least 1."""
    return max(settings.gap, 1)


def compute_train_periods(settings) -> List[int]:
    """
    Compute the training origins (last train week) of every split.

    The origins form an increasing arithmetic sequence of ``n_splits``
    values with step ``horizon``, ending at
    ``last_week - horizon - max(gap, 1) + 1``.

    Parameters
    ----------
    settings : Settings
        Split settings.

    Returns
    -------
    List[int]
        Train end week offsets, earliest first.

    Raises
    ------
    ConfigurationError
        If a window would fall outside ``[first_week, last_week]``.

    Examples
    --------
    With first_week=40, last_week=156, horizon=2, gap=2, n_splits=3
    the origins are [149, 151, 153].
    """
    offset = _test_start_offset(settings)
    last_origin = settings.last_week - settings.horizon - offset + 1
    steps_back = np.arange(settings.n_splits - 1, -1, -1)
    train_periods = [int(t) for t in last_origin - settings.horizon * steps_back]

    if train_periods[0] < settings.first_week:
        raise ConfigurationError(
            f"First split would end training at week {train_periods[0]}, before "
            f"first_week={settings.first_week}. Reduce n_splits ({settings.n_splits}), "
            f"horizon ({settings.horizon}) or gap ({settings.gap}), or move first_week back."
        )
    last_test_end = train_periods[-1] + offset + settings.horizon - 1
    if last_test_end > settings.last_week:
        raise ConfigurationError(
            f"Last test window ends at week {last_test_end}, after last_week={settings.last_week}"
        )

    return train_periods


def compute_split_windows(settings) -> List[SplitWindow]:
    """Week-offset windows of every split, in walk-forward order."""
    windows = []
    for split_idx, t in enumerate(compute_train_periods(settings)):
        test_start = t + _test_start_offset(settings)
        windows.append(SplitWindow(
            split_idx=split_idx,
            train_start=settings.first_week,
            train_end=t,
            test_start=test_start,
            test_end=test_start + settings.horizon - 1,
        ))
    return windows


def select_window(panel: pd.DataFrame, start: YearWeek, end: YearWeek) -> pd.DataFrame:
    """
    Select the panel rows whose time index lies in ``[start, end]``.

    Parameters
    ----------
    panel : pd.DataFrame
        Completed panel with a ``yearweek`` column.
    start, end : YearWeek
        Inclusive bounds.

    Returns
    -------
    pd.DataFrame
        Matching rows across all store/brand keys.
    """
    time_index = panel[TIME_COL]
    return panel[(time_index >= start) & (time_index <= end)]


def _aux_frame(
    panel: pd.DataFrame,
    window: SplitWindow,
    start_date: date,
    aux_columns: Sequence[str]
) -> pd.DataFrame:
    start = week_to_yearweek(window.train_end + 1, start_date)
    end = week_to_yearweek(window.test_end, start_date)
    rows = select_window(panel, start, end)
    return rows[REQUIRED_COLUMNS + [TIME_COL] + list(aux_columns)]


# =============================================================================
# SPLIT GENERATION
# =============================================================================

def generate_splits(
    panel: pd.DataFrame,
    settings,
    aux_columns: Optional[Sequence[str]] = None,
    target_col: str = TARGET_COL
) -> List[Split]:
    """
    Slice the completed panel into rolling train/test splits.

    Parameters
    ----------
    panel : pd.DataFrame
        Completed panel from ``complete_panel``.
    settings : Settings
        Split settings.
    aux_columns : Sequence[str], optional
        Known-in-advance covariates (e.g. price, deal, feat) to expose for
        the weeks following each train window.
    target_col : str
        Target column, never allowed in ``aux_columns``.

    Returns
    -------
    List[Split]
        Exactly ``n_splits`` splits, earliest origin first.
    """
    # Resolve every window first so bad settings abort before any slicing
    windows = compute_split_windows(settings)

    if aux_columns:
        if target_col in aux_columns:
            raise ConfigurationError(f"Target column '{target_col}' cannot be an auxiliary column")
        absent = [c for c in aux_columns if c not in panel.columns]
        if absent:
            raise SchemaError(f"Auxiliary columns not in panel: {absent}")

    logger.info("Creating rolling splits...")
    logger.info(f"  Splits: {settings.n_splits}")
    logger.info(f"  Horizon: {settings.horizon} weeks")
    logger.info(f"  Gap: {settings.gap} weeks")
    logger.info(f"  Weeks: {settings.first_week}-{settings.last_week}")
    if settings.gap == 0:
        logger.info("  gap=0 treated as gap=1: test starts the week after train ends")

    splits = []
    for window in windows:
        train_start, train_end, test_start, test_end = window.to_yearweeks(settings.start_date)

        split = Split(
            train=select_window(panel, train_start, train_end),
            test=select_window(panel, test_start, test_end),
            window=window,
        )
        if aux_columns:
            split.aux = _aux_frame(panel, window, settings.start_date, aux_columns)

        for name, subset in (("train", split.train), ("test", split.test)):
            if subset.empty:
                message = (
                    f"Split {window.split_idx}: {name} window "
                    f"{getattr(window, name + '_start')}-{getattr(window, name + '_end')} "
                    f"selects no rows"
                )
                logger.warning(message)
                warnings.warn(message, EmptyWindowWarning, stacklevel=2)

        splits.append(split)
        logger.info(f"  {split.summary()}")

    logger.info(f"Created {len(splits)} rolling splits")

    return splits


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def load_and_prepare_splits(
    filepath: str,
    settings,
    aux_columns: Optional[Sequence[str]] = None
) -> Tuple[pd.DataFrame, List[Split]]:
    """
    Convenience function to load, complete and split the panel in one call.

    Parameters
    ----------
    filepath : str
        Path to the raw CSV file.
    settings : Settings
        Split settings.
    aux_columns : Sequence[str], optional
        Known-in-advance covariates to expose per split.

    Returns
    -------
    Tuple[pd.DataFrame, List[Split]]
        Completed panel and its splits.
    """
    # Validate windows before touching the data
    compute_train_periods(settings)

    raw = load_raw_data(filepath)
    panel = complete_panel(raw, settings.start_date)
    splits = generate_splits(panel, settings, aux_columns=aux_columns)

    return panel, splits
