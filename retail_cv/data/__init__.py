"""Data loading, panel completion and split generation module."""

from .calendar import (
    YearWeek,
    week_to_date,
    week_to_yearweek,
    weeks_to_yearweeks,
)
from .loader import (
    STORE_COL,
    BRAND_COL,
    WEEK_COL,
    TARGET_COL,
    TIME_COL,
    KEY_COLS,
    REQUIRED_COLUMNS,
    load_raw_data,
    validate_raw_schema,
)
from .panel import (
    build_key_grid,
    complete_panel,
    panel_coverage,
)
from .splits import (
    SplitWindow,
    Split,
    compute_train_periods,
    compute_split_windows,
    select_window,
    generate_splits,
    load_and_prepare_splits,
)
from .persistence import (
    save_splits,
    load_splits,
)

__all__ = [
    "YearWeek",
    "week_to_date",
    "week_to_yearweek",
    "weeks_to_yearweeks",
    "STORE_COL",
    "BRAND_COL",
    "WEEK_COL",
    "TARGET_COL",
    "TIME_COL",
    "KEY_COLS",
    "REQUIRED_COLUMNS",
    "load_raw_data",
    "validate_raw_schema",
    "build_key_grid",
    "complete_panel",
    "panel_coverage",
    "SplitWindow",
    "Split",
    "compute_train_periods",
    "compute_split_windows",
    "select_window",
    "generate_splits",
    "load_and_prepare_splits",
    "save_splits",
    "load_splits",
]
