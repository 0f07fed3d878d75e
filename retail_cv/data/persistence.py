"""
Saving and loading the ordered split sequence.

Two formats are supported:
- ``csv``: one train/test (and aux) file per split plus a manifest
- ``pickle``: the list of ``Split`` objects in a single file
"""

import logging
import os
from typing import List, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

from .calendar import YearWeek
from .loader import TIME_COL
from .splits import Split

logger = logging.getLogger(__name__)

MANIFEST_FILE = "splits_manifest.csv"
PICKLE_FILE = "splits.pkl"
FORMATS = ("csv", "pickle")


def _to_csv(df: pd.DataFrame, path: str) -> None:
    out = df.copy()
    if TIME_COL in out.columns:
        out[TIME_COL] = out[TIME_COL].astype(str)
    out.to_csv(path, index=False)


def _read_csv(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    if TIME_COL in df.columns:
        df[TIME_COL] = df[TIME_COL].map(YearWeek.parse).astype(object)
    return df


def save_splits(
    splits: Sequence[Split],
    output_dir: str,
    fmt: str = "csv",
    show_progress: bool = False
) -> List[str]:
    """
    Write splits to ``output_dir`` in walk-forward order.

    Parameters
    ----------
    splits : Sequence[Split]
        Splits from ``generate_splits``.
    output_dir : str
        Target directory, created if missing.
    fmt : str
        ``"csv"`` or ``"pickle"``.
    show_progress : bool
        Show a progress bar while writing CSV files.

    Returns
    -------
    List[str]
        Paths of the files written.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}. Available: {list(FORMATS)}")

    os.makedirs(output_dir, exist_ok=True)

    if fmt == "pickle":
        path = os.path.join(output_dir, PICKLE_FILE)
        pd.to_pickle(list(splits), path)
        logger.info(f"Saved {len(splits)} splits to {path}")
        return [path]

    paths = []
    manifest = []
    for split in tqdm(splits, desc="Writing splits", disable=not show_progress):
        i = split.split_idx
        train_path = os.path.join(output_dir, f"train_{i}.csv")
        test_path = os.path.join(output_dir, f"test_{i}.csv")
        _to_csv(split.train, train_path)
        _to_csv(split.test, test_path)
        paths.extend([train_path, test_path])

        if split.aux is not None:
            aux_path = os.path.join(output_dir, f"aux_{i}.csv")
            _to_csv(split.aux, aux_path)
            paths.append(aux_path)

        w = split.window
        manifest.append({
            "split_idx": i,
            "train_start": w.train_start,
            "train_end": w.train_end,
            "test_start": w.test_start,
            "test_end": w.test_end,
            "n_train": len(split.train),
            "n_test": len(split.test),
            "has_aux": split.aux is not None,
        })

    manifest_path = os.path.join(output_dir, MANIFEST_FILE)
    pd.DataFrame(manifest).to_csv(manifest_path, index=False)
    paths.append(manifest_path)

    logger.info(f"Saved {len(splits)} splits to {output_dir}")
    return paths


def load_splits(output_dir: str, fmt: str = "csv") -> List[Tuple[pd.DataFrame, pd.DataFrame]]:
    """
    Read back the ordered ``(train, test)`` pairs written by ``save_splits``.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}. Available: {list(FORMATS)}")

    if fmt == "pickle":
        splits = pd.read_pickle(os.path.join(output_dir, PICKLE_FILE))
        return [(split.train, split.test) for split in splits]

    manifest_path = os.path.join(output_dir, MANIFEST_FILE)
    if not os.path.exists(manifest_path):
        raise FileNotFoundError(f"Split manifest not found: {manifest_path}")
    manifest = pd.read_csv(manifest_path).sort_values("split_idx")

    pairs = []
    for i in manifest["split_idx"]:
        train = _read_csv(os.path.join(output_dir, f"train_{i}.csv"))
        test = _read_csv(os.path.join(output_dir, f"test_{i}.csv"))
        pairs.append((train, test))

    logger.info(f"Loaded {len(pairs)} splits from {output_dir}")
    return pairs
