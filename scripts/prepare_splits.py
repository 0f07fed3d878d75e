#!/usr/bin/env python
"""
Split Preparation Runner

Loads the raw store x brand x week panel, completes it against the full key
space and writes rolling train/test splits for walk-forward evaluation.

Usage:
    python prepare_splits.py --data data/oj.csv [--settings configs/settings.yaml]
                             [--output data/splits] [--format csv|pickle]
                             [--aux-columns price deal feat] [--plots] [--verbose]
"""

import argparse
import logging
import os
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from retail_cv.data import (
    compute_split_windows,
    load_and_prepare_splits,
    panel_coverage,
    save_splits,
)
from retail_cv.evaluation import summarize_splits
from retail_cv.exceptions import ConfigurationError, SchemaError
from retail_cv.visualization import create_split_visualizations
from configs import get_config, ExperimentConfig


logger = logging.getLogger(__name__)


def main(config: ExperimentConfig):
    """
    Main split preparation runner.

    Parameters
    ----------
    config : ExperimentConfig
        Pipeline configuration.
    """
    settings = config.settings

    logger.info("=" * 70)
    logger.info("ROLLING SPLIT PREPARATION")
    logger.info("=" * 70)
    logger.info(f"Raw data: {config.data.filepath}")
    logger.info(f"Settings: {settings.to_dict()}")
    logger.info("=" * 70)

    for window in compute_split_windows(settings):
        logger.debug(window.summary())

    panel, splits = load_and_prepare_splits(
        config.data.filepath,
        settings,
        aux_columns=config.data.aux_cols or None
    )
    panel_coverage(panel, target_col=config.data.target_col)

    # Summary
    logger.info("\n" + "=" * 70)
    logger.info("SPLIT SUMMARY")
    logger.info("=" * 70)

    summary_df = summarize_splits(splits, target_col=config.data.target_col)
    print("\n", summary_df.to_string(index=False))

    os.makedirs(config.results_dir, exist_ok=True)
    summary_path = os.path.join(config.results_dir, "split_summary.csv")
    summary_df.to_csv(summary_path, index=False)
    logger.info(f"[OK] Saved: {summary_path}")

    # Persist
    save_splits(splits, config.data.output_dir, fmt=config.data.output_format, show_progress=True)

    # Visualization
    if config.make_plots:
        logger.info("\n" + "=" * 70)
        logger.info("GENERATING VISUALIZATIONS")
        logger.info("=" * 70)
        create_split_visualizations(
            panel, splits,
            output_dir=config.results_dir,
            target_col=config.data.target_col
        )

    logger.info("\n" + "=" * 70)
    logger.info("SPLIT PREPARATION COMPLETE")
    logger.info("=" * 70)

    return panel, splits, summary_df


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prepare rolling train/test splits of a sales panel")
    parser.add_argument("--data", type=str, required=True, help="Raw panel CSV")
    parser.add_argument("--settings", type=str, default=None, help="Settings YAML file")
    parser.add_argument("--output", type=str, default="data/splits", help="Split output directory")
    parser.add_argument("--results", type=str, default="results", help="Summary and plot directory")
    parser.add_argument("--format", type=str, default="csv", choices=["csv", "pickle"],
                        help="Split file format")
    parser.add_argument("--aux-columns", nargs="*", default=[],
                        help="Known-in-advance covariates to export per split")
    parser.add_argument("--plots", action="store_true", help="Save split plots")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = get_config(
            args.settings,
            filepath=args.data,
            output_dir=args.output,
            output_format=args.format,
            aux_cols=args.aux_columns,
        )
        config.results_dir = args.results
        config.make_plots = args.plots

        main(config)
    except (ConfigurationError, SchemaError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)
