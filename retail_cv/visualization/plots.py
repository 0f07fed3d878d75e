"""
Visualization module for panels and rolling splits.

This module provides:
- Train / embargo / test timelines per split
- Panel coverage heatmaps (share of observed target values)
"""

import logging
import os
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..data.loader import STORE_COL, TARGET_COL, WEEK_COL
from ..data.splits import Split, SplitWindow

logger = logging.getLogger(__name__)

# Set style
plt.style.use('seaborn-v0_8-whitegrid')


def plot_split_windows(
    windows: Sequence[SplitWindow],
    title: str = "Rolling Splits",
    figsize: Tuple[int, int] = (12, 6),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Plot train, embargo and test windows of every split as horizontal bars.

    Parameters
    ----------
    windows : Sequence[SplitWindow]
        Split windows in walk-forward order.
    title : str
        Plot title.
    figsize : Tuple[int, int]
        Figure size.
    save_path : str, optional
        Path to save the figure.

    Returns
    -------
    plt.Figure
        The figure object.
    """
    fig, ax = plt.subplots(figsize=figsize)

    for i, w in enumerate(windows):
        # Bars span [start, end + 1) so single-week windows stay visible
        ax.barh(i, w.train_end - w.train_start + 1, left=w.train_start,
                color='steelblue', alpha=0.8, label='Train' if i == 0 else None)
        if w.embargo_weeks > 0:
            ax.barh(i, w.embargo_weeks, left=w.train_end + 1,
                    color='lightgray', alpha=0.8, hatch='//',
                    label='Embargo' if i == 0 else None)
        ax.barh(i, w.test_end - w.test_start + 1, left=w.test_start,
                color='darkorange', alpha=0.9, label='Test' if i == 0 else None)

    ax.set_yticks(range(len(windows)))
    ax.set_yticklabels([f"Split {w.split_idx}" for w in windows])
    ax.invert_yaxis()
    ax.set_xlabel('Week', fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.legend(loc='lower left', fontsize=9)
    ax.grid(alpha=0.3, axis='x')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        logger.info(f"Saved: {save_path}")

    return fig


def plot_panel_coverage(
    panel: pd.DataFrame,
    target_col: str = TARGET_COL,
    title: str = "Observed Share per Store and Week",
    figsize: Tuple[int, int] = (14, 8),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Heatmap of the share of non-null target values per store and week.

    Parameters
    ----------
    panel : pd.DataFrame
        Completed panel.
    target_col : str
        Target column.
    title : str
        Plot title.
    figsize : Tuple[int, int]
        Figure size.
    save_path : str, optional
        Path to save the figure.

    Returns
    -------
    plt.Figure
        The figure object.
    """
    share = (
        panel.assign(_observed=panel[target_col].notna().astype(float))
        .pivot_table(index=STORE_COL, columns=WEEK_COL, values='_observed', aggfunc='mean')
    )

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(share, ax=ax, vmin=0.0, vmax=1.0, cmap='viridis',
                cbar_kws={'label': 'Observed share'})

    ax.set_xlabel('Week', fontsize=12)
    ax.set_ylabel('Store', fontsize=12)
    ax.set_title(title, fontsize=14)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        logger.info(f"Saved: {save_path}")

    return fig


def create_split_visualizations(
    panel: pd.DataFrame,
    splits: Sequence[Split],
    output_dir: str = "results",
    target_col: str = TARGET_COL,
    prefix: str = ""
) -> List[plt.Figure]:
    """
    Create all split visualization plots.

    Parameters
    ----------
    panel : pd.DataFrame
        Completed panel.
    splits : Sequence[Split]
        Generated splits.
    output_dir : str
        Directory to save plots.
    target_col : str
        Target column.
    prefix : str
        Prefix for file names.

    Returns
    -------
    List[plt.Figure]
        List of figure objects.
    """
    os.makedirs(output_dir, exist_ok=True)

    figures = []

    # 1. Split timeline
    fig1 = plot_split_windows(
        [split.window for split in splits],
        save_path=os.path.join(output_dir, f"{prefix}split_windows.png")
    )
    figures.append(fig1)

    # 2. Panel coverage
    fig2 = plot_panel_coverage(
        panel, target_col=target_col,
        save_path=os.path.join(output_dir, f"{prefix}panel_coverage.png")
    )
    figures.append(fig2)

    logger.info(f"Created {len(figures)} visualization plots in {output_dir}")

    return figures
