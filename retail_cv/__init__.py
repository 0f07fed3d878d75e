"""
Retail Panel Cross-Validation Package

Prepares a sparse store x brand x week sales panel for forecasting
experiments: completes the panel against the full key space and cuts it
into rolling train/test splits separated by an embargo gap.

Modules:
- data: Loading, panel completion, split generation and persistence
- evaluation: Per-split summary tables
- visualization: Plotting utilities
"""

__version__ = "0.1.0"

from . import data
from . import evaluation
from . import visualization
