"""Pure analysis package for the measure map.

This package validates and prepares the joined dataset and evaluates the
document's runtime filters in memory. It must not import Django.
"""

from .dataset import load_dataset, prepare_dataset, read_dataset, summarize_dataset

__all__ = ["load_dataset", "prepare_dataset", "read_dataset", "summarize_dataset"]
