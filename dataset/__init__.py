"""
dataset/
--------
Input layer.  Public API:

    from dataset import generate, parse_dataset, validate_size
    from dataset import SizeBounds, SORT_BOUNDS, STRUCTURE_BOUNDS, SEARCH_BOUNDS
"""

from dataset.generator import (
    SizeBounds,
    SORT_BOUNDS,
    STRUCTURE_BOUNDS,
    SEARCH_BOUNDS,
    generate,
    parse_dataset,
    parse_target,
    validate_size,
)

__all__ = [
    "SizeBounds",
    "SORT_BOUNDS",   "STRUCTURE_BOUNDS",   "SEARCH_BOUNDS",
    "generate",
    "parse_dataset",
    "parse_target",
    "validate_size",
]
