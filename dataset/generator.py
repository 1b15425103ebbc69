"""
generator.py — Dataset Generator & Validator
=============================================
Produces the input sequence every visualization starts from.

Responsibilities:
  1. Random generation          (size independent draws in [low, high])
  2. Import from text           ("5, 3, 8" → [5, 3, 8])
  3. Size-bound validation      (slider values and imported lengths)

Design decisions:
  - Every failure is a ValidationError that names what was wrong
    (the bad token, or the violated bound).  Nothing here touches a
    running Stepper — callers validate first, then swap datasets.
  - `seed` is accepted so tests and shared links can reproduce a dataset.
"""

import random
import re
from dataclasses import dataclass
from typing import List, Optional

from errors import ValidationError


_INT_LITERAL = re.compile(r"^[+-]?\d+$")


# ---------------------------------------------------------------------------
# Size bounds — one per visualization family
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SizeBounds:
    minimum: int
    maximum: int
    label:   str = "dataset"

    def contains(self, size: int) -> bool:
        return self.minimum <= size <= self.maximum


SORT_BOUNDS      = SizeBounds(2, 20, "sort")
STRUCTURE_BOUNDS = SizeBounds(1, 15, "structure")
SEARCH_BOUNDS    = SizeBounds(1, 50, "search")


# ---------------------------------------------------------------------------
# Random generation
# ---------------------------------------------------------------------------
def generate(
    size: int,
    low: int = 1,
    high: int = 100,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Return `size` independently drawn integers in [low, high] (inclusive).

    No ordering guarantee; duplicates are allowed.
    """
    if size < 1:
        raise ValidationError(f"Size must be positive, got {size}")
    if low > high:
        raise ValidationError(f"Empty value range [{low}, {high}]")

    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def validate_size(size: int, bounds: SizeBounds = SORT_BOUNDS) -> int:
    """Slider value as an int inside `bounds`; numeric strings from form fields are accepted."""
    try:
        size = int(size)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid size: '{size}'", token=str(size))
    if not bounds.contains(size):
        raise ValidationError(
            f"{bounds.label.capitalize()} size must be between "
            f"{bounds.minimum} and {bounds.maximum}, got {size}"
        )
    return size


def parse_dataset(text: str, bounds: SizeBounds = SORT_BOUNDS) -> List[int]:
    """
    Parse a comma-separated integer list, e.g. "38, 27, 43, 3".

    Raises:
        ValidationError – on the first token that is not an integer literal
                          (the token is attached), or when the number of
                          values falls outside `bounds`.
    """
    if text is None or not text.strip():
        raise ValidationError("Please enter comma-separated values")

    values: List[int] = []
    for raw in text.split(","):
        token = raw.strip()
        if not _INT_LITERAL.match(token):
            raise ValidationError(f"Invalid number: '{token}'", token=token)
        values.append(int(token))

    if not bounds.contains(len(values)):
        raise ValidationError(
            f"{bounds.label.capitalize()} size must be between "
            f"{bounds.minimum} and {bounds.maximum}, got {len(values)} values"
        )
    return values


def parse_target(text, what: str = "search value") -> int:
    """Search target (or operation operand) from a form field; ints pass straight through."""
    if isinstance(text, bool):
        raise ValidationError(f"Invalid {what}: '{text}'", token=str(text))
    if isinstance(text, int):
        return text
    token = str(text if text is not None else "").strip()
    if not _INT_LITERAL.match(token):
        raise ValidationError(f"Invalid {what}: '{token}'", token=token)
    return int(token)
