"""
knapsack.py — Fractional Knapsack (greedy)
===========================================
Sort the items by value/weight ratio and pack them best-first, taking
a fraction of the first item that no longer fits whole.

Snapshot layout: the fraction taken of each item (input order), from
0.0 to 1.0.  `totals` carries the packed value and the room left.
"""

from dataclasses import dataclass
from typing import List, Tuple

from algorithms.base import Advance, StepProducer
from algorithms.step import Cursor, StepKind
from errors import ValidationError
from graph import Item


@dataclass(frozen=True)
class KnapsackCursor(Cursor):
    """
    Attributes:
        items     : Items in input order.
        capacity  : Knapsack capacity.
        order     : Item positions sorted by ratio, best first.
        position  : Next entry of `order`.
        remaining : Capacity left.
        value     : Value packed so far.
        phase     : sort | consider | decide.
    """

    items:     Tuple[Item, ...] = ()
    capacity:  float            = 0
    order:     Tuple[int, ...]  = ()
    position:  int              = 0
    remaining: float            = 0
    value:     float            = 0
    phase:     str              = "sort"


class FractionalKnapsack(StepProducer):
    cursor_type = KnapsackCursor
    COMPLETES_ON_FULL_MARKS = False

    PSEUDOCODE: List[str] = [
        "sort items by value / weight, best first",                 # 0
        "for item in items:",                                       # 1
        "    if item.weight ≤ room: take all of it",                # 2
        "    elif room > 0: take room / item.weight of it",         # 3
        "    else: skip it",                                        # 4
        "return total value",                                       # 5
    ]
    COMPLETE_LINE = 5

    def initial_cursor(self, sequence=(), target=None, items: Tuple[Item, ...] = (), capacity: float = 0) -> KnapsackCursor:
        if not items:
            raise ValidationError("Add at least one item")
        if capacity <= 0:
            raise ValidationError("Capacity must be positive", token=str(capacity))
        items = tuple(items)
        # stable on ties, so equal ratios keep input order
        order = tuple(sorted(range(len(items)), key=lambda k: -items[k].ratio))
        return KnapsackCursor(
            sequence=(0.0,) * len(items), items=items, capacity=capacity,
            order=order, remaining=capacity,
        )

    def _totals(self, value: float, remaining: float, capacity: float) -> dict:
        return {"value": round(value, 2), "remaining": round(remaining, 2), "capacity": capacity}

    def advance(self, c: KnapsackCursor) -> Advance:
        totals = self._totals(c.value, c.remaining, c.capacity)

        if c.phase == "sort":
            ranking = ", ".join(f"{c.items[k].label} ({c.items[k].ratio:.2f})" for k in c.order)
            return self._emit(
                c, StepKind.SET_POINTER, line=0, totals=totals,
                explanation=f"Sort items by value-to-weight ratio, best first: {ranking}.",
                phase="consider",
            )

        if c.position >= len(c.order):
            return self._finish(
                c, StepKind.COMPLETE, line=5, totals=totals,
                explanation=f"Fractional Knapsack solution complete. Total value: {c.value:.2f}",
            )

        k = c.order[c.position]
        item = c.items[k]
        pointers = {"item": k}

        if c.phase == "consider":
            return self._emit(
                c, StepKind.SELECT, (k,), line=1, pointers=pointers, totals=totals,
                explanation=f"Considering item {item.label} with value {item.value} and weight {item.weight} "
                            f"(ratio {item.ratio:.2f}).",
                phase="decide",
            )

        fractions = list(c.sequence)
        if c.remaining >= item.weight:
            fractions[k] = 1.0
            remaining, value = c.remaining - item.weight, c.value + item.value
            return self._emit(
                c, StepKind.TAKE, (k,), sequence=fractions, marks=(k,), line=2, pointers=pointers,
                totals=self._totals(value, remaining, c.capacity),
                explanation=f"Added entire item {item.label}. Remaining capacity: {remaining}",
                phase="consider", position=c.position + 1, remaining=remaining, value=value,
            )
        if c.remaining > 0:
            fraction = c.remaining / item.weight
            fractions[k] = fraction
            value = c.value + item.value * fraction
            return self._emit(
                c, StepKind.TAKE, (k,), sequence=fractions, marks=(k,), line=3, pointers=pointers,
                totals=self._totals(value, 0, c.capacity),
                explanation=f"Added {fraction * 100:.2f}% of item {item.label}. Remaining capacity: 0",
                phase="consider", position=c.position + 1, remaining=0, value=value,
            )
        return self._emit(
            c, StepKind.SKIP, (k,), line=4, pointers=pointers, totals=totals,
            explanation=f"Skipped item {item.label}: the knapsack is full.",
            phase="consider", position=c.position + 1,
        )

