"""Data structures for the 0/1 knapsack problem.

This module contains the core data classes used throughout the solvers:
- Item: An object with a cost (profit) and a weight
- Instance: Ordered items plus a knapsack capacity
- Solution: Solved (packed item indices), Infeasible or Failed
"""

import operator
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from primitives import require_numeric, to_float
from problem import OptProblem, Reduction


@dataclass(frozen=True)
class Item:
    """An item that can be packed at most once.

    Attributes:
        cost: Value gained by packing the item (>= 0)
        weight: Capacity the item uses up (> 0)
    """
    cost: float
    weight: float

    def __post_init__(self):
        require_numeric(self.cost, "cost")
        require_numeric(self.weight, "weight")
        if self.weight <= 0:
            raise ValueError(f"weight must be positive, got {self.weight}")
        if self.cost < 0:
            raise ValueError(f"cost must be non-negative, got {self.cost}")

    @property
    def ratio(self) -> float:
        """Cost per unit of weight."""
        return to_float(self.cost) / to_float(self.weight)


class Solution:
    """Outcome of one algorithm call on an Instance."""

    def is_solved(self) -> bool:
        return False

    def as_packed(self) -> Optional[Tuple[int, ...]]:
        """Packed indices, or None if the solution is not Solved."""
        return None

    def cost(self, instance: "Instance"):
        """Total cost of the packed items; None unless Solved."""
        return None

    def weight(self, instance: "Instance"):
        return None


@dataclass(frozen=True)
class Solved(Solution):
    """A packing. Indices are stored ascending, without duplicates.

    Indices must be integers; floats raise TypeError.
    """
    packed: Tuple[int, ...] = ()

    def __post_init__(self):
        packed = tuple(operator.index(i) for i in self.packed)
        if len(set(packed)) != len(packed):
            raise ValueError(f"packed indices contain duplicates: {packed}")
        if any(i < 0 for i in packed):
            raise ValueError(f"packed indices must be non-negative: {packed}")
        object.__setattr__(self, "packed", tuple(sorted(packed)))

    def is_solved(self) -> bool:
        return True

    def as_packed(self) -> Tuple[int, ...]:
        return self.packed

    def cost(self, instance: "Instance"):
        return sum((instance.items[i].cost for i in self.packed), 0)

    def weight(self, instance: "Instance"):
        return sum((instance.items[i].weight for i in self.packed), 0)


@dataclass(frozen=True)
class Infeasible(Solution):
    pass


@dataclass(frozen=True)
class Failed(Solution):
    reason: str


class Instance(OptProblem, Reduction):
    """A 0/1 knapsack instance, immutable after construction.

    The position of an item in `items` is its permanent identity; every
    Solution refers to items by that index.

    Attributes:
        items: Tuple of Item objects
        capacity: Maximum total weight (>= 0)
    """

    def __init__(self, items: Iterable[Item], capacity):
        items = tuple(items)
        for it in items:
            if not isinstance(it, Item):
                raise TypeError(f"expected Item, got {type(it).__name__}")
        require_numeric(capacity, "capacity")
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        self._items = items
        self._capacity = capacity

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence], capacity) -> "Instance":
        """Build an instance from raw (cost, weight) pairs."""
        return cls([Item(cost=c, weight=w) for c, w in pairs], capacity)

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._items

    @property
    def capacity(self):
        return self._capacity

    @property
    def costs(self):
        return [it.cost for it in self._items]

    @property
    def weights(self):
        return [it.weight for it in self._items]

    def number_of_items(self) -> int:
        return len(self._items)

    def __len__(self):
        return len(self._items)

    def is_feasible(self, solution: Solution) -> bool:
        """True if `solution` is Solved, in range and within capacity."""
        if not solution.is_solved():
            return False
        n = len(self._items)
        if any(i >= n for i in solution.packed):
            return False
        return solution.weight(self) <= self._capacity

    # ---- Reduction to an integer linear program (see reductions.py) ----
    def reduce_instance(self):
        from reductions import knapsack_to_program
        return knapsack_to_program(self)

    def reduce_solution(self, solution):
        from reductions import program_solution_to_knapsack
        return program_solution_to_knapsack(self, solution)

    def __eq__(self, other):
        if not isinstance(other, Instance):
            return NotImplemented
        return self._items == other._items and self._capacity == other._capacity

    def __hash__(self):
        return hash((self._items, self._capacity))

    def __repr__(self):
        return f"Instance(n_items={len(self._items)}, capacity={self._capacity})"
