"""Knapsack algorithms and their theoretical guarantees.

- Greedy: ratio-ordered packing, 1/2-approximation
- ExactDP: pseudo-polynomial dynamic program, optimal
- FPTAS: cost scaling + ExactDP, (1 - eps)-approximation

Each algorithm validates its own output against an independent optimum:
Greedy and ExactDP against the integer-program reduction solved by an
external solver (Gurobi by default), FPTAS against ExactDP.
"""

import math

from knapsack_dp import knapsack_01
from models import Instance, Item, Solution, Solved
from primitives import require_numeric, to_float
from problem import Algorithm, TheoreticValidation
from solvers import GurobiSolver
from validation import check_ratio


class Greedy(Algorithm, TheoreticValidation):
    """Greedy by cost/weight ratio with single-item fallback.

    Items that cannot fit even alone are dropped first. The rest are
    packed by descending ratio (ties: lower index first) until the first
    item that would overflow. The result is whichever is more valuable:
    that packing or the single most valuable item. Keeping the better of
    the two is what gives the 1/2 bound.

    Args:
        reference_solver: Integer-program solver used by validate();
            defaults to GurobiSolver()
    """
    bound = 0.5

    def __init__(self, reference_solver=None):
        self.reference_solver = reference_solver

    def run(self, instance: Instance) -> Solution:
        items = instance.items
        capacity = instance.capacity
        candidates = [i for i, it in enumerate(items) if it.weight <= capacity]

        # sorted() is stable, so equal ratios stay in index order
        order = sorted(candidates, key=lambda i: items[i].ratio, reverse=True)

        packed = []
        weight = 0
        for i in order:
            if weight + items[i].weight > capacity:
                break
            weight += items[i].weight
            packed.append(i)
        greedy = Solved(tuple(packed))

        if candidates:
            best = max(candidates, key=lambda i: items[i].cost)
            if items[best].cost > greedy.cost(instance):
                return Solved((best,))
        return greedy

    def validate(self, instance: Instance, solution: Solution):
        solver = self.reference_solver or GurobiSolver()
        optimal = instance.solve_by_reduction(solver)
        return check_ratio("Greedy algorithm", instance, solution, optimal, self.bound)

    def __repr__(self):
        return "Greedy()"


class ExactDP(Algorithm, TheoreticValidation):
    """Exact dynamic program (see knapsack_dp.knapsack_01).

    Requires integer weights and capacity; anything else is rejected
    with ValueError.

    Args:
        reference_solver: Integer-program solver used by validate();
            defaults to GurobiSolver()
    """
    bound = 1.0

    def __init__(self, reference_solver=None):
        self.reference_solver = reference_solver

    def run(self, instance: Instance) -> Solution:
        result = knapsack_01(instance.costs, instance.weights, instance.capacity)
        return Solved(tuple(result['packed']))

    def validate(self, instance: Instance, solution: Solution):
        solver = self.reference_solver or GurobiSolver()
        optimal = instance.solve_by_reduction(solver)
        return check_ratio("Exact DP", instance, solution, optimal, self.bound)

    def __repr__(self):
        return "ExactDP()"


class FPTAS(Algorithm, TheoreticValidation):
    """Fully polynomial-time approximation scheme.

    Costs are scaled down to floor(cost / k) with k = eps * C_max / n,
    the scaled instance is solved exactly, and its packing is returned.
    Achieved cost >= (1 - eps) * optimal cost.

    C_max is taken over the items that fit alone; items heavier than the
    capacity get scaled cost 0. When no item fits or every fitting cost
    is zero, k would be 0; the unscaled instance is then solved by
    ExactDP directly.

    Args:
        epsilon: Accuracy parameter, 0 < epsilon < 1
    """

    def __init__(self, epsilon):
        require_numeric(epsilon, "epsilon")
        if not 0 < epsilon < 1:
            raise ValueError(f"epsilon must be in (0, 1), got {epsilon}")
        self.epsilon = epsilon

    @property
    def bound(self) -> float:
        return 1.0 - self.epsilon

    def scaling_factor(self, instance: Instance) -> float:
        """k = eps * C_max / n, or 0.0 for the degenerate cases."""
        n = instance.number_of_items()
        c_max = max((it.cost for it in instance.items if it.weight <= instance.capacity), default=0)
        if n == 0 or c_max == 0:
            return 0.0
        return self.epsilon * to_float(c_max) / n

    def scale(self, instance: Instance) -> Instance:
        """Instance with costs floor(cost / k); weights and capacity unchanged.

        Items that cannot fit alone are given cost 0.
        """
        k = self.scaling_factor(instance)
        if k == 0.0:
            return instance
        capacity = instance.capacity
        return Instance(
            [Item(cost=math.floor(to_float(it.cost) / k) if it.weight <= capacity else 0, weight=it.weight)
             for it in instance.items],
            capacity,
        )

    def run(self, instance: Instance) -> Solution:
        # same packed indices; cost is recomputed against the unscaled instance
        return self.scale(instance).run(ExactDP())

    def validate(self, instance: Instance, solution: Solution):
        optimal = instance.run(ExactDP())
        return check_ratio(f"FPTAS (eps = {self.epsilon})", instance, solution, optimal, self.bound)

    def __repr__(self):
        return f"FPTAS(epsilon={self.epsilon})"
