"""Dynamic programming solution for the 0/1 Knapsack Problem.

Pseudo-polynomial: O(n * W) time and space, where W is the capacity.
Weights and capacity must be non-negative integers; values (costs) may
be any real numbers.
"""
import logging

from primitives import require_integral


logger = logging.getLogger(__name__)


def build_table(values, weights, capacity):
    """Fill the DP table.

    table[i][j] = max value using items 0..i-1 with total weight <= j

    Args:
        values: List of item values (costs)
        weights: List of positive integer weights
        capacity: Non-negative integer capacity

    Returns:
        list of n+1 rows, each of length capacity+1
    """
    n = len(values)
    table = [[0] * (capacity + 1) for _ in range(n + 1)]

    for i in range(n):
        wi = weights[i]
        row, nxt = table[i], table[i + 1]
        for j in range(capacity + 1):
            if wi > j:
                nxt[j] = row[j]
            else:
                # either skip item i, or take it and give up wi units of capacity
                nxt[j] = max(row[j], row[j - wi] + values[i])
    return table


def knapsack_01(values, weights, capacity):
    """Solve 0/1 knapsack problem using dynamic programming.

    Each item can be selected at most once. Maximizes total value
    subject to weight constraint.

    Args:
        values: List of item values (profit/utility)
        weights: List of item weights, positive integers
        capacity: Maximum weight capacity, non-negative integer

    Returns:
        dict with:
            - max_value: Maximum achievable value
            - packed: Ascending list of selected item indices

    Raises:
        ValueError: If capacity or a weight is not an integer, capacity is
            negative, a weight is not positive, or lengths differ
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have matching lengths")
    capacity = require_integral(capacity, "capacity")
    if capacity < 0:
        raise ValueError(f"capacity must be non-negative, got {capacity}")
    weights = [require_integral(w, f"weight[{i}]") for i, w in enumerate(weights)]
    if any(w <= 0 for w in weights):
        raise ValueError("weights must be positive")

    n = len(values)
    logger.debug(f"DP table: {n + 1} x {capacity + 1}")
    table = build_table(values, weights, capacity)

    # Backtrack: item i was taken iff it changed the optimum at the remaining capacity
    packed = []
    w = capacity
    for i in range(n - 1, -1, -1):
        if table[i + 1][w] != table[i][w]:
            packed.append(i)
            w -= weights[i]
    packed.reverse()

    return {
        'max_value': table[n][capacity],
        'packed': packed,
    }
