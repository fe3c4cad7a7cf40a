"""Tests for the 0/1 knapsack dynamic program."""

import itertools
import random

import pytest

from knapsack_dp import build_table, knapsack_01


def brute_force(values, weights, capacity):
    best = 0
    for bits in itertools.product((0, 1), repeat=len(values)):
        if sum(w * b for w, b in zip(weights, bits)) <= capacity:
            best = max(best, sum(v * b for v, b in zip(values, bits)))
    return best


def test_classic_instance():
    result = knapsack_01([60, 100, 120], [10, 20, 30], 50)
    assert result['max_value'] == 220
    assert result['packed'] == [1, 2]


def test_more_items():
    values = [10, 40, 30, 50]
    weights = [5, 4, 6, 3]
    result = knapsack_01(values, weights, 10)
    assert result['max_value'] == 90
    assert result['packed'] == [1, 3]
    assert sum(weights[i] for i in result['packed']) <= 10


def test_table_recurrence():
    table = build_table([1, 2, 2], [2, 3, 1], 5)
    assert table[0] == [0] * 6
    assert table[1] == [0, 0, 1, 1, 1, 1]
    assert table[2] == [0, 0, 1, 2, 2, 3]
    assert table[3] == [0, 2, 2, 3, 4, 4]


def test_edge_cases():
    assert knapsack_01([], [], 10) == {'max_value': 0, 'packed': []}
    assert knapsack_01([5, 6], [3, 4], 0) == {'max_value': 0, 'packed': []}
    assert knapsack_01([100, 200], [10, 20], 5)['packed'] == []
    assert knapsack_01([1, 2, 3], [1, 2, 3], 100)['packed'] == [0, 1, 2]


def test_float_values():
    result = knapsack_01([1.5, 2.25, 0.5], [1, 2, 1], 3)
    assert result['max_value'] == 3.75
    assert result['packed'] == [0, 1]


def test_rejects_non_integral_input():
    with pytest.raises(ValueError):
        knapsack_01([1], [1], 5.0)
    with pytest.raises(ValueError):
        knapsack_01([1], [1.5], 5)
    with pytest.raises(ValueError):
        knapsack_01([1], [0], 5)
    with pytest.raises(ValueError):
        knapsack_01([1], [1], -1)
    with pytest.raises(ValueError):
        knapsack_01([1, 2], [1], 5)


def test_random_against_brute_force():
    rng = random.Random(7)
    for _ in range(50):
        n = rng.randint(0, 10)
        values = [rng.randint(0, 30) for _ in range(n)]
        weights = [rng.randint(1, 15) for _ in range(n)]
        capacity = rng.randint(0, 40)
        result = knapsack_01(values, weights, capacity)

        assert result['max_value'] == brute_force(values, weights, capacity)
        assert result['packed'] == sorted(set(result['packed']))
        assert sum(weights[i] for i in result['packed']) <= capacity
        assert sum(values[i] for i in result['packed']) == result['max_value']
