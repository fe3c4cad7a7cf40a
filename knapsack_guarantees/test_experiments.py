"""Tests for the experiment runner, the summaries and the experiment logger."""

import json
import os
import tempfile

import pandas as pd
import pytest

from algorithms import FPTAS, Greedy
from experiments import (
    OUTCOME_COLUMNS,
    default_algorithms,
    generate_instance,
    run_experiment,
    run_single_instance,
    save_results,
    summarize_results,
)
from logger import create_logger
from models import Instance, Solved


def test_generate_instance_is_reproducible():
    a = generate_instance(20, seed=5)
    b = generate_instance(20, seed=5)
    assert a == b
    assert a.number_of_items() == 20
    assert 400 <= a.capacity <= 700
    assert all(0 <= c <= 99 for c in a.costs)
    assert all(1 <= w <= 99 for w in a.weights)
    assert generate_instance(20, seed=6) != a


def test_generate_instance_patterns():
    correlated = generate_instance(15, seed=1, pattern='correlated')
    assert all(w <= c <= w + 10 for c, w in zip(correlated.costs, correlated.weights))

    adversarial = generate_instance(10, seed=1, pattern='adversarial')
    heavy = adversarial.items[-1]
    assert heavy.weight == adversarial.capacity
    # ratio-greedy alone would keep the nine tiny items
    assert adversarial.run(Greedy()) == Solved((9,))

    with pytest.raises(ValueError):
        generate_instance(5, seed=1, pattern='nope')
    assert generate_instance(0, seed=1).number_of_items() == 0


def test_run_single_instance_rows(dp_program_solver):
    instance = Instance.from_pairs([(1, 2), (2, 3), (2, 1)], 5)
    algorithms = [Greedy(reference_solver=dp_program_solver), FPTAS(0.5)]
    rows = run_single_instance(instance, algorithms, instance_info={'seed': 0})
    assert [r['algorithm'] for r in rows] == ["Greedy()", "FPTAS(epsilon=0.5)"]
    for row in rows:
        assert row['cost'] == 4
        assert row['optimal_cost'] == 4
        assert row['ratio'] == 1.0
        assert row['outcome'] == 'consistent'
        assert row['n_items'] == 3
        assert row['seed'] == 0


def test_run_experiment_and_summary(dp_program_solver):
    df = run_experiment(n_items_values=[5, 12], repetitions=2, epsilons=[0.25, 0.75],
                        patterns=['uniform', 'adversarial'], seed=10,
                        reference_solver=dp_program_solver, include_exact=True)
    assert isinstance(df, pd.DataFrame)
    # 2 patterns x 2 sizes x 2 repetitions x 4 algorithms
    assert len(df) == 32
    assert set(df['outcome']) == {'consistent'}
    assert (df['ratio'] <= 1.0).all()

    summary = summarize_results(df)
    assert set(summary.index) == {"Greedy()", "ExactDP()", "FPTAS(epsilon=0.25)", "FPTAS(epsilon=0.75)"}
    assert list(summary.columns[-3:]) == OUTCOME_COLUMNS
    assert (summary['runs'] == 8).all()
    assert (summary['inconsistent'] == 0).all()
    assert summary.loc["ExactDP()", 'min_ratio'] == 1.0
    assert summary.loc["Greedy()", 'min_ratio'] >= 0.5


def test_save_results_and_logger(dp_program_solver):
    with tempfile.TemporaryDirectory() as tmp:
        logger = create_logger(instance_name="unit", log_dir=os.path.join(tmp, "logs"), console=False)
        df = run_experiment(n_items_values=[6], repetitions=2, epsilons=[0.5], seed=3,
                            reference_solver=dp_program_solver, logger=logger)
        logger.close()

        path = save_results(df, os.path.join(tmp, "out", "results.csv"))
        assert path.exists()
        assert len(pd.read_csv(path)) == len(df)

        with open(logger.metrics_file) as f:
            metrics = json.load(f)
        assert metrics['runs_executed'] == len(df)
        assert metrics['outcomes']["Greedy()"] == {'consistent': 2}
        assert metrics['violations'] == []
        assert metrics['total_runtime'] is not None


def test_default_algorithms():
    algorithms = default_algorithms(epsilons=[0.1])
    assert [repr(a) for a in algorithms] == ["Greedy()", "FPTAS(epsilon=0.1)"]
    assert len(default_algorithms(include_exact=True)) == 5
