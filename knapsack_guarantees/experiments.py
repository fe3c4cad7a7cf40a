"""Random-instance experiments for the knapsack algorithms.

For each generated instance every algorithm is run, its cost is compared
with the exact DP optimum, and its theoretic guarantee is validated.
Results are collected in a pandas DataFrame, one row per (instance,
algorithm), and can be summarized per algorithm or saved to CSV.

Instance patterns:
    uniform:     costs 0-99, weights 1-99, independent
    correlated:  cost = weight + 0-10, hard for ratio-based heuristics
    adversarial: one heavy valuable item plus tiny items with a slightly
                 better ratio; ratio-greedy alone fills up on the tiny ones
"""

import random
import time
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from algorithms import FPTAS, ExactDP, Greedy
from models import Instance
from problem import GuaranteeStatus


# Baseline configuration (used when a setting is not given explicitly)
BASELINE = {
    'n_items': [10, 20, 30],
    'capacity_range': (400, 700),
    'cost_range': (0, 99),
    'weight_range': (1, 99),
    'epsilons': [0.1, 0.5, 0.9],
    'repetitions': 5,
    'patterns': ['uniform'],
}

PATTERNS = ('uniform', 'correlated', 'adversarial')

OUTCOME_COLUMNS = [status.value for status in GuaranteeStatus]


def generate_instance(n_items: int, seed: int, pattern: str = 'uniform',
                      capacity_range=None, cost_range=None, weight_range=None) -> Instance:
    """Generate a random integer knapsack instance.

    Args:
        n_items: Number of items
        seed: Random seed; same seed and settings give the same instance
        pattern: One of PATTERNS
        capacity_range: (low, high) inclusive range for the capacity
        cost_range: (low, high) inclusive range for costs (uniform pattern)
        weight_range: (low, high) inclusive range for weights

    Returns:
        Instance
    """
    if pattern not in PATTERNS:
        raise ValueError(f"unknown pattern {pattern!r}, expected one of {PATTERNS}")
    if n_items < 0:
        raise ValueError(f"n_items must be non-negative, got {n_items}")

    rng = random.Random(seed)
    c_low, c_high = capacity_range or BASELINE['capacity_range']
    v_low, v_high = cost_range or BASELINE['cost_range']
    w_low, w_high = weight_range or BASELINE['weight_range']
    capacity = rng.randint(c_low, c_high)

    if pattern == 'uniform':
        pairs = [(rng.randint(v_low, v_high), rng.randint(w_low, w_high)) for _ in range(n_items)]
    elif pattern == 'correlated':
        pairs = []
        for _ in range(n_items):
            w = rng.randint(w_low, w_high)
            pairs.append((w + rng.randint(0, 10), w))
    else:
        # tiny items (ratio 2) are packed first, after which the heavy item no longer fits
        pairs = [(2, 1) for _ in range(max(0, n_items - 1))]
        if n_items > 0:
            heavy = capacity
            pairs.append((2 * heavy - 1, heavy))
    return Instance.from_pairs(pairs, capacity)


def default_algorithms(epsilons=None, reference_solver=None, include_exact: bool = False) -> List:
    """Greedy plus one FPTAS per epsilon (and optionally ExactDP)."""
    algorithms = [Greedy(reference_solver=reference_solver)]
    if include_exact:
        algorithms.append(ExactDP(reference_solver=reference_solver))
    for eps in (epsilons if epsilons is not None else BASELINE['epsilons']):
        algorithms.append(FPTAS(eps))
    return algorithms


def run_single_instance(instance: Instance, algorithms, logger=None,
                        instance_info: Optional[Dict] = None) -> List[Dict]:
    """Run and validate every algorithm on one instance.

    Returns:
        List of row dicts with keys: algorithm, cost, weight, optimal_cost,
        ratio, runtime, outcome, explanation, plus everything in instance_info
    """
    info = dict(instance_info or {})
    info.setdefault('n_items', instance.number_of_items())
    info.setdefault('capacity', instance.capacity)

    optimal_cost = instance.run(ExactDP()).cost(instance)

    rows = []
    for algorithm in algorithms:
        name = repr(algorithm)
        start_time = time.time()
        solution = instance.run(algorithm)
        runtime = time.time() - start_time

        guarantee = algorithm.validate(instance, solution)
        cost = solution.cost(instance)

        if logger:
            logger.log_algorithm_run(name, info, cost, runtime)
            logger.log_guarantee(name, guarantee, info)

        if cost is None:
            ratio = None
        elif optimal_cost == 0:
            ratio = 1.0
        else:
            ratio = cost / optimal_cost

        row = dict(info)
        row.update({
            'algorithm': name,
            'cost': cost,
            'weight': solution.weight(instance),
            'optimal_cost': optimal_cost,
            'ratio': ratio,
            'runtime': runtime,
            'outcome': guarantee.status.value,
            'explanation': guarantee.explanation,
        })
        rows.append(row)
    return rows


def run_experiment(n_items_values=None, repetitions: Optional[int] = None, epsilons=None,
                   patterns=None, seed: int = 0, reference_solver=None,
                   include_exact: bool = False, logger=None) -> pd.DataFrame:
    """Run all algorithms on a grid of random instances.

    Instances are generated with seeds seed, seed+1, ... in grid order, so
    an experiment is reproducible from its arguments.

    Returns:
        pandas DataFrame with one row per (instance, algorithm)
    """
    n_items_values = n_items_values if n_items_values is not None else BASELINE['n_items']
    repetitions = repetitions if repetitions is not None else BASELINE['repetitions']
    patterns = patterns if patterns is not None else BASELINE['patterns']
    algorithms = default_algorithms(epsilons, reference_solver, include_exact)

    if logger:
        logger.start_run({
            'n_items': list(n_items_values),
            'repetitions': repetitions,
            'patterns': list(patterns),
            'algorithms': [repr(a) for a in algorithms],
            'seed': seed,
        })

    rows = []
    instance_seed = seed
    for pattern in patterns:
        for n_items in n_items_values:
            for rep in range(repetitions):
                instance = generate_instance(n_items, instance_seed, pattern)
                info = {'pattern': pattern, 'n_items': n_items, 'repetition': rep, 'seed': instance_seed}
                rows.extend(run_single_instance(instance, algorithms, logger, info))
                instance_seed += 1

    df = pd.DataFrame(rows)
    if logger:
        logger.end_run({'rows': len(df), 'violations': int((df['outcome'] == 'inconsistent').sum()) if len(df) else 0})
    return df


def summarize_results(df: pd.DataFrame) -> pd.DataFrame:
    """Aggregate experiment rows per algorithm.

    Returns:
        DataFrame indexed by algorithm with columns runs, mean_ratio,
        min_ratio, mean_runtime, consistent, inconsistent, failed
    """
    summary = df.groupby('algorithm').agg(
        runs=('outcome', 'size'),
        mean_ratio=('ratio', 'mean'),
        min_ratio=('ratio', 'min'),
        mean_runtime=('runtime', 'mean'),
    )
    outcomes = pd.crosstab(df['algorithm'], df['outcome']).reindex(columns=OUTCOME_COLUMNS, fill_value=0)
    return summary.join(outcomes)


def save_results(df: pd.DataFrame, path) -> Path:
    """Write experiment rows to CSV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path
