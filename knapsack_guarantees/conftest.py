"""Shared pytest fixtures: in-test MathProgram solvers.

These let the reduction and validation logic be checked without an
external solver; tests marked `gurobi` run against the real backend.
"""
import itertools
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from knapsack_dp import knapsack_01
from problem import Algorithm
from program import ProgramSolved, SolutionType
import solvers


class BruteForceProgramSolver(Algorithm):
    """Enumerates every 0/1 assignment. Only for a handful of variables."""

    def run(self, instance):
        names = [v.name for v in instance.variables]
        best_values, best_obj = None, None
        for bits in itertools.product((0.0, 1.0), repeat=len(names)):
            values = dict(zip(names, bits))
            feasible = all(
                sum(coef * values[n] for n, coef in con.coefficients.items()) <= con.rhs
                for con in instance.constraints
            )
            if not feasible:
                continue
            obj = instance.evaluate(values)
            if best_obj is None or obj > best_obj:
                best_values, best_obj = values, obj
        return ProgramSolved(values=best_values, kind=SolutionType.OPTIMAL, objective=best_obj)


class KnapsackProgramDPSolver(Algorithm):
    """Solves single-constraint knapsack programs with integer data by DP."""

    def run(self, instance):
        names = [v.name for v in instance.variables]
        (con,) = instance.constraints
        weights = [int(con.coefficients[n]) for n in names]
        values = [instance.objective[n] for n in names]
        result = knapsack_01(values, weights, int(con.rhs))
        chosen = set(result['packed'])
        assignment = {n: (1.0 if i in chosen else 0.0) for i, n in enumerate(names)}
        return ProgramSolved(values=assignment, kind=SolutionType.OPTIMAL, objective=float(result['max_value']))


class StaticProgramSolver(Algorithm):
    """Always returns the same ProgramSolution."""

    def __init__(self, solution):
        self.solution = solution
        self.calls = 0

    def run(self, instance):
        self.calls += 1
        return self.solution


def pytest_collection_modifyitems(config, items):
    if solvers.gp is not None:
        return
    skip = pytest.mark.skip(reason="gurobipy is not installed")
    for item in items:
        if "gurobi" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def brute_force_solver():
    return BruteForceProgramSolver()


@pytest.fixture
def dp_program_solver():
    return KnapsackProgramDPSolver()


@pytest.fixture
def static_solver():
    return StaticProgramSolver
