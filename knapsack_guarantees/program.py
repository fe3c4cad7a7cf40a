"""Solver-neutral integer linear program and its solution variants.

A MathProgram only describes the model; building it for a concrete
backend is the job of the solver adapter (see solvers.py).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from problem import OptProblem


MAXIMIZE = "maximize"
MINIMIZE = "minimize"


@dataclass(frozen=True)
class Variable:
    """A decision variable. Only binary variables are needed for 0/1 knapsack."""
    name: str
    lower: float = 0.0
    upper: float = 1.0
    vtype: str = "binary"


@dataclass(frozen=True)
class LinearConstraint:
    """sum(coefficients[name] * var[name]) <= rhs"""
    name: str
    coefficients: Dict[str, float]
    rhs: float


@dataclass
class MathProgram(OptProblem):
    """Integer linear program: variables, linear objective, <= constraints.

    Attributes:
        name: Model name passed on to the backend
        sense: MAXIMIZE or MINIMIZE
        variables: Decision variables in creation order
        objective: Objective coefficient per variable name
        constraints: Linear <= constraints
    """
    name: str
    sense: str = MAXIMIZE
    variables: List[Variable] = field(default_factory=list)
    objective: Dict[str, float] = field(default_factory=dict)
    constraints: List[LinearConstraint] = field(default_factory=list)

    def __post_init__(self):
        if self.sense not in (MAXIMIZE, MINIMIZE):
            raise ValueError(f"sense must be '{MAXIMIZE}' or '{MINIMIZE}', got {self.sense!r}")

    def add_variable(self, name: str, objective_coefficient: float = 0.0) -> Variable:
        if any(v.name == name for v in self.variables):
            raise ValueError(f"duplicate variable name: {name}")
        var = Variable(name=name)
        self.variables.append(var)
        self.objective[name] = objective_coefficient
        return var

    def add_constraint(self, name: str, coefficients: Dict[str, float], rhs: float) -> LinearConstraint:
        unknown = set(coefficients) - {v.name for v in self.variables}
        if unknown:
            raise ValueError(f"constraint {name} uses unknown variables: {sorted(unknown)}")
        constraint = LinearConstraint(name=name, coefficients=dict(coefficients), rhs=rhs)
        self.constraints.append(constraint)
        return constraint

    def number_of_variables(self) -> int:
        return len(self.variables)

    def number_of_constraints(self) -> int:
        return len(self.constraints)

    def evaluate(self, values: Dict[str, float]) -> float:
        """Objective value of an assignment."""
        return sum(coef * values.get(name, 0.0) for name, coef in self.objective.items())

    def __repr__(self):
        return (f"MathProgram(name={self.name!r}, sense={self.sense}, "
                f"vars={self.number_of_variables()}, constraints={self.number_of_constraints()})")


class SolutionType(Enum):
    OPTIMAL = "optimal"
    SUBOPTIMAL = "suboptimal"


class ProgramSolution:
    """Result of handing a MathProgram to an external solver."""

    def is_solved(self) -> bool:
        return False

    def cost(self, program: MathProgram) -> Optional[float]:
        return None


@dataclass(frozen=True)
class ProgramSolved(ProgramSolution):
    """Solver returned an assignment.

    Attributes:
        values: Value per variable name
        kind: OPTIMAL, or SUBOPTIMAL when the solver stopped early with an incumbent
        objective: Objective value reported by the solver, if any
    """
    values: Dict[str, float]
    kind: SolutionType = SolutionType.OPTIMAL
    objective: Optional[float] = None

    def is_solved(self) -> bool:
        return True

    def cost(self, program: MathProgram) -> Optional[float]:
        if self.objective is not None:
            return self.objective
        return program.evaluate(self.values)


@dataclass(frozen=True)
class ProgramInfeasible(ProgramSolution):
    pass


@dataclass(frozen=True)
class ProgramUnbounded(ProgramSolution):
    pass


@dataclass(frozen=True)
class ProgramFailed(ProgramSolution):
    message: str
