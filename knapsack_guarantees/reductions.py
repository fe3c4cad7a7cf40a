"""Reduction of a knapsack Instance to an integer linear program.

The forward and backward maps are kept together here:
- knapsack_to_program: item i -> binary variable x_i,
  maximize sum(cost_i * x_i) s.t. sum(weight_i * x_i) <= capacity
- program_solution_to_knapsack: x_i == 1 -> item i packed
"""

from models import Failed, Infeasible, Instance, Solution, Solved
from primitives import to_float
from problem import ReductionError
from program import (
    MAXIMIZE,
    MathProgram,
    ProgramFailed,
    ProgramInfeasible,
    ProgramSolution,
    ProgramSolved,
    ProgramUnbounded,
)


CAPACITY_CONSTRAINT = "capacity"


def variable_name(index: int) -> str:
    """Name of the decision variable for item `index`."""
    return f"x_{index}"


def knapsack_to_program(instance: Instance) -> MathProgram:
    """Build the 0/1 integer program equivalent to `instance`."""
    program = MathProgram(name="knapsack", sense=MAXIMIZE)
    for i, it in enumerate(instance.items):
        program.add_variable(variable_name(i), objective_coefficient=to_float(it.cost))
    program.add_constraint(
        CAPACITY_CONSTRAINT,
        {variable_name(i): to_float(it.weight) for i, it in enumerate(instance.items)},
        to_float(instance.capacity),
    )
    return program


def program_solution_to_knapsack(instance: Instance, solution: ProgramSolution) -> Solution:
    """Map a solver outcome for knapsack_to_program(instance) back to a Solution.

    Raises:
        ReductionError: If the program is reported unbounded, or a solved
            program lacks the variable of some item. Neither can happen for
            a correctly built reduction.
    """
    if isinstance(solution, ProgramFailed):
        return Failed(solution.message)
    if isinstance(solution, ProgramInfeasible):
        return Infeasible()
    if isinstance(solution, ProgramUnbounded):
        raise ReductionError("Integer program unbounded for a knapsack instance. This should not happen!")
    if not isinstance(solution, ProgramSolved):
        raise ReductionError(f"Unknown program solution type: {type(solution).__name__}")

    packed = []
    for i in range(instance.number_of_items()):
        name = variable_name(i)
        if name not in solution.values:
            raise ReductionError(f"Solved program has no value for variable {name}")
        # binaries come back as floats like 0.9999999
        if round(solution.values[name]) == 1:
            packed.append(i)
    return Solved(tuple(packed))
