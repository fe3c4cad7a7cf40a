"""Gurobi backend for MathProgram instances.

GurobiSolver is the external integer-program solver used as the exact
oracle of the theoretic validation. It builds a gurobipy model from a
MathProgram, optimizes it and translates the Gurobi status into a
ProgramSolution:
- OPTIMAL -> ProgramSolved(kind=OPTIMAL)
- SUBOPTIMAL, or a limit hit with an incumbent -> ProgramSolved(kind=SUBOPTIMAL)
- INFEASIBLE -> ProgramInfeasible, UNBOUNDED -> ProgramUnbounded
- anything else, or a GurobiError -> ProgramFailed(message)
"""
import logging

try:
    import gurobipy as gp
    from gurobipy import GRB
except ImportError:
    gp = None
    GRB = None

from problem import Algorithm
from program import (
    MAXIMIZE,
    MathProgram,
    ProgramFailed,
    ProgramInfeasible,
    ProgramSolution,
    ProgramSolved,
    ProgramUnbounded,
    SolutionType,
)


logger = logging.getLogger(__name__)


class GurobiSolver(Algorithm):
    """Solve a MathProgram with Gurobi.

    Args:
        time_limit: Optional time limit in seconds (Gurobi TimeLimit). None
            means no limit; bounding latency is up to the caller.
        verbose: Whether to show Gurobi output
    """

    def __init__(self, time_limit=None, verbose=False):
        if time_limit is not None and time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {time_limit}")
        self.time_limit = time_limit
        self.verbose = verbose

    def run(self, instance: MathProgram) -> ProgramSolution:
        """Optimize `instance` and report the outcome.

        Raises:
            RuntimeError: If gurobipy is not available
        """
        if gp is None:
            raise RuntimeError("gurobipy is not available. Install gurobipy into the active Python environment.")

        try:
            with gp.Model(instance.name) as model:
                x = self._build_model(model, instance)
                model.optimize()
                return self._read_solution(model, x)
        except gp.GurobiError as e:
            logger.warning(f"Gurobi failed on {instance.name}: {e}")
            return ProgramFailed(f"Gurobi error: {e}")

    def _build_model(self, model, program: MathProgram):
        model.setParam('OutputFlag', 1 if self.verbose else 0)
        if self.time_limit is not None:
            model.setParam('TimeLimit', self.time_limit)

        # Decision variables, keyed by name
        x = {}
        for var in program.variables:
            vtype = GRB.BINARY if var.vtype == "binary" else GRB.INTEGER
            x[var.name] = model.addVar(lb=var.lower, ub=var.upper, vtype=vtype, name=var.name)
        model.update()

        for con in program.constraints:
            model.addConstr(
                gp.quicksum(coef * x[name] for name, coef in con.coefficients.items()) <= con.rhs,
                name=con.name,
            )

        sense = GRB.MAXIMIZE if program.sense == MAXIMIZE else GRB.MINIMIZE
        model.setObjective(gp.quicksum(coef * x[name] for name, coef in program.objective.items()), sense)

        logger.debug(f"Built Gurobi model {program.name}: "
                     f"{program.number_of_variables()} vars, {program.number_of_constraints()} constraints")
        return x

    def _read_solution(self, model, x) -> ProgramSolution:
        status = model.Status
        if status == GRB.OPTIMAL:
            return ProgramSolved(values=self._values(x), kind=SolutionType.OPTIMAL, objective=model.ObjVal)
        if status in (GRB.SUBOPTIMAL, GRB.TIME_LIMIT, GRB.NODE_LIMIT, GRB.SOLUTION_LIMIT, GRB.INTERRUPTED):
            if model.SolCount > 0:
                return ProgramSolved(values=self._values(x), kind=SolutionType.SUBOPTIMAL, objective=model.ObjVal)
            logger.warning(f"Gurobi stopped with status {status} and no incumbent")
            return ProgramFailed(f"Gurobi stopped with status {status} before finding a solution")
        if status == GRB.INFEASIBLE:
            return ProgramInfeasible()
        if status == GRB.UNBOUNDED:
            return ProgramUnbounded()

        logger.warning(f"Gurobi returned unexpected status {status}")
        return ProgramFailed(f"Gurobi returned status {status}")

    @staticmethod
    def _values(x):
        return {name: var.X for name, var in x.items()}

    def __repr__(self):
        return f"GurobiSolver(time_limit={self.time_limit}, verbose={self.verbose})"
