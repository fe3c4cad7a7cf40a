"""Generic optimization-problem abstractions.

- OptProblem: an instance type that can run any Algorithm on itself
- Algorithm: stateless strategy mapping an instance to a solution
- Reduction: forward instance map + backward solution map to another problem
- TheoreticValidation: checks an algorithm run against its proven guarantee
"""

import abc
from dataclasses import dataclass
from enum import Enum


class ReductionError(RuntimeError):
    """A reduction produced something its target problem can never produce.

    Signals a bug in the reduction, not a domain outcome.
    """


class OptProblem(abc.ABC):
    """An optimization problem instance."""

    def run(self, algorithm: "Algorithm"):
        """Solve this instance with `algorithm`."""
        return algorithm.run(self)


class Algorithm(abc.ABC):
    """A solving strategy for one problem type.

    Implementations must be deterministic and keep no mutable state
    between calls, so one object can serve many instances and threads.
    """

    @abc.abstractmethod
    def run(self, instance):
        """Map `instance` to a solution of its problem type."""
        pass


class Reduction(abc.ABC):
    """Mixin for a problem that can be solved through another problem type.

    `reduce_solution` must be the exact inverse of the variable
    correspondence set up by `reduce_instance`.
    """

    @abc.abstractmethod
    def reduce_instance(self):
        """Build the equivalent instance of the target problem."""
        pass

    @abc.abstractmethod
    def reduce_solution(self, solution):
        """Map a target-problem solution back onto this instance."""
        pass

    def solve_by_reduction(self, algorithm: Algorithm):
        """Reduce, solve the reduced instance with `algorithm`, map back.

        Nothing is cached: every call rebuilds the reduced instance.
        """
        reduced = self.reduce_instance()
        solution = algorithm.run(reduced)
        return self.reduce_solution(solution)


class GuaranteeStatus(Enum):
    CONSISTENT = "consistent"
    # the check ran and the proven bound was violated
    INCONSISTENT = "inconsistent"
    # the check could not run (a cost was not computable)
    FAILED = "failed"


@dataclass(frozen=True)
class TheoreticGuarantee:
    """Outcome of checking an algorithm run against its proven bound.

    Attributes:
        status: CONSISTENT, INCONSISTENT or FAILED
        explanation: Evidence for INCONSISTENT, reason for FAILED
    """
    status: GuaranteeStatus
    explanation: str = ""

    @classmethod
    def consistent(cls) -> "TheoreticGuarantee":
        return cls(GuaranteeStatus.CONSISTENT)

    @classmethod
    def inconsistent(cls, explanation: str) -> "TheoreticGuarantee":
        return cls(GuaranteeStatus.INCONSISTENT, explanation)

    @classmethod
    def failed(cls, explanation: str) -> "TheoreticGuarantee":
        return cls(GuaranteeStatus.FAILED, explanation)

    def is_correct(self) -> bool:
        return self.status is GuaranteeStatus.CONSISTENT

    def __str__(self):
        if self.explanation:
            return f"{self.status.value}: {self.explanation}"
        return self.status.value


class TheoreticValidation(abc.ABC):
    """Mixin for algorithms with a proven worst-case approximation ratio."""

    @abc.abstractmethod
    def validate(self, instance, solution) -> TheoreticGuarantee:
        pass

    def is_correct(self, instance, solution) -> bool:
        return self.validate(instance, solution).is_correct()
