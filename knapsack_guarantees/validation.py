"""Theoretic validation: check an algorithm's cost against a proven ratio.

Decision table:
    alg cost and ref cost computable, alg >= bound * ref  -> Consistent
    alg cost and ref cost computable, alg <  bound * ref  -> Inconsistent
    either cost not computable                           -> Failed
A Solved but infeasible packing is Inconsistent: the check ran and the
algorithm broke the feasibility it promises.
"""
import logging

from primitives import to_float
from problem import GuaranteeStatus, TheoreticGuarantee


logger = logging.getLogger(__name__)

# relative slack for bound * ref computed in floating point
TOLERANCE = 1e-9


def check_ratio(label, instance, solution, reference, bound) -> TheoreticGuarantee:
    """Compare `solution` against `reference` on `instance`.

    Args:
        label: Algorithm description used in explanations
        instance: The Instance both solutions belong to
        solution: Solution produced by the algorithm under test
        reference: Solution used as the optimum
        bound: Proven approximation ratio, alg >= bound * opt

    Returns:
        TheoreticGuarantee
    """
    if solution.is_solved() and not instance.is_feasible(solution):
        return TheoreticGuarantee.inconsistent(
            f"{label} returned an infeasible packing {list(solution.as_packed())} "
            f"(capacity {instance.capacity})"
        )

    alg = solution.cost(instance)
    opt = reference.cost(instance)
    if alg is None or opt is None:
        reasons = []
        if alg is None:
            reasons.append(f"algorithm returned {_describe(solution)}")
        if opt is None:
            reasons.append(f"reference returned {_describe(reference)}")
        return TheoreticGuarantee.failed(
            "Cost of optimal solution and algorithm could not be computed: " + "; ".join(reasons)
        )

    threshold = bound * to_float(opt)
    if to_float(alg) < threshold - TOLERANCE * max(1.0, abs(threshold)):
        return TheoreticGuarantee.inconsistent(
            f"{label} did not achieve its theoretical approximation ratio: {alg} < {bound} * {opt}"
        )
    return TheoreticGuarantee.consistent()


def validate_run(algorithm, instance):
    """Run `algorithm` on `instance` and validate the result.

    Returns:
        tuple: (solution, guarantee)
    """
    solution = instance.run(algorithm)
    guarantee = algorithm.validate(instance, solution)
    if guarantee.status is GuaranteeStatus.INCONSISTENT:
        logger.warning(f"{algorithm!r} on {instance!r}: {guarantee.explanation}")
    elif guarantee.status is GuaranteeStatus.FAILED:
        logger.info(f"{algorithm!r} on {instance!r}: check failed: {guarantee.explanation}")
    return solution, guarantee


def _describe(solution) -> str:
    reason = getattr(solution, "reason", None)
    if reason:
        return f"{type(solution).__name__}({reason})"
    return type(solution).__name__
