"""
Utility functions for PyZeroDim.

This module provides evaluation helpers and the Newton corrector used to
polish the points returned by the eigenvalue solver.
"""

import numpy as np
from typing import Dict, List, Tuple

from pyzerodim.polynomial import Variable, PolynomialSystem


def evaluate_system_at_point(system: PolynomialSystem,
                             point: np.ndarray,
                             variables: List[Variable]) -> np.ndarray:
    """Evaluate a polynomial system at a point."""
    var_dict = {var: val for var, val in zip(variables, point)}
    return np.array(system.evaluate(var_dict), dtype=complex)


def evaluate_jacobian_at_point(system: PolynomialSystem,
                               point: np.ndarray,
                               variables: List[Variable]) -> np.ndarray:
    """Evaluate the Jacobian of a polynomial system at a point."""
    var_dict = {var: val for var, val in zip(variables, point)}
    jac_values = [[poly.evaluate(var_dict) for poly in row] for row in system.jacobian(variables)]
    return np.array(jac_values, dtype=complex).reshape(len(system.equations), len(variables))


def compute_residual(system: PolynomialSystem, values: Dict[Variable, complex]) -> float:
    """Euclidean norm of the system evaluated at ``values``."""
    return float(np.linalg.norm(np.array(system.evaluate(values), dtype=complex)))


def newton_corrector(system: PolynomialSystem,
                     point: np.ndarray,
                     variables: List[Variable],
                     max_iters: int = 10,
                     tol: float = 1e-10) -> Tuple[np.ndarray, bool, int]:
    """Apply Newton's method to correct a point to a solution.

    Non-square systems use the least-squares (Gauss-Newton) step.

    Args:
        system: The polynomial system
        point: Initial point for correction
        variables: The variables in the system
        max_iters: Maximum number of iterations
        tol: Tolerance for convergence

    Returns:
        Tuple of (corrected point, success flag, number of iterations)
    """
    current = np.array(point, dtype=complex)

    for i in range(max_iters):
        f_val = evaluate_system_at_point(system, current, variables)
        if np.linalg.norm(f_val) < tol:
            return current, True, i

        jac = evaluate_jacobian_at_point(system, current, variables)
        try:
            delta = np.linalg.solve(jac, -f_val)
        except np.linalg.LinAlgError:
            # Singular or non-square Jacobian
            delta = np.linalg.lstsq(jac, -f_val, rcond=None)[0]

        current = current + delta
        if np.linalg.norm(delta) < tol:
            return current, True, i + 1

    return current, False, max_iters
