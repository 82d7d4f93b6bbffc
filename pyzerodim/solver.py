"""
Main solver module for PyZeroDim.

This module ties the computation of multiplication matrices and their
numerical solution together into solvers of algebraic equations, and
provides the high-level ``solve`` function.
"""

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence, Union

import numpy as np

from pyzerodim.polynomial import Variable, Polynomial, PolynomialSystem
from pyzerodim.sets import AlgebraicSet, BasicSemialgebraicSet
from pyzerodim.multiplication import (
    AbstractMultiplicationMatricesAlgorithm,
    AbstractMultiplicationMatricesSolver,
    GroebnerBasisMultiplicationMatricesAlgorithm,
)
from pyzerodim.schur import ReorderedSchurMultiplicationMatricesSolver
from pyzerodim.utils import compute_residual, newton_corrector


class AbstractAlgebraicSolver(ABC):
    """Solver of algebraic equations."""

    @abstractmethod
    def solve_algebraic_equations(self, V: AlgebraicSet, verbose: bool = False) -> Optional[List[np.ndarray]]:
        """Solve the algebraic equations for which ``V`` is the set of solutions.

        Returns:
            None if ``V`` is not zero-dimensional, otherwise the list of
            solutions (one vector per solution, entries in the order of
            ``V.variables()``).
        """


class SolverUsingMultiplicationMatrices(AbstractAlgebraicSolver):
    """Algebraic solver computing multiplication matrices, then solving them."""

    def __init__(self,
                 algorithm: AbstractMultiplicationMatricesAlgorithm,
                 solver: AbstractMultiplicationMatricesSolver):
        self.algorithm = algorithm
        self.solver = solver

    def __repr__(self) -> str:
        return f"SolverUsingMultiplicationMatrices({self.algorithm!r}, {self.solver!r})"

    def solve_algebraic_equations(self, V: AlgebraicSet, verbose: bool = False) -> Optional[List[np.ndarray]]:
        Ms = self.algorithm.multiplication_matrices(V, verbose=verbose)
        if Ms is None:
            return None
        return self.solver.solve_multiplication_matrices(Ms, verbose=verbose)


def algebraic_solver(algorithm: Union[AbstractMultiplicationMatricesAlgorithm,
                                      AbstractMultiplicationMatricesSolver],
                     solver: Optional[AbstractMultiplicationMatricesSolver] = None) -> SolverUsingMultiplicationMatrices:
    """Build an algebraic solver from an algorithm and a multiplication matrices solver.

    With a single multiplication matrices solver argument, the matrices are
    computed from the Groebner basis.
    """
    if solver is None:
        return SolverUsingMultiplicationMatrices(GroebnerBasisMultiplicationMatricesAlgorithm(), algorithm)
    return SolverUsingMultiplicationMatrices(algorithm, solver)


def default_algebraic_solver(V: Optional[AlgebraicSet] = None) -> SolverUsingMultiplicationMatrices:
    """Default solver: Groebner basis matrices and the reordered Schur method."""
    return algebraic_solver(GroebnerBasisMultiplicationMatricesAlgorithm(),
                            ReorderedSchurMultiplicationMatricesSolver())


def solve_algebraic_equations(V: AlgebraicSet,
                              solver: Optional[AbstractAlgebraicSolver] = None,
                              verbose: bool = False) -> Optional[List[np.ndarray]]:
    """Solve the algebraic equations for which ``V`` is the set of solutions.

    Returns:
        None if ``V`` is not zero-dimensional, otherwise the list of solutions
    """
    if solver is None:
        solver = default_algebraic_solver(V)
    return solver.solve_algebraic_equations(V, verbose=verbose)


class Solution:
    """Class representing a solution to a polynomial system."""

    def __init__(self, values: Dict[Variable, complex], residual: float):
        """Initialize a solution with its values and residual.

        Args:
            values: Dictionary mapping variables to their values
            residual: Residual norm of the equalities at the solution
        """
        self.values = values
        self.residual = residual

    def __repr__(self) -> str:
        var_strs = []
        for var in sorted(self.values, key=lambda v: v.name):
            val = complex(self.values[var])
            if abs(val.imag) < 1e-10:
                var_strs.append(f"{var.name} = {val.real:.8g}")
            else:
                sign = '+' if val.imag >= 0 else '-'
                var_strs.append(f"{var.name} = {val.real:.8g} {sign} {abs(val.imag):.8g}j")
        return f"Solution (residual={self.residual:.2e}):\n  " + "\n  ".join(var_strs)

    def is_real(self, tol: float = 1e-10) -> bool:
        """Check if all imaginary parts are below ``tol``."""
        return all(abs(np.imag(val)) < tol for val in self.values.values())

    def as_array(self, variables: Sequence[Variable]) -> np.ndarray:
        """Values of the solution in the order of ``variables``."""
        return np.array([self.values[var] for var in variables])

    def distance(self, other: 'Solution', variables: Sequence[Variable]) -> float:
        """Compute the Euclidean distance between this solution and another."""
        dist_sq = sum(abs(self.values.get(var, 0) - other.values.get(var, 0)) ** 2 for var in variables)
        return float(np.sqrt(dist_sq))


class SolutionSet:
    """Class representing a set of solutions to a polynomial system."""

    def __init__(self, solutions: List[Solution], system: Union[AlgebraicSet, BasicSemialgebraicSet]):
        """Initialize a solution set.

        Args:
            solutions: List of Solution objects
            system: The set whose points were computed
        """
        self.solutions = solutions
        self.system = system
        self._meta = {}

    def __repr__(self) -> str:
        is_filtered = self._meta.get('is_filtered', False)
        set_type = "Filtered SolutionSet" if is_filtered else "SolutionSet"
        header = f"{set_type}: {len(self.solutions)} solutions"

        if 'dimension' in self._meta:
            header += f"\n  Quotient ring of dimension {self._meta['dimension']}"
        if 'solve_time' in self._meta:
            header += f"\n  Solve time: {self._meta['solve_time']:.2f} seconds"

        if not self.solutions:
            details = "\n(No solutions in this set)"
        elif len(self.solutions) <= 5:
            details = "\n\n" + "\n\n".join(str(sol) for sol in self.solutions)
        else:
            details = ("\n\n" + "\n\n".join(str(sol) for sol in self.solutions[:3])
                       + "\n\n... and {} more".format(len(self.solutions) - 3))
        return header + details

    def __len__(self) -> int:
        return len(self.solutions)

    def __getitem__(self, index) -> Solution:
        return self.solutions[index]

    def __iter__(self):
        return iter(self.solutions)

    def points(self) -> np.ndarray:
        """Solutions as rows of an array, columns in the order of the system variables."""
        V = self.system.V if isinstance(self.system, BasicSemialgebraicSet) else self.system
        variables = V.variables()
        return np.array([sol.as_array(variables) for sol in self.solutions]).reshape(len(self.solutions),
                                                                                      len(variables))

    def filter(self,
               max_residual: Optional[float] = None,
               custom_filter: Optional[Callable[[Solution], bool]] = None) -> 'SolutionSet':
        """Filter solutions based on criteria.

        Args:
            max_residual: Maximum residual threshold.
            custom_filter: Custom filter function taking a Solution and returning bool.

        Returns:
            A new SolutionSet with filtered solutions.
        """
        filtered_sols = self.solutions
        if max_residual is not None:
            filtered_sols = [sol for sol in filtered_sols if sol.residual <= max_residual]
        if custom_filter is not None:
            filtered_sols = [sol for sol in filtered_sols if custom_filter(sol)]

        result = SolutionSet(filtered_sols, self.system)
        result._meta = self._meta.copy()
        result._meta['is_filtered'] = True
        return result


def _as_set(system) -> Union[AlgebraicSet, BasicSemialgebraicSet]:
    if isinstance(system, (AlgebraicSet, BasicSemialgebraicSet)):
        return system
    if isinstance(system, PolynomialSystem):
        return AlgebraicSet.from_system(system)
    if isinstance(system, (list, tuple)):
        return AlgebraicSet(system)
    raise TypeError(f"Cannot solve an object of type {type(system)}")


def solve(system,
          solver: Optional[AbstractAlgebraicSolver] = None,
          refine: bool = False,
          tol: float = 1e-10,
          verbose: bool = False) -> Optional[SolutionSet]:
    """Solve a zero-dimensional polynomial system.

    Args:
        system: PolynomialSystem, list of polynomials, AlgebraicSet or
            BasicSemialgebraicSet
        solver: Algebraic solver (default: ``default_algebraic_solver()``)
        refine: Whether to polish each point with Newton's method
        tol: Tolerance for Newton convergence and inequality checks
        verbose: Whether to print progress information

    Returns:
        A SolutionSet, or None if the system is not zero-dimensional
    """
    start_time = time.time()

    S = _as_set(system)
    V = S.V if isinstance(S, BasicSemialgebraicSet) else S
    variables = V.variables()
    if verbose:
        print(f"Variables used for solving: {variables}")

    points = solve_algebraic_equations(V, solver, verbose=verbose)
    if points is None:
        if verbose:
            print("The system is not zero-dimensional; no solutions computed.")
        return None

    equations = PolynomialSystem(V.equalities)
    raw_solutions = []
    for point in points:
        values = dict(zip(variables, point))
        residual = compute_residual(equations, values)

        if refine and variables:
            corrected, success, iters = newton_corrector(equations, point, variables, tol=tol)
            if np.isrealobj(point):
                corrected = corrected.real
            corrected_values = dict(zip(variables, corrected))
            corrected_residual = compute_residual(equations, corrected_values)
            if corrected_residual < residual:
                if verbose:
                    print(f"Newton refinement: residual {residual:.2e} -> {corrected_residual:.2e} "
                          f"in {iters} iterations")
                values, residual = corrected_values, corrected_residual

        raw_solutions.append(Solution(values, residual))

    solutions = raw_solutions
    if isinstance(S, BasicSemialgebraicSet):
        solutions = [sol for sol in raw_solutions if S.satisfies_inequalities(sol.values, tol)]
        if verbose:
            print(f"{len(raw_solutions) - len(solutions)} solutions violate the inequalities")

    result = SolutionSet(solutions, S)
    result._meta['dimension'] = len(V.monomial_basis()[1])
    result._meta['raw_solutions_found'] = len(raw_solutions)
    result._meta['solve_time'] = time.time() - start_time

    if verbose:
        print(f"Found {len(solutions)} solutions. Solve time: {result._meta['solve_time']:.2f}s.")

    return result
