"""
Multiplication matrices module for PyZeroDim.

The multiplication matrix of a variable ``v`` represents the linear map
"multiply by ``v``, then reduce modulo the ideal" on the quotient ring,
expressed in its monomial basis. The matrices of all variables commute and
their common eigenvectors encode the solutions of the system.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np
from tqdm.auto import tqdm

from pyzerodim.polynomial import Variable, Monomial
from pyzerodim.groebner import coefficients
from pyzerodim.sets import AlgebraicSet


class AbstractMultiplicationMatricesAlgorithm(ABC):
    """Algorithm computing multiplication matrices from algebraic equations."""

    @abstractmethod
    def multiplication_matrices(self, V: AlgebraicSet, verbose: bool = False) -> Optional[List[np.ndarray]]:
        """Compute the multiplication matrices of the equations for which ``V`` is the set of solutions.

        Returns:
            None if ``V`` is not zero-dimensional, otherwise one matrix per
            variable of ``V`` (in the order of ``V.variables()``).
        """


class AbstractMultiplicationMatricesSolver(ABC):
    """Solver of algebraic equations using multiplication matrices."""

    @abstractmethod
    def solve_multiplication_matrices(self, Ms: Sequence[np.ndarray], verbose: bool = False) -> List[np.ndarray]:
        """Solve the algebraic equations having multiplication matrices ``Ms``.

        Returns:
            The list of solutions, each a vector with one entry per matrix.
        """


def _matrix_dtype(V: AlgebraicSet) -> type:
    for p in V.groebner_basis():
        if any(isinstance(term.coefficient, complex) for term in p.terms):
            return complex
    return float


def multiplication_matrix(V: AlgebraicSet,
                          var: Variable,
                          basis: Sequence[Monomial],
                          dtype: type = float) -> np.ndarray:
    """Multiplication matrix of ``var`` in the monomial basis of the quotient ring.

    Column ``i`` holds the coefficients of ``var * basis[i]`` reduced modulo
    the ideal of ``V``.
    """
    d = len(basis)
    M = np.zeros((d, d), dtype=dtype)
    for i, b in enumerate(basis):
        p = V.rem(b * var)
        M[:, i] = [dtype(c) for c in coefficients(p, basis)]
    return M


class GroebnerBasisMultiplicationMatricesAlgorithm(AbstractMultiplicationMatricesAlgorithm):
    """Multiplication matrices from the Groebner basis normal form."""

    def __repr__(self) -> str:
        return "GroebnerBasisMultiplicationMatricesAlgorithm()"

    def multiplication_matrices(self, V: AlgebraicSet, verbose: bool = False) -> Optional[List[np.ndarray]]:
        """One matrix for every variable of ``V.variables()``, sorted by name.

        Variables that occur in no monomial of the basis still get a matrix.
        For ``x - 2, y**2 - 1`` the basis is ``[1, y]`` and the matrix of
        ``x`` is ``2 * I``.
        """
        is_zero_dimensional, basis = V.monomial_basis()
        if not is_zero_dimensional:
            if verbose:
                print("Ideal is not zero-dimensional; cannot compute multiplication matrices.")
            return None

        variables = V.variables()
        if verbose:
            print(f"Quotient ring of dimension {len(basis)} with monomial basis {basis}")
        if not variables:
            return []

        dtype = _matrix_dtype(V)
        return [multiplication_matrix(V, var, basis, dtype)
                for var in tqdm(variables, desc="Multiplication matrices", disable=not verbose)]
