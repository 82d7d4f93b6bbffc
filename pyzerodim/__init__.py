"""
PyZeroDim: numerical solving of zero-dimensional polynomial systems.

This library computes the finitely many common solutions of a system of
polynomial equations from the multiplication matrices of its quotient ring,
using the reordered Schur factorization method of Corless, Gianni and
Trager, which also handles multiple roots.
"""

__version__ = "0.1.0"

from pyzerodim.polynomial import (
    polyvar,
    make_system,
    Variable,
    Monomial,
    Polynomial,
    PolynomialSystem,
    lex,
    grlex,
    grevlex,
)

from pyzerodim.groebner import (
    spolynomial,
    rem,
    groebner_basis,
    monomial_basis,
    Buchberger,
)

from pyzerodim.sets import (
    FullSpace,
    AlgebraicSet,
    BasicSemialgebraicSet,
    intersect,
)

from pyzerodim.multiplication import (
    AbstractMultiplicationMatricesAlgorithm,
    AbstractMultiplicationMatricesSolver,
    GroebnerBasisMultiplicationMatricesAlgorithm,
)

from pyzerodim.schur import ReorderedSchurMultiplicationMatricesSolver

from pyzerodim.solver import (
    AbstractAlgebraicSolver,
    SolverUsingMultiplicationMatrices,
    algebraic_solver,
    default_algebraic_solver,
    solve_algebraic_equations,
    solve,
    Solution,
    SolutionSet,
)

# Visualization depends on the optional matplotlib dependency and is not
# imported here. Use pyzerodim.visualization directly when needed.

__all__ = [
    "polyvar",
    "make_system",
    "Variable",
    "Monomial",
    "Polynomial",
    "PolynomialSystem",
    "lex",
    "grlex",
    "grevlex",
    "spolynomial",
    "rem",
    "groebner_basis",
    "monomial_basis",
    "Buchberger",
    "FullSpace",
    "AlgebraicSet",
    "BasicSemialgebraicSet",
    "intersect",
    "AbstractMultiplicationMatricesAlgorithm",
    "AbstractMultiplicationMatricesSolver",
    "GroebnerBasisMultiplicationMatricesAlgorithm",
    "ReorderedSchurMultiplicationMatricesSolver",
    "AbstractAlgebraicSolver",
    "SolverUsingMultiplicationMatrices",
    "algebraic_solver",
    "default_algebraic_solver",
    "solve_algebraic_equations",
    "solve",
    "Solution",
    "SolutionSet",
]
