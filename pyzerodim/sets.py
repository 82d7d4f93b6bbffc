"""
Set representation module for PyZeroDim.

This module provides the sets whose points are computed by the solvers:
the whole space, algebraic sets (common zeros of polynomial equalities) and
basic semialgebraic sets (an algebraic set intersected with polynomial
inequalities ``p >= 0``).
"""

from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from pyzerodim.polynomial import (
    Variable,
    Monomial,
    Polynomial,
    PolynomialSystem,
    MonomialOrder,
    DEFAULT_ORDER,
    as_polynomial,
)
from pyzerodim.groebner import Buchberger, groebner_basis, rem, monomial_basis


def _sorted_variables(polynomials: Sequence[Polynomial]) -> List[Variable]:
    variables = set()
    for p in polynomials:
        variables.update(p.variables())
    return sorted(variables, key=lambda v: v.name)


class FullSpace:
    """The whole space, i.e. the set defined by no constraint."""

    def __repr__(self) -> str:
        return "FullSpace()"

    def variables(self) -> List[Variable]:
        return []

    def __and__(self, other):
        return intersect(self, other)


class AlgebraicSet:
    """Set of common zeros of a list of polynomial equalities.

    The Groebner basis of the equalities is computed on first use and cached
    until an equality is added.
    """

    def __init__(self,
                 equalities: Sequence[Polynomial] = (),
                 order: MonomialOrder = DEFAULT_ORDER,
                 algorithm: Optional[Buchberger] = None):
        """Initialize an algebraic set.

        Args:
            equalities: Polynomials ``p`` such that the set is ``{p == 0}``
            order: Monomial order used for the Groebner basis
            algorithm: Buchberger instance (default: presort + normal selection)
        """
        self.equalities = [as_polynomial(p) for p in equalities]
        self.order = order
        self.algorithm = algorithm
        self._groebner = None

    @classmethod
    def from_system(cls, system: PolynomialSystem, order: MonomialOrder = DEFAULT_ORDER) -> "AlgebraicSet":
        return cls(system.equations, order=order)

    def __repr__(self) -> str:
        eqs = ", ".join(f"{p} == 0" for p in self.equalities)
        return f"AlgebraicSet([{eqs}])"

    def variables(self) -> List[Variable]:
        """Variables of the equalities, sorted by name."""
        return _sorted_variables(self.equalities)

    def add_equality(self, p) -> None:
        self.equalities.append(as_polynomial(p))
        self._groebner = None

    def groebner_basis(self) -> List[Polynomial]:
        """Reduced Groebner basis of the ideal generated by the equalities."""
        if self._groebner is None:
            self._groebner = groebner_basis(self.equalities, self.algorithm, self.order)
        return self._groebner

    def rem(self, p) -> Polynomial:
        """Normal form of ``p`` modulo the ideal."""
        return rem(as_polynomial(p), self.groebner_basis(), self.order)

    def monomial_basis(self) -> Tuple[bool, List[Monomial]]:
        """Monomial basis of the quotient ring, see :func:`pyzerodim.groebner.monomial_basis`."""
        return monomial_basis(self.groebner_basis(), self.variables(), self.order)

    def is_zero_dimensional(self) -> bool:
        return self.monomial_basis()[0]

    def contains(self, point: Dict[Variable, complex], tol: float = 1e-10) -> bool:
        """Check whether every equality vanishes at ``point`` up to ``tol``."""
        return all(abs(p.evaluate(point)) <= tol for p in self.equalities)

    def __and__(self, other):
        return intersect(self, other)


class BasicSemialgebraicSet:
    """Intersection of an algebraic set with inequalities ``p >= 0``."""

    def __init__(self, V: Optional[AlgebraicSet] = None, inequalities: Sequence[Polynomial] = ()):
        self.V = V if V is not None else AlgebraicSet()
        self.inequalities = [as_polynomial(p) for p in inequalities]

    def __repr__(self) -> str:
        eqs = [f"{p} == 0" for p in self.V.equalities]
        ineqs = [f"{p} >= 0" for p in self.inequalities]
        return f"BasicSemialgebraicSet([{', '.join(eqs + ineqs)}])"

    @property
    def equalities(self) -> List[Polynomial]:
        return self.V.equalities

    def variables(self) -> List[Variable]:
        return _sorted_variables(self.V.equalities + self.inequalities)

    def add_equality(self, p) -> None:
        self.V.add_equality(p)

    def add_inequality(self, p) -> None:
        self.inequalities.append(as_polynomial(p))

    def satisfies_inequalities(self, point: Dict[Variable, complex], tol: float = 1e-10) -> bool:
        """Check ``p(point) >= -tol`` for every inequality (real parts)."""
        return all(np.real(p.evaluate(point)) >= -tol for p in self.inequalities)

    def contains(self, point: Dict[Variable, complex], tol: float = 1e-10) -> bool:
        return self.V.contains(point, tol) and self.satisfies_inequalities(point, tol)

    def __and__(self, other):
        return intersect(self, other)


AnySet = Union[FullSpace, AlgebraicSet, BasicSemialgebraicSet]


def _intersect_pair(a: AnySet, b: AnySet) -> AnySet:
    if isinstance(a, FullSpace):
        return b
    if isinstance(b, FullSpace):
        return a
    if isinstance(a, AlgebraicSet) and isinstance(b, AlgebraicSet):
        return AlgebraicSet(a.equalities + b.equalities, order=a.order, algorithm=a.algorithm)
    # The semialgebraic operand comes first
    if isinstance(a, AlgebraicSet):
        a, b = b, a
    if isinstance(b, AlgebraicSet):
        return BasicSemialgebraicSet(_intersect_pair(a.V, b), a.inequalities)
    return BasicSemialgebraicSet(_intersect_pair(a.V, b.V), a.inequalities + b.inequalities)


def intersect(*sets: AnySet) -> AnySet:
    """Intersection of sets.

    ``FullSpace`` is neutral, algebraic sets concatenate their equalities and
    semialgebraic sets also concatenate their inequalities.
    """
    result = FullSpace()
    for s in sets:
        if not isinstance(s, (FullSpace, AlgebraicSet, BasicSemialgebraicSet)):
            raise TypeError(f"Cannot intersect with {type(s)}")
        result = _intersect_pair(result, s)
    return result
