"""
Groebner basis module for PyZeroDim.

This module provides the ideal machinery needed to build multiplication
matrices: multivariate division, S-polynomials, Buchberger's algorithm and
the monomial basis of the quotient ring of a zero-dimensional ideal.
"""

import itertools
from fractions import Fraction
from typing import Callable, List, Sequence, Tuple, Union

from pyzerodim.polynomial import (
    Variable,
    Monomial,
    Polynomial,
    MonomialOrder,
    DEFAULT_ORDER,
    as_polynomial,
)


def spolynomial(f: Polynomial, g: Polynomial, order: MonomialOrder = DEFAULT_ORDER) -> Polynomial:
    """Compute the S-polynomial of ``f`` and ``g``.

    The leading terms include their coefficients, so the result is
    ``lcm/LT(f) * f - lcm/LT(g) * g`` where ``lcm`` is the least common
    multiple of the leading power products.
    """
    f = as_polynomial(f)
    g = as_polynomial(g)
    ltf = f.leading_term(order)
    ltg = g.leading_term(order)
    common = ltf.lcm(ltg)
    return (common / ltf) * f - (common / ltg) * g


def divide(f: Polynomial,
           divisors: Sequence[Polynomial],
           order: MonomialOrder = DEFAULT_ORDER) -> Tuple[List[Polynomial], Polynomial]:
    """Divide ``f`` by a list of polynomials.

    Args:
        f: The dividend
        divisors: Polynomials to divide by, tried in the given order
        order: Monomial order defining the leading terms

    Returns:
        Tuple of (quotients, remainder) with ``f = sum(q_i * g_i) + remainder``
        and no term of the remainder divisible by a leading term of a divisor.
    """
    f = as_polynomial(f)
    divisors = [as_polynomial(g) for g in divisors]
    leading = [None if g.is_zero() else g.leading_term(order) for g in divisors]
    quotients = [Polynomial([]) for _ in divisors]
    remainder_terms = []

    p = f
    while not p.is_zero():
        lt = p.leading_term(order)
        for i, g in enumerate(divisors):
            if leading[i] is not None and leading[i].divides(lt):
                q = lt / leading[i]
                quotients[i] = quotients[i] + q
                # The leading term cancels exactly; dropping it also removes
                # rounding residue left by complex coefficients.
                p = (p - q * g).without(lt)
                break
        else:
            remainder_terms.append(lt)
            p = p.without(lt)

    return quotients, Polynomial(remainder_terms)


def rem(f: Polynomial, divisors: Sequence[Polynomial], order: MonomialOrder = DEFAULT_ORDER) -> Polynomial:
    """Remainder of ``f`` on division by ``divisors``."""
    return divide(f, divisors, order)[1]


def identity(G: List[Polynomial], order: MonomialOrder = DEFAULT_ORDER) -> List[Polynomial]:
    """Presort that keeps the generators in their given order."""
    return list(G)


def presort(G: List[Polynomial], order: MonomialOrder = DEFAULT_ORDER) -> List[Polynomial]:
    """Sort the generators by increasing leading term."""
    return sorted(G, key=lambda p: order.key(p.leading_term(order)))


def dummy_selection(pairs: List[Tuple[int, int]], G: List[Polynomial], order: MonomialOrder) -> int:
    """Select the oldest critical pair."""
    return 0


def normal_selection(pairs: List[Tuple[int, int]], G: List[Polynomial], order: MonomialOrder) -> int:
    """Select the critical pair whose leading terms have the smallest lcm."""
    lcms = [G[i].leading_term(order).lcm(G[j].leading_term(order)) for i, j in pairs]
    return min(range(len(pairs)), key=lambda k: order.key(lcms[k]))


def _coprime(a: Monomial, b: Monomial) -> bool:
    return not set(a.variables) & set(b.variables)


class Buchberger:
    """Buchberger's algorithm with a pluggable presort and pair selection.

    Args:
        presort: Function ``(G, order) -> G`` applied to the generators
        selection: Function ``(pairs, G, order) -> index`` choosing the next
            critical pair to process
    """

    def __init__(self,
                 presort: Callable = presort,
                 selection: Callable = normal_selection):
        self.presort = presort
        self.selection = selection

    def __repr__(self) -> str:
        return f"Buchberger({self.presort.__name__}, {self.selection.__name__})"

    def compute(self, F: Sequence[Polynomial], order: MonomialOrder = DEFAULT_ORDER) -> List[Polynomial]:
        """Compute a (not necessarily reduced) Groebner basis of ``F``."""
        F = [as_polynomial(p) for p in F]
        G = self.presort([p for p in F if not p.is_zero()], order)
        pairs = [(i, j) for j in range(len(G)) for i in range(j)]

        while pairs:
            i, j = pairs.pop(self.selection(pairs, G, order))
            # Buchberger's first criterion
            if _coprime(G[i].leading_term(order), G[j].leading_term(order)):
                continue
            s = rem(spolynomial(G[i], G[j], order), G, order)
            if not s.is_zero():
                pairs.extend((k, len(G)) for k in range(len(G)))
                G.append(s)

        return G


def reduce_basis(G: Sequence[Polynomial], order: MonomialOrder = DEFAULT_ORDER) -> List[Polynomial]:
    """Turn a Groebner basis into the reduced Groebner basis.

    The result is minimal, monic and inter-reduced, sorted by increasing
    leading term.
    """
    G = [g.monic(order) for g in map(as_polynomial, G) if not g.is_zero()]
    leading = [g.leading_term(order) for g in G]

    minimal = []
    for i, g in enumerate(G):
        redundant = False
        for j in range(len(G)):
            if i == j or not leading[j].divides(leading[i]):
                continue
            # Among equal leading terms keep the first one
            if leading[j].key() != leading[i].key() or j < i:
                redundant = True
                break
        if not redundant:
            minimal.append(g)

    reduced = [rem(g, minimal[:i] + minimal[i + 1:], order) for i, g in enumerate(minimal)]
    return sorted(reduced, key=lambda p: order.key(p.leading_term(order)))


def groebner_basis(F: Sequence[Polynomial],
                   algorithm: Buchberger = None,
                   order: MonomialOrder = DEFAULT_ORDER,
                   reduced: bool = True) -> List[Polynomial]:
    """Compute a Groebner basis of the ideal generated by ``F``.

    Args:
        F: Generators of the ideal
        algorithm: Buchberger instance (default: presort + normal selection)
        order: Monomial order
        reduced: Whether to return the reduced Groebner basis

    Returns:
        List of polynomials forming a Groebner basis
    """
    if algorithm is None:
        algorithm = Buchberger()
    G = algorithm.compute([as_polynomial(p) for p in F], order)
    return reduce_basis(G, order) if reduced else G


def _leading_terms(G: Sequence[Polynomial], order: MonomialOrder) -> List[Monomial]:
    G = [as_polynomial(g) for g in G]
    return [g.leading_term(order) for g in G if not g.is_zero()]


def is_zero_dimensional(G: Sequence[Polynomial],
                        variables: Sequence[Variable],
                        order: MonomialOrder = DEFAULT_ORDER) -> bool:
    """Check whether the ideal with Groebner basis ``G`` has finitely many solutions.

    Every variable must have a pure power among the leading terms. The unit
    ideal (empty variety) is not considered zero-dimensional.
    """
    leading = _leading_terms(G, order)
    if any(lt.degree() == 0 for lt in leading):
        return False
    return all(any(set(lt.variables) == {var} for lt in leading) for var in variables)


def monomial_basis(G: Sequence[Polynomial],
                   variables: Sequence[Variable],
                   order: MonomialOrder = DEFAULT_ORDER) -> Tuple[bool, List[Monomial]]:
    """Monomial basis of the quotient ring by the ideal with Groebner basis ``G``.

    Returns:
        Tuple of (is_zero_dimensional, basis). The basis lists the monomials
        not divisible by any leading term, in increasing order (so the
        constant monomial comes first). It is empty when the ideal is not
        zero-dimensional.
    """
    if not is_zero_dimensional(G, variables, order):
        return False, []

    leading = _leading_terms(G, order)
    variables = sorted(variables, key=lambda v: v.name)
    bounds = [min(lt.variables[var] for lt in leading if set(lt.variables) == {var})
              for var in variables]

    basis = []
    for exps in itertools.product(*(range(b) for b in bounds)):
        monomial = Monomial(dict(zip(variables, exps)))
        if not any(lt.divides(monomial) for lt in leading):
            basis.append(monomial)
    basis.sort(key=order.key)
    return True, basis


def coefficients(p: Polynomial, basis: Sequence[Monomial]) -> List[Union[Fraction, complex]]:
    """Coefficient vector of a reduced polynomial in a monomial basis.

    Raises:
        ValueError: If ``p`` has a term outside the basis
    """
    index = {m.key(): i for i, m in enumerate(basis)}
    values = [Fraction(0)] * len(basis)
    for term in as_polynomial(p).terms:
        position = index.get(term.key())
        if position is None:
            raise ValueError(f"Term {term} is not in the monomial basis {list(basis)}")
        values[position] = term.coefficient
    return values
