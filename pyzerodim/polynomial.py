"""
Polynomial representation module for PyZeroDim.

This module provides classes and functions for representing and manipulating
multivariate polynomials and polynomial systems, together with the monomial
orders used by the Groebner basis machinery.

Integer and float coefficients are stored exactly as ``fractions.Fraction``
so that reductions modulo an ideal do not accumulate rounding errors. Complex
coefficients are kept as ``complex``.
"""

import numbers
from fractions import Fraction
from functools import cmp_to_key
from typing import Dict, List, Tuple, Union, Set, Any, Optional

# Complex coefficients below this magnitude are treated as zero
COMPLEX_ZERO_TOL = 1e-15


def _coerce_coefficient(value: Any) -> Union[Fraction, complex]:
    """Convert a scalar to the exact (or complex) coefficient representation."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, numbers.Real):
        return Fraction(float(value))
    if isinstance(value, numbers.Complex):
        value = complex(value)
        if value.imag == 0:
            return Fraction(value.real)
        return value
    raise TypeError(f"Unsupported coefficient type: {type(value)}")


def _is_zero(coefficient: Union[Fraction, complex]) -> bool:
    if isinstance(coefficient, complex):
        return abs(coefficient) <= COMPLEX_ZERO_TOL
    return coefficient == 0


def _format_coefficient(coefficient: Union[Fraction, complex]) -> str:
    return str(coefficient)


def _compare_leftmost(a: Tuple[int, ...], b: Tuple[int, ...]) -> int:
    for x, y in zip(a, b):
        if x > y:
            return 1
        elif x < y:
            return -1
    return 0


def _compare_rightmost(a: Tuple[int, ...], b: Tuple[int, ...]) -> int:
    return _compare_leftmost(a[::-1], b[::-1])


class MonomialOrder:
    """An order on power products.

    Calling an order on two monomials returns -1, 0 or 1. Variables are
    compared by name: the alphabetically first variable is the most
    significant one.
    """

    name = "order"

    def __call__(self, a: "Monomial", b: "Monomial") -> int:
        variables = sorted(set(a.variables) | set(b.variables), key=lambda v: v.name)
        return self.compare(a.exponents(variables), b.exponents(variables))

    def compare(self, a: Tuple[int, ...], b: Tuple[int, ...]) -> int:
        raise NotImplementedError

    @property
    def key(self):
        """Sort key for ``sorted``/``max`` built from this order."""
        return cmp_to_key(self)

    def __repr__(self) -> str:
        return self.name


class LexOrder(MonomialOrder):
    """Lexicographic order."""

    name = "lex"

    def compare(self, a, b):
        return _compare_leftmost(a, b)


class GrlexOrder(MonomialOrder):
    """Graded lexicographic order."""

    name = "grlex"

    def compare(self, a, b):
        if sum(a) != sum(b):
            return 1 if sum(a) > sum(b) else -1
        return _compare_leftmost(a, b)


class GrevlexOrder(MonomialOrder):
    """Graded reverse lexicographic order."""

    name = "grevlex"

    def compare(self, a, b):
        if sum(a) != sum(b):
            return 1 if sum(a) > sum(b) else -1
        # (b, a) and not (a, b): the smaller rightmost exponent wins
        return _compare_rightmost(b, a)


lex = LexOrder()
grlex = GrlexOrder()
grevlex = GrevlexOrder()

DEFAULT_ORDER = grlex


class Variable:
    """Representation of a polynomial variable."""

    def __init__(self, name: str):
        """Initialize a variable with a name.

        Args:
            name: String name of the variable
        """
        self.name = name

    def __repr__(self) -> str:
        return self.name

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return False
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __lt__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return self.name < other.name

    def as_monomial(self) -> "Monomial":
        return Monomial({self: 1})

    def __pow__(self, exponent: int) -> "Polynomial":
        """Raise the variable to a power, creating a polynomial."""
        return Polynomial([Monomial({self: exponent})])

    def __mul__(self, other: Any) -> Union["Polynomial", "Monomial"]:
        return self.as_monomial() * other

    def __rmul__(self, other: Any) -> "Monomial":
        return self.as_monomial().__rmul__(other)

    def __truediv__(self, other: Any) -> "Monomial":
        return self.as_monomial() / other

    def __neg__(self) -> "Monomial":
        return Monomial({self: 1}, coefficient=-1)

    def __add__(self, other: Any) -> "Polynomial":
        return self.as_monomial() + other

    def __radd__(self, other: Any) -> "Polynomial":
        return self.as_monomial().__radd__(other)

    def __sub__(self, other: Any) -> "Polynomial":
        return self.as_monomial() - other

    def __rsub__(self, other: Any) -> "Polynomial":
        return self.as_monomial().__rsub__(other)


class Monomial:
    """Representation of a term: a coefficient times a power product."""

    def __init__(self, variables: Dict[Variable, int], coefficient: Any = 1):
        """Initialize a monomial with variables and their exponents.

        Args:
            variables: Dict mapping Variable objects to their exponents
            coefficient: Coefficient of the monomial (default: 1)
        """
        for var, exp in variables.items():
            if not isinstance(exp, numbers.Integral) or exp < 0:
                raise ValueError(f"Exponent of {var} must be a non-negative integer, got {exp!r}")
        # Filter out zero exponents
        self.variables = {var: int(exp) for var, exp in variables.items() if exp != 0}
        self.coefficient = _coerce_coefficient(coefficient)

    def __repr__(self) -> str:
        if not self.variables:
            return _format_coefficient(self.coefficient)

        coef_str = ""
        if self.coefficient != 1:
            if self.coefficient == -1:
                coef_str = "-"
            else:
                coef_str = f"{_format_coefficient(self.coefficient)}*"

        var_strs = []
        for var, exp in sorted(self.variables.items(), key=lambda item: item[0].name):
            if exp == 1:
                var_strs.append(f"{var.name}")
            else:
                var_strs.append(f"{var.name}^{exp}")

        return f"{coef_str}{'*'.join(var_strs)}"

    def key(self) -> Tuple[Tuple[Variable, int], ...]:
        """Hashable power product of this term, ignoring the coefficient."""
        return tuple(sorted(self.variables.items(), key=lambda item: item[0].name))

    def degree(self) -> int:
        """Get the total degree of the monomial."""
        return sum(self.variables.values())

    def exponents(self, variables: List[Variable]) -> Tuple[int, ...]:
        """Exponent vector of the monomial with respect to ``variables``."""
        return tuple(self.variables.get(var, 0) for var in variables)

    def evaluate(self, values: Dict[Variable, complex]) -> complex:
        """Evaluate the monomial at specific variable values.

        Args:
            values: Dict mapping variables to their values

        Returns:
            The evaluated value of the monomial
        """
        result = self.coefficient
        for var, exp in self.variables.items():
            result *= values.get(var, 0) ** exp
        return result

    def divides(self, other: "Monomial") -> bool:
        """True if this power product divides the power product of ``other``."""
        return all(other.variables.get(var, 0) >= exp for var, exp in self.variables.items())

    def lcm(self, other: "Monomial") -> "Monomial":
        """Least common multiple of two power products (coefficient 1)."""
        exps = dict(self.variables)
        for var, exp in other.variables.items():
            exps[var] = max(exps.get(var, 0), exp)
        return Monomial(exps)

    def __mul__(self, other: Any) -> Union["Polynomial", "Monomial"]:
        """Multiply the monomial by another object."""
        if isinstance(other, numbers.Number):
            return Monomial(self.variables, coefficient=self.coefficient * _coerce_coefficient(other))
        elif isinstance(other, Variable):
            return self * other.as_monomial()
        elif isinstance(other, Monomial):
            new_vars = self.variables.copy()
            for var, exp in other.variables.items():
                new_vars[var] = new_vars.get(var, 0) + exp
            return Monomial(new_vars, coefficient=self.coefficient * other.coefficient)
        elif isinstance(other, Polynomial):
            return other * self
        else:
            return NotImplemented

    def __rmul__(self, other: Any) -> "Monomial":
        if isinstance(other, numbers.Number):
            return self * other
        return NotImplemented

    def __truediv__(self, other: Any) -> "Monomial":
        """Divide by a scalar, or by a monomial whose power product divides this one."""
        if isinstance(other, numbers.Number):
            return Monomial(self.variables, coefficient=self.coefficient / _coerce_coefficient(other))
        if isinstance(other, Variable):
            other = other.as_monomial()
        if not isinstance(other, Monomial):
            return NotImplemented
        if not other.divides(self):
            raise ValueError(f"{other} does not divide {self}")
        exps = {var: exp - other.variables.get(var, 0) for var, exp in self.variables.items()}
        return Monomial(exps, coefficient=self.coefficient / other.coefficient)

    def __neg__(self) -> "Monomial":
        return Monomial(self.variables, coefficient=-self.coefficient)

    def __add__(self, other: Any) -> "Polynomial":
        return self.as_polynomial() + other

    def __radd__(self, other: Any) -> "Polynomial":
        return self.as_polynomial() + other

    def __sub__(self, other: Any) -> "Polynomial":
        return self.as_polynomial() - other

    def __rsub__(self, other: Any) -> "Polynomial":
        return self.as_polynomial().__rsub__(other)

    def partial_derivative(self, var: Variable) -> "Monomial":
        """Compute partial derivative with respect to a variable.

        Args:
            var: Variable to differentiate with respect to

        Returns:
            Derivative as a new Monomial
        """
        if var not in self.variables:
            return Monomial({}, coefficient=0)

        exp = self.variables[var]
        new_vars = self.variables.copy()
        new_vars[var] = exp - 1
        return Monomial(new_vars, coefficient=self.coefficient * exp)

    def as_polynomial(self) -> "Polynomial":
        """Convert this monomial to a polynomial."""
        return Polynomial([self])


class Polynomial:
    """Representation of a multivariate polynomial."""

    def __init__(self, terms: List[Union[Monomial, Variable, int, float, complex, Fraction]]):
        """Initialize a polynomial from a list of terms."""
        processed_terms = []
        for term in terms:
            if isinstance(term, Monomial):
                processed_terms.append(term)
            elif isinstance(term, Variable):
                processed_terms.append(term.as_monomial())
            elif isinstance(term, numbers.Number):
                processed_terms.append(Monomial({}, coefficient=term))
            else:
                raise TypeError(f"Unsupported term type: {type(term)}")

        # Combine like terms immediately upon initialization
        self.terms = self._combine_like_terms(processed_terms)

    def _combine_like_terms(self, terms: List[Monomial]) -> List[Monomial]:
        """Combine terms with the same power product and drop zero terms."""
        term_dict: Dict[Tuple[Tuple[Variable, int], ...], Any] = {}
        for term in terms:
            var_key = term.key()
            if var_key in term_dict:
                term_dict[var_key] += term.coefficient
            else:
                term_dict[var_key] = term.coefficient

        combined_terms = [Monomial(dict(var_key), coefficient=coef)
                          for var_key, coef in term_dict.items() if not _is_zero(coef)]
        # Largest term first in the default order
        combined_terms.sort(key=DEFAULT_ORDER.key, reverse=True)
        return combined_terms

    def __repr__(self) -> str:
        if not self.terms:
            return "0"

        term_strs: List[str] = []
        for i, term in enumerate(self.terms):
            s = str(term)
            if i == 0:
                term_strs.append(s)
            elif s.startswith("-"):
                term_strs.append(f"- {s[1:]}")
            else:
                term_strs.append(f"+ {s}")
        return " ".join(term_strs)

    def is_zero(self) -> bool:
        return not self.terms

    def degree(self) -> int:
        """Get the maximum degree of any term in the polynomial."""
        if not self.terms:
            return 0
        return max(term.degree() for term in self.terms)

    def variables(self) -> Set[Variable]:
        """Get the set of all variables in the polynomial."""
        vars_set = set()
        for term in self.terms:
            vars_set.update(term.variables.keys())
        return vars_set

    def evaluate(self, values: Dict[Variable, complex]) -> complex:
        """Evaluate the polynomial at specific variable values.

        Args:
            values: Dict mapping variables to their values

        Returns:
            The evaluated value of the polynomial
        """
        return sum((term.evaluate(values) for term in self.terms), 0)

    def coefficient(self, monomial: Monomial) -> Union[Fraction, complex]:
        """Coefficient of the power product of ``monomial`` (zero if absent)."""
        key = monomial.key()
        for term in self.terms:
            if term.key() == key:
                return term.coefficient
        return Fraction(0)

    def leading_term(self, order: MonomialOrder = DEFAULT_ORDER) -> Monomial:
        """Largest term (with its coefficient) in the given order."""
        if not self.terms:
            raise ValueError("The zero polynomial has no leading term")
        return max(self.terms, key=order.key)

    def monic(self, order: MonomialOrder = DEFAULT_ORDER) -> "Polynomial":
        """Scale the polynomial so that its leading coefficient is one."""
        return self / self.leading_term(order).coefficient

    def without(self, monomial: Monomial) -> "Polynomial":
        """Drop the term with the power product of ``monomial``."""
        key = monomial.key()
        return Polynomial([term for term in self.terms if term.key() != key])

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (numbers.Number, Variable, Monomial, Polynomial)):
            return (self - other).is_zero()
        return NotImplemented

    __hash__ = None

    def __neg__(self) -> "Polynomial":
        return Polynomial([-term for term in self.terms])

    def __add__(self, other: Any) -> "Polynomial":
        """Add another object to the polynomial."""
        if isinstance(other, numbers.Number):
            return Polynomial(self.terms + [Monomial({}, coefficient=other)])
        elif isinstance(other, Variable):
            return Polynomial(self.terms + [other.as_monomial()])
        elif isinstance(other, Monomial):
            return Polynomial(self.terms + [other])
        elif isinstance(other, Polynomial):
            return Polynomial(self.terms + other.terms)
        else:
            return NotImplemented

    def __radd__(self, other: Any) -> "Polynomial":
        return self + other

    def __sub__(self, other: Any) -> "Polynomial":
        """Subtract another object from the polynomial."""
        if isinstance(other, Variable):
            other = other.as_monomial()
        if isinstance(other, (numbers.Number, Monomial, Polynomial)):
            return self + (-other)
        return NotImplemented

    def __rsub__(self, other: Any) -> "Polynomial":
        if isinstance(other, numbers.Number):
            return (-self) + other
        return NotImplemented

    def __mul__(self, other: Any) -> "Polynomial":
        """Multiply the polynomial by another object."""
        if isinstance(other, (numbers.Number, Variable, Monomial)):
            return Polynomial([term * other for term in self.terms])
        elif isinstance(other, Polynomial):
            result_terms = []
            for term1 in self.terms:
                for term2 in other.terms:
                    result_terms.append(term1 * term2)
            return Polynomial(result_terms)
        else:
            return NotImplemented

    def __rmul__(self, other: Any) -> "Polynomial":
        return self * other

    def __truediv__(self, other: Any) -> "Polynomial":
        """Divide every coefficient by a scalar."""
        if isinstance(other, numbers.Number):
            return Polynomial([term / other for term in self.terms])
        return NotImplemented

    def __pow__(self, exponent: int) -> "Polynomial":
        """Raise the polynomial to a power.

        Args:
            exponent: Non-negative integer exponent

        Returns:
            The polynomial raised to the given power
        """
        if not isinstance(exponent, int) or exponent < 0:
            raise ValueError("Exponent must be a non-negative integer")

        result = Polynomial([1])
        base = Polynomial(self.terms)
        while exponent > 0:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def partial_derivative(self, var: Variable) -> "Polynomial":
        """Compute partial derivative with respect to a variable."""
        return Polynomial([term.partial_derivative(var) for term in self.terms])

    def jacobian(self, vars_list: List[Variable]) -> List[List["Polynomial"]]:
        """Compute the Jacobian matrix of partial derivatives.

        Args:
            vars_list: List of variables for the Jacobian

        Returns:
            Jacobian matrix as a list of lists of polynomials
        """
        return [[self.partial_derivative(var) for var in vars_list]]

    @classmethod
    def parse(cls, text: str) -> "Polynomial":
        """Parse a polynomial from a string such as ``"x^2 + 3*x*y - 1"``.

        Requires the optional sympy dependency.
        """
        import sympy

        return cls.from_sympy(sympy.sympify(text.replace("^", "**")))

    @classmethod
    def from_sympy(cls, expr: Any) -> "Polynomial":
        """Convert a sympy expression that is polynomial in its free symbols."""
        import sympy

        expr = sympy.sympify(expr)
        gens = sorted(expr.free_symbols, key=lambda s: s.name)
        if not gens:
            return cls([_from_sympy_number(expr)])

        terms = []
        for monom, coeff in sympy.Poly(expr, *gens).terms():
            exps = {Variable(gen.name): exp for gen, exp in zip(gens, monom)}
            terms.append(Monomial(exps, coefficient=_from_sympy_number(coeff)))
        return cls(terms)

    def to_sympy(self) -> Any:
        """Convert the polynomial to a sympy expression."""
        import sympy

        result = sympy.Integer(0)
        for term in self.terms:
            coef = term.coefficient
            if isinstance(coef, Fraction):
                sym_coef = sympy.Rational(coef.numerator, coef.denominator)
            else:
                sym_coef = sympy.sympify(coef)
            factors = [sympy.Symbol(var.name) ** exp for var, exp in term.variables.items()]
            result += sym_coef * sympy.Mul(*factors)
        return result


def _from_sympy_number(value: Any) -> Union[Fraction, complex]:
    if value.is_Rational:
        return Fraction(int(value.p), int(value.q))
    if value.is_real:
        return Fraction(float(value))
    return complex(value)


def as_polynomial(p: Any) -> Polynomial:
    """Convert a variable, monomial or number to a Polynomial.

    Raises:
        TypeError: If ``p`` cannot be converted
    """
    if isinstance(p, Polynomial):
        return p
    if isinstance(p, (Monomial, Variable, numbers.Number)):
        return Polynomial([p])
    raise TypeError(f"Cannot convert {type(p)} to a polynomial")


class PolynomialSystem:
    """Representation of a system of polynomial equations."""

    def __init__(self, equations: List[Union[Polynomial, Monomial, Variable]]):
        """Initialize a polynomial system from a list of equations."""
        self.equations = []
        for eq in equations:
            if isinstance(eq, Polynomial):
                self.equations.append(eq)
            elif isinstance(eq, (Monomial, Variable, numbers.Number)):
                self.equations.append(Polynomial([eq]))
            else:
                raise TypeError(f"Unsupported equation type: {type(eq)}")

    def __repr__(self) -> str:
        return "\n".join([f"{i}: {eq}" for i, eq in enumerate(self.equations)])

    def __len__(self) -> int:
        return len(self.equations)

    def variables(self) -> Set[Variable]:
        """Get the set of all variables in the system."""
        vars_set = set()
        for eq in self.equations:
            vars_set.update(eq.variables())
        return vars_set

    def evaluate(self, values: Dict[Variable, complex]) -> List[complex]:
        """Evaluate the system at specific variable values."""
        return [eq.evaluate(values) for eq in self.equations]

    def jacobian(self, vars_list: List[Variable]) -> List[List[Polynomial]]:
        """Compute the Jacobian matrix of partial derivatives."""
        return [eq.jacobian(vars_list)[0] for eq in self.equations]

    def degrees(self) -> List[int]:
        """Get the degrees of each polynomial in the system."""
        return [eq.degree() for eq in self.equations]


def polyvar(*names: str) -> Union[Variable, Tuple[Variable, ...]]:
    """Create polynomial variables with the given names.

    Args:
        *names: Variable names

    Returns:
        A single Variable or a tuple of Variables
    """
    variables = tuple(Variable(name) for name in names)
    return variables[0] if len(variables) == 1 else variables


def make_system(*equations) -> PolynomialSystem:
    """Create a polynomial system from various types of equations.

    Raises:
        TypeError: If an equation cannot be converted to a Polynomial
    """
    processed_equations = []
    for eq in equations:
        if isinstance(eq, Polynomial):
            processed_equations.append(eq)
        else:
            try:
                processed_equations.append(Polynomial([eq]))
            except TypeError:
                raise TypeError(f"Cannot convert {type(eq)} to polynomial equation")
    return PolynomialSystem(processed_equations)
