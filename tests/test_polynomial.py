import pytest
import numpy as np
from fractions import Fraction

from pyzerodim import polyvar, make_system, PolynomialSystem, Polynomial, Monomial, Variable, lex, grlex, grevlex
from pyzerodim.polynomial import as_polynomial


def test_create_simple_polynomial_system():
    """Tests the creation of a basic PolynomialSystem using native API."""
    x, y = polyvar('x', 'y')

    system = PolynomialSystem([x**2 - y, x - 1])

    assert isinstance(system, PolynomialSystem)
    assert len(system.equations) == 2

    system_vars = system.variables()
    assert len(system_vars) == 2
    assert all(isinstance(var, Variable) for var in system_vars)


def test_evaluate_polynomial_system():
    """Tests the evaluation of a PolynomialSystem at a given point."""
    x, y = polyvar('x', 'y')

    system = PolynomialSystem([x**2 - y, x - 1])
    values = system.evaluate({x: 2+0j, y: 3+0j})

    assert isinstance(values, list)
    assert len(values) == 2
    # x^2 - y at (2,3) = 4 - 3 = 1
    assert np.isclose(values[0], 1.0 + 0j)
    # x - 1 at (2,3) = 2 - 1 = 1
    assert np.isclose(values[1], 1.0 + 0j)


def test_coefficients_are_exact():
    x = polyvar('x')

    p = 0.5 * x + 3
    coefs = {str(term): term.coefficient for term in p.terms}
    assert coefs == {"1/2*x": Fraction(1, 2), "3": Fraction(3)}
    assert (x / 3).coefficient == Fraction(1, 3)


def test_complex_coefficients_are_kept():
    x = polyvar('x')

    p = x**2 + 2j
    assert p.coefficient(Monomial({})) == 2j
    # Complex values with zero imaginary part are stored exactly
    q = x + complex(2, 0)
    assert q.coefficient(Monomial({})) == Fraction(2)


def test_arithmetic_identities():
    x, y = polyvar('x', 'y')

    assert (x + 1)**2 == x**2 + 2*x + 1
    assert (x - y) * (x + y) == x**2 - y**2
    assert (3*x**2 + 6*y) / 3 == x**2 + 2*y
    assert x - x == 0
    assert (x**2 - x**2).is_zero()
    assert 1 - x == -(x - 1)


def test_repr_orders_terms():
    x, y = polyvar('x', 'y')

    assert str(x**2 - 2*y + 1) == "x^2 - 2*y + 1"
    assert str(Polynomial([])) == "0"


def test_unsupported_terms_are_rejected():
    with pytest.raises(TypeError):
        Polynomial(["x"])

    x = polyvar('x')
    with pytest.raises(ValueError):
        Monomial({x: -1})
    with pytest.raises(ValueError):
        (x + 1) ** -2


def test_monomial_division_and_lcm():
    x, y = polyvar('x', 'y')

    a = Monomial({x: 3, y: 1}, coefficient=6)
    b = Monomial({x: 1, y: 1}, coefficient=2)
    quotient = a / b
    assert quotient.variables == {x: 2}
    assert quotient.coefficient == 3

    assert b.divides(a)
    assert not a.divides(b)
    with pytest.raises(ValueError):
        b / a

    common = Monomial({x: 2}).lcm(Monomial({x: 1, y: 3}))
    assert common.variables == {x: 2, y: 3}


class TestMonomialOrders:
    """Comparisons of power products in the supported orders."""

    def test_lex(self):
        x, y = polyvar('x', 'y')
        assert lex(Monomial({x: 2}), Monomial({x: 1, y: 5})) == 1
        assert lex(Monomial({y: 3}), Monomial({x: 1})) == -1

    def test_grlex(self):
        x, y, z = polyvar('x', 'y', 'z')
        assert grlex(Monomial({x: 1, y: 2}), Monomial({x: 2})) == 1
        assert grlex(Monomial({x: 2, z: 1}), Monomial({x: 1, y: 2})) == 1
        assert grlex(Monomial({x: 1}), Monomial({x: 1})) == 0

    def test_grevlex(self):
        x, y, z = polyvar('x', 'y', 'z')
        assert grevlex(Monomial({x: 2, z: 1}), Monomial({x: 1, y: 2})) == -1
        assert grevlex(Monomial({x: 1, y: 2}), Monomial({x: 2})) == 1

    def test_leading_term(self):
        x, y = polyvar('x', 'y')
        p = x**2 + x*y**2 - 3*y
        assert p.leading_term(grlex).variables == {x: 1, y: 2}
        assert p.leading_term(lex).variables == {x: 2}
        with pytest.raises(ValueError):
            Polynomial([]).leading_term()

    def test_monic(self):
        x, y = polyvar('x', 'y')
        p = 4*x**2 + 2*y
        assert p.monic() == x**2 + y / 2


def test_jacobian():
    x, y = polyvar('x', 'y')

    system = PolynomialSystem([x**2 * y, x + y])
    jac = system.jacobian([x, y])
    assert jac[0][0] == 2*x*y
    assert jac[0][1] == x**2
    assert jac[1][0] == 1
    assert jac[1][1] == 1


def test_parse_polynomial_simple():
    pytest.importorskip("sympy")

    p = Polynomial.parse("x^2 + 3*x*y - 1")
    x, y = polyvar('x', 'y')
    assert p == x**2 + 3*x*y - 1

    val = p.evaluate({x: 2.0 + 0j, y: 1.0 + 0j})
    # 2^2 + 3*2*1 - 1 = 4 + 6 - 1 = 9
    assert np.isclose(val, 9.0 + 0j)


def test_sympy_conversion():
    sympy = pytest.importorskip("sympy")

    x, y = polyvar('x', 'y')
    p = x**2 * y - y / 3 + 2
    expr = p.to_sympy()
    sx, sy = sympy.symbols('x y')
    assert sympy.expand(expr - (sx**2 * sy - sy / 3 + 2)) == 0
    assert Polynomial.from_sympy(expr) == p
    assert Polynomial.from_sympy(sympy.Integer(5)) == 5


def test_make_system():
    x, y = polyvar('x', 'y')

    system = make_system(x**2 - 1, y, 3 * x)
    assert len(system) == 3
    assert system.degrees() == [2, 1, 1]

    with pytest.raises(TypeError):
        make_system("x")


def test_as_polynomial():
    x, y = polyvar('x', 'y')

    p = x**2 - 1
    assert as_polynomial(p) is p
    for value in (x, 2*x*y, 3, Fraction(1, 2)):
        converted = as_polynomial(value)
        assert isinstance(converted, Polynomial)
        assert converted == value
    with pytest.raises(TypeError):
        as_polynomial("x")
