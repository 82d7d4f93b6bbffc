"""
Tests for the Groebner basis multiplication matrices algorithm.
"""

import pytest
import numpy as np

from pyzerodim import polyvar, AlgebraicSet, GroebnerBasisMultiplicationMatricesAlgorithm
from pyzerodim.multiplication import multiplication_matrix


@pytest.fixture
def algorithm():
    return GroebnerBasisMultiplicationMatricesAlgorithm()


def test_linear_system(algorithm):
    """x = 2, y = 3 has a one-dimensional quotient ring."""
    x, y = polyvar('x', 'y')
    Ms = algorithm.multiplication_matrices(AlgebraicSet([x - 2, y - 3]))

    assert len(Ms) == 2
    assert np.allclose(Ms[0], [[2.0]])
    assert np.allclose(Ms[1], [[3.0]])


def test_two_points(algorithm):
    """Solutions (1, 1) and (2, 2) in the basis [1, y]."""
    x, y = polyvar('x', 'y')
    V = AlgebraicSet([x**2 - 3*x + 2, y - x])
    Ms = algorithm.multiplication_matrices(V)

    expected = np.array([[0.0, -2.0], [1.0, 3.0]])
    assert np.allclose(Ms[0], expected)
    assert np.allclose(Ms[1], expected)
    assert sorted(np.linalg.eigvals(Ms[0]).real) == pytest.approx([1.0, 2.0])


def test_variable_outside_basis(algorithm):
    """x does not occur in the basis [1, y] but still gets a matrix."""
    x, y = polyvar('x', 'y')
    V = AlgebraicSet([x - 2, y**2 - 1])
    assert [str(m) for m in V.monomial_basis()[1]] == ["1", "y"]

    Mx, My = algorithm.multiplication_matrices(V)
    assert np.allclose(Mx, 2 * np.eye(2))
    assert np.allclose(My, [[0.0, 1.0], [1.0, 0.0]])


def test_matrices_commute(algorithm):
    x, y = polyvar('x', 'y')
    Ms = algorithm.multiplication_matrices(AlgebraicSet([x**2 - 1, y**2 - 4]))

    assert len(Ms) == 2
    assert Ms[0].shape == (4, 4)
    assert np.allclose(Ms[0] @ Ms[1], Ms[1] @ Ms[0])
    assert sorted(np.linalg.eigvals(Ms[0]).real) == pytest.approx([-1, -1, 1, 1])
    assert sorted(np.linalg.eigvals(Ms[1]).real) == pytest.approx([-2, -2, 2, 2])


def test_column_is_normal_form(algorithm):
    x, y = polyvar('x', 'y')
    V = AlgebraicSet([x**2 + y**2 - 2, x*y - 1])
    _, basis = V.monomial_basis()
    Mx = multiplication_matrix(V, x, basis)

    # x * x = x^2 reduces to 2 - y^2
    index = [str(m) for m in basis].index("x")
    column = dict(zip((str(m) for m in basis), Mx[:, index]))
    assert column == {"1": 2.0, "y": 0.0, "x": 0.0, "y^2": -1.0}


def test_not_zero_dimensional(algorithm, capsys):
    x, y = polyvar('x', 'y')
    assert algorithm.multiplication_matrices(AlgebraicSet([x * y])) is None
    assert algorithm.multiplication_matrices(AlgebraicSet([x - 1, x - 2])) is None

    algorithm.multiplication_matrices(AlgebraicSet([x * y]), verbose=True)
    assert "not zero-dimensional" in capsys.readouterr().out


def test_no_variables(algorithm):
    assert algorithm.multiplication_matrices(AlgebraicSet([])) == []


def test_complex_coefficients(algorithm):
    x = polyvar('x')
    Ms = algorithm.multiplication_matrices(AlgebraicSet([x**2 + 1j]))

    assert Ms[0].dtype == complex
    assert np.allclose(Ms[0], [[0, -1j], [1, 0]])


def test_real_coefficients_give_real_matrices(algorithm):
    x = polyvar('x')
    Ms = algorithm.multiplication_matrices(AlgebraicSet([x**2 - 0.5]))

    assert Ms[0].dtype == float
    assert np.allclose(Ms[0], [[0, 0.5], [1, 0]])
