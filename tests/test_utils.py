import numpy as np

from pyzerodim import polyvar, PolynomialSystem
from pyzerodim.utils import (
    evaluate_system_at_point,
    evaluate_jacobian_at_point,
    compute_residual,
    newton_corrector,
)


def test_evaluate_at_point():
    x, y = polyvar('x', 'y')
    system = PolynomialSystem([x**2 - y, x * y])

    values = evaluate_system_at_point(system, np.array([2.0, 3.0]), [x, y])
    assert np.allclose(values, [1.0, 6.0])

    jac = evaluate_jacobian_at_point(system, np.array([2.0, 3.0]), [x, y])
    assert jac.shape == (2, 2)
    assert np.allclose(jac, [[4.0, -1.0], [3.0, 2.0]])


def test_compute_residual():
    x, y = polyvar('x', 'y')
    system = PolynomialSystem([x - 1, y - 2])

    assert compute_residual(system, {x: 1.0, y: 2.0}) == 0.0
    assert np.isclose(compute_residual(system, {x: 4.0, y: 6.0}), 5.0)


def test_newton_corrector():
    x, y = polyvar('x', 'y')
    system = PolynomialSystem([x**2 - 2, y - x])

    point, success, iters = newton_corrector(system, np.array([1.5, 1.4]), [x, y])
    assert success
    assert iters > 0
    assert np.allclose(point, [np.sqrt(2), np.sqrt(2)])


def test_newton_corrector_overdetermined():
    """Non-square systems take least-squares steps."""
    x = polyvar('x')
    system = PolynomialSystem([x - 1, 2 * x - 2])

    point, success, _ = newton_corrector(system, np.array([3.0]), [x])
    assert success
    assert np.allclose(point, [1.0])
