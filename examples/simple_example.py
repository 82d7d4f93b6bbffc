"""
Simple example demonstrating the basic usage of PyZeroDim.

This example solves a system of two equations:
- x^2 + y^2 = 1 (a circle)
- x^2 = y (a parabola)

The quotient ring has dimension 4: two of the intersection points are real
and two are complex. The eigenvalues of the combined multiplication matrix
are plotted next to the real solutions.
"""

import sys
import os
import time
import numpy as np
import matplotlib.pyplot as plt

# Add the parent directory to the path so we can import pyzerodim
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pyzerodim import (
    polyvar,
    PolynomialSystem,
    AlgebraicSet,
    GroebnerBasisMultiplicationMatricesAlgorithm,
    ReorderedSchurMultiplicationMatricesSolver,
    solve,
)
from pyzerodim.schur import random_weights
from pyzerodim.visualization import plot_eigenvalue_clusters


def main():
    """Run the simple example."""
    print("PyZeroDim Simple Example")
    print("========================")
    print("Defining variables and equations...")
    x, y = polyvar('x', 'y')

    f1 = x**2 + y**2 - 1      # circle: x^2 + y^2 = 1
    f2 = x**2 - y             # parabola: x^2 = y
    system = PolynomialSystem([f1, f2])

    print(f"System to solve:\n{system}\n")

    V = AlgebraicSet.from_system(system)
    print(f"Groebner basis: {V.groebner_basis()}")
    print(f"Monomial basis: {V.monomial_basis()[1]}\n")

    print("Solving the system...")
    start_time = time.time()
    solutions = solve(system, refine=True, verbose=True)
    solve_time = time.time() - start_time

    print(f"\nSolve completed in {solve_time:.3f} seconds")
    print(solutions)

    print("\nCreating visualization...")
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

    t = np.linspace(0, 2*np.pi, 100)
    ax1.plot(np.cos(t), np.sin(t), 'b-', linewidth=2, label='$x^2 + y^2 = 1$')
    px = np.linspace(-1.5, 1.5, 100)
    ax1.plot(px, px**2, 'r-', linewidth=2, label='$x^2 = y$')

    solution_x = [sol.values[x] for sol in solutions]
    solution_y = [sol.values[y] for sol in solutions]
    ax1.scatter(solution_x, solution_y, color='green', s=100, zorder=5, label='Solutions')

    ax1.set_xlabel('x')
    ax1.set_ylabel('y')
    ax1.set_title('Circle and Parabola Intersection')
    ax1.axis('equal')
    ax1.grid(True, alpha=0.3)
    ax1.legend()

    # Eigenvalues of the combined multiplication matrix
    Ms = GroebnerBasisMultiplicationMatricesAlgorithm().multiplication_matrices(V)
    solver = ReorderedSchurMultiplicationMatricesSolver()
    spectral = solver.spectral_clusters(Ms, random_weights(len(Ms)))
    eig_fig = plot_eigenvalue_clusters(spectral, ztol=solver.ztol)

    fig.tight_layout()
    fig.savefig('circle_parabola_intersection.png')
    eig_fig.savefig('circle_parabola_eigenvalues.png')
    print("Visualizations saved as 'circle_parabola_intersection.png' "
          "and 'circle_parabola_eigenvalues.png'")

    plt.show()

    return solutions


if __name__ == "__main__":
    main()
