"""
Reordered Schur factorization solver for PyZeroDim.

Solves a zero-dimensional system from its multiplication matrices following

    Corless, R. M.; Gianni, P. M. & Trager, B. M. A reordered Schur
    factorization method for zero-dimensional polynomial systems with
    multiple roots. Proceedings of the 1997 international symposium on
    Symbolic and algebraic computation, 1997, 133-140.

A random convex combination of the (commuting) multiplication matrices has
distinct eigenvalues exactly when the solutions are distinct. Its Schur
vectors are grouped by clustering the eigenvalues, and each coordinate of a
solution is the average Rayleigh quotient of the corresponding
multiplication matrix over the Schur vectors of its cluster.

The clustering is greedy: eigenvalues are processed in the order returned by
the Schur decomposition and each joins the cluster with the nearest running
average among those within tolerance. When tolerance balls overlap, the
result can depend on that order.
"""

from collections import namedtuple
from typing import List, Optional, Sequence, Tuple

import numpy as np
import scipy.linalg

from pyzerodim.multiplication import AbstractMultiplicationMatricesSolver

# Eigenvalues of a root of multiplicity m are perturbed by about eps^(1/m).
# Examples 5.2 and 5.3 of the paper only cluster correctly with the factor 16.
DEFAULT_TOL = np.sqrt(np.finfo(float).eps) * 16

SpectralClusters = namedtuple("SpectralClusters", ["Z", "values", "clusters", "averages"])
SpectralClusters.__doc__ = """Intermediate result of the solver.

Z: unitary matrix of Schur vectors of the combined matrix
values: eigenvalues, in the order of the columns of Z
clusters: lists of indices into values
averages: running average eigenvalue of each cluster
"""


def random_weights(n: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Draw ``n`` uniform weights in [0, 1) normalized to sum to one."""
    draws = np.random.random(n) if rng is None else rng.random(n)
    return draws / draws.sum()


def combine_matrices(Ms: Sequence[np.ndarray], weights: Sequence[float]) -> np.ndarray:
    """Weighted sum of the multiplication matrices.

    Raises:
        ValueError: If the number of weights differs from the number of
            matrices, or the matrices are not square of a common size
    """
    Ms = [np.asarray(M) for M in Ms]
    weights = np.asarray(weights)
    if len(Ms) != len(weights):
        raise ValueError(f"Got {len(weights)} weights for {len(Ms)} multiplication matrices")
    if not Ms:
        return np.zeros((0, 0))

    shape = Ms[0].shape
    for i, M in enumerate(Ms):
        if M.ndim != 2 or M.shape[0] != M.shape[1]:
            raise ValueError(f"Multiplication matrix {i} is not square (shape {M.shape})")
        if M.shape != shape:
            raise ValueError(f"Multiplication matrix {i} has shape {M.shape}, expected {shape}")

    return sum(w * M for w, M in zip(weights, Ms))


def schur_decomposition(M: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Complex Schur decomposition ``M = Z T Z^H``.

    Returns:
        Tuple of (Z, values) where ``values`` is the diagonal of ``T``, so
        ``values[j]`` is the eigenvalue belonging to column ``j`` of ``Z``.
    """
    M = np.asarray(M)
    if M.shape[0] == 0:
        return np.zeros((0, 0), dtype=complex), np.zeros(0, dtype=complex)
    T, Z = scipy.linalg.schur(M, output="complex")
    return Z, np.diag(T).copy()


def cluster_eigenvalues(values: Sequence[complex],
                        atol: float,
                        rtol: float) -> Tuple[List[List[int]], List[complex]]:
    """Group numerically equal eigenvalues.

    ``values[i]`` may join cluster ``j`` when
    ``|values[i] - avg_j| <= atol + rtol * |avg_j|``; among such clusters the
    one with the nearest average wins (the first one on exact ties). A value
    matching no cluster starts a new one.

    Returns:
        Tuple of (clusters, averages) in order of discovery.
    """
    clusters: List[List[int]] = []
    averages: List[complex] = []
    for i, value in enumerate(values):
        value = complex(value)
        k = None
        best = 0.0
        for j, avg in enumerate(averages):
            dist = abs(value - avg)
            if dist <= atol + rtol * abs(avg) and (k is None or dist < best):
                k = j
                best = dist
        if k is None:
            clusters.append([i])
            averages.append(value)
        else:
            nk = len(clusters[k])
            averages[k] = (averages[k] * nk + value) / (nk + 1)
            clusters[k].append(i)
    return clusters, averages


def real_clusters(clusters: List[List[int]],
                  averages: List[complex],
                  ztol: float) -> List[List[int]]:
    """Drop the clusters whose average has an imaginary part larger than ``ztol``."""
    return [cluster for cluster, avg in zip(clusters, averages) if abs(avg.imag) <= ztol]


def extract_solutions(Ms: Sequence[np.ndarray],
                      Z: np.ndarray,
                      clusters: List[List[int]]) -> List[np.ndarray]:
    """Average Rayleigh quotients ``q^H M_i q`` over the Schur vectors of each cluster."""
    n = len(Ms)
    solutions = []
    for cluster in clusters:
        nk = len(cluster)
        vals = np.zeros(n, dtype=complex)
        for j in cluster:
            q = Z[:, j]
            for i, M in enumerate(Ms):
                vals[i] += np.vdot(q, M @ q) / nk
        solutions.append(vals)
    return solutions


class ReorderedSchurMultiplicationMatricesSolver(AbstractMultiplicationMatricesSolver):
    """Multiplication matrices solver of Corless, Gianni and Trager.

    Args:
        tol: Default for the three tolerances below (default: DEFAULT_TOL)
        atol: Absolute tolerance for clustering eigenvalues
        rtol: Relative tolerance for clustering eigenvalues
        ztol: Largest imaginary part of a cluster average considered real.
            Use ``float('inf')`` to keep complex solutions.
    """

    def __init__(self,
                 tol: Optional[float] = None,
                 atol: Optional[float] = None,
                 rtol: Optional[float] = None,
                 ztol: Optional[float] = None):
        if tol is None:
            tol = DEFAULT_TOL
        self.atol = tol if atol is None else atol
        self.rtol = tol if rtol is None else rtol
        self.ztol = tol if ztol is None else ztol

    def __repr__(self) -> str:
        return (f"ReorderedSchurMultiplicationMatricesSolver(atol={self.atol:.3g}, "
                f"rtol={self.rtol:.3g}, ztol={self.ztol:.3g})")

    def solve_multiplication_matrices(self,
                                      Ms: Sequence[np.ndarray],
                                      verbose: bool = False,
                                      rng: Optional[np.random.Generator] = None) -> List[np.ndarray]:
        """Solve with a random convex combination of the matrices.

        Args:
            Ms: Multiplication matrices, one per variable
            verbose: Whether to print progress information
            rng: Optional numpy Generator used to draw the weights

        Returns:
            List of solutions, one vector of length ``len(Ms)`` per cluster
        """
        weights = random_weights(len(Ms), rng)
        return self.solve_with_weights(Ms, weights, verbose=verbose)

    def spectral_clusters(self, Ms: Sequence[np.ndarray], weights: Sequence[float]) -> SpectralClusters:
        """Combine, decompose and cluster, without filtering or extraction."""
        M = combine_matrices(Ms, weights)
        Z, values = schur_decomposition(M)
        clusters, averages = cluster_eigenvalues(values, self.atol, self.rtol)
        return SpectralClusters(Z, values, clusters, averages)

    def solve_with_weights(self,
                           Ms: Sequence[np.ndarray],
                           weights: Sequence[float],
                           verbose: bool = False) -> List[np.ndarray]:
        """Deterministic part of the solver, for given combination weights.

        Without matrices there are no variables, and the constant basis has
        the single empty point.
        """
        Ms = [np.asarray(M) for M in Ms]
        if not Ms:
            if len(weights) != 0:
                raise ValueError(f"Got {len(weights)} weights for 0 multiplication matrices")
            return [np.zeros(0)]
        spectral = self.spectral_clusters(Ms, weights)
        kept = real_clusters(spectral.clusters, spectral.averages, self.ztol)

        if verbose:
            print(f"{len(spectral.values)} eigenvalues in {len(spectral.clusters)} clusters, "
                  f"{len(spectral.clusters) - len(kept)} dropped as non-real")

        solutions = extract_solutions(Ms, spectral.Z, kept)
        if all(np.isrealobj(M) for M in Ms) and np.isfinite(self.ztol):
            solutions = [vals.real for vals in solutions]
        return solutions
