"""
Visualization module for PyZeroDim.

This module provides functions to inspect the eigenvalue clustering of the
reordered Schur solver and to plot the computed solutions. It requires the
optional matplotlib dependency and is not imported by ``pyzerodim``.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Tuple

from pyzerodim.polynomial import Variable
from pyzerodim.schur import SpectralClusters


def plot_eigenvalue_clusters(spectral: SpectralClusters,
                             ztol: Optional[float] = None,
                             title: Optional[str] = None,
                             figsize: Tuple[int, int] = (10, 8),
                             marker_size: int = 60) -> plt.Figure:
    """Plot the eigenvalues of the combined matrix in the complex plane.

    Args:
        spectral: Result of ``ReorderedSchurMultiplicationMatricesSolver.spectral_clusters``
        ztol: If given, shade the band ``|Im| <= ztol`` of averages kept as real
        title: Plot title (default: auto-generated)
        figsize: Figure size
        marker_size: Size of the eigenvalue markers

    Returns:
        The created matplotlib figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    n_clusters = len(spectral.clusters)
    cmap = plt.cm.rainbow
    for k, cluster in enumerate(spectral.clusters):
        color = cmap(k / max(n_clusters - 1, 1))
        values = np.asarray(spectral.values)[cluster]
        ax.scatter(values.real, values.imag, color=color, s=marker_size, alpha=0.7,
                   label=f'Cluster {k} ({len(cluster)})')
        avg = spectral.averages[k]
        ax.plot(avg.real, avg.imag, 'x', color='k', markersize=10)

    if ztol is not None:
        ax.axhspan(-ztol, ztol, color='green', alpha=0.1, label='|Im| <= ztol')

    ax.set_xlabel('Real Part')
    ax.set_ylabel('Imaginary Part')
    if title is None:
        title = f'{len(spectral.values)} Eigenvalues in {n_clusters} Clusters'
    ax.set_title(title)

    ax.grid(True, alpha=0.3)
    if n_clusters > 0:
        ax.legend()

    plt.tight_layout()
    return fig


def plot_solutions_2d(solution_set,
                      var_x: Variable,
                      var_y: Variable,
                      title: Optional[str] = None,
                      figsize: Tuple[int, int] = (10, 8),
                      marker_size: int = 100) -> plt.Figure:
    """Plot solutions in 2D for two selected variables.

    Args:
        solution_set: Set of solutions to plot
        var_x: Variable for the x-axis
        var_y: Variable for the y-axis
        title: Plot title (default: auto-generated)
        figsize: Figure size
        marker_size: Size of the solution markers

    Returns:
        The created matplotlib figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    x_coords = [np.real(sol.values[var_x]) for sol in solution_set.solutions]
    y_coords = [np.real(sol.values[var_y]) for sol in solution_set.solutions]
    residuals = [sol.residual for sol in solution_set.solutions]

    scatter = ax.scatter(x_coords, y_coords, c=residuals, cmap='viridis', s=marker_size,
                         alpha=0.7, edgecolors='k')
    if solution_set.solutions:
        cbar = plt.colorbar(scatter, ax=ax)
        cbar.set_label('Residual')

    ax.set_xlabel(var_x.name)
    ax.set_ylabel(var_y.name)
    if title is None:
        title = f'Solutions in {var_x.name}-{var_y.name} Plane'
    ax.set_title(title)

    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig
