"""
Field Visualization

Static plots of pressure, curl, and speed fields, with walls drawn on top.
"""

import matplotlib.pyplot as plt
import numpy as np


def plot_field(field, title, cmap="viridis", wall_mask=None, ax=None,
               vmin=None, vmax=None):
    """
    Plot a scalar field in lattice orientation (row 0 at the top).

    Parameters
    ----------
    field : ndarray
        Scalar field, shape (ny, nx)
    title : str
        Axes title
    cmap : str
        Matplotlib colormap name
    wall_mask : ndarray, optional
        Boolean mask of wall cells, drawn in white
    ax : matplotlib.axes.Axes, optional
        Target axes; a new figure is created if None
    vmin, vmax : float, optional
        Color limits

    Returns
    -------
    ax : matplotlib.axes.Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8 * field.shape[0] / max(field.shape[1], 1)))

    image = ax.imshow(field, origin="upper", cmap=cmap, vmin=vmin, vmax=vmax,
                      interpolation="nearest")
    plt.colorbar(image, ax=ax, shrink=0.8)

    if wall_mask is not None and np.any(wall_mask):
        overlay = np.ma.masked_where(~wall_mask, np.ones_like(field))
        ax.imshow(overlay, origin="upper", cmap="gray", vmin=0.0, vmax=1.0,
                  interpolation="nearest")

    ax.set_title(title)
    ax.set_xlabel("x (columns)")
    ax.set_ylabel("y (rows)")
    return ax


def plot_pressure(rho, wall_mask=None, ax=None, title="Pressure"):
    """Plot density as pressure."""
    return plot_field(rho, title, cmap="coolwarm", wall_mask=wall_mask, ax=ax)


def plot_curl(curl, wall_mask=None, ax=None, title="Curl"):
    """Plot curl with a symmetric diverging colormap."""
    limit = float(np.max(np.abs(curl))) or 1.0
    return plot_field(curl, title, cmap="RdBu_r", wall_mask=wall_mask, ax=ax,
                      vmin=-limit, vmax=limit)


def plot_speed(speed, wall_mask=None, ax=None, title="Speed"):
    """Plot velocity magnitude."""
    return plot_field(speed, title, cmap="magma", wall_mask=wall_mask, ax=ax, vmin=0.0)


def save_snapshot(sim, path, title=None):
    """
    Save pressure, curl and speed of a simulation side by side.

    Parameters
    ----------
    sim : FluidSim
        Simulation to read from
    path : str
        Output image path
    title : str, optional
        Figure title
    """
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    plot_pressure(sim.get_pressure(), sim.wall, ax=axes[0])
    plot_curl(sim.get_vorticity(), sim.wall, ax=axes[1])
    plot_speed(sim.get_velocity_magnitude(), sim.wall, ax=axes[2])

    if title:
        fig.suptitle(title)

    fig.tight_layout()
    fig.savefig(path, dpi=100)
    plt.close(fig)
