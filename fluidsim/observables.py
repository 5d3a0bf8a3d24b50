"""
Macroscopic Observable Extraction

Moments of the distribution and the diagnostic fields derived from them.

    rho     = sum_i f_i
    rho * u = sum_i f_i * e_i

Rows grow downward, so uy is positive for downward flow.
"""

import numpy as np
from .lattice import EX, EY


def compute_density(f):
    """
    Zeroth moment of the distribution.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx)

    Returns
    -------
    rho : ndarray
        Density field, shape (ny, nx)
    """
    return f.sum(axis=0)


def compute_velocity(f, rho=None):
    """
    First moment of the distribution divided by the density.

    Cells holding no mass (emptied walls) get zero velocity.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx)
    rho : ndarray, optional
        Density field, shape (ny, nx). Summed from `f` if not given.

    Returns
    -------
    ux, uy : ndarray
        Velocity components, shape (ny, nx)
    """
    if rho is None:
        rho = compute_density(f)

    mom_x = np.tensordot(EX.astype(np.float64), f, axes=1)
    mom_y = np.tensordot(EY.astype(np.float64), f, axes=1)

    has_mass = rho > 0.0
    safe_rho = np.where(has_mass, rho, 1.0)

    return np.where(has_mass, mom_x / safe_rho, 0.0), np.where(has_mass, mom_y / safe_rho, 0.0)


def compute_curl(ux, uy):
    """
    Compute the discrete curl (vorticity) by central differences.

    curl = (uy[r, c+1] - uy[r, c-1]) - (ux[r+1, c] - ux[r-1, c])

    Border cells have no two-sided neighbourhood and are 0.0.

    Parameters
    ----------
    ux : ndarray
        X-velocity field, shape (ny, nx)
    uy : ndarray
        Y-velocity field, shape (ny, nx)

    Returns
    -------
    curl : ndarray
        Curl field, shape (ny, nx)
    """
    curl = np.zeros_like(ux, dtype=np.float64)
    curl[1:-1, 1:-1] = (
        (uy[1:-1, 2:] - uy[1:-1, :-2])
        - (ux[2:, 1:-1] - ux[:-2, 1:-1])
    )
    return curl


def compute_pressure(rho):
    """
    Pressure readout.

    Under the weakly-compressible approximation the density itself serves
    as the pressure proxy, so this is a copy of the density field.
    """
    return np.array(rho, dtype=np.float64, copy=True)


def compute_velocity_magnitude(ux, uy):
    """
    Compute velocity magnitude field.

    |u| = sqrt(ux^2 + uy^2)
    """
    return np.sqrt(ux * ux + uy * uy)


def compute_total_mass(f):
    """Total mass held by the lattice."""
    return float(np.sum(f))


def compute_total_momentum(f):
    """Total momentum (x, y) held by the lattice."""
    mom_x = np.sum(f * EX[:, None, None])
    mom_y = np.sum(f * EY[:, None, None])
    return float(mom_x), float(mom_y)


def compute_kinetic_energy(rho, ux, uy):
    """Total kinetic energy, 0.5 * sum(rho * |u|^2)."""
    return float(0.5 * np.sum(rho * (ux * ux + uy * uy)))


def compute_enstrophy(curl):
    """Total enstrophy, 0.5 * sum(curl^2)."""
    return float(0.5 * np.sum(curl * curl))
