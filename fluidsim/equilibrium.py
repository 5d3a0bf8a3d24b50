"""
Equilibrium Distribution Functions

Second-order Maxwell-Boltzmann equilibrium for the D2Q9 lattice.

With c_s^2 = 1/3 the usual form

    f_i^eq = w_i * rho * [1 + (e_i · u)/c_s^2 + (e_i · u)^2/(2*c_s^4) - u^2/(2*c_s^2)]

reduces to

    f_i^eq = w_i * rho * [1 + 3 (e_i · u) + 4.5 (e_i · u)^2 - 1.5 u^2]

which is the form evaluated here.
"""

import numpy as np
from .lattice import EX, EY, W, Q


def compute_equilibrium(rho, ux, uy):
    """
    Compute equilibrium distribution for all lattice sites.

    Parameters
    ----------
    rho : ndarray
        Density field, shape (ny, nx)
    ux : ndarray
        X-velocity field, shape (ny, nx)
    uy : ndarray
        Y-velocity field (positive downward), shape (ny, nx)

    Returns
    -------
    f_eq : ndarray
        Equilibrium distribution, shape (Q, ny, nx)
    """
    ny, nx = rho.shape
    f_eq = np.zeros((Q, ny, nx), dtype=np.float64)

    u_sq = ux * ux + uy * uy

    for i in range(Q):
        eu = EX[i] * ux + EY[i] * uy
        f_eq[i] = W[i] * rho * (1.0 + 3.0 * eu + 4.5 * eu * eu - 1.5 * u_sq)

    return f_eq


def equilibrium_single_site(rho, ux=0.0, uy=0.0):
    """
    Compute equilibrium distribution for a single lattice site.

    Used by the point perturbations.

    Parameters
    ----------
    rho : float
        Density at the site
    ux : float
        X-velocity at the site
    uy : float
        Y-velocity at the site (positive downward)

    Returns
    -------
    f_eq : ndarray
        Equilibrium distribution, shape (Q,)
    """
    eu = EX * ux + EY * uy
    u_sq = ux * ux + uy * uy
    return W * rho * (1.0 + 3.0 * eu + 4.5 * eu * eu - 1.5 * u_sq)
