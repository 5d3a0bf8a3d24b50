"""
Collision Operators

BGK collision for the interactive lattice.

The collision step drives the distribution toward the local equilibrium
at the relaxation frequency omega:

    f_out = f + omega * (f_eq - f)

The kinematic viscosity follows from omega as

    nu = c_s^2 * (1/omega - 0.5) * dt

Stability requires 0 < omega < 2. The operator itself never checks this:
omega is tuned live and out-of-range values are the caller's choice.

Before relaxing, every fluid cell is cleaned up: negative components are
clamped to zero, and a cell whose density falls to DENSITY_FLOOR or below
is reset to the equilibrium at rest with density DENSITY_FLOOR. Wall cells
are skipped and report zero density and velocity. Fixed-velocity cells
keep the velocity imposed on them.
"""

import warnings

import numpy as np
from numba import njit
from .lattice import EX, EY, W, CS2, DENSITY_FLOOR, OMEGA_STABLE_MAX
from .equilibrium import compute_equilibrium
from .observables import compute_density, compute_velocity


def omega_from_viscosity(nu, dt=1.0, cs2=CS2):
    """
    Compute relaxation frequency from kinematic viscosity.

    omega = 1 / (nu / (c_s^2 * dt) + 0.5)

    Parameters
    ----------
    nu : float
        Kinematic viscosity
    dt : float
        Time step (default 1.0 in lattice units)
    cs2 : float
        Sound speed squared (default 1/3)

    Returns
    -------
    omega : float
        Relaxation frequency
    """
    return 1.0 / (nu / (cs2 * dt) + 0.5)


def viscosity_from_omega(omega, dt=1.0, cs2=CS2):
    """
    Compute kinematic viscosity from relaxation frequency.

    nu = c_s^2 * (1/omega - 0.5) * dt

    Parameters
    ----------
    omega : float
        Relaxation frequency (must be > 0)
    dt : float
        Time step (default 1.0 in lattice units)
    cs2 : float
        Sound speed squared (default 1/3)

    Returns
    -------
    nu : float
        Kinematic viscosity (negative for omega >= 2)
    """
    if omega <= 0.0:
        raise ValueError(f"omega must be > 0, got {omega}")
    return cs2 * (1.0 / omega - 0.5) * dt


def check_omega(omega, name="omega"):
    """
    Check whether a relaxation frequency is in the stable range (0, 2).

    Out-of-range values are reported with a RuntimeWarning and are
    otherwise left alone.

    Returns
    -------
    stable : bool
        True if 0 < omega < 2
    """
    if 0.0 < omega < OMEGA_STABLE_MAX:
        return True

    warnings.warn(
        f"{name} = {omega} is outside the stable range (0, {OMEGA_STABLE_MAX}); "
        f"the flow fields may diverge.",
        RuntimeWarning,
        stacklevel=2,
    )
    return False


def bgk_collide(f, rho, ux, uy, wall_mask, fixed_mask, omega):
    """
    BGK collision with positivity clamp and density floor.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx). Modified in place.
    rho : ndarray
        Density field, shape (ny, nx). Overwritten.
    ux, uy : ndarray
        Velocity fields, shape (ny, nx). Overwritten except at
        fixed-velocity cells.
    wall_mask : ndarray
        Boolean mask for wall nodes, shape (ny, nx)
    fixed_mask : ndarray
        Boolean mask for fixed-velocity nodes, shape (ny, nx)
    omega : float
        Relaxation frequency

    Returns
    -------
    f : ndarray
        The same array, relaxed
    """
    fluid = ~wall_mask

    f_clamped = np.where(fluid, np.maximum(f, 0.0), f)
    density = compute_density(f_clamped)

    vacuum = fluid & (density <= DENSITY_FLOOR)
    f_clamped[:, vacuum] = (W * DENSITY_FLOOR)[:, None]
    density[vacuum] = DENSITY_FLOOR

    ux_moment, uy_moment = compute_velocity(f_clamped, density)

    moving = fluid & ~fixed_mask
    ux[moving] = ux_moment[moving]
    uy[moving] = uy_moment[moving]
    ux[wall_mask] = 0.0
    uy[wall_mask] = 0.0
    density[wall_mask] = 0.0
    rho[...] = density

    f_eq = compute_equilibrium(density, ux, uy)
    f[...] = np.where(fluid, f_clamped + omega * (f_eq - f_clamped), f_clamped)

    return f


@njit(cache=True)
def bgk_collide_numba(f, rho, ux, uy, wall_mask, fixed_mask, omega, ex, ey, w, floor):
    """
    Numba-accelerated BGK collision, cell by cell.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx). Modified in place.
    rho, ux, uy : ndarray
        Macroscopic fields, shape (ny, nx). Overwritten as in `bgk_collide`.
    wall_mask, fixed_mask : ndarray
        Boolean cell flags, shape (ny, nx)
    omega : float
        Relaxation frequency
    ex, ey : ndarray
        Lattice velocity components
    w : ndarray
        Lattice weights
    floor : float
        Density floor
    """
    q, ny, nx = f.shape

    for j in range(ny):
        for i in range(nx):
            if wall_mask[j, i]:
                rho[j, i] = 0.0
                ux[j, i] = 0.0
                uy[j, i] = 0.0
                continue

            density = 0.0
            for k in range(q):
                if f[k, j, i] < 0.0:
                    f[k, j, i] = 0.0
                density += f[k, j, i]

            if density <= floor:
                for k in range(q):
                    f[k, j, i] = w[k] * floor
                density = floor

            if not fixed_mask[j, i]:
                mom_x = 0.0
                mom_y = 0.0
                for k in range(q):
                    mom_x += ex[k] * f[k, j, i]
                    mom_y += ey[k] * f[k, j, i]
                ux[j, i] = mom_x / density
                uy[j, i] = mom_y / density

            rho[j, i] = density

            ux_ij = ux[j, i]
            uy_ij = uy[j, i]
            u_sq = ux_ij * ux_ij + uy_ij * uy_ij

            for k in range(q):
                eu = ex[k] * ux_ij + ey[k] * uy_ij
                f_eq = density * w[k] * (1.0 + 3.0 * eu + 4.5 * eu * eu - 1.5 * u_sq)
                f[k, j, i] += omega * (f_eq - f[k, j, i])


def bgk_collide_fast(f, rho, ux, uy, wall_mask, fixed_mask, omega):
    """
    Fast BGK collision using Numba.

    Same contract as `bgk_collide`.
    """
    ex = EX.astype(np.float64)
    ey = EY.astype(np.float64)
    bgk_collide_numba(f, rho, ux, uy, wall_mask, fixed_mask, float(omega),
                      ex, ey, W.copy(), DENSITY_FLOOR)
    return f
