"""
Boundary Condition Handlers

Implements the boundary conditions of the bounded lattice:
- Bounce-back (no-slip walls on interior cells)
- Equilibrium edge reset (open boundary on the outermost rows/columns)

Also builds the cell sets used by region perturbations (disk brushes,
wall segments).
"""

import math

import numpy as np
from numba import njit
from .lattice import EX, EY, W, Q, OPPOSITE


def interior_mask(mask):
    """
    Drop the outermost rows and columns from a boolean mask.

    Parameters
    ----------
    mask : ndarray
        Boolean mask, shape (ny, nx)

    Returns
    -------
    inner : ndarray
        Copy of `mask` with every border cell set to False
    """
    inner = np.zeros_like(mask, dtype=bool)
    inner[1:-1, 1:-1] = mask[1:-1, 1:-1]
    return inner


def apply_bounce_back(f, wall_mask):
    """
    Apply full bounce-back at interior wall cells (no-slip).

    Every distribution that streamed into a wall cell is added to the
    opposite direction of the fluid cell it came from:

        f_{i*}(x - e_i) += f_i(x_wall)

    where i* is the opposite direction of i. All contributions are taken
    from the post-streaming values, then the wall cells are emptied.

    Parameters
    ----------
    f : ndarray
        Post-streaming distribution functions, shape (Q, ny, nx)
    wall_mask : ndarray
        Boolean mask for wall nodes, shape (ny, nx)

    Returns
    -------
    f : ndarray
        Distribution with bounce-back applied
    """
    f_new = f.copy()
    q, ny, nx = f.shape
    wall = interior_mask(wall_mask)

    for i in range(1, Q):
        incoming = np.where(wall, f[i], 0.0)[1:-1, 1:-1]
        rows = slice(1 - EY[i], ny - 1 - EY[i])
        cols = slice(1 - EX[i], nx - 1 - EX[i])
        f_new[OPPOSITE[i], rows, cols] += incoming

    f_new[:, wall] = 0.0

    return f_new


@njit(cache=True)
def apply_bounce_back_numba(f, f_out, wall_mask, ex, ey, opposite):
    """
    Numba-accelerated bounce-back.

    Parameters
    ----------
    f : ndarray
        Input distribution, shape (Q, ny, nx)
    f_out : ndarray
        Output distribution, shape (Q, ny, nx), holding a copy of `f`
    wall_mask : ndarray
        Boolean wall mask, shape (ny, nx)
    ex, ey : ndarray
        Lattice velocity components
    opposite : ndarray
        Opposite direction indices
    """
    q, ny, nx = f.shape

    for j in range(1, ny - 1):
        for i in range(1, nx - 1):
            if wall_mask[j, i]:
                for k in range(1, q):
                    f_out[opposite[k], j - ey[k], i - ex[k]] += f[k, j, i]

    for j in range(1, ny - 1):
        for i in range(1, nx - 1):
            if wall_mask[j, i]:
                for k in range(q):
                    f_out[k, j, i] = 0.0


def apply_bounce_back_fast(f, wall_mask):
    """
    Fast bounce-back using Numba.

    Parameters
    ----------
    f : ndarray
        Post-streaming distribution functions, shape (Q, ny, nx)
    wall_mask : ndarray
        Boolean mask for wall nodes, shape (ny, nx)

    Returns
    -------
    f_out : ndarray
        Distribution with bounce-back applied
    """
    f_out = f.copy()
    apply_bounce_back_numba(f, f_out, wall_mask, EX, EY, OPPOSITE)
    return f_out


def apply_edge_equilibrium(f, rho):
    """
    Reset every border cell to the rest equilibrium (open boundary).

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx). Modified in place.
    rho : float
        Ambient density the border is pinned to

    Returns
    -------
    f : ndarray
        The same array
    """
    f_eq = (rho * W)[:, None]

    f[:, 0, :] = f_eq
    f[:, -1, :] = f_eq
    f[:, :, 0] = f_eq
    f[:, :, -1] = f_eq

    return f


def disk_cells(r, c, radius):
    """
    Yield the (row, col) cells of a brush of the given radius.

    Cells may fall outside the lattice; callers rely on the point
    operations ignoring them.
    """
    for i in range(-radius, radius + 1):
        for j in range(-radius, radius + 1):
            if i * i + j * j <= radius * radius:
                yield r + i, c + j


def line_cells(r0, c0, r1, c1):
    """
    Yield the (row, col) cells sampled along a segment.

    The segment is sampled n + 1 times, n being its integer length, and
    each sample is truncated toward zero.
    """
    dr = r1 - r0
    dc = c1 - c0
    n = int(math.hypot(dr, dc))

    if n == 0:
        yield r0, c0
        return

    for i in range(n + 1):
        yield int(r0 + dr * i / n), int(c0 + dc * i / n)
