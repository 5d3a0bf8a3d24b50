"""
Streaming Step Implementations

Propagation of distribution functions along lattice velocities on a
bounded (non-periodic) lattice.

The streaming step moves each distribution f_i from site x to site x + e_i:
    f_i(x + e_i, t + dt) = f_i^out(x, t)

Nothing wraps around: values pushed past the edge are dropped, and the
cells on the edge a plane moves away from keep their old value. Those are
all border cells, which the edge equilibrium reset overwrites right after.

Two schemes are provided:
- Double buffer: read from an untouched copy, write into the new array
- In place: walk rows against the direction of motion so no row is
  overwritten before it has been propagated, and copy horizontal shifts
  through a scratch row
"""

import numpy as np
from numba import njit
from .lattice import EX, EY, Q


def _shift_slices(d, n):
    """Return (destination, source) slices that move an axis of length n by d."""
    if d > 0:
        return slice(d, n), slice(0, n - d)
    if d < 0:
        return slice(0, n + d), slice(-d, n)
    return slice(0, n), slice(0, n)


def stream_bounded(f):
    """
    Streaming step without wraparound, fully double-buffered.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx)

    Returns
    -------
    f_streamed : ndarray
        Post-streaming distribution
    """
    q, ny, nx = f.shape
    f_out = f.copy()

    for i in range(1, Q):
        dst_rows, src_rows = _shift_slices(int(EY[i]), ny)
        dst_cols, src_cols = _shift_slices(int(EX[i]), nx)
        f_out[i, dst_rows, dst_cols] = f[i, src_rows, src_cols]

    return f_out


@njit(cache=True)
def stream_bounded_numba(f, row):
    """
    In-place streaming without wraparound.

    Upward motion walks rows top-to-bottom and downward motion walks them
    bottom-to-top, so every source row is read before it is overwritten.
    Horizontal motion stays inside one row and goes through `row`.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx). Modified in place.
    row : ndarray
        Scratch buffer, shape (nx,)
    """
    q, ny, nx = f.shape

    # Right
    for j in range(ny):
        for i in range(nx - 1):
            row[i] = f[1, j, i]
        for i in range(nx - 1):
            f[1, j, i + 1] = row[i]

    # Up
    for j in range(ny - 1):
        for i in range(nx):
            f[2, j, i] = f[2, j + 1, i]

    # Left
    for j in range(ny):
        for i in range(1, nx):
            row[i] = f[3, j, i]
        for i in range(1, nx):
            f[3, j, i - 1] = row[i]

    # Down
    for j in range(ny - 1, 0, -1):
        for i in range(nx):
            f[4, j, i] = f[4, j - 1, i]

    # Up-right
    for j in range(ny - 1):
        for i in range(nx - 1):
            f[5, j, i + 1] = f[5, j + 1, i]

    # Up-left
    for j in range(ny - 1):
        for i in range(nx - 1):
            f[6, j, i] = f[6, j + 1, i + 1]

    # Down-left
    for j in range(ny - 1, 0, -1):
        for i in range(nx - 1):
            f[7, j, i] = f[7, j - 1, i + 1]

    # Down-right
    for j in range(ny - 1, 0, -1):
        for i in range(nx - 1):
            f[8, j, i + 1] = f[8, j - 1, i]


def stream_bounded_fast(f, row=None):
    """
    Fast in-place streaming using Numba.

    Parameters
    ----------
    f : ndarray
        Distribution functions, shape (Q, ny, nx). Modified in place.
    row : ndarray, optional
        Scratch buffer of length nx, allocated if not given

    Returns
    -------
    f : ndarray
        The same array, streamed
    """
    if row is None:
        row = np.zeros(f.shape[2], dtype=np.float64)
    stream_bounded_numba(f, row)
    return f
