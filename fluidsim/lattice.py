"""
D2Q9 Lattice Constants and Utilities

Defines the D2Q9 lattice in screen coordinates: columns (x) grow to the
right and rows (y) grow downward, so "up" is a step of -1 in y.
"""
import numpy as np

# D2Q9 lattice velocities
#
#   +-----------> c, x
#   |
#   |     6   2   5
#   |       \ | /
#   |     3 - 0 - 1
#   |       / | \
#   |     7   4   8
#   v
#   r, y

# Lattice velocity components (column step, row step)
EX = np.array([0, 1, 0, -1, 0, 1, -1, -1, 1], dtype=np.int32)
EY = np.array([0, 0, -1, 0, 1, -1, -1, 1, 1], dtype=np.int32)

# Lattice weights
W = np.array([4/9, 1/9, 1/9, 1/9, 1/9, 1/36, 1/36, 1/36, 1/36], dtype=np.float64)
W.flags.writeable = False

# Opposite direction indices (for bounce-back)
OPPOSITE = np.array([0, 3, 4, 1, 2, 7, 8, 5, 6], dtype=np.int32)

# Lattice sound speed squared
CS2 = 1.0 / 3.0

# Number of lattice velocities
Q = 9

# Ambient density every cell starts at and every border cell is reset to
REFERENCE_DENSITY = 100.0

# Cells whose density drops to or below this are reset to W * DENSITY_FLOOR
DENSITY_FLOOR = 1.0

# Relaxation frequency is stable in (0, OMEGA_STABLE_MAX)
OMEGA_STABLE_MAX = 2.0


def dot(i, ux, uy):
    """
    Project a velocity onto lattice direction i.

    Parameters
    ----------
    i : int
        Direction index, 0..8
    ux, uy : float or ndarray
        Velocity components (uy positive downward)

    Returns
    -------
    float or ndarray
        e_i · u
    """
    return EX[i] * ux + EY[i] * uy
