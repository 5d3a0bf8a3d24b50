"""
Interactive Lattice Boltzmann Solver

A bounded 2D D2Q9 lattice meant to be driven tick by tick from an
external loop (a display, a script, a test):

    sim = FluidSim(rows, cols)
    while running:
        sim.emit(r, c)        # optional perturbations
        sim.step()
        sim.curl_at(r, c)     # read back

Each step runs streaming, bounce-back on walls, the equilibrium reset of
the border, then BGK collision.

The perturbation API is permissive: non-integer coordinates, coordinates
outside the lattice, and cells the operation does not apply to are
silently ignored. The relaxation frequency is never clamped.
"""

import time
from numbers import Integral

import numpy as np

from .lattice import Q, W, REFERENCE_DENSITY
from .collision import bgk_collide, bgk_collide_fast, check_omega
from .equilibrium import equilibrium_single_site
from .streaming import stream_bounded, stream_bounded_fast
from .boundary import (
    apply_bounce_back,
    apply_bounce_back_fast,
    apply_edge_equilibrium,
    disk_cells,
    line_cells,
)
from .observables import (
    compute_curl,
    compute_pressure,
    compute_velocity_magnitude,
    compute_total_mass,
    compute_total_momentum,
    compute_kinetic_energy,
    compute_enstrophy,
)


class FluidSim:
    """
    Interactive LBM fluid on a bounded lattice.

    Parameters
    ----------
    rows : int
        Number of lattice rows (y, growing downward)
    cols : int
        Number of lattice columns (x, growing rightward)
    omega : float
        Relaxation frequency, stable in (0, 2) (default 1.0)
    use_fast : bool
        Use Numba-accelerated kernels (default True)

    Attributes
    ----------
    f : ndarray
        Distribution functions, shape (Q, rows, cols)
    rho : ndarray
        Density field, shape (rows, cols)
    ux, uy : ndarray
        Velocity fields, shape (rows, cols)
    wall : ndarray
        Wall flags, shape (rows, cols)
    fixed : ndarray
        Fixed-velocity flags, shape (rows, cols)
    """

    def __init__(self, rows, cols, omega=1.0, use_fast=True):
        if rows < 1 or cols < 1:
            raise ValueError(f"lattice extent must be positive, got {rows} x {cols}")

        self._rows = int(rows)
        self._cols = int(cols)
        self.use_fast = use_fast
        self.omega = omega

        self.f = np.empty((Q, self._rows, self._cols), dtype=np.float64)
        self.rho = np.empty((self._rows, self._cols), dtype=np.float64)
        self.ux = np.zeros((self._rows, self._cols), dtype=np.float64)
        self.uy = np.zeros((self._rows, self._cols), dtype=np.float64)
        self.wall = np.zeros((self._rows, self._cols), dtype=bool)
        self.fixed = np.zeros((self._rows, self._cols), dtype=bool)

        # Scratch row for in-place horizontal streaming
        self._row = np.zeros(self._cols, dtype=np.float64)

        self.reset()

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def omega(self):
        """Relaxation frequency. Out-of-range values warn but are kept."""
        return self._omega

    @omega.setter
    def omega(self, value):
        check_omega(value)
        self._omega = value

    def reset(self):
        """Return to a pristine lattice at rest, keeping extent and omega."""
        self.f[...] = (REFERENCE_DENSITY * W)[:, None, None]
        self.rho[...] = REFERENCE_DENSITY
        self.ux[...] = 0.0
        self.uy[...] = 0.0
        self.wall[...] = False
        self.fixed[...] = False

        self.step_count = 0
        self.total_time = 0.0

    def step(self):
        """
        Advance the lattice by one tick.

        Returns
        -------
        dt : float
            Time taken for this step (seconds)
        """
        start = time.perf_counter()

        if self.use_fast:
            stream_bounded_fast(self.f, self._row)
            if self.wall.any():
                self.f[...] = apply_bounce_back_fast(self.f, self.wall)
            apply_edge_equilibrium(self.f, REFERENCE_DENSITY)
            bgk_collide_fast(self.f, self.rho, self.ux, self.uy,
                             self.wall, self.fixed, self._omega)
        else:
            self.f[...] = stream_bounded(self.f)
            if self.wall.any():
                self.f[...] = apply_bounce_back(self.f, self.wall)
            apply_edge_equilibrium(self.f, REFERENCE_DENSITY)
            bgk_collide(self.f, self.rho, self.ux, self.uy,
                        self.wall, self.fixed, self._omega)

        dt = time.perf_counter() - start
        self.step_count += 1
        self.total_time += dt

        return dt

    def run(self, num_steps, verbose=True, report_interval=100):
        """
        Run simulation for specified number of steps.

        Parameters
        ----------
        num_steps : int
            Number of timesteps to run
        verbose : bool
            Print progress information
        report_interval : int
            Steps between progress reports

        Returns
        -------
        mlups : float
            Performance in Million Lattice Updates Per Second
        """
        start = time.perf_counter()

        for step in range(num_steps):
            self.step()

            if verbose and (step + 1) % report_interval == 0:
                elapsed = time.perf_counter() - start
                mlups = (step + 1) * self._rows * self._cols / elapsed / 1e6
                print(f"Step {step + 1}/{num_steps}, MLUPS: {mlups:.2f}")

        total = time.perf_counter() - start
        mlups = num_steps * self._rows * self._cols / total / 1e6 if total > 0 else 0.0

        if verbose:
            print(f"Completed {num_steps} steps in {total:.2f}s")
            print(f"Performance: {mlups:.2f} MLUPS")

        return mlups

    # Perturbations

    def _in_bounds(self, r, c):
        if not isinstance(r, Integral) or not isinstance(c, Integral):
            return False
        return 0 <= r < self._rows and 0 <= c < self._cols

    def _is_interior(self, r, c):
        if not isinstance(r, Integral) or not isinstance(c, Integral):
            return False
        return 1 <= r < self._rows - 1 and 1 <= c < self._cols - 1

    def reset_equilibrium(self, r, c):
        """Set a cell to the rest equilibrium at the reference density."""
        if not self._in_bounds(r, c):
            return
        self.f[:, r, c] = equilibrium_single_site(REFERENCE_DENSITY)

    def emit(self, r, c, power=24.0):
        """Inject density: equilibrium at REFERENCE_DENSITY + power."""
        if not self._in_bounds(r, c) or self.wall[r, c]:
            return
        self.f[:, r, c] = equilibrium_single_site(REFERENCE_DENSITY + power)

    def accelerate(self, r, c, power=0.2):
        """Pin a cell to velocity (power, 0) from now on."""
        if not self._in_bounds(r, c) or self.wall[r, c]:
            return
        self.reset_equilibrium(r, c)
        self.ux[r, c] = power
        self.uy[r, c] = 0.0
        self.fixed[r, c] = True

    def place_wall(self, r, c):
        """Turn an interior cell into a wall. Border cells cannot be walls."""
        if not self._is_interior(r, c):
            return
        self.f[:, r, c] = 0.0
        self.wall[r, c] = True
        self.fixed[r, c] = False

    def wind_tunnel(self, power=0.05):
        """Accelerate the first and last column to produce a steady cross flow."""
        for r in range(self._rows):
            self.accelerate(r, 0, power)
            self.accelerate(r, self._cols - 1, power)

    def emit_disk(self, r, c, radius=3, power=24.0):
        """Emit over every cell of a disk brush."""
        for rr, cc in disk_cells(r, c, radius):
            self.emit(rr, cc, power)

    def accelerate_disk(self, r, c, radius=3, power=0.2):
        """Accelerate every cell of a disk brush."""
        for rr, cc in disk_cells(r, c, radius):
            self.accelerate(rr, cc, power)

    def place_wall_disk(self, r, c, radius=3):
        """Place walls over every cell of a disk brush."""
        for rr, cc in disk_cells(r, c, radius):
            self.place_wall(rr, cc)

    def place_wall_line(self, r0, c0, r1, c1):
        """Place walls along the segment from (r0, c0) to (r1, c1)."""
        for rr, cc in line_cells(r0, c0, r1, c1):
            self.place_wall(rr, cc)

    # Point diagnostics

    def pressure_at(self, r, c):
        if not self._in_bounds(r, c):
            return 0.0
        return float(self.rho[r, c])

    def curl_at(self, r, c):
        """Central-difference curl; 0.0 on the border and outside the lattice."""
        if not self._is_interior(r, c):
            return 0.0
        return float(
            (self.uy[r, c + 1] - self.uy[r, c - 1])
            - (self.ux[r + 1, c] - self.ux[r - 1, c])
        )

    def speed_at(self, r, c):
        if not self._in_bounds(r, c):
            return 0.0
        return float(np.hypot(self.ux[r, c], self.uy[r, c]))

    def x_velocity(self, r, c):
        if not self._in_bounds(r, c):
            return 0.0
        return float(self.ux[r, c])

    def y_velocity(self, r, c):
        if not self._in_bounds(r, c):
            return 0.0
        return float(self.uy[r, c])

    def is_wall(self, r, c):
        return self._in_bounds(r, c) and bool(self.wall[r, c])

    def is_fixed_velocity(self, r, c):
        return self._in_bounds(r, c) and bool(self.fixed[r, c])

    # Field diagnostics

    def get_pressure(self):
        """Return pressure (density) field."""
        return compute_pressure(self.rho)

    def get_vorticity(self):
        """Return curl field."""
        return compute_curl(self.ux, self.uy)

    def get_velocity_magnitude(self):
        """Return velocity magnitude field."""
        return compute_velocity_magnitude(self.ux, self.uy)

    def get_total_mass(self):
        """Return total mass."""
        return compute_total_mass(self.f)

    def get_total_momentum(self):
        """Return total momentum."""
        return compute_total_momentum(self.f)

    def get_kinetic_energy(self):
        """Return total kinetic energy."""
        return compute_kinetic_energy(self.rho, self.ux, self.uy)

    def get_enstrophy(self):
        """Return total enstrophy (integral of curl squared)."""
        return compute_enstrophy(self.get_vorticity())
