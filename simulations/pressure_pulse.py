"""
Pressure Pulse Simulation

A density burst emitted in the middle of still fluid.

The pulse travels outward at the lattice speed of sound,
c_s = 1/sqrt(3) cells per step. Until it reaches the border, the total
mass of the lattice is conserved by streaming and collision, so the run
doubles as a sanity check of the engine.
"""

import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fluidsim.lattice import CS2, REFERENCE_DENSITY
from fluidsim.solver import FluidSim


class PressurePulse:
    """
    Single density burst at the lattice center.

    Parameters
    ----------
    n : int
        Grid size (n x n)
    radius : int
        Emitter brush radius
    power : float
        Density added inside the brush
    omega : float
        Relaxation frequency
    """

    def __init__(self, n, radius=3, power=24.0, omega=1.0, use_fast=True):
        self.n = n
        self.radius = radius
        self.center = n // 2
        self.sim = FluidSim(n, n, omega=omega, use_fast=use_fast)
        self.sim.emit_disk(self.center, self.center, radius, power)

        self.mass_initial = self.sim.get_total_mass()
        self.front_history = []

    def front_radius(self):
        """Distance from the center to the strongest overpressure along the center row."""
        profile = self.sim.rho[self.center, self.center:] - REFERENCE_DENSITY
        return int(np.argmax(profile))

    def steps_to_border(self):
        """Steps before the pulse can reach the border (one cell per step at most)."""
        return self.center - 1 - self.radius

    def run(self, num_steps, verbose=True):
        """
        Run the pulse.

        Returns
        -------
        relative_mass_change : float
            |M_final - M_initial| / M_initial
        """
        for step in range(num_steps):
            self.sim.step()
            self.front_history.append(self.front_radius())

        mass_final = self.sim.get_total_mass()
        change = abs(mass_final - self.mass_initial) / self.mass_initial

        if verbose:
            speed = np.sqrt(CS2)
            print(f"Steps: {num_steps}, front at r={self.front_history[-1]} "
                  f"(sound speed estimate {speed * num_steps:.1f})")
            print(f"Relative mass change: {change:.2e}")

        return change


def main():
    print("=" * 50)
    print("Pressure Pulse")
    print("=" * 50)

    pulse = PressurePulse(101)
    pulse.run(pulse.steps_to_border() - 5)


if __name__ == "__main__":
    main()
