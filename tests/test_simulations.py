"""
Example Simulation Tests

Short runs of the wind tunnel and the pressure pulse drivers.
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from simulations.wind_tunnel import WindTunnel
from simulations.pressure_pulse import PressurePulse


class TestWindTunnel:
    """Validate the driven cross flow."""

    @pytest.fixture
    def tunnel(self):
        return WindTunnel(20, 40, obstacle_r=10, obstacle_c=12, radius=3,
                          power=0.05, omega=1.0, plate_length=4)

    def test_obstacle_placed(self, tunnel):
        sim = tunnel.sim

        assert sim.is_wall(10, 12)
        assert sim.is_wall(10, 15 + 4)
        assert not sim.wall[0].any() and not sim.wall[:, 0].any()

    def test_columns_pinned(self, tunnel):
        assert tunnel.sim.fixed[:, 0].all()
        assert tunnel.sim.fixed[:, -1].all()

    def test_reynolds_number(self, tunnel):
        assert tunnel.nu == pytest.approx(1.0 / 6.0)
        assert tunnel.re == pytest.approx(0.05 * 6 / (1.0 / 6.0))

    def test_flow_develops(self, tunnel):
        mean_ux = tunnel.run(100, verbose=False)

        assert mean_ux > 0.0
        assert np.all(np.isfinite(tunnel.sim.f))
        assert np.all(tunnel.sim.f[:, tunnel.sim.wall] == 0.0)

    def test_obstacle_creates_curl(self, tunnel):
        tunnel.run(100, verbose=False)

        assert tunnel.wake_curl() > 0.0

    def test_verbose_output(self, tunnel, capsys):
        tunnel.run(10, report_every=5, verbose=True)

        out = capsys.readouterr().out
        assert "Re=" in out
        assert "Step 10" in out


class TestPressurePulse:
    """Validate the emitter burst."""

    @pytest.mark.parametrize("use_fast", [True, False])
    def test_mass_conserved_before_border(self, use_fast):
        pulse = PressurePulse(41, use_fast=use_fast)

        change = pulse.run(pulse.steps_to_border(), verbose=False)

        assert change < 1e-12

    def test_front_moves_outward(self):
        pulse = PressurePulse(61, radius=2, power=24.0, omega=1.5)

        pulse.run(20, verbose=False)

        assert pulse.front_history[-1] > pulse.front_history[0]
        assert len(pulse.front_history) == 20

    def test_steps_to_border(self):
        assert PressurePulse(41, radius=3).steps_to_border() == 20 - 1 - 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
