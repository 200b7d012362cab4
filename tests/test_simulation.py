"""
Unit tests for SimulationContext: launches, toggles, resize, reset, frame steps
and render snapshots.
"""

import threading

import pytest

from core.settings import SimulationSettings
from core.simulation import FrameSnapshot, SimulationContext


@pytest.fixture
def sim():
    return SimulationContext(SimulationSettings(view_width=800, view_height=600))


class TestDefaults:

    def test_toggles_default(self, sim):
        assert sim.show_trace is True
        assert sim.show_velocity is False
        assert sim.show_acceleration is False

    def test_field_starts_centered(self, sim):
        assert sim.field.center == (400.0, 300.0)
        assert sim.field.gm == pytest.approx(100000.0)
        assert sim.dt == 0.1
        assert sim.particle_count == 0

    def test_uses_settings(self):
        s = SimulationSettings(mass=10.0, swallow_radius=5.0, trace_capacity=3, escape_margin=10.0)
        sim = SimulationContext(s)
        assert sim.field.gm == pytest.approx(1000.0)
        assert sim.field.swallow_radius == 5.0
        assert sim.registry.trace_capacity == 3
        assert sim.registry.escape_margin == 10.0

    def test_lock_is_reentrant(self, sim):
        assert isinstance(sim.lock, type(threading.RLock()))


class TestLaunch:

    def test_launch(self, sim):
        sim.launch((100.0, 100.0), (1.0, 2.0))
        (p,) = sim.registry.particles()
        assert p.position == (100.0, 100.0)
        assert p.velocity == (1.0, 2.0)

    def test_launch_from_drag_scales_displacement(self, sim):
        v = sim.launch_from_drag((100.0, 100.0), (300.0, 60.0))
        assert v == pytest.approx((10.0, -2.0))
        (p,) = sim.registry.particles()
        assert p.position == (100.0, 100.0)
        assert p.velocity == pytest.approx((10.0, -2.0))

    def test_load_scenario_is_relative_to_center(self, sim):
        sim.launch((10.0, 10.0), (0.0, 0.0))
        n = sim.load_scenario([((200.0, 0.0), (0.0, 22.0)), ((0.0, -150.0), (5.0, 0.0))])
        assert n == 2
        positions = [p.position for p in sim.registry.particles()]
        assert positions == [(600.0, 300.0), (400.0, 150.0)]

    def test_load_scenario_can_append(self, sim):
        sim.launch((10.0, 10.0), (0.0, 0.0))
        sim.load_scenario([((200.0, 0.0), (0.0, 22.0))], replace=False)
        assert sim.particle_count == 2


class TestToggles:

    def test_toggle_returns_new_state(self, sim):
        assert sim.toggle_trace() is False
        assert sim.toggle_trace() is True
        assert sim.toggle_velocity() is True
        assert sim.toggle_acceleration() is True
        assert sim.show_velocity and sim.show_acceleration

    def test_setters(self, sim):
        sim.set_show_trace(0)
        sim.set_show_velocity(1)
        sim.set_show_acceleration(True)
        assert sim.show_trace is False
        assert sim.show_velocity is True
        assert sim.show_acceleration is True


class TestResizeAndClear:

    def test_resize_recenters_field(self, sim):
        sim.resize(1200, 900)
        assert sim.viewport.size == (1200, 900)
        assert sim.field.center == (600.0, 450.0)

    def test_resize_moves_escape_region(self, sim):
        sim.launch((2700.0, 300.0), (0.0, 0.0))
        sim.resize(200, 600)
        report = sim.step()
        assert report.escaped == 1

    def test_clear_then_step_is_noop(self, sim):
        for i in range(5):
            sim.launch((100.0 + 10 * i, 100.0), (1.0, 0.0))
        sim.clear()
        assert sim.particle_count == 0
        report = sim.step()
        assert report.removed == 0
        assert sim.particle_count == 0


class TestStep:

    def test_step_advances_counters(self, sim):
        sim.launch((400.0, 100.0), (22.0, 0.0))
        sim.launch((410.0, 300.0), (0.0, 0.0))
        report = sim.step()
        assert report.swallowed == 1
        assert sim.tick_count == 1
        assert sim.sim_time == pytest.approx(0.1)
        assert sim.total_swallowed == 1
        assert sim.particle_count == 1

    def test_totals_accumulate(self, sim):
        sim.launch((410.0, 300.0), (0.0, 0.0))
        sim.launch((-1990.0, 300.0), (-500.0, 0.0))
        sim.step()
        sim.launch((390.0, 300.0), (0.0, 0.0))
        sim.step()
        assert sim.total_swallowed == 2
        assert sim.total_escaped == 1
        assert sim.tick_count == 2


class TestSnapshot:

    def test_snapshot_contents(self, sim):
        sim.launch((400.0, 100.0), (22.0, 0.0))
        sim.step()
        snap = sim.snapshot()
        assert isinstance(snap, FrameSnapshot)
        assert snap.center == (400.0, 300.0)
        assert snap.swallow_radius == 32.0
        assert len(snap.particles) == 1
        view = snap.particles[0]
        assert view.position == sim.registry.particles()[0].position
        assert view.trace == (view.position,)
        assert view.velocity_vector is None
        assert view.acceleration_vector is None

    def test_snapshot_respects_toggles(self, sim):
        sim.launch((400.0, 100.0), (22.0, 0.0))
        sim.step()
        sim.set_show_trace(False)
        sim.set_show_velocity(True)
        sim.set_show_acceleration(True)
        view = sim.snapshot().particles[0]
        assert view.trace == ()
        assert view.velocity_vector.label.startswith("v=")
        assert view.acceleration_vector.label.startswith("a=")

    def test_snapshot_is_detached(self, sim):
        sim.launch((400.0, 100.0), (22.0, 0.0))
        sim.step()
        snap = sim.snapshot()
        before = snap.particles[0].position
        sim.step()
        assert snap.particles[0].position == before
        assert len(snap.particles[0].trace) == 1

    def test_snapshot_after_removal(self, sim):
        sim.launch((410.0, 300.0), (0.0, 0.0))
        sim.step()
        assert sim.snapshot().particles == ()
