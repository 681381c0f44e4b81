import math

import numpy as np
import pytest

from boids import EntityKind, Simulation


def test_spawn_uses_configured_defaults():
    sim = Simulation()
    agent = sim.scene.get(sim.spawn_agent((200.0, 200.0)))
    obstacle = sim.scene.get(sim.spawn_obstacle((300.0, 300.0)))

    np.testing.assert_array_equal(agent.velocity, [1.0, 0.0])
    assert agent.scale == 5.0
    assert obstacle.scale == 10.0
    assert sim.agent_count == 1
    assert sim.obstacle_count == 1


def test_toggle_selection():
    sim = Simulation()
    handle = sim.spawn_agent((200.0, 200.0))

    assert sim.toggle_selection((205.0, 203.0)) == handle
    assert sim.scene.get(handle).selected
    assert sim.toggle_selection((200.0, 200.0)) == handle
    assert not sim.scene.get(handle).selected
    assert sim.toggle_selection((400.0, 400.0)) is None
    assert sim.toggle_selection((220.0, 200.0), radius=25.0) == handle


def test_selection_does_not_affect_motion():
    plain, picked = Simulation(), Simulation()
    for sim in (plain, picked):
        sim.spawn_agent((200.0, 200.0))
        sim.spawn_agent((230.0, 210.0), (0.0, 1.0))
        sim.spawn_obstacle((250.0, 200.0))
    picked.toggle_selection((230.0, 210.0))

    for _ in range(20):
        plain.tick()
        picked.tick()

    for a, b in zip(plain.views(), picked.views()):
        assert a.position == b.position
        assert a.heading == b.heading


def test_clear_agents_keeps_obstacles():
    sim = Simulation()
    sim.spawn_agent((200.0, 200.0))
    sim.spawn_agent((250.0, 200.0))
    obstacle = sim.spawn_obstacle((300.0, 300.0))

    assert sim.clear_agents() == 2
    assert sim.agent_count == 0
    assert [v.handle for v in sim.views()] == [obstacle]


def test_clear_agents_during_tick_waits_for_boundary():
    sim = Simulation()
    sim.spawn_agent((200.0, 200.0))
    with sim.scene.frozen():
        sim.clear_agents()
        assert sim.agent_count == 1
    assert sim.agent_count == 0


def test_paused_simulation_does_not_move():
    sim = Simulation()
    handle = sim.spawn_agent((300.0, 300.0))

    assert sim.toggle_running() is False
    assert sim.tick() is False
    np.testing.assert_array_equal(sim.scene.get(handle).position, [300.0, 300.0])

    assert sim.toggle_running() is True
    assert sim.tick() is True
    np.testing.assert_array_equal(sim.scene.get(handle).position, [301.0, 300.0])


def test_views_expose_render_state():
    sim = Simulation()
    sim.spawn_agent((300.0, 300.0), (0.0, -2.0))
    sim.spawn_obstacle((100.0, 150.0))

    agent_view, obstacle_view = sim.views()
    assert agent_view.kind is EntityKind.AGENT
    assert agent_view.heading == pytest.approx(-math.pi / 2)
    assert agent_view.position == (300.0, 300.0)
    assert obstacle_view.kind is EntityKind.OBSTACLE
    assert obstacle_view.heading is None
    assert obstacle_view.scale == 10.0


def test_populate_inside_margins():
    sim = Simulation()
    handles = sim.populate(25, seed=3)

    assert len(handles) == 25
    for entity in sim.scene.agents():
        assert 100.0 <= entity.position[0] <= 700.0
        assert 100.0 <= entity.position[1] <= 500.0
        assert np.linalg.norm(entity.velocity) == pytest.approx(1.0)


def test_populate_is_reproducible():
    a, b = Simulation(), Simulation()
    a.populate(5, seed=11)
    b.populate(5, seed=11)
    assert [v.position for v in a.views()] == [v.position for v in b.views()]


def test_populate_rejects_non_positive_count():
    with pytest.raises(ValueError):
        Simulation().populate(0)


def test_initial_count_setting_populates():
    sim = Simulation({"initial_count": 12})
    assert sim.agent_count == 12


def test_flock_stays_bounded_over_time():
    sim = Simulation({"initial_count": 30})
    sim.spawn_obstacle((400.0, 300.0))
    for _ in range(300):
        sim.tick()

    for view in sim.views():
        assert np.all(np.isfinite(view.position))
    for entity in sim.scene.agents():
        assert np.linalg.norm(entity.velocity) <= 3.0 + 1e-9
