import math

import numpy as np
import pytest

from boids import Agent, Entity, EntityKind, Scene, make_agent, make_obstacle


def test_entity_kinds():
    agent = make_agent((1.0, 2.0), (0.0, 2.0), 5.0)
    obstacle = make_obstacle((3.0, 4.0), 10.0)

    assert agent.kind is EntityKind.AGENT
    assert isinstance(agent.payload, Agent)
    assert agent.heading == pytest.approx(math.pi / 2)
    np.testing.assert_array_equal(agent.velocity, [0.0, 2.0])

    assert obstacle.kind is EntityKind.OBSTACLE
    assert obstacle.velocity is None
    assert obstacle.heading is None
    assert not obstacle.selected


def test_unknown_payload_is_rejected():
    entity = Entity(position=np.zeros(2), scale=1.0, payload="boid")
    with pytest.raises(TypeError):
        entity.kind


def test_add_assigns_unique_handles_in_order():
    scene = Scene()
    a = make_agent((0.0, 0.0), (1.0, 0.0), 5.0)
    o = make_obstacle((5.0, 5.0), 10.0)
    b = make_agent((9.0, 9.0), (1.0, 0.0), 5.0)

    handles = [scene.add(e) for e in (a, o, b)]

    assert len(set(handles)) == 3
    assert scene.iterate() == (a, o, b)
    assert scene.get(handles[1]) is o
    assert scene.agents() == [a, b]
    assert scene.obstacles() == [o]


def test_add_twice_raises():
    scene = Scene()
    agent = make_agent((0.0, 0.0), (1.0, 0.0), 5.0)
    scene.add(agent)
    with pytest.raises(ValueError):
        scene.add(agent)


def test_get_unknown_handle_raises():
    with pytest.raises(KeyError):
        Scene().get(42)


def test_remove_all_by_predicate():
    scene = Scene()
    a = scene.add(make_agent((0.0, 0.0), (1.0, 0.0), 5.0))
    o = scene.add(make_obstacle((5.0, 5.0), 10.0))
    scene.add(make_agent((9.0, 9.0), (1.0, 0.0), 5.0))

    removed = scene.remove_all(lambda e: e.kind is EntityKind.AGENT)

    assert removed == 2
    assert [e.handle for e in scene] == [o]
    with pytest.raises(KeyError):
        scene.get(a)


def test_find_nearest_within_radius():
    scene = Scene()
    far = scene.add(make_agent((100.0, 100.0), (1.0, 0.0), 5.0))
    near = scene.add(make_obstacle((104.0, 100.0), 10.0))

    assert scene.find_nearest((105.0, 100.0), 10.0) == near
    assert scene.find_nearest((99.0, 100.0), 10.0) == far
    assert scene.find_nearest((300.0, 300.0), 10.0) is None
    # Radius is exclusive
    assert scene.find_nearest((110.0, 100.0), 6.0) is None


def test_mutations_deferred_while_frozen():
    scene = Scene()
    first = make_agent((0.0, 0.0), (1.0, 0.0), 5.0)
    scene.add(first)

    late = make_agent((1.0, 1.0), (1.0, 0.0), 5.0)
    with scene.frozen() as entities:
        assert scene.is_frozen
        handle = scene.add(late)
        assert scene.remove_all(lambda e: e is first) == 0
        assert entities == (first,)
        assert scene.iterate() == (first,)
        assert handle is not None

    assert not scene.is_frozen
    assert scene.iterate() == (late,)
    assert scene.get(handle) is late


def test_frozen_is_not_reentrant():
    scene = Scene()
    with scene.frozen():
        with pytest.raises(RuntimeError):
            with scene.frozen():
                pass
