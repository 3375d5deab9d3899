import math

import pytest

from annotool.label import Label, LabelDefinition, Point, WorldInfo
from annotool.oriented_circle import OrientedCircleLabel
from annotool.properties import PropertyDatabase, SharedPropertyDefinition

CENTER = Point(10, 20)


def with_definition(label, **definition_args):
    label.definition = LabelDefinition(database=PropertyDatabase(), **definition_args)
    return label


def circle_from(text):
    label = with_definition(OrientedCircleLabel())
    label.from_strings([text])
    return label


def assert_close(p, q):
    assert p.x == pytest.approx(q.x, abs=1e-9)
    assert p.y == pytest.approx(q.y, abs=1e-9)


def test_default_construction_is_finished():
    label = OrientedCircleLabel()
    assert label.is_creation_finished()
    assert len(label.handles) == 4
    assert label.handles[3].position == Point(Label.default_dimension, 0)


def test_creation_flow_sets_radius():
    label = OrientedCircleLabel(WorldInfo(position=Point(5, 5), angle=0.2))
    assert not label.is_creation_finished()
    assert label.handles[0].position == Point(5, 5)
    assert label.angle.get() == pytest.approx(0.2)
    assert label.on_create_move(WorldInfo(position=Point(8, 9))) is True
    assert label.radius.get() == pytest.approx(5)
    label.on_create_click(WorldInfo(), False)
    assert not label.is_creation_finished()
    label.on_create_click(WorldInfo(), True)
    assert label.is_creation_finished()


def test_to_strings_format():
    label = OrientedCircleLabel(WorldInfo(position=Point(1, 2)))
    label.radius.set(3)
    assert label.to_strings() == ["1 2 0  3"]


def test_strings_round_trip():
    label = circle_from("10 20 0.5  7")
    assert label.to_strings() == ["10 20 0.5  7"]
    assert label.is_creation_finished()
    assert label.radius.get() == pytest.approx(7)
    assert_close(label.handles[3].position, CENTER + Point(7, 0))


def test_from_strings_rejects_missing_numbers():
    label = OrientedCircleLabel()
    with pytest.raises(ValueError):
        label.from_strings(["1 2 3"])


def test_to_strings_wraps_angle():
    label = circle_from(f"0 0 {2 * math.pi + 0.25}  1")
    angle = label.to_strings()[0].split()[2]
    assert float(angle) == pytest.approx(0.25, rel=1e-5)


@pytest.mark.parametrize(
    "point, inside", [(Point(3, 4), True), (Point(4, 4), False), (Point(0, -5), True)]
)
def test_hit_test(point, inside):
    label = circle_from("0 0 0  5")
    assert label.hit_test(WorldInfo(position=point)) is inside


def test_area():
    label = circle_from("0 0 0  1")
    assert label.area() == pytest.approx(math.pi)


def test_dragging_radius_handle_sets_radius_only():
    label = circle_from("10 20 0  4")
    target = CENTER + Point(0, 6)
    label.handles[3].set_position(target)
    assert label.radius.get() == pytest.approx(6)
    assert label.handles[3].position == target


@pytest.mark.parametrize("index", [1, 2])
def test_dragging_axis_handle_points_axis_at_target(index):
    label = circle_from("10 20 0  4")
    target = Point(13, 16)
    label.handles[index].set_position(target)
    direction = target - CENTER
    axis = label.handles[index].position - CENTER
    assert math.hypot(axis.x, axis.y) == pytest.approx(50)
    assert direction.x * axis.y - direction.y * axis.x == pytest.approx(0, abs=1e-6)
    assert direction.x * axis.x + direction.y * axis.y > 0
    assert_close(label.handles[3].position, CENTER + Point(4, 0))


def test_rotate_keeps_radius_handle_on_x_axis():
    label = circle_from("10 20 0  4")
    assert label.rotate(math.pi / 2) is True
    assert label.angle.get() == pytest.approx(math.pi / 2)
    assert_close(label.handles[3].position, CENTER + Point(4, 0))
    assert_close(label.handles[1].position, CENTER + Point(0, 50))


def test_move_by_world_offset():
    label = circle_from("10 20 0  4")
    before = [h.position for h in label.handles]
    assert label.move_by(Point(-2, 3), False)
    for old, handle in zip(before, label.handles):
        assert_close(handle.position, old + Point(-2, 3))


def test_move_by_own_coordinate_system():
    label = circle_from(f"10 20 {math.pi / 2}  4")
    label.move_by(Point(1, 0), True)
    assert_close(label.handles[0].position, Point(10, 21))


def test_center_to():
    label = circle_from("10 20 0  4")
    label.center_to(Point(1, 2), 0.3)
    assert label.handles[0].position == Point(1, 2)
    assert label.angle.get() == pytest.approx(0.3)
    assert_close(label.handles[3].position, Point(5, 2))


def test_transform():
    label = circle_from(f"10 20 {math.pi / 2}  4")
    assert_close(label.transform(False, True).map(Point(1, 0)), CENTER + Point(0, 1))
    assert_close(label.transform(True, False).map(Point(1, 0)), CENTER + Point(1, 0))


def test_init_stamp_uses_stamp_radius():
    label = with_definition(OrientedCircleLabel(), stamp_parameters={"radius": 7.0})
    label.init_stamp()
    assert label.handles[0].position == Point()
    assert label.handles[1].position == Point(7.0, 0)


def test_init_stamp_without_definition_does_nothing():
    label = OrientedCircleLabel(WorldInfo(position=CENTER))
    label.init_stamp()
    assert label.handles[0].position == CENTER


def test_property_lookup():
    label = OrientedCircleLabel()
    assert label.properties_list() == ["radius", "angle"]
    assert label.property("radius") is label.radius
    assert label.property("angle") is label.angle
    assert label.property("width") is None


def test_shared_radius_propagates():
    database = PropertyDatabase()
    definition = LabelDefinition(
        shared_properties={"radius": SharedPropertyDefinition("size")}, database=database
    )
    first = OrientedCircleLabel()
    second = OrientedCircleLabel()
    first.definition = definition
    second.definition = definition
    first.from_strings(["0 0 0  2"])
    second.from_strings(["10 20 0  2"])
    first.connect_shared_properties(True, True)
    second.connect_shared_properties(True, False)

    first.handles[3].set_position(Point(0, 9))
    second.update_shared_properties()
    assert second.radius.get() == pytest.approx(9)
    assert_close(second.handles[3].position, CENTER + Point(9, 0))
    assert database.state_index > 0