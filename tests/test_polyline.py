import pytest

from annotool.label import Point, WorldInfo
from annotool.polyline import PolylineLabel


def make(text: str) -> PolylineLabel:
    label = PolylineLabel()
    label.from_strings([text])
    return label


def test_creation_flow():
    label = PolylineLabel(WorldInfo(Point(0, 0)))
    assert not label.is_creation_finished()
    assert len(label.handles) == 1
    assert label.on_create_move(WorldInfo(Point(5, 5))) is False
    assert label.next_point == Point(5, 5)
    label.on_create_click(WorldInfo(Point(5, 5)), True)
    label.on_create_click(WorldInfo(Point(9, 9)), False)
    assert [h.position for h in label.handles] == [Point(0, 0), Point(5, 5)]
    assert label.force_complete_creation(WorldInfo(Point(5, 5)))
    assert label.is_creation_finished()


def test_force_complete_with_single_point_fails():
    label = PolylineLabel(WorldInfo(Point(1, 1)))
    assert label.force_complete_creation(WorldInfo(Point(1, 1))) is False
    assert label.is_creation_finished()


def test_round_trip_strings():
    label = make("0 0 100 0 100 100")
    assert label.to_strings() == ["0 0 100 0 100 100"]
    assert label.is_creation_finished()


def test_extra_action_descriptions():
    label = make("0 0 100 0 100 100")
    assert label.extra_action_description(WorldInfo(Point(1, 1))) == "- vertex"
    assert label.extra_action_description(WorldInfo(Point(50, 1))) == "+ vertex"
    assert label.extra_action_description(WorldInfo(Point(20, 80))) is None


def test_start_extra_action_inserts_vertex():
    label = make("0 0 100 0 100 100")
    data = label.start_extra_action(WorldInfo(Point(50, 1)))
    assert data == ["0 0 100 0 100 100"]
    assert [h.position for h in label.handles] == [
        Point(0, 0),
        Point(50, 1),
        Point(100, 0),
        Point(100, 100),
    ]


def test_start_extra_action_deletes_vertex():
    label = make("0 0 100 0 100 100")
    data = label.start_extra_action(WorldInfo(Point(100, 1)))
    assert data == ["0 0 100 0 100 100"]
    assert label.to_strings() == ["0 0 100 100"]


def test_cannot_delete_below_two_vertices():
    label = make("0 0 100 0")
    data = label.start_extra_action(WorldInfo(Point(0, 0)))
    assert data == ["0 0 100 0"]
    assert len(label.handles) == 2


def test_start_extra_action_nothing():
    label = make("0 0 100 0 100 100")
    assert label.start_extra_action(WorldInfo(Point(20, 80))) is None
    assert len(label.handles) == 3


def test_hit_test():
    label = make("0 0 100 0 100 100")
    assert label.hit_test(WorldInfo(Point(100, 50)))
    assert not label.hit_test(WorldInfo(Point(20, 80)))
    assert not label.hit_test(WorldInfo(Point(200, 50)))


def test_flat_polyline_is_never_hit():
    label = make("0 0 100 0")
    assert not label.hit_test(WorldInfo(Point(50, 0)))


def test_handle_drag_updates_bounds():
    label = make("0 0 100 0 100 100")
    assert not label.hit_test(WorldInfo(Point(150, 50)))
    label.handles[2].set_position(Point(200, 100))
    assert label.hit_test(WorldInfo(Point(150, 50)))


def test_move_by_and_transform():
    label = make("0 0 100 0 100 100")
    assert label.move_by(Point(3, 4))
    assert label.to_strings() == ["3 4 103 4 103 104"]
    assert label.transform(False, False).map(Point(0, 0)) == label.handles[0].position


def test_cancel_extra_action_finishes():
    label = PolylineLabel(WorldInfo(Point(0, 0)))
    label.cancel_extra_action()
    assert label.is_creation_finished()


def test_from_strings_rejects_odd_coordinates():
    label = PolylineLabel()
    with pytest.raises(ValueError):
        label.from_strings(["1 2 3"])