import pytest

from annotool.picking import (
    ColoredVertex,
    color_to_index,
    distance_table,
    index_to_color,
    pick_vertex_index,
)

SIZE = 9
BLACK = (0.0, 0.0, 0.0)


def _square(**placed):
    pixels = [BLACK] * (SIZE * SIZE)
    for key, index in placed.items():
        x, y = (int(v) for v in key[1:].split("_"))
        pixels[x + y * SIZE] = index_to_color(index)
    return pixels


@pytest.mark.parametrize("index", [0, 1, 2, 49, 255, 256, 65535, 65536, 123456, 0xFFFFFF])
def test_color_round_trip(index):
    assert color_to_index(index_to_color(index)) == index


def test_zero_index_is_black():
    assert index_to_color(0) == BLACK


def test_color_components_within_unit_range():
    for index in (1, 300, 70000, 0xFFFFFF):
        assert all(0.0 <= c <= 1.0 for c in index_to_color(index))


def test_largest_index_is_white():
    assert index_to_color(0xFFFFFF) == pytest.approx((1.0, 1.0, 1.0))


def test_distance_table_shape_and_center():
    table = distance_table(SIZE)
    assert len(table) == SIZE * SIZE
    center = SIZE // 2
    assert table[center + center * SIZE] == 0.0
    assert min(table) == 0.0


def test_distance_table_symmetry_and_corners():
    table = distance_table(SIZE)
    for y in range(SIZE):
        for x in range(SIZE):
            assert table[x + y * SIZE] == pytest.approx(table[(SIZE - 1 - x) + y * SIZE])
            assert table[x + y * SIZE] == pytest.approx(table[y + x * SIZE])
    corners = [table[0], table[SIZE - 1], table[-SIZE], table[-1]]
    assert all(c == pytest.approx(max(table)) for c in corners)


def test_distance_table_rejects_non_positive_size():
    with pytest.raises(ValueError):
        distance_table(0)


def test_pick_nothing_returns_zero():
    assert pick_vertex_index(_square()) == 0


def test_pick_single_vertex():
    assert pick_vertex_index(_square(p0_0=42)) == 42


def test_pick_prefers_nearest_to_center():
    assert pick_vertex_index(_square(p0_0=7, p5_4=99)) == 99


def test_pick_tie_keeps_first():
    # (4,3) comes before (4,5) in row-major order and both are at distance 1
    assert pick_vertex_index(_square(p4_3=11, p4_5=22)) == 11


def test_pick_rejects_wrong_pixel_count():
    with pytest.raises(ValueError):
        pick_vertex_index([BLACK] * 10)


def test_colored_vertex_carries_index_color():
    vertex = ColoredVertex(position=(1.0, 2.0, 3.0), color_index=index_to_color(5))
    assert color_to_index(vertex.color_index) == 5
    assert vertex.position == (1.0, 2.0, 3.0)