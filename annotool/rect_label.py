"""Axis-aligned rectangle label with corner, edge and centre handles."""

from __future__ import annotations

from enum import IntEnum

from annotool.label import Label, LabelHandle, Point, Transform, WorldInfo
from annotool.properties import LabelProperty

WIDTH = "width"
HEIGHT = "height"


class HandleIndex(IntEnum):
    TOP_LEFT = 0
    BOTTOM_RIGHT = 1
    BOTTOM_LEFT = 2
    TOP_RIGHT = 3
    TOP = 4
    RIGHT = 5
    BOTTOM = 6
    LEFT = 7
    CENTER = 8


class Anchor(IntEnum):
    """Which side of a dimension stayed fixed during its last change."""

    UNKNOWN = 0
    START = 1
    END = 2


def _fixed_side(a0: float, a1: float, b0: float, b1: float) -> Anchor:
    return Anchor.END if abs(a0 - b0) > abs(a1 - b1) else Anchor.START


class RectLabel(Label):
    """A rectangle defined by its top-left corner, width and height."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.creation_completed = wi is None
        position = wi.position if wi else Point()
        self.handles = [LabelHandle(position, self) for _ in HandleIndex]
        self.width = LabelProperty()
        self.height = LabelProperty()
        if self.creation_completed:
            self.width.set(self.default_dimension)
            self.height.set(self.default_dimension)
            self._update_handles_positions()
        else:
            self.width.set(0.0)
            self.height.set(0.0)

    def properties_list(self) -> list[str]:
        return [WIDTH, HEIGHT]

    def init_stamp(self) -> None:
        definition = self.definition
        if definition is None:
            return

        def numeric(key: str) -> float:
            value = definition.stamp_parameters.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
            return self.default_dimension

        self.width.set(definition.shared_property_value(WIDTH, numeric(WIDTH)))
        self.height.set(definition.shared_property_value(HEIGHT, numeric(HEIGHT)))

    def property(self, name: str) -> LabelProperty | None:
        return {WIDTH: self.width, HEIGHT: self.height}.get(name)

    def connect_shared_properties(self, connect: bool, inject_my_values: bool) -> None:
        if connect:
            if self.definition is not None:
                self.definition.connect_property(self.width, WIDTH, inject_my_values)
                self.definition.connect_property(self.height, HEIGHT, inject_my_values)
        else:
            self.width.disconnect()
            self.height.disconnect()

    def update_shared_properties(self, forced_update: bool = False) -> None:
        if (self.width.pull_update() + self.height.pull_update()) > 0 or forced_update:
            self._update_handles_positions()

    def center_to(self, position: Point, angle: float = 0.0) -> None:
        half = Point(self.width.get(), self.height.get()) / 2
        self.handles[HandleIndex.TOP_LEFT].set_position(position - half, False)
        self.handles[HandleIndex.BOTTOM_RIGHT].set_position(position + half, False)

    def hit_test(self, wi: WorldInfo) -> bool:
        p0 = self.handles[HandleIndex.TOP_LEFT].position
        p1 = self.handles[HandleIndex.BOTTOM_RIGHT].position
        p = wi.position
        return min(p0.x, p1.x) <= p.x <= max(p0.x, p1.x) and min(p0.y, p1.y) <= p.y <= max(p0.y, p1.y)

    def area(self) -> float:
        return self.width.get() * self.height.get()

    def is_creation_finished(self) -> bool:
        return self.creation_completed

    def on_create_move(self, wi: WorldInfo) -> bool:
        self.handles[HandleIndex.BOTTOM_RIGHT].set_position(wi.position)
        return True

    def on_create_click(self, wi: WorldInfo, is_down: bool) -> None:
        if is_down:
            self.creation_completed = True

    def transform(self, scale: bool, rotate: bool) -> Transform:
        pos = self.handles[HandleIndex.TOP_LEFT].position
        return Transform().translate(pos.x, pos.y).scale(
            self.width.get() if scale else 1.0, self.height.get() if scale else 1.0
        )

    def move_by(self, offset: Point, use_own_cs: bool = False) -> bool:
        for index in (HandleIndex.TOP_LEFT, HandleIndex.BOTTOM_RIGHT):
            handle = self.handles[index]
            handle.set_position(handle.position + offset, False)
        self._update_handles_positions()
        return True

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        index = next((i for i, h in enumerate(self.handles) if h is handle), None)
        if index is None:
            return

        start = self.handles[HandleIndex.TOP_LEFT]
        end = self.handles[HandleIndex.BOTTOM_RIGHT]
        start_pos, end_pos = start.position, end.position
        width, height = self.width, self.height

        match index:
            case HandleIndex.CENTER:
                start.set_position(start_pos + offset, False)
                end.set_position(end_pos + offset, False)
            case HandleIndex.LEFT:
                start.set_position(start_pos + Point(offset.x, 0), False)
                width.set(width.get() - offset.x, Anchor.END)
            case HandleIndex.RIGHT:
                width.set(width.get() + offset.x, Anchor.START)
            case HandleIndex.TOP:
                start.set_position(start_pos + Point(0, offset.y), False)
                height.set(height.get() - offset.y, Anchor.END)
            case HandleIndex.BOTTOM:
                height.set(height.get() + offset.y, Anchor.START)
            case HandleIndex.TOP_LEFT:
                width.set(width.get() - offset.x, Anchor.END)
                height.set(height.get() - offset.y, Anchor.END)
            case HandleIndex.TOP_RIGHT:
                start.set_position(start_pos + Point(0, offset.y), False)
                width.set(width.get() + offset.x, Anchor.START)
                height.set(height.get() - offset.y, Anchor.END)
            case HandleIndex.BOTTOM_LEFT:
                start.set_position(start_pos + Point(offset.x, 0), False)
                width.set(width.get() - offset.x, Anchor.END)
                height.set(height.get() + offset.y, Anchor.START)
            case HandleIndex.BOTTOM_RIGHT:
                width.set(width.get() + offset.x, Anchor.START)
                height.set(height.get() + offset.y, Anchor.START)

        self._update_handles_positions()

    def to_strings(self) -> list[str]:
        return [self._handles_to_string(self.handles[:2])]

    def from_strings(self, values: list[str]) -> None:
        old0 = self.handles[HandleIndex.TOP_LEFT].position
        old1 = self.handles[HandleIndex.BOTTOM_RIGHT].position

        self.delete_handles()
        self.handles.extend(self._handles_from_string(values[0]))
        while len(self.handles) < len(HandleIndex):
            self.handles.append(LabelHandle(Point(), self))

        new0 = self.handles[HandleIndex.TOP_LEFT].position
        new1 = self.handles[HandleIndex.BOTTOM_RIGHT].position
        size = new1 - new0
        self.width.set(size.x, _fixed_side(old0.x, old1.x, new0.x, new1.x))
        self.height.set(size.y, _fixed_side(old0.y, old1.y, new0.y, new1.y))

        self.creation_completed = True
        self._update_handles_positions()

    def comment(self) -> str:
        origin = self.handles[HandleIndex.TOP_LEFT].position
        numbers = (origin.x, origin.y, self.width.get(), self.height.get())
        return "Rect(x y w h): " + " ".join(self._format_number(n) for n in numbers)

    @staticmethod
    def _span(prop: LabelProperty, lo: float, hi: float) -> tuple[float, float]:
        size = prop.get()
        if not prop.is_shared:
            return lo, lo + size
        anchor = prop.iparam
        if anchor == Anchor.START:
            return lo, lo + size
        if anchor == Anchor.END:
            return hi - size, hi
        middle = (lo + hi) / 2
        return middle - size / 2, middle + size / 2

    def _update_handles_positions(self) -> None:
        p0 = self.handles[HandleIndex.TOP_LEFT].position
        p1 = self.handles[HandleIndex.BOTTOM_RIGHT].position
        x0, x1 = self._span(self.width, p0.x, p1.x)
        y0, y1 = self._span(self.height, p0.y, p1.y)
        xm, ym = (x0 + x1) / 2, (y0 + y1) / 2

        layout = {
            HandleIndex.TOP_LEFT: Point(x0, y0),
            HandleIndex.BOTTOM_RIGHT: Point(x1, y1),
            HandleIndex.BOTTOM_LEFT: Point(x0, y1),
            HandleIndex.TOP_RIGHT: Point(x1, y0),
            HandleIndex.TOP: Point(xm, y0),
            HandleIndex.RIGHT: Point(x1, ym),
            HandleIndex.BOTTOM: Point(xm, y1),
            HandleIndex.LEFT: Point(x0, ym),
            HandleIndex.CENTER: Point(xm, ym),
        }
        for index, position in layout.items():
            self.handles[index].set_position(position, False)