"""Open polyline label whose vertices can be added and removed."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto

from annotool.label import Label, LabelHandle, Point, Transform, WorldInfo, line_angle

# distance, in screen pixels, within which a vertex is grabbed
_VERTEX_DISTANCE = 10
# length, in screen pixels, of the probe used to find an edge under the cursor
_EDGE_PROBE = 7


class PolylineState(Enum):
    CREATION = auto()
    READY = auto()


class ExtraActionType(Enum):
    NOTHING = auto()
    DELETE_HANDLE = auto()
    CREATE_HANDLE = auto()


@dataclass
class _ExtraAction:
    type: ExtraActionType = ExtraActionType.NOTHING
    index: int = 0


_DESCRIPTIONS = {
    ExtraActionType.CREATE_HANDLE: "+ vertex",
    ExtraActionType.DELETE_HANDLE: "- vertex",
}


def _cross(a: Point, b: Point) -> float:
    return a.x * b.y - a.y * b.x


def _segments_intersect(a0: Point, a1: Point, b0: Point, b1: Point) -> bool:
    """True if the two segments cross; parallel segments never do."""
    da = a1 - a0
    db = b1 - b0
    denom = _cross(da, db)
    if denom == 0:
        return False
    diff = b0 - a0
    t = _cross(diff, db) / denom
    u = _cross(diff, da) / denom
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


class PolylineLabel(Label):
    """A sequence of connected points."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.aabb: tuple[Point, Point] | None = None
        if wi is not None:
            self.state = PolylineState.CREATION
            self.next_point = wi.position
            self.handles.append(LabelHandle(wi.position, self))
        else:
            self.state = PolylineState.READY
            self.next_point = Point()

    def to_strings(self) -> list[str]:
        return [self._handles_to_string(self.handles)]

    def from_strings(self, values: list[str]) -> None:
        super().from_strings(values)
        self.state = PolylineState.READY
        self._update_internal_data()

    def is_creation_finished(self) -> bool:
        return self.state is PolylineState.READY

    def on_create_move(self, wi: WorldInfo) -> bool:
        self.next_point = wi.position
        return False

    def move_by(self, offset: Point, use_own_cs: bool = False) -> bool:
        for handle in self.handles:
            handle.set_position(handle.position + offset, False)
        return True

    def force_complete_creation(self, wi: WorldInfo) -> bool:
        self.state = PolylineState.READY
        return len(self.handles) > 1

    def on_create_click(self, wi: WorldInfo, is_down: bool) -> None:
        if is_down:
            self.handles.append(LabelHandle(wi.position, self))

    def cancel_extra_action(self) -> None:
        self.state = PolylineState.READY

    def extra_action_description(self, wi: WorldInfo) -> str | None:
        """Text describing the action available under the cursor, or None."""
        return _DESCRIPTIONS.get(self._detect_extra_action(wi).type)

    def start_extra_action(self, wi: WorldInfo) -> list[str] | None:
        """Add or remove a vertex under the cursor.

        Returns the label's state before the action, or None if nothing started.
        """
        action = self._detect_extra_action(wi)
        if action.type is ExtraActionType.CREATE_HANDLE:
            data = self.to_strings()
            point = LabelHandle(Point(), self)
            point.set_position(wi.position)
            self.handles.insert(action.index + 1, point)
            return data
        if action.type is ExtraActionType.DELETE_HANDLE:
            data = self.to_strings()
            if len(self.handles) > 2:
                self.delete_handle(self.handles[action.index])
            return data
        return None

    def transform(self, scale: bool, rotate: bool) -> Transform:
        pos = self.handles[0].position
        return Transform().translate(pos.x, pos.y)

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        self._update_internal_data()

    def hit_test(self, wi: WorldInfo) -> bool:
        if self.aabb is None:
            return False
        lo, hi = self.aabb
        p = wi.position
        # a rectangle without width or height contains nothing
        if lo.x == hi.x or lo.y == hi.y:
            return False
        if not (lo.x <= p.x <= hi.x and lo.y <= p.y <= hi.y):
            return False
        return self._detect_extra_action(wi).type is not ExtraActionType.NOTHING

    def _detect_extra_action(self, wi: WorldInfo) -> _ExtraAction:
        for index, handle in enumerate(self.handles):
            distance = (handle.position - wi.position).manhattan_length()
            if distance < _VERTEX_DISTANCE / wi.world_scale:
                return _ExtraAction(ExtraActionType.DELETE_HANDLE, index)

        half = _EDGE_PROBE / (2.0 * wi.world_scale)
        for index, (start, end) in enumerate(zip(self.handles, self.handles[1:])):
            p0, p1 = start.position, end.position
            rad = math.radians(line_angle(p0, p1) + 90.0)
            direction = Point(math.cos(rad) * half, -math.sin(rad) * half)
            if _segments_intersect(p0, p1, wi.position - direction, wi.position + direction):
                return _ExtraAction(ExtraActionType.CREATE_HANDLE, index)

        return _ExtraAction()

    def _update_internal_data(self) -> None:
        if not self.handles:
            self.aabb = None
            return
        xs = [h.position.x for h in self.handles]
        ys = [h.position.y for h in self.handles]
        self.aabb = (Point(min(xs), min(ys)), Point(max(xs), max(ys)))