"""Rotated rectangle label with a centre handle and four corner handles."""

from __future__ import annotations

import math
from enum import Enum, auto

from annotool.label import (
    Label,
    LabelHandle,
    Point,
    Transform,
    WorldInfo,
    line_angle,
    wrap_angle,
)
from annotool.oriented_point import ANGLE, _own_offset, _parse_numbers
from annotool.properties import LabelProperty

WIDTH = "width"
HEIGHT = "height"

_CORNERS = 4
# distance, in screen pixels, within which a corner can be grabbed for rotation
_GRAB_DISTANCE = 10


class RectState(Enum):
    CREATION_DIMENSIONS = auto()
    READY = auto()
    ROTATING = auto()


class OrientedRectLabel(Label):
    """A rectangle given by centre, width, height and an angle in radians."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.angle = LabelProperty()
        self.width = LabelProperty()
        self.height = LabelProperty()
        self.rotating_index = 0
        self.rotating_point = Point()

        position = wi.position if wi is not None else Point()
        self.handles = [LabelHandle(position, self) for _ in range(1 + _CORNERS)]

        if wi is not None:
            self.state = RectState.CREATION_DIMENSIONS
            self.angle.set(wi.angle)
            self.width.set(0.0)
            self.height.set(0.0)
        else:
            self.width.set(self.default_dimension)
            self.height.set(self.default_dimension)
            self.state = RectState.READY
            self._update_handles_positions()

    def properties_list(self) -> list[str]:
        return [WIDTH, HEIGHT, ANGLE]

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
        # the angle is chosen by the creation tool, never taken from shared values
        self.angle.set(0.0)

    def property(self, name: str) -> LabelProperty | None:
        return {ANGLE: self.angle, HEIGHT: self.height, WIDTH: self.width}.get(name)

    def connect_shared_properties(self, connect: bool, inject_my_values: bool) -> None:
        if connect:
            if self.definition is not None:
                self.definition.connect_property(self.width, WIDTH, inject_my_values)
                self.definition.connect_property(self.height, HEIGHT, inject_my_values)
                self.definition.connect_property(self.angle, ANGLE, inject_my_values)
        else:
            self.width.disconnect()
            self.height.disconnect()
            self.angle.disconnect()

    def center_to(self, position: Point, angle: float = 0.0) -> None:
        self.angle.set(angle)
        self.handles[0].set_position(position, False)
        self._update_handles_positions()

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        if len(self.handles) < 1 + _CORNERS:
            return
        if handle is self.handles[0]:
            for corner in self.handles[1:]:
                corner.set_position(corner.position + offset, False)
        else:
            local = Transform().rotate(-math.degrees(self.angle.get())).map(
                handle.position - self.handles[0].position
            )
            self.width.set(abs(local.x) * 2)
            self.height.set(abs(local.y) * 2)
            self._update_handles_positions()

    def hit_test(self, wi: WorldInfo) -> bool:
        local = Transform().rotate(math.degrees(-self.angle.get())).map(
            wi.position - self.handles[0].position
        )
        return (
            abs(local.x) <= self.width.get() / 2 and abs(local.y) <= self.height.get() / 2
        )

    def area(self) -> float:
        return self.width.get() * self.height.get()

    def is_creation_finished(self) -> bool:
        return self.state is RectState.READY

    def on_create_move(self, wi: WorldInfo) -> bool:
        if self.state is RectState.CREATION_DIMENSIONS:
            self.handles[1].set_position(wi.position)
        elif self.state is RectState.ROTATING:
            mouse_angle = line_angle(self.handles[0].position, wi.position)
            diagonal = line_angle(Point(), Point(self.width.get(), self.height.get()))
            steps = (diagonal * 2.0, (90.0 - diagonal) * 2.0, diagonal * 2.0)
            diagonal -= sum(steps[: self.rotating_index])
            self.angle.set(math.radians(diagonal - mouse_angle))
            self._update_handles_positions()
            self.rotating_point = wi.position
        return True

    def on_create_click(self, wi: WorldInfo, is_down: bool) -> None:
        if is_down and self.state is RectState.CREATION_DIMENSIONS:
            self.state = RectState.READY
        elif not is_down and self.state is RectState.ROTATING:
            self.state = RectState.READY

    def cancel_extra_action(self) -> None:
        self.state = RectState.READY

    def start_extra_action(self, wi: WorldInfo) -> list[str] | None:
        """Start rotating if a corner is under the cursor.

        Returns the label's state before the action, or None if nothing started.
        """
        for index, corner in enumerate(self.handles[1 : 1 + _CORNERS]):
            position = corner.position
            if (position - wi.position).manhattan_length() < _GRAB_DISTANCE / wi.world_scale:
                data = self.to_strings()
                self.state = RectState.ROTATING
                self.rotating_index = index
                self.rotating_point = position
                return data
        return None

    def to_strings(self) -> list[str]:
        center = self.handles[0].position
        numbers = (
            center.x,
            center.y,
            self.width.get(),
            self.height.get(),
            wrap_angle(self.angle.get()),
        )
        return [" ".join(self._format_number(n) for n in numbers)]

    def from_strings(self, values: list[str]) -> None:
        cx, cy, sx, sy, angle = _parse_numbers(values[0], 5)
        self.delete_handles()
        self.angle.set(angle)
        self.width.set(sx)
        self.height.set(sy)
        self.handles.extend(LabelHandle(Point(cx, cy), self) for _ in range(1 + _CORNERS))
        self.state = RectState.READY
        self._update_handles_positions()

    def transform(self, scale: bool, rotate: bool) -> Transform:
        center = self.handles[0].position
        return (
            Transform()
            .translate(center.x, center.y)
            .rotate(math.degrees(self.angle.get()) if rotate else 0.0)
            .scale(
                self.width.get() * 0.5 if scale else 1.0,
                self.height.get() * 0.5 if scale else 1.0,
            )
        )

    def rotate(self, angle: float) -> bool:
        self.angle.set(self.angle.get() + angle)
        self._update_handles_positions()
        return True

    def move_by(self, offset: Point, use_own_cs: bool = False) -> bool:
        if use_own_cs:
            offset = _own_offset(self.angle.get(), offset)
        self.handles[0].set_position(self.handles[0].position + offset)
        self._update_handles_positions()
        return True

    def update_shared_properties(self, forced_update: bool = False) -> None:
        changed = self.angle.pull_update() + self.width.pull_update() + self.height.pull_update()
        if changed > 0 or forced_update:
            self._update_handles_positions()

    def _update_handles_positions(self) -> None:
        cx2 = self.width.get() / 2
        cy2 = self.height.get() / 2
        corners = (Point(cx2, cy2), Point(cx2, -cy2), Point(-cx2, -cy2), Point(-cx2, cy2))
        rotation = Transform().rotate(math.degrees(self.angle.get()))
        center = self.handles[0].position
        for handle, corner in zip(self.handles[1:], corners):
            handle.set_position(center + rotation.map(corner), False)