"""Circle label with an orientation, shown as two axis handles and a radius handle."""

from __future__ import annotations

import math

from annotool.label import Label, LabelHandle, Point, Transform, WorldInfo, wrap_angle
from annotool.oriented_point import (
    ANGLE,
    _axis_handle_angle,
    _own_offset,
    _parse_numbers,
    _place_axis_handles,
)
from annotool.properties import LabelProperty

RADIUS = "radius"


class OrientedCircleLabel(Label):
    """A circle with a centre, a radius and an orientation angle in radians."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.creation_completed = wi is None
        self.angle = LabelProperty()
        self.radius = LabelProperty()
        self.handles = [LabelHandle(Point(), self) for _ in range(3)]

        position = wi.position if wi is not None else Point()
        if self.creation_completed:
            position = position + Point(self.default_dimension, 0)
        self.handles.append(LabelHandle(position, self))

        if wi is not None:
            self.handles[0].set_position(wi.position, False)
            self.angle.set(wi.angle)

    def properties_list(self) -> list[str]:
        return [RADIUS, ANGLE]

    def init_stamp(self) -> None:
        definition = self.definition
        if definition is None:
            return

        def numeric(key: str, default: float) -> float:
            value = definition.stamp_parameters.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
            return default

        radius = numeric(RADIUS, self.default_dimension)
        angle = numeric(ANGLE, 0.0)
        self.radius.set(definition.shared_property_value(RADIUS, radius))
        self.radius.set(definition.shared_property_value(ANGLE, angle))

        self.handles[0].set_position(Point(), False)
        self.handles[1].set_position(Point(radius, 0), False)

    def on_new_definition(self) -> None:
        self._update_handles_positions()

    def connect_shared_properties(self, connect: bool, inject_my_values: bool) -> None:
        if self.definition is None:
            return
        if connect:
            self.definition.connect_property(self.angle, ANGLE, inject_my_values)
            self.definition.connect_property(self.radius, RADIUS, inject_my_values)
        else:
            self.angle.disconnect()
            self.radius.disconnect()

    def property(self, name: str) -> LabelProperty | None:
        return {ANGLE: self.angle, RADIUS: self.radius}.get(name)

    def hit_test(self, wi: WorldInfo) -> bool:
        d = wi.position - self.handles[0].position
        return math.hypot(d.x, d.y) <= self.radius.get()

    def area(self) -> float:
        radius = self.radius.get()
        return math.pi * radius * radius

    def is_creation_finished(self) -> bool:
        return self.creation_completed

    def on_create_move(self, wi: WorldInfo) -> bool:
        self.handles[3].set_position(wi.position)
        return True

    def on_create_click(self, wi: WorldInfo, is_down: bool) -> None:
        if is_down:
            self.creation_completed = True

    def center_to(self, position: Point, angle: float = 0.0) -> None:
        self.angle.set(angle)
        self.handles[0].set_position(position)

    def transform(self, scale: bool, rotate: bool) -> Transform:
        pos = self.handles[0].position
        degrees = math.degrees(self.angle.get()) if rotate else 0.0
        return Transform().translate(pos.x, pos.y).rotate(degrees)

    def to_strings(self) -> list[str]:
        center = self.handles[0].position
        fmt = self._format_number
        return [
            f"{fmt(center.x)} {fmt(center.y)} {fmt(wrap_angle(self.angle.get()))}"
            f"  {fmt(self.radius.get())}"
        ]

    def from_strings(self, values: list[str]) -> None:
        cx, cy, angle, radius = _parse_numbers(values[0], 4)
        self.delete_handles()
        self.handles.extend(LabelHandle(Point(cx, cy), self) for _ in range(3))
        self.handles.append(LabelHandle(Point(cx + radius, cy), self))
        self.angle.set(angle)
        self.radius.set(radius)
        self._update_handles_positions()
        self.creation_completed = True

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        if len(self.handles) < 4:
            return
        angle = _axis_handle_angle(self.handles, handle)
        if angle is not None:
            self.angle.set(angle)
        elif handle is self.handles[3]:
            d = handle.position - self.handles[0].position
            self.radius.set(math.hypot(d.x, d.y))
            return
        self._update_handles_positions()

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
        if (self.angle.pull_update() + self.radius.pull_update()) > 0 or forced_update:
            self._update_handles_positions()

    def _update_handles_positions(self) -> None:
        if self.definition is None or not self.handles:
            return
        _place_axis_handles(self.handles, self.definition, self.angle.get())
        center = self.handles[0].position
        self.handles[3].set_position(center + Point(self.radius.get(), 0), False)