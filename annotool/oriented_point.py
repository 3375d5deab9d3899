"""Point label with an orientation, shown as two axis handles."""

from __future__ import annotations

import math

from annotool.label import (
    Label,
    LabelDefinition,
    LabelHandle,
    Point,
    Transform,
    WorldInfo,
    line_angle,
    wrap_angle,
)
from annotool.properties import LabelProperty

ANGLE = "angle"

_DEFAULT_AXIS_LENGTH = 50


def _axis_lengths(definition: LabelDefinition) -> tuple[int, int]:
    """Lengths of the x and y axis handles; negative entries mean the default."""
    lengths = definition.axis_length
    axis_x = lengths[0] if len(lengths) > 0 else _DEFAULT_AXIS_LENGTH
    axis_y = lengths[1] if len(lengths) > 1 else _DEFAULT_AXIS_LENGTH
    if axis_x < 0:
        axis_x = _DEFAULT_AXIS_LENGTH
    if axis_y < 0:
        axis_y = _DEFAULT_AXIS_LENGTH
    return axis_x, axis_y


def _place_axis_handles(
    handles: list[LabelHandle], definition: LabelDefinition, angle: float
) -> None:
    """Put handles 1 and 2 at the tips of the rotated x and y axes around handle 0."""
    origin = handles[0].position
    rotation = Transform().rotate(math.degrees(angle))
    axis_x, axis_y = _axis_lengths(definition)
    for handle, length, tip in (
        (handles[1], axis_x, Point(axis_x, 0)),
        (handles[2], axis_y, Point(0, axis_y)),
    ):
        handle.enabled = bool(length)
        if length:
            handle.set_position(origin + rotation.map(tip), False)


def _axis_handle_angle(handles: list[LabelHandle], handle: LabelHandle) -> float | None:
    """Orientation implied by a dragged axis handle, or None for other handles."""
    if handle is handles[1]:
        return -math.radians(line_angle(handles[0].position, handle.position))
    if handle is handles[2]:
        return math.radians(-90.0 - line_angle(handles[0].position, handle.position))
    return None


def _own_offset(angle: float, offset: Point) -> Point:
    """Turn an offset given in the label's own frame into image coordinates."""
    return Transform().rotate(math.degrees(angle)).map(offset)


def _parse_numbers(text: str, count: int) -> list[float]:
    tokens = text.split()
    if len(tokens) < count:
        raise ValueError(f"expected {count} numbers in {text!r}")
    return [float(token) for token in tokens[:count]]


class OrientedPointLabel(Label):
    """A position with an orientation angle in radians."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.angle = LabelProperty()
        self.handles = [LabelHandle(Point(), self) for _ in range(3)]
        if wi is not None:
            self.handles[0].set_position(wi.position, False)
            self.angle.set(wi.angle)

    def on_new_definition(self) -> None:
        self._update_handles_positions()

    def properties_list(self) -> list[str]:
        return [ANGLE]

    def connect_shared_properties(self, connect: bool, inject_my_values: bool) -> None:
        if connect:
            if self.definition is not None:
                self.definition.connect_property(self.angle, ANGLE, inject_my_values)
        else:
            self.angle.disconnect()

    def property(self, name: str) -> LabelProperty | None:
        return self.angle if name == ANGLE else None

    def center_to(self, position: Point, angle: float = 0.0) -> None:
        self.angle.set(angle)
        self.handles[0].set_position(position)

    def transform(self, scale: bool, rotate: bool) -> Transform:
        pos = self.handles[0].position
        degrees = math.degrees(self.angle.get()) if rotate else 0.0
        return Transform().translate(pos.x, pos.y).rotate(degrees)

    def to_strings(self) -> list[str]:
        center = self.handles[0].position
        numbers = (center.x, center.y, wrap_angle(self.angle.get()))
        return [" ".join(self._format_number(n) for n in numbers)]

    def from_strings(self, values: list[str]) -> None:
        cx, cy, angle = _parse_numbers(values[0], 3)
        self.delete_handles()
        self.handles.extend(LabelHandle(Point(cx, cy), self) for _ in range(3))
        self.angle.set(angle)
        self._update_handles_positions()

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        if len(self.handles) < 3:
            return
        angle = _axis_handle_angle(self.handles, handle)
        if angle is not None:
            self.angle.set(angle)
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
        if self.angle.pull_update() or forced_update:
            self._update_handles_positions()

    def _update_handles_positions(self) -> None:
        if self.definition is None or not self.handles:
            return
        _place_axis_handles(self.handles, self.definition, self.angle.get())