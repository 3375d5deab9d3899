"""Geometry primitives, label handles, definitions and the label base class."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, ClassVar

from annotool.properties import LabelProperty, PropertyDatabase, SharedPropertyDefinition


@dataclass(frozen=True)
class Point:
    """A 2D point or offset."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Point:
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y)


@dataclass(frozen=True)
class Transform:
    """A 2D affine transform; each operation applies before the existing ones."""

    m11: float = 1.0
    m12: float = 0.0
    m21: float = 0.0
    m22: float = 1.0
    dx: float = 0.0
    dy: float = 0.0

    def translate(self, dx: float, dy: float) -> Transform:
        return Transform(
            self.m11,
            self.m12,
            self.m21,
            self.m22,
            self.dx + dx * self.m11 + dy * self.m21,
            self.dy + dx * self.m12 + dy * self.m22,
        )

    def rotate(self, degrees: float) -> Transform:
        normalized = degrees % 360.0
        exact = {0.0: (0.0, 1.0), 90.0: (1.0, 0.0), 180.0: (0.0, -1.0), 270.0: (-1.0, 0.0)}
        if normalized in exact:
            sin_a, cos_a = exact[normalized]
        else:
            rad = math.radians(degrees)
            sin_a, cos_a = math.sin(rad), math.cos(rad)
        return Transform(
            cos_a * self.m11 + sin_a * self.m21,
            cos_a * self.m12 + sin_a * self.m22,
            -sin_a * self.m11 + cos_a * self.m21,
            -sin_a * self.m12 + cos_a * self.m22,
            self.dx,
            self.dy,
        )

    def scale(self, sx: float, sy: float) -> Transform:
        return Transform(
            self.m11 * sx, self.m12 * sx, self.m21 * sy, self.m22 * sy, self.dx, self.dy
        )

    def map(self, point: Point) -> Point:
        return Point(
            self.m11 * point.x + self.m21 * point.y + self.dx,
            self.m12 * point.x + self.m22 * point.y + self.dy,
        )


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians into [-pi, pi]."""
    return math.remainder(angle, math.tau)


def line_angle(p0: Point, p1: Point) -> float:
    """Counter-clockwise angle in degrees, in [0, 360), of the line p0 -> p1 (y down)."""
    d = p1 - p0
    if d.x == 0 and d.y == 0:
        return 0.0
    degrees = math.degrees(math.atan2(-d.y, d.x))
    return degrees + 360.0 if degrees < 0 else degrees


@dataclass
class WorldInfo:
    """Cursor state in image coordinates."""

    position: Point = Point()
    angle: float = 0.0
    world_scale: float = 1.0


class LabelHandle:
    """A draggable point belonging to a label."""

    def __init__(self, position: Point = Point(), label: Label | None = None) -> None:
        self.position = position
        self.label = label
        self.enabled = True

    def set_position(self, position: Point, notify: bool = True) -> None:
        """Move the handle; with ``notify`` the owning label is told the offset."""
        offset = position - self.position
        self.position = position
        if notify and self.label is not None:
            self.label.handle_position_changed(self, offset)

    def __repr__(self) -> str:
        return f"LabelHandle({self.position!r})"


@dataclass
class LabelDefinition:
    """Settings shared by all labels of one kind."""

    stamp_parameters: dict[str, Any] = field(default_factory=dict)
    shared_properties: dict[str, SharedPropertyDefinition] = field(default_factory=dict)
    axis_length: list[int] = field(default_factory=list)
    database: PropertyDatabase = field(default_factory=PropertyDatabase.instance)

    def shared_property_value(self, name: str, default_value: float) -> float:
        """The current shared value of property ``name``, or ``default_value``."""
        definition = self.shared_properties.get(name)
        if definition is None:
            return default_value
        stored = self.database.current_value(
            definition.name, definition.to_database_value(default_value)
        )
        return definition.from_database_value(stored)

    def connect_property(self, prop: LabelProperty, name: str, inject_my_value: bool) -> None:
        prop.connect(self.shared_properties.get(name), inject_my_value, self.database)


class Label:
    """Base class of all labels: a list of handles plus an optional definition."""

    default_dimension: ClassVar[float] = 10.0

    def __init__(self) -> None:
        self.handles: list[LabelHandle] = []
        self._definition: LabelDefinition | None = None

    @property
    def definition(self) -> LabelDefinition | None:
        return self._definition

    @definition.setter
    def definition(self, value: LabelDefinition | None) -> None:
        self._definition = value
        self.on_new_definition()

    def on_new_definition(self) -> None:
        """Called after a new definition is assigned."""

    def delete_handles(self) -> None:
        self.handles.clear()

    def delete_handle(self, handle: LabelHandle) -> None:
        self.handles = [h for h in self.handles if h is not handle]

    def handle_position_changed(self, handle: LabelHandle, offset: Point) -> None:
        """Called when one of the handles is moved with notification."""

    def init_stamp(self) -> None:
        """Prepare the label for use as a stamp."""

    def properties_list(self) -> list[str]:
        return []

    def property(self, name: str) -> LabelProperty | None:
        return None

    def connect_shared_properties(self, connect: bool, inject_my_values: bool) -> None:
        """Bind or unbind the label's properties to the shared database."""

    def update_shared_properties(self, forced_update: bool = False) -> None:
        """Pick up changes made to shared properties by other labels."""

    def is_creation_finished(self) -> bool:
        return True

    def to_strings(self) -> list[str]:
        return [self._handles_to_string(self.handles)]

    def from_strings(self, values: list[str]) -> None:
        self.delete_handles()
        self.handles.extend(self._handles_from_string(values[0]))

    @staticmethod
    def _format_number(value: float) -> str:
        return f"{value:g}"

    @classmethod
    def _handles_to_string(cls, handles: list[LabelHandle]) -> str:
        return " ".join(
            f"{cls._format_number(h.position.x)} {cls._format_number(h.position.y)}"
            for h in handles
        )

    def _handles_from_string(self, text: str) -> list[LabelHandle]:
        numbers = [float(token) for token in text.split()]
        if len(numbers) % 2:
            raise ValueError(f"odd number of coordinates in {text!r}")
        return [LabelHandle(Point(x, y), self) for x, y in zip(numbers[::2], numbers[1::2])]


class PointLabel(Label):
    """A label made of a single point."""

    def __init__(self, wi: WorldInfo | None = None) -> None:
        super().__init__()
        self.handles.append(LabelHandle(wi.position if wi else Point(), self))

    def init_stamp(self) -> None:
        self.handles[0].set_position(Point(), False)

    def center_to(self, position: Point, angle: float = 0.0) -> None:
        self.handles[0].set_position(position)

    def transform(self, scale: bool, rotate: bool) -> Transform:
        pos = self.handles[0].position
        return Transform().translate(pos.x, pos.y)

    def move_by(self, offset: Point, use_own_cs: bool = False) -> bool:
        self.center_to(self.handles[0].position + offset, 0.0)
        return True