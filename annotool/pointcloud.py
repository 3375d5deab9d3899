"""Layout of point clouds built from images, depth maps, XYZ maps and PCD files.

A layout maps raw vertex coordinates into the viewer's normalised space
(``view = offset + scale * vertex`` per component). It also sizes the
coordinate axes and the cross that marks the selected vertex.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from annotool.picking import ColoredVertex, Vector3, index_to_color

# lines at the top of a PCD file that hold no points
PCD_HEADER_LINES = 11
# values per point in a PCD file: x, y, z, colour, intensity
PCD_FIELDS = 5
# scale applied to PCD clouds; their offset is left as it was
PCD_SCALE: Vector3 = (0.001 * 2, -0.001 * 2, 0.001)

# scale of raw depth values along the z axis
DEPTH_Z_SCALE = 0.00003
# upper bound of the axis offset and of the selection cross, in image pixels
_MAX_AXIS_OFFSET = 10.0
# selection cross size relative to the largest extent of an XYZ cloud
_XYZ_SELECTION_FACTOR = 0.01

_RGB_NAME = re.compile(r"(.*)_RGB(.*)")


@dataclass
class CloudLayout:
    """How a cloud is placed in view space, and how its axes are drawn.

    The defaults describe an empty cloud: no offset, unit scale, unit axes
    and no selection cross.
    """

    offset: Vector3 = (0.0, 0.0, 0.0)
    scale: Vector3 = (1.0, 1.0, 1.0)
    axis_origin: Vector3 = (0.0, 0.0, 0.0)
    axis_size: Vector3 = (1.0, 1.0, 1.0)
    selection_size: Vector3 = (0.0, 0.0, 0.0)


def _check_image_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"image size must be positive, got {width}x{height}")


def _inverse(value: float) -> float:
    return math.inf if value == 0 else 1.0 / value


def _fit_scale(width: float, height: float) -> float:
    return min(_inverse(width), _inverse(height))


def parse_pcd(data: bytes | str) -> list[ColoredVertex]:
    """Read the points of an ASCII PCD file.

    The first lines are a header and are skipped. Each point is five numbers
    ``x y z colour intensity``; its display colour is ``(1, intensity, 0)``
    and its picking colour encodes its 1-based position in the file. An
    incomplete trailing point is ignored.
    """
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    lines = text.splitlines()
    body = lines[PCD_HEADER_LINES:]

    numbers: list[float] = []
    for token in " ".join(body).split():
        try:
            numbers.append(float(token))
        except ValueError:
            raise ValueError(f"invalid number {token!r} in PCD data") from None

    vertices: list[ColoredVertex] = []
    usable = len(numbers) - len(numbers) % PCD_FIELDS
    for start in range(0, usable, PCD_FIELDS):
        x, y, z, _color, intensity = numbers[start : start + PCD_FIELDS]
        vertices.append(
            ColoredVertex(
                position=(x, y, z),
                color=(1.0, intensity, 0.0),
                color_index=index_to_color(len(vertices) + 1),
            )
        )
    return vertices


def image_layout(width: int, height: int) -> CloudLayout:
    """Layout of a flat image whose pixels become vertices at z = 0."""
    _check_image_size(width, height)
    scale = _fit_scale(width, height)
    axis_offset = min(_MAX_AXIS_OFFSET, 0.1 * min(width, height))
    return CloudLayout(
        offset=(-width * scale, height * scale, scale),
        scale=(scale * 2, -scale * 2, scale),
        axis_origin=(-axis_offset, -axis_offset, 0.0),
        axis_size=(float(width), float(height), float((width + height) // 2)),
        selection_size=(axis_offset, axis_offset, axis_offset),
    )


def depth_layout(width: int, height: int, zmin: float, zmax: float) -> CloudLayout:
    """Layout of an image with a depth map; ``zmin``/``zmax`` bound the non-zero depths."""
    _check_image_size(width, height)
    scale = _fit_scale(width, height)
    axis_offset = min(_MAX_AXIS_OFFSET, 0.1 * max(width, height))
    return CloudLayout(
        offset=(-width * scale, height * scale, zmax * DEPTH_Z_SCALE),
        scale=(scale * 2, -scale * 2, -DEPTH_Z_SCALE),
        axis_origin=(-axis_offset, -axis_offset, zmax),
        axis_size=(float(width), float(height), (zmax - zmin) * 10),
        selection_size=(axis_offset, axis_offset, axis_offset),
    )


def xyz_layout(
    xmin: float, xmax: float, ymin: float, ymax: float, zmin: float, zmax: float
) -> CloudLayout:
    """Layout of a cloud of measured XYZ points with the given bounds."""
    width = xmax - xmin
    height = ymax - ymin
    depth = zmax - zmin
    if width < 0 or height < 0 or depth < 0:
        raise ValueError("minimum bounds must not exceed maximum bounds")
    if width == 0 and height == 0:
        raise ValueError("cloud has no extent in x or y")

    scale = _fit_scale(width, height)
    cross = _XYZ_SELECTION_FACTOR * max(width, height, depth)
    return CloudLayout(
        offset=(-(xmin + xmax) * scale, (ymin + ymax) * scale, (zmin + zmax) * scale),
        scale=(scale * 2, -scale * 2, -scale * 2),
        axis_origin=(xmin, ymin, zmin),
        axis_size=(width, height, depth),
        selection_size=(cross, cross, cross),
    )


def cloud_file_candidates(path: str) -> list[str]:
    """Files that may hold 3D data for a colour image named ``<stem>_RGB<rest>``.

    Returns the depth map path first and the XYZ map path second, both in the
    image's folder; returns an empty list for other names.
    """
    pure = PurePosixPath(path)
    match = _RGB_NAME.match(pure.name)
    if match is None:
        return []
    folder = str(pure.parent)
    stem, rest = match.group(1), match.group(2)
    return [f"{folder}/{stem}_D{rest}", f"{folder}/{stem}_XYZ{rest}"]