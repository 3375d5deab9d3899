"""Colour-coded vertex picking for point-cloud rendering.

Every vertex is drawn once more in a flat colour that encodes its 1-based
index. The pixels read back around the cursor are decoded into indices and
the index nearest to the cursor wins. Index 0 means "no vertex".
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

Vector3 = tuple[float, float, float]

_COLOR_SCALE = 1.0 / 255
# pixels read back by a renderer are rarely exactly k/255, so allow a tiny slack
_ROUNDING_SLACK = 1e-4

DEFAULT_SQUARE_SIZE = 9


@dataclass
class ColoredVertex:
    """A point-cloud vertex: position, display colour and picking colour."""

    position: Vector3 = (0.0, 0.0, 0.0)
    color: Vector3 = (0.0, 0.0, 0.0)
    color_index: Vector3 = (0.0, 0.0, 0.0)


def index_to_color(index: int) -> Vector3:
    """Encode a vertex index as an RGB colour with components in [0, 1]."""
    return (
        (index >> 16) * _COLOR_SCALE,
        ((index >> 8) & 0xFF) * _COLOR_SCALE,
        (index & 0xFF) * _COLOR_SCALE,
    )


def color_to_index(color: Sequence[float]) -> int:
    """Decode an RGB colour produced by :func:`index_to_color` back to an index."""
    r, g, b = (int(c * 255 + _ROUNDING_SLACK) for c in color)
    return (r << 16) + (g << 8) + b


@lru_cache(maxsize=None)
def _distances(square_size: int) -> tuple[float, ...]:
    half = square_size // 2
    return tuple(
        math.sqrt((x - half) ** 2 + (y - half) ** 2)
        for y in range(square_size)
        for x in range(square_size)
    )


def distance_table(square_size: int = DEFAULT_SQUARE_SIZE) -> list[float]:
    """Distances of every pixel of a square (row-major) to its middle pixel."""
    if square_size <= 0:
        raise ValueError("square size must be positive")
    return list(_distances(square_size))


def pick_vertex_index(
    pixels: Sequence[Sequence[float]], square_size: int = DEFAULT_SQUARE_SIZE
) -> int:
    """Return the encoded index nearest to the middle of a square of RGB pixels.

    ``pixels`` holds ``square_size * square_size`` RGB triples in row-major
    order. Returns 0 when no pixel encodes a vertex; on equal distance the
    first pixel wins.
    """
    distances = _distances(square_size) if square_size > 0 else ()
    if len(pixels) != len(distances) or not distances:
        raise ValueError(
            f"expected {square_size * square_size} pixels, got {len(pixels)}"
        )

    best_index = 0
    best_distance = 0.0
    for pixel, distance in zip(pixels, distances):
        candidate = color_to_index(pixel)
        if candidate and (not best_index or distance < best_distance):
            best_index = candidate
            best_distance = distance
    return best_index