# annotool

Geometry and state for image annotation labels, with no GUI attached.
The labels are points, rectangles, oriented points, oriented circles,
oriented rectangles and polylines. You can create each label interactively,
move it, hit-test it and turn it into a plain text form. You can also read a
label back from that text form. Most labels can be rotated as well.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Labels

Every label keeps its geometry in a list of `LabelHandle` objects, one per
draggable point. A label starts in one of two ways:

- Built with a `WorldInfo`, it starts interactive creation at that position.
  Drive it with `on_create_move` and `on_create_click` until
  `is_creation_finished()` is true.
- Built with `None`, it is complete straight away.

```python
from annotool.label import Point, WorldInfo
from annotool.rect_label import RectLabel

rect = RectLabel(WorldInfo(position=Point(10, 10)))
rect.on_create_move(WorldInfo(position=Point(40, 30)))
rect.on_create_click(WorldInfo(position=Point(40, 30)), True)

saved = rect.to_strings()        # ["10 10 40 30"]
copy = RectLabel(None)
copy.from_strings(saved)
print(copy.area(), copy.comment())   # 600.0 Rect(x y w h): 10 10 30 20
```

| Class | Module |
| --- | --- |
| `PointLabel` | `annotool.label` |
| `RectLabel` | `annotool.rect_label` |
| `OrientedPointLabel` | `annotool.oriented_point` |
| `OrientedCircleLabel` | `annotool.oriented_circle` |
| `OrientedRectLabel` | `annotool.oriented_rect` |
| `PolylineLabel` | `annotool.polyline` |

Oriented labels keep their angle in radians. Their `to_strings` writes the
angle wrapped into `[-pi, pi]`. `transform(scale, rotate)` returns a
`Transform`, which maps points from a label's own coordinate system into
image coordinates.

The axis handles of `OrientedPointLabel` and `OrientedCircleLabel` need a
`LabelDefinition`. They are placed once one is assigned to the label's
`definition` attribute. The lengths of the axes come from the definition's
`axis_length` list. A missing or negative entry means 50.

Some labels offer extra editing actions:

- `OrientedRectLabel.start_extra_action` starts rotating when the cursor is
  on a corner.
- `PolylineLabel.start_extra_action` adds a vertex on an edge or removes the
  vertex under the cursor. `PolylineLabel.extra_action_description` returns
  `"+ vertex"` or `"- vertex"`.

Both methods return the label's strings from before the change, or `None`
if nothing started.

`annotool.label` also provides the geometry helpers that the labels use:

- `Point`, an immutable 2D point.
- `Transform`, an affine 2D transform with `translate`, `rotate`, `scale`
  and `map`.
- `wrap_angle`, which wraps an angle into `[-pi, pi]`.
- `line_angle`, the counter-clockwise angle in degrees of a line, with y
  pointing down.

## Shared properties

The module `annotool.properties` lets several labels share one value.

- A `LabelDefinition` links label properties, such as `width`, `height`,
  `angle` or `radius`, to named values in a `PropertyDatabase`. The links go
  in its `shared_properties` mapping, which holds `SharedPropertyDefinition`
  entries.
- Each link may apply a linear mapping, `database value = a * value + b`.
- `connect_shared_properties(True, inject)` binds a label's properties.
  Every label bound to the same name then reads and writes the same value.
- `LabelProperty.pull_update()` reports whether the shared value has changed
  since the last call. A label's `update_shared_properties` uses it to
  refresh the label's handles.
- `PropertyDatabase.instance()` returns the process-wide database. A
  `LabelDefinition` uses it unless it is given another.

## Point-cloud helpers

`annotool.picking` finds which vertex is under the cursor by colour. It
encodes 1-based vertex indices as RGB colours with `index_to_color`, and
decodes them with `color_to_index`. `pick_vertex_index` takes a square of
read-back RGB pixels and returns the index nearest its middle, or 0 if no
pixel holds a vertex.

`annotool.pointcloud` has these helpers:

- `parse_pcd` reads the points of ASCII PCD data. It skips an 11-line header
  and reads five numbers per point.
- `image_layout`, `depth_layout` and `xyz_layout` return a `CloudLayout`.
  The layout holds the offset and the scale that fit a cloud into view, and
  the sizes of the axes and of the selection cross.
- `cloud_file_candidates` lists the depth (`_D`) path and the XYZ (`_XYZ`)
  path that belong to an image named `..._RGB...`.

## Recent lists

`annotool.recent.RecentList` keeps a bounded, most-recent-first list of
values under one key of any mutable mapping. By default that mapping is an
in-memory dict. A repeated value moves to the front. For file lists, empty
values are ignored and absolute paths are normalised. `entries()` returns
menu-style pairs such as `("&1 /data/a.png", "/data/a.png")`.

## What this package does not do

- It draws nothing and has no viewer or editor window. Labels and layouts
  only compute geometry.
- It does not decode images, depth maps or XYZ maps. The layout functions
  take sizes and bounds that you have computed yourself.
- It has no polygon label and no label factory.
- It does not save or load label definitions and projects.
- It has no command-line program.
- `RecentList` does not write its mapping to disk. To keep the list between
  runs, pass in a mapping that persists itself.