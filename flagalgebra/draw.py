"""Drawing small flags as SVG pictures, vertices placed on a circle."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import math
from pathlib import Path
import xml.etree.ElementTree as ET

from flagalgebra.sdpa import _format_float

__all__ = [
    "SVG_NS",
    "coordinates",
    "color_name",
    "draw_graph",
    "draw_directed",
    "draw_colored_edges",
    "save_svg",
]

SVG_NS = "http://www.w3.org/2000/svg"

_COLORS = ("black", "red", "blue")


def coordinates(i: int, n: int) -> tuple[float, float]:
    """Position of vertex ``i`` among ``n`` vertices in the 100x100 frame."""
    if not 0 <= i < n:
        raise ValueError(f"vertex {i} out of range for {n} vertices")
    if n == 1:
        return (50.0, 50.0)
    angle = 2.0 * math.pi * i / n
    return (50.0 + 41.0 * math.cos(angle), 50.0 + 41.0 * math.sin(angle))


def color_name(c: int) -> str:
    """Name of the colour numbered ``c``."""
    if not 0 <= c < len(_COLORS):
        raise ValueError(f"no colour number {c}")
    return _COLORS[c]


def _fmt(value: object) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return _format_float(float(value))


def _element(tag: str, attrs: Mapping[str, object]) -> ET.Element:
    return ET.Element(tag, {key: _fmt(val) for key, val in attrs.items()})


def _frame() -> ET.Element:
    return _element("svg", {"viewBox": "0 0 100 100", "width": 100, "xmlns": SVG_NS})


def _line(i: int, j: int, n: int, stroke: str) -> ET.Element:
    x1, y1 = coordinates(i, n)
    x2, y2 = coordinates(j, n)
    return _element(
        "line",
        {"x1": x1, "x2": x2, "y1": y1, "y2": y2, "stroke-width": 4, "stroke": stroke},
    )


def _arrow(i: int, j: int, n: int) -> ET.Element:
    x1, y1 = coordinates(i, n)
    x2, y2 = coordinates(j, n)
    dx, dy = x2 - x1, y2 - y1
    dist = math.hypot(dx, dy)
    ux, uy = dx / dist, dy / dist
    pic = (x2 - 6.0 * ux, y2 - 6.0 * uy)
    mid = (x2 - 18.0 * ux, y2 - 18.0 * uy)
    t = (uy * 4.0, -ux * 4.0)
    th = (uy * 1.5, -ux * 1.5)
    points = [
        (x1 + th[0], y1 + th[1]),
        (mid[0] + th[0], mid[1] + th[1]),
        (mid[0] + t[0], mid[1] + t[1]),
        pic,
        (mid[0] - t[0], mid[1] - t[1]),
        (mid[0] - th[0], mid[1] - th[1]),
        (x1 - th[0], y1 - th[1]),
    ]
    text = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)
    return _element("polygon", {"points": text, "stroke": "black"})


def _vertex(i: int, n: int, fill: str) -> ET.Element:
    cx, cy = coordinates(i, n)
    return _element("circle", {"r": 6.0, "stroke": "black", "cx": cx, "cy": cy, "fill": fill})


def _type_marker(i: int, n: int) -> ET.Element:
    cx, cy = coordinates(i, n)
    return _element(
        "circle",
        {
            "r": 8.5,
            "stroke": "black",
            "stroke-width": 1.5,
            "fill": "none",
            "cx": cx,
            "cy": cy,
        },
    )


def _check_frame(size: int, colors: Sequence[int] | None, type_size: int) -> list[int]:
    if size < 0:
        raise ValueError(f"negative size {size}")
    if not 0 <= type_size <= size:
        raise ValueError(f"type size {type_size} does not fit in {size} vertices")
    if colors is None:
        return [0] * size
    vertex_colors = list(colors)
    if len(vertex_colors) != size:
        raise ValueError(f"{len(vertex_colors)} colours given for {size} vertices")
    return vertex_colors


def _add_vertices(root: ET.Element, size: int, colors: list[int], type_size: int) -> None:
    for v, c in enumerate(colors):
        root.append(_vertex(v, size, color_name(c)))
        if v < type_size:
            root.append(_type_marker(v, size))


def _pair(u: int, v: int, size: int) -> tuple[int, int]:
    if not (0 <= u < size and 0 <= v < size):
        raise ValueError(f"edge ({u}, {v}) out of range for {size} vertices")
    if u == v:
        raise ValueError(f"loop on vertex {u}")
    return (max(u, v), min(u, v))


def _to_text(root: ET.Element) -> str:
    return ET.tostring(root, encoding="unicode")


def draw_graph(
    size: int,
    edges: Iterable[tuple[int, int]],
    colors: Sequence[int] | None = None,
    type_size: int = 0,
) -> str:
    """SVG picture of a simple graph; the first ``type_size`` vertices are circled."""
    vertex_colors = _check_frame(size, colors, type_size)
    edge_set = {_pair(u, v, size) for u, v in edges}
    root = _frame()
    for u in range(size):
        for v in range(u):
            if (u, v) in edge_set:
                root.append(_line(u, v, size, "black"))
    _add_vertices(root, size, vertex_colors, type_size)
    return _to_text(root)


def draw_directed(
    size: int,
    arcs: Iterable[tuple[int, int]],
    colors: Sequence[int] | None = None,
    type_size: int = 0,
) -> str:
    """SVG picture of a directed graph, each arc ``(u, v)`` drawn as an arrow to ``v``."""
    vertex_colors = _check_frame(size, colors, type_size)
    arc_set = set()
    for u, v in arcs:
        _pair(u, v, size)
        arc_set.add((u, v))
    root = _frame()
    for u, v in sorted(arc_set):
        root.append(_arrow(u, v, size))
    _add_vertices(root, size, vertex_colors, type_size)
    return _to_text(root)


def draw_colored_edges(
    size: int,
    edges: Mapping[tuple[int, int], int],
    colors: Sequence[int] | None = None,
    type_size: int = 0,
) -> str:
    """SVG picture of an edge-coloured graph; edge colour 0 means no edge."""
    vertex_colors = _check_frame(size, colors, type_size)
    edge_colors: dict[tuple[int, int], int] = {}
    for (u, v), c in edges.items():
        key = _pair(u, v, size)
        if edge_colors.get(key, c) != c:
            raise ValueError(f"edge ({u}, {v}) given two colours")
        edge_colors[key] = c
    root = _frame()
    for u in range(size):
        for v in range(u):
            c = edge_colors.get((u, v), 0)
            if c != 0:
                root.append(_line(u, v, size, color_name(c - 1)))
    _add_vertices(root, size, vertex_colors, type_size)
    return _to_text(root)


def save_svg(svg: str, filename: str | Path) -> None:
    """Write an SVG picture to ``filename``."""
    Path(filename).write_text(svg, encoding="utf-8")