"""Path geometry: facade over svgpathtools.

svgpathtools resolves relative commands, shorthand (H, V, S, T) and implicit
repeats into absolute segments during ``parse_path()``, so everything here
works on absolute complex coordinates.
"""

from __future__ import annotations

import re

import numpy as np
from svgpathtools import Arc, CubicBezier, Line, Path, QuadraticBezier, parse_path

from tcws_map.errors import PathParseError
from tcws_map.utils.geometry import Bounds

# Everything the path mini-language may contain. svgpathtools silently skips
# unknown characters, so anything else is rejected up front.
_PATH_ALPHABET_RE = re.compile(r"^[MmZzLlHhVvCcSsQqTtAaEe0-9.,+\-\s]*$")


def parse(d: str) -> Path:
    """Parse a ``d`` attribute, raising PathParseError on malformed input."""
    if not _PATH_ALPHABET_RE.match(d):
        raise PathParseError(d, "unexpected characters")
    try:
        return parse_path(d)
    except (AssertionError, ValueError, IndexError, TypeError, ZeroDivisionError) as e:
        raise PathParseError(d, str(e) or type(e).__name__) from e


def endpoints(path: Path) -> np.ndarray:
    """Nx2 array of every segment's absolute start/end point."""
    pts = [(p.real, p.imag) for seg in path for p in (seg.start, seg.end)]
    return np.array(pts, dtype=np.float64).reshape(-1, 2)


def bounding_box(d: str) -> Bounds | None:
    """Axis-aligned box over the path's command endpoints. None for an empty path."""
    pts = endpoints(parse(d))
    if len(pts) == 0:
        return None
    return Bounds(
        x1=float(np.min(pts[:, 0])),
        x2=float(np.max(pts[:, 0])),
        y1=float(np.min(pts[:, 1])),
        y2=float(np.max(pts[:, 1])),
    )


def translate_path(d: str, dx: float, dy: float, places: int = 2) -> str:
    path = parse(d)
    if len(path) == 0:
        return d
    return _serialize(path.translated(complex(dx, dy)), places)


def scale_path(d: str, factor: float, places: int = 2) -> str:
    """Scale about the origin by a uniform factor."""
    path = parse(d)
    if len(path) == 0:
        return d
    return _serialize(path.scaled(factor), places)


def _serialize(path: Path, places: int) -> str:
    rounded = [r for r in (_round_segment(seg, places) for seg in path) if r is not None]
    if not rounded:
        return ""
    return " ".join(_subpath_d(sub) for sub in Path(*rounded).continuous_subpaths())


def _subpath_d(subpath: Path) -> str:
    """One continuous subpath, closed with ``Z`` when it ends where it starts."""
    if not subpath.isclosed():
        return subpath.d()
    segments = list(subpath)
    # The closepath line is implied by Z.
    if len(segments) > 1 and isinstance(segments[-1], Line):
        segments.pop()
    return f"{Path(*segments).d()} Z"


def _round_point(z: complex, places: int) -> complex:
    return complex(round(z.real, places), round(z.imag, places))


def _round_segment(seg, places: int):
    """Round a segment's control points. Returns None for an arc that rounds to nothing."""
    if isinstance(seg, (Line, QuadraticBezier, CubicBezier)):
        return type(seg)(*(_round_point(p, places) for p in seg.bpoints()))
    if isinstance(seg, Arc):
        start = _round_point(seg.start, places)
        end = _round_point(seg.end, places)
        radius = _round_point(seg.radius, places)
        # Arcs with coincident endpoints are not rendered.
        if start == end:
            return None
        # A zero radius renders as a straight line.
        if radius.real == 0 or radius.imag == 0:
            return Line(start, end)
        return Arc(
            start=start,
            radius=radius,
            rotation=round(seg.rotation, places),
            large_arc=seg.large_arc,
            sweep=seg.sweep,
            end=end,
        )
    raise TypeError(f"Unsupported segment type: {type(seg).__name__}")
