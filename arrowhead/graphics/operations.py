"""
Geometric edits over a SegmentCanvas.

Every operation that "changes" a segment erases the original and draws the
result; nothing commits. Callers commit once per generation.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Tuple

from arrowhead.graphics.canvas import SegmentCanvas
from arrowhead.state.segments import Segment, rotate_point


def copy(canvas: SegmentCanvas, seg: Segment) -> Segment:
    """Draw a duplicate of seg (same endpoints and direction); seg stays."""
    return canvas.adopt(seg)


def rotate_about(canvas: SegmentCanvas, seg: Segment, px: float, py: float, degrees: float) -> Segment:
    """Rotate seg about (px, py). Positive degrees turn counterclockwise."""
    nx1, ny1 = rotate_point(seg.x1, seg.y1, px, py, degrees)
    nx2, ny2 = rotate_point(seg.x2, seg.y2, px, py, degrees)
    canvas.erase(seg)
    return canvas.adopt(replace(seg, x1=nx1, y1=ny1, x2=nx2, y2=ny2))


def can_split(canvas: SegmentCanvas, seg: Segment, parts: int) -> bool:
    if parts < 1:
        raise ValueError(f"cannot split into {parts} parts")
    return seg.length / parts >= canvas.min_split_length


def split(canvas: SegmentCanvas, seg: Segment, parts: int) -> Optional[List[Segment]]:
    """
    Split seg into `parts` equal pieces chained start to end.

    Returns None, leaving seg untouched, when the pieces would be shorter
    than the canvas's minimum drawable length.
    """
    if not can_split(canvas, seg, parts):
        return None
    dx = seg.x2 - seg.x1
    dy = seg.y2 - seg.y1
    points = [(seg.x1 + dx * i / parts, seg.y1 + dy * i / parts) for i in range(parts)]
    points.append(seg.end)
    out: List[Segment] = []
    for (ax, ay), (bx, by) in zip(points, points[1:]):
        out.append(canvas.adopt(replace(seg, x1=ax, y1=ay, x2=bx, y2=by)))
    canvas.erase(seg)
    return out


def swap_endpoints(canvas: SegmentCanvas, seg: Segment) -> Segment:
    """Reverse seg's geometry; the direction tag is untouched."""
    canvas.erase(seg)
    return canvas.adopt(replace(seg, x1=seg.x2, y1=seg.y2, x2=seg.x1, y2=seg.y1))


def flip_direction(canvas: SegmentCanvas, seg: Segment) -> Segment:
    canvas.erase(seg)
    return canvas.adopt(replace(seg, direction=seg.direction.flipped()))


def set_direction_from(canvas: SegmentCanvas, target: Segment, source: Segment) -> Segment:
    """Redraw target's geometry carrying source's direction tag."""
    canvas.erase(target)
    return canvas.adopt(replace(target, direction=source.direction))


def direction(seg: Segment) -> int:
    """+1 for UP, -1 for DOWN."""
    return seg.direction.sign


# ---------- compound edits used by the generators ----------

def extend(canvas: SegmentCanvas, seg: Segment, scale: float) -> Segment:
    """Draw a new UP segment continuing seg from its end, scale times as long."""
    ux = (seg.x2 - seg.x1) * scale
    uy = (seg.y2 - seg.y1) * scale
    return canvas.draw(seg.x2, seg.y2, seg.x2 + ux, seg.y2 + uy)


def fold(canvas: SegmentCanvas, seg: Segment, sign: int) -> Optional[Tuple[Segment, Segment]]:
    """
    Replace A->B by A->P->B, P being the right-angle apex over AB.

    sign +1 puts P on the side a +90 degree turn of AB points to. Both
    halves keep seg's direction. Declines like split(seg, 2).
    """
    if not can_split(canvas, seg, 2):
        return None
    mx, my = seg.midpoint
    apex = rotate_point(seg.x2, seg.y2, mx, my, 90.0 * sign)
    first = canvas.adopt(replace(seg, x2=apex[0], y2=apex[1]))
    second = canvas.adopt(replace(seg, x1=apex[0], y1=apex[1]))
    canvas.erase(seg)
    return first, second


def square_bump(canvas: SegmentCanvas, seg: Segment, sign: int) -> List[Segment]:
    """
    Replace seg by rise, top and fall: three sides of the square on seg.

    sign +1 raises the square on the side a +90 degree turn points to.
    """
    turn = 90.0 * sign
    rise = rotate_about(canvas, copy(canvas, seg), seg.x1, seg.y1, turn)
    # the top is the rise turned about its own end, then walked the other way
    top = swap_endpoints(canvas, rotate_about(canvas, copy(canvas, rise), rise.x2, rise.y2, turn))
    fall = rotate_about(canvas, copy(canvas, seg), seg.x2, seg.y2, -turn)
    canvas.erase(seg)
    return [rise, top, fall]
