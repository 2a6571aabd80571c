"""Fractal generators that rewrite a canvas one generation at a time."""
from __future__ import annotations

import logging
import math
from typing import List, Sequence

from arrowhead.graphics import operations as ops
from arrowhead.graphics.canvas import SegmentCanvas
from arrowhead.state.segments import Segment, Vec2

logger = logging.getLogger(__name__)


class FractalGenerator:
    """
    Shared setup/iterate cycle.

    Default implementation is segment-wise: every active segment is handed to
    substitute() and the results become the next active list. Rules that look
    at more than one segment at a time override iterate().
    """

    name: str = "Fractal"

    def __init__(self, canvas: SegmentCanvas, width: float, height: float) -> None:
        self.canvas = canvas
        self.width = width
        self.height = height
        self.active: List[Segment] = []
        self.generation = 0
        self.ready = False

    def __str__(self) -> str:
        return self.name

    @property
    def unit(self) -> float:
        """Size reference for seeds: the shorter side of the view."""
        return min(self.width, self.height)

    @property
    def center(self) -> Vec2:
        return (self.width / 2.0, self.height / 2.0)

    def setup(self) -> None:
        """Clear the canvas and draw the generation-0 seed."""
        self.canvas.clear()
        self.active = self.seed()
        self.generation = 0
        self.ready = True
        self.canvas.commit()
        logger.debug("%s: seeded %d segments", self.name, len(self.active))

    def iterate(self) -> None:
        self._require_ready()
        new_active: List[Segment] = []
        for seg in self.active:
            new_active.extend(self.substitute(seg))
        self.active = new_active
        self._end_generation()

    def seed(self) -> List[Segment]:
        raise NotImplementedError

    def substitute(self, seg: Segment) -> List[Segment]:
        raise NotImplementedError

    # ---------- helpers ----------

    def _require_ready(self) -> None:
        if not self.ready:
            raise RuntimeError(f"{self.name}: setup() must run before iterate()")

    def _end_generation(self) -> None:
        self.canvas.commit()
        self.generation += 1
        logger.debug(
            "%s: generation %d, active=%d visible=%d",
            self.name,
            self.generation,
            len(self.active),
            self.canvas.count(),
        )

    def _polygon(self, points: Sequence[Vec2]) -> List[Segment]:
        """Draw a closed outline through points, in order."""
        out: List[Segment] = []
        for i, (ax, ay) in enumerate(points):
            bx, by = points[(i + 1) % len(points)]
            out.append(self.canvas.draw(ax, ay, bx, by))
        return out

    def _horizontal(self, fraction: float) -> Segment:
        """A centred horizontal seed spanning fraction of the view width."""
        cx, cy = self.center
        half = self.width * fraction / 2.0
        return self.canvas.draw(cx - half, cy, cx + half, cy)


class KochSnowflake(FractalGenerator):
    name = "Koch snowflake"

    def seed(self) -> List[Segment]:
        side = 0.6 * self.unit
        h = side * math.sqrt(3.0) / 2.0
        cx, cy = self.center
        left = (cx - side / 2.0, cy + h / 3.0)
        right = (cx + side / 2.0, cy + h / 3.0)
        top = (cx, cy - 2.0 * h / 3.0)
        # walked so that a positive turn points out of the triangle
        return self._polygon([left, right, top])

    def substitute(self, seg: Segment) -> List[Segment]:
        parts = ops.split(self.canvas, seg, 3)
        if parts is None:
            return [seg]
        first, middle, last = parts
        rise = ops.rotate_about(self.canvas, ops.copy(self.canvas, middle), middle.x1, middle.y1, 60.0)
        fall = ops.rotate_about(self.canvas, middle, middle.x2, middle.y2, -60.0)
        return [first, rise, fall, last]


class SierpinskiTriangle(FractalGenerator):
    """
    Triangle removal on outlines.

    The active list holds triangles as consecutive edge triples (a->b, b->c,
    c->a). Each generation halves every edge and draws the three midpoint
    lines; the corner triangles become the next generation.
    """

    name = "Sierpinski triangle"

    def seed(self) -> List[Segment]:
        side = 0.8 * self.unit
        h = side * math.sqrt(3.0) / 2.0
        cx, cy = self.center
        return self._polygon(
            [
                (cx, cy - 2.0 * h / 3.0),
                (cx + side / 2.0, cy + h / 3.0),
                (cx - side / 2.0, cy + h / 3.0),
            ]
        )

    def iterate(self) -> None:
        self._require_ready()
        new_active: List[Segment] = []
        for i in range(0, len(self.active), 3):
            new_active.extend(self._subdivide(self.active[i:i + 3]))
        self.active = new_active
        self._end_generation()

    def _subdivide(self, tri: List[Segment]) -> List[Segment]:
        if len(tri) != 3 or not all(ops.can_split(self.canvas, edge, 2) for edge in tri):
            return tri
        ab, bc, ca = tri
        # every edge passed can_split, so none of these decline
        a_m, m_b = ops.split(self.canvas, ab, 2)  # type: ignore[misc]
        b_m, m_c = ops.split(self.canvas, bc, 2)  # type: ignore[misc]
        c_m, m_a = ops.split(self.canvas, ca, 2)  # type: ignore[misc]
        mab, mbc, mca = a_m.end, b_m.end, c_m.end
        draw = self.canvas.draw
        return [
            a_m, draw(*mab, *mca), m_a,
            m_b, b_m, draw(*mbc, *mab),
            draw(*mca, *mbc), m_c, c_m,
        ]


class FractalTree(FractalGenerator):
    """
    Branching tree grown from a single trunk.

    Only terminal branches are active. Each spawns branch_count children from
    its tip, turned by whole multiples of angle and shrunk by shrink; parents
    stay on the canvas.
    """

    def __init__(
        self,
        canvas: SegmentCanvas,
        width: float,
        height: float,
        branch_count: int = 2,
        angle: float = 45.0,
        shrink: float = 0.7,
    ) -> None:
        super().__init__(canvas, width, height)
        if isinstance(branch_count, bool) or not isinstance(branch_count, int) or branch_count < 1:
            raise ValueError(f"branch_count must be an integer of at least 1, got {branch_count!r}")
        for label, value in (("angle", angle), ("shrink", shrink)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{label} must be a number, got {value!r}")
        if not 0 < shrink < 1:
            raise ValueError(f"shrink must be between 0 and 1, got {shrink!r}")
        self.branch_count = branch_count
        self.angle = angle
        self.shrink = shrink
        self.name = f"Fractal tree ({branch_count}, {angle:g}\N{DEGREE SIGN})"

    def turns(self) -> List[float]:
        """Turn applied to each child, in degrees."""
        n = self.branch_count
        if n % 2:
            steps = range(-(n // 2), n // 2 + 1)
        else:
            steps = [k for k in range(-(n // 2), n // 2 + 1) if k != 0]
        return [k * self.angle for k in steps]

    def seed(self) -> List[Segment]:
        x = self.width / 2.0
        base = self.height * 0.95
        return [self.canvas.draw(x, base, x, base - self.height * 0.28)]

    def substitute(self, seg: Segment) -> List[Segment]:
        if seg.length * self.shrink < self.canvas.min_split_length:
            return [seg]
        children: List[Segment] = []
        for turn in self.turns():
            child = ops.extend(self.canvas, seg, self.shrink)
            if turn:
                child = ops.rotate_about(self.canvas, child, seg.x2, seg.y2, turn)
            children.append(child)
        return children


class DragonOfEve(FractalGenerator):
    """
    Dragon curve by unfolding.

    Each generation copies the whole curve, turns the copy a quarter turn
    about the curve's last point and appends it walked backwards. Appended
    segments have their endpoints swapped and their direction flipped, so
    the curve stays one continuous path and the tags record which pieces
    were laid down in reverse.

    Unlike the other curves this is not a per-segment rule: iterate() works
    on the whole path and substitute() is never called. The result has the
    same 2^N segments and turn sequence as the per-segment fold in
    HeighwayDragon.
    """

    name = "Dragon of Eve"

    def seed(self) -> List[Segment]:
        return [self._horizontal(0.2)]

    def iterate(self) -> None:
        self._require_ready()
        if not self.active:
            self._end_generation()
            return
        px, py = self.active[-1].end
        unfolded: List[Segment] = []
        for seg in reversed(self.active):
            turned = ops.rotate_about(self.canvas, ops.copy(self.canvas, seg), px, py, 90.0)
            turned = ops.swap_endpoints(self.canvas, turned)
            unfolded.append(ops.flip_direction(self.canvas, turned))
        self.active = self.active + unfolded
        self._end_generation()


class MinkowskiCurve(FractalGenerator):
    """Minkowski sausage: quarters with a square out on the 2nd and in on the 3rd."""

    name = "Minkowski curve"

    def seed(self) -> List[Segment]:
        return [self._horizontal(0.8)]

    def substitute(self, seg: Segment) -> List[Segment]:
        parts = ops.split(self.canvas, seg, 4)
        if parts is None:
            return [seg]
        q0, q1, q2, q3 = parts
        return [
            q0,
            *ops.square_bump(self.canvas, q1, 1),
            *ops.square_bump(self.canvas, q2, -1),
            q3,
        ]


class LevyC(FractalGenerator):
    name = "Lévy C curve"

    def seed(self) -> List[Segment]:
        return [self._horizontal(0.4)]

    def substitute(self, seg: Segment) -> List[Segment]:
        halves = ops.fold(self.canvas, seg, 1)
        if halves is None:
            return [seg]
        return list(halves)


class HeighwayDragon(FractalGenerator):
    """
    Heighway dragon by folding.

    A segment folds to the side its direction tag names. The first half is
    tagged up and the second down, so folds alternate along the curve.
    """

    name = "Heighway dragon"

    def seed(self) -> List[Segment]:
        return [self._horizontal(0.5)]

    def substitute(self, seg: Segment) -> List[Segment]:
        halves = ops.fold(self.canvas, seg, ops.direction(seg))
        if halves is None:
            return [seg]
        first, second = halves
        if ops.direction(first) < 0:
            first = ops.flip_direction(self.canvas, first)
        if ops.direction(second) > 0:
            second = ops.flip_direction(self.canvas, second)
        return [first, second]


class MandelbrotCurve(FractalGenerator):
    """Quadratic Koch island: a square whose edges grow a square bump on the middle third."""

    name = "Mandelbrot curve"

    def seed(self) -> List[Segment]:
        side = 0.4 * self.unit
        cx, cy = self.center
        half = side / 2.0
        # bottom-left, bottom-right, top-right, top-left on a y-down view
        return self._polygon(
            [
                (cx - half, cy + half),
                (cx + half, cy + half),
                (cx + half, cy - half),
                (cx - half, cy - half),
            ]
        )

    def substitute(self, seg: Segment) -> List[Segment]:
        parts = ops.split(self.canvas, seg, 3)
        if parts is None:
            return [seg]
        first, middle, last = parts
        return [first, *ops.square_bump(self.canvas, middle, 1), last]
