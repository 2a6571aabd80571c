"""Deferred-commit line canvas."""
from __future__ import annotations

import itertools
import logging
from typing import Dict, Iterator, List, Protocol, Tuple

from arrowhead.state.segments import Segment

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """What a host must provide for the canvas to display segments."""

    def add(self, segment: Segment) -> None: ...

    def remove(self, segment: Segment) -> None: ...


class SegmentSurface:
    """In-memory display list; the default host surface."""

    def __init__(self) -> None:
        self._segments: Dict[int, Segment] = {}

    def add(self, segment: Segment) -> None:
        self._segments[segment.handle] = segment

    def remove(self, segment: Segment) -> None:
        self._segments.pop(segment.handle, None)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments.values()))


class SegmentCanvas:
    """
    Owns the visible segments and a pending changeset.

    draw() and erase() only queue work; commit() applies every queued
    addition and then every queued removal. A segment drawn and erased in
    the same generation therefore never survives the commit.
    """

    def __init__(self, surface: Surface | None = None, min_split_length: float = 1.0) -> None:
        self.surface: Surface = surface if surface is not None else SegmentSurface()
        self.min_split_length = min_split_length
        self._handles = itertools.count()
        self._visible: Dict[int, Segment] = {}
        self._pending_add: List[Segment] = []
        self._pending_remove: List[Segment] = []

    # ---------- mutation ----------

    def draw(self, x1: float, y1: float, x2: float, y2: float) -> Segment:
        """Queue a new UP segment from (x1, y1) to (x2, y2) and return it."""
        seg = Segment(x1, y1, x2, y2, handle=next(self._handles))
        self._pending_add.append(seg)
        return seg

    def adopt(self, segment: Segment) -> Segment:
        """Queue a copy of an existing value under a fresh handle (keeps its direction)."""
        seg = segment.with_handle(next(self._handles))
        self._pending_add.append(seg)
        return seg

    def erase(self, segment: Segment) -> None:
        self._pending_remove.append(segment)

    def commit(self) -> None:
        added = len(self._pending_add)
        for seg in self._pending_add:
            self._visible[seg.handle] = seg
            self.surface.add(seg)
        self._pending_add.clear()
        # removals run second so a source erased in the same generation as
        # its replacement cannot take the replacement with it
        removed = 0
        for seg in self._pending_remove:
            if self._visible.get(seg.handle) != seg:
                continue
            del self._visible[seg.handle]
            self.surface.remove(seg)
            removed += 1
        self._pending_remove.clear()
        logger.debug("commit: +%d -%d visible=%d", added, removed, len(self._visible))

    def clear(self) -> None:
        """Drop pending work and remove everything visible from the surface."""
        self._pending_add.clear()
        self._pending_remove.clear()
        for seg in list(self._visible.values()):
            self.surface.remove(seg)
        self._visible.clear()

    # ---------- queries ----------

    def count(self) -> int:
        return len(self._visible)

    def visible(self) -> List[Segment]:
        """Committed segments in draw order (later entries render on top)."""
        return list(self._visible.values())

    def is_visible(self, segment: Segment) -> bool:
        return segment.handle in self._visible

    def pending(self) -> Tuple[int, int]:
        """(queued additions, queued removals)."""
        return len(self._pending_add), len(self._pending_remove)
