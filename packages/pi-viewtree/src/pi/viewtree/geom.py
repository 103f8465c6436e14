"""Geometry primitives: points, sizes, rectangles and one-dimensional extents.

All coordinates are unsigned terminal cells.  Operations that cannot produce
a valid result raise :class:`GeometryError`; operations that move things
around (scrolling, shifting) saturate at the boundary instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "GeometryError",
    "Direction",
    "Point",
    "Expanse",
    "LineSegment",
    "Rect",
    "Line",
    "split",
]


class GeometryError(ValueError):
    """Raised when a geometric operation has no valid result."""


class Direction(Enum):
    """Cardinal direction of a focus or scroll request."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# Point / Expanse
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Point:
    x: int = 0
    y: int = 0

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def scroll(self, dx: int, dy: int) -> Point:
        """Offset the point, saturating at zero on both axes."""
        return Point(max(self.x + dx, 0), max(self.y + dy, 0))

    def clamp(self, rect: Rect) -> Point:
        """Clamp into *rect*, where the far edges are inclusive."""
        return Point(
            min(max(self.x, rect.tl.x), rect.tl.x + rect.w),
            min(max(self.y, rect.tl.y), rect.tl.y + rect.h),
        )


@dataclass(frozen=True, slots=True)
class Expanse:
    """A width/height pair -- the size of a canvas."""

    w: int = 0
    h: int = 0

    def area(self) -> int:
        return self.w * self.h

    def rect(self) -> Rect:
        """The rectangle of this size anchored at the origin."""
        return Rect(Point(0, 0), self.w, self.h)

    def contains(self, other: Expanse) -> bool:
        return self.w >= other.w and self.h >= other.h


# ---------------------------------------------------------------------------
# LineSegment
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineSegment:
    """A directionless one-dimensional extent."""

    off: int = 0
    len: int = 0

    @property
    def far(self) -> int:
        """The (exclusive) far limit of the segment."""
        return self.off + self.len

    def enclose(self, other: LineSegment) -> LineSegment:
        """Smallest segment covering both this segment and *other*."""
        off = min(self.off, other.off)
        return LineSegment(off, max(self.far, other.far) - off)

    def carve_start(self, n: int) -> tuple[LineSegment, LineSegment]:
        """Split *n* cells off the start.  The head is empty if we are too short."""
        if self.len < n:
            return LineSegment(self.off, 0), self
        return LineSegment(self.off, n), LineSegment(self.off + n, self.len - n)

    def carve_end(self, n: int) -> tuple[LineSegment, LineSegment]:
        """Split *n* cells off the end.  The tail is empty if we are too short."""
        if self.len < n:
            return self, LineSegment(self.far, 0)
        head = LineSegment(self.off, self.len - n)
        return head, LineSegment(head.far, n)

    def abuts(self, other: LineSegment) -> bool:
        """Adjacent but non-overlapping?"""
        return self.far == other.off or other.far == self.off

    def contains(self, other: LineSegment) -> bool:
        return self.off <= other.off and self.far >= other.far

    def intersects(self, other: LineSegment) -> bool:
        return self.intersection(other) is not None

    def intersection(self, other: LineSegment) -> LineSegment | None:
        """Overlap with *other*.  Never returns a zero-length segment."""
        if self.len == 0 or other.len == 0:
            return None
        off = max(self.off, other.off)
        far = min(self.far, other.far)
        if far <= off:
            return None
        return LineSegment(off, far - off)

    def split_active(
        self, window: LineSegment, view: LineSegment
    ) -> tuple[LineSegment, LineSegment, LineSegment]:
        """Split into ``(pre, active, post)`` for a window positioned in a view.

        This is scrollbar geometry: *self* is the bar, *view* the full content
        extent and *window* the visible part of it.  The active length is
        computed first and rounded up so the thumb never renders smaller than
        its true proportion; ``pre`` is rounded down and ``post`` takes the
        remainder.
        """
        if window.len == 0:
            raise GeometryError("window cannot be zero length")
        if not view.contains(window):
            raise GeometryError(f"view {view} does not contain window {window}")

        pref = (window.off - view.off) / view.len
        postf = (view.far - window.far) / view.len
        lenf = float(self.len)

        active = math.ceil(lenf - pref * lenf - postf * lenf)
        pre = math.floor(pref * lenf)
        post = self.len - active - pre
        return (
            LineSegment(self.off, pre),
            LineSegment(self.off + pre, active),
            LineSegment(self.off + pre + active, post),
        )


# ---------------------------------------------------------------------------
# Rect
# ---------------------------------------------------------------------------


def split(length: int, n: int) -> list[int]:
    """Split *length* into *n* near-equal parts.

    Parts differ by at most one; the remainder lands on the trailing parts.
    """
    if n <= 0:
        raise GeometryError("cannot split into zero sections")
    base, rem = divmod(length, n)
    return [base + 1 if i >= n - rem else base for i in range(n)]


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle with its top-left corner at ``tl``."""

    tl: Point = Point()
    w: int = 0
    h: int = 0

    @classmethod
    def new(cls, x: int, y: int, w: int, h: int) -> Rect:
        return cls(Point(x, y), w, h)

    # -- basic queries ------------------------------------------------------

    @property
    def far_x(self) -> int:
        return self.tl.x + self.w

    @property
    def far_y(self) -> int:
        return self.tl.y + self.h

    def is_zero(self) -> bool:
        """True if the rectangle covers no cells."""
        return self.w == 0 or self.h == 0

    def area(self) -> int:
        return self.w * self.h

    def expanse(self) -> Expanse:
        return Expanse(self.w, self.h)

    def at(self, p: Point) -> Rect:
        """The same size rectangle, moved to *p*."""
        return Rect(p, self.w, self.h)

    def contains_point(self, p: Point) -> bool:
        return self.tl.x <= p.x < self.far_x and self.tl.y <= p.y < self.far_y

    def contains_rect(self, other: Rect) -> bool:
        """Does this rectangle completely enclose *other*?"""
        return (
            other.tl.x >= self.tl.x
            and other.tl.y >= self.tl.y
            and other.far_x <= self.far_x
            and other.far_y <= self.far_y
        )

    def intersect(self, other: Rect) -> Rect | None:
        """The overlapping region, or ``None`` if the rectangles don't overlap."""
        x = max(self.tl.x, other.tl.x)
        y = max(self.tl.y, other.tl.y)
        far_x = min(self.far_x, other.far_x)
        far_y = min(self.far_y, other.far_y)
        if far_x <= x or far_y <= y:
            return None
        return Rect.new(x, y, far_x - x, far_y - y)

    def hextent(self) -> LineSegment:
        return LineSegment(self.tl.x, self.w)

    def vextent(self) -> LineSegment:
        return LineSegment(self.tl.y, self.h)

    # -- movement -----------------------------------------------------------

    def scroll(self, dx: int, dy: int) -> Rect:
        return Rect(self.tl.scroll(dx, dy), self.w, self.h)

    def clamp_within(self, bound: Rect) -> Rect:
        """Translate this rectangle so that it lies inside *bound*.

        The size is never changed, so a rectangle larger than *bound* in
        either dimension cannot be clamped and raises :class:`GeometryError`.
        """
        if bound.w < self.w or bound.h < self.h:
            raise GeometryError(f"can't clamp {self} within smaller rectangle {bound}")
        tl = self.tl.clamp(Rect(bound.tl, bound.w - self.w, bound.h - self.h))
        return Rect(tl, self.w, self.h)

    def shift_within(self, dx: int, dy: int, bound: Rect) -> Rect:
        """Shift by an offset, constrained to lie inside *bound*.

        If this rectangle is larger than *bound* it is returned unchanged.
        """
        if bound.w < self.w or bound.h < self.h:
            return self
        tl = Point(self.tl.x + dx, self.tl.y + dy)
        return Rect(tl, self.w, self.h).clamp_within(bound)

    # -- rebasing -----------------------------------------------------------

    def rebase_point(self, p: Point) -> Point:
        """Express *p* relative to our top-left corner."""
        if not self.contains_point(p):
            raise GeometryError(f"point {p} outside rectangle {self}")
        return Point(p.x - self.tl.x, p.y - self.tl.y)

    def rebase_rect(self, other: Rect) -> Rect:
        """Express *other*, which must lie within us, relative to our top-left."""
        if not self.contains_rect(other):
            raise GeometryError(f"rectangle {other} outside rectangle {self}")
        return Rect.new(other.tl.x - self.tl.x, other.tl.y - self.tl.y, other.w, other.h)

    # -- slicing ------------------------------------------------------------

    def hslice(self, seg: LineSegment) -> Rect:
        """The full-height section covering a horizontal extent."""
        if not self.hextent().contains(seg):
            raise GeometryError(f"extent {seg} outside rectangle {self}")
        return Rect.new(seg.off, self.tl.y, seg.len, self.h)

    def vslice(self, seg: LineSegment) -> Rect:
        """The full-width section covering a vertical extent."""
        if not self.vextent().contains(seg):
            raise GeometryError(f"extent {seg} outside rectangle {self}")
        return Rect.new(self.tl.x, seg.off, self.w, seg.len)

    def carve_hstart(self, n: int) -> tuple[Rect, Rect]:
        head, tail = self.hextent().carve_start(n)
        return self.hslice(head), self.hslice(tail)

    def carve_hend(self, n: int) -> tuple[Rect, Rect]:
        head, tail = self.hextent().carve_end(n)
        return self.hslice(head), self.hslice(tail)

    def carve_vstart(self, n: int) -> tuple[Rect, Rect]:
        head, tail = self.vextent().carve_start(n)
        return self.vslice(head), self.vslice(tail)

    def carve_vend(self, n: int) -> tuple[Rect, Rect]:
        head, tail = self.vextent().carve_end(n)
        return self.vslice(head), self.vslice(tail)

    def inner(self, border: int) -> Rect:
        """The interior left after removing a border of the given width."""
        if self.w < border * 2 or self.h < border * 2:
            raise GeometryError("rectangle too small")
        return Rect.new(
            self.tl.x + border,
            self.tl.y + border,
            self.w - border * 2,
            self.h - border * 2,
        )

    def split_horizontal(self, n: int) -> list[Rect]:
        """Split into *n* side-by-side columns that exactly cover us."""
        out: list[Rect] = []
        x = self.tl.x
        for width in split(self.w, n):
            out.append(Rect.new(x, self.tl.y, width, self.h))
            x += width
        return out

    def split_vertical(self, n: int) -> list[Rect]:
        """Split into *n* stacked rows that exactly cover us."""
        out: list[Rect] = []
        y = self.tl.y
        for height in split(self.h, n):
            out.append(Rect.new(self.tl.x, y, self.w, height))
            y += height
        return out

    def split_panes(self, spec: list[int]) -> list[list[Rect]]:
        """Split into ``len(spec)`` columns, column *i* holding ``spec[i]`` rows."""
        return [col.split_vertical(rows) for col, rows in zip(self.split_horizontal(len(spec)), spec)]


@dataclass(frozen=True, slots=True)
class Line:
    """A single-row horizontal run starting at ``tl``."""

    tl: Point = Point()
    w: int = 0

    @classmethod
    def new(cls, x: int, y: int, w: int) -> Line:
        return cls(Point(x, y), w)

    def rect(self) -> Rect:
        return Rect(self.tl, self.w, 1)
