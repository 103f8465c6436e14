"""Rendering a tree into a cell buffer.

Nodes draw in their own canvas coordinates through a :class:`Render`.  The
render translates each write onto the screen using the node's projection and
drops anything outside the visible region, so a node never needs to know
where it is on screen or how its ancestors have scrolled.
"""

from __future__ import annotations

from typing import Any

from pi.viewtree.config import Config
from pi.viewtree.geom import Expanse, Point, Rect
from pi.viewtree.node import Node
from pi.viewtree.text import cells
from pi.viewtree.tree import project_walk
from pi.viewtree.viewport import ViewPort
from pi.viewtree.viewstack import Projection
from pi.viewtree.walk import CONTINUE, Walk


# Placeholder for the second cell of a double-width cluster.
_CONT = ""


class TermBuf:
    """A grid of terminal cells, each holding one grapheme cluster."""

    def __init__(self, size: Expanse, fill: str = " ") -> None:
        self.size = size
        self._cells: list[list[str]] = [[fill] * size.w for _ in range(size.h)]

    def rect(self) -> Rect:
        return self.size.rect()

    def get(self, p: Point) -> str:
        return self._cells[p.y][p.x]

    def put(self, p: Point, g: str, width: int = 1) -> None:
        """Write a cluster at *p*.  Points outside the buffer are ignored."""
        if not self.rect().contains_point(p):
            return
        row = self._cells[p.y]
        # Don't leave half of a wide cluster behind.
        if row[p.x] == _CONT and p.x > 0:
            row[p.x - 1] = " "
        end = p.x + width
        if end < self.size.w and row[end] == _CONT:
            row[end] = " "
        row[p.x] = g
        if width == 2 and p.x + 1 < self.size.w:
            row[p.x + 1] = _CONT

    def fill(self, rect: Rect, ch: str = " ") -> None:
        clipped = self.rect().intersect(rect)
        if clipped is None:
            return
        for y in range(clipped.tl.y, clipped.far_y):
            for x in range(clipped.tl.x, clipped.far_x):
                self.put(Point(x, y), ch)

    def line(self, y: int) -> str:
        return "".join(self._cells[y])

    def lines(self) -> list[str]:
        return [self.line(y) for y in range(self.size.h)]

    def __str__(self) -> str:
        return "\n".join(self.lines())


class Render:
    """Drawing surface handed to a node's ``render`` method.

    All coordinates are in the node's canvas.  ``visible`` is the part of the
    canvas that made it onto the screen; writes outside it are dropped.
    """

    def __init__(self, buf: TermBuf, proj: Projection) -> None:
        self._buf = buf
        self._proj = proj

    @property
    def visible(self) -> Rect:
        return self._proj.canvas

    @property
    def screen(self) -> Rect:
        return self._proj.screen

    def _to_screen(self, p: Point) -> Point:
        c, s = self._proj.canvas, self._proj.screen
        return Point(s.tl.x + p.x - c.tl.x, s.tl.y + p.y - c.tl.y)

    def fill(self, rect: Rect, ch: str = " ") -> None:
        """Fill a canvas rect with *ch*."""
        clipped = self.visible.intersect(rect)
        if clipped is None:
            return
        for y in range(clipped.tl.y, clipped.far_y):
            for x in range(clipped.tl.x, clipped.far_x):
                self._buf.put(self._to_screen(Point(x, y)), ch)

    def text(self, p: Point, s: str) -> int:
        """Draw a single line of text starting at canvas point *p*.

        Returns the number of cells the text spans, visible or not.  A wide
        cluster cut by the edge of the visible region is drawn as a space.
        """
        x = p.x
        vis = self.visible
        for g, w in cells(s):
            full = all(vis.contains_point(Point(cx, p.y)) for cx in range(x, x + w))
            if full:
                self._buf.put(self._to_screen(Point(x, p.y)), g, w)
            else:
                for cx in range(x, x + w):
                    if vis.contains_point(Point(cx, p.y)):
                        self._buf.put(self._to_screen(Point(cx, p.y)), " ")
            x += w
        return x - p.x


def render_tree(root: Node, size: Expanse, config: Config | None = None) -> TermBuf:
    """Render every visible node under *root* onto a screen of *size*.

    Parents draw before their children, so children paint over them.
    """
    buf = TermBuf(size)

    def draw(node: Node, proj: Projection) -> Walk[Any]:
        render = getattr(node, "render", None)
        if render is not None:
            render(Render(buf, proj))
        return CONTINUE

    project_walk(root, draw, ViewPort.filling(size.rect()), config)
    return buf
