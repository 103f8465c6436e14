"""ViewPort: a node's canvas, its visible view, and where that view sits.

``canvas`` is the full virtual size of a node's content, ``view`` the
sub-rectangle currently scrolled into visibility and ``position`` the
location of the view's top-left corner in the parent's canvas.  The view is
kept inside the canvas after every mutation.
"""

from __future__ import annotations

from pi.viewtree.geom import Expanse, GeometryError, Line, Point, Rect


def _clamp_view(view: Rect, canvas: Expanse) -> Rect:
    # Shrink dimensions that can't fit, then translate into bounds.
    bound = canvas.rect()
    fitted = Rect(view.tl, min(view.w, bound.w), min(view.h, bound.h))
    return fitted.clamp_within(bound)


class ViewPort:
    """Canvas, view and position of a single node."""

    __slots__ = ("_canvas", "_view", "_position")

    def __init__(
        self,
        canvas: Expanse | None = None,
        view: Rect | None = None,
        position: Point | None = None,
    ) -> None:
        canvas = canvas if canvas is not None else Expanse()
        view = view if view is not None else Rect()
        if not canvas.rect().contains_rect(view):
            raise GeometryError(f"view {view} not contained in canvas {canvas}")
        self._canvas = canvas
        self._view = view
        self._position = position if position is not None else Point()

    # -- accessors ----------------------------------------------------------

    @property
    def canvas(self) -> Expanse:
        return self._canvas

    @property
    def view(self) -> Rect:
        return self._view

    @property
    def position(self) -> Point:
        return self._position

    @classmethod
    def filling(cls, screen: Rect) -> ViewPort:
        """A ViewPort that exactly fills *screen*, with nothing scrolled."""
        return cls(screen.expanse(), screen.expanse().rect(), screen.tl)

    # Mutable: compared by value, never hashed.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViewPort):
            return NotImplemented
        return (
            self._canvas == other._canvas
            and self._view == other._view
            and self._position == other._position
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ViewPort(canvas={self._canvas}, view={self._view}, position={self._position})"

    # -- mutators -----------------------------------------------------------

    def set_position(self, p: Point) -> None:
        """Place the view within the parent's canvas.  Owned by the parent's layout."""
        self._position = p

    def set_canvas(self, size: Expanse) -> None:
        """Replace the canvas, clamping the view back inside it."""
        self._canvas = size
        self._view = _clamp_view(self._view, size)

    def set_view(self, view: Rect) -> None:
        """Store a new view, clamped into the current canvas."""
        self._view = _clamp_view(view, self._canvas)

    def fit_size(self, size: Expanse, view_size: Expanse) -> None:
        """Set a new canvas and size the view to fit both it and *view_size*.

        The previous top-left is kept where the new canvas allows.
        """
        w = min(size.w, view_size.w)
        h = min(size.h, view_size.h)
        self._canvas = size
        self._view = Rect(self._view.tl, w, h).clamp_within(size.rect())

    # -- scrolling ----------------------------------------------------------

    def scroll_to(self, x: int, y: int) -> None:
        """Scroll the view so its top-left is at ``(x, y)``, saturating at the edges."""
        self._view = Rect.new(x, y, self._view.w, self._view.h).clamp_within(self._canvas.rect())

    def scroll_by(self, dx: int, dy: int) -> None:
        self._view = self._view.shift_within(dx, dy, self._canvas.rect())

    def page_up(self) -> None:
        self.scroll_by(0, -self._view.h)

    def page_down(self) -> None:
        self.scroll_by(0, self._view.h)

    def scroll_up(self) -> None:
        self.scroll_by(0, -1)

    def scroll_down(self) -> None:
        self.scroll_by(0, 1)

    def scroll_left(self) -> None:
        self.scroll_by(-1, 0)

    def scroll_right(self) -> None:
        self.scroll_by(1, 0)

    # -- projection ---------------------------------------------------------

    def screen_rect(self) -> Rect:
        """The view translated to our position."""
        return self._view.at(self._position)

    def project_point(self, p: Point) -> Point | None:
        """Map a canvas point into the parent's coordinates, if it is in view."""
        if not self._view.contains_point(p):
            return None
        rp = self._view.rebase_point(p)
        return Point(self._position.x + rp.x, self._position.y + rp.y)

    def project_rect(self, r: Rect) -> Rect | None:
        """Map the visible part of a canvas rect into the parent's coordinates."""
        overlap = self._view.intersect(r)
        if overlap is None:
            return None
        rebased = self._view.rebase_rect(overlap)
        return Rect(self._position.scroll(rebased.tl.x, rebased.tl.y), rebased.w, rebased.h)

    def project_line(self, line: Line) -> tuple[int, Line] | None:
        """Map the visible part of a line.

        Returns the number of leading cells clipped from the line along with
        the projected line.
        """
        overlap = self._view.intersect(line.rect())
        if overlap is None:
            return None
        rebased = self._view.rebase_rect(overlap)
        return (
            overlap.tl.x - line.tl.x,
            Line(self._position.scroll(rebased.tl.x, rebased.tl.y), rebased.w),
        )

    def unproject(self, r: Rect) -> Rect:
        """Express a rect in the parent's coordinates relative to our screen rect."""
        return self.screen_rect().rebase_rect(r)

    def map(self, child: Rect) -> ViewPort | None:
        """ViewPort of a child occupying *child* in our canvas, or None if it is out of view."""
        overlap = self._view.intersect(child)
        if overlap is None:
            return None
        rel = self._view.rebase_rect(overlap)
        return ViewPort(
            child.expanse(),
            Rect.new(overlap.tl.x - child.tl.x, overlap.tl.y - child.tl.y, overlap.w, overlap.h),
            Point(self._position.x + rel.tl.x, self._position.y + rel.tl.y),
        )

    # -- scrollbars ---------------------------------------------------------

    def vactive(self, margin: Rect) -> tuple[Rect, Rect, Rect] | None:
        """Vertical scrollbar ``(pre, thumb, post)`` in *margin*, or None if nothing scrolls."""
        if self._view.h == self._canvas.h:
            return None
        pre, active, post = margin.vextent().split_active(
            self._view.vextent(), self._canvas.rect().vextent()
        )
        return margin.vslice(pre), margin.vslice(active), margin.vslice(post)

    def hactive(self, margin: Rect) -> tuple[Rect, Rect, Rect] | None:
        """Horizontal scrollbar ``(pre, thumb, post)`` in *margin*, or None if nothing scrolls."""
        if self._view.w == self._canvas.w:
            return None
        pre, active, post = margin.hextent().split_active(
            self._view.hextent(), self._canvas.rect().hextent()
        )
        return margin.hslice(pre), margin.hslice(active), margin.hslice(post)

    # -- view carving -------------------------------------------------------

    def carve_hstart(self, n: int) -> tuple[Rect, Rect]:
        return self._view.carve_hstart(n)

    def carve_hend(self, n: int) -> tuple[Rect, Rect]:
        return self._view.carve_hend(n)

    def carve_vstart(self, n: int) -> tuple[Rect, Rect]:
        return self._view.carve_vstart(n)

    def carve_vend(self, n: int) -> tuple[Rect, Rect]:
        return self._view.carve_vend(n)

    def split_horizontal(self, n: int) -> list[Rect]:
        return self._view.split_horizontal(n)

    def split_vertical(self, n: int) -> list[Rect]:
        return self._view.split_vertical(n)
