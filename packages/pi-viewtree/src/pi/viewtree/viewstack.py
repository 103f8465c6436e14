"""ViewStack: compose nested viewports into an absolute screen rectangle."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pi.viewtree.config import Config, load_config
from pi.viewtree.geom import GeometryError, Point, Rect
from pi.viewtree.viewport import ViewPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Projection:
    """Visible region of a node.

    ``canvas`` is the visible part of the node's canvas, ``screen`` the
    absolute screen rectangle it is drawn into.  Both are the same size.
    """

    canvas: Rect
    screen: Rect


class ViewStack:
    """Stack of ancestor viewports built up during a tree descent.

    The base viewport is the screen: its view size is the screen size and
    it can never be popped.
    """

    def __init__(self, initial: ViewPort, config: Config | None = None) -> None:
        self._views: list[ViewPort] = [initial]
        self._config = config if config is not None else load_config()

    def __len__(self) -> int:
        return len(self._views)

    def push(self, vp: ViewPort) -> None:
        parent = self._views[-1].canvas.rect()
        if not parent.contains_point(vp.position) and not vp.view.is_zero():
            msg = f"viewport position {vp.position} is outside parent canvas {parent}"
            if self._config.strict_viewstack:
                raise GeometryError(msg)
            logger.warning(msg)
        self._views.append(vp)

    def pop(self) -> ViewPort:
        if len(self._views) <= 1:
            raise GeometryError("cannot pop the base viewport from the stack")
        return self._views.pop()

    def top(self) -> ViewPort:
        return self._views[-1]

    def root_screen(self) -> Rect:
        """The screen rectangle, anchored at the origin."""
        v = self._views[0].view
        return Rect.new(0, 0, v.w, v.h)

    def projection(self) -> Projection | None:
        """Project the top viewport onto the screen.

        Returns None if the top viewport is entirely clipped away by its
        ancestors.
        """
        first = self._views[0]
        clip = Rect.new(0, 0, first.view.w, first.view.h)
        if clip.is_zero():
            return None
        if len(self._views) == 1:
            return Projection(first.view, clip)

        # Screen coordinates of the current view's top-left.  Can go negative
        # when an ancestor has scrolled part of a child off the top or left.
        ox = oy = 0
        for parent, vp in zip(self._views, self._views[1:]):
            ox += vp.position.x - parent.view.tl.x
            oy += vp.position.y - parent.view.tl.y

            x, y = max(ox, 0), max(oy, 0)
            w = vp.view.w - (x - ox)
            h = vp.view.h - (y - oy)
            if w <= 0 or h <= 0:
                return None
            clip = clip.intersect(Rect.new(x, y, w, h))
            if clip is None:
                return None

        view = self._views[-1].view
        canvas = Rect(
            Point(view.tl.x + clip.tl.x - ox, view.tl.y + clip.tl.y - oy),
            clip.w,
            clip.h,
        )
        return Projection(canvas, clip)
