"""Tree queries built on the walk algebra.

:func:`project_walk` is the one descent that maintains a :class:`ViewStack`.
Rendering, hit-testing and focus collection all go through it, so what is
drawn, what can be clicked and what can be focused always agree.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from pi.viewtree.config import Config
from pi.viewtree.geom import Point
from pi.viewtree.node import FocusState, Node, NodeId
from pi.viewtree.viewport import ViewPort
from pi.viewtree.viewstack import Projection, ViewStack
from pi.viewtree.walk import CONTINUE, SKIP, Walk, handle, postorder

T = TypeVar("T")

__all__ = [
    "project_walk",
    "Locate",
    "locate",
    "node_at",
    "walk_to_root",
    "node_path",
    "walk_focus_path",
    "focus_path",
    "is_on_focus_path",
    "is_focus_ancestor",
    "focus_depth",
]

# ---------------------------------------------------------------------------
# Projected descent
# ---------------------------------------------------------------------------


def screen_for(root: Node) -> ViewPort:
    """The default screen for a tree: the root's whole canvas at the origin."""
    return ViewPort.filling(root.vp().canvas.rect())


def project_walk(
    root: Node,
    visit: Callable[[Node, Projection], Walk[T]],
    screen: ViewPort | None = None,
    config: Config | None = None,
) -> Walk[T]:
    """Preorder descent that hands each visible node its :class:`Projection`.

    Hidden nodes and nodes with an empty view are pruned without calling
    *visit*, as are nodes clipped away entirely by their ancestors.  *visit*
    returns SKIP to prune a subtree or a handled value to stop.
    """
    stack = ViewStack(screen if screen is not None else screen_for(root), config)

    def descend(node: Node) -> Walk[T]:
        vp = node.vp()
        if node.is_hidden() or vp.view.is_zero():
            return CONTINUE
        stack.push(vp)
        try:
            proj = stack.projection()
            if proj is None:
                return CONTINUE
            v = visit(node, proj)
            if v.is_handled:
                return v
            if v.is_continue:
                for child in node.children():
                    r = descend(child)
                    if r.is_handled:
                        return r
            return CONTINUE
        finally:
            stack.pop()

    return descend(root)


# ---------------------------------------------------------------------------
# Locate
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Locate(Generic[T]):
    """Result of a :func:`locate` callback.

    - ``Locate.CONTINUE``: record nothing, keep looking in the children.
    - ``Locate.match(v)``: record ``v`` and keep looking in the children.
    - ``Locate.stop(v)``: record ``v`` and ignore the children.
    """

    kind: Literal["continue", "match", "stop"]
    value: T | None = None

    @classmethod
    def match(cls, value: T) -> Locate[T]:
        return cls("match", value)

    @classmethod
    def stop(cls, value: T) -> Locate[T]:
        return cls("stop", value)


Locate.CONTINUE = Locate("continue")  # type: ignore[attr-defined]


def locate(
    root: Node,
    p: Point,
    visit: Callable[[Node], Locate[T]],
    screen: ViewPort | None = None,
) -> T | None:
    """Hit-test the screen point *p*.

    *visit* is called for every visible node whose projected screen rect
    contains *p*, outermost first.  The last value recorded wins.
    """
    found: T | None = None

    def check(node: Node, proj: Projection) -> Walk[Any]:
        nonlocal found
        if not proj.screen.contains_point(p):
            return SKIP
        r = visit(node)
        if r.kind == "continue":
            return CONTINUE
        found = r.value
        return SKIP if r.kind == "stop" else CONTINUE

    project_walk(root, check, screen)
    return found


def node_at(root: Node, p: Point, screen: ViewPort | None = None) -> NodeId | None:
    """The innermost visible node under *p*."""
    return locate(root, p, lambda n: Locate.match(n.id()), screen)


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def walk_to_root(root: Node, id: NodeId, visit: Callable[[Node], Walk[T]]) -> Walk[T]:
    """Call *visit* on the node *id* and then each of its ancestors up to *root*.

    Stops early if *visit* returns a handled value.
    """
    seen = False

    def step(node: Node) -> Walk[T]:
        nonlocal seen
        if seen:
            v = visit(node)
            return v if v.is_handled else CONTINUE
        if node.id() == id:
            seen = True
            v = visit(node)
            return v if v.is_handled else SKIP
        return CONTINUE

    return postorder(root, step)


def node_path(root: Node, id: NodeId) -> list[str]:
    """Names from *root* down to the node *id*.  Empty if it isn't in the tree."""
    path: list[str] = []

    def record(node: Node) -> Walk[Any]:
        path.insert(0, node.name())
        return CONTINUE

    walk_to_root(root, id, record)
    return path


def walk_focus_path(
    root: Node, focus: FocusState, visit: Callable[[Node], Walk[T]]
) -> T | None:
    """Call *visit* on the focused node and each of its ancestors up to *root*.

    Hidden nodes never hold focus.  Returns the handled value, if any.
    """
    seen = False

    def step(node: Node) -> Walk[T]:
        nonlocal seen
        if seen:
            return visit(node)
        if node.is_hidden() or not focus.is_focused(node):
            return CONTINUE
        seen = True
        v = visit(node)
        return v if v.is_handled else SKIP

    return postorder(root, step).handled()


def focus_path(root: Node, focus: FocusState) -> list[str]:
    """Names from *root* down to the focused node.  Empty if nothing below *root* is focused."""
    path: list[str] = []

    def record(node: Node) -> Walk[Any]:
        path.insert(0, node.name())
        return CONTINUE

    walk_focus_path(root, focus, record)
    return path


def is_on_focus_path(focus: FocusState, node: Node) -> bool:
    """True if *node* is focused or has a focused descendant."""
    return bool(walk_focus_path(node, focus, lambda _: handle(True)))


def is_focus_ancestor(focus: FocusState, node: Node) -> bool:
    """True if a strict descendant of *node* is focused."""
    return not focus.is_focused(node) and is_on_focus_path(focus, node)


def focus_depth(focus: FocusState, node: Node) -> int:
    """Length of the focus path from the focused node up to *node*.

    1 when *node* itself is focused, 0 when it isn't on the focus path.
    """
    total = 0

    def count(_: Node) -> Walk[Any]:
        nonlocal total
        total += 1
        return CONTINUE

    walk_focus_path(node, focus, count)
    return total
