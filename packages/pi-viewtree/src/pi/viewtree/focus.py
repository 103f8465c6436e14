"""Focus navigation.

Two independent schemes:

- Directional: collect every visible focusable node with its screen rect,
  then pick the best candidate in the requested direction from the focused
  node's rect.
- Snake: step through focusable nodes in preorder, ignoring geometry and
  wrapping at both ends.

Every mutator takes the :class:`FocusState` explicitly and returns whether
focus moved.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pi.viewtree.config import Config, load_config
from pi.viewtree.geom import Direction, Rect
from pi.viewtree.node import FocusState, Node, NodeId
from pi.viewtree.tree import project_walk
from pi.viewtree.viewport import ViewPort
from pi.viewtree.viewstack import Projection
from pi.viewtree.walk import CONTINUE, SKIP, Walk, handle, preorder

logger = logging.getLogger(__name__)

__all__ = [
    "FocusableNode",
    "collect_focusable_nodes",
    "find_focus_target",
    "find_focused_node",
    "focus_dir",
    "focus_right",
    "focus_left",
    "focus_up",
    "focus_down",
    "focus_first",
    "shift_next",
    "shift_prev",
]


@dataclass(frozen=True, slots=True)
class FocusableNode:
    """A focusable node and its absolute screen rect."""

    id: NodeId
    rect: Rect


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------


def collect_focusable_nodes(
    root: Node, screen: ViewPort | None = None, config: Config | None = None
) -> list[FocusableNode]:
    """Every visible node that accepts focus, in preorder, with its screen rect."""
    nodes: list[FocusableNode] = []

    def record(node: Node, proj: Projection) -> Walk[Any]:
        if node.accept_focus():
            nodes.append(FocusableNode(node.id(), proj.screen))
        return CONTINUE

    project_walk(root, record, screen, config)
    return nodes


def find_focused_node(
    root: Node, focus: FocusState, nodes: Sequence[FocusableNode]
) -> FocusableNode | None:
    """The entry in *nodes* for the focused node, if it is there."""

    def check(node: Node) -> Walk[NodeId]:
        return handle(node.id()) if focus.is_focused(node) else CONTINUE

    focused = preorder(root, check).handled()
    if focused is None:
        return None
    for n in nodes:
        if n.id == focused:
            return n
    return None


# ---------------------------------------------------------------------------
# Directional scoring
# ---------------------------------------------------------------------------


def _axes(cur: Rect, cand: Rect, direction: Direction) -> tuple[int, int, int, int, int, int]:
    """Normalize a pair of rects so the move always runs towards larger values.

    Returns ``(cur_near, cur_far, cand_near, cand_far, cur_cross, cand_cross)``
    where near/far are positions along the movement axis, and cross is the
    top-left coordinate on the other axis.
    """
    if direction is Direction.RIGHT:
        return cur.tl.x, cur.far_x, cand.tl.x, cand.far_x, cur.tl.y, cand.tl.y
    if direction is Direction.LEFT:
        return -cur.far_x, -cur.tl.x, -cand.far_x, -cand.tl.x, cur.tl.y, cand.tl.y
    if direction is Direction.DOWN:
        return cur.tl.y, cur.far_y, cand.tl.y, cand.far_y, cur.tl.x, cand.tl.x
    return -cur.far_y, -cur.tl.y, -cand.far_y, -cand.tl.y, cur.tl.x, cand.tl.x


def _score(cur: Rect, cand: Rect, direction: Direction, row_penalty: int) -> int | None:
    """Score *cand* for a move from *cur*, lower is better.  None if it doesn't qualify."""
    cur_near, cur_far, cand_near, cand_far, cur_cross, cand_cross = _axes(cur, cand, direction)

    if cand_near >= cur_far:
        gap = cand_near - cur_far
    elif cand_far > cur_near and cand_near > cur_near and cand_far > cur_far:
        gap = 0
    else:
        return None

    offset = abs(cand_cross - cur_cross)
    if offset == 0:
        return gap
    return row_penalty * offset + gap


def find_focus_target(
    current_rect: Rect,
    direction: Direction,
    candidates: Sequence[FocusableNode],
    current_id: NodeId | None,
    row_penalty: int | None = None,
) -> NodeId | None:
    """Pick the best candidate to move focus to, or None if nothing lies that way.

    A candidate qualifies if it starts at or beyond the current rect's far
    edge in *direction* (abutting rects have a gap of zero), or if it
    overlaps the current rect on the movement axis while extending further
    in *direction* on both edges.  Where it sits on the cross axis only
    affects its score.

    Candidates aligned with the current rect (same top row for left/right
    moves, same left column for up/down) rank by gap alone.  Every cell of
    misalignment costs *row_penalty*, so an aligned candidate always beats a
    nearer misaligned one.  Ties go to the earlier candidate.
    """
    if row_penalty is None:
        row_penalty = load_config().row_penalty

    best: NodeId | None = None
    best_score = 0
    for cand in candidates:
        if cand.id == current_id:
            continue
        score = _score(current_rect, cand.rect, direction, row_penalty)
        if score is None:
            continue
        if best is None or score < best_score:
            best, best_score = cand.id, score
    return best


# ---------------------------------------------------------------------------
# Mutators
# ---------------------------------------------------------------------------


def _focus_id(root: Node, focus: FocusState, id: NodeId) -> bool:
    def check(node: Node) -> Walk[bool]:
        if node.id() == id:
            return handle(focus.set_focus(node))
        return CONTINUE

    return bool(preorder(root, check).handled())


def focus_dir(
    root: Node,
    focus: FocusState,
    direction: Direction,
    screen: ViewPort | None = None,
    config: Config | None = None,
) -> bool:
    """Move focus in *direction*.  Returns False and leaves focus alone if there is no target."""
    config = config if config is not None else load_config()
    with focus.exclusive():
        nodes = collect_focusable_nodes(root, screen, config)
        current = find_focused_node(root, focus, nodes)
        if current is None:
            logger.debug("focus %s: no visible focused node", direction.value)
            return False
        target = find_focus_target(current.rect, direction, nodes, current.id, config.row_penalty)
        if target is None:
            logger.debug("focus %s: nothing beyond %s", direction.value, current.id)
            return False
        return _focus_id(root, focus, target)


def focus_right(root: Node, focus: FocusState) -> bool:
    return focus_dir(root, focus, Direction.RIGHT)


def focus_left(root: Node, focus: FocusState) -> bool:
    return focus_dir(root, focus, Direction.LEFT)


def focus_up(root: Node, focus: FocusState) -> bool:
    return focus_dir(root, focus, Direction.UP)


def focus_down(root: Node, focus: FocusState) -> bool:
    return focus_dir(root, focus, Direction.DOWN)


# ---------------------------------------------------------------------------
# Snake navigation
# ---------------------------------------------------------------------------


def _focus_first(root: Node, focus: FocusState) -> bool:
    def check(node: Node) -> Walk[bool]:
        if node.is_hidden():
            return SKIP
        if node.accept_focus():
            return handle(focus.set_focus(node))
        return CONTINUE

    return bool(preorder(root, check).handled())


def _focusable(root: Node) -> list[Node]:
    out: list[Node] = []

    def check(node: Node) -> Walk[Any]:
        if node.is_hidden():
            return SKIP
        if node.accept_focus():
            out.append(node)
        return CONTINUE

    preorder(root, check)
    return out


def focus_first(root: Node, focus: FocusState) -> bool:
    """Focus the first focusable node in preorder."""
    with focus.exclusive():
        return _focus_first(root, focus)


def shift_next(root: Node, focus: FocusState) -> bool:
    """Focus the next focusable node after the focused one, wrapping to the first."""
    with focus.exclusive():
        seen = False

        def check(node: Node) -> Walk[bool]:
            nonlocal seen
            if node.is_hidden():
                return SKIP
            if seen:
                if node.accept_focus():
                    return handle(focus.set_focus(node))
            elif focus.is_focused(node):
                seen = True
            return CONTINUE

        moved = preorder(root, check).handled()
        if moved is None:
            return _focus_first(root, focus)
        return moved


def shift_prev(root: Node, focus: FocusState) -> bool:
    """Focus the focusable node before the focused one, wrapping to the last."""
    with focus.exclusive():
        nodes = _focusable(root)
        if not nodes:
            return False
        idx = next((i for i, n in enumerate(nodes) if focus.is_focused(n)), 0)
        return focus.set_focus(nodes[idx - 1])
