"""Node capability, per-node state, the ``Widget`` base class and ``FocusState``.

Any object satisfying the :class:`Node` protocol can be laid out, rendered,
hit-tested and navigated.  :class:`Widget` is a ready-made implementation to
subclass.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from pi.viewtree.geom import Expanse, Rect
from pi.viewtree.viewport import ViewPort

if TYPE_CHECKING:
    from pi.viewtree.render import Render

logger = logging.getLogger(__name__)

__all__ = [
    "NodeId",
    "NodeState",
    "Node",
    "Widget",
    "FocusState",
]

_serials = itertools.count(1)

# ---------------------------------------------------------------------------
# Identity and state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NodeId:
    """Stable identity of a node: its name plus a process-unique serial."""

    name: str
    serial: int

    @classmethod
    def new(cls, name: str) -> NodeId:
        return cls(name, next(_serials))

    def __str__(self) -> str:
        return f"{self.name}#{self.serial}"


@dataclass
class NodeState:
    """Bookkeeping every node carries.

    ``focus_gen`` is stamped by :meth:`FocusState.set_focus`; a node is
    focused when its stamp equals the current generation.
    """

    id: NodeId
    vp: ViewPort = field(default_factory=ViewPort)
    hidden: bool = False
    focus_gen: int = 0

    @classmethod
    def named(cls, name: str) -> NodeState:
        return cls(NodeId.new(name))


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class Node(Protocol):
    """A node in the widget tree.

    ``render(r)`` is optional -- checked at call-sites via ``getattr``.
    """

    state: NodeState

    def id(self) -> NodeId: ...

    def name(self) -> str: ...

    def vp(self) -> ViewPort: ...

    def is_hidden(self) -> bool: ...

    def accept_focus(self) -> bool: ...

    def children(self) -> Iterable[Node]: ...


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------


class Widget:
    """Base class implementing :class:`Node`.

    Children are kept in insertion order, which is also traversal order.
    Subclasses override :meth:`accept_focus` and :meth:`render`.
    """

    def __init__(self, name: str | None = None) -> None:
        self.state = NodeState.named(name or type(self).__name__.lower())
        self._children: list[Widget] = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.state.id}>"

    # -- Node ---------------------------------------------------------------

    def id(self) -> NodeId:
        return self.state.id

    def name(self) -> str:
        return self.state.id.name

    def vp(self) -> ViewPort:
        return self.state.vp

    def is_hidden(self) -> bool:
        return self.state.hidden

    def accept_focus(self) -> bool:
        return False

    def children(self) -> list[Widget]:
        return self._children

    def render(self, r: Render) -> None:
        """Draw into *r*.  The default draws nothing."""

    # -- children -----------------------------------------------------------

    def add_child(self, child: Widget) -> None:
        """Append *child* to the children list."""
        self._children.append(child)

    def remove_child(self, child: Widget) -> None:
        """Remove *child* from the children list (no-op if absent)."""
        try:
            self._children.remove(child)
        except ValueError:
            pass

    def clear(self) -> None:
        """Remove all children."""
        self._children.clear()

    # -- visibility ---------------------------------------------------------

    def hide(self) -> None:
        self.state.hidden = True

    def show(self) -> None:
        self.state.hidden = False

    # -- layout helpers -----------------------------------------------------

    def fill(self, size: Expanse) -> None:
        """Make canvas and view exactly *size*, with nothing scrolled."""
        self.state.vp.set_canvas(size)
        self.state.vp.set_view(size.rect())

    def place(self, rect: Rect) -> None:
        """Position this node at *rect* in its parent's canvas and fill it."""
        self.fill(rect.expanse())
        self.state.vp.set_position(rect.tl)

    def scroll_to(self, x: int, y: int) -> None:
        self.state.vp.scroll_to(x, y)

    def scroll_by(self, dx: int, dy: int) -> None:
        self.state.vp.scroll_by(dx, dy)


# ---------------------------------------------------------------------------
# FocusState
# ---------------------------------------------------------------------------


class FocusState:
    """Owner of the focus generation counter.

    Exactly one node carries the current generation: the one most recently
    passed to :meth:`set_focus`.  Nodes start at generation 0 and the
    counter at 1, so nothing is focused initially.
    """

    def __init__(self) -> None:
        self._gen = 1
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._gen

    def is_focused(self, node: Node) -> bool:
        return node.state.focus_gen == self._gen

    def set_focus(self, node: Node) -> bool:
        """Focus *node*.  Returns True if focus changed."""
        if self.is_focused(node):
            return False
        self._gen += 1
        node.state.focus_gen = self._gen
        logger.debug("focus -> %s", node.id())
        return True

    @contextmanager
    def exclusive(self) -> Iterator[FocusState]:
        """Hold the single-writer guard for the duration of a tree mutation.

        Nested use raises :class:`RuntimeError`.
        """
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("focus state is already being mutated")
        try:
            yield self
        finally:
            self._lock.release()
