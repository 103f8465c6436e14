"""Walk: tri-state traversal control and the generic tree traversals.

A visitor returns one of:

- ``CONTINUE``: keep going.
- ``SKIP``: prune.  In a preorder walk this skips the node's children; in a
  postorder walk it stops sibling visitation and marks the path back to the
  root as skipped.
- ``handle(value)``: stop the whole traversal and return ``value``.

Exceptions raised by a visitor propagate out of the traversal unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, TypeVar

T = TypeVar("T")

WalkKind = Literal["continue", "skip", "handle"]


class HasChildren(Protocol):
    def children(self) -> Iterable[Any]: ...


N = TypeVar("N", bound=HasChildren)


@dataclass(frozen=True, slots=True)
class Walk(Generic[T]):
    kind: WalkKind
    value: T | None = None

    @property
    def is_continue(self) -> bool:
        return self.kind == "continue"

    @property
    def is_skip(self) -> bool:
        return self.kind == "skip"

    @property
    def is_handled(self) -> bool:
        return self.kind == "handle"

    def handled(self) -> T | None:
        """The handled value, or None if the walk was not handled."""
        return self.value if self.kind == "handle" else None

    def __repr__(self) -> str:
        if self.kind == "handle":
            return f"Walk.handle({self.value!r})"
        return f"Walk.{self.kind.upper()}"


CONTINUE: Walk[Any] = Walk("continue")
SKIP: Walk[Any] = Walk("skip")


def handle(value: T) -> Walk[T]:
    return Walk("handle", value)


def preorder(node: N, visit: Callable[[N], Walk[T]]) -> Walk[T]:
    """Visit *node* and then, if it returned CONTINUE, its children.

    A child's SKIP prunes only that child's subtree.  The result is never
    SKIP: either CONTINUE or the first handled value.
    """
    v = visit(node)
    if v.is_handled:
        return v
    if v.is_continue:
        for child in node.children():
            r = preorder(child, visit)
            if r.is_handled:
                return r
    return CONTINUE


def postorder(node: N, visit: Callable[[N], Walk[T]]) -> Walk[T]:
    """Visit the children of *node*, then *node* itself.

    A non-CONTINUE result from a child stops the remaining siblings.  If it
    was SKIP, *node* is still visited and a CONTINUE from it is promoted to
    SKIP, so the skip travels up the path to the root.  A handled result
    returns immediately without visiting any more nodes.
    """
    skipped = False
    for child in node.children():
        r = postorder(child, visit)
        if r.is_handled:
            return r
        if r.is_skip:
            skipped = True
            break

    v = visit(node)
    if skipped and v.is_continue:
        return SKIP
    return v
