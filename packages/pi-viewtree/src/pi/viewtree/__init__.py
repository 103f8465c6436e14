"""pi-viewtree: viewport composition, tree traversal and focus navigation for terminal UIs."""

# Configuration
from pi.viewtree.config import Config, load_config

# Focus navigation
from pi.viewtree.focus import (
    FocusableNode,
    collect_focusable_nodes,
    find_focus_target,
    find_focused_node,
    focus_dir,
    focus_down,
    focus_first,
    focus_left,
    focus_right,
    focus_up,
    shift_next,
    shift_prev,
)

# Geometry
from pi.viewtree.geom import (
    Direction,
    Expanse,
    GeometryError,
    Line,
    LineSegment,
    Point,
    Rect,
    split,
)

# Nodes
from pi.viewtree.node import FocusState, Node, NodeId, NodeState, Widget

# Rendering
from pi.viewtree.render import Render, TermBuf, render_tree
from pi.viewtree.text import cell_width, truncate_to_width, visible_width

# Tree queries
from pi.viewtree.tree import (
    Locate,
    focus_depth,
    focus_path,
    is_focus_ancestor,
    is_on_focus_path,
    locate,
    node_at,
    node_path,
    project_walk,
    walk_focus_path,
    walk_to_root,
)

# Viewports
from pi.viewtree.viewport import ViewPort
from pi.viewtree.viewstack import Projection, ViewStack

# Traversal
from pi.viewtree.walk import CONTINUE, SKIP, Walk, handle, postorder, preorder

__all__ = [
    # Configuration
    "Config",
    "load_config",
    # Focus navigation
    "FocusableNode",
    "collect_focusable_nodes",
    "find_focus_target",
    "find_focused_node",
    "focus_dir",
    "focus_down",
    "focus_first",
    "focus_left",
    "focus_right",
    "focus_up",
    "shift_next",
    "shift_prev",
    # Geometry
    "Direction",
    "Expanse",
    "GeometryError",
    "Line",
    "LineSegment",
    "Point",
    "Rect",
    "split",
    # Nodes
    "FocusState",
    "Node",
    "NodeId",
    "NodeState",
    "Widget",
    # Rendering
    "Render",
    "TermBuf",
    "render_tree",
    "cell_width",
    "truncate_to_width",
    "visible_width",
    # Tree queries
    "Locate",
    "focus_depth",
    "focus_path",
    "is_focus_ancestor",
    "is_on_focus_path",
    "locate",
    "node_at",
    "node_path",
    "project_walk",
    "walk_focus_path",
    "walk_to_root",
    # Viewports
    "ViewPort",
    "Projection",
    "ViewStack",
    # Traversal
    "CONTINUE",
    "SKIP",
    "Walk",
    "handle",
    "postorder",
    "preorder",
]
