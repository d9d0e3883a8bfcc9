"""
Bonsai Generation Module

Procedural 2-D fractal trees revealed over discrete growth stages.

Modules:
    geometry: Point and Branch primitives, angle helpers
    config: Generation and growth configuration
    trunk: Root branch construction
    branching: Recursive depth-tiered branch generation
    builder: Full tree generation in generation order
    growth: Growth stage counter
    visibility: Visible branches and leaf synthesis per stage
    tree: The Bonsai handle (grow / reset / get_visible_elements)
    preview: Matplotlib previews of snapshots
"""

from bonsai.builder import TreeSkeleton, build_tree
from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch, Point, direction_angle, end_point
from bonsai.growth import GrowthController
from bonsai.tree import Bonsai
from bonsai.trunk import create_trunk
from bonsai.visibility import VisibleElements, visible_elements

__all__ = [
    "Bonsai",
    "BonsaiConfig",
    "Branch",
    "GrowthController",
    "Point",
    "TreeSkeleton",
    "VisibleElements",
    "build_tree",
    "create_trunk",
    "direction_angle",
    "end_point",
    "visible_elements",
]
