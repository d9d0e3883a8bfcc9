"""
Trunk construction.

The trunk is anchored at the horizontal center, 90% of the way down the
canvas, and extends by a fixed fraction of the canvas height along the
configured initial angle. Zero dimensions give a zero-length trunk and a
negative height flips it; both are valid input for branch generation.
"""

from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch, Point, end_point


def trunk_base(width: float, height: float) -> Point:
    """Canonical anchor of the trunk on the canvas."""
    return Point(width / 2, height * 0.9)


def create_trunk(width: float, height: float, config: BonsaiConfig) -> Branch:
    """Build the root branch for a `width` x `height` canvas."""
    start = trunk_base(width, height)
    length = height * config.trunk_length_fraction
    return Branch(
        start=start,
        end=end_point(start, length, config.initial_angle),
        thickness=config.trunk_thickness,
        color=config.trunk_color,
        depth=0,
    )
