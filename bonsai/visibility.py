"""
Visible subset of a skeleton at a growth stage.

Growth reveals the tree in the exact order it was generated: stage s of
max_growth shows the first floor(n * s / max_growth) branches (at least
the trunk). Once the stage passes the bloom threshold, every visible tip
sprouts a small cluster of leaf points. Leaves are drawn fresh on every
call and are not cached.
"""

from typing import NamedTuple

import numpy as np

from bonsai.branching import horizontal_offset, upward_pull
from bonsai.builder import TreeSkeleton
from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch, Point, end_point


class VisibleElements(NamedTuple):
    """Snapshot handed to a renderer."""

    branches: list[Branch]
    leaves: list[Point]


def visible_branch_count(total: int, stage: int, max_growth: int) -> int:
    """Number of branches revealed at `stage` (never less than one)."""
    return max(1, total * stage // max_growth)


def synthesize_leaves(
    tip: Branch,
    width: float,
    config: BonsaiConfig,
    rng: np.random.Generator,
) -> list[Point]:
    """
    Cluster of leaf points around the end of `tip`.

    Leaves fan out from the tip direction, biased upward and nudged toward
    the canvas center so the crown stays balanced.
    """
    base_angle = tip.angle
    lean = upward_pull(base_angle, config.leaf_upward_bias)
    centering = -config.leaf_centering * horizontal_offset(tip.end.x, width)

    leaves = []
    for _ in range(config.leaves_per_tip):
        spread = (rng.random() - 0.5) * config.leaf_spread
        distance = config.leaf_size * (0.8 + rng.random() * 0.4)
        leaves.append(end_point(tip.end, distance, base_angle + lean + centering + spread))
    return leaves


def visible_elements(
    skeleton: TreeSkeleton,
    stage: int,
    config: BonsaiConfig,
    rng: np.random.Generator,
) -> VisibleElements:
    """
    Branches and leaves to draw at `stage`.

    Args:
        skeleton: Fully generated tree
        stage: Current growth stage in [0, max_growth]
        config: Configuration the skeleton was built with
        rng: Source for leaf placement

    Returns:
        VisibleElements with the generation-order prefix and its leaves
    """
    count = visible_branch_count(len(skeleton.branches), stage, config.max_growth)
    branches = list(skeleton.branches[:count])

    leaves: list[Point] = []
    if stage > config.bloom_threshold:
        for branch in branches:
            if branch.is_tip:
                leaves.extend(synthesize_leaves(branch, skeleton.width, config, rng))

    return VisibleElements(branches=branches, leaves=leaves)
