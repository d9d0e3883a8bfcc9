"""
Recursive branch generation.

Expands a branch into child branches using depth-tiered rules:
    1. Branching factor shrinks with depth (floor of `min_branching`)
    2. Each candidate survives a probability gate, so the fan is sparse
    3. Deviation from the parent's direction is tiered by depth, jittered,
       and biased back toward vertical
    4. A soft droop clamp rotates branches that lean too far back up
    5. Length and thickness are multiples of the parent's thickness
    6. Candidates that would end below the canvas floor are dropped

Every created branch is appended to a shared list in pre-order, which is
the order growth later reveals them in.
"""

import math
from dataclasses import dataclass

import numpy as np

from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch, end_point


@dataclass(frozen=True)
class BranchingContext:
    """Everything generation needs besides the branch itself."""

    config: BonsaiConfig
    rng: np.random.Generator
    width: float
    height: float

    @property
    def floor_y(self) -> float | None:
        if self.config.canvas_floor is None:
            return None
        return self.height * self.config.canvas_floor


def branching_factor(depth: int, config: BonsaiConfig) -> int:
    """Upper bound on candidate children at `depth`."""
    return max(config.min_branching, config.base_branching - depth)


def upward_pull(angle: float, bias: float) -> float:
    """
    Correction moving `angle` toward vertical by at most `bias`.

    Never overshoots: an angle already within `bias` of vertical is pulled
    exactly to 0.
    """
    return -math.copysign(min(abs(angle), bias), angle)


def horizontal_offset(x: float, width: float) -> float:
    """Signed distance from the canvas center, in half-widths, clipped to [-1, 1]."""
    half_width = width / 2
    if half_width <= 0:
        return 0.0
    return float(np.clip((x - half_width) / half_width, -1.0, 1.0))


def deviation_angle(
    depth: int,
    index: int,
    base_angle: float,
    tip_x: float,
    context: BranchingContext,
) -> float:
    """
    Deviation of candidate `index` from its parent's direction.

    Args:
        depth: Depth of the parent branch
        index: Candidate index among the parent's children
        base_angle: Parent direction relative to vertical
        tip_x: x of the parent's end point
        context: Generation context (config, rng, canvas)

    Returns:
        Angle to add to `base_angle` (before the droop clamp)
    """
    config = context.config
    rng = context.rng

    if depth == 0:
        side = 1.0 if index % 2 == 0 else -1.0
        spread, jitter, bias = config.trunk_spread, config.trunk_jitter, config.trunk_upward_bias
    elif depth == 1:
        side = 1.0 if (depth + index) % 2 == 0 else -1.0
        spread, jitter, bias = config.limb_spread, config.limb_jitter, config.limb_upward_bias
    else:
        side = 1.0 if rng.random() < 0.5 else -1.0
        spread, jitter, bias = config.twig_spread, config.twig_jitter, config.twig_upward_bias

    deviation = side * spread + rng.uniform(-jitter, jitter)
    deviation += upward_pull(base_angle + deviation, bias)

    if depth >= 2:
        deviation -= config.centering_bias * horizontal_offset(tip_x, context.width)

    return deviation


def clamp_droop(base_angle: float, deviation: float, config: BonsaiConfig) -> float:
    """Soft clamp: rotate a drooping branch back by a fixed correction."""
    final_angle = base_angle + deviation
    if abs(final_angle) > config.max_downward_angle:
        deviation -= math.copysign(config.droop_correction, final_angle)
    return deviation


def branch_color(depth: int, config: BonsaiConfig, rng: np.random.Generator) -> str:
    """Display color of a branch at `depth`."""
    base = config.branch_color
    if config.foliage_depth is not None and depth > config.foliage_depth:
        base = config.foliage_color
    if config.color_jitter <= 0:
        return base

    rgb = np.array([int(base[i:i + 2], 16) for i in (1, 3, 5)])
    rgb += rng.integers(-config.color_jitter, config.color_jitter + 1, size=3)
    r, g, b = np.clip(rgb, 0, 255)
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def generate_branches(
    branch: Branch,
    depth: int,
    context: BranchingContext,
    flattened: list[Branch],
) -> None:
    """
    Populate `branch.children` recursively.

    Children are appended to `flattened` as they are created, each one
    fully expanded before its next sibling. Does nothing once `depth`
    reaches `max_growth`.
    """
    config = context.config
    rng = context.rng

    if depth >= config.max_growth:
        branch.is_tip = not branch.children
        return

    floor_y = context.floor_y
    num_candidates = int(rng.integers(1, branching_factor(depth, config) + 1))

    for i in range(num_candidates):
        if rng.random() > config.branch_probability:
            continue

        base_angle = branch.angle
        deviation = deviation_angle(depth, i, base_angle, branch.end.x, context)
        deviation = clamp_droop(base_angle, deviation, config)

        length = branch.thickness * (config.length_multiplier + rng.random() * config.length_jitter)
        thickness = branch.thickness * (config.falloff_base + rng.random() * config.falloff_jitter)
        color = branch_color(depth + 1, config, rng)

        end = end_point(branch.end, length, base_angle + deviation)
        if floor_y is not None and end.y > floor_y:
            continue

        child = Branch(
            start=branch.end,
            end=end,
            thickness=thickness,
            color=color,
            depth=depth + 1,
        )
        branch.children.append(child)
        flattened.append(child)
        generate_branches(child, depth + 1, context, flattened)

    branch.is_tip = not branch.children
