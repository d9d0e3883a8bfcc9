"""
Configuration for bonsai generation and growth.

Every tunable constant of the generator, the growth stages and the leaf
synthesis lives in `BonsaiConfig`. Angles are in radians, measured from
vertical with positive values leaning right (see `bonsai.geometry`).

Branch deviation is tiered by depth:
    depth 0:  wide bilateral spread, strong upward bias
    depth 1:  moderate spread, weaker upward bias
    depth 2+: narrow random spread, weakest bias, plus a centering pull
"""

import math
import re
from dataclasses import dataclass, replace

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")

_INT_FIELDS = (
    "max_growth",
    "bloom_threshold",
    "base_branching",
    "min_branching",
    "leaves_per_tip",
    "color_jitter",
    "foliage_depth",
)
_OPTIONAL_FIELDS = ("foliage_depth",)


@dataclass(frozen=True)
class BonsaiConfig:
    """
    Complete generation configuration.

    Defaults reproduce a compact, upright bonsai on a few-hundred-pixel
    canvas. Instances are immutable; derive variants with `with_changes`.
    """

    # Growth stages
    # max_growth is both the recursion depth bound and the stage ceiling
    max_growth: int = 10
    bloom_threshold: int = 3  # Leaves appear once stage exceeds this

    # Trunk
    trunk_length_fraction: float = 0.15  # Trunk length as a fraction of height
    trunk_thickness: float = 16.0
    initial_angle: float = 0.0  # Trunk tilt, 0 = vertical

    # Branching
    base_branching: int = 4  # Branching factor at depth 0, minus one per level
    min_branching: int = 2  # Floor of the branching factor
    branch_probability: float = 0.85  # Chance each candidate becomes a branch

    # Depth-tiered deviation: (spread, jitter, upward bias)
    trunk_spread: float = math.pi / 4
    trunk_jitter: float = math.pi / 8
    trunk_upward_bias: float = math.pi / 16
    limb_spread: float = math.pi / 6
    limb_jitter: float = math.pi / 8
    limb_upward_bias: float = math.pi / 24
    twig_spread: float = math.pi / 10
    twig_jitter: float = math.pi / 6
    twig_upward_bias: float = math.pi / 48
    centering_bias: float = math.pi / 18  # Max pull back toward the trunk's x

    # Droop clamp (soft): past max_downward_angle, rotate back by droop_correction
    max_downward_angle: float = math.pi / 3
    droop_correction: float = math.pi / 6

    # Length and thickness falloff (both multiply the parent's thickness)
    length_multiplier: float = 2.2
    length_jitter: float = 1.0
    falloff_base: float = 0.65
    falloff_jitter: float = 0.1

    # Reject branches ending below this fraction of the canvas height
    canvas_floor: float | None = 0.95

    # Colors (cosmetic only)
    trunk_color: str = "#4a3728"
    branch_color: str = "#4a3728"
    foliage_color: str = "#5b7f3a"
    foliage_depth: int | None = None  # Tint branches deeper than this
    color_jitter: int = 0  # Max per-channel RGB perturbation

    # Leaves
    leaves_per_tip: int = 6
    leaf_size: float = 6.0
    leaf_upward_bias: float = math.pi / 3
    leaf_spread: float = math.pi / 2
    leaf_centering: float = math.pi / 12

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if value is None and name in _OPTIONAL_FIELDS:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {value!r}")
        if self.max_growth <= 0:
            raise ValueError(f"max_growth must be positive, got {self.max_growth}")
        if self.bloom_threshold < 0:
            raise ValueError(
                f"bloom_threshold must be nonnegative, got {self.bloom_threshold}"
            )
        if self.min_branching < 1:
            raise ValueError(
                f"min_branching must be at least 1, got {self.min_branching}"
            )
        if self.base_branching < self.min_branching:
            raise ValueError(
                "base_branching must be >= min_branching "
                f"({self.base_branching} < {self.min_branching})"
            )
        if not 0.0 < self.branch_probability <= 1.0:
            raise ValueError(
                f"branch_probability must be in (0, 1], got {self.branch_probability}"
            )
        if self.trunk_thickness <= 0:
            raise ValueError(
                f"trunk_thickness must be positive, got {self.trunk_thickness}"
            )
        if self.trunk_length_fraction < 0:
            raise ValueError(
                "trunk_length_fraction must be nonnegative, "
                f"got {self.trunk_length_fraction}"
            )
        if self.length_multiplier <= 0 or self.length_jitter < 0:
            raise ValueError(
                "length_multiplier must be positive and length_jitter nonnegative"
            )
        if self.falloff_base <= 0 or self.falloff_jitter < 0:
            raise ValueError("falloff_base must be positive and falloff_jitter nonnegative")
        if self.falloff_base + self.falloff_jitter >= 1.0:
            raise ValueError(
                "falloff_base + falloff_jitter must stay below 1 so thickness "
                f"shrinks with depth, got {self.falloff_base + self.falloff_jitter}"
            )
        if self.max_downward_angle <= 0:
            raise ValueError(
                f"max_downward_angle must be positive, got {self.max_downward_angle}"
            )
        if self.droop_correction < 0:
            raise ValueError(
                f"droop_correction must be nonnegative, got {self.droop_correction}"
            )
        if self.canvas_floor is not None and self.canvas_floor <= 0:
            raise ValueError(
                f"canvas_floor must be positive or None, got {self.canvas_floor}"
            )
        if self.foliage_depth is not None and self.foliage_depth < 0:
            raise ValueError(
                f"foliage_depth must be nonnegative or None, got {self.foliage_depth}"
            )
        if not 0 <= self.color_jitter <= 255:
            raise ValueError(f"color_jitter must be in [0, 255], got {self.color_jitter}")
        if self.leaves_per_tip < 1:
            raise ValueError(
                f"leaves_per_tip must be at least 1, got {self.leaves_per_tip}"
            )
        if self.leaf_size < 0:
            raise ValueError(f"leaf_size must be nonnegative, got {self.leaf_size}")
        for name in ("trunk_color", "branch_color", "foliage_color"):
            value = getattr(self, name)
            if not _HEX_COLOR.match(value):
                raise ValueError(f"{name} must be a '#rrggbb' string, got {value!r}")

    def with_changes(self, **changes) -> "BonsaiConfig":
        """Copy with some fields replaced (validation runs again)."""
        return replace(self, **changes)

    @classmethod
    def classic(cls) -> "BonsaiConfig":
        """Upright brown bonsai with the default parameters."""
        return cls()

    @classmethod
    def windswept(cls) -> "BonsaiConfig":
        """A tilted trunk that keeps leaning, like a cliffside tree."""
        return cls(
            initial_angle=math.pi / 10,
            trunk_upward_bias=math.pi / 32,
            limb_upward_bias=0.0,
            twig_upward_bias=0.0,
            centering_bias=0.0,
            leaf_centering=0.0,
            max_downward_angle=math.pi / 2.5,
        )

    @classmethod
    def flourishing(cls) -> "BonsaiConfig":
        """Green-tipped twigs, mottled bark and a denser canopy."""
        return cls(
            foliage_depth=5,
            color_jitter=12,
            branch_probability=0.9,
            leaves_per_tip=8,
            leaf_size=7.0,
        )
