"""
The bonsai handle used by callers and renderers.

Geometry is generated once at construction (and again on every reset);
`grow` only advances the stage, and `get_visible_elements` derives what
to draw from the stage without regenerating anything.
"""

import math

import numpy as np

from bonsai.builder import TreeSkeleton, build_tree
from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch
from bonsai.growth import GrowthController
from bonsai.visibility import VisibleElements, visible_elements


class Bonsai:
    """
    A procedurally generated bonsai revealed over discrete growth stages.

    Args:
        width: Canvas width
        height: Canvas height
        config: Generation parameters (defaults to `BonsaiConfig()`)
        seed: Seed for a fresh `numpy.random.default_rng`
        rng: Random generator to draw from; takes precedence over `seed`
    """

    def __init__(
        self,
        width: float,
        height: float,
        config: BonsaiConfig | None = None,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        if not (math.isfinite(width) and math.isfinite(height)):
            raise ValueError(f"Canvas size must be finite, got {width}x{height}")

        self.width = width
        self.height = height
        self.config = config if config is not None else BonsaiConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self._growth = GrowthController(self.config.max_growth)
        self._skeleton = build_tree(width, height, self.config, self.rng)

    @property
    def stage(self) -> int:
        return self._growth.stage

    @property
    def max_growth(self) -> int:
        return self._growth.max_growth

    @property
    def is_fully_grown(self) -> bool:
        return self._growth.is_fully_grown

    @property
    def skeleton(self) -> TreeSkeleton:
        return self._skeleton

    @property
    def trunk(self) -> Branch:
        return self._skeleton.trunk

    @property
    def branches(self) -> tuple[Branch, ...]:
        """All branches in generation order, visible or not."""
        return self._skeleton.branches

    def grow(self) -> bool:
        """Advance one stage; False once fully grown."""
        return self._growth.grow()

    def reset(self) -> None:
        """Grow a brand new tree and return to stage 0."""
        skeleton = build_tree(self.width, self.height, self.config, self.rng)
        self._skeleton = skeleton
        self._growth.reset()

    def get_visible_elements(self) -> VisibleElements:
        """Branches and leaves to draw at the current stage."""
        return visible_elements(self._skeleton, self.stage, self.config, self.rng)

    def __repr__(self) -> str:
        return (
            f"Bonsai({self.width}x{self.height}, stage={self.stage}/{self.max_growth}, "
            f"branches={len(self._skeleton)})"
        )
