"""
Full tree generation.

`build_tree` creates the trunk, expands it recursively and freezes the
generation order. The resulting `TreeSkeleton` is never modified again;
growth stages only reveal prefixes of its branch list.
"""

from dataclasses import dataclass

import numpy as np

from bonsai.branching import BranchingContext, generate_branches
from bonsai.config import BonsaiConfig
from bonsai.geometry import Branch
from bonsai.trunk import create_trunk


@dataclass(frozen=True)
class TreeSkeleton:
    """
    Complete tree produced by one build.

    Contains:
    - trunk: Root branch, owning the whole tree through `children`
    - branches: Every branch in generation (pre-)order, trunk first
    - width, height: Canvas the tree was grown for
    """

    trunk: Branch
    branches: tuple[Branch, ...]
    width: float
    height: float

    def __len__(self) -> int:
        return len(self.branches)

    @property
    def tips(self) -> list[Branch]:
        return [b for b in self.branches if b.is_tip]

    @property
    def max_depth(self) -> int:
        return max(b.depth for b in self.branches)

    def get_scalar_summary(self) -> dict[str, float]:
        """Scalar statistics of the skeleton, for reporting."""
        xs = [p.x for b in self.branches for p in (b.start, b.end)]
        ys = [p.y for b in self.branches for p in (b.start, b.end)]
        return {
            "Branches": len(self.branches),
            "Tips": len(self.tips),
            "MaxDepth": self.max_depth,
            "TotalLength": float(sum(b.length for b in self.branches)),
            "MinThickness": float(min(b.thickness for b in self.branches)),
            "CanopyWidth": float(max(xs) - min(xs)),
            "CanopyHeight": float(max(ys) - min(ys)),
        }

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_scalar_summary()
        print("\n" + "=" * 40)
        print("BONSAI SUMMARY")
        print("=" * 40)
        for key, value in summary.items():
            if key in ("Branches", "Tips", "MaxDepth"):
                print(f"{key:20s}: {int(value):>10d}")
            else:
                print(f"{key:20s}: {value:>10.3f}")
        print("=" * 40)


def build_tree(
    width: float,
    height: float,
    config: BonsaiConfig,
    rng: np.random.Generator,
) -> TreeSkeleton:
    """
    Generate a complete bonsai for a `width` x `height` canvas.

    All randomness is drawn from `rng`, so a seeded generator gives a
    reproducible tree.
    """
    trunk = create_trunk(width, height, config)
    flattened = [trunk]
    context = BranchingContext(config=config, rng=rng, width=width, height=height)
    generate_branches(trunk, 0, context, flattened)
    for branch in flattened:
        branch.freeze()
    return TreeSkeleton(
        trunk=trunk,
        branches=tuple(flattened),
        width=width,
        height=height,
    )
