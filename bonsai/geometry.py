"""
Geometry primitives for the bonsai skeleton.

Angles follow the canvas convention used throughout the package:
    - 0 points straight up (toward smaller y)
    - positive angles rotate clockwise (toward larger x)

So a segment of length L leaving point P at angle a ends at
    (P.x + sin(a) * L, P.y - cos(a) * L)
"""

from __future__ import annotations

import math
from dataclasses import FrozenInstanceError, dataclass, field
from typing import NamedTuple


class Point(NamedTuple):
    """A position on the canvas (y grows downward)."""

    x: float
    y: float


def end_point(start: Point, length: float, angle: float) -> Point:
    """Point reached by walking `length` from `start` at `angle`."""
    return Point(
        start.x + math.sin(angle) * length,
        start.y - math.cos(angle) * length,
    )


def direction_angle(start: Point, end: Point) -> float:
    """
    Orientation of the segment start -> end relative to vertical.

    A zero-length segment reports 0 (straight up).
    """
    return math.atan2(end.x - start.x, start.y - end.y)


@dataclass(eq=False)
class Branch:
    """
    A single tree segment.

    Children are owned exclusively by their parent and every child starts
    at the very `Point` its parent ends at. There are no parent links.

    Branches are built mutable and frozen once their tree is complete:
    `freeze` turns `children` into a tuple and rejects further assignment.

    Attributes:
        start: Segment start (the parent's end for non-trunk branches)
        end: Segment end
        thickness: Stroke width, strictly smaller than the parent's
        color: Display color as '#rrggbb'
        depth: Generation depth (trunk = 0)
        children: Child branches in generation order
        is_tip: True when generation left `children` empty
    """

    start: Point
    end: Point
    thickness: float
    color: str
    depth: int = 0
    children: list[Branch] | tuple[Branch, ...] = field(default_factory=list)
    is_tip: bool = True

    def __setattr__(self, name, value) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f"cannot assign to field '{name}' of a frozen Branch")
        super().__setattr__(name, value)

    @property
    def is_frozen(self) -> bool:
        return getattr(self, "_frozen", False)

    def freeze(self) -> None:
        """Make this branch read-only (children become a tuple)."""
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "_frozen", True)

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    @property
    def angle(self) -> float:
        """Direction relative to vertical (see module docstring)."""
        return direction_angle(self.start, self.end)

    def iter_subtree(self):
        """Yield this branch and its descendants in pre-order."""
        stack = [self]
        while stack:
            branch = stack.pop()
            yield branch
            stack.extend(reversed(branch.children))

    def __repr__(self) -> str:
        return (
            f"Branch(({self.start.x:.2f}, {self.start.y:.2f}) -> "
            f"({self.end.x:.2f}, {self.end.y:.2f}), depth={self.depth}, "
            f"thickness={self.thickness:.2f}, children={len(self.children)})"
        )
