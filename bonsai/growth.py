"""
Growth stage bookkeeping.

The stage only ever moves forward one step at a time until it reaches
the ceiling, and only `reset` moves it back to zero. Geometry is not
touched here.
"""


class GrowthController:
    """Stage counter in [0, max_growth]."""

    def __init__(self, max_growth: int):
        if isinstance(max_growth, bool) or not isinstance(max_growth, int):
            raise TypeError(f"max_growth must be an int, got {max_growth!r}")
        if max_growth <= 0:
            raise ValueError(f"max_growth must be positive, got {max_growth}")
        self.max_growth = max_growth
        self._stage = 0

    @property
    def stage(self) -> int:
        return self._stage

    @property
    def is_fully_grown(self) -> bool:
        return self._stage >= self.max_growth

    @property
    def progress(self) -> float:
        """Fraction of the way to full growth."""
        return self._stage / self.max_growth

    def grow(self) -> bool:
        """
        Advance one stage.

        Returns False (and does nothing) when already fully grown.
        """
        if self.is_fully_grown:
            return False
        self._stage += 1
        return True

    def reset(self) -> None:
        self._stage = 0

    def __repr__(self) -> str:
        return f"GrowthController(stage={self._stage}, max_growth={self.max_growth})"
