"""
Tests for recursive branch generation.

These tests pin down the individual rules (branching factor, tiered
deviation, droop clamp, colors, canvas floor) and the recursion contract.
"""

import math

import numpy as np
import pytest

from bonsai.branching import (
    BranchingContext,
    branch_color,
    branching_factor,
    clamp_droop,
    deviation_angle,
    generate_branches,
    horizontal_offset,
    upward_pull,
)
from bonsai.config import BonsaiConfig
from bonsai.trunk import create_trunk


def make_context(config: BonsaiConfig | None = None, seed: int = 0,
                 width: float = 400.0, height: float = 300.0) -> BranchingContext:
    """Create a generation context on a 400x300 canvas."""
    return BranchingContext(
        config=config if config is not None else BonsaiConfig(),
        rng=np.random.default_rng(seed),
        width=width,
        height=height,
    )


class TestBranchingFactor:
    """Tests for the depth-dependent branching bound."""

    def test_decreases_with_depth(self) -> None:
        """The bound shrinks by one per level."""
        config = BonsaiConfig()
        assert branching_factor(0, config) == 4
        assert branching_factor(1, config) == 3

    def test_floor(self) -> None:
        """The bound never drops below min_branching."""
        config = BonsaiConfig()
        for depth in range(2, 12):
            assert branching_factor(depth, config) == 2


class TestUpwardPull:
    """Tests for the bias toward vertical."""

    def test_pulls_toward_vertical(self) -> None:
        """Leaning angles are rotated back by the bias."""
        assert upward_pull(0.5, 0.1) == pytest.approx(-0.1)
        assert upward_pull(-0.5, 0.1) == pytest.approx(0.1)

    def test_never_overshoots(self) -> None:
        """An angle closer to vertical than the bias lands exactly on it."""
        assert 0.05 + upward_pull(0.05, 0.1) == pytest.approx(0.0)
        assert -0.05 + upward_pull(-0.05, 0.1) == pytest.approx(0.0)

    def test_vertical_untouched(self) -> None:
        """A vertical angle needs no correction."""
        assert upward_pull(0.0, 0.3) == 0.0


class TestHorizontalOffset:
    """Tests for the normalised distance from the canvas center."""

    def test_center_and_edges(self) -> None:
        assert horizontal_offset(200.0, 400.0) == 0.0
        assert horizontal_offset(400.0, 400.0) == pytest.approx(1.0)
        assert horizontal_offset(0.0, 400.0) == pytest.approx(-1.0)

    def test_clipped(self) -> None:
        """Points outside the canvas count as the edge."""
        assert horizontal_offset(1000.0, 400.0) == 1.0

    def test_zero_width(self) -> None:
        """A zero-width canvas has no center to pull toward."""
        assert horizontal_offset(5.0, 0.0) == 0.0


class TestDeviationAngle:
    """Tests for depth-tiered deviation."""

    def test_first_level_alternates_sides(self) -> None:
        """At depth 0 even candidates go right and odd candidates go left."""
        config = BonsaiConfig(trunk_jitter=0.0, trunk_upward_bias=0.0)
        context = make_context(config)
        assert deviation_angle(0, 0, 0.0, 200.0, context) == pytest.approx(config.trunk_spread)
        assert deviation_angle(0, 1, 0.0, 200.0, context) == pytest.approx(-config.trunk_spread)
        assert deviation_angle(0, 2, 0.0, 200.0, context) == pytest.approx(config.trunk_spread)

    def test_second_level_alternates_with_depth(self) -> None:
        """At depth 1 the side flips relative to depth 0."""
        config = BonsaiConfig(limb_jitter=0.0, limb_upward_bias=0.0)
        context = make_context(config)
        assert deviation_angle(1, 0, 0.0, 200.0, context) == pytest.approx(-config.limb_spread)
        assert deviation_angle(1, 1, 0.0, 200.0, context) == pytest.approx(config.limb_spread)

    def test_upward_bias_reduces_lean(self) -> None:
        """The upward bias shrinks the resulting angle."""
        config = BonsaiConfig(trunk_jitter=0.0)
        context = make_context(config)
        deviation = deviation_angle(0, 0, 0.0, 200.0, context)
        assert deviation == pytest.approx(config.trunk_spread - config.trunk_upward_bias)

    def test_jitter_bounded(self) -> None:
        """Deep deviations stay within spread + jitter (+ centering)."""
        config = BonsaiConfig()
        context = make_context(config, seed=3)
        bound = config.twig_spread + config.twig_jitter + config.centering_bias
        for i in range(200):
            deviation = deviation_angle(4, i, 0.0, 200.0, context)
            assert abs(deviation) <= bound + 1e-12

    def test_centering_pulls_back(self) -> None:
        """Deep branches far right of center are nudged left."""
        config = BonsaiConfig(
            twig_spread=0.0, twig_jitter=0.0, twig_upward_bias=0.0,
            centering_bias=0.2,
        )
        context = make_context(config)
        assert deviation_angle(3, 0, 0.0, 400.0, context) == pytest.approx(-0.2)
        assert deviation_angle(3, 0, 0.0, 0.0, context) == pytest.approx(0.2)
        assert deviation_angle(3, 0, 0.0, 200.0, context) == pytest.approx(0.0)

    def test_no_centering_near_trunk(self) -> None:
        """Centering only applies from depth 2 on."""
        config = BonsaiConfig(trunk_jitter=0.0, trunk_upward_bias=0.0, centering_bias=0.5)
        context = make_context(config)
        assert deviation_angle(0, 0, 0.0, 400.0, context) == pytest.approx(config.trunk_spread)


class TestClampDroop:
    """Tests for the soft droop clamp."""

    def test_within_bound_untouched(self) -> None:
        config = BonsaiConfig()
        assert clamp_droop(0.2, 0.3, config) == 0.3

    def test_rotates_back_right(self) -> None:
        """A branch leaning too far right is rotated left by the correction."""
        config = BonsaiConfig()
        deviation = clamp_droop(1.0, 0.2, config)
        assert deviation == pytest.approx(0.2 - config.droop_correction)

    def test_rotates_back_left(self) -> None:
        """A branch leaning too far left is rotated right by the correction."""
        config = BonsaiConfig()
        deviation = clamp_droop(-1.0, -0.2, config)
        assert deviation == pytest.approx(-0.2 + config.droop_correction)

    def test_soft_residual(self) -> None:
        """The corrected angle can still exceed the bound, by a bounded amount."""
        config = BonsaiConfig()
        base = math.pi / 2
        deviation = clamp_droop(base, 0.5, config)
        final = base + deviation
        assert abs(final) > config.max_downward_angle
        assert abs(final) < base + 0.5


class TestBranchColor:
    """Tests for cosmetic branch colors."""

    def test_fixed_brown(self) -> None:
        config = BonsaiConfig()
        rng = np.random.default_rng(0)
        assert branch_color(5, config, rng) == config.branch_color

    def test_foliage_tint(self) -> None:
        """Branches deeper than foliage_depth take the foliage color."""
        config = BonsaiConfig(foliage_depth=3)
        rng = np.random.default_rng(0)
        assert branch_color(3, config, rng) == config.branch_color
        assert branch_color(4, config, rng) == config.foliage_color

    def test_jitter_stays_close(self) -> None:
        """Jittered channels stay within color_jitter of the base."""
        config = BonsaiConfig(branch_color="#808080", color_jitter=10)
        rng = np.random.default_rng(1)
        for _ in range(50):
            color = branch_color(2, config, rng)
            assert len(color) == 7 and color.startswith("#")
            for i in (1, 3, 5):
                assert abs(int(color[i:i + 2], 16) - 0x80) <= 10


class TestGenerateBranches:
    """Tests for the recursive expansion."""

    def test_noop_at_max_depth(self) -> None:
        """Nothing is generated once depth reaches max_growth."""
        context = make_context()
        trunk = create_trunk(400, 300, context.config)
        flattened = [trunk]
        generate_branches(trunk, context.config.max_growth, context, flattened)
        assert trunk.children == []
        assert flattened == [trunk]
        assert trunk.is_tip

    def test_children_follow_parent(self) -> None:
        """Children start at the parent's end and are thinner."""
        context = make_context(seed=11)
        trunk = create_trunk(400, 300, context.config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        for branch in flattened:
            for child in branch.children:
                assert child.start == branch.end
                assert 0 < child.thickness < branch.thickness
                assert child.depth == branch.depth + 1

    def test_flattened_is_pre_order(self) -> None:
        """The shared list holds every branch in pre-order."""
        context = make_context(seed=5)
        trunk = create_trunk(400, 300, context.config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        assert flattened == list(trunk.iter_subtree())

    def test_tips_flagged(self) -> None:
        """is_tip marks exactly the childless branches."""
        context = make_context(seed=8)
        trunk = create_trunk(400, 300, context.config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        for branch in flattened:
            assert branch.is_tip == (len(branch.children) == 0)

    def test_sparse_gate_can_produce_nothing(self) -> None:
        """A tiny branch probability yields a trunk-only tree."""
        config = BonsaiConfig(branch_probability=1e-12)
        context = make_context(config)
        trunk = create_trunk(400, 300, config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        assert flattened == [trunk]
        assert trunk.is_tip

    def test_canvas_floor_rejects(self) -> None:
        """No generated branch ends below the canvas floor."""
        config = BonsaiConfig(canvas_floor=0.8, max_downward_angle=math.pi, branch_probability=1.0)
        context = make_context(config, seed=2)
        trunk = create_trunk(400, 300, config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        for branch in flattened[1:]:
            assert branch.end.y <= 300 * 0.8

    def test_length_scales_with_thickness(self) -> None:
        """Child length is the parent thickness times the length multiplier range."""
        config = BonsaiConfig()
        context = make_context(config, seed=4)
        trunk = create_trunk(400, 300, config)
        flattened = [trunk]
        generate_branches(trunk, 0, context, flattened)
        for branch in flattened:
            for child in branch.children:
                low = branch.thickness * config.length_multiplier
                high = branch.thickness * (config.length_multiplier + config.length_jitter)
                assert low - 1e-9 <= child.length <= high + 1e-9
