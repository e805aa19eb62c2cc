"""Tests for derivative image size planning."""

from __future__ import annotations

import pytest

from site_builder_console.imaging.planner import (
    WIDTH_MARKS,
    DerivativeSize,
    lazy_size,
    plan,
    plan_derivatives,
)


class TestPlanDerivatives:
    def test_full_hd_keeps_every_breakpoint(self):
        sizes = plan_derivatives(1920, 1080)
        assert [s.width for s in sizes] == [1920, 1600, 1280, 800, 400]
        assert [s.height for s in sizes] == [1080, 900, 720, 450, 225]

    def test_free_aspect_has_no_heights(self):
        sizes = plan_derivatives(500)
        assert sizes == [DerivativeSize(500), DerivativeSize(400)]
        assert all(s.scales_freely for s in sizes)

    def test_breakpoints_wider_than_target_are_dropped(self):
        sizes = plan_derivatives(800, 600)
        assert [(s.width, s.height) for s in sizes] == [(800, 600), (400, 300)]

    def test_target_between_breakpoints_is_added_first(self):
        sizes = plan_derivatives(1000, 500)
        assert [s.width for s in sizes] == [1000, 800, 400]

    def test_target_below_every_breakpoint(self):
        assert plan_derivatives(300, 200) == [DerivativeSize(300, 200)]

    def test_heights_are_truncated(self):
        # 400 * 333 / 1000 = 133.2
        sizes = plan_derivatives(1000, 333)
        assert sizes[-1] == DerivativeSize(400, 133)

    def test_custom_breakpoints_in_any_order(self):
        sizes = plan_derivatives(1000, None, [200, 1200, 600, 600])
        assert [s.width for s in sizes] == [1000, 600, 200]

    def test_pure_function(self):
        assert plan_derivatives(1600, 900) == plan_derivatives(1600, 900)
        assert plan(1600, 900, include_lazy=True) == plan(1600, 900, include_lazy=True)

    @pytest.mark.parametrize("width,height", [(0, None), (-5, None), (100, 0), (100, -1)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            plan_derivatives(width, height)

    def test_default_breakpoints(self):
        assert WIDTH_MARKS == (1920, 1600, 1280, 800, 400)


class TestLazySize:
    def test_landscape_16_9(self):
        # 7 * 9/16 = 3.9375 and 9 * 9/16 = 5.0625 tie; the narrower one wins.
        assert lazy_size(1920, 1080) == DerivativeSize(7, 4)

    def test_portrait_9_16_finds_exact_fit(self):
        assert lazy_size(900, 1600) == DerivativeSize(9, 16)

    def test_square_is_exact_at_width_one(self):
        assert lazy_size(500, 500) == DerivativeSize(1, 1)

    def test_free_aspect_defaults_to_width_five(self):
        assert lazy_size(1920) == DerivativeSize(5, None)

    def test_wide_ratio_prefers_smallest_rounding_error(self):
        # Width 1 rounds 0.15 to 0; width 7 rounds 1.05 to 1, a smaller error.
        assert lazy_size(1000, 150) == DerivativeSize(7, 1)

    def test_extreme_ratio_rounds_to_zero_height(self):
        assert lazy_size(10000, 10) == DerivativeSize(1, 0)

    def test_plan_without_lazy(self):
        assert plan(800, 600).lazy is None
        assert plan(800, 600, include_lazy=True).lazy == DerivativeSize(4, 3)
