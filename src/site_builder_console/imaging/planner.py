"""Derivative image sizes for a responsive image style.

Given one target width (and optionally a height fixing the aspect ratio),
plan_derivatives() picks the canonical breakpoint widths that do not exceed
the target, and lazy_size() picks a tiny placeholder size whose height is
as close to a whole pixel as possible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

WIDTH_MARKS: tuple[int, ...] = (1920, 1600, 1280, 800, 400)

DEFAULT_LAZY_WIDTH = 5
LAZY_WIDTH_CANDIDATES = range(1, 11)


@dataclass(frozen=True)
class DerivativeSize:
    width: int
    height: int | None = None

    @property
    def scales_freely(self) -> bool:
        return self.height is None


def _check_dimensions(target_width: int, target_height: int | None) -> None:
    if target_width < 1:
        raise ValueError(f"target width must be positive, got {target_width}")
    if target_height is not None and target_height < 1:
        raise ValueError(f"target height must be positive, got {target_height}")


def plan_derivatives(
    target_width: int,
    target_height: int | None = None,
    breakpoints: Sequence[int] = WIDTH_MARKS,
) -> list[DerivativeSize]:
    """Return derivative sizes, widest first, none wider than target_width."""
    _check_dimensions(target_width, target_height)

    widths = sorted(
        {w for w in breakpoints if w <= target_width} | {target_width},
        reverse=True,
    )
    if target_height is None:
        return [DerivativeSize(width) for width in widths]
    return [
        DerivativeSize(width, width * target_height // target_width)
        for width in widths
    ]


def lazy_size(target_width: int, target_height: int | None = None) -> DerivativeSize:
    """Pick the placeholder size in widths 1..10 with the least height rounding error.

    Ties keep the narrowest width. Very wide ratios can yield a zero height.
    """
    _check_dimensions(target_width, target_height)
    if target_height is None:
        return DerivativeSize(DEFAULT_LAZY_WIDTH)

    ratio = target_height / target_width
    candidates = [
        DerivativeSize(width, int(width * ratio + 0.5)) for width in LAZY_WIDTH_CANDIDATES
    ]
    return min(candidates, key=lambda size: abs(size.height - size.width * ratio))


@dataclass(frozen=True)
class DerivativePlan:
    sizes: list[DerivativeSize]
    lazy: DerivativeSize | None = None


def plan(
    target_width: int,
    target_height: int | None = None,
    breakpoints: Sequence[int] = WIDTH_MARKS,
    *,
    include_lazy: bool = False,
) -> DerivativePlan:
    return DerivativePlan(
        sizes=plan_derivatives(target_width, target_height, breakpoints),
        lazy=lazy_size(target_width, target_height) if include_lazy else None,
    )
