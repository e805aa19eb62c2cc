"""Image derivative planning."""

from site_builder_console.imaging.planner import (
    WIDTH_MARKS,
    DerivativePlan,
    DerivativeSize,
    lazy_size,
    plan,
    plan_derivatives,
)

__all__ = [
    "WIDTH_MARKS",
    "DerivativePlan",
    "DerivativeSize",
    "lazy_size",
    "plan",
    "plan_derivatives",
]
