"""Cross-commit position adjustment."""

from .adjuster import PositionAdjuster, order_commits, read_hunks
from .locate import find_hunk
from .models import (
    PathAdjustment,
    Position,
    PositionAdjustment,
    Range,
    RangeAdjustment,
)
from .paths import IdentityPathAdjuster, PathAdjuster
from .translate import adjust_position, adjust_range

__all__ = [
    "PositionAdjuster",
    "PathAdjuster",
    "IdentityPathAdjuster",
    "Position",
    "Range",
    "PathAdjustment",
    "PositionAdjustment",
    "RangeAdjustment",
    "adjust_position",
    "adjust_range",
    "find_hunk",
    "order_commits",
    "read_hunks",
]
