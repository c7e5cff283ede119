"""Hunk model and unified diff parsing."""

from .models import Hunk, HunkLine, LineKind
from .parsing import parse_file_diff

__all__ = [
    "Hunk",
    "HunkLine",
    "LineKind",
    "parse_file_diff",
]
