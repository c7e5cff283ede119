"""Raw diff sources backed by git."""

from .git import GitDiffSource, run_git
from .http import HttpDiffSource
from .source import RawDiffSource, check_revision, diff_args

__all__ = [
    "GitDiffSource",
    "HttpDiffSource",
    "RawDiffSource",
    "check_revision",
    "diff_args",
    "run_git",
]
