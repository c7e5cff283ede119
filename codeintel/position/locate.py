from bisect import bisect_right
from collections.abc import Sequence

from codeintel.diff.models import Hunk


def find_hunk(hunks: Sequence[Hunk], line: int) -> Hunk | None:
    """
    Return the last hunk that does not begin after the given 1-indexed line.

    Hunks must be ordered by `orig_start_line`. Whether the hunk actually
    covers `line` is left to the caller.
    """
    index = bisect_right(hunks, line, key=lambda h: h.orig_start_line)
    if index == 0:
        return None
    return hunks[index - 1]
