import logging
from collections.abc import Sequence

from codeintel.diff.models import Hunk, LineKind
from codeintel.errors import MalformedHunkError
from codeintel.position.locate import find_hunk
from codeintel.position.models import EMPTY_POSITION, EMPTY_RANGE, Position, Range

logger = logging.getLogger(__name__)


def adjust_position(hunks: Sequence[Hunk], position: Position) -> tuple[Position, bool]:
    """
    Translate a position by the additions and deletions that occur before its line.

    Only the line moves; the character offset is passed through unchanged.
    Returns `(EMPTY_POSITION, False)` when the line itself was added or
    removed, since there is nothing precise to point at in the other commit.

    Raises:
        MalformedHunkError: the hunk covering the line has a body shorter
            than its header declares
    """

    # Diff line numbers are one-indexed
    line = position.line + 1

    hunk = find_hunk(hunks, line)
    if hunk is None:
        return position, True

    if line >= hunk.orig_end_line:
        return position.model_copy(update={"line": line + hunk.line_delta - 1}), True

    orig_line = hunk.orig_start_line
    new_line = hunk.new_start_line

    for body_line in hunk.body:
        if body_line.in_original:
            if orig_line == line:
                if body_line.kind is not LineKind.CONTEXT:
                    return EMPTY_POSITION, False
                return position.model_copy(update={"line": new_line - 1}), True
            orig_line += 1

        if body_line.in_new:
            new_line += 1

    logger.error("Hunk %s ends before line %d", hunk.header, line)
    raise MalformedHunkError(hunk.header, line)


def adjust_range(hunks: Sequence[Hunk], range_: Range) -> tuple[Range, bool]:
    """Translate both endpoints of a range; fails if either endpoint fails."""
    start, ok = adjust_position(hunks, range_.start)
    if not ok:
        return EMPTY_RANGE, False

    end, ok = adjust_position(hunks, range_.end)
    if not ok:
        return EMPTY_RANGE, False

    return Range(start=start, end=end), True
