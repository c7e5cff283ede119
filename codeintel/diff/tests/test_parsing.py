import pytest

from codeintel.diff.models import Hunk, HunkLine, LineKind
from codeintel.diff.parsing import parse_file_diff
from codeintel.errors import AdjustmentErrorType, DiffParseError

MULTI_HUNK_DIFF = "\n".join([
    "diff --git a/src/main.py b/src/main.py",
    "index 1111111..2222222 100644",
    "--- a/src/main.py",
    "+++ b/src/main.py",
    "@@ -1,3 +1,4 @@",
    " def foo():",
    '+    print("hello")',
    "     pass",
    " ",
    "@@ -10,4 +11,3 @@ def bar():",
    " a",
    "-b",
    " c",
    " d",
]) + "\n"

MULTI_FILE_DIFF = "\n".join([
    "--- a/src/main.py",
    "+++ b/src/main.py",
    "@@ -1,2 +1,3 @@",
    " def foo():",
    "+    return 42",
    "     pass",
    "--- a/src/utils.py",
    "+++ b/src/utils.py",
    "@@ -5,2 +5,1 @@",
    " def bar():",
    "-    pass",
]) + "\n"

NO_NEWLINE_DIFF = "\n".join([
    "--- a/src/main.py",
    "+++ b/src/main.py",
    "@@ -1,2 +1,2 @@",
    " def foo():",
    "-    return 1",
    "\\ No newline at end of file",
    "+    return 2",
    "\\ No newline at end of file",
]) + "\n"

SHORT_HUNK_DIFF = "\n".join([
    "--- a/src/main.py",
    "+++ b/src/main.py",
    "@@ -1,5 +1,5 @@",
    " def foo():",
]) + "\n"


class TestParseFileDiff:
    def test_empty_diff_has_no_hunks(self):
        assert parse_file_diff(b"", "src/main.py") == ()
        assert parse_file_diff("  \n", "src/main.py") == ()

    def test_parses_every_hunk_in_order(self):
        hunks = parse_file_diff(MULTI_HUNK_DIFF, "src/main.py")

        assert len(hunks) == 2
        assert (hunks[0].orig_start_line, hunks[0].orig_line_count) == (1, 3)
        assert (hunks[0].new_start_line, hunks[0].new_line_count) == (1, 4)
        assert (hunks[1].orig_start_line, hunks[1].orig_line_count) == (10, 4)
        assert (hunks[1].new_start_line, hunks[1].new_line_count) == (11, 3)

    def test_body_lines_are_tagged(self):
        hunks = parse_file_diff(MULTI_HUNK_DIFF, "src/main.py")

        assert [line.kind for line in hunks[0].body] == [
            LineKind.CONTEXT,
            LineKind.ADDED,
            LineKind.CONTEXT,
            LineKind.CONTEXT,
        ]
        assert hunks[0].body[1] == HunkLine(LineKind.ADDED, '    print("hello")')
        assert [line.kind for line in hunks[1].body] == [
            LineKind.CONTEXT,
            LineKind.REMOVED,
            LineKind.CONTEXT,
            LineKind.CONTEXT,
        ]

    def test_accepts_bytes(self):
        hunks = parse_file_diff(MULTI_HUNK_DIFF.encode("utf-8"), "src/main.py")
        assert len(hunks) == 2

    def test_selects_requested_file(self):
        hunks = parse_file_diff(MULTI_FILE_DIFF, "src/utils.py")

        assert len(hunks) == 1
        assert hunks[0].orig_start_line == 5
        assert hunks[0].line_delta == -1

    def test_unmentioned_path_has_no_hunks(self):
        assert parse_file_diff(MULTI_FILE_DIFF, "src/other.py") == ()

    def test_single_file_diff_is_used_for_any_path(self):
        hunks = parse_file_diff(MULTI_HUNK_DIFF, "main.py")
        assert len(hunks) == 2

    def test_no_newline_markers_are_dropped(self):
        hunks = parse_file_diff(NO_NEWLINE_DIFF, "src/main.py")

        assert [line.kind for line in hunks[0].body] == [
            LineKind.CONTEXT,
            LineKind.REMOVED,
            LineKind.ADDED,
        ]

    def test_truncated_hunk_raises_parse_error(self):
        with pytest.raises(DiffParseError) as exc_info:
            parse_file_diff(SHORT_HUNK_DIFF, "src/main.py")

        assert exc_info.value.error_type == AdjustmentErrorType.DIFF_PARSE_FAILED
        assert exc_info.value.details["path"] == "src/main.py"

    @pytest.mark.parametrize(
        "raw_diff",
        [
            b"<html>502 Bad Gateway</html>\n",
            b"\x1b[1mdiff --git\x1b[m\n",
            "warning: not a diff\n",
        ],
    )
    def test_text_without_file_diff_raises_parse_error(self, raw_diff):
        with pytest.raises(DiffParseError) as exc_info:
            parse_file_diff(raw_diff, "src/main.py")

        assert exc_info.value.details == {"path": "src/main.py"}
