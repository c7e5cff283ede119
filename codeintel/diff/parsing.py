import logging

from unidiff import PatchSet, UnidiffParseError
from unidiff.patch import Hunk as UnidiffHunk
from unidiff.patch import PatchedFile

from codeintel.diff.models import Hunk, HunkLine, LineKind
from codeintel.errors import DiffParseError

logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    return path.strip().removeprefix("./").lstrip("/")


def _convert_hunk(hunk: UnidiffHunk) -> Hunk:
    body: list[HunkLine] = []
    for line in hunk:
        if line.is_added:
            kind = LineKind.ADDED
        elif line.is_removed:
            kind = LineKind.REMOVED
        elif line.is_context:
            kind = LineKind.CONTEXT
        else:
            # "\ No newline at end of file" markers belong to neither file
            continue
        body.append(HunkLine(kind=kind, text=line.value.rstrip("\n")))

    return Hunk(
        orig_start_line=hunk.source_start,
        orig_line_count=hunk.source_length,
        new_start_line=hunk.target_start,
        new_line_count=hunk.target_length,
        body=tuple(body),
    )


def _select_file(patch: PatchSet, path: str) -> PatchedFile | None:
    wanted = _normalize_path(path)
    for patched_file in patch:
        candidates = {
            _normalize_path(patched_file.path),
            _normalize_path(patched_file.source_file.removeprefix("a/")),
            _normalize_path(patched_file.target_file.removeprefix("b/")),
        }
        if wanted in candidates:
            return patched_file

    if len(patch) == 1:
        return patch[0]
    return None


def parse_file_diff(raw_diff: bytes | str, path: str) -> tuple[Hunk, ...]:
    """
    Parse the unified diff of a single path into position-ordered hunks.

    Args:
        raw_diff: output of `git diff <source> <target> -- <path>`
        path: the path the diff was restricted to

    Returns:
        Hunks in increasing `orig_start_line` order. Empty when the diff is
        empty or does not mention `path`.

    Raises:
        DiffParseError: the text is not a valid unified diff, or it is not
            empty but holds no file diff at all
    """

    if isinstance(raw_diff, bytes):
        raw_diff = raw_diff.decode("utf-8", errors="replace")
    if not raw_diff.strip():
        return ()

    try:
        patch = PatchSet.from_string(raw_diff)
    except UnidiffParseError as e:
        raise DiffParseError(
            f"Could not parse diff for {path}: {e}",
            details={"path": path},
        ) from e

    if len(patch) == 0:
        raise DiffParseError(
            f"No file diff found in output for {path}",
            details={"path": path},
        )

    patched_file = _select_file(patch, path)
    if patched_file is None:
        logger.debug("Diff of %d files does not mention %s", len(patch), path)
        return ()

    hunks = tuple(
        sorted(
            (_convert_hunk(h) for h in patched_file),
            key=lambda h: h.orig_start_line,
        )
    )
    logger.debug("Parsed %d hunks for %s", len(hunks), path)
    return hunks
