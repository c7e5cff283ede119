import logging

from codeintel.diff.models import Hunk
from codeintel.diff.parsing import parse_file_diff
from codeintel.position.models import (
    PathAdjustment,
    Position,
    PositionAdjustment,
    Range,
    RangeAdjustment,
)
from codeintel.position.paths import IdentityPathAdjuster, PathAdjuster
from codeintel.position.translate import adjust_position, adjust_range
from codeintel.vcs.source import RawDiffSource, check_revision

logger = logging.getLogger(__name__)


def order_commits(source_commit: str, target_commit: str, reverse: bool) -> tuple[str, str]:
    """Return `(source, target)`, swapped when mapping backwards."""
    if reverse:
        return target_commit, source_commit
    return source_commit, target_commit


def read_hunks(
    diff_source: RawDiffSource,
    repo: str,
    path: str,
    source_commit: str,
    target_commit: str,
    reverse: bool = False,
    timeout_sec: float = 30,
) -> tuple[Hunk, ...]:
    """
    Return the position-ordered hunks of `path` between two commits.

    No diff is requested when both commits are the same. A commit that git
    would read as an option raises DiffFetchError before any request. Errors
    from the diff source or the parser propagate unchanged.
    """

    if source_commit == target_commit:
        return ()
    source_commit, target_commit = order_commits(source_commit, target_commit, reverse)
    check_revision(source_commit)
    check_revision(target_commit)

    # TODO: cache parsed hunks per (repo, path, source_commit, target_commit)
    output = diff_source.raw_diff(
        repo,
        source_commit,
        target_commit,
        path,
        timeout_sec=timeout_sec,
    )
    if not output:
        logger.debug("%s unchanged between %s and %s", path, source_commit, target_commit)
        return ()

    return parse_file_diff(output, path)


class PositionAdjuster:
    """
    Translates paths, positions and ranges from the commit this adjuster is
    bound to into another commit of the same repository.

    When `reverse` is set on a call, the translation runs from the given
    commit back into the bound commit instead.
    """

    def __init__(
        self,
        repo: str,
        commit: str,
        diff_source: RawDiffSource,
        path_adjuster: PathAdjuster | None = None,
        timeout_sec: float = 30,
    ):
        self.repo = repo
        self.commit = commit
        self.diff_source = diff_source
        self.path_adjuster = path_adjuster or IdentityPathAdjuster()
        self.timeout_sec = timeout_sec

    def adjust_path(self, commit: str, path: str, reverse: bool = False) -> PathAdjustment:
        source_commit, target_commit = order_commits(self.commit, commit, reverse)
        adjusted, ok = self.path_adjuster.adjust_path(
            self.repo,
            source_commit,
            target_commit,
            path,
        )
        return PathAdjustment(path=adjusted, ok=ok)

    def adjust_position(
        self,
        commit: str,
        path: str,
        position: Position,
        reverse: bool = False,
    ) -> PositionAdjustment:
        path_result = self.adjust_path(commit, path, reverse)
        if not path_result.ok:
            return PositionAdjustment(path=path_result.path, ok=False)

        hunks = self._read_hunks(commit, path, reverse)
        adjusted, ok = adjust_position(hunks, position)
        return PositionAdjustment(
            path=path_result.path,
            position=adjusted if ok else None,
            ok=ok,
        )

    def adjust_range(
        self,
        commit: str,
        path: str,
        range_: Range,
        reverse: bool = False,
    ) -> RangeAdjustment:
        path_result = self.adjust_path(commit, path, reverse)
        if not path_result.ok:
            return RangeAdjustment(path=path_result.path, ok=False)

        hunks = self._read_hunks(commit, path, reverse)
        adjusted, ok = adjust_range(hunks, range_)
        return RangeAdjustment(
            path=path_result.path,
            range=adjusted if ok else None,
            ok=ok,
        )

    def _read_hunks(self, commit: str, path: str, reverse: bool) -> tuple[Hunk, ...]:
        # The diff is read for the caller's path, not the adjusted one.
        # TODO: pass both names once a renaming PathAdjuster exists
        return read_hunks(
            self.diff_source,
            self.repo,
            path,
            self.commit,
            commit,
            reverse=reverse,
            timeout_sec=self.timeout_sec,
        )
