from typing import Protocol

from codeintel.errors import DiffFetchError


class RawDiffSource(Protocol):
    def raw_diff(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
        timeout_sec: float = 30,
    ) -> bytes:
        """
        Return the unified diff of `path` between two commits.

        Empty bytes mean the path is unchanged. Failures raise DiffFetchError.
        """
        ...


def check_revision(revision: str) -> str:
    """Reject revisions git would read as an option."""
    if not revision or revision.startswith("-"):
        raise DiffFetchError(
            f"Invalid revision: {revision!r}",
            details={"revision": revision},
        )
    return revision


def diff_args(source_commit: str, target_commit: str, path: str) -> list[str]:
    # user config must not change the output format
    return [
        "diff",
        "--no-color",
        "--no-ext-diff",
        check_revision(source_commit),
        check_revision(target_commit),
        "--",
        path,
    ]
