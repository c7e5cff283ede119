import logging
import subprocess
from pathlib import Path

from codeintel.errors import DiffFetchError, RepositoryNotFoundError
from codeintel.vcs.source import diff_args

logger = logging.getLogger(__name__)


def run_git(
    repo_dir: Path,
    args: list[str],
    git_binary: str = "git",
    timeout_sec: float = 30,
) -> bytes:
    """
    Run a git command inside `repo_dir` and return its stdout.

    Raises:
        DiffFetchError: git is missing, timed out, or exited non-zero
    """
    cmd = [git_binary, *args]

    try:
        result = subprocess.run(
            cmd,
            cwd=repo_dir,
            capture_output=True,
            timeout=timeout_sec,
        )
    except subprocess.TimeoutExpired as e:
        raise DiffFetchError(
            f"git {args[0]} timed out after {timeout_sec} seconds",
            retryable=True,
            details={"cmd": cmd},
        ) from e
    except OSError as e:
        raise DiffFetchError(
            f"Could not run {git_binary}: {e}",
            retryable=False,
            details={"cmd": cmd},
        ) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        logger.warning("git %s exited with %d: %s", args[0], result.returncode, stderr)
        raise DiffFetchError(
            f"git {args[0]} failed with exit code {result.returncode}: {stderr}",
            retryable=False,
            details={
                "cmd": cmd,
                "exit_code": result.returncode,
                "stderr": stderr,
            },
        )

    return result.stdout


class GitDiffSource:
    """Reads diffs by running `git diff` against local clones."""

    def __init__(self, git_binary: str = "git", repos_root: Path | None = None):
        self.git_binary = git_binary
        self.repos_root = repos_root

    def resolve_repo(self, repo: str) -> Path:
        repo_dir = Path(self.repos_root, repo) if self.repos_root else Path(repo)
        if not repo_dir.is_dir():
            raise RepositoryNotFoundError(repo)
        return repo_dir

    def raw_diff(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
        timeout_sec: float = 30,
    ) -> bytes:
        repo_dir = self.resolve_repo(repo)
        logger.debug("Diffing %s between %s and %s in %s", path, source_commit, target_commit, repo_dir)

        return run_git(
            repo_dir,
            diff_args(source_commit, target_commit, path),
            git_binary=self.git_binary,
            timeout_sec=timeout_sec,
        )
