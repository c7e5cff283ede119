from abc import ABC, abstractmethod


class PathAdjuster(ABC):
    """Maps a path in the source commit to the same file in the target commit."""

    @abstractmethod
    def adjust_path(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
    ) -> tuple[str, bool]:
        """
        Returns:
            The path in the target commit and whether the file could be followed.
        """
        pass


class IdentityPathAdjuster(PathAdjuster):
    """Assumes files are never renamed between commits."""

    def adjust_path(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
    ) -> tuple[str, bool]:
        return path, True
