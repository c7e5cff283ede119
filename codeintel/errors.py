from enum import StrEnum


class AdjustmentErrorType(StrEnum):
    DIFF_FETCH_FAILED = "diff_fetch_failed"
    DIFF_PARSE_FAILED = "diff_parse_failed"
    MALFORMED_HUNK = "malformed_hunk"
    REPOSITORY_NOT_FOUND = "repository_not_found"


class AdjustmentError(Exception):
    def __init__(
        self,
        error_type: AdjustmentErrorType,
        message: str,
        retryable: bool = False,
        details: dict | None = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.retryable = retryable
        self.details = details or {}


class DiffFetchError(AdjustmentError):
    """The version-control backend could not produce a diff."""
    def __init__(
        self,
        message: str,
        retryable: bool = False,
        details: dict | None = None
    ):
        super().__init__(
            AdjustmentErrorType.DIFF_FETCH_FAILED,
            message,
            retryable=retryable,
            details=details,
        )


class RepositoryNotFoundError(DiffFetchError):
    def __init__(
        self,
        repo: str,
    ):
        super().__init__(
            f"Repository not found: {repo}",
            retryable=False,
            details={
                "repo": repo
            }
        )
        self.error_type = AdjustmentErrorType.REPOSITORY_NOT_FOUND


class DiffParseError(AdjustmentError):
    """Diff text returned by the backend is not a valid unified diff."""
    def __init__(
        self,
        message: str,
        details: dict | None = None
    ):
        super().__init__(
            AdjustmentErrorType.DIFF_PARSE_FAILED,
            message,
            retryable=False,
            details=details,
        )


class MalformedHunkError(AdjustmentError):
    """
    A hunk's body holds fewer original-file lines than its header declares.

    This is never an "untranslatable position": it means the diff itself is
    corrupt and callers must not treat it as an ordinary edit.
    """
    def __init__(
        self,
        header: str,
        line: int,
    ):
        super().__init__(
            AdjustmentErrorType.MALFORMED_HUNK,
            f"Malformed hunk body: {header} does not reach line {line}",
            retryable=False,
            details={
                "header": header,
                "line": line,
            }
        )
        self.header = header
        self.line = line
