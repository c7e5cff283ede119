from codeintel.errors import (
    AdjustmentError,
    AdjustmentErrorType,
    DiffFetchError,
    DiffParseError,
    MalformedHunkError,
    RepositoryNotFoundError,
)


def test_every_error_is_an_adjustment_error():
    errors = [
        DiffFetchError("fetch"),
        RepositoryNotFoundError("repo"),
        DiffParseError("parse"),
        MalformedHunkError("@@ -1,2 +1,2 @@", 2),
    ]

    for error in errors:
        assert isinstance(error, AdjustmentError)


def test_error_types_are_distinct():
    assert DiffFetchError("x").error_type == AdjustmentErrorType.DIFF_FETCH_FAILED
    assert RepositoryNotFoundError("x").error_type == AdjustmentErrorType.REPOSITORY_NOT_FOUND
    assert DiffParseError("x").error_type == AdjustmentErrorType.DIFF_PARSE_FAILED
    assert MalformedHunkError("h", 1).error_type == AdjustmentErrorType.MALFORMED_HUNK


def test_malformed_hunk_is_not_an_infrastructure_error():
    error = MalformedHunkError("@@ -1,5 +1,5 @@", 4)

    assert not isinstance(error, DiffFetchError)
    assert not isinstance(error, DiffParseError)
    assert error.retryable is False
    assert error.details == {"header": "@@ -1,5 +1,5 @@", "line": 4}
    assert "line 4" in str(error)


def test_fetch_error_defaults():
    error = DiffFetchError("git server unavailable")

    assert error.retryable is False
    assert error.details == {}
    assert str(error) == "git server unavailable"


def test_repository_not_found_details():
    error = RepositoryNotFoundError("github.com/example/repo")

    assert error.details == {"repo": "github.com/example/repo"}
    assert "github.com/example/repo" in str(error)
