import asyncio
import logging

import httpx
from pydantic import SecretStr

from codeintel.errors import DiffFetchError, RepositoryNotFoundError
from codeintel.vcs.source import diff_args

logger = logging.getLogger(__name__)

EXEC_ENDPOINT = "/exec"


class HttpDiffSource:
    """
    Reads diffs from a git server that runs git commands over HTTP.

    `fetch_diff` is the async entry point; cancelling the awaiting task
    aborts the request. `raw_diff` runs it to completion on a fresh event
    loop, so synchronous callers can only bound it with `timeout_sec`.
    """

    def __init__(
        self,
        base_url: str,
        token: SecretStr | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._transport = transport

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Requested-With": "codeintel",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token.get_secret_value()}"
        return headers

    def _get_client(self, timeout_sec: float) -> httpx.AsyncClient:
        # a new client per call; each asyncio.run() closes its own loop
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_sec,
            headers=self._get_headers(),
            transport=self._transport,
        )

    def _classify_error(self, repo: str, status_code: int, response_text: str) -> DiffFetchError:
        if status_code == 404:
            return RepositoryNotFoundError(repo)

        retryable = status_code == 429 or status_code >= 500
        message = response_text.strip() or f"HTTP {status_code}"

        return DiffFetchError(
            f"git server returned {status_code}: {message}",
            retryable=retryable,
            details={"status_code": status_code},
        )

    async def fetch_diff(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
        timeout_sec: float = 30,
    ) -> bytes:
        request_body = {
            "repo": repo,
            "args": diff_args(source_commit, target_commit, path),
        }

        try:
            async with self._get_client(timeout_sec) as client:
                response = await client.post(EXEC_ENDPOINT, json=request_body)
        except httpx.TimeoutException as e:
            logger.warning("Diff request for %s@%s timed out", repo, target_commit)
            raise DiffFetchError(
                f"Request timed out after {timeout_sec} seconds",
                retryable=True,
            ) from e
        except httpx.RequestError as e:
            logger.warning("Diff request for %s failed: %s", repo, e)
            raise DiffFetchError(str(e), retryable=True) from e

        if response.status_code != 200:
            error = self._classify_error(repo, response.status_code, response.text)
            logger.warning("Diff request for %s failed: %s", repo, error)
            raise error

        return response.content

    def raw_diff(
        self,
        repo: str,
        source_commit: str,
        target_commit: str,
        path: str,
        timeout_sec: float = 30,
    ) -> bytes:
        return asyncio.run(
            self.fetch_diff(repo, source_commit, target_commit, path, timeout_sec=timeout_sec)
        )
