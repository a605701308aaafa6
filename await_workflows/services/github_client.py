"""
GitHub Run Query Client
=======================
Lists workflow runs for a repository through the GitHub Actions REST API.

Behaviour:
    - One request per requested status (the API filters by a single status)
    - Requests are issued one at a time to stay clear of rate limits
    - Results are paged (per_page=100); the `Link: rel="next"` header is
      followed until the last page, capped at MAX_RUN_PAGES pages
    - Each page request gets MAX_QUERY_ATTEMPTS attempts, no backoff; the
      poller already re-runs the whole fetch on its own cadence
    - Exhausting the attempts for any status abandons the whole fetch with
      TransientQueryError; partial results are never returned
    - Raw payloads are parsed into WorkflowRun after the retry loop, so a
      malformed run is reported as RunPayloadError and not retried

Endpoint:
    GET {api_url}/repos/{owner}/{repo}/actions/runs?status=<status>
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from await_workflows.core.constants import (
    GITHUB_API_URL,
    GITHUB_API_VERSION,
    HTTP_TIMEOUT_SECONDS,
    MAX_QUERY_ATTEMPTS,
    MAX_RUN_PAGES,
    RUNS_PER_PAGE,
    USER_AGENT,
)
from await_workflows.core.exceptions import RunPayloadError, TransientQueryError
from await_workflows.models.workflow_run import WorkflowRun, WorkflowStatus

logger = logging.getLogger(__name__)


class RunQueryClient:
    """
    Read-only client for the workflow runs listing of one repository.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = GITHUB_API_URL,
        head_sha: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        max_attempts: int = MAX_QUERY_ATTEMPTS,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.head_sha = head_sha
        self.max_attempts = max_attempts
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": USER_AGENT,
        }
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def runs_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/actions/runs"

    async def __aenter__(self) -> "RunQueryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
        return self._client

    async def _get_page(
        self, status: WorkflowStatus, url: str, params: Optional[Dict[str, Any]]
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """One page of runs plus the URL of the next page, retrying on failure."""
        client = self._get_client()
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                response = await client.get(url, params=params, headers=self.headers)
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
                next_url = response.links.get("next", {}).get("url")
                return data.get("workflow_runs") or [], next_url
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                logger.error(
                    "Error encountered while calling GitHub API for status %s. "
                    "Attempt %d of %d. Error: %s",
                    status.value, attempt, self.max_attempts, exc,
                )

        raise TransientQueryError(status.value, self.max_attempts, last_error)

    async def _query_status(self, status: WorkflowStatus) -> List[Dict[str, Any]]:
        """Fetch the raw run list for one status, following every result page."""
        params: Optional[Dict[str, Any]] = {"status": status.value, "per_page": RUNS_PER_PAGE}
        if self.head_sha:
            params["head_sha"] = self.head_sha

        raw_runs: List[Dict[str, Any]] = []
        url: Optional[str] = self.runs_url
        pages = 0

        while url:
            if pages == MAX_RUN_PAGES:
                logger.warning(
                    "Stopped listing %s runs after %d pages (%d runs)",
                    status.value, pages, len(raw_runs),
                )
                break
            page_runs, url = await self._get_page(status, url, params)
            raw_runs.extend(page_runs)
            pages += 1
            # The next link already carries the query string
            params = None

        return raw_runs

    @staticmethod
    def _parse_runs(raw_runs: Iterable[Dict[str, Any]]) -> List[WorkflowRun]:
        runs: List[WorkflowRun] = []
        for raw in raw_runs:
            try:
                runs.append(WorkflowRun.model_validate(raw))
            except ValidationError as exc:
                run_id = raw.get("id") if isinstance(raw, dict) else None
                raise RunPayloadError(
                    f"Unexpected workflow run payload (id={run_id}): {exc}"
                ) from exc
        return runs

    async def fetch_runs(
        self, statuses: Iterable[Union[WorkflowStatus, str]]
    ) -> List[WorkflowRun]:
        """
        List runs in any of the given statuses.

        Parameters
        ----------
        statuses : Iterable[WorkflowStatus | str]
            Statuses to query, one request each.

        Returns
        -------
        List[WorkflowRun]
            Runs of every status, concatenated in request order.

        Raises
        ------
        TransientQueryError
            If every attempt for one of the statuses failed.
        RunPayloadError
            If a returned run could not be parsed.
        """
        raw_runs: List[Dict[str, Any]] = []
        for status in statuses:
            raw_runs.extend(await self._query_status(WorkflowStatus(status)))
        return self._parse_runs(raw_runs)
