"""GitHub REST client used for project activity lookups.

Acts on behalf of a single user (GitHub login + access token). List calls
follow page numbers until a short page or ``max_pages``; options are passed
through as query parameters. Non-2xx responses raise ``httpx.HTTPStatusError``.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

import httpx
import structlog

from app.core.config import get_settings

log = structlog.get_logger()

PER_PAGE = 100
MAX_PAGES = 3


class GithubClientProtocol(Protocol):
    def issues(self, repository: str, options: dict) -> Any: ...

    def commits(self, repository: str, options: dict) -> Any: ...

    def repository(self, repository: str) -> Any: ...


class GithubClient:
    def __init__(
        self,
        nickname: str,
        token: Optional[str],
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_pages: int = MAX_PAGES,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        settings = get_settings()
        self.nickname = nickname
        self._base_url = (base_url or settings.github_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.github_timeout_seconds
        self._max_pages = max_pages
        self._transport = transport
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"prhub ({nickname})",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._headers["Authorization"] = f"token {token}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _get(self, client: httpx.AsyncClient, path: str, params: Optional[dict] = None) -> Any:
        response = await client.get(path, params=params)
        log.debug(
            "github.request",
            path=path,
            status=response.status_code,
            user=self.nickname,
        )
        response.raise_for_status()
        return response.json()

    async def _get_list(self, path: str, options: Optional[dict]) -> list[dict]:
        params = {"per_page": PER_PAGE, **(options or {})}
        per_page = int(params["per_page"])
        out: list[dict] = []
        async with self._client() as client:
            for page in range(1, self._max_pages + 1):
                data = await self._get(client, path, {**params, "page": page})
                if not isinstance(data, list):
                    break
                out.extend(data)
                if len(data) < per_page:
                    break
        return out

    async def issues(self, repository: str, options: Optional[dict] = None) -> list[dict]:
        return await self._get_list(f"/repos/{repository}/issues", options)

    async def commits(self, repository: str, options: Optional[dict] = None) -> list[dict]:
        return await self._get_list(f"/repos/{repository}/commits", options)

    async def repository(self, repository: str) -> dict:
        async with self._client() as client:
            return await self._get(client, f"/repos/{repository}")
