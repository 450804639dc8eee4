"""Authenticated GitHub API client built on urllib."""

from __future__ import annotations

import json
from http.client import HTTPException
from typing import Any, Mapping, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import OpenerDirector, Request, build_opener

from ..logging import get_logger

USER_AGENT = "profilegen"


class TransportError(RuntimeError):
    """Raised when a request cannot complete or returns a non-success status."""


class ParseError(RuntimeError):
    """Raised when a response body is not the JSON shape that was expected."""


class QueryError(TransportError):
    """Raised when a GraphQL response reports errors or carries no data."""


class GitHubClient:
    """Sends authenticated requests to the GitHub REST and GraphQL APIs.

    One instance is shared by every worker of a run; it holds no per-request
    state, so concurrent calls are safe.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.github.com",
        request_timeout: Optional[float] = 30.0,
        opener: OpenerDirector | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHubClient requires a token")
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self._token = token
        self._opener = opener or build_opener()
        self.logger = get_logger("github.client")

    def url(self, path: str, params: Mapping[str, object] | None = None) -> str:
        """Return an absolute API URL for ``path`` with optional query params."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def get_json(self, url: str) -> Any:
        """GET ``url`` and return the decoded JSON body."""
        request = Request(url, headers=self._headers(), method="GET")
        return self._send(request)

    def graphql(self, query: str, variables: Mapping[str, object] | None = None) -> Any:
        """POST a GraphQL query and return its ``data`` member."""
        payload: dict[str, object] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)
        headers = self._headers()
        headers["Content-Type"] = "application/json"
        request = Request(
            self.url("graphql"),
            data=json.dumps(payload).encode("utf-8"),
            headers=headers,
            method="POST",
        )
        body = self._send(request)
        if not isinstance(body, dict):
            raise ParseError("GraphQL response must be a JSON object")
        if body.get("errors"):
            raise QueryError(f"GraphQL query failed: {body['errors']}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise QueryError("Missing 'data' field in GraphQL response")
        return data

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }

    def _send(self, request: Request) -> Any:
        self.logger.debug("%s %s", request.get_method(), request.full_url)
        try:
            if self.request_timeout is None:
                response = self._opener.open(request)
            else:
                response = self._opener.open(request, timeout=self.request_timeout)
            with response:
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if exc.fp is not None else ""
            message = detail.strip() or exc.reason
            raise TransportError(
                f"GitHub API returned status {exc.code} for {request.full_url}: {message}"
            ) from exc
        except URLError as exc:
            raise TransportError(f"Request to {request.full_url} failed: {exc.reason}") from exc
        except HTTPException as exc:
            raise TransportError(
                f"Request to {request.full_url} failed: {type(exc).__name__}: {exc}"
            ) from exc
        except OSError as exc:
            raise TransportError(f"Request to {request.full_url} failed: {exc}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParseError(f"Invalid JSON returned by {request.full_url}") from exc


__all__ = ["GitHubClient", "ParseError", "QueryError", "TransportError", "USER_AGENT"]
