"""Base class for the upstream HTTP clients."""
from __future__ import annotations

import logging
import threading
from typing import Any

import requests

from ..errors import NotFoundError, UpstreamError

LOGGER = logging.getLogger(__name__)


class UpstreamClient:
    """Thin JSON-over-HTTP client bound to one upstream base URL.

    Every ``requests`` failure is translated into :class:`UpstreamError`, and a
    404 answer into :class:`NotFoundError`, so callers never handle library
    exceptions directly.
    """

    service = "upstream"

    def __init__(
        self,
        base_url: str,
        timeout: float,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The injected session, or one owned by the calling worker thread.

        Requests run through ``asyncio.to_thread`` and ``requests.Session`` is
        not guaranteed thread safe, so default sessions are never shared
        between threads.
        """

        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        LOGGER.debug("%s %s (%s service)", method, url, self.service)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise UpstreamError(self.service, str(exc), cause=exc) from exc

        if response.status_code == 404:
            raise NotFoundError(
                self.service, f"{method} {url} returned 404", status=404
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise UpstreamError(
                self.service, str(exc), cause=exc, status=response.status_code
            ) from exc
        return response

    def _decode(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                self.service,
                f"{response.url} returned a body that is not JSON",
                cause=exc,
                status=response.status_code,
            ) from exc

    def get_json(self, path: str) -> Any:
        """GET ``path`` and return the decoded JSON body."""

        return self._decode(self._request("GET", path))

    def get_json_list(self, path: str) -> list[Any]:
        """GET ``path`` and require the body to be a JSON array."""

        payload = self.get_json(path)
        if not isinstance(payload, list):
            raise UpstreamError(
                self.service,
                f"GET {self._url(path)} returned {type(payload).__name__}, expected a list",
            )
        return payload

    def post_json(self, path: str, payload: Any) -> requests.Response:
        """POST ``payload`` as JSON to ``path``."""

        return self._request("POST", path, json=payload)


__all__ = ["UpstreamClient"]
