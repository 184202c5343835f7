from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response

from ..exceptions import NetworkError


@dataclass
class RequestConfig:
    # None means the request may wait indefinitely.
    timeout: Optional[float] = None


class HttpProvider:
    """Base class for the OpenWeather HTTP integrations.

    Requests are issued with a blocking :class:`requests.Session`; the async
    helpers push them onto a worker thread so callers can ``await`` them.
    Every failure surfaces as :class:`NetworkError`.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:500])
            raise NetworkError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except (requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL) as exc:
            self._log.error("Malformed URL %s", url)
            raise NetworkError(f"invalid url: {url}") from exc
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise NetworkError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise NetworkError("request failed") from exc
        return self._handle_response(response)

    async def _arequest(self, method: str, url: str, **kwargs) -> Response:
        return await asyncio.to_thread(self._request, method, url, **kwargs)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise NetworkError("invalid json") from exc


__all__ = ["HttpProvider", "NetworkError", "RequestConfig"]
