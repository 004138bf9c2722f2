from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import ProviderRateLimited, ProviderRequestError


Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
      httpx.Client is safe to share between enrichment worker threads.
    - Provides consistent error handling.
    - Provider-specific clients wrap it and add auth / convenience methods.
    """

    base_url: str
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=self.connect_timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json_value(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> Any:
        """
        Perform an HTTP request and return the parsed JSON value (any shape).
        Raises ProviderRequestError (including ProviderRateLimited) on transport issues / non-2xx.
        """
        kwargs: dict[str, Any] = {}
        if timeout_s is not None:
            kwargs["timeout"] = httpx.Timeout(timeout_s, connect=min(timeout_s, self.connect_timeout_s))

        try:
            resp = self._client.request(
                method=method,
                url=path.lstrip("/"),
                params=params,
                headers=headers,
                **kwargs,
            )
        except httpx.RequestError as e:
            # Timeouts, connect/protocol/proxy errors, redirect loops.
            raise ProviderRequestError(str(e) or type(e).__name__) from e

        if resp.status_code == 429:
            raise ProviderRateLimited("Provider rate limited the request (HTTP 429).")

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                f"HTTP {resp.status_code} for {method} {resp.request.url.host}"
            ) from e

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderRequestError("Response was not valid JSON.") from e

    def get_json_value(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> Any:
        return self.request_json_value(
            "GET", path, params=params, headers=headers, timeout_s=timeout_s
        )

    def get_json(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> Json:
        """Like get_json_value, but the payload must be a JSON object."""
        data = self.get_json_value(path, params=params, headers=headers, timeout_s=timeout_s)
        if not isinstance(data, dict):
            raise ProviderRequestError(f"Expected JSON object, got {type(data)}")
        return data
