"""Shared httpx plumbing for the external taxonomy services."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from herbapedia_tools.core.config import Settings, get_settings
from herbapedia_tools.core.exceptions import ExternalServiceError
from herbapedia_tools.core.logging import get_logger

from .rate_limit import RateLimiter

LOGGER = get_logger(__name__)


class JsonServiceClient:
    """Issues JSON requests with retries on transport failures.

    Every failure mode (timeout, network error, non-2xx status, undecodable
    body) surfaces as :class:`ExternalServiceError`. Retries wait on
    ``limiter`` when one is bound, so they keep the minimum request spacing.
    """

    service_name = "external"

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.Client | None = None,
        limiter: RateLimiter | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(headers=self._settings.http_headers(), follow_redirects=True)
        self._max_attempts = max(1, self._settings.max_retries)
        self.limiter = limiter

    @property
    def settings(self) -> Settings:
        return self._settings

    def _request_json(
        self,
        method: str,
        url: str,
        *,
        timeout: float,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        retryer = Retrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=max(self._settings.retry_backoff, 0.1), min=0.5, max=8),
            retry=retry_if_exception_type(httpx.TransportError),
            before=self._pace_retry,
            reraise=True,
        )
        try:
            for attempt in retryer:
                with attempt:
                    response = self._client.request(
                        method,
                        url,
                        params=params,
                        data=data,
                        headers=headers,
                        timeout=timeout,
                    )
        except httpx.TimeoutException as exc:
            LOGGER.warning(f"{self.service_name}.timeout", url=url, timeout=timeout)
            raise ExternalServiceError(self.service_name, f"request timed out after {timeout:.0f}s") from exc
        except httpx.TransportError as exc:
            LOGGER.warning(f"{self.service_name}.transport_error", url=url, error=str(exc))
            raise ExternalServiceError(self.service_name, f"network error: {exc}") from exc
        if response.status_code >= 400:
            LOGGER.warning(f"{self.service_name}.http_error", url=url, status=response.status_code)
            raise ExternalServiceError(self.service_name, f"HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise ExternalServiceError(self.service_name, "response body is not JSON") from exc

    def _pace_retry(self, retry_state: RetryCallState) -> None:
        if self.limiter is not None and retry_state.attempt_number > 1:
            LOGGER.debug(f"{self.service_name}.retry", attempt=retry_state.attempt_number)
            self.limiter.wait()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
