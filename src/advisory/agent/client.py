"""Resilient client for the analysis backend.

One POST per attempt, a hard per-attempt deadline, and a fixed backoff
between attempts. The first 2xx response ends the loop whatever its
payload says; the payload's ``error`` field only changes the narrative
shown to the user.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from advisory.config import settings
from advisory.exceptions import AttemptError, ConfigurationError, RequestFailure
from advisory.models import AnalysisResult
from advisory.prompts import get_analysis_request_text

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class AnalysisClient:
    """Sends analysis requests with bounded retries.

    Args:
        endpoint_url: Analysis webhook. Defaults to settings.
        gateway_url: Optional CORS gateway; when set the request goes to
            ``<gateway_url>?url=<endpoint_url>``. Defaults to settings.
        max_attempts: Attempts per request. Defaults to settings (3).
        timeout_seconds: Per-attempt deadline. Defaults to settings (600).
        retry_delay_seconds: Fixed delay between attempts. Defaults to settings (3).
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        sleep: Coroutine used for the backoff delay.
    """

    def __init__(
        self,
        endpoint_url: str | None = None,
        gateway_url: str | None = None,
        max_attempts: int | None = None,
        timeout_seconds: float | None = None,
        retry_delay_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.endpoint_url = (
            endpoint_url if endpoint_url is not None else settings.analysis_endpoint_url
        )
        self.gateway_url = (
            gateway_url if gateway_url is not None else settings.gateway_url
        )
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.request_max_attempts
        )
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.request_timeout_seconds
        )
        self.retry_delay_seconds = (
            retry_delay_seconds
            if retry_delay_seconds is not None
            else settings.request_retry_delay_seconds
        )
        self._transport = transport
        self._sleep = sleep

        if not self.endpoint_url:
            raise ConfigurationError(
                "Analysis endpoint URL is not configured",
                config_key="analysis_endpoint_url",
            )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @staticmethod
    def build_payload(message: str, company_id: str, user_id: str) -> dict[str, str]:
        """JSON body combining both identifiers and the message into one text field."""
        return {"message": get_analysis_request_text(message, company_id, user_id)}

    def _target(self) -> tuple[str, dict[str, str]]:
        if self.gateway_url:
            return self.gateway_url, {"url": self.endpoint_url}
        return self.endpoint_url, {}

    async def send(
        self,
        message: str,
        company_id: str,
        user_id: str,
        max_attempts: int | None = None,
    ) -> AnalysisResult:
        """Send one analysis request, retrying failed attempts.

        Returns:
            The parsed result of the first successful attempt.

        Raises:
            RequestFailure: Every attempt failed. Chained to the last AttemptError.
        """
        attempts = max_attempts if max_attempts is not None else self.max_attempts
        if attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        payload = self.build_payload(message, company_id, user_id)
        last_error: AttemptError | None = None

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(self.timeout_seconds),
        ) as client:
            for attempt in range(1, attempts + 1):
                logger.info(
                    "Attempt %d/%d - sending request to analysis workflow",
                    attempt,
                    attempts,
                )
                try:
                    result = await self._attempt(client, payload, attempt)
                except AttemptError as exc:
                    last_error = exc
                    if attempt == attempts:
                        break
                    self._log_retry(exc)
                    await self._sleep(self.retry_delay_seconds)
                    continue

                logger.info(
                    "Analysis workflow completed successfully on attempt %d", attempt
                )
                return result

        logger.error("All %d attempts failed: %s", attempts, last_error)
        raise RequestFailure(
            f"Analysis request failed after {attempts} attempts: {last_error}",
            attempts=attempts,
            last_error=last_error,
        ) from last_error

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, str],
        attempt: int,
    ) -> AnalysisResult:
        url, params = self._target()
        try:
            # wait_for cancels the in-flight call when the deadline passes
            response = await asyncio.wait_for(
                client.post(
                    url,
                    params=params,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                ),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise AttemptError(
                f"Request timed out after {self.timeout_seconds:.0f}s",
                reason="timeout",
                attempt=attempt,
            ) from exc
        except httpx.HTTPError as exc:
            raise AttemptError(
                f"Network error: {exc}",
                reason="network",
                attempt=attempt,
            ) from exc

        if not response.is_success:
            raise AttemptError(
                f"HTTP error! status: {response.status_code}",
                reason="status",
                attempt=attempt,
                status_code=response.status_code,
            )

        return self._parse(response, attempt)

    @staticmethod
    def _parse(response: httpx.Response, attempt: int) -> AnalysisResult:
        """Result of a 2xx response. Only an unparseable body fails the attempt."""
        try:
            body: Any = response.json()
        except ValueError as exc:
            raise AttemptError(
                "Response body is not valid JSON",
                reason="invalid_response",
                attempt=attempt,
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            logger.warning(
                "Expected a JSON object, got %s; treating as empty result",
                type(body).__name__,
            )
            body = {}

        return AnalysisResult.model_validate(
            {
                **body,
                "status": 200,
                "completed_at": datetime.now(timezone.utc),
            }
        )

    def _log_retry(self, exc: AttemptError) -> None:
        if exc.is_bad_gateway:
            logger.warning(
                "502 error on attempt %d, retrying in %.0f seconds...",
                exc.attempt,
                self.retry_delay_seconds,
            )
        elif exc.reason == "timeout":
            logger.warning("Request timed out on attempt %d, retrying...", exc.attempt)
        else:
            logger.warning("Attempt %d failed (%s), retrying...", exc.attempt, exc)
