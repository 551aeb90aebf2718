"""Custom exceptions for AI Advisory.

Exception hierarchy:
- AdvisoryError (base)
  - ConfigurationError: Invalid or missing configuration
  - IdentifierValidationError: Company/user identifier missing at dialog submit
  - AttemptError: A single request attempt failed (timeout, status, network, body)
  - RequestFailure: Every attempt failed; raised by the request client
  - StateTransitionError: Illegal message status transition
  - GatewayError: The gateway could not reach its upstream target
"""

from typing import Literal

AttemptFailureReason = Literal["timeout", "status", "network", "invalid_response"]


class AdvisoryError(Exception):
    """Base exception for all AI Advisory errors."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        """Initialize with technical message and optional user-friendly message.

        Args:
            message: Technical error message for logging/debugging.
            user_message: Human-readable message for UI display.
                         If None, uses the technical message.
        """
        super().__init__(message)
        self.user_message = user_message or message


class ConfigurationError(AdvisoryError):
    """Raised when configuration is invalid or missing.

    Example: Analysis endpoint URL is empty.
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.config_key = config_key


class IdentifierValidationError(AdvisoryError):
    """Raised when the identifier dialog is submitted with blank fields.

    Recovered locally: the dialog stays open and a notification is shown.
    """

    def __init__(
        self,
        message: str,
        missing_fields: list[str] | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            message,
            user_message or "Please provide both Company ID and User ID.",
        )
        self.missing_fields = missing_fields or []


class AttemptError(AdvisoryError):
    """Raised when one attempt against the analysis backend fails.

    Timeouts and upstream/network errors share this type; ``reason`` tells
    them apart for logging. Callers treat every reason the same way.
    """

    def __init__(
        self,
        message: str,
        reason: AttemptFailureReason,
        attempt: int,
        status_code: int | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.reason = reason
        self.attempt = attempt
        self.status_code = status_code

    @property
    def is_bad_gateway(self) -> bool:
        return self.reason == "status" and self.status_code == 502


class RequestFailure(AdvisoryError):
    """Raised when all attempts against the analysis backend failed."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: AttemptError | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(
            message,
            user_message or "Failed to process your request. Please try again.",
        )
        self.attempts = attempts
        self.last_error = last_error


class StateTransitionError(AdvisoryError):
    """Raised when a message status would regress or leave a terminal state."""

    def __init__(
        self,
        message: str,
        message_id: str | None = None,
        current: str | None = None,
        requested: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.message_id = message_id
        self.current = current
        self.requested = requested


class GatewayError(AdvisoryError):
    """Raised when the gateway cannot reach the target URL."""

    def __init__(
        self,
        message: str,
        target_url: str | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message or "Proxy failed")
        self.target_url = target_url
