"""Orchestration between user input, the analysis backend and the UI.

The UI talks to :class:`AdvisoryOrchestrator` only. It never touches the
request client, the progress simulator or the state reducers directly.

Design principles:
- ConversationState is the single source of truth; every change goes
  through a reducer and is then pushed to the ``on_change`` listener
- Request failures are handled here and turned into an apology message;
  nothing propagates to the caller
- The progress ticker and the busy flag are released on every exit path
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import ValidationError

from advisory.agent.client import AnalysisClient
from advisory.agent.extractor import extract_identifiers
from advisory.agent.progress import ProgressSimulator
from advisory.agent.state import (
    ConversationState,
    begin_request,
    close_identifier_dialog,
    drain_notifications,
    enter_chat,
    finish_request,
    go_home,
    initial_state,
    notify,
    open_identifier_dialog,
    request_failed,
    request_succeeded,
    set_dialog_fields,
    set_input,
    set_message_status,
    set_progress,
)
from advisory.exceptions import IdentifierValidationError, RequestFailure
from advisory.models import (
    AnalysisProgress,
    AnalysisResult,
    DownloadLink,
    Message,
    MessageStatus,
    Notification,
    NotificationVariant,
    PendingIdentifiers,
    create_assistant_message,
    create_user_message,
)
from advisory.prompts import (
    get_apology_message,
    get_completion_message,
    get_identifier_appendix,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[ConversationState], None]

ANALYSIS_COMPLETE = Notification(
    title="Analysis Complete",
    description="Your AI advisory report has been generated successfully.",
)
REQUEST_ERROR = Notification(
    title="Error",
    description="Failed to process your request. Please try again.",
    variant=NotificationVariant.DESTRUCTIVE,
)


class SendOutcome(str, Enum):
    """What happened to a submission."""

    IGNORED = "ignored"  # blank input, or nothing pending
    NEEDS_IDENTIFIERS = "needs_identifiers"  # dialog open, nothing sent
    COMPLETED = "completed"
    FAILED = "failed"


def validate_identifiers(company_id: str, user_id: str) -> tuple[str, str]:
    """Trim both identifiers and require them to be non-blank.

    Raises:
        IdentifierValidationError: Either identifier is blank.
    """
    company_id = company_id.strip()
    user_id = user_id.strip()
    missing = [
        name
        for name, value in (("company_id", company_id), ("user_id", user_id))
        if not value
    ]
    if missing:
        raise IdentifierValidationError(
            f"Missing identifiers: {', '.join(missing)}", missing_fields=missing
        )
    return company_id, user_id


def build_reply(result: AnalysisResult) -> Message:
    """Assistant message for a settled request.

    The download link is built from ``result.url`` alone; an unusable URL is
    dropped rather than rendered.
    """
    text = get_completion_message(result.name, result.is_clean_success)

    link: DownloadLink | None = None
    if result.url:
        try:
            link = DownloadLink(url=result.url)
        except ValidationError:
            logger.warning("Dropping unusable artifact URL from analysis result")

    return create_assistant_message(text, link)


class AdvisoryOrchestrator:
    """Drives one conversation.

    Args:
        client: Request client for the analysis backend.
        simulator: Progress estimator started for each request.
        state: Initial state (e.g. restored from the Streamlit session).
        on_change: Called with the new state after every transition.
    """

    def __init__(
        self,
        client: AnalysisClient | None = None,
        simulator: ProgressSimulator | None = None,
        state: ConversationState | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._client = client or AnalysisClient()
        self._simulator = simulator or ProgressSimulator()
        self._state = state or initial_state()
        self._on_change = on_change

    @property
    def state(self) -> ConversationState:
        return self._state

    def _dispatch(
        self, reducer: Callable[..., ConversationState], *args: Any
    ) -> ConversationState:
        self._state = reducer(self._state, *args)
        if self._on_change is not None:
            self._on_change(self._state)
        return self._state

    # --- Navigation and input ---

    def enter_chat(self) -> None:
        self._dispatch(enter_chat)

    def go_home(self) -> None:
        self._dispatch(go_home)

    def set_input(self, text: str) -> None:
        self._dispatch(set_input, text)

    def drain_notifications(self) -> tuple[Notification, ...]:
        state, notifications = drain_notifications(self._state)
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
        return notifications

    # --- Submission ---

    async def handle_send(self, text: str | None = None) -> SendOutcome:
        """Submit a message typed by the user.

        Args:
            text: Message text. Defaults to the current input field.

        Returns:
            The outcome; NEEDS_IDENTIFIERS means the dialog is open and no
            message was appended.
        """
        raw = self._state.input_text if text is None else text
        message_text = raw.strip()
        if not message_text:
            return SendOutcome.IGNORED

        identifiers = extract_identifiers(message_text)
        company_id, user_id = identifiers.company_id, identifiers.user_id
        if not company_id or not user_id:
            logger.info(
                "Missing %s, asking for identifiers",
                ", ".join(identifiers.missing_fields),
            )
            self._dispatch(
                open_identifier_dialog,
                PendingIdentifiers(
                    pending_message_text=message_text,
                    company_id=company_id,
                    user_id=user_id,
                ),
            )
            return SendOutcome.NEEDS_IDENTIFIERS

        succeeded = await self.process_message(message_text, company_id, user_id)
        return SendOutcome.COMPLETED if succeeded else SendOutcome.FAILED

    async def process_message(self, text: str, company_id: str, user_id: str) -> bool:
        """Send a message to the analysis backend and record the outcome.

        Never raises for request failures: they become an apology message,
        an ``error`` status on the user's message and an error notification.

        Returns:
            True if the backend returned a result.
        """
        if self._state.is_loading:
            logger.warning("New submission while another request is in flight")

        user_message = create_user_message(text)
        self._dispatch(begin_request, user_message)

        try:
            with self._simulator.run(self._on_progress) as ticker:
                # Local acknowledgement, applied before the request is awaited
                self._dispatch(set_message_status, user_message.id, MessageStatus.SENT)

                try:
                    result = await self._client.send(text, company_id, user_id)
                except RequestFailure as e:
                    ticker.stop()
                    logger.error("Analysis request failed: %s", e)
                    self._settle_failure(user_message.id)
                    return False
                except Exception as e:
                    ticker.stop()
                    logger.exception("Analysis request failed unexpectedly: %s", e)
                    self._settle_failure(user_message.id)
                    return False

                ticker.stop()
                self._dispatch(request_succeeded, build_reply(result), ANALYSIS_COMPLETE)
                return True
        finally:
            self._dispatch(finish_request)

    def _settle_failure(self, message_id: str) -> None:
        apology = create_assistant_message(get_apology_message())
        self._dispatch(request_failed, message_id, apology, REQUEST_ERROR)

    def _on_progress(self, progress: AnalysisProgress | None) -> None:
        self._dispatch(set_progress, progress)

    # --- Identifier dialog ---

    def update_identifier_fields(self, company_id: str, user_id: str) -> None:
        self._dispatch(set_dialog_fields, company_id, user_id)

    async def submit_identifiers(
        self, company_id: str | None = None, user_id: str | None = None
    ) -> SendOutcome:
        """Submit the identifier dialog.

        Blank fields keep the dialog open and queue a notification. Otherwise
        the pending text gets explicit identifier lines and is sent.

        Args:
            company_id: Company identifier. Defaults to the dialog field.
            user_id: User identifier. Defaults to the dialog field.
        """
        pending = self._state.pending
        if pending is None:
            logger.warning("Identifier dialog submitted with no pending message")
            return SendOutcome.IGNORED

        raw_company = self._state.dialog_company_id if company_id is None else company_id
        raw_user = self._state.dialog_user_id if user_id is None else user_id
        self._dispatch(set_dialog_fields, raw_company, raw_user)

        try:
            company_id, user_id = validate_identifiers(raw_company, raw_user)
        except IdentifierValidationError as e:
            logger.info("Identifier dialog rejected: %s", e)
            self._dispatch(
                notify,
                Notification(
                    title="Missing Information",
                    description=e.user_message,
                    variant=NotificationVariant.DESTRUCTIVE,
                ),
            )
            return SendOutcome.NEEDS_IDENTIFIERS

        merged = (
            f"{pending.pending_message_text}\n\n"
            f"{get_identifier_appendix(company_id, user_id)}"
        )
        self._dispatch(close_identifier_dialog)

        succeeded = await self.process_message(merged, company_id, user_id)
        return SendOutcome.COMPLETED if succeeded else SendOutcome.FAILED

    def cancel_identifiers(self) -> None:
        """Close the dialog. The pending message is discarded, not restored."""
        if self._state.pending is not None:
            logger.info("Identifier dialog cancelled, pending message discarded")
        self._dispatch(close_identifier_dialog)
