"""Conversation state container and its transitions.

The state is an immutable value; every event is a pure function
``(state, ...) -> state``. The orchestrator owns the current value and
swaps it on each event, so transitions can be tested without a UI.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from advisory.exceptions import StateTransitionError
from advisory.models import (
    ALLOWED_STATUS_TRANSITIONS,
    AnalysisProgress,
    Message,
    MessageStatus,
    Notification,
    PendingIdentifiers,
    create_assistant_message,
)
from advisory.prompts import get_welcome_message

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    """Top-level screen."""

    LANDING = "landing"
    CHAT = "chat"


@dataclass(frozen=True)
class ConversationState:
    """Everything the UI needs to render one conversation."""

    view: ViewMode = ViewMode.LANDING
    messages: tuple[Message, ...] = ()
    input_text: str = ""

    # Request lifecycle
    is_loading: bool = False  # busy flag, disables the send button
    is_typing: bool = False  # assistant typing indicator
    progress: AnalysisProgress | None = None

    # Identifier dialog (open while a message is pending)
    pending: PendingIdentifiers | None = None
    dialog_company_id: str = ""
    dialog_user_id: str = ""

    # Toasts waiting to be shown
    notifications: tuple[Notification, ...] = ()

    @property
    def is_dialog_open(self) -> bool:
        return self.pending is not None

    def find_message(self, message_id: str) -> Message | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None


def initial_state() -> ConversationState:
    return ConversationState()


# --- Navigation ---


def enter_chat(state: ConversationState) -> ConversationState:
    """Switch to the chat view, seeding the welcome message once."""
    if state.messages:
        return replace(state, view=ViewMode.CHAT)
    welcome = create_assistant_message(get_welcome_message())
    logger.debug("Seeded welcome message")
    return replace(state, view=ViewMode.CHAT, messages=(welcome,))


def go_home(state: ConversationState) -> ConversationState:
    return replace(state, view=ViewMode.LANDING)


def set_input(state: ConversationState, text: str) -> ConversationState:
    return replace(state, input_text=text)


# --- Identifier dialog ---


def open_identifier_dialog(
    state: ConversationState, pending: PendingIdentifiers
) -> ConversationState:
    """Hold a message back and ask for the missing identifiers.

    Dialog fields start from whatever extraction already found.
    """
    return replace(
        state,
        pending=pending,
        dialog_company_id=pending.company_id or "",
        dialog_user_id=pending.user_id or "",
    )


def set_dialog_fields(
    state: ConversationState, company_id: str, user_id: str
) -> ConversationState:
    return replace(state, dialog_company_id=company_id, dialog_user_id=user_id)


def close_identifier_dialog(state: ConversationState) -> ConversationState:
    """Close the dialog, dropping the pending text and the dialog fields."""
    return replace(state, pending=None, dialog_company_id="", dialog_user_id="")


# --- Messages ---


def append_message(state: ConversationState, message: Message) -> ConversationState:
    return replace(state, messages=(*state.messages, message))


def set_message_status(
    state: ConversationState, message_id: str, status: MessageStatus
) -> ConversationState:
    """Move a user message to ``status``.

    Raises:
        StateTransitionError: Unknown message, assistant message, or a move
            that would regress (e.g. ``error -> sent``).
    """
    current = state.find_message(message_id)
    if current is None:
        raise StateTransitionError(
            f"No message with id {message_id}", message_id=message_id
        )
    if current.status is None:
        raise StateTransitionError(
            "Assistant messages have no delivery status",
            message_id=message_id,
            requested=status.value,
        )
    if status not in ALLOWED_STATUS_TRANSITIONS[current.status]:
        raise StateTransitionError(
            f"Illegal status transition {current.status.value} -> {status.value}",
            message_id=message_id,
            current=current.status.value,
            requested=status.value,
        )

    updated = current.model_copy(update={"status": status})
    logger.debug(
        "Message %s: %s -> %s", message_id[:8], current.status.value, status.value
    )
    return replace(
        state,
        messages=tuple(updated if m.id == message_id else m for m in state.messages),
    )


# --- Request lifecycle ---


def begin_request(state: ConversationState, user_message: Message) -> ConversationState:
    """Append the user's message and mark the assistant busy."""
    return replace(
        append_message(state, user_message),
        input_text="",
        is_loading=True,
        is_typing=True,
    )


def set_progress(
    state: ConversationState, progress: AnalysisProgress | None
) -> ConversationState:
    return replace(state, progress=progress)


def request_succeeded(
    state: ConversationState, reply: Message, notification: Notification
) -> ConversationState:
    settled = replace(state, progress=None, is_typing=False)
    return notify(append_message(settled, reply), notification)


def request_failed(
    state: ConversationState,
    message_id: str,
    apology: Message,
    notification: Notification,
) -> ConversationState:
    settled = replace(state, progress=None, is_typing=False)
    settled = set_message_status(settled, message_id, MessageStatus.ERROR)
    return notify(append_message(settled, apology), notification)


def finish_request(state: ConversationState) -> ConversationState:
    """Clear the busy flag; applied on every settlement path."""
    return replace(state, is_loading=False)


# --- Notifications ---


def notify(state: ConversationState, notification: Notification) -> ConversationState:
    return replace(state, notifications=(*state.notifications, notification))


def drain_notifications(
    state: ConversationState,
) -> tuple[ConversationState, tuple[Notification, ...]]:
    """Return the state without queued notifications, plus the notifications."""
    return replace(state, notifications=()), state.notifications
