"""AI Advisory UI components."""

from advisory.ui.components.chat import (
    render_chat_history,
    render_chat_input,
    render_message,
    render_typing_indicator,
)
from advisory.ui.components.identifier_form import render_identifier_form
from advisory.ui.components.landing import render_landing
from advisory.ui.components.progress import (
    BUSY_PLACEHOLDER,
    LiveChatRegion,
    render_progress,
)

__all__ = [
    "BUSY_PLACEHOLDER",
    "LiveChatRegion",
    "render_chat_history",
    "render_chat_input",
    "render_identifier_form",
    "render_landing",
    "render_message",
    "render_progress",
    "render_typing_indicator",
]
