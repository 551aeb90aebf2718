"""Chat component for the AI Advisory UI.

Handles message rendering, the typing indicator and the chat input.
Uses Streamlit's native chat components with custom styling.
"""

import re

import streamlit as st

from advisory.models import ContentKind, Message
from advisory.ui.styles import COLORS, STATUS_GLYPHS, get_status_color

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()<>#!|~:.@])")


def escape_markdown(text: str) -> str:
    """Backslash-escape Markdown syntax so text renders literally."""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", text)


def _render_meta(message: Message) -> None:
    """Local time, plus a delivery glyph for user messages."""
    local_time = message.timestamp.astimezone().strftime("%H:%M:%S")
    glyph = ""
    if message.status is not None:
        color = get_status_color(message.status)
        glyph = (
            f'<span style="color: {color}; margin-left: 0.5rem;" '
            f'title="{message.status.value}">{STATUS_GLYPHS[message.status]}</span>'
        )
    st.markdown(
        f"""
        <div style="font-size: 0.75rem; color: {COLORS['text_muted']};">
            {local_time}{glyph}
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_message(message: Message) -> None:
    """Render a single chat message.

    Message bodies are escaped and rendered without HTML. The only link ever
    rendered is the validated download link of a rich-text message.
    """
    with st.chat_message(message.sender.value):
        st.markdown(escape_markdown(message.content.body))
        link = message.content.link
        if message.content.kind == ContentKind.RICH_TEXT and link is not None:
            st.markdown(f"[📎 {link.label}]({link.url})")
        _render_meta(message)


def render_chat_history(messages: tuple[Message, ...]) -> None:
    """Render the full chat history."""
    for message in messages:
        render_message(message)


def render_chat_input(
    placeholder: str = "Ask for a business analysis...",
    key: str = "chat_input",
    disabled: bool = False,
) -> str | None:
    """Render the chat input box and return user input."""
    return st.chat_input(placeholder, key=key, disabled=disabled)


def render_typing_indicator() -> None:
    """Render the assistant typing indicator."""
    st.markdown(
        f"""
        <div style="
            display: flex;
            align-items: center;
            gap: 0.5rem;
            color: {COLORS['text_muted']};
            font-size: 0.875rem;
            padding: 0.5rem 0;
        ">
            <div style="
                width: 0.5rem;
                height: 0.5rem;
                background: {COLORS['primary']};
                border-radius: 50%;
                animation: pulse 1.5s infinite;
            "></div>
            AI Advisory is analyzing...
        </div>
        <style>
            @keyframes pulse {{
                0%, 100% {{ opacity: 0.4; }}
                50% {{ opacity: 1; }}
            }}
        </style>
        """,
        unsafe_allow_html=True,
    )
