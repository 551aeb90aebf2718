"""Styling for the AI Advisory Streamlit UI.

Design principles:
- Light background, dark text, one indigo accent
- Chat bubbles tinted by sender; delivery glyphs colored by status
- No gradients on content, no background images
"""

import streamlit as st

from advisory.models import MessageStatus

COLORS = {
    "primary": "#4338ca",  # Indigo-700, buttons and progress bar
    "primary_hover": "#3730a3",  # Indigo-800
    "error": "#dc2626",  # Red-600
    "text": "#111827",  # Gray-900
    "text_muted": "#6b7280",  # Gray-500
    "border": "#e5e7eb",  # Gray-200
    "user_bubble": "#eef2ff",  # Indigo-50
}

STATUS_GLYPHS = {
    MessageStatus.SENDING: "●",
    MessageStatus.SENT: "✓",
    MessageStatus.ERROR: "✗",
}

STATUS_COLORS = {
    MessageStatus.SENDING: COLORS["text_muted"],
    MessageStatus.SENT: COLORS["primary"],
    MessageStatus.ERROR: COLORS["error"],
}


def get_status_color(status: MessageStatus) -> str:
    return STATUS_COLORS.get(status, COLORS["text_muted"])


def apply_custom_css() -> None:
    """Inject the page stylesheet. Called once per rerun from configure_page."""
    st.markdown(
        f"""
        <style>
        .block-container {{
            padding-top: 1.5rem;
            max-width: 820px;
        }}

        [data-testid="stChatMessage"] {{
            border: 1px solid {COLORS['border']};
            border-radius: 0.75rem;
            padding: 0.75rem 1rem;
        }}

        [data-testid="stChatMessage"]:has([data-testid="stChatMessageAvatarUser"]) {{
            background-color: {COLORS['user_bubble']};
        }}

        .stButton > button[kind="primary"],
        .stFormSubmitButton > button[kind="primary"] {{
            background-color: {COLORS['primary']};
            border-color: {COLORS['primary']};
        }}

        .stButton > button[kind="primary"]:hover,
        .stFormSubmitButton > button[kind="primary"]:hover {{
            background-color: {COLORS['primary_hover']};
            border-color: {COLORS['primary_hover']};
        }}

        .stProgress > div > div > div > div {{
            background-color: {COLORS['primary']};
        }}

        #MainMenu {{visibility: hidden;}}
        footer {{visibility: hidden;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def time_badge(label: str) -> None:
    """Pill showing the remaining-time estimate."""
    st.markdown(
        f'<span style="display: inline-block; padding: 0.2rem 0.7rem; '
        f"border: 1px solid {COLORS['border']}; border-radius: 9999px; "
        f"color: {COLORS['primary']}; font-size: 0.8rem; font-weight: 600;\">"
        f"⏱ {label}</span>",
        unsafe_allow_html=True,
    )


def section_header(title: str, subtitle: str | None = None) -> None:
    st.markdown(f"#### {title}")
    if subtitle:
        st.caption(subtitle)
