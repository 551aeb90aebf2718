"""View rendering functions for the AI Advisory UI.

Contains all Streamlit page-level rendering: landing page, chat header,
chat area and input.
"""

import streamlit as st

from advisory.agent import ConversationState, ViewMode
from advisory.models import NotificationVariant
from advisory.ui.components import (
    BUSY_PLACEHOLDER,
    LiveChatRegion,
    render_chat_input,
    render_identifier_form,
    render_landing,
)
from advisory.ui.handlers import (
    handle_go_home,
    handle_identifier_cancel,
    handle_identifier_submit,
    handle_start_chat,
    handle_user_input,
    pop_notifications,
)
from advisory.ui.state import get_conversation
from advisory.ui.styles import COLORS, apply_custom_css


def configure_page() -> None:
    """Configure Streamlit page settings."""
    st.set_page_config(
        page_title="AI Advisory",
        page_icon=None,
        layout="centered",
        initial_sidebar_state="collapsed",
    )
    apply_custom_css()


def render_notifications() -> None:
    """Show queued notifications as toasts."""
    for notification in pop_notifications():
        icon = "⚠️" if notification.variant == NotificationVariant.DESTRUCTIVE else "✅"
        st.toast(f"**{notification.title}**  \n{notification.description}", icon=icon)


def render_header() -> None:
    """Render the chat header with a way back to the landing page."""
    col_back, col_title = st.columns([1, 6])
    with col_back:
        if st.button("← Back", key="back_home"):
            handle_go_home()
            st.rerun()
    with col_title:
        st.markdown(
            f"""
            <div>
                <h1 style="margin: 0; font-size: 1.5rem; color: {COLORS['text']};">
                    AI Advisory
                </h1>
                <p style="margin: 0; font-size: 0.875rem; color: {COLORS['text_muted']};">
                    Professional Business Intelligence
                </p>
            </div>
            """,
            unsafe_allow_html=True,
        )
    st.divider()


def render_chat_area(state: ConversationState) -> LiveChatRegion:
    """Render history, progress and the identifier form."""
    live = LiveChatRegion()
    live.update(state)

    if state.is_dialog_open:
        action, company_id, user_id = render_identifier_form(state)
        if action == "submit":
            handle_identifier_submit(company_id, user_id, live)
            st.rerun()
        elif action == "cancel":
            handle_identifier_cancel()
            st.rerun()

    return live


def render_input_area(state: ConversationState, live: LiveChatRegion) -> None:
    """Render the chat input; disabled while busy or while the form is open."""
    slot = st.empty()
    live.attach_input(slot)
    with slot.container():
        user_input = render_chat_input(
            placeholder=_get_input_placeholder(state),
            disabled=state.is_loading or state.is_dialog_open,
        )
    if user_input:
        handle_user_input(user_input, live)
        st.rerun()


def _get_input_placeholder(state: ConversationState) -> str:
    if state.is_dialog_open:
        return "Provide your Company ID and User ID above..."
    if state.is_loading:
        return BUSY_PLACEHOLDER
    return "Ask for a business analysis, e.g. 'Company ID: ACME-1, User ID: u42, analyze my market'"


def render_main_content() -> None:
    """Render the current view."""
    render_notifications()
    state = get_conversation()

    if state.view == ViewMode.LANDING:
        if render_landing():
            handle_start_chat()
            st.rerun()
        return

    render_header()
    live = render_chat_area(state)
    render_input_area(state, live)
