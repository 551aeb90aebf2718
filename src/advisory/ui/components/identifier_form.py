"""Identifier collection form.

Shown when a submitted message lacks a Company ID or User ID. The
message is held back until both values are given, or dropped on cancel.
"""

import logging
from typing import Literal

import streamlit as st

from advisory.agent import ConversationState

logger = logging.getLogger(__name__)

FormAction = Literal["submit", "cancel"]


def render_identifier_form(
    state: ConversationState,
) -> tuple[FormAction | None, str, str]:
    """Render the identifier form for the pending message.

    Returns:
        Tuple of (action, company_id, user_id). ``action`` is None while
        the user has not pressed a button.
    """
    if state.pending is None:
        return None, "", ""

    st.markdown("### Company and User ID Required")
    st.info(
        "Please provide your Company ID and User ID to continue with the analysis."
    )

    with st.form("identifier_form", clear_on_submit=False):
        company_id = st.text_input(
            "Company ID",
            value=state.dialog_company_id,
            placeholder="e.g. COMP-2024-ABC123",
        )
        user_id = st.text_input(
            "User ID",
            value=state.dialog_user_id,
            placeholder="e.g. USER-123456",
        )

        col_cancel, col_submit = st.columns(2)
        with col_cancel:
            cancelled = st.form_submit_button("Cancel", width="stretch")
        with col_submit:
            submitted = st.form_submit_button(
                "Continue", type="primary", width="stretch"
            )

    if submitted:
        logger.debug("Identifier form submitted")
        return "submit", company_id, user_id
    if cancelled:
        return "cancel", company_id, user_id
    return None, company_id, user_id
