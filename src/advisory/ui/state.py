"""Session state management for the AI Advisory Streamlit UI.

The whole conversation lives in one immutable ConversationState stored
under a single st.session_state key. Orchestrators are rebuilt on every
rerun around that value and write each new state back.
"""

import logging

import streamlit as st

from advisory.agent import AdvisoryOrchestrator, ConversationState, initial_state
from advisory.agent.interface import StateListener

logger = logging.getLogger(__name__)

_CONVERSATION_KEY = "conversation"


def init_session_state() -> None:
    """Initialize the conversation if this is a new session."""
    if _CONVERSATION_KEY not in st.session_state:
        st.session_state[_CONVERSATION_KEY] = initial_state()
        logger.debug("Session state initialized")


def get_conversation() -> ConversationState:
    state = st.session_state.get(_CONVERSATION_KEY)
    if state is None:
        state = initial_state()
        st.session_state[_CONVERSATION_KEY] = state
    return state


def set_conversation(state: ConversationState) -> None:
    st.session_state[_CONVERSATION_KEY] = state


def build_orchestrator(on_change: StateListener | None = None) -> AdvisoryOrchestrator:
    """Orchestrator bound to the session's conversation.

    Args:
        on_change: Extra listener (e.g. live progress rendering), called
            after the new state has been stored.
    """

    def _store(state: ConversationState) -> None:
        set_conversation(state)
        if on_change is not None:
            on_change(state)

    return AdvisoryOrchestrator(state=get_conversation(), on_change=_store)
