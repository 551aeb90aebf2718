"""Progress panel and the live region redrawn during a request."""

from typing import Any

import streamlit as st

from advisory.agent import ConversationState
from advisory.models import AnalysisProgress
from advisory.ui.components.chat import (
    render_chat_history,
    render_chat_input,
    render_typing_indicator,
)
from advisory.ui.styles import time_badge

BUSY_PLACEHOLDER = "Analysis in progress..."


def render_progress(progress: AnalysisProgress) -> None:
    """Phase label, rounded percentage and remaining time."""
    time_badge(f"{progress.time_remaining_label} remaining")
    st.progress(
        int(round(progress.percentage)),
        text=f"{progress.phase} {round(progress.percentage)}%",
    )
    st.caption(f"Estimated time remaining: {progress.time_remaining_label}")


class LiveChatRegion:
    """Placeholders redrawn on every state change while a request runs.

    Streamlit cannot rerun mid-request, so the orchestrator's listener
    paints into these slots instead. History is repainted only when the
    message tuple changes; progress is repainted on every tick.

    Once a request starts, the attached input slot is replaced by a
    disabled chat input. Any widget interaction still reruns the script,
    which abandons the in-flight request.
    """

    def __init__(self) -> None:
        self._history_slot = st.empty()
        self._progress_slot = st.empty()
        self._typing_slot = st.empty()
        self._input_slot: Any = None
        self._input_locked = False
        self._painted_messages: tuple | None = None

    def attach_input(self, slot: Any) -> None:
        """Slot holding the chat input, locked when the busy flag is set."""
        self._input_slot = slot

    def update(self, state: ConversationState) -> None:
        if state.messages is not self._painted_messages:
            with self._history_slot.container():
                render_chat_history(state.messages)
            self._painted_messages = state.messages

        if state.progress is not None:
            with self._progress_slot.container():
                render_progress(state.progress)
        else:
            self._progress_slot.empty()

        if state.is_typing:
            with self._typing_slot.container():
                render_typing_indicator()
        else:
            self._typing_slot.empty()

        if state.is_loading and self._input_slot is not None and not self._input_locked:
            with self._input_slot.container():
                render_chat_input(
                    placeholder=BUSY_PLACEHOLDER, key="chat_input_busy", disabled=True
                )
            self._input_locked = True
