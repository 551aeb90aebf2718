"""Conversation orchestration: identifier extraction, progress, requests, state."""

from advisory.agent.client import AnalysisClient
from advisory.agent.extractor import extract_identifiers
from advisory.agent.interface import (
    AdvisoryOrchestrator,
    SendOutcome,
    build_reply,
    validate_identifiers,
)
from advisory.agent.progress import (
    PHASES,
    ProgressSimulator,
    ProgressTicker,
    compute_progress,
)
from advisory.agent.state import ConversationState, ViewMode, initial_state

__all__ = [
    "PHASES",
    "AdvisoryOrchestrator",
    "AnalysisClient",
    "ConversationState",
    "ProgressSimulator",
    "ProgressTicker",
    "SendOutcome",
    "ViewMode",
    "build_reply",
    "compute_progress",
    "extract_identifiers",
    "initial_state",
    "validate_identifiers",
]
