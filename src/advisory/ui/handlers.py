"""Input handlers for the AI Advisory UI.

Each handler rebuilds an orchestrator around the session's conversation,
runs one event, and leaves the new state in the session. Coroutines run
to completion on a private event loop, so a request blocks the script
run while the live region keeps painting progress.
"""

import asyncio
import logging

from advisory.agent import SendOutcome
from advisory.models import Notification
from advisory.ui.components import LiveChatRegion
from advisory.ui.state import build_orchestrator

logger = logging.getLogger(__name__)


def handle_start_chat() -> None:
    build_orchestrator().enter_chat()


def handle_go_home() -> None:
    build_orchestrator().go_home()


def handle_user_input(user_input: str, live: LiveChatRegion | None = None) -> SendOutcome:
    """Handle text typed into the chat box."""
    orchestrator = build_orchestrator(on_change=live.update if live else None)
    outcome = asyncio.run(orchestrator.handle_send(user_input))
    logger.debug("Chat input handled: %s", outcome.value)
    return outcome


def handle_identifier_submit(
    company_id: str, user_id: str, live: LiveChatRegion | None = None
) -> SendOutcome:
    """Handle the identifier form's Continue button."""
    orchestrator = build_orchestrator(on_change=live.update if live else None)
    outcome = asyncio.run(orchestrator.submit_identifiers(company_id, user_id))
    logger.debug("Identifier form handled: %s", outcome.value)
    return outcome


def handle_identifier_cancel() -> None:
    build_orchestrator().cancel_identifiers()


def pop_notifications() -> tuple[Notification, ...]:
    return build_orchestrator().drain_notifications()
