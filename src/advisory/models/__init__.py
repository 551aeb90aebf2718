"""AI Advisory domain models."""

from advisory.models.identifiers import ExtractedIdentifiers, PendingIdentifiers
from advisory.models.message import (
    ALLOWED_STATUS_TRANSITIONS,
    ContentKind,
    DownloadLink,
    Message,
    MessageContent,
    MessageStatus,
    Sender,
    create_assistant_message,
    create_user_message,
)
from advisory.models.notification import Notification, NotificationVariant
from advisory.models.progress import AnalysisProgress
from advisory.models.result import AnalysisResult

__all__ = [
    "ALLOWED_STATUS_TRANSITIONS",
    # Progress
    "AnalysisProgress",
    # Result
    "AnalysisResult",
    "ContentKind",
    "DownloadLink",
    # Identifiers
    "ExtractedIdentifiers",
    # Messages
    "Message",
    "MessageContent",
    "MessageStatus",
    # Notifications
    "Notification",
    "NotificationVariant",
    "PendingIdentifiers",
    "Sender",
    "create_assistant_message",
    "create_user_message",
]
