"""Identifier extraction from free-text messages.

Looks for a company identifier ("Company ID: ACME-1", "comp-id ACME-1", ...)
and a user identifier ("User ID: u42", "user-id u42") anywhere in the text.
Best-effort: the first match wins and the token is not validated beyond
its character set. A missing identifier is not an error, only a signal
that the message must go through the identifier dialog.
"""

import logging
import re

from advisory.models import ExtractedIdentifiers

logger = logging.getLogger(__name__)

# Letters, digits, hyphen, underscore
_TOKEN = r"([A-Za-z0-9_-]+)"
_LABEL_SUFFIX = r"[-_\s]id\s*:?\s*"

# Checked in order; "company" takes precedence over the short "comp" label
_COMPANY_PATTERNS = (
    re.compile(r"company" + _LABEL_SUFFIX + _TOKEN, re.IGNORECASE),
    re.compile(r"comp" + _LABEL_SUFFIX + _TOKEN, re.IGNORECASE),
)
_USER_PATTERNS = (re.compile(r"user" + _LABEL_SUFFIX + _TOKEN, re.IGNORECASE),)


def _first_match(patterns: tuple[re.Pattern[str], ...], text: str) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_identifiers(text: str) -> ExtractedIdentifiers:
    """Extract company and user identifiers from a message.

    Args:
        text: Free-text user message.

    Returns:
        ExtractedIdentifiers with ``None`` for each identifier not found.
    """
    result = ExtractedIdentifiers(
        company_id=_first_match(_COMPANY_PATTERNS, text),
        user_id=_first_match(_USER_PATTERNS, text),
    )
    logger.debug(
        "Extracted identifiers: company=%s user=%s",
        result.company_id is not None,
        result.user_id is not None,
    )
    return result
