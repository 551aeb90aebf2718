"""Jinja2 template loader for assistant narrative text.

Usage:
    from advisory.prompts import render_prompt

    text = render_prompt("analysis_complete", name="Report.pdf")

Available templates:
    - welcome: One-time greeting explaining the identifier requirement
    - analysis_complete: Success narrative referencing the artifact name
    - analysis_issue: Narrative for a finished run that reported a problem
    - request_failed: Generic apology after every attempt failed
    - identifier_appendix: Identifier lines appended to a gated message
    - analysis_request: Single text payload sent to the analysis backend

Templates render plain text only. Links are never produced here.
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
    autoescape=False,
)


def render_prompt(template_name: str, **kwargs: Any) -> str:
    """Render a template with the given variables.

    Args:
        template_name: Name of the template (without .j2 extension)
        **kwargs: Variables to pass to the template

    Returns:
        Rendered text, stripped of surrounding whitespace.

    Raises:
        TemplateNotFound: If template doesn't exist
    """
    template_file = f"{template_name}.j2"

    try:
        template = _env.get_template(template_file)
        rendered: str = template.render(**kwargs)
        logger.debug("Rendered template: %s", template_name)
        return rendered.strip()
    except TemplateNotFound:
        logger.error("Template not found: %s", template_file)
        raise


def get_welcome_message() -> str:
    return render_prompt("welcome")


def get_completion_message(name: str | None, clean_success: bool) -> str:
    """Narrative for a settled request that returned a result.

    Args:
        name: Artifact display name from the result, if any.
        clean_success: Whether the workflow reported no error and status 200.
    """
    if clean_success:
        return render_prompt("analysis_complete", name=name)
    return render_prompt("analysis_issue")


def get_apology_message() -> str:
    return render_prompt("request_failed")


def get_identifier_appendix(company_id: str, user_id: str) -> str:
    return render_prompt("identifier_appendix", company_id=company_id, user_id=user_id)


def get_analysis_request_text(message: str, company_id: str, user_id: str) -> str:
    """Single-line payload combining both identifiers and the user's text."""
    return render_prompt(
        "analysis_request",
        message=message,
        company_id=company_id,
        user_id=user_id,
    )
