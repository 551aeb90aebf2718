"""AI Advisory - conversational front-end for business analysis.

Main entry point. Run with: streamlit run app.py
"""

from advisory.config import settings
from advisory.logging_config import setup_logging
from advisory.ui import configure_page, init_session_state, render_main_content


def main() -> None:
    """Main application entry point."""
    setup_logging(settings.log_level)

    # Must be the first Streamlit call
    configure_page()

    init_session_state()

    render_main_content()


if __name__ == "__main__":
    main()
