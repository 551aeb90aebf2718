"""AI Advisory Streamlit UI module.

Run the app with: streamlit run app.py
"""

from advisory.ui.state import init_session_state
from advisory.ui.views import configure_page, render_main_content

__all__ = [
    "configure_page",
    "init_session_state",
    "render_main_content",
]
