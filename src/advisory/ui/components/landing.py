"""Landing page for the AI Advisory UI."""

import streamlit as st

from advisory.ui.styles import COLORS, section_header

FEATURES = (
    (
        "Market Analysis",
        "Deep dive into market trends, opportunities, and competitive landscape",
    ),
    ("Growth Strategy", "Identify growth opportunities and strategic recommendations"),
    ("Customer Insights", "Understand your customer base and market positioning"),
    (
        "Innovation Opportunities",
        "Discover new market opportunities and innovation paths",
    ),
)

STEPS = (
    (
        "Provide Your Details",
        "Share your Company ID and User ID for personalized analysis",
    ),
    ("AI Analysis", "Our AI conducts thorough analysis in just 5-8 minutes"),
    ("Get Insights", "Receive comprehensive insights delivered while you wait"),
)

REQUIREMENTS = (
    (
        "Company ID",
        "Your unique company identifier for accessing business data and context.",
        "COMP-2024-ABC123 or similar alphanumeric code",
    ),
    (
        "User ID",
        "Your user identifier for personalized recommendations and access control.",
        "USER-123456 or your assigned user code",
    ),
)


def _render_hero() -> bool:
    st.title("Get AI-Powered Advisory Insights for Your Business")
    st.markdown(
        "Transform your business strategy with comprehensive AI analysis. "
        "Get deep insights, market intelligence, and actionable recommendations "
        "tailored to your company."
    )
    return st.button("Start Analysis", type="primary", key="start_hero")


def _render_features() -> None:
    section_header(
        "AI-Powered Business Intelligence",
        "Comprehensive analysis across all aspects of your business",
    )
    for col, (title, description) in zip(st.columns(len(FEATURES)), FEATURES):
        with col:
            st.markdown(f"**{title}**")
            st.caption(description)


def _render_how_it_works() -> None:
    section_header("How It Works", "Simple process, powerful insights")
    for col, (number, (title, description)) in zip(
        st.columns(len(STEPS)), enumerate(STEPS, start=1)
    ):
        with col:
            st.markdown(f"**{number}. {title}**")
            st.caption(description)

    st.info(
        "**Deep Analysis Worth the Brief Wait.** Our comprehensive analysis takes "
        "5-8 minutes to ensure thorough evaluation of your business data, market "
        "conditions, and strategic opportunities."
    )


def _render_requirements() -> bool:
    section_header(
        "Getting Started Requirements",
        "To provide accurate and personalized insights, we need the following information:",
    )
    for title, description, example in REQUIREMENTS:
        st.markdown(
            f"""
            <div style="
                padding: 0.75rem 1rem;
                border: 1px solid {COLORS['border']};
                border-radius: 0.375rem;
                margin-bottom: 0.5rem;
            ">
                <strong>{title}</strong>
                <span style="color: {COLORS['error']}; font-size: 0.75rem; margin-left: 0.5rem;">Required</span>
                <div style="color: {COLORS['text_muted']}; font-size: 0.875rem;">
                    {description}<br/>
                    Example format: {example}
                </div>
            </div>
            """,
            unsafe_allow_html=True,
        )
    return st.button("Get Insights Now", type="primary", key="start_requirements")


def render_landing() -> bool:
    """Render the landing page.

    Returns:
        True if the user asked to start the chat.
    """
    started = _render_hero()
    st.divider()
    _render_features()
    st.divider()
    _render_how_it_works()
    st.divider()
    return _render_requirements() or started
