"""
Registration roster application.
"""
import logging
import streamlit as st

from src.ui.home_page import render_home_page
from src.ui.register_page import render_register_page
from src.ui.runtime import get_roster

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Inscriptions",
    page_icon="📝",
    layout="centered",
    initial_sidebar_state="collapsed"
)


def initialize_session_state():
    """Set session state defaults."""
    if "current_page" not in st.session_state:
        st.session_state.current_page = "home"


def render_navigation():
    """Render the navigation bar."""
    nav_col1, nav_col2, _ = st.columns([1, 1, 3], gap="small")

    with nav_col1:
        if st.button("🏠 Accueil", use_container_width=True, key="nav_home"):
            st.session_state.current_page = "home"

    with nav_col2:
        if st.button("📝 Inscription", use_container_width=True, key="nav_register"):
            st.session_state.current_page = "register"


def render_current_page():
    """Render the page selected in session state."""
    roster = get_roster()

    if st.session_state.current_page == "home":
        render_home_page(roster)

    elif st.session_state.current_page == "register":
        render_register_page(roster)

    else:
        st.error(f"Page inconnue : {st.session_state.current_page}")
        if st.button("Retour à l'accueil"):
            st.session_state.current_page = "home"
            st.rerun()


def main():
    """Application entry point."""
    initialize_session_state()
    render_navigation()

    try:
        render_current_page()
    except Exception as e:
        logger.exception("Unhandled exception while rendering page")
        st.error("Une erreur est survenue, veuillez réessayer plus tard.")

        with st.expander("🔍 Détails"):
            st.code(str(e))

        if st.button("Retour à l'accueil"):
            st.session_state.current_page = "home"
            st.rerun()


if __name__ == "__main__":
    main()
