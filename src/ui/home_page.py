"""Home page: registrant counter and list."""
import streamlit as st

from src.services.roster_service import RosterStateManager


def format_counter(count: int) -> str:
    """Build the counter sentence, e.g. "1 utilisateur inscrit"."""
    if count == 1:
        return "1 utilisateur inscrit"
    return f"{count} utilisateur(s) inscrit(s)"


def render_home_page(roster: RosterStateManager):
    """Render the counter, the registrant table and the register link."""
    st.title("Bienvenue sur notre plateforme")

    if roster.is_degraded:
        st.warning(
            "⚠️ Synchronisation impossible avec le serveur, "
            "affichage des données enregistrées localement."
        )

    st.markdown(f"**{format_counter(roster.count)}**")

    if roster.count == 0:
        st.info("Aucun utilisateur inscrit pour le moment.")
    else:
        st.table([
            {"Prénom": r.first_name, "Nom": r.last_name, "Email": r.email}
            for r in roster.registrants
        ])

    if st.button("S'inscrire", key="home_register"):
        st.session_state.current_page = "register"
        st.rerun()
