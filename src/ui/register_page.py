"""Registration form page."""
import logging
from typing import Dict, Optional, Tuple

import streamlit as st

from src.models.roster import AddResult, FailureKind
from src.services.roster_service import RosterStateManager
from src.ui.runtime import run_async
from src.utils.validation import FORM_FIELDS, validate_form

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "firstName": "Prénom *",
    "lastName": "Nom *",
    "email": "Email *",
    "dateOfBirth": "Date de naissance * (AAAA-MM-JJ)",
    "city": "Ville *",
    "postalCode": "Code postal *",
}

FIELD_PLACEHOLDERS = {
    "firstName": "Jean",
    "lastName": "Dupont",
    "email": "jean.dupont@example.com",
    "dateOfBirth": "1990-05-14",
    "city": "Paris",
    "postalCode": "75001",
}


def route_add_result(result: AddResult) -> Tuple[Dict[str, str], Optional[str]]:
    """
    Decide where a failed add is displayed.

    Returns:
        Tuple of (field_errors, form_error)
        - BUSINESS failures attach to the email field
        - SERVER failures become a form-level alert
    """
    if result.success:
        return {}, None
    if result.kind == FailureKind.BUSINESS:
        return {"email": result.error}, None
    return {}, result.error


def _reset_form():
    for field in FORM_FIELDS:
        st.session_state[f"register_{field}"] = ""
    st.session_state.register_errors = {}
    st.session_state.register_form_error = None


def render_register_page(roster: RosterStateManager):
    """Render the registration form and submit it to the roster."""
    st.title("Formulaire d'enregistrement")

    # Widget values can only be reset before the widgets are drawn
    if "register_errors" not in st.session_state or st.session_state.pop("register_reset", False):
        _reset_form()

    if st.session_state.get("register_success"):
        st.success(st.session_state.pop("register_success"))

    if st.session_state.register_form_error:
        st.error(st.session_state.register_form_error)

    errors = st.session_state.register_errors

    with st.form("register_form"):
        for field in FORM_FIELDS:
            st.text_input(
                FIELD_LABELS[field],
                key=f"register_{field}",
                placeholder=FIELD_PLACEHOLDERS[field],
            )
            if errors.get(field):
                st.caption(f":red[{errors[field]}]")
        submitted = st.form_submit_button("S'inscrire")

    if not submitted:
        return

    form_data = {field: st.session_state[f"register_{field}"] for field in FORM_FIELDS}
    validation = validate_form(form_data)
    if not validation.is_valid:
        st.session_state.register_errors = validation.errors
        st.session_state.register_form_error = None
        st.rerun()

    try:
        result = run_async(roster.add(form_data))
    except Exception:
        logger.exception("Unexpected error while submitting registration")
        st.session_state.register_errors = {}
        st.session_state.register_form_error = "Erreur lors de la sauvegarde. Veuillez réessayer."
        st.rerun()

    if result.success:
        st.session_state.register_reset = True
        st.session_state.register_success = "✓ Enregistrement réussi !"
    else:
        field_errors, form_error = route_add_result(result)
        st.session_state.register_errors = field_errors
        st.session_state.register_form_error = form_error
    st.rerun()
