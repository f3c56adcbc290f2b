"""
Session management utilities for the Streamlit frontend.

Streamlit reruns the script on every interaction, so everything that must
survive between reruns lives in st.session_state:
- a session ID used to attribute interaction events
- the AddRecipeForm (with its MarkupDocument and current FormSessionState)
- the current results page
"""

import uuid

import streamlit as st

from api.config import RecipeFormConfig
from recipebook.form import AddRecipeForm
from recipebook.render import MarkupDocument

SESSION_ID_KEY = "session_id"
RECIPE_FORM_KEY = "recipe_form"
CURRENT_PAGE_KEY = "results_page"


def get_or_create_session_id() -> str:
    """
    Get or create a persistent session ID stored in st.session_state.

    Returns:
        Session ID string (UUID format)
    """
    if SESSION_ID_KEY not in st.session_state:
        st.session_state[SESSION_ID_KEY] = str(uuid.uuid4())
    return st.session_state[SESSION_ID_KEY]


def get_recipe_form() -> AddRecipeForm:
    """
    Get the recipe form for this browser session, creating it on first use.

    The form keeps its own immutable FormSessionState; transitions replace it.
    """
    if RECIPE_FORM_KEY not in st.session_state:
        st.session_state[RECIPE_FORM_KEY] = AddRecipeForm(
            MarkupDocument(),
            default_rows=RecipeFormConfig.get_default_ingredient_rows(),
            icons_url=RecipeFormConfig.get_icons_url(),
        )
    return st.session_state[RECIPE_FORM_KEY]


def get_current_page() -> int:
    return st.session_state.get(CURRENT_PAGE_KEY, 1)


def set_current_page(page: int) -> None:
    st.session_state[CURRENT_PAGE_KEY] = page
