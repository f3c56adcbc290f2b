"""
Recipe Studio - Streamlit Frontend Main Entry Point.

Browse a paginated list of recipes and upload or edit recipes through the
add/edit recipe form. All form state transitions go through
recipebook.form.AddRecipeForm and all pagination decisions through
recipebook.pagination.build_pagination; this page only maps them to widgets.

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
import time
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import api.config and recipebook
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st

from api.config import PaginationConfig, RecipeFormConfig
from recipebook.errors import RecipeValidationError
from recipebook.events import log_page_changed, log_recipe_rejected, log_recipe_submitted
from recipebook.form import RECIPE_FIELDS, SUCCESS_MESSAGE, submit_label
from recipebook.models import PaginationState, RecipeDraft, SourceRecipe
from recipebook.pagination import build_pagination, paginate
from ui.feedback import clear_message, set_message, show_empty_state, show_message
from ui.styles import load_global_styles
from utils.sample_recipes import recipes_by_id, search_recipes
from utils.session import (
    get_current_page,
    get_or_create_session_id,
    get_recipe_form,
    set_current_page,
)

FIELD_PREFIX = "form-"
UPLOADED_KEY = "uploaded_recipes"
CLOSE_PENDING_KEY = "close_form_pending"

FIELD_LABELS = {
    "title": "Title",
    "sourceUrl": "URL",
    "image": "Image URL",
    "publisher": "Publisher",
    "cookingTime": "Prep time",
    "servings": "Servings",
}

st.set_page_config(
    page_title="Recipe Studio",
    page_icon="🍳",
    layout="wide",
    initial_sidebar_state="expanded",
)

load_global_styles()

session_id = get_or_create_session_id()
form = get_recipe_form()


# ---------------------------------------------------------------------------
# Form helpers
# ---------------------------------------------------------------------------

def _prefill_value(recipe: Optional[SourceRecipe], field: str) -> str:
    if recipe is None:
        return ""
    values = {
        "title": recipe.title,
        "sourceUrl": recipe.source_url,
        "image": recipe.image,
        "publisher": recipe.publisher,
        "cookingTime": f"{recipe.cooking_time:g}",
        "servings": f"{recipe.servings:g}",
    }
    return values[field]


def _seed_widgets(recipe: Optional[SourceRecipe]) -> None:
    """Reset every form widget to the values of recipe (blank when None)."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(FIELD_PREFIX)]:
        del st.session_state[key]

    for field in RECIPE_FIELDS:
        st.session_state[f"{FIELD_PREFIX}{field}"] = _prefill_value(recipe, field)

    if recipe is not None:
        for index, ing in enumerate(recipe.ingredients, start=1):
            quantity = "" if ing.quantity is None else f"{ing.quantity:g}"
            st.session_state[f"{FIELD_PREFIX}ingredient-quantity-{index}"] = quantity
            st.session_state[f"{FIELD_PREFIX}ingredient-unit-{index}"] = ing.unit
            st.session_state[f"{FIELD_PREFIX}ingredient-description-{index}"] = ing.description


def open_form(recipe: Optional[SourceRecipe] = None) -> None:
    if form.state.is_open:
        return
    clear_message()
    _seed_widgets(recipe)
    form.open(recipe)


def close_form() -> None:
    form.close()


def collect_fields() -> Dict[str, Any]:
    """Snapshot of the submitted values keyed by form field name."""
    return {
        str(key)[len(FIELD_PREFIX):]: value
        for key, value in st.session_state.items()
        if str(key).startswith(FIELD_PREFIX)
    }


def store_upload(draft: RecipeDraft, is_editing: bool, source_id: Optional[str]) -> None:
    """Upload handler: keep uploaded recipes in the session, replacing edited ones."""
    uploaded = st.session_state.setdefault(UPLOADED_KEY, {})
    recipe_id = source_id if is_editing and source_id else f"upload_{len(uploaded) + 1:03d}"
    uploaded[recipe_id] = SourceRecipe(id=recipe_id, **draft.model_dump())
    log_recipe_submitted(
        session_id,
        title=draft.title,
        ingredient_count=len(draft.ingredients),
        is_editing=is_editing,
        recipe_id=source_id if is_editing else None,
    )


def submit_form() -> None:
    try:
        form.submit(collect_fields())
    except RecipeValidationError as exc:
        log_recipe_rejected(session_id, exc.kind)
        set_message(exc.message, kind="error")
        return
    set_message(SUCCESS_MESSAGE)
    st.session_state[CLOSE_PENDING_KEY] = True


form.bind_handler("submit", store_upload)


def all_recipes() -> list:
    """Sample recipes with session uploads applied (edits replace by id)."""
    uploaded: Dict[str, SourceRecipe] = st.session_state.get(UPLOADED_KEY, {})
    recipes = [uploaded.get(r.id, r) for r in search_recipes(st.session_state.get("query", ""))]
    known = {r.id for r in recipes}
    recipes.extend(r for rid, r in uploaded.items() if rid not in known)
    return recipes


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.markdown("### 🍳 **Recipe Studio**")
    st.divider()
    st.button("Add recipe", use_container_width=True, type="primary", on_click=open_form)
    st.caption(f"{len(st.session_state.get(UPLOADED_KEY, {}))} recipe(s) uploaded this session")


# ---------------------------------------------------------------------------
# Upload / edit window
# ---------------------------------------------------------------------------

if form.state.is_open:
    st.markdown(f"## {'Edit recipe' if form.state.is_editing else 'Add recipe'}")
    show_message()

    col_data, col_ingredients = st.columns(2)
    with col_data:
        st.markdown("#### Recipe data")
        for field in RECIPE_FIELDS:
            st.text_input(FIELD_LABELS[field], key=f"{FIELD_PREFIX}{field}")

    with col_ingredients:
        st.markdown("#### Ingredients")
        for index in range(1, form.state.ingredient_row_count + 1):
            q_col, u_col, d_col = st.columns([1, 1, 2])
            q_col.text_input(f"Ingredient {index}", key=f"{FIELD_PREFIX}ingredient-quantity-{index}", placeholder="Quantity")
            u_col.text_input("Unit", key=f"{FIELD_PREFIX}ingredient-unit-{index}", placeholder="Unit (e.g., cups)")
            d_col.text_input("Description", key=f"{FIELD_PREFIX}ingredient-description-{index}", placeholder="Description (e.g., flour)")
        st.button("Add Ingredient", on_click=form.add_ingredient_row)

    action_col, close_col = st.columns([3, 1])
    action_col.button(submit_label(form.state.is_editing), type="primary", on_click=submit_form)
    close_col.button("Close", on_click=close_form)

    if st.session_state.pop(CLOSE_PENDING_KEY, False):
        time.sleep(RecipeFormConfig.get_modal_close_seconds())
        form.close()
        st.rerun()

    st.divider()


# ---------------------------------------------------------------------------
# Results with pagination
# ---------------------------------------------------------------------------

st.title("Recipes")
st.text_input("Search recipes", key="query", placeholder="e.g. pasta, eggs", on_change=set_current_page, args=(1,))

results = all_recipes()
page_size = PaginationConfig.get_results_per_page()
state = PaginationState(result_count=len(results), page_size=page_size, current_page=get_current_page())
view = build_pagination(state)

if not results:
    show_empty_state("No recipes found", "Try another search term or add your own recipe.")
else:
    page_items = paginate(results, view.current_page, page_size)
    df = pd.DataFrame(
        [
            {
                "Title": r.title,
                "Publisher": r.publisher,
                "Prep time (min)": r.cooking_time,
                "Servings": r.servings,
                "Ingredients": len(r.ingredients),
            }
            for r in page_items
        ]
    )
    st.dataframe(df, hide_index=True, use_container_width=True)

    by_id = recipes_by_id(page_items)
    edit_col, edit_btn_col = st.columns([3, 1])
    chosen = edit_col.selectbox(
        "Recipe to edit",
        options=list(by_id),
        format_func=lambda rid: by_id[rid].title,
        label_visibility="collapsed",
    )
    edit_btn_col.button(
        "Edit recipe",
        use_container_width=True,
        on_click=open_form,
        args=(by_id.get(chosen),),
        disabled=form.state.is_open,
    )


def go_to_page(target: int) -> None:
    log_page_changed(session_id, view.current_page, target, view.page_count)
    set_current_page(target)


if not view.is_empty:
    prev_col, indicator_col, next_col = st.columns([1, 1, 1])
    if view.previous is not None:
        prev_col.button(f"← {view.previous.label}", on_click=go_to_page, args=(view.previous.target_page,))
    indicator_col.markdown(f"<div style='text-align:center'>{view.indicator}</div>", unsafe_allow_html=True)
    if view.next is not None:
        next_col.button(f"{view.next.label} →", on_click=go_to_page, args=(view.next.target_page,))
