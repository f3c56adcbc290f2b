"""
Tests for the recipe form session.

This module tests the AddRecipeForm component against an in-memory
MarkupDocument, plus the pure session transitions it is built on:
- opening in create and edit mode
- idempotent open (no re-render, no duplicate bindings)
- adding ingredient rows without renumbering
- submission hand-off to the upload handler and the error message channel
"""

import pytest
from pydantic import ValidationError

from recipebook.errors import IngredientValidationError, NegativeValueError
from recipebook.form import (
    ADD_INGREDIENT_BUTTON,
    CLOSE_BUTTON,
    INGREDIENTS_CONTAINER,
    MESSAGE_CONTAINER,
    OPEN_BUTTON,
    OVERLAY,
    UPLOAD_FORM,
    WINDOW,
    AddRecipeForm,
    add_row,
    close_session,
    open_session,
)
from recipebook.models import FormSessionState, Ingredient, SourceRecipe
from recipebook.render import MarkupDocument


def make_recipe(ingredient_count=5):
    return SourceRecipe(
        id="recipe-42",
        title="Lentil Soup",
        source_url="https://example.com/lentils",
        image="https://example.com/lentils.jpg",
        publisher="Green Plate",
        cooking_time=45,
        servings=6,
        ingredients=[
            Ingredient(quantity=i, unit="cup", description=f"ingredient {i}")
            for i in range(1, ingredient_count + 1)
        ],
    )


def visible_rows(document):
    markup = document.markup(UPLOAD_FORM) + document.markup(INGREDIENTS_CONTAINER)
    return markup.count('class="upload__ingredient-row"')


@pytest.fixture
def document():
    return MarkupDocument()


@pytest.fixture
def form(document):
    return AddRecipeForm(document)


class TestSessionTransitions:
    """Pure transitions on FormSessionState."""

    def test_open_create(self):
        state = open_session(FormSessionState())
        assert state.is_open
        assert not state.is_editing
        assert state.ingredient_row_count == 3
        assert state.source_recipe is None
        assert state.source_id is None

    def test_open_edit(self):
        recipe = make_recipe(5)
        state = open_session(FormSessionState(), recipe)
        assert state.is_editing
        assert state.ingredient_row_count == 5
        assert state.source_id == "recipe-42"

    def test_open_when_open_returns_same_state(self):
        state = open_session(FormSessionState())
        assert open_session(state, make_recipe(5)) is state

    def test_transitions_do_not_mutate(self):
        opened = open_session(FormSessionState())
        grown = add_row(opened)
        closed = close_session(grown)
        assert opened.ingredient_row_count == 3
        assert grown.ingredient_row_count == 4
        assert closed.ingredient_row_count == 4
        assert grown.is_open and not closed.is_open

    def test_state_is_frozen(self):
        state = FormSessionState()
        with pytest.raises(ValidationError):
            state.ingredient_row_count = 7


class TestOpenClose:
    """Opening, closing and toggling the form window."""

    def test_starts_hidden(self, form, document):
        assert document.is_hidden(WINDOW)
        assert document.is_hidden(OVERLAY)
        assert not form.state.is_open

    def test_open_fresh_renders_three_blank_rows(self, form, document):
        form.open()
        assert not document.is_hidden(WINDOW)
        assert not document.is_hidden(OVERLAY)
        assert visible_rows(document) == 3
        assert "UPLOAD RECIPE" in document.markup(UPLOAD_FORM)

    def test_open_edit_renders_recipe_rows(self, form, document):
        form.open(make_recipe(5))
        markup = document.markup(UPLOAD_FORM)
        assert visible_rows(document) == 5
        assert "UPDATE RECIPE" in markup
        assert 'value="ingredient 5"' in markup
        assert form.state.is_editing
        assert form.state.ingredient_row_count == 5

    def test_open_while_open_does_not_rerender_or_rebind(self, form, document):
        form.open()
        form.add_ingredient_row()
        fragments_before = document.fragments(UPLOAD_FORM)

        form.open(make_recipe(5))

        assert document.fragments(UPLOAD_FORM) == fragments_before
        assert visible_rows(document) == 4
        assert not form.state.is_editing
        assert len(document.handlers(ADD_INGREDIENT_BUTTON, "click")) == 1

    def test_close_keeps_state_until_reopen(self, form, document):
        form.open(make_recipe(5))
        form.close()
        assert document.is_hidden(WINDOW)
        assert form.state.ingredient_row_count == 5
        assert form.state.is_editing

        form.open()
        assert form.state.ingredient_row_count == 3
        assert not form.state.is_editing
        assert visible_rows(document) == 3

    def test_reopen_rebinds_add_button_once(self, form, document):
        form.open()
        form.close()
        form.open()
        assert len(document.handlers(ADD_INGREDIENT_BUTTON, "click")) == 1

    def test_buttons_toggle_window(self, form, document):
        document.dispatch(OPEN_BUTTON, "click")
        assert form.state.is_open
        document.dispatch(CLOSE_BUTTON, "click")
        assert not form.state.is_open
        document.dispatch(OPEN_BUTTON, "click")
        document.dispatch(OVERLAY, "click")
        assert not form.state.is_open
        assert document.is_hidden(WINDOW)

    def test_reopen_clears_previous_message(self, form, document):
        form.open()
        form.render_error("boom")
        form.close()
        form.open()
        assert document.markup(MESSAGE_CONTAINER) == ""


class TestAddIngredientRow:
    """Appending ingredient rows."""

    def test_appends_one_row_numbered_after_last(self, form, document):
        form.open()
        fragment = form.add_ingredient_row()
        assert "Ingredient 4</label>" in fragment
        assert form.state.ingredient_row_count == 4
        assert visible_rows(document) == 4
        assert document.fragments(INGREDIENTS_CONTAINER) == [fragment]

    def test_does_not_touch_existing_rows(self, form, document):
        form.open(make_recipe(2))
        form_markup = document.markup(UPLOAD_FORM)
        form.add_ingredient_row()
        form.add_ingredient_row()
        assert document.markup(UPLOAD_FORM) == form_markup
        labels = [f"Ingredient {i}</label>" for i in (3, 4)]
        appended = document.fragments(INGREDIENTS_CONTAINER)
        assert [label in fragment for label, fragment in zip(labels, appended)] == [True, True]

    def test_button_click_adds_row(self, form, document):
        form.open()
        document.dispatch(ADD_INGREDIENT_BUTTON, "click")
        assert form.state.ingredient_row_count == 4
        assert visible_rows(document) == 4

    def test_reopen_discards_added_rows(self, form, document):
        form.open()
        form.add_ingredient_row()
        form.close()
        form.open()
        assert document.fragments(INGREDIENTS_CONTAINER) == []
        assert visible_rows(document) == 3


class TestSubmit:
    """Submission hand-off and error reporting."""

    FIELDS = {
        "title": "Lentil Soup",
        "sourceUrl": "https://example.com/lentils",
        "image": "https://example.com/lentils.jpg",
        "publisher": "Green Plate",
        "cookingTime": "45",
        "servings": "6",
        "ingredient-quantity-1": "1",
        "ingredient-unit-1": "cup",
        "ingredient-description-1": "red lentils",
    }

    def test_create_mode_hands_off_without_id(self, form):
        calls = []
        form.bind_handler("submit", lambda *args: calls.append(args))
        form.open()

        draft = form.submit(dict(self.FIELDS))

        assert len(calls) == 1
        handed_draft, is_editing, source_id = calls[0]
        assert handed_draft == draft
        assert is_editing is False
        assert source_id is None
        assert [i.description for i in draft.ingredients] == ["red lentils"]

    def test_edit_mode_hands_off_source_id(self, form):
        calls = []
        form.bind_handler("submit", lambda *args: calls.append(args))
        form.open(make_recipe(1))

        form.submit(dict(self.FIELDS))

        _, is_editing, source_id = calls[0]
        assert is_editing is True
        assert source_id == "recipe-42"

    def test_submit_uses_current_row_count(self, form):
        form.open()
        form.add_ingredient_row()
        fields = dict(self.FIELDS, **{"ingredient-description-4": "bay leaf"})
        draft = form.submit(fields)
        assert [i.description for i in draft.ingredients] == ["red lentils", "bay leaf"]

    def test_submit_event_dispatch(self, form, document):
        calls = []
        form.bind_handler("submit", lambda *args: calls.append(args))
        form.open()
        document.dispatch(UPLOAD_FORM, "submit", dict(self.FIELDS))
        assert len(calls) == 1

    def test_error_replaces_message_and_keeps_form(self, form, document):
        calls = []
        form.bind_handler("submit", lambda *args: calls.append(args))
        form.open()
        form_markup = document.markup(UPLOAD_FORM)

        with pytest.raises(NegativeValueError):
            form.submit(dict(self.FIELDS, cookingTime="-5"))
        with pytest.raises(IngredientValidationError):
            form.submit(dict(self.FIELDS, **{"ingredient-quantity-1": "-1"}))

        messages = document.fragments(MESSAGE_CONTAINER)
        assert len(messages) == 1
        assert "descriptions are provided for all ingredients" in messages[0]
        assert 'class="error"' in messages[0]
        assert calls == []
        assert form.state.is_open
        assert document.markup(UPLOAD_FORM) == form_markup

    def test_success_message_replaces_error(self, form, document):
        form.open()
        form.render_error("Cooking time and servings cannot be negative numbers.")
        form.render_message()
        messages = document.fragments(MESSAGE_CONTAINER)
        assert len(messages) == 1
        assert "Recipe was successfully uploaded!" in messages[0]

    def test_unknown_event_rejected(self, form):
        with pytest.raises(ValueError):
            form.bind_handler("click", lambda *args: None)
