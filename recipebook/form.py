"""
Add/edit recipe form.

Responsibilities:
- Generate the form markup (recipe data column, ingredient rows, submit button)
  for create mode or pre-filled for edit mode.
- Track the form session (row count, edit flag, source recipe, visibility) as
  an immutable FormSessionState replaced on every transition.
- Append one blank ingredient row at a time without re-rendering the form.
- Extract ingredient rows from a snapshot of submitted field values, validate
  them and normalize the submission into a RecipeDraft.

The pure functions (generate_*, open_session, close_session, add_row,
extract_ingredient_rows, handle_submit) hold all of the logic. AddRecipeForm
wires them to a MarkupRenderer and to the controller's upload handler.
"""

import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .errors import (
    IngredientValidationError,
    NegativeValueError,
    RecipeValidationError,
)
from .models import FormSessionState, Ingredient, RecipeDraft, SourceRecipe
from .render import AFTERBEGIN, BEFOREEND, MarkupRenderer, attr, icon_ref

logger = logging.getLogger(__name__)

DEFAULT_INGREDIENT_ROWS = 3
DEFAULT_ICONS_URL = "img/icons.svg"
SUCCESS_MESSAGE = "Recipe was successfully uploaded!"

# Element / container names in the host page
PAGE = "page"
UPLOAD_FORM = "upload"
INGREDIENTS_CONTAINER = "upload__ingredients-container"
MESSAGE_CONTAINER = "upload__message"
WINDOW = "add-recipe-window"
OVERLAY = "overlay"
OPEN_BUTTON = "nav__btn--add-recipe"
CLOSE_BUTTON = "btn--close-modal"
ADD_INGREDIENT_BUTTON = "btn--add-ingredient"

RECIPE_FIELDS = ("title", "sourceUrl", "image", "publisher", "cookingTime", "servings")
INGREDIENT_PARTS = ("quantity", "unit", "description")

# Upper bound on rows a single submission may claim
MAX_INGREDIENT_ROWS = 500

UploadHandler = Callable[[RecipeDraft, bool, Optional[str]], Any]


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------

def _format_number(value: Optional[float]) -> str:
    """Render 2.0 as '2' and None as ''."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_ingredient_row_markup(index: int, ingredient: Optional[Ingredient] = None) -> str:
    """
    Markup for one ingredient row, labeled with its 1-based index.

    Args:
        index: Row number used in the label and in the field names
        ingredient: Optional ingredient whose values pre-fill the inputs
    """
    quantity = _format_number(ingredient.quantity) if ingredient else ""
    unit = ingredient.unit if ingredient else ""
    description = ingredient.description if ingredient else ""

    return f"""
      <div class="upload__ingredient-row" data-ingredient-index="{index}">
        <label>Ingredient {index}</label>
        <input value="{attr(quantity)}" type="number" name="ingredient-quantity-{index}" placeholder="Quantity" class="upload__input--quantity" min="0"/>
        <input value="{attr(unit)}" type="text" name="ingredient-unit-{index}" placeholder="Unit (e.g., cups)" class="upload__input--unit"/>
        <input value="{attr(description)}" type="text" name="ingredient-description-{index}" placeholder="Description (e.g., flour)" class="upload__input--description" required/>
      </div>
    """


def initial_row_count(source_recipe: Optional[SourceRecipe], default_rows: int = DEFAULT_INGREDIENT_ROWS) -> int:
    """Rows shown when the form opens: one per existing ingredient, else the default."""
    if source_recipe is not None and source_recipe.ingredients:
        return len(source_recipe.ingredients)
    return default_rows


def submit_label(is_editing: bool) -> str:
    return "UPDATE RECIPE" if is_editing else "UPLOAD RECIPE"


def generate_form_markup(
    source_recipe: Optional[SourceRecipe] = None,
    default_rows: int = DEFAULT_INGREDIENT_ROWS,
    icons_url: str = DEFAULT_ICONS_URL,
) -> str:
    """
    Complete form markup, blank for create mode or pre-filled for edit mode.

    Pure function of its arguments. Edit mode is implied by a source recipe.
    """
    if source_recipe is not None and source_recipe.ingredients:
        rows = [
            generate_ingredient_row_markup(i, ing)
            for i, ing in enumerate(source_recipe.ingredients, start=1)
        ]
    else:
        rows = [generate_ingredient_row_markup(i) for i in range(1, default_rows + 1)]

    def value(field: str) -> str:
        if source_recipe is None:
            return ""
        if field == "sourceUrl":
            return attr(source_recipe.source_url)
        if field == "cookingTime":
            return attr(_format_number(source_recipe.cooking_time))
        if field == "servings":
            return attr(_format_number(source_recipe.servings))
        return attr(getattr(source_recipe, field))

    return f"""
      <div class="upload__column">
        <h3 class="upload__heading">Recipe data</h3>
        <label>Title</label>
        <input value="{value('title')}" required name="title" type="text" />
        <label>URL</label>
        <input value="{value('sourceUrl')}" required name="sourceUrl" type="text" />
        <label>Image URL</label>
        <input value="{value('image')}" required name="image" type="text" />
        <label>Publisher</label>
        <input value="{value('publisher')}" required name="publisher" type="text" />
        <label>Prep time</label>
        <input value="{value('cookingTime')}" required name="cookingTime" type="number" min="0"/>
        <label>Servings</label>
        <input value="{value('servings')}" required name="servings" type="number" min="0"/>
      </div>

      <div class="upload__column">
        <h3 class="upload__heading">Ingredients</h3>
        <div class="upload__ingredients-container">
          {"".join(rows)}
        </div>
        <button type="button" class="btn--add-ingredient">Add Ingredient</button>
      </div>

      <button class="btn upload__btn">
        <svg>
          <use href="{icon_ref(icons_url, 'upload-cloud')}"></use>
        </svg>
        <span>{submit_label(source_recipe is not None)}</span>
      </button>
    """


def generate_message_markup(message: str, icon: str, icons_url: str = DEFAULT_ICONS_URL, error: bool = False) -> str:
    css_class = "error" if error else "message"
    return f"""
      <div class="{css_class}">
        <div>
          <svg>
            <use href="{icon_ref(icons_url, icon)}"></use>
          </svg>
        </div>
        <p>{attr(message)}</p>
      </div>
    """


# ---------------------------------------------------------------------------
# Session transitions
# ---------------------------------------------------------------------------

def open_session(
    state: FormSessionState,
    source_recipe: Optional[SourceRecipe] = None,
    default_rows: int = DEFAULT_INGREDIENT_ROWS,
) -> FormSessionState:
    """Start a fresh session. An already-open session is returned unchanged."""
    if state.is_open:
        return state
    return FormSessionState(
        ingredient_row_count=initial_row_count(source_recipe, default_rows),
        is_editing=source_recipe is not None,
        source_recipe=source_recipe,
        is_open=True,
    )


def close_session(state: FormSessionState) -> FormSessionState:
    """Hide the form. Session values survive until the next open."""
    return state.model_copy(update={"is_open": False})


def add_row(state: FormSessionState) -> FormSessionState:
    return state.model_copy(update={"ingredient_row_count": state.ingredient_row_count + 1})


# ---------------------------------------------------------------------------
# Extraction and validation
# ---------------------------------------------------------------------------

def extract_ingredient_rows(fields: Mapping[str, Any], row_count: int) -> Dict[int, List[str]]:
    """
    Snapshot of ingredient field values keyed by 1-based row index.

    Reads ingredient-quantity-N, ingredient-unit-N and ingredient-description-N
    for N in 1..row_count. Missing fields read as empty strings.
    """
    return {index: _read_row(fields, index) for index in range(1, row_count + 1)}


def _read_row(fields: Mapping[str, Any], index: int) -> List[str]:
    return [
        _as_text(fields.get(f"ingredient-{part}-{index}"))
        for part in INGREDIENT_PARTS
    ]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _parse_number(raw: Any) -> Optional[float]:
    """Parse a finite number; None if raw is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else None
    text = _as_text(raw).strip()
    if "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_recipe_number(raw: Any) -> float:
    """
    Parse cooking time or servings. Empty input reads as 0.

    Raises:
        RecipeValidationError: If the value is not a finite number
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    number = _parse_number(raw)
    if number is None:
        raise RecipeValidationError()
    return number


def _is_blank(row: Sequence[str]) -> bool:
    return all(not _as_text(field).strip() for field in row)


def _is_valid_row(row: Sequence[str]) -> bool:
    if len(row) != 3:
        return False
    quantity, _, description = row
    if not description:
        return False
    if quantity == "":
        return True
    number = _parse_number(quantity)
    return number is not None and number >= 0


def normalize_ingredients(rows: Mapping[int, Sequence[str]]) -> List[Ingredient]:
    """
    Validate and normalize ingredient rows, in row order.

    Blank rows are dropped before validation. A single invalid non-blank row
    rejects all of them.

    Raises:
        IngredientValidationError: If any non-blank row is invalid
    """
    trimmed = [
        [_as_text(field).strip() for field in rows[index]]
        for index in sorted(rows)
        if not _is_blank(rows[index])
    ]

    invalid = [row for row in trimmed if not _is_valid_row(row)]
    if invalid:
        logger.debug("Rejecting %d invalid ingredient row(s)", len(invalid))
        raise IngredientValidationError()

    return [
        Ingredient(
            quantity=None if quantity == "" else float(quantity),
            unit=unit,
            description=description,
        )
        for quantity, unit, description in trimmed
    ]


def handle_submit(
    fields: Mapping[str, Any],
    rows: Optional[Mapping[int, Sequence[str]]] = None,
    row_count: Optional[int] = None,
) -> RecipeDraft:
    """
    Turn submitted form values into a RecipeDraft.

    Args:
        fields: Raw form values keyed by field name
        rows: Ingredient snapshot keyed by row index. Extracted from fields
              when omitted.
        row_count: Number of rows in the form when rows is omitted. Defaults
                   to every row index present in fields. Only indices that
                   actually appear in fields are read; absent rows would be
                   blank and dropped anyway.

    Raises:
        NegativeValueError: Cooking time or servings below zero (checked first)
        RecipeValidationError: Cooking time or servings not a number
        IngredientValidationError: A non-blank ingredient row is invalid
    """
    cooking_time = parse_recipe_number(fields.get("cookingTime"))
    servings = parse_recipe_number(fields.get("servings"))
    if cooking_time < 0 or servings < 0:
        raise NegativeValueError()

    if rows is None:
        rows = {
            index: _read_row(fields, index)
            for index in _present_row_indices(fields)
            if row_count is None or index <= row_count
        }

    ingredients = normalize_ingredients(rows)

    return RecipeDraft(
        title=_as_text(fields.get("title")),
        source_url=_as_text(fields.get("sourceUrl")),
        image=_as_text(fields.get("image")),
        publisher=_as_text(fields.get("publisher")),
        cooking_time=cooking_time,
        servings=servings,
        ingredients=ingredients,
    )


def _present_row_indices(fields: Mapping[str, Any]) -> List[int]:
    """Row indices that have at least one ingredient field in fields."""
    indices = set()
    for name in fields:
        for part in INGREDIENT_PARTS:
            prefix = f"ingredient-{part}-"
            if name.startswith(prefix) and name[len(prefix):].isdigit():
                indices.add(int(name[len(prefix):]))
    return sorted(indices)


# ---------------------------------------------------------------------------
# Controller-facing component
# ---------------------------------------------------------------------------

class AddRecipeForm:
    """
    The upload/edit recipe window.

    Holds the current FormSessionState and performs side effects only through
    the renderer. The controller registers its upload handler with
    bind_handler("submit", handler); the handler receives
    (recipe_draft, is_editing, source_id).
    """

    def __init__(
        self,
        renderer: MarkupRenderer,
        default_rows: int = DEFAULT_INGREDIENT_ROWS,
        icons_url: str = DEFAULT_ICONS_URL,
    ):
        self._renderer = renderer
        self._default_rows = default_rows
        self._icons_url = icons_url
        self._upload_handler: Optional[UploadHandler] = None
        self.state = FormSessionState()

        renderer.set_hidden(WINDOW, True)
        renderer.set_hidden(OVERLAY, True)
        renderer.bind(PAGE, OPEN_BUTTON, "click", lambda *_: self.toggle(None))
        renderer.bind(PAGE, CLOSE_BUTTON, "click", lambda *_: self.toggle())
        renderer.bind(PAGE, OVERLAY, "click", lambda *_: self.toggle())
        renderer.bind(PAGE, UPLOAD_FORM, "submit", self.submit)

    def render(self, state: FormSessionState) -> str:
        return generate_form_markup(state.source_recipe, self._default_rows, self._icons_url)

    def bind_handler(self, event: str, callback: UploadHandler) -> None:
        if event != "submit":
            raise ValueError(f"Unsupported form event: {event!r}")
        self._upload_handler = callback

    def toggle(self, source_recipe: Optional[SourceRecipe] = None) -> None:
        """Open the window when hidden, close it when visible."""
        if self.state.is_open:
            self.close()
        else:
            self.open(source_recipe)

    def open(self, source_recipe: Optional[SourceRecipe] = None) -> None:
        """
        Show the form, rendering it fresh for source_recipe.

        Opening an already-open form does nothing: no re-render and no second
        binding of the add-ingredient button.
        """
        if self.state.is_open:
            logger.debug("Form already open; not re-rendering")
            return

        self.state = open_session(self.state, source_recipe, self._default_rows)
        self._renderer.clear(MESSAGE_CONTAINER)
        self._renderer.clear(INGREDIENTS_CONTAINER)
        self._renderer.clear(UPLOAD_FORM)
        self._renderer.insert_markup(UPLOAD_FORM, AFTERBEGIN, self.render(self.state))
        self._set_visible(True)

        # The button is part of the markup just inserted
        self._renderer.bind(UPLOAD_FORM, ADD_INGREDIENT_BUTTON, "click", self.add_ingredient_row)
        logger.debug(
            "Opened recipe form (editing=%s, rows=%d)",
            self.state.is_editing,
            self.state.ingredient_row_count,
        )

    def close(self) -> None:
        self.state = close_session(self.state)
        self._set_visible(False)

    def add_ingredient_row(self, *_: Any) -> str:
        """Append one blank row numbered after the current last row."""
        self.state = add_row(self.state)
        markup = generate_ingredient_row_markup(self.state.ingredient_row_count)
        self._renderer.insert_markup(INGREDIENTS_CONTAINER, BEFOREEND, markup)
        return markup

    def submit(self, fields: Mapping[str, Any], rows: Optional[Mapping[int, Sequence[str]]] = None) -> RecipeDraft:
        """
        Validate a submission and pass it to the upload handler.

        On failure the error message replaces any previous message and the
        exception propagates; the form stays open and unchanged.
        """
        try:
            draft = handle_submit(fields, rows, row_count=self.state.ingredient_row_count)
        except RecipeValidationError as exc:
            logger.warning("Recipe submission rejected (%s): %s", exc.kind, exc.message)
            self.render_error(exc.message)
            raise

        logger.info(
            "Recipe submission accepted: %r with %d ingredient(s)",
            draft.title,
            len(draft.ingredients),
        )
        if self._upload_handler is not None:
            self._upload_handler(draft, self.state.is_editing, self.state.source_id)
        return draft

    def render_error(self, message: str) -> None:
        self._replace_message(generate_message_markup(message, "alert-triangle", self._icons_url, error=True))

    def render_message(self, message: str = SUCCESS_MESSAGE) -> None:
        self._replace_message(generate_message_markup(message, "smile", self._icons_url))

    def _replace_message(self, markup: str) -> None:
        self._renderer.clear(MESSAGE_CONTAINER)
        self._renderer.insert_markup(MESSAGE_CONTAINER, AFTERBEGIN, markup)

    def _set_visible(self, visible: bool) -> None:
        self._renderer.set_hidden(OVERLAY, not visible)
        self._renderer.set_hidden(WINDOW, not visible)
