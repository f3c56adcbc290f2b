"""
Recipe, form session and pagination models.

This module defines the canonical records passed between the recipe form,
the pagination calculator and the controllers that drive them.

# NOTE: RecipeDraft is the sole data contract with the upload boundary.
    It is only ever produced by recipebook.form.handle_submit() after the
    whole submission validated, so a RecipeDraft is never partial.

Wire format uses camelCase aliases (sourceUrl, cookingTime) to match the form
field names; Python code uses snake_case attribute names.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    """A single normalized ingredient line."""
    quantity: Optional[float] = Field(None, ge=0, description="Amount, or None when omitted")
    unit: str = Field("", description="Unit of measure (may be empty)")
    description: str = Field(..., min_length=1, description="What the ingredient is (e.g., 'flour')")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"quantity": 2, "unit": "cups", "description": "flour"}
        }
    )


class RecipeDraft(BaseModel):
    """
    A validated recipe ready to be handed to the upload handler.

    Cooking time and servings are non-negative; ingredients keep the order in
    which their rows appeared in the form.
    """
    title: str = Field(..., description="Recipe title")
    source_url: str = Field(..., alias="sourceUrl", description="URL of the original recipe")
    image: str = Field(..., description="Image URL")
    publisher: str = Field(..., description="Publisher name")
    cooking_time: float = Field(..., ge=0, alias="cookingTime", description="Preparation time in minutes")
    servings: float = Field(..., ge=0, description="Number of servings")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredient list")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Pancakes",
                "sourceUrl": "https://example.com/pancakes",
                "image": "https://example.com/pancakes.jpg",
                "publisher": "Home Kitchen",
                "cookingTime": 20,
                "servings": 4,
                "ingredients": [
                    {"quantity": 2, "unit": "cups", "description": "flour"},
                    {"quantity": None, "unit": "", "description": "salt"},
                ],
            }
        },
    )


class SourceRecipe(RecipeDraft):
    """An existing recipe opened for editing. Carries its identifier."""
    id: Optional[str] = Field(None, description="Identifier passed back to the upload handler")
    key: Optional[str] = Field(None, description="API key of a user-owned recipe, if any")


class FormSessionState(BaseModel):
    """
    Transient state of one open/close cycle of the recipe form.

    Instances are frozen: every transition (open, close, add row) produces a
    new state via model_copy(update=...).
    """
    ingredient_row_count: int = Field(0, ge=0, description="Number of ingredient rows currently rendered")
    is_editing: bool = Field(False, description="True when a source recipe was opened for editing")
    source_recipe: Optional[SourceRecipe] = Field(None, description="Recipe being edited, if any")
    is_open: bool = Field(False, description="Whether the form window is visible")

    model_config = ConfigDict(frozen=True)

    @property
    def source_id(self) -> Optional[str]:
        """Identifier of the recipe being edited, or None in create mode."""
        if self.source_recipe is None:
            return None
        return self.source_recipe.id


class PaginationState(BaseModel):
    """Input to the pagination calculator. Never owned by it."""
    result_count: int = Field(..., ge=0, description="Total number of results")
    page_size: int = Field(..., ge=1, description="Results shown per page")
    current_page: int = Field(1, ge=1, description="1-based index of the page being shown")

    model_config = ConfigDict(frozen=True)

    @property
    def page_count(self) -> int:
        """Number of pages needed for all results (ceiling division)."""
        return -(-self.result_count // self.page_size)


class PaginationControl(BaseModel):
    """A single navigation button."""
    kind: Literal["prev", "next"]
    target_page: int = Field(..., ge=1, description="Page the button navigates to")
    label: str = Field(..., description="Button text, e.g. 'Page 2'")
    icon: str = Field(..., description="Symbolic icon name resolved by the renderer")

    model_config = ConfigDict(frozen=True)


class PaginationView(BaseModel):
    """
    Computed pagination controls, in display order: previous, indicator, next.

    An empty view (no indicator, no buttons) means everything fits on one page.
    """
    page_count: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    indicator: Optional[str] = Field(None, description="'current/total', present whenever there is more than one page")
    previous: Optional[PaginationControl] = None
    next: Optional[PaginationControl] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.indicator is None and self.previous is None and self.next is None

    def controls(self) -> List[PaginationControl]:
        """Buttons that are present, left to right."""
        return [c for c in (self.previous, self.next) if c is not None]
