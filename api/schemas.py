"""
Pydantic schemas for FastAPI request and response models.

This module defines the request and response bodies of the recipe form and
pagination endpoints. The records they carry (RecipeDraft, SourceRecipe,
PaginationControl) are defined in recipebook.models.

The schemas include:
- RecipeFormRequest / RecipeFormResponse: render the form for create or edit
- AddIngredientRowRequest / AddIngredientRowResponse: next blank ingredient row
- RecipeSubmission / RecipeSubmissionResponse: validate and normalize a submission
- PaginationResponse: controls and markup for a results page
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recipebook.form import MAX_INGREDIENT_ROWS
from recipebook.models import PaginationControl, RecipeDraft, SourceRecipe


class RecipeFormRequest(BaseModel):
    """Open the form; a recipe puts it in edit mode."""
    recipe: Optional[SourceRecipe] = Field(None, description="Recipe to pre-fill for editing")


class RecipeFormResponse(BaseModel):
    """Rendered form and the session values it starts with."""
    markup: str = Field(..., description="Form markup")
    is_editing: bool = Field(..., description="True in edit mode")
    submit_label: str = Field(..., description="'UPDATE RECIPE' or 'UPLOAD RECIPE'")
    ingredient_row_count: int = Field(..., ge=0, description="Number of ingredient rows rendered")


class AddIngredientRowRequest(BaseModel):
    ingredient_row_count: int = Field(..., ge=0, lt=MAX_INGREDIENT_ROWS, description="Rows currently in the form")


class AddIngredientRowResponse(BaseModel):
    markup: str = Field(..., description="Markup for the single appended row")
    ingredient_row_count: int = Field(..., ge=1, description="Row count after appending")


class RecipeSubmission(BaseModel):
    """
    A raw form submission.

    fields holds every submitted value keyed by form field name, including the
    ingredient-quantity-N / ingredient-unit-N / ingredient-description-N fields.
    """
    fields: Dict[str, Any] = Field(default_factory=dict, description="Raw form values keyed by field name")
    ingredient_row_count: Optional[int] = Field(
        None, ge=0, le=MAX_INGREDIENT_ROWS, description="Rows in the form; inferred from fields when omitted"
    )
    is_editing: bool = Field(False, description="Whether the form was opened for an existing recipe")
    source_id: Optional[str] = Field(None, description="Identifier of the recipe being edited")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "fields": {
                    "title": "Pancakes",
                    "sourceUrl": "https://example.com/pancakes",
                    "image": "https://example.com/pancakes.jpg",
                    "publisher": "Home Kitchen",
                    "cookingTime": "20",
                    "servings": "4",
                    "ingredient-quantity-1": "2",
                    "ingredient-unit-1": "cups",
                    "ingredient-description-1": "flour",
                },
                "ingredient_row_count": 3,
                "is_editing": False,
            }
        }
    )


class RecipeSubmissionResponse(BaseModel):
    recipe: RecipeDraft
    is_editing: bool
    source_id: Optional[str] = None
    message: str = Field(..., description="Success message to show the user")


class PaginationResponse(BaseModel):
    """Computed pagination for one results page."""
    page_count: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1, description="Current page after clamping to the last page")
    indicator: Optional[str] = Field(None, description="'current/total', absent when there is a single page")
    controls: List[PaginationControl] = Field(default_factory=list, description="Buttons, previous before next")
    markup: str = Field("", description="Pagination markup; empty when no controls apply")
