"""
Validation errors raised while turning raw form input into a RecipeDraft.

All of them abort the whole submission. The form surfaces them identically,
as a single replace-in-place message, so each carries the user-facing text
in its message.
"""

NEGATIVE_VALUE_MESSAGE = "Cooking time and servings cannot be negative numbers."
INVALID_NUMBER_MESSAGE = "Cooking time and servings must be numbers."
INGREDIENT_ERROR_MESSAGE = (
    "Invalid input: Please ensure all required fields are filled, "
    "and descriptions are provided for all ingredients."
)


class RecipeValidationError(ValueError):
    """Base class for rejected recipe submissions."""

    kind = "invalid_recipe"
    default_message = INVALID_NUMBER_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class NegativeValueError(RecipeValidationError):
    """Cooking time or servings below zero."""

    kind = "negative_value"
    default_message = NEGATIVE_VALUE_MESSAGE


class IngredientValidationError(RecipeValidationError):
    """At least one non-blank ingredient row is malformed or incomplete."""

    kind = "invalid_ingredient"
    default_message = INGREDIENT_ERROR_MESSAGE
