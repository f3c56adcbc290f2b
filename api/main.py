"""
FastAPI application for the Recipe Studio API.

This module defines the REST API endpoints around the recipe form and the
search result pagination:
- GET /health: Liveness check with uptime
- POST /recipes/form: Render the add/edit recipe form
- POST /recipes/form/rows: Render the next blank ingredient row
- POST /recipes/validate: Validate and normalize a form submission
- GET /pagination: Compute pagination controls for a results page
- GET /analytics/events/*: Read back the interaction event log (see api/routers/analytics.py)

The optional X-Session-ID header is only used to attribute interaction events.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from typing import Optional

from fastapi import FastAPI, Header, HTTPException, Query, status

from api.config import PaginationConfig, RecipeFormConfig
from api.routers.analytics import router as analytics_router
from api.schemas import (
    AddIngredientRowRequest,
    AddIngredientRowResponse,
    PaginationResponse,
    RecipeFormRequest,
    RecipeFormResponse,
    RecipeSubmission,
    RecipeSubmissionResponse,
)
from recipebook.errors import RecipeValidationError
from recipebook.events import log_page_changed, log_recipe_rejected, log_recipe_submitted
from recipebook.form import (
    SUCCESS_MESSAGE,
    generate_form_markup,
    generate_ingredient_row_markup,
    handle_submit,
    initial_row_count,
    submit_label,
)
from recipebook.models import PaginationState
from recipebook.pagination import build_pagination, generate_pagination_markup

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title="Recipe Studio API",
    description="Backend API for the recipe upload/edit form and search result pagination",
    version="1.0.0",
    openapi_tags=[
        {
            "name": "recipes",
            "description": "Render, extend and validate the add/edit recipe form.",
        },
        {
            "name": "pagination",
            "description": "Compute which pagination controls to show for a results page.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
        {
            "name": "analytics",
            "description": "Read back logged interaction events.",
        },
    ],
)

app.include_router(analytics_router)


@app.get("/health", tags=["health"], summary="Health check")
def health() -> dict:
    """Return service status and uptime in seconds."""
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _APP_START_TIME, 1),
    }


@app.post(
    "/recipes/form",
    response_model=RecipeFormResponse,
    tags=["recipes"],
    summary="Render the add/edit recipe form",
    description="Returns blank form markup with the default number of ingredient rows, or, when a recipe "
                "is provided, markup pre-filled with that recipe and one row per ingredient.",
)
def render_form(request: RecipeFormRequest) -> RecipeFormResponse:
    default_rows = RecipeFormConfig.get_default_ingredient_rows()
    markup = generate_form_markup(
        request.recipe,
        default_rows=default_rows,
        icons_url=RecipeFormConfig.get_icons_url(),
    )
    is_editing = request.recipe is not None
    return RecipeFormResponse(
        markup=markup,
        is_editing=is_editing,
        submit_label=submit_label(is_editing),
        ingredient_row_count=initial_row_count(request.recipe, default_rows),
    )


@app.post(
    "/recipes/form/rows",
    response_model=AddIngredientRowResponse,
    tags=["recipes"],
    summary="Render the next blank ingredient row",
)
def add_ingredient_row(request: AddIngredientRowRequest) -> AddIngredientRowResponse:
    """
    Render one blank row numbered after the current last row.

    Existing rows are never renumbered; the client appends the returned markup
    to the ingredient container.
    """
    new_count = request.ingredient_row_count + 1
    return AddIngredientRowResponse(
        markup=generate_ingredient_row_markup(new_count),
        ingredient_row_count=new_count,
    )


@app.post(
    "/recipes/validate",
    response_model=RecipeSubmissionResponse,
    tags=["recipes"],
    summary="Validate and normalize a recipe form submission",
    responses={422: {"description": "Submission rejected; detail carries error kind and message"}},
)
def validate_recipe(
    submission: RecipeSubmission,
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID", description="Session identifier (optional)"),
) -> RecipeSubmissionResponse:
    """
    Validate a raw submission.

    Cooking time and servings are checked first. Blank ingredient rows are
    dropped; any other invalid row rejects the whole submission.

    Raises:
        HTTPException 422: With detail {"error": kind, "message": text}
    """
    try:
        draft = handle_submit(submission.fields, row_count=submission.ingredient_row_count)
    except RecipeValidationError as exc:
        logger.warning("Rejected recipe submission (%s): %s", exc.kind, exc.message)
        log_recipe_rejected(x_session_id, exc.kind)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_dict(),
        ) from exc

    source_id = submission.source_id if submission.is_editing else None
    log_recipe_submitted(
        x_session_id,
        title=draft.title,
        ingredient_count=len(draft.ingredients),
        is_editing=submission.is_editing,
        recipe_id=source_id,
    )
    return RecipeSubmissionResponse(
        recipe=draft,
        is_editing=submission.is_editing,
        source_id=source_id,
        message=SUCCESS_MESSAGE,
    )


@app.get(
    "/pagination",
    response_model=PaginationResponse,
    tags=["pagination"],
    summary="Compute pagination controls",
    description="Returns the page count, the indicator and the previous/next controls that apply. "
                "A page beyond the last page is treated as the last page.",
)
def pagination(
    result_count: int = Query(..., ge=0, description="Total number of results"),
    page: int = Query(1, ge=1, description="Current page (1-indexed)"),
    page_size: Optional[int] = Query(None, ge=1, description="Results per page (defaults to RESULTS_PER_PAGE)"),
    from_page: Optional[int] = Query(None, ge=1, description="Page the user navigated from, for event logging"),
    x_session_id: Optional[str] = Header(None, alias="X-Session-ID", description="Session identifier (optional)"),
) -> PaginationResponse:
    state = PaginationState(
        result_count=result_count,
        page_size=page_size or PaginationConfig.get_results_per_page(),
        current_page=page,
    )
    view = build_pagination(state)

    if from_page is not None and from_page != view.current_page:
        log_page_changed(x_session_id, from_page, view.current_page, view.page_count)

    return PaginationResponse(
        page_count=view.page_count,
        current_page=view.current_page,
        indicator=view.indicator,
        controls=view.controls(),
        markup=generate_pagination_markup(view, RecipeFormConfig.get_icons_url()),
    )
