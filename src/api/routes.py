"""HTTP surface for Recipe Finder service.

Routes (all under /api):
- GET  /health      -> {"ok": true}
- GET  /categories  -> static catalog
- POST /ideas       -> {"ideas": [...]} or 500 {"error": "Failed to generate ideas"}
- POST /recipe      -> {"recipe": {...} | null}, 400 {"error": "title is required"},
                       or 500 {"error": "Failed to generate recipe detail"}

Upstream and parse failures are logged with the request payload and reported
with a generic message; raw upstream text never reaches the client.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.models.catalog import CATEGORIES
from src.models.models import (
    CategoriesResponse,
    ErrorResponse,
    IdeasRequest,
    IdeasResponse,
    RecipeDetailRequest,
    RecipeDetailResponse,
)
from src.services.recipes import generate_ideas, generate_recipe_detail
from src.utils.errors import InvalidPayloadError, ParseError, UpstreamError
from src.utils.logger import logger

IDEAS_ERROR = "Failed to generate ideas"
RECIPE_ERROR = "Failed to generate recipe detail"

router = APIRouter(prefix="/api", tags=["recipes"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get("/health")
async def health() -> dict:
    """Liveness check."""
    return {"ok": True}


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories() -> CategoriesResponse:
    """Return the fixed category catalog."""
    return CategoriesResponse(categories=CATEGORIES)


@router.post(
    "/ideas",
    response_model=IdeasResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
)
async def create_ideas(payload: Optional[IdeasRequest] = None):
    """Recipe ideas for a direct query, a category with ingredients, or both."""
    payload = payload or IdeasRequest()
    context = {"endpoint": "/api/ideas", "payload": payload.model_dump(by_alias=True, exclude_none=True)}
    logger.info(f"Ideas requested: {context['payload']}", extra=context)

    try:
        ideas = await generate_ideas(payload)
    except (UpstreamError, ParseError) as e:
        logger.error(f"Ideas generation failed ({type(e).__name__}): {e}", extra=context)
        return _error(500, IDEAS_ERROR)

    return IdeasResponse(ideas=ideas)


@router.post(
    "/recipe",
    response_model=RecipeDetailResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_recipe_detail(payload: Optional[RecipeDetailRequest] = None):
    """Full recipe for a chosen idea title."""
    payload = payload or RecipeDetailRequest()
    context = {"endpoint": "/api/recipe", "payload": payload.model_dump(by_alias=True, exclude_none=True)}
    logger.info(f"Recipe detail requested: {context['payload']}", extra=context)

    try:
        recipe = await generate_recipe_detail(payload)
    except InvalidPayloadError as e:
        logger.warning(f"Rejected recipe request: {e}", extra=context)
        return _error(400, str(e))
    except (UpstreamError, ParseError) as e:
        logger.error(f"Recipe generation failed ({type(e).__name__}): {e}", extra=context)
        return _error(500, RECIPE_ERROR)

    return RecipeDetailResponse(recipe=recipe)
