"""Coerce untrusted model output into the canonical transport shapes.

The model is treated as untrusted: every field is coerced with a default rather
than validated strictly, and nothing here raises on malformed input.

Core Functions:
- normalize_idea() / normalize_ideas(): parsed document -> list[Idea] (max MAX_IDEAS)
- normalize_recipe(): parsed document -> RecipeDetail | None
- attach_idea_images(): concurrent, order-preserving image enrichment
- attach_recipe_image(): image enrichment for one recipe
"""

import asyncio
import json
from typing import Any, List, Optional

import aiohttp

from src.clients.images import build_image_query, get_image_url
from src.models.models import Idea, IdeasRequest, RecipeDetail, RecipeDetailRequest
from src.utils.config import config
from src.utils.logger import logger
from src.utils.slugs import slugify

DEFAULT_IDEA_ID = "recipe-idea"
DEFAULT_IDEA_TITLE = "Recipe Idea"
DEFAULT_RECIPE_ID = "recipe"
DEFAULT_SERVINGS = 2
DEFAULT_TOTAL_TIME_MINUTES = 30


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _coerce_positive_int(value: Any, default: int) -> int:
    """Numeric coercion: "4" -> 4, 4.7 -> 4; falsy, non-numeric or < 1 -> default."""
    if not value or isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _list_item_text(item: Any) -> str:
    if isinstance(item, (dict, list)):
        return json.dumps(item, ensure_ascii=False)
    return _as_text(item)


def _coerce_text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_list_item_text(item) for item in value if item is not None]


def normalize_idea(entry: Any, request_category_id: Optional[str] = None) -> Idea:
    """Coerce one raw idea entry; non-object entries are treated as empty."""
    raw = _as_dict(entry)
    title = _as_text(raw.get("title")).strip() or DEFAULT_IDEA_TITLE
    idea_id = slugify(_as_text(raw.get("id") or raw.get("title") or DEFAULT_IDEA_ID)) or DEFAULT_IDEA_ID
    category_id = raw.get("categoryId") or request_category_id

    return Idea(
        id=idea_id,
        title=title,
        blurb=_as_text(raw.get("blurb")),
        category_id=_as_text(category_id) if category_id else None,
    )


def normalize_ideas(document: Any, payload: IdeasRequest) -> List[Idea]:
    """Take the first MAX_IDEAS entries of document["ideas"], in model order.

    A document without an "ideas" list yields an empty list.
    """
    raw_ideas = _as_dict(document).get("ideas")
    if not isinstance(raw_ideas, list):
        logger.warning(f"Model returned no ideas list; keys={sorted(_as_dict(document))}")
        return []
    if len(raw_ideas) > config.MAX_IDEAS:
        logger.debug(f"Truncating {len(raw_ideas)} ideas to {config.MAX_IDEAS}")
    return [normalize_idea(entry, payload.category_id) for entry in raw_ideas[: config.MAX_IDEAS]]


def normalize_recipe(document: Any, payload: RecipeDetailRequest) -> Optional[RecipeDetail]:
    """Coerce document["recipe"] into a RecipeDetail, or None when absent."""
    raw = _as_dict(document).get("recipe")
    if not isinstance(raw, dict):
        logger.warning(f"Model returned no recipe object; keys={sorted(_as_dict(document))}")
        return None

    request_title = payload.title or ""
    title = _as_text(raw.get("title")).strip() or request_title
    recipe_id = (
        slugify(_as_text(raw.get("id") or raw.get("title")))
        or slugify(request_title)
        or DEFAULT_RECIPE_ID
    )

    return RecipeDetail(
        id=recipe_id,
        title=title,
        category=_as_text(raw.get("category") or payload.category_id or ""),
        servings=_coerce_positive_int(raw.get("servings"), DEFAULT_SERVINGS),
        total_time_minutes=_coerce_positive_int(raw.get("totalTimeMinutes"), DEFAULT_TOTAL_TIME_MINUTES),
        ingredients=_coerce_text_list(raw.get("ingredients")),
        steps=_coerce_text_list(raw.get("steps")),
        tips=_coerce_text_list(raw.get("tips")),
    )


async def attach_idea_images(ideas: List[Idea], session: Optional[aiohttp.ClientSession] = None) -> List[Idea]:
    """Resolve every idea's image concurrently; result order matches input order."""
    urls = await asyncio.gather(
        *(get_image_url(build_image_query(idea.title), idea.id, session=session) for idea in ideas)
    )
    for idea, url in zip(ideas, urls):
        idea.image_url = url
        idea.image_alt = idea.title
    return ideas


async def attach_recipe_image(recipe: RecipeDetail, session: Optional[aiohttp.ClientSession] = None) -> RecipeDetail:
    """Resolve the recipe's image and alt text."""
    recipe.image_url = await get_image_url(build_image_query(recipe.title), recipe.id, session=session)
    recipe.image_alt = recipe.title
    return recipe
