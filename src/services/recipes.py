"""Request pipelines for the ideas and recipe-detail endpoints.

Each request runs Validated -> Prompted -> Parsed -> Normalized -> Enriched with
one LLM call and one aiohttp session shared by that request's upstream calls.
No state is kept across requests.
"""

from typing import List, Optional

import aiohttp

from src.clients.gemini import call_llm
from src.models.models import Idea, IdeasRequest, RecipeDetail, RecipeDetailRequest
from src.prompts.prompts import get_detail_prompt, get_ideas_prompt
from src.services.normalizers import attach_idea_images, attach_recipe_image, normalize_ideas, normalize_recipe
from src.utils.errors import InvalidPayloadError
from src.utils.logger import logger


def validate_detail_request(payload: RecipeDetailRequest) -> None:
    """Reject a detail request without a title before any upstream call.

    Raises:
        InvalidPayloadError: If title is missing or blank.
    """
    if not payload.title:
        raise InvalidPayloadError("title is required")


async def generate_ideas(payload: IdeasRequest) -> List[Idea]:
    """Produce up to MAX_IDEAS normalized, image-enriched ideas.

    Raises:
        UpstreamError: If the Gemini call fails.
        ParseError: If the model output is not JSON.
    """
    prompt = get_ideas_prompt(payload)
    async with aiohttp.ClientSession() as session:
        document = await call_llm(prompt, session=session)
        ideas = normalize_ideas(document, payload)
        if ideas:
            await attach_idea_images(ideas, session=session)

    logger.info(f"Generated {len(ideas)} ideas")
    return ideas


async def generate_recipe_detail(payload: RecipeDetailRequest) -> Optional[RecipeDetail]:
    """Produce one normalized, image-enriched recipe, or None if the model gave none.

    Raises:
        InvalidPayloadError: If title is missing or blank.
        UpstreamError: If the Gemini call fails.
        ParseError: If the model output is not JSON.
    """
    validate_detail_request(payload)
    prompt = get_detail_prompt(payload)
    async with aiohttp.ClientSession() as session:
        document = await call_llm(prompt, session=session)
        recipe = normalize_recipe(document, payload)
        if recipe is not None:
            await attach_recipe_image(recipe, session=session)

    logger.info(f"Generated recipe detail: {recipe.id if recipe else None}")
    return recipe
