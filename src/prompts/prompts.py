"""Prompt builders for Recipe Finder service.

Two pure functions produce the text prompts sent to Gemini:
- get_ideas_prompt(): 5-10 recipe ideas under a top-level "ideas" key
- get_detail_prompt(): one full recipe under a top-level "recipe" key

The field names and limits here are a contract with the model; they must stay in
step with src/services/normalizers.py.
"""

import json

from src.models.models import IdeasRequest, RecipeDetailRequest
from src.utils.slugs import slugify


def _line(label: str, value: str | None, placeholder: str) -> str:
    return f"{label}: {value if value else placeholder}"


def get_ideas_prompt(payload: IdeasRequest) -> str:
    """Build the ideas prompt.

    Sentinel lines carry the supplied value or a placeholder:
    "Category: (global)", "Ingredients: (none)", "User query: (none)".

    Args:
        payload: Validated ideas request.

    Returns:
        Prompt text.
    """
    ingredients = ", ".join(payload.ingredients) if payload.ingredients else None
    context = "\n".join(
        [
            _line("Category", payload.category_id, "(global)"),
            _line("Ingredients", ingredients, "(none)"),
            _line("User query", payload.query, "(none)"),
        ]
    )

    return f"""You are Recipe Finder+.
Return STRICT JSON with 5–10 recipe ideas:

{{
  "ideas": [
    {{ "id": "quick-paneer-makhani", "title": "Quick Paneer Makhani", "blurb": "Creamy weeknight curry.", "categoryId": "quick-curries" }}
  ]
}}

Rules:
- Return one top-level object with the single key "ideas".
- Each idea has exactly the keys "id", "title", "blurb", "categoryId".
- "id" must be URL-safe slug (lowercase, hyphens).
- "title" concise and specific.
- "blurb" max 1 short sentence.
- Only 5–10 ideas.
- Consider category and ingredients when given.

{context}"""


def get_detail_prompt(payload: RecipeDetailRequest) -> str:
    """Build the detail prompt.

    The normalized title and its pre-computed slug are embedded in the JSON skeleton;
    category, ingredients and the original query are echoed as context lines.

    Args:
        payload: Validated detail request (title already checked non-empty).

    Returns:
        Prompt text.
    """
    title = payload.title or ""
    skeleton = {
        "recipe": {
            "id": slugify(title),
            "title": title,
            "category": payload.category_id or "",
            "servings": 2,
            "totalTimeMinutes": 30,
            "ingredients": ["..."],
            "steps": ["..."],
            "tips": ["optional tip 1", "optional tip 2"],
        }
    }

    ingredients = ", ".join(payload.ingredients) if payload.ingredients else None
    context_lines = [
        _line("Category", payload.category_id, "(unspecified)"),
        _line("Ingredients to incorporate", ingredients, "(none)"),
    ]
    if payload.query:
        context_lines.append(f"Original user query: {payload.query}")
    context = "\n".join(context_lines)

    return f"""You are Recipe Finder+.
Return STRICT JSON for ONE detailed recipe:

{json.dumps(skeleton, indent=2, ensure_ascii=False)}

Constraints:
- Return one top-level object with the single key "recipe".
- 8–14 ingredients, realistic pantry items.
- 6–10 steps, each a single sentence (no numbering in text).
- "tips" is optional; omit it or give 1–3 short tips.
- "servings" and "totalTimeMinutes" are positive whole numbers.
- Prefer weeknight-friendly unless category suggests otherwise.

{context}"""
