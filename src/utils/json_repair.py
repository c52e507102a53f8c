"""Extract a JSON document from raw model text."""

import json
from typing import Any

from src.utils.errors import ParseError
from src.utils.logger import logger

# Order matters: the tagged fence must go before the bare one
_FENCES = ("```json", "```")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` fence and surrounding whitespace."""
    cleaned = text or ""
    for fence in _FENCES:
        cleaned = cleaned.replace(fence, "")
    return cleaned.strip()


def repair_json(text: str) -> Any:
    """Parse model output that may be wrapped in markdown code fences.

    No other heuristics are applied; the prompt is responsible for eliciting clean JSON.

    Args:
        text: Raw text returned by the model.

    Returns:
        The parsed JSON document (any JSON type).

    Raises:
        ParseError: If the cleaned text is not valid JSON.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, ValueError) as e:
        logger.debug(f"Model output is not JSON ({len(cleaned)} chars): {cleaned[:200]!r}")
        raise ParseError(f"Model response is not valid JSON: {e}") from e
