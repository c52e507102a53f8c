"""Gemini generateContent client.

Stateless caller of the remote text-generation endpoint:
- call_gemini_text(): single POST, returns concatenated candidate text
- extract_candidate_text(): joins candidates[0].content.parts[*].text
- call_llm(): call_gemini_text() followed by JSON repair

The API key travels as a query parameter already URL-encoded in config.GEMINI_URL.
"""

import asyncio
from typing import Any, Optional

import aiohttp

from src.utils.config import config
from src.utils.errors import UpstreamError
from src.utils.json_repair import repair_json
from src.utils.logger import logger


def build_request_body(prompt: str) -> dict[str, Any]:
    """Build the generateContent request body for a single user turn."""
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}


def extract_candidate_text(response_json: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Missing parts contribute empty strings; a missing path yields "".
    """
    if not isinstance(response_json, dict):
        return ""
    candidates = response_json.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""

    texts = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        texts.append(text if isinstance(text, str) else "")
    return "".join(texts)


async def _post_generate(session: aiohttp.ClientSession, prompt: str) -> str:
    timeout = aiohttp.ClientTimeout(total=config.LLM_TIMEOUT_SECONDS)
    async with session.post(config.GEMINI_URL, json=build_request_body(prompt), timeout=timeout) as response:
        if not 200 <= response.status < 300:
            body = await response.text()
            logger.error(f"Gemini API error: status={response.status} body={body}")
            raise UpstreamError(body, status=response.status)
        try:
            payload = await response.json(content_type=None)
        except ValueError as e:
            raise UpstreamError(f"Gemini returned a non-JSON body: {e}", status=response.status) from e

    logger.debug(f"Gemini API responded with status {response.status}")
    return extract_candidate_text(payload)


async def call_gemini_text(prompt: str, session: Optional[aiohttp.ClientSession] = None) -> str:
    """Send one prompt to Gemini and return the raw model text.

    Args:
        prompt: Full prompt text.
        session: Optional shared aiohttp session; a private one is opened otherwise.

    Returns:
        Concatenated text of the first candidate ("" when absent).

    Raises:
        UpstreamError: On non-2xx status (raw body as message), network failure or timeout.
    """
    logger.debug(f"Calling Gemini model {config.GEMINI_MODEL} with {len(prompt)} char prompt")
    try:
        if session is not None:
            return await _post_generate(session, prompt)
        async with aiohttp.ClientSession() as own_session:
            return await _post_generate(own_session, prompt)
    except asyncio.TimeoutError as e:
        raise UpstreamError(f"Gemini request timed out after {config.LLM_TIMEOUT_SECONDS}s") from e
    except aiohttp.ClientError as e:
        raise UpstreamError(f"Gemini request failed: {e}") from e


async def call_llm(prompt: str, session: Optional[aiohttp.ClientSession] = None) -> Any:
    """Call Gemini and parse its answer as JSON.

    Raises:
        UpstreamError: If the HTTP call fails.
        ParseError: If the model text is not valid JSON after fence removal.
    """
    text = await call_gemini_text(prompt, session=session)
    return repair_json(text)
