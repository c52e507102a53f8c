"""Unit tests for the Gemini generateContent client."""

import asyncio

import aiohttp
import pytest

from src.clients.gemini import build_request_body, call_gemini_text, call_llm, extract_candidate_text
from src.utils.config import config
from src.utils.errors import ParseError, UpstreamError


class TestBuildRequestBody:
    def test_single_user_turn(self):
        assert build_request_body("hello") == {"contents": [{"role": "user", "parts": [{"text": "hello"}]}]}


class TestExtractCandidateText:
    def test_concatenates_parts(self):
        body = {"candidates": [{"content": {"parts": [{"text": '{"a":'}, {"text": " 1}"}]}}]}
        assert extract_candidate_text(body) == '{"a": 1}'

    def test_parts_without_text_contribute_nothing(self):
        body = {"candidates": [{"content": {"parts": [{"text": "x"}, {"inlineData": {}}, {"text": "y"}]}}]}
        assert extract_candidate_text(body) == "xy"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            None,
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": None}}]},
            "unexpected",
        ],
    )
    def test_missing_path_yields_empty_string(self, body):
        assert extract_candidate_text(body) == ""


class TestCallGeminiText:
    @pytest.mark.asyncio
    async def test_posts_prompt_to_configured_endpoint(self, fake_session, fake_response, gemini_body):
        session = fake_session(fake_response(200, gemini_body("ok")))

        result = await call_gemini_text("make ideas", session=session)

        assert result == "ok"
        method, url, kwargs = session.calls[0]
        assert method == "POST"
        assert url == config.GEMINI_URL
        assert kwargs["json"] == build_request_body("make ideas")
        assert kwargs["timeout"].total == config.LLM_TIMEOUT_SECONDS

    @pytest.mark.asyncio
    async def test_non_2xx_raises_upstream_error_with_raw_body(self, fake_session, fake_response):
        session = fake_session(fake_response(429, text='{"error": "quota exceeded"}'))

        with pytest.raises(UpstreamError) as exc:
            await call_gemini_text("prompt", session=session)

        assert str(exc.value) == '{"error": "quota exceeded"}'
        assert exc.value.status == 429

    @pytest.mark.asyncio
    async def test_network_error_raises_upstream_error(self, fake_session):
        session = fake_session(error=aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(UpstreamError, match="connection refused"):
            await call_gemini_text("prompt", session=session)

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self, fake_session):
        session = fake_session(error=asyncio.TimeoutError())

        with pytest.raises(UpstreamError, match="timed out"):
            await call_gemini_text("prompt", session=session)

    @pytest.mark.asyncio
    async def test_non_json_success_body_raises_upstream_error(self, fake_session, fake_response):
        session = fake_session(fake_response(200, ValueError("Expecting value")))

        with pytest.raises(UpstreamError, match="non-JSON"):
            await call_gemini_text("prompt", session=session)


class TestCallLlm:
    @pytest.mark.asyncio
    async def test_fenced_output_is_parsed(self, fake_session, fake_response, gemini_body):
        text = '```json\n{"ideas": []}\n```'
        session = fake_session(fake_response(200, gemini_body(text)))

        assert await call_llm("prompt", session=session) == {"ideas": []}

    @pytest.mark.asyncio
    async def test_prose_output_raises_parse_error(self, fake_session, fake_response, gemini_body):
        session = fake_session(fake_response(200, gemini_body("I can't help with that.")))

        with pytest.raises(ParseError):
            await call_llm("prompt", session=session)

    @pytest.mark.asyncio
    async def test_empty_candidates_raise_parse_error(self, fake_session, fake_response):
        session = fake_session(fake_response(200, {"candidates": []}))

        with pytest.raises(ParseError):
            await call_llm("prompt", session=session)
