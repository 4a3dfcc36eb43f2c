"""Tests for JSON parsing utilities and AgentSDKClient."""

import pytest
from unittest.mock import patch

from claude_agent_sdk import ResultMessage, AssistantMessage, TextBlock


def _make_result_message(result_text: str) -> ResultMessage:
    """Helper to create a ResultMessage with required fields."""
    return ResultMessage(
        subtype="result",
        duration_ms=100,
        duration_api_ms=80,
        is_error=False,
        num_turns=1,
        session_id="test-session",
        total_cost_usd=0.001,
        usage={"input_tokens": 10, "output_tokens": 20},
        result=result_text,
        structured_output=None,
    )


def _make_assistant_message(text: str) -> AssistantMessage:
    """Helper to create an AssistantMessage with a text block."""
    return AssistantMessage(
        content=[TextBlock(text=text)],
        model="claude-sonnet-4-6",
        parent_tool_use_id=None,
        error=None,
    )


class TestParseJsonResponse:
    def test_fenced_reply_with_preamble(self):
        from tools.llm_client import parse_json_response
        text = 'Here is the plan:\n```json\n{"title": "Unplugged", "chapters": []}\n```\nEnjoy!'
        assert parse_json_response(text) == {"title": "Unplugged", "chapters": []}

    def test_object_embedded_in_prose(self):
        from tools.llm_client import parse_json_response
        text = 'Score follows {"score": 55, "report": "Generic phrasing"} as requested.'
        assert parse_json_response(text)["score"] == 55

    def test_skips_braces_that_are_not_json(self):
        from tools.llm_client import parse_json_response
        text = 'Using {placeholders} here. {"content": "Body", "summary": "S"}'
        assert parse_json_response(text)["summary"] == "S"

    def test_raw_newlines_inside_strings(self):
        from tools.llm_client import parse_json_response
        text = '{"content": "# Title\n\nFirst paragraph.", "summary": "Short"}'
        assert parse_json_response(text)["content"] == "# Title\n\nFirst paragraph."

    def test_array_gives_first_object(self):
        from tools.llm_client import parse_json_response
        assert parse_json_response('[{"title": "A"}, {"title": "B"}]') == {"title": "A"}

    @pytest.mark.parametrize("text", ["this is not JSON at all", "[1, 2, 3]", "42", ""])
    def test_no_object_raises(self, text):
        from config.exceptions import LLMResponseParseError
        from tools.llm_client import parse_json_response
        with pytest.raises(LLMResponseParseError) as exc_info:
            parse_json_response(text)
        assert exc_info.value.raw_response == text


class TestAgentSDKClient:
    @pytest.mark.asyncio
    async def test_chat_returns_result_text(self, settings):
        mock_message = _make_result_message("Hello from Claude")

        async def mock_query(*args, **kwargs):
            yield mock_message

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            result = await client.chat("system prompt", "user prompt")
            assert result == "Hello from Claude"
            assert client.total_calls == 1

    @pytest.mark.asyncio
    async def test_chat_uses_given_model(self, settings):
        captured = {}

        async def mock_query(*args, prompt=None, options=None, **kwargs):
            captured["options"] = options
            yield _make_result_message("ok")

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            await client.chat("system", "user", model="claude-haiku-4-5")
        assert captured["options"].model == "claude-haiku-4-5"
        assert captured["options"].max_turns == 1

    @pytest.mark.asyncio
    async def test_chat_with_tools_passes_allowed_tools(self, settings):
        captured = {}

        async def mock_query(*args, prompt=None, options=None, **kwargs):
            captured["options"] = options
            yield _make_result_message("A profile")

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            result = await client.chat_with_tools("system", "user", max_turns=5, allowed_tools=["WebSearch"])
        assert result == "A profile"
        assert captured["options"].allowed_tools == ["WebSearch"]
        assert captured["options"].max_turns == 5

    @pytest.mark.asyncio
    async def test_chat_raises_llm_error_on_exception(self, settings):
        from config.exceptions import LLMError

        async def mock_query(*args, **kwargs):
            raise RuntimeError("Connection failed")
            yield  # Make it an async generator

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            with pytest.raises(LLMError, match="Connection failed"):
                await client.chat("system", "user")

    @pytest.mark.asyncio
    async def test_chat_returns_empty_on_no_result(self, settings):
        async def mock_query(*args, **kwargs):
            return
            yield  # Make it an async generator

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            assert await client.chat("system", "user") == ""

    @pytest.mark.asyncio
    async def test_chat_fallback_to_assistant_message(self, settings):
        mock_assistant = _make_assistant_message("Fallback text content")

        async def mock_query(*args, **kwargs):
            yield mock_assistant

        with patch("tools.agent_sdk_client.query", mock_query):
            from tools.agent_sdk_client import AgentSDKClient
            client = AgentSDKClient(settings)
            assert await client.chat("system", "user") == "Fallback text content"
