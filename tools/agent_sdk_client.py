"""Claude Agent SDK wrapper used for every text intent."""

import logging
import os
from typing import Callable, Optional

from claude_agent_sdk import (
    query,
    ClaudeAgentOptions,
    ResultMessage,
    AssistantMessage,
)

from config.exceptions import LLMError
from config.settings import Settings

logger = logging.getLogger(__name__)

# Allow launching Agent SDK even when running inside a Claude Code session.
# The SDK checks for this env var and refuses to start if set.
os.environ.pop("CLAUDECODE", None)


class AgentSDKClient:
    """Thin request/response client over ``claude_agent_sdk.query()``.

    Authentication is handled automatically by Claude Code CLI.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.total_calls = 0

    async def _run_query(self, user_prompt: str, options: ClaudeAgentOptions,
                         on_event: Optional[Callable[[dict], None]] = None) -> str:
        result_text = ""
        text_fired = False
        # Exhaust the generator fully: query() uses anyio cancel scopes and
        # leaving the loop early raises "exit cancel scope in a different task".
        async for message in query(prompt=user_prompt, options=options):
            if isinstance(message, ResultMessage):
                result_text = message.result or ""
                logger.debug(
                    "AgentSDK result: %d chars, cost=$%s",
                    len(result_text),
                    message.total_cost_usd,
                )
                if on_event:
                    on_event({"type": "result"})
            elif isinstance(message, AssistantMessage):
                parts = []
                for block in message.content:
                    text = getattr(block, "text", None)
                    if text:
                        parts.append(text)
                if parts:
                    if on_event and not text_fired:
                        text_fired = True
                        on_event({"type": "text", "text": parts[0]})
                    if not result_text:
                        result_text = "".join(parts)
        return result_text

    async def chat(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        on_event: Optional[Callable[[dict], None]] = None,
    ) -> str:
        """Send a single-turn request and return the text result.

        Args:
            system_prompt: System message guiding the model's behavior.
            user_prompt: User message content.
            model: Model name override. Defaults to the writing model.
            on_event: Optional callback fired with progress events
                      ({"type": "text", "text": str} then {"type": "result"}).

        Raises:
            LLMError: If the query fails.
        """
        model = model or self.settings.llm_model_writing
        self.total_calls += 1
        logger.debug("AgentSDK call: model=%s, prompt=%d chars", model, len(user_prompt))

        options = ClaudeAgentOptions(system_prompt=system_prompt, model=model, max_turns=1)
        try:
            result_text = await self._run_query(user_prompt, options, on_event)
        except Exception as e:
            raise LLMError(f"Agent SDK query failed: {e}") from e

        if not result_text:
            logger.warning("AgentSDK returned no content")
        return result_text

    async def chat_with_tools(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
        max_turns: int = 3,
        allowed_tools: Optional[list[str]] = None,
    ) -> str:
        """Agentic call where the model may use the given built-in tools.

        Raises:
            LLMError: If the query fails.
        """
        model = model or self.settings.llm_model_research
        self.total_calls += 1
        logger.debug(
            "AgentSDK tool call: model=%s, max_turns=%d, tools=%s",
            model, max_turns, allowed_tools,
        )

        options_kwargs = {
            "system_prompt": system_prompt,
            "model": model,
            "max_turns": max_turns,
        }
        if allowed_tools:
            options_kwargs["allowed_tools"] = allowed_tools

        try:
            result_text = await self._run_query(user_prompt, ClaudeAgentOptions(**options_kwargs))
        except Exception as e:
            raise LLMError(f"Agent SDK tool query failed: {e}") from e

        return result_text
