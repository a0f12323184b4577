"""
LLM Call Interface for the A2A skill agent

Talks to Gemini through its OpenAI-compatible chat completions endpoint
and normalizes replies into text plus tool call requests.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from openai import OpenAI

from .config import GeminiConfig
from .errors import ModelTurnError
from .models import ToolCallRequest

logger = logging.getLogger(__name__)

SAFETY_BLOCK_MESSAGE = "Gemini response blocked due to safety settings."


@dataclass
class ModelReply:
    """One model reply: plain text, tool calls, or both."""

    text: Optional[str] = None
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Optional[dict] = None

    @property
    def wants_tools(self) -> bool:
        return bool(self.tool_calls)


class LLMClient:
    """Gemini chat client using the OpenAI SDK."""

    def __init__(
        self,
        gemini_config: Optional[GeminiConfig] = None,
        client: Optional[OpenAI] = None,
    ):
        self.config = gemini_config or GeminiConfig()
        self.model = self.config.model
        self._client = client or OpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
        )

    def chat(self, messages: list[dict], tools: Optional[list[dict]] = None) -> ModelReply:
        """Send the conversation to the model.

        Args:
            messages: Chat messages, system instruction first
            tools: OpenAI-format tool definitions; omitted when empty

        Raises:
            ModelTurnError: If the call fails, is blocked, or returns nothing
        """
        create_kwargs: dict = {
            "model": self.model,
            "messages": messages,
        }
        if tools:
            create_kwargs["tools"] = tools
        if self.config.temperature is not None:
            create_kwargs["temperature"] = self.config.temperature

        try:
            response = self._client.chat.completions.create(**create_kwargs)
        except Exception as e:
            logger.error("Gemini call failed: %s", e)
            if "SAFETY" in str(e).upper():
                raise ModelTurnError(SAFETY_BLOCK_MESSAGE) from e
            raise ModelTurnError(f"Gemini call failed: {e}") from e

        if not response.choices:
            raise ModelTurnError("Gemini returned no candidates.")

        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            logger.warning("Gemini response blocked by content filter")
            raise ModelTurnError(SAFETY_BLOCK_MESSAGE)

        reply = ModelReply(
            text=choice.message.content,
            tool_calls=self._parse_tool_calls(choice.message.tool_calls),
            finish_reason=choice.finish_reason,
            usage=_usage_dict(response.usage),
        )
        if not reply.wants_tools and reply.text is None:
            raise ModelTurnError("Gemini returned an empty response.")

        logger.debug(
            "Gemini reply: finish_reason=%s tool_calls=%d text=%s",
            reply.finish_reason,
            len(reply.tool_calls),
            (reply.text or "")[:200],
        )
        return reply

    @staticmethod
    def _parse_tool_calls(raw_calls: Any) -> list[ToolCallRequest]:
        """Convert SDK tool calls, keeping calls with malformed arguments for error reporting."""
        calls: list[ToolCallRequest] = []
        for index, raw in enumerate(raw_calls or []):
            kind = getattr(raw, "type", None)
            function = getattr(raw, "function", None)
            name = getattr(function, "name", None)
            if isinstance(kind, str) and kind != "function" or not isinstance(name, str) or not name:
                logger.warning("Skipping non-function tool call #%d (type=%s)", index, kind)
                continue
            raw_arguments = function.arguments or "{}"
            call_id = getattr(raw, "id", None) or f"call_{index}"
            try:
                arguments = json.loads(raw_arguments)
            except json.JSONDecodeError as e:
                logger.warning("Unparseable arguments for %s: %s", name, raw_arguments[:200])
                calls.append(
                    ToolCallRequest(
                        call_id=call_id,
                        name=name,
                        raw_arguments=raw_arguments,
                        parse_error=f"arguments are not valid JSON ({e.msg})",
                    )
                )
                continue
            if not isinstance(arguments, dict):
                calls.append(
                    ToolCallRequest(
                        call_id=call_id,
                        name=name,
                        raw_arguments=raw_arguments,
                        parse_error="arguments must be a JSON object",
                    )
                )
                continue
            calls.append(
                ToolCallRequest(
                    call_id=call_id,
                    name=name,
                    arguments=arguments,
                    raw_arguments=raw_arguments,
                )
            )
        return calls

    def close(self) -> None:
        """Close the underlying OpenAI client."""
        try:
            self._client.close()
        except Exception as e:
            logger.debug("Error closing OpenAI client: %s", e)


def _usage_dict(usage: Any) -> Optional[dict]:
    if usage is None:
        return None
    return {
        "prompt_tokens": getattr(usage, "prompt_tokens", None),
        "completion_tokens": getattr(usage, "completion_tokens", None),
        "total_tokens": getattr(usage, "total_tokens", None),
    }
