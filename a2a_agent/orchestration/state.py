"""
Conversation state for the orchestration loop.

A state is an immutable sequence of chat turns in OpenAI message format.
Each successful user turn produces a new state; a failed turn leaves the
caller holding the old one.
"""

import json
from dataclasses import dataclass, field
from typing import Optional

from ..models import FunctionResponse, ToolCallRequest


@dataclass(frozen=True)
class ConversationState:
    """Ordered chat turns (user, assistant, tool) for one session."""

    turns: tuple[dict, ...] = field(default_factory=tuple)

    def extend(self, new_turns: list[dict]) -> "ConversationState":
        return ConversationState(turns=self.turns + tuple(new_turns))

    def __len__(self) -> int:
        return len(self.turns)


@dataclass(frozen=True)
class TurnResult:
    """Outcome of one successful user turn."""

    state: ConversationState
    text: str
    tool_rounds: int = 0
    tools_used: tuple[str, ...] = ()


def user_turn(text: str) -> dict:
    return {"role": "user", "content": text}


def assistant_turn(text: Optional[str], tool_calls: list[ToolCallRequest]) -> dict:
    """Assistant turn, carrying the tool calls it requested (if any)."""
    turn: dict = {"role": "assistant", "content": text}
    if tool_calls:
        turn["tool_calls"] = [
            {
                "id": call.call_id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.raw_arguments},
            }
            for call in tool_calls
        ]
    return turn


def tool_turns(responses: list[FunctionResponse]) -> list[dict]:
    """
    Function responses as tool turns, in call order.

    Together these form the single synthetic turn that answers one
    assistant turn's tool calls.
    """
    return [
        {
            "role": "tool",
            "tool_call_id": response.call_id,
            "name": response.name,
            "content": json.dumps(response.to_dict()["response"]),
        }
        for response in responses
    ]
