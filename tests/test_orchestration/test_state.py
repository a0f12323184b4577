"""Tests for conversation state and turn construction."""

import json

import pytest

from a2a_agent.models import FunctionResponse, ToolCallRequest, ToolOutcome
from a2a_agent.orchestration.state import (
    ConversationState,
    assistant_turn,
    tool_turns,
    user_turn,
)


class TestConversationState:
    """Tests for ConversationState."""

    def test_extend_returns_new_state(self):
        """extend() never modifies the original."""
        state = ConversationState()
        extended = state.extend([user_turn("hi")])

        assert len(state) == 0
        assert len(extended) == 1
        assert extended.turns[0] == {"role": "user", "content": "hi"}

    def test_frozen(self):
        state = ConversationState()
        with pytest.raises(AttributeError):
            state.turns = ()


class TestTurns:
    """Tests for turn builders."""

    def test_assistant_turn_without_calls(self):
        assert assistant_turn("hello", []) == {"role": "assistant", "content": "hello"}

    def test_assistant_turn_with_calls(self):
        """Tool calls keep their ids and raw argument text."""
        call = ToolCallRequest(
            call_id="c1",
            name="elevation",
            arguments={"address": "Denver"},
            raw_arguments='{"address": "Denver"}',
        )

        turn = assistant_turn(None, [call])

        assert turn["content"] is None
        assert turn["tool_calls"] == [
            {
                "id": "c1",
                "type": "function",
                "function": {"name": "elevation", "arguments": '{"address": "Denver"}'},
            }
        ]

    def test_tool_turns_in_order(self):
        """One tool turn per response, wrapping the outcome in 'content'."""
        responses = [
            FunctionResponse("c1", "elevation", ToolOutcome.success({"meters": 1609})),
            FunctionResponse("c2", "geocode", ToolOutcome.failure("not found")),
        ]

        turns = tool_turns(responses)

        assert [t["tool_call_id"] for t in turns] == ["c1", "c2"]
        assert [t["name"] for t in turns] == ["elevation", "geocode"]
        assert json.loads(turns[0]["content"]) == {"content": {"result": {"meters": 1609}}}
        assert json.loads(turns[1]["content"]) == {"content": {"error": "not found"}}
