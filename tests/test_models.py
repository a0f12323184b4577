"""
Tests for skill and wire models.
"""

from a2a_agent.models import (
    AgentCard,
    FunctionResponse,
    SkillDescriptor,
    TaskEnvelope,
    TaskResult,
    ToolOutcome,
)


class TestToolOutcome:
    """Tests for ToolOutcome."""

    def test_success_has_only_result(self):
        assert ToolOutcome.success(None).to_dict() == {"result": None}

    def test_failure_has_only_error(self):
        outcome = ToolOutcome.failure("boom")
        assert outcome.ok is False
        assert outcome.to_dict() == {"error": "boom"}

    def test_function_response_shape(self):
        response = FunctionResponse("c1", "elevation", ToolOutcome.success({"meters": 1609}))
        assert response.to_dict() == {
            "name": "elevation",
            "response": {"content": {"result": {"meters": 1609}}},
        }


class TestSkillDescriptor:
    """Tests for SkillDescriptor.from_card_entry."""

    def test_non_object_schema_replaced(self):
        skill = SkillDescriptor.from_card_entry({"name": "x", "inputSchema": "nope"})
        assert skill.input_schema == {"type": "object", "properties": {}}

    def test_null_description(self):
        skill = SkillDescriptor.from_card_entry({"name": "x", "description": None})
        assert skill.description == ""


class TestWireModels:
    """Tests for agent card and task models."""

    def test_agent_card_extra_fields_allowed(self):
        card = AgentCard.model_validate(
            {"name": "Maps", "version": "1", "a2a": {"skills": [{"name": "a"}], "x": 1}}
        )
        assert card.skill_entries == [{"name": "a"}]

    def test_agent_card_without_a2a(self):
        assert AgentCard.model_validate({}).skill_entries == []

    def test_envelope_dump(self):
        envelope = TaskEnvelope.for_tool_call("t-1", "elevation", {"address": "Denver"})
        assert envelope.model_dump(mode="json") == {
            "taskId": "t-1",
            "messages": [
                {
                    "role": "user",
                    "parts": [
                        {
                            "dataPart": {
                                "mimeType": "application/json",
                                "jsonData": {
                                    "toolName": "elevation",
                                    "arguments": {"address": "Denver"},
                                },
                            }
                        }
                    ],
                }
            ],
        }

    def test_task_result_first_json_data(self):
        result = TaskResult.model_validate(
            {
                "taskId": "t-1",
                "status": "completed",
                "artifacts": [
                    {"parts": [{"dataPart": {"jsonData": {"a": 1}}}, {"dataPart": {"jsonData": 2}}]},
                    {"parts": [{"dataPart": {"jsonData": 3}}]},
                ],
            }
        )
        assert result.first_json_data() == {"a": 1}

    def test_task_result_error_message(self):
        result = TaskResult.model_validate({"status": "failed", "error": {"code": 7}})
        assert result.error_message is None
