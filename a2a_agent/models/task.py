"""
Pydantic models for the A2A wire contract.

Covers the agent card served at ``/.well-known/agent.json`` and the
task request/response exchanged with ``/a2a/tasks/send``. Payload
fields (``jsonData``, ``arguments``) are opaque JSON values.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

JSON_MIME_TYPE = "application/json"


class CardSkills(BaseModel):
    """The ``a2a`` section of an agent card."""

    model_config = ConfigDict(extra="allow")

    skills: Optional[list[Any]] = None


class AgentCard(BaseModel):
    """Discovery document; only the skills array is interpreted."""

    model_config = ConfigDict(extra="allow")

    a2a: Optional[CardSkills] = None

    @property
    def skill_entries(self) -> list[Any]:
        return (self.a2a.skills or []) if self.a2a else []


class ToolInvocation(BaseModel):
    """The JSON payload carried by a request data part."""

    toolName: str
    arguments: dict[str, JsonValue] = Field(default_factory=dict)


class RequestDataPart(BaseModel):
    mimeType: str = JSON_MIME_TYPE
    jsonData: ToolInvocation


class RequestPart(BaseModel):
    dataPart: RequestDataPart


class TaskMessage(BaseModel):
    role: str = "user"
    parts: list[RequestPart]


class TaskEnvelope(BaseModel):
    """Request body for ``POST /a2a/tasks/send``."""

    taskId: str
    messages: list[TaskMessage]

    @classmethod
    def for_tool_call(
        cls, task_id: str, tool_name: str, arguments: dict[str, JsonValue]
    ) -> "TaskEnvelope":
        """Build an envelope with exactly one message and one data part."""
        invocation = ToolInvocation(toolName=tool_name, arguments=arguments)
        return cls(
            taskId=task_id,
            messages=[
                TaskMessage(
                    role="user",
                    parts=[RequestPart(dataPart=RequestDataPart(jsonData=invocation))],
                )
            ],
        )


class TaskError(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: Optional[str] = None

    @field_validator("message", mode="before")
    @classmethod
    def message_as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class ResultDataPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    jsonData: JsonValue = None


def _object_or_none(value: Any) -> Any:
    """Treat anything that is not a JSON object as absent."""
    return value if isinstance(value, dict) else None


def _list_or_empty(value: Any) -> Any:
    """Treat null (or a non-list) as an empty list."""
    return value if isinstance(value, list) else []


class ResultPart(BaseModel):
    model_config = ConfigDict(extra="allow")

    dataPart: Optional[ResultDataPart] = None

    @field_validator("dataPart", mode="before")
    @classmethod
    def data_part_object(cls, value: Any) -> Any:
        return _object_or_none(value)


class Artifact(BaseModel):
    model_config = ConfigDict(extra="allow")

    parts: list[Optional[ResultPart]] = Field(default_factory=list)

    @field_validator("parts", mode="before")
    @classmethod
    def parts_list(cls, value: Any) -> Any:
        return [_object_or_none(part) for part in _list_or_empty(value)]


class TaskResult(BaseModel):
    """
    Response body from ``POST /a2a/tasks/send``.

    Servers may send ``null`` for any optional member; those are read as
    absent rather than rejected.
    """

    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    artifacts: list[Optional[Artifact]] = Field(default_factory=list)
    error: Optional[TaskError] = None

    @field_validator("artifacts", mode="before")
    @classmethod
    def artifacts_list(cls, value: Any) -> Any:
        return [_object_or_none(artifact) for artifact in _list_or_empty(value)]

    @field_validator("error", mode="before")
    @classmethod
    def error_object(cls, value: Any) -> Any:
        return _object_or_none(value)

    def first_json_data(self) -> JsonValue:
        """Return ``artifacts[0].parts[0].dataPart.jsonData``, or None when absent."""
        if not self.artifacts or self.artifacts[0] is None:
            return None
        parts = self.artifacts[0].parts
        if not parts or parts[0] is None or parts[0].dataPart is None:
            return None
        return parts[0].dataPart.jsonData

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None
