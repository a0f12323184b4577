"""
Skill-side data models: what the catalog holds, what the model sees,
what the model asks for, and what goes back to it.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Empty object schema used when an agent card omits inputSchema.
EMPTY_OBJECT_SCHEMA: dict = {"type": "object", "properties": {}}


@dataclass(frozen=True)
class SkillDescriptor:
    """A remote skill as advertised by the agent card."""

    name: str
    description: str = ""
    input_schema: dict = field(default_factory=lambda: dict(EMPTY_OBJECT_SCHEMA))

    @classmethod
    def from_card_entry(cls, entry: dict) -> "SkillDescriptor":
        """Build a descriptor from one ``a2a.skills[]`` entry."""
        schema = entry.get("inputSchema")
        return cls(
            name=entry["name"],
            description=entry.get("description") or "",
            input_schema=schema if isinstance(schema, dict) else dict(EMPTY_OBJECT_SCHEMA),
        )


@dataclass(frozen=True)
class FunctionDeclaration:
    """Function declaration in the shape the model's tool-calling interface expects."""

    name: str
    description: str
    parameters: dict

    def to_openai_tool(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


@dataclass(frozen=True)
class ToolCallRequest:
    """One function call emitted by the model within a reply."""

    call_id: str
    name: str
    arguments: dict = field(default_factory=dict)
    raw_arguments: str = "{}"
    parse_error: Optional[str] = None


@dataclass(frozen=True)
class ToolOutcome:
    """Normalized result of one tool call: either ``result`` or ``error``, never both."""

    result: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, result: Any = None) -> "ToolOutcome":
        return cls(result=result, error=None)

    @classmethod
    def failure(cls, message: str) -> "ToolOutcome":
        return cls(result=None, error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"error": self.error}
        return {"result": self.result}


@dataclass(frozen=True)
class FunctionResponse:
    """A tool outcome addressed back to the call that produced it."""

    call_id: str
    name: str
    outcome: ToolOutcome

    def to_dict(self) -> dict:
        return {"name": self.name, "response": {"content": self.outcome.to_dict()}}
