"""
Data models for the A2A skill agent.
"""

from .skill import (
    EMPTY_OBJECT_SCHEMA,
    SkillDescriptor,
    FunctionDeclaration,
    ToolCallRequest,
    ToolOutcome,
    FunctionResponse,
)
from .task import (
    AgentCard,
    TaskEnvelope,
    TaskResult,
)

__all__ = [
    # Skill models
    "EMPTY_OBJECT_SCHEMA",
    "SkillDescriptor",
    "FunctionDeclaration",
    "ToolCallRequest",
    "ToolOutcome",
    "FunctionResponse",
    # Wire models
    "AgentCard",
    "TaskEnvelope",
    "TaskResult",
]
