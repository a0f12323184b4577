"""
Tool-calling orchestration between the chat model and remote A2A skills.
"""

from .loop import ConversationOrchestrator
from .state import ConversationState, TurnResult
from .tool_defs import build_tool_definitions, resolve, to_function_declarations

__all__ = [
    "ConversationOrchestrator",
    "ConversationState",
    "TurnResult",
    "build_tool_definitions",
    "resolve",
    "to_function_declarations",
]
