"""
A2A Skill Agent - Gemini chat with remote A2A skills

This package provides:
- Skill discovery from an A2A server's agent card
- Skill invocation through the A2A task protocol
- A tool-calling conversation loop for Gemini
- Interactive CLI
"""

from .orchestration import ConversationOrchestrator, ConversationState, TurnResult
from .llm_call import LLMClient
from .skills import SkillCatalog, SkillInvoker

__all__ = [
    "ConversationOrchestrator",
    "ConversationState",
    "TurnResult",
    "LLMClient",
    "SkillCatalog",
    "SkillInvoker",
]

__version__ = "0.1.0"
