"""
Tool definitions for the orchestration loop.

Projects skill catalog entries into the function declarations the
model's tool-calling interface expects, and gates dispatch on the
declared names.
"""

import json
import logging
from typing import Iterable, Optional

from ..models import FunctionDeclaration, SkillDescriptor

logger = logging.getLogger(__name__)


def to_function_declarations(
    descriptors: Iterable[SkillDescriptor],
) -> list[FunctionDeclaration]:
    """
    Map skill descriptors to function declarations, preserving order.

    The input schema is passed through untouched as the declaration's
    parameters; the A2A ``inputSchema`` is already a JSON-Schema object.
    """
    return [
        FunctionDeclaration(
            name=skill.name,
            description=skill.description,
            parameters=skill.input_schema,
        )
        for skill in descriptors
    ]


def resolve(
    descriptors: Iterable[SkillDescriptor], name: str
) -> Optional[SkillDescriptor]:
    """Return the descriptor whose name matches ``name`` exactly, or None."""
    for skill in descriptors:
        if skill.name == name:
            return skill
    return None


def build_tool_definitions(descriptors: Iterable[SkillDescriptor]) -> list[dict]:
    """
    Build OpenAI function-calling tool definitions from catalog entries.

    Returns:
        List of ``{"type": "function", "function": {...}}`` dicts, one per skill.
    """
    tools = [decl.to_openai_tool() for decl in to_function_declarations(descriptors)]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Formatted tools for the model:\n%s", json.dumps(tools, indent=2))
    return tools
