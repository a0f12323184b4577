"""
Remote A2A skills

- catalog: discovery of skills from the server's agent card
- invoker: execution of one skill call through the task protocol
"""

from .catalog import SkillCatalog, fetch_catalog
from .invoker import SkillInvoker, new_task_id

__all__ = [
    "SkillCatalog",
    "fetch_catalog",
    "SkillInvoker",
    "new_task_id",
]
