"""
Error types for the A2A skill agent.

Only ConfigurationError is fatal to the process. Dispatch errors are
converted into tool outcomes and handed back to the model; model errors
are reported at the turn boundary.
"""

from typing import Optional


class AgentError(Exception):
    """Base class for all agent errors."""


class ConfigurationError(AgentError):
    """Required configuration is missing or invalid."""


class DiscoveryError(AgentError):
    """The agent card could not be fetched or parsed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DispatchTransportError(AgentError):
    """The task POST failed at the transport level (network, timeout, non-JSON)."""


class RemoteTaskFailure(AgentError):
    """The remote server reported the task as failed."""


class UnknownSkillError(AgentError):
    """The model asked for a skill that is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Function {name} is not available.")
        self.name = name


class ModelTurnError(AgentError):
    """The model call for a user turn failed; the conversation state is unchanged."""
