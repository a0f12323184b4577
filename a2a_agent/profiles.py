"""
Agent profiles: persona, seed history and console labels for a session.
"""

from dataclasses import dataclass, field

from .errors import ConfigurationError


@dataclass(frozen=True)
class AgentProfile:
    """Persona and presentation settings for one kind of chat session."""

    name: str
    system_instruction: str
    seed_history: tuple[dict, ...] = field(default_factory=tuple)
    banner: str = "Chat with Gemini (type 'quit' to exit)"
    reply_label: str = "Gemini"


ASSISTANT_PROFILE = AgentProfile(
    name="assistant",
    system_instruction=(
        "You are a helpful assistant with access to Google Maps tools. "
        "Please use the most appropriate tool to answer the user's request based "
        "on the information they provide. For example, if they provide a place "
        "name or address for an elevation query, use the tool designed for that input."
    ),
    seed_history=(
        {"role": "user", "content": "Hi, what tools do you have?"},
        {
            "role": "assistant",
            "content": (
                "Okay, I understand. I can use my available tools to help with "
                "map-related questions. How can I assist you today?"
            ),
        },
    ),
)

TRAVEL_PROFILE = AgentProfile(
    name="travel",
    system_instruction=(
        "You are a travel assistant agent with access to Google Maps tools. "
        "Break down user goals, suggest queries, call tools, and reply naturally."
    ),
    banner="Travel Planner Agent - Type 'quit' to exit.",
    reply_label="Agent",
)

PROFILES: dict[str, AgentProfile] = {
    profile.name: profile for profile in (ASSISTANT_PROFILE, TRAVEL_PROFILE)
}


def get_profile(name: str) -> AgentProfile:
    """Look up a profile by name (case-insensitive)."""
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        available = ", ".join(sorted(PROFILES))
        raise ConfigurationError(
            f"Unknown agent profile '{name}' (available: {available})"
        ) from None
