"""
Skill catalog - discovery of remote A2A skills.

Fetches the agent card once at session start and keeps an immutable
snapshot of the advertised skills.
"""

import logging
from typing import Iterator, Optional

import requests
from pydantic import ValidationError

from ..errors import DiscoveryError
from ..models import AgentCard, SkillDescriptor

logger = logging.getLogger(__name__)

AGENT_CARD_PATH = "/.well-known/agent.json"


def agent_card_url(base_url: str) -> str:
    return base_url.rstrip("/") + AGENT_CARD_PATH


def fetch_catalog(base_url: str, timeout: float = 30) -> list[SkillDescriptor]:
    """
    Fetch the agent card and extract its skills.

    Args:
        base_url: Root URL of the A2A server
        timeout: Request timeout in seconds

    Returns:
        Skill descriptors in card order, without duplicates

    Raises:
        DiscoveryError: On transport failure, non-2xx status, or a body
            that is not a JSON agent card
    """
    url = agent_card_url(base_url)
    logger.info("Fetching agent card from %s", url)

    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise DiscoveryError(f"Failed to fetch agent card: {e}", url=url) from e

    if not response.ok:
        raise DiscoveryError(
            f"HTTP error {response.status_code} fetching agent card", url=url
        )

    try:
        card = AgentCard.model_validate(response.json())
    except ValueError as e:
        # requests raises a ValueError subclass for bad JSON; ValidationError is one too
        kind = "invalid" if isinstance(e, ValidationError) else "unparseable"
        raise DiscoveryError(f"Agent card is {kind}: {e}", url=url) from e

    skills = _parse_skills(card.skill_entries)
    logger.info("Fetched agent card. Found %d skills.", len(skills))
    return skills


def _parse_skills(entries: list) -> list[SkillDescriptor]:
    skills: list[SkillDescriptor] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str) or not entry["name"]:
            logger.warning("Skipping agent card skill #%d: missing name", index)
            continue
        descriptor = SkillDescriptor.from_card_entry(entry)
        if descriptor.name in seen:
            logger.warning("Skipping duplicate skill '%s'", descriptor.name)
            continue
        seen.add(descriptor.name)
        skills.append(descriptor)
    return skills


class SkillCatalog:
    """Immutable snapshot of the skills available for one session."""

    def __init__(self, skills: Optional[list[SkillDescriptor]] = None):
        self._skills: tuple[SkillDescriptor, ...] = tuple(skills or ())

    @classmethod
    def discover(
        cls,
        base_url: str,
        timeout: float = 30,
        required: bool = False,
    ) -> "SkillCatalog":
        """
        Fetch the catalog for a new session.

        When ``required`` is False a discovery failure is logged and the
        session proceeds with no skills.
        """
        try:
            return cls(fetch_catalog(base_url, timeout=timeout))
        except DiscoveryError as e:
            if required:
                raise
            logger.error("Error fetching or parsing agent card: %s", e)
            logger.warning(
                "Continuing without tools; ensure the A2A server is running at %s",
                base_url,
            )
            return cls()

    @property
    def skills(self) -> tuple[SkillDescriptor, ...]:
        return self._skills

    def __len__(self) -> int:
        return len(self._skills)

    def __iter__(self) -> Iterator[SkillDescriptor]:
        return iter(self._skills)
