"""
Pytest configuration and fixtures for the A2A agent tests.
"""

from unittest.mock import Mock

import pytest

from a2a_agent.models import SkillDescriptor
from a2a_agent.skills import SkillCatalog, SkillInvoker
from a2a_agent.tracing import client as tracing_client


ELEVATION_SCHEMA = {
    "type": "object",
    "properties": {"address": {"type": "string"}},
}


@pytest.fixture
def elevation_skill():
    """The elevation skill from a typical Google Maps A2A server."""
    return SkillDescriptor(
        name="elevation",
        description="Get the elevation of an address",
        input_schema=ELEVATION_SCHEMA,
    )


@pytest.fixture
def geocode_skill():
    """A second, independent skill."""
    return SkillDescriptor(
        name="geocode",
        description="Convert an address to coordinates",
        input_schema={
            "type": "object",
            "properties": {"address": {"type": "string"}},
            "required": ["address"],
        },
    )


@pytest.fixture
def catalog(elevation_skill, geocode_skill):
    return SkillCatalog([elevation_skill, geocode_skill])


@pytest.fixture
def mock_invoker():
    """SkillInvoker double; set ``invoke.side_effect`` / ``return_value`` per test."""
    return Mock(spec=SkillInvoker)


@pytest.fixture(autouse=True)
def no_tracing():
    """Keep the global tracing client unset between tests."""
    tracing_client._tracing_client = None
    yield
    tracing_client._tracing_client = None


@pytest.fixture
def http_response():
    """Factory for mock ``requests.Response`` objects."""

    def make(status_code=200, json_data=None, json_error=None):
        response = Mock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        return response

    return make
