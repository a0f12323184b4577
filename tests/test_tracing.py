"""
Tests for Langfuse tracing integration with SDK v3.

Tests cover:
- Client disabled states (credentials, failed auth check)
- Context manager no-ops when disabled
- Observation lifecycle with a mocked Langfuse client
"""

from unittest.mock import MagicMock, patch

from a2a_agent.tracing import (
    TracingContext,
    get_tracing_client,
    init_tracing_client,
    shutdown_tracing,
)
from a2a_agent.tracing.client import TracingClient
from a2a_agent.tracing.context import Observation


class TestTracingClient:
    """Tests for TracingClient."""

    def test_client_disabled_without_credentials(self):
        """Client is disabled when credentials are not provided."""
        client = TracingClient(public_key="", secret_key="")
        assert client.enabled is False
        assert "credentials not configured" in client.error.lower()

    def test_client_disabled_with_partial_credentials(self):
        """Client is disabled with only a public key."""
        client = TracingClient(public_key="pk-test", secret_key="")
        assert client.enabled is False

    @patch("a2a_agent.tracing.client.Langfuse")
    def test_client_disabled_when_auth_fails(self, mock_langfuse):
        """A failing auth_check disables tracing."""
        mock_langfuse.return_value.auth_check.return_value = False

        client = TracingClient(public_key="pk", secret_key="sk", host="http://lf")

        assert client.enabled is False
        assert "auth_check" in client.error

    @patch("a2a_agent.tracing.client.Langfuse")
    def test_client_disabled_when_init_raises(self, mock_langfuse):
        mock_langfuse.side_effect = RuntimeError("unreachable")

        client = TracingClient(public_key="pk", secret_key="sk")

        assert client.enabled is False
        assert "unreachable" in client.error

    @patch("a2a_agent.tracing.client.Langfuse")
    def test_client_enabled(self, mock_langfuse):
        """Valid credentials and a passing auth check enable tracing."""
        mock_langfuse.return_value.auth_check.return_value = True

        client = TracingClient(public_key="pk", secret_key="sk", host="http://lf")

        assert client.enabled is True
        assert client.error is None
        mock_langfuse.assert_called_once_with(
            public_key="pk", secret_key="sk", debug=False, host="http://lf"
        )

    def test_flush_and_shutdown_no_op_when_disabled(self):
        """flush/shutdown do nothing without a client."""
        client = TracingClient()
        client.flush()
        client.shutdown()


class TestTracingClientSingleton:
    """Tests for the process-wide tracing client."""

    def test_init_and_shutdown(self):
        client = init_tracing_client()
        assert get_tracing_client() is client

        shutdown_tracing()
        assert get_tracing_client() is None


class TestTracingContext:
    """Tests for TracingContext."""

    def test_disabled_without_client(self):
        ctx = TracingContext(execution_id="test-123")
        assert ctx.enabled is False

    def test_trace_no_op_when_disabled(self):
        """start_trace/end_trace do nothing when disabled."""
        ctx = TracingContext(execution_id="test-123")
        ctx.start_trace(user_text="hello")
        ctx.end_trace(output="result")
        assert ctx._root is None

    def test_span_no_op_when_disabled(self):
        ctx = TracingContext(execution_id="test-123")
        with ctx.span(name="skill:elevation", input={"address": "Denver"}) as span:
            assert span._observation is None
            span.set_output({"result": 1})
            span.set_status("error")

    def test_generation_no_op_when_disabled(self):
        ctx = TracingContext(execution_id="test-123")
        with ctx.generation(name="model_round_0", model="gemini-test") as gen:
            assert gen._observation is None
            gen.set_usage({"prompt_tokens": 10, "completion_tokens": None})
            assert gen._usage == {"prompt_tokens": 10}

    @patch("a2a_agent.tracing.client.Langfuse")
    def test_span_lifecycle_when_enabled(self, mock_langfuse):
        """An enabled span starts an observation and records status and output."""
        langfuse = mock_langfuse.return_value
        langfuse.auth_check.return_value = True
        observation = MagicMock()
        langfuse.start_as_current_observation.return_value.__enter__.return_value = observation
        init_tracing_client(public_key="pk", secret_key="sk")

        ctx = TracingContext(execution_id="exec-1", session_id="sess-1")
        with ctx.span(name="skill:elevation", input={"address": "Denver"}) as span:
            span.set_output({"result": 1})

        kwargs = langfuse.start_as_current_observation.call_args.kwargs
        assert kwargs["name"] == "skill:elevation"
        assert kwargs["as_type"] == "span"
        update = observation.update.call_args.kwargs
        assert update["output"] == {"result": 1}
        assert update["metadata"]["status"] == "success"


class TestObservation:
    """Tests for Observation setters."""

    def test_set_output(self):
        obs = Observation(name="test")
        obs.set_output({"key": "value"})
        assert obs._output == {"key": "value"}

    def test_set_status(self):
        obs = Observation(name="test")
        obs.set_status("error")
        assert obs._status == "error"

    def test_set_usage_ignores_empty(self):
        obs = Observation(name="test")
        obs.set_usage(None)
        assert obs._usage is None
