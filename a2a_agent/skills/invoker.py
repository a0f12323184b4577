"""
Remote skill invoker

Executes one skill call on the A2A task server and normalizes the
task-protocol response into a ToolOutcome. Failures are returned as
error outcomes, never raised to the caller.
"""

import json
import logging
import secrets
import time
from typing import Any, Optional

import requests
from pydantic import JsonValue, TypeAdapter, ValidationError

from ..errors import DispatchTransportError, RemoteTaskFailure
from ..models import SkillDescriptor, TaskEnvelope, TaskResult, ToolOutcome

logger = logging.getLogger(__name__)

TASKS_SEND_PATH = "/a2a/tasks/send"
DEFAULT_TIMEOUT = 30.0

_arguments_adapter = TypeAdapter(dict[str, JsonValue])


def new_task_id(prefix: str = "agent-task") -> str:
    """Task id unique within the process: epoch milliseconds plus random hex."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(6)}"


class SkillInvoker:
    """Sends tool calls to ``/a2a/tasks/send`` and interprets the task result."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return self.base_url + TASKS_SEND_PATH

    def invoke(self, skill: SkillDescriptor, args: Optional[dict] = None) -> ToolOutcome:
        """
        Execute ``skill`` remotely with ``args``.

        Args:
            skill: The catalog entry being called
            args: Arguments produced by the model

        Returns:
            ``ToolOutcome`` holding either the task's JSON result or an error text
        """
        try:
            arguments = _arguments_adapter.validate_python(args or {})
        except ValidationError as e:
            logger.warning("Rejected arguments for %s: %s", skill.name, e)
            return ToolOutcome.failure(
                f"Invalid arguments for {skill.name}: {e.error_count()} validation error(s)"
            )

        task_id = new_task_id()
        envelope = TaskEnvelope.for_tool_call(task_id, skill.name, arguments)
        logger.info("Calling A2A skill %s (task %s)", skill.name, task_id)

        try:
            result = self._send(envelope)
            return self._interpret(skill.name, result)
        except DispatchTransportError as e:
            logger.error("Error calling A2A skill %s: %s", skill.name, e)
            return ToolOutcome.failure(f"Failed to execute tool {skill.name}: {e}")
        except RemoteTaskFailure as e:
            logger.error("A2A task failed: %s", e)
            return ToolOutcome.failure(str(e))

    def _send(self, envelope: TaskEnvelope) -> TaskResult:
        """POST the envelope and parse the task result."""
        try:
            response = requests.post(
                self.endpoint,
                json=envelope.model_dump(mode="json"),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise DispatchTransportError(
                f"request timed out after {self.timeout:g}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise DispatchTransportError(str(e)) from e

        try:
            body = response.json()
        except ValueError as e:
            if response.ok:
                raise DispatchTransportError("response body is not valid JSON") from e
            raise DispatchTransportError(f"HTTP error {response.status_code}") from e

        if not response.ok:
            raise RemoteTaskFailure(_error_text(body))

        try:
            return TaskResult.model_validate(body)
        except ValidationError as e:
            raise DispatchTransportError(f"malformed task result: {e.error_count()} error(s)") from e

    @staticmethod
    def _interpret(skill_name: str, result: TaskResult) -> ToolOutcome:
        logger.info("A2A server response status: %s", result.status)

        if result.status == "completed":
            data = result.first_json_data()
            if data is None:
                logger.warning(
                    "Task completed but no result data in artifacts for %s", skill_name
                )
            return ToolOutcome.success(data)

        if result.status == "failed":
            raise RemoteTaskFailure(result.error_message or "task failed")

        logger.error("A2A task had unexpected status: %s", result.status)
        return ToolOutcome.failure(f"unexpected status: {result.status}")


def _error_text(body: Any) -> str:
    """Error text for a non-2xx JSON body: ``error.message`` or the raw body."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return body if isinstance(body, str) else json.dumps(body)
