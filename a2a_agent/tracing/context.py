"""
Per-turn tracing context using Langfuse SDK v3.

A TracingContext owns one trace (a root span) per user turn. Spans and
generations are linked to it through an explicit ``trace_context`` so
they nest correctly even when created from dispatch worker threads.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

from langfuse.types import TraceContext

from .client import get_tracing_client

logger = logging.getLogger(__name__)


@dataclass
class Observation:
    """A span or generation; inert when tracing is disabled."""

    name: str
    as_type: str = "span"
    enabled: bool = False
    start_kwargs: dict = field(default_factory=dict)
    trace_context: Optional[TraceContext] = None
    _context_manager: Any = field(default=None, repr=False)
    _observation: Any = field(default=None, repr=False)
    _start_time: float = field(default=0.0, repr=False)
    _output: Any = field(default=None, repr=False)
    _usage: Optional[dict] = field(default=None, repr=False)
    _status: str = field(default="success", repr=False)

    def start(self) -> None:
        client = get_tracing_client()
        if not self.enabled or not client or not client.client:
            return
        try:
            self._start_time = time.time()
            self._context_manager = client.client.start_as_current_observation(
                trace_context=self.trace_context,
                as_type=self.as_type,
                name=self.name,
                **self.start_kwargs,
            )
            self._observation = self._context_manager.__enter__()
        except Exception as e:
            logger.warning("Failed to start %s '%s': %s", self.as_type, self.name, e)
            self._observation = None

    def end(self) -> None:
        if not self._observation:
            return
        try:
            update: dict[str, Any] = {
                "metadata": {
                    "status": self._status,
                    "duration_ms": round((time.time() - self._start_time) * 1000, 2),
                }
            }
            if self._output is not None:
                update["output"] = self._output
            if self._usage:
                update["usage_details"] = self._usage
            self._observation.update(**update)
            self._context_manager.__exit__(None, None, None)
        except Exception as e:
            logger.warning("Failed to end %s '%s': %s", self.as_type, self.name, e)

    def set_output(self, output: Any) -> None:
        self._output = output

    def set_status(self, status: str) -> None:
        self._status = status

    def set_usage(self, usage: Optional[dict]) -> None:
        if usage:
            self._usage = {k: v for k, v in usage.items() if v is not None}


@dataclass
class TracingContext:
    """Tracing for one user turn of a session."""

    execution_id: str
    session_id: Optional[str] = None
    _root: Optional[Observation] = field(default=None, repr=False)
    _trace_context: Optional[TraceContext] = field(default=None, repr=False)

    @property
    def enabled(self) -> bool:
        client = get_tracing_client()
        return client is not None and client.enabled

    def start_trace(self, name: str = "chat_turn", user_text: Optional[str] = None) -> None:
        if not self.enabled:
            return
        self._root = Observation(
            name=name,
            enabled=True,
            start_kwargs={
                "input": {"user_text": user_text} if user_text else None,
                "metadata": {"execution_id": self.execution_id},
            },
        )
        self._root.start()
        root = self._root._observation
        if root is None:
            return
        trace_id = getattr(root, "trace_id", None)
        span_id = getattr(root, "id", None)
        if trace_id and span_id:
            self._trace_context = TraceContext(trace_id=trace_id, parent_span_id=span_id)
        try:
            root.update_trace(session_id=self.session_id)
        except Exception as e:
            logger.debug("Failed to set trace attributes: %s", e)

    def end_trace(self, output: Optional[str] = None, status: str = "success") -> None:
        if not self._root:
            return
        self._root.set_output(output)
        self._root.set_status(status)
        self._root.end()
        self._root = None
        self._trace_context = None

    @contextmanager
    def span(
        self,
        name: str,
        input: Optional[Any] = None,
        metadata: Optional[dict] = None,
    ) -> Generator[Observation, None, None]:
        """Span around a unit of work such as one skill invocation."""
        observation = Observation(
            name=name,
            as_type="span",
            enabled=self.enabled,
            start_kwargs={"input": input, "metadata": metadata},
            trace_context=self._trace_context,
        )
        observation.start()
        try:
            yield observation
        finally:
            observation.end()

    @contextmanager
    def generation(
        self,
        name: str,
        model: str,
        input: Optional[Any] = None,
        model_parameters: Optional[dict] = None,
    ) -> Generator[Observation, None, None]:
        """Generation around one model call."""
        observation = Observation(
            name=name,
            as_type="generation",
            enabled=self.enabled,
            start_kwargs={
                "model": model,
                "input": input,
                "model_parameters": model_parameters,
            },
            trace_context=self._trace_context,
        )
        observation.start()
        try:
            yield observation
        finally:
            observation.end()
