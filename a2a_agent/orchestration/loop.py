"""
Conversation orchestration loop.

Drives one user turn through the model and the remote skills:

    Start -> AwaitingModel -> Done
                   |   ^
                   v   |
              Dispatching -> Resuming

The model is sent the profile's system instruction and seed history plus
the conversation so far, with the skill catalog as function declarations.
Tool calls in a reply are dispatched (concurrently when allowed), every
call gets exactly one outcome, and all outcomes go back to the model in a
single synthetic turn. The loop ends when the model answers in plain text.

The caller's ConversationState is never mutated; a failed turn raises
ModelTurnError and the caller keeps its previous state.
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..errors import ModelTurnError, UnknownSkillError
from ..llm_call import LLMClient, ModelReply
from ..models import FunctionResponse, ToolCallRequest, ToolOutcome
from ..profiles import ASSISTANT_PROFILE, AgentProfile
from ..skills import SkillCatalog, SkillInvoker
from ..tracing import TracingContext
from .state import ConversationState, TurnResult, assistant_turn, tool_turns, user_turn
from .tool_defs import build_tool_definitions, resolve

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 5
DEFAULT_MAX_WORKERS = 4


class ConversationOrchestrator:
    """
    Multi-turn conversation loop between the model and remote A2A skills.

    The skill catalog is a snapshot taken at session start and is not
    refreshed for the lifetime of the orchestrator.
    """

    def __init__(
        self,
        llm_client: LLMClient,
        catalog: SkillCatalog,
        invoker: SkillInvoker,
        profile: AgentProfile = ASSISTANT_PROFILE,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        session_id: Optional[str] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            llm_client: Client for the chat model
            catalog: Skills available to the model for this session
            invoker: Executes skill calls on the A2A server
            profile: System instruction and seed history
            max_tool_rounds: Maximum dispatch rounds per user turn
            max_workers: Concurrent skill calls per round (1 = sequential)
            session_id: Optional ID for correlating logs and traces
        """
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1")
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.llm_client = llm_client
        self.catalog = catalog
        self.invoker = invoker
        self.profile = profile
        self.max_tool_rounds = max_tool_rounds
        self.max_workers = max_workers
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.tools = build_tool_definitions(catalog)

    def new_state(self) -> ConversationState:
        return ConversationState()

    def turn(self, state: ConversationState, user_text: str) -> TurnResult:
        """
        Run one user turn to completion.

        Args:
            state: Conversation so far (not modified)
            user_text: The user's message

        Returns:
            TurnResult with the extended state and the model's final text

        Raises:
            ModelTurnError: If the model call fails or the tool-round bound
                is exceeded; ``state`` remains valid for the next turn
        """
        tracing = TracingContext(
            execution_id=uuid.uuid4().hex[:12], session_id=self.session_id
        )
        tracing.start_trace(user_text=user_text)
        try:
            result = self._run_turn(state, user_text, tracing)
        except ModelTurnError as e:
            tracing.end_trace(output=str(e), status="error")
            raise
        tracing.end_trace(output=result.text)
        return result

    def _run_turn(
        self, state: ConversationState, user_text: str, tracing: TracingContext
    ) -> TurnResult:
        working: list[dict] = [user_turn(user_text)]
        tools_used: list[str] = []

        reply = self._call_model(state, working, tracing, round_num=0)
        rounds = 0
        while reply.wants_tools:
            if rounds >= self.max_tool_rounds:
                logger.warning(
                    "[%s] Tool-call round limit (%d) reached", self.session_id, self.max_tool_rounds
                )
                raise ModelTurnError(
                    f"Stopped after {self.max_tool_rounds} rounds of tool calls without a final answer."
                )
            rounds += 1

            logger.info(
                "[%s] Round %d: model requested %s",
                self.session_id,
                rounds,
                ", ".join(call.name for call in reply.tool_calls),
            )
            responses = self._dispatch(reply.tool_calls, tracing)
            tools_used.extend(r.name for r in responses)

            working.append(assistant_turn(reply.text, reply.tool_calls))
            working.extend(tool_turns(responses))
            reply = self._call_model(state, working, tracing, round_num=rounds)

        working.append(assistant_turn(reply.text, []))
        self._log_turn_summary(rounds, tools_used)
        return TurnResult(
            state=state.extend(working),
            text=reply.text or "",
            tool_rounds=rounds,
            tools_used=tuple(dict.fromkeys(tools_used)),
        )

    def _build_messages(self, state: ConversationState, working: list[dict]) -> list[dict]:
        """System instruction, seed history, prior turns, then this turn's turns."""
        messages: list[dict] = [
            {"role": "system", "content": self.profile.system_instruction}
        ]
        messages.extend(self.profile.seed_history)
        messages.extend(state.turns)
        messages.extend(working)
        return messages

    def _call_model(
        self,
        state: ConversationState,
        working: list[dict],
        tracing: TracingContext,
        round_num: int,
    ) -> ModelReply:
        messages = self._build_messages(state, working)
        logger.debug("[%s] Sending %d messages to model", self.session_id, len(messages))
        with tracing.generation(
            name=f"model_round_{round_num}",
            model=self.llm_client.model,
            input=messages,
        ) as gen:
            try:
                reply = self.llm_client.chat(messages, tools=self.tools or None)
            except ModelTurnError as e:
                gen.set_status("error")
                gen.set_output(str(e))
                raise
            gen.set_output(
                reply.text
                if not reply.wants_tools
                else {"tool_calls": [c.name for c in reply.tool_calls]}
            )
            gen.set_usage(reply.usage)
        return reply

    def _dispatch(
        self, calls: list[ToolCallRequest], tracing: TracingContext
    ) -> list[FunctionResponse]:
        """Resolve and execute every call; results are in call order."""
        if self.max_workers == 1 or len(calls) == 1:
            outcomes = [self._dispatch_one(call, tracing) for call in calls]
        else:
            with ThreadPoolExecutor(
                max_workers=min(self.max_workers, len(calls)),
                thread_name_prefix="skill-dispatch",
            ) as pool:
                outcomes = list(pool.map(lambda c: self._dispatch_one(c, tracing), calls))

        return [
            FunctionResponse(call_id=call.call_id, name=call.name, outcome=outcome)
            for call, outcome in zip(calls, outcomes)
        ]

    def _dispatch_one(self, call: ToolCallRequest, tracing: TracingContext) -> ToolOutcome:
        if call.parse_error:
            return ToolOutcome.failure(
                f"Invalid arguments for function {call.name}: {call.parse_error}"
            )

        skill = resolve(self.catalog, call.name)
        if skill is None:
            error = UnknownSkillError(call.name)
            logger.error("[%s] Model called unknown function '%s'", self.session_id, call.name)
            return ToolOutcome.failure(str(error))

        with tracing.span(name=f"skill:{skill.name}", input=call.arguments) as span:
            outcome = self.invoker.invoke(skill, call.arguments)
            span.set_output(outcome.to_dict())
            if not outcome.ok:
                span.set_status("error")
        return outcome

    def _log_turn_summary(self, rounds: int, tools_used: list[str]) -> None:
        if rounds == 0:
            logger.debug("[%s] Turn answered without tools", self.session_id)
            return
        logger.info(
            "[%s] Turn completed after %d tool round%s: %s",
            self.session_id,
            rounds,
            "" if rounds == 1 else "s",
            ", ".join(tools_used),
        )
