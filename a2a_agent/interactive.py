#!/usr/bin/env python3
"""
A2A Skill Agent Interactive CLI

Reads one line at a time, sends it through the conversation
orchestrator and prints the reply. Type 'quit' to exit.
"""

import logging
import sys
from typing import Callable

from .config import Config
from .config_loader import load_app_config
from .errors import ConfigurationError, DiscoveryError, ModelTurnError
from .llm_call import LLMClient
from .orchestration import ConversationOrchestrator, ConversationState
from .profiles import get_profile
from .skills import SkillCatalog, SkillInvoker
from .tracing import init_tracing_client, shutdown_tracing

logger = logging.getLogger(__name__)

QUIT_COMMAND = "quit"


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


class InteractiveCLI:
    """Single-line request/response loop around a ConversationOrchestrator."""

    def __init__(
        self,
        orchestrator: ConversationOrchestrator,
        reader: Callable[[str], str] = input,
        writer: Callable[[str], None] = print,
    ):
        self.orchestrator = orchestrator
        self.reader = reader
        self.writer = writer
        self.state: ConversationState = orchestrator.new_state()

    def process_line(self, user_input: str) -> None:
        """Run one turn; on failure report it and keep the previous state."""
        try:
            result = self.orchestrator.turn(self.state, user_input)
        except ModelTurnError as e:
            logger.error("Turn failed: %s", e)
            self.writer(f"\nAn error occurred: {e}\n")
            return
        except Exception as e:
            logger.exception("Unexpected error during turn")
            self.writer(f"\nAn error occurred: {e}\n")
            return
        self.state = result.state
        self.writer(f"\n{self.orchestrator.profile.reply_label}: {result.text}\n")

    def run(self) -> None:
        """Run the interactive loop until 'quit', EOF or Ctrl-C."""
        self.writer(f"\n{self.orchestrator.profile.banner}\n")

        while True:
            try:
                user_input = self.reader("You: ").strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not user_input:
                continue
            if user_input.lower() == QUIT_COMMAND:
                break

            try:
                self.process_line(user_input)
            except KeyboardInterrupt:
                self.writer("\nTurn interrupted.\n")

        self.writer("\nChat ended.")


def build_orchestrator(app_config: Config) -> ConversationOrchestrator:
    """Wire the session: discover skills, then build the orchestrator around them."""
    profile = get_profile(app_config.orchestrator.profile)
    catalog = SkillCatalog.discover(
        app_config.a2a.server_url,
        timeout=app_config.a2a.timeout,
        required=app_config.a2a.require_discovery,
    )
    return ConversationOrchestrator(
        llm_client=LLMClient(app_config.gemini),
        catalog=catalog,
        invoker=SkillInvoker(app_config.a2a.server_url, timeout=app_config.a2a.timeout),
        profile=profile,
        max_tool_rounds=app_config.orchestrator.max_tool_rounds,
        max_workers=app_config.orchestrator.max_workers,
    )


def main() -> int:
    """Main entry point. Returns the process exit code."""
    try:
        app_config = load_app_config()
        app_config.validate()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(app_config.log_level)
    init_tracing_client(
        public_key=app_config.langfuse.public_key,
        secret_key=app_config.langfuse.secret_key,
        host=app_config.langfuse.host,
        debug=app_config.langfuse.debug,
    )

    try:
        orchestrator = build_orchestrator(app_config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DiscoveryError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            f"Please ensure the A2A server is running and accessible at "
            f"{app_config.a2a.server_url}",
            file=sys.stderr,
        )
        return 1

    try:
        InteractiveCLI(orchestrator).run()
    finally:
        orchestrator.llm_client.close()
        shutdown_tracing()
    return 0


if __name__ == "__main__":
    sys.exit(main())
