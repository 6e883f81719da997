"""
Turn-by-turn agent loop.

States:

    AWAITING_RESPONSE --tool_calls--> DISPATCHING_TOOLS --results appended--> AWAITING_RESPONSE
    AWAITING_RESPONSE --stop--> DONE
    AWAITING_RESPONSE --protocol error / unknown tool / bad args--> FAILED
    AWAITING_RESPONSE --any other finish indicator--> FAILED (warning only)

Exactly one model request is in flight at a time, and the next request is only
built once every tool call of the previous turn has a result in the
conversation.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from agent_utils.llm_call import FINISH_STOP, FINISH_TOOL_CALLS, ModelChoice, ModelRequest, ModelResponse
from agent_utils.trace_logger import TraceLogger
from coding_agent.conversation import Conversation, ToolCall
from coding_agent.errors import AgentError, ProtocolError
from coding_agent.registry import ToolRegistry


logger = logging.getLogger("Coding-Agent")


class AgentState(enum.Enum):
    AWAITING_RESPONSE = "awaiting_response"
    DISPATCHING_TOOLS = "dispatching_tools"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({AgentState.DONE, AgentState.FAILED})


class ModelClient(Protocol):
    def complete(self, request: ModelRequest) -> ModelResponse:
        ...


@dataclass(frozen = True)
class AgentResult:
    """Outcome of one run.

    ``error`` is set when the run aborted on a hard failure; a FAILED result
    without an error means the model ended with an unexpected finish indicator.
    """

    state: AgentState
    output: Optional[str] = None
    finish_reason: Optional[str] = None
    error: Optional[AgentError] = None
    turns: int = 0

    @property
    def succeeded(self) -> bool:
        return self.state is AgentState.DONE


class AgentLoop:
    """Relays a prompt to the model and runs the tools it asks for until it stops."""

    def __init__(
        self,
        client: ModelClient,
        registry: ToolRegistry,
        model: str,
        trace_logger: Optional[TraceLogger] = None,
    ):
        self.client = client
        self.registry = registry
        self.model = model
        self.tracer = trace_logger or TraceLogger(enabled = False, logger = logger)
        self.conversation = Conversation()
        self.state = AgentState.AWAITING_RESPONSE

    def run(self, prompt: str) -> AgentResult:
        """
        Run the loop to a terminal state.

        Args:
            prompt: The user prompt that opens the conversation.
        Returns:
            AgentResult: DONE with the final content, or FAILED.
        """
        self.conversation.append_user(prompt)
        self.state = AgentState.AWAITING_RESPONSE
        turns = 0

        while True:
            turns += 1
            try:
                choice = self._request_turn()
                result = self._handle_choice(choice, turns)
            except AgentError as exc:
                logger.error(f"Agent run failed: {exc}")
                self.state = AgentState.FAILED
                return AgentResult(state = self.state, error = exc, turns = turns)

            if result is not None:
                self.state = result.state
                return result
            self.state = AgentState.AWAITING_RESPONSE

    def _request_turn(self) -> ModelChoice:
        request = ModelRequest(
            model = self.model,
            messages = self.conversation.to_request_messages(),
            tools = self.registry.tool_schemas(),
        )
        response = self.client.complete(request)
        if not response.choices:
            raise ProtocolError("no choices returned from the chat completion")
        return response.choices[0]

    def _handle_choice(self, choice: ModelChoice, turn: int) -> Optional[AgentResult]:
        """Apply one model turn; returns a result only when a terminal state is reached."""
        tool_calls = tuple(ToolCall.from_dict(payload) for payload in choice.tool_calls)
        self.conversation.append_assistant(content = choice.content, tool_calls = tool_calls)
        self.tracer.log_turn(
            turn = turn,
            assistant_content = choice.content,
            tool_calls = choice.tool_calls,
            finish_reason = choice.finish_reason,
        )

        if choice.finish_reason == FINISH_TOOL_CALLS:
            if not tool_calls:
                raise ProtocolError("no tool calls found in the message")
            for tool_call in tool_calls:
                if tool_call.type != "function":
                    raise ProtocolError(f"unexpected tool call type: {tool_call.type}")
            self.state = AgentState.DISPATCHING_TOOLS
            self._dispatch_tools(tool_calls)
            return None

        if choice.finish_reason == FINISH_STOP:
            return AgentResult(
                state = AgentState.DONE,
                output = choice.content or "",
                finish_reason = choice.finish_reason,
                turns = turn,
            )

        logger.warning(f"Chat completion finished with reason: {choice.finish_reason}")
        return AgentResult(
            state = AgentState.FAILED,
            output = choice.content,
            finish_reason = choice.finish_reason,
            turns = turn,
        )

    def _dispatch_tools(self, tool_calls: Tuple[ToolCall, ...]) -> None:
        """Run each call in order and append its result before the next one starts."""
        for tool_call in tool_calls:
            self.tracer.log_tool_call(tool_name = tool_call.name, arguments = tool_call.arguments_json)
            output = self.registry.dispatch(tool_call.name, tool_call.arguments_json)
            self.conversation.append_tool_result(call_id = tool_call.id, text = output)
