"""Append-only conversation log exchanged between user, model and tools."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple


ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"


@dataclass(frozen = True)
class ToolCall:
    """A model-issued request to run one named tool."""

    id: str
    name: str
    arguments_json: str
    type: str = "function"

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ToolCall":
        """Build from an OpenAI-format ``tool_calls`` entry."""
        function_block = payload.get("function") or {}
        return cls(
            id = payload.get("id") or "",
            name = function_block.get("name") or "",
            arguments_json = function_block.get("arguments") or "",
            type = payload.get("type") or "function",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {
                "name": self.name,
                "arguments": self.arguments_json,
            },
        }


@dataclass(frozen = True)
class Message:
    role: str
    content: Optional[str] = None
    tool_calls: Tuple[ToolCall, ...] = ()
    tool_call_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render as an OpenAI chat message dict (a new dict on every call)."""
        if self.role == ROLE_TOOL:
            return {
                "role": ROLE_TOOL,
                "tool_call_id": self.tool_call_id,
                "content": self.content or "",
            }

        message = {
            "role": self.role,
            "content": self.content or "",
        }
        if self.tool_calls:
            message["tool_calls"] = [tool_call.to_dict() for tool_call in self.tool_calls]
        return message


class Conversation:
    """
    Ordered message log for one agent run.

    Entries are only ever appended; nothing is removed or reordered.
    """

    def __init__(self):
        self._messages: List[Message] = []

    def append_user(self, text: str) -> Message:
        message = Message(role = ROLE_USER, content = text)
        self._messages.append(message)
        return message

    def append_assistant(
        self,
        content: Optional[str] = None,
        tool_calls: Tuple[ToolCall, ...] = (),
    ) -> Message:
        message = Message(role = ROLE_ASSISTANT, content = content, tool_calls = tuple(tool_calls))
        self._messages.append(message)
        return message

    def append_tool_result(self, call_id: str, text: str) -> Message:
        message = Message(role = ROLE_TOOL, content = text, tool_call_id = call_id)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> Tuple[Message, ...]:
        """Read-only snapshot of the log in insertion order."""
        return tuple(self._messages)

    def to_request_messages(self) -> Tuple[Dict[str, Any], ...]:
        """Fresh OpenAI-format dicts for the next model request."""
        return tuple(message.to_dict() for message in self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)
