"""coding_agent - relay a prompt to a chat-completion model that can use local tools.

The model gets three tools:

    | Name  | Arguments             | Result                          |
    |-------|-----------------------|---------------------------------|
    | Read  | file_path             | file contents                   |
    | Write | file_path, content    | "Wrote <N> bytes"               |
    | Bash  | command               | command, exit code, stdout/err  |

Each turn the whole conversation plus the tool schemas go to the model. A
``tool_calls`` turn runs the requested tools in order and feeds their text
results back; a ``stop`` turn ends the run with the model's content.
"""

from coding_agent.agent_loop import AgentLoop, AgentResult, AgentState
from coding_agent.conversation import Conversation, Message, ToolCall
from coding_agent.errors import (
    AgentError,
    ArgumentDecodeError,
    DuplicateToolError,
    ProtocolError,
    UnknownToolError,
)
from coding_agent.registry import ToolDescriptor, ToolField, ToolRegistry
from coding_agent.tools import build_default_registry, read_file, run_bash, write_file

__all__ = [
    "AgentLoop",
    "AgentResult",
    "AgentState",
    "Conversation",
    "Message",
    "ToolCall",
    "AgentError",
    "ArgumentDecodeError",
    "DuplicateToolError",
    "ProtocolError",
    "UnknownToolError",
    "ToolDescriptor",
    "ToolField",
    "ToolRegistry",
    "build_default_registry",
    "read_file",
    "run_bash",
    "write_file",
]
