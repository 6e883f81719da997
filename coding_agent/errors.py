"""Hard failures of an agent run.

Tool execution failures are reported as text results, never raised.
"""


class AgentError(Exception):
    """Base class for errors that abort an agent run."""


class ProtocolError(AgentError):
    """The model client returned a response the loop cannot interpret."""


class DuplicateToolError(AgentError):
    """A tool name was registered twice."""


class UnknownToolError(AgentError):
    """The model called a tool that was never advertised."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ArgumentDecodeError(AgentError):
    """Tool arguments do not match the advertised schema."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid arguments for tool {name}: {reason}")
        self.name = name
        self.reason = reason
