"""Shared runtime utilities: configuration, model client boundary and trace logging."""

from .runtime_config import ConfigError, RuntimeOptions, add_runtime_args, runtime_options_from_args
from .llm_call import (
    FINISH_STOP,
    FINISH_TOOL_CALLS,
    ChatCompletionClient,
    ModelChoice,
    ModelRequest,
    ModelResponse,
    build_chat_client,
    normalize_response,
)
from .trace_logger import TraceLogger

__all__ = [
    "ConfigError",
    "RuntimeOptions",
    "add_runtime_args",
    "runtime_options_from_args",
    "FINISH_STOP",
    "FINISH_TOOL_CALLS",
    "ChatCompletionClient",
    "ModelChoice",
    "ModelRequest",
    "ModelResponse",
    "build_chat_client",
    "normalize_response",
    "TraceLogger",
]
