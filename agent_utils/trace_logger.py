"""Diagnostic logging for tool invocations and per-turn LLM replies."""

import json
import logging
from typing import Any, Dict, Iterable, Optional


class TraceLogger:
    """Always logs tool invocations; logs assistant turns only when enabled."""

    def __init__(self, enabled: bool = False, logger: Optional[logging.Logger] = None):
        self.enabled = bool(enabled)
        self.logger = logger or logging.getLogger("TraceLogger")

    def log_turn(
        self,
        turn: int,
        assistant_content: Optional[str],
        tool_calls: Optional[Iterable[Dict[str, Any]]] = None,
        finish_reason: Optional[str] = None,
    ) -> None:
        """Log assistant text, tool-call summaries and the finish indicator."""
        if not self.enabled:
            return

        content_preview = _shorten(assistant_content or "", 400)
        self.logger.info(f"[LLM:{turn}] assistant: {content_preview or '(empty)'}")

        tool_calls = list(tool_calls or [])
        if tool_calls:
            summary = "; ".join(_summarize_tool_call(tool_call) for tool_call in tool_calls)
            self.logger.info(f"[LLM:{turn}] tool_calls: {summary}")

        self.logger.info(f"[LLM:{turn}] finish_reason: {finish_reason}")

    def log_tool_call(self, tool_name: str, arguments: str) -> None:
        """Log one tool invocation as it happens, regardless of its outcome."""
        self.logger.info(f"[tool] calling {tool_name} with arguments {arguments}")


def _summarize_tool_call(tool_call: Dict[str, Any]) -> str:
    """Build compact 'name(args)' summary from a tool call payload."""
    function_block = tool_call.get("function") or {}
    tool_name = function_block.get("name") or "unknown"
    arguments = function_block.get("arguments") or "{}"

    try:
        args_preview = json.dumps(json.loads(arguments), ensure_ascii = False)
    except ValueError:
        args_preview = str(arguments)

    return f"{tool_name}({_shorten(args_preview, 160)})"


def _shorten(text: str, max_chars: int) -> str:
    """Trim long text for concise logs."""
    normalized = text.replace("\n", "\\n").strip()
    if len(normalized) <= max_chars:
        return normalized
    return normalized[:max_chars] + "..."
