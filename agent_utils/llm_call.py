"""Chat completion boundary: immutable request/response values and the OpenAI SDK adapter."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


FINISH_STOP = "stop"
FINISH_TOOL_CALLS = "tool_calls"


@dataclass(frozen = True)
class ModelRequest:
    """One completion request, built fresh for every turn."""

    model: str
    messages: Tuple[Dict[str, Any], ...]
    tools: Tuple[Dict[str, Any], ...] = ()


@dataclass(frozen = True)
class ModelChoice:
    """A single normalized completion choice."""

    content: Optional[str]
    tool_calls: Tuple[Dict[str, Any], ...]
    finish_reason: Optional[str]


@dataclass(frozen = True)
class ModelResponse:
    """Normalized completion response; ``choices`` may be empty on malformed upstream replies."""

    choices: Tuple[ModelChoice, ...]
    raw_metadata: Dict[str, Any] = field(default_factory = dict)


class ChatCompletionClient:
    """Adapter from ``ModelRequest`` to an OpenAI-compatible ``chat.completions`` client."""

    def __init__(self, client: Any, max_tokens: Optional[int] = None):
        self.client = client
        self.max_tokens = max_tokens

    def complete(self, request: ModelRequest) -> ModelResponse:
        """Issue exactly one completion call and normalize its choices."""
        payload = {
            "model": request.model,
            "messages": [dict(message) for message in request.messages],
        }
        if request.tools:
            payload["tools"] = [dict(tool) for tool in request.tools]
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens

        response = self.client.chat.completions.create(**payload)
        return normalize_response(response)


def build_chat_client(api_key: str, base_url: str, max_tokens: Optional[int] = None) -> ChatCompletionClient:
    """Wrap an ``openai.OpenAI`` client pointed at ``base_url``."""
    from openai import OpenAI

    sdk_client = OpenAI(
        base_url = base_url,
        api_key = api_key,
    )
    return ChatCompletionClient(client = sdk_client, max_tokens = max_tokens)


def normalize_response(response: Any) -> ModelResponse:
    """Convert an SDK response object (or plain dict) into a ``ModelResponse``."""
    raw_choices = _read_obj(response, "choices") or []
    choices = tuple(_normalize_choice(choice) for choice in raw_choices)

    return ModelResponse(
        choices = choices,
        raw_metadata = {
            "response_id": _read_obj(response, "id"),
            "model": _read_obj(response, "model"),
            "usage": _safe_model_dump(_read_obj(response, "usage")),
        },
    )


def _normalize_choice(choice: Any) -> ModelChoice:
    message = _read_obj(choice, "message")
    content = _read_obj(message, "content")
    finish_reason = _read_obj(choice, "finish_reason")

    return ModelChoice(
        content = _coerce_text(content) if content is not None else None,
        tool_calls = _normalize_tool_calls(_read_obj(message, "tool_calls")),
        finish_reason = _coerce_finish_reason(finish_reason),
    )


def _normalize_tool_calls(tool_calls: Any) -> Tuple[Dict[str, Any], ...]:
    """Normalize tool call objects to plain dicts, preserving order."""
    if not tool_calls:
        return ()

    normalized = []
    for tool_call in tool_calls:
        function_payload = _read_obj(tool_call, "function") or {}
        normalized.append(
            {
                "id": _read_obj(tool_call, "id") or "",
                "type": _read_obj(tool_call, "type") or "function",
                "function": {
                    "name": _read_obj(function_payload, "name") or "",
                    "arguments": _read_obj(function_payload, "arguments") or "",
                },
            }
        )
    return tuple(normalized)


def _coerce_finish_reason(value: Any) -> Optional[str]:
    if value is None:
        return None
    # Some SDKs hand back enum members instead of strings.
    return str(getattr(value, "value", value))


def _coerce_text(value: Any) -> str:
    """Flatten value to text conservatively."""
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    if isinstance(value, list):
        return "".join(_coerce_text(item) for item in value)

    if isinstance(value, dict):
        if "text" in value:
            return _coerce_text(value.get("text"))
        if "content" in value:
            return _coerce_text(value.get("content"))
        return ""

    for attr_name in ["text", "content"]:
        attr_value = getattr(value, attr_name, None)
        if attr_value is not None:
            return _coerce_text(attr_value)

    return str(value)


def _read_obj(obj: Any, key: str) -> Any:
    """Read key from object or dict safely."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _safe_model_dump(obj: Any) -> Any:
    """Best-effort conversion of SDK objects to plain dicts."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj

    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        try:
            return model_dump()
        except Exception:
            return str(obj)

    return str(obj)
