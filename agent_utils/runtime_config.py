"""Runtime configuration resolved from CLI flags and environment variables."""

import os
from dataclasses import dataclass
from typing import Any, Optional


BOOL_TRUE = {"1", "true", "yes", "y", "on"}
BOOL_FALSE = {"0", "false", "no", "n", "off"}

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "anthropic/claude-haiku-4.5"

API_KEY_ENV = "OPENROUTER_API_KEY"
BASE_URL_ENV = "OPENROUTER_BASE_URL"
MODEL_ENV = "OPENROUTER_MODEL_NAME"


class ConfigError(Exception):
    """Raised when required configuration is missing before the loop starts."""


@dataclass
class RuntimeOptions:
    """Settings merged from CLI and environment variables."""

    prompt: str
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: Optional[int] = None
    show_llm_response: bool = False

    def as_dict(self) -> dict:
        """Return a loggable dict form with the API key masked."""
        return {
            "base_url": self.base_url,
            "model": self.model,
            "max_tokens": self.max_tokens,
            "show_llm_response": self.show_llm_response,
            "api_key": _mask(self.api_key),
        }


def add_runtime_args(parser: Any) -> None:
    """Attach the agent's flags to an argparse parser."""
    import argparse

    parser.add_argument(
        "prompt",
        nargs = "?",
        default = None,
        help = "User prompt for the agent.",
    )
    parser.add_argument(
        "-p",
        "--prompt",
        dest = "prompt_flag",
        default = None,
        help = "User prompt for the agent (alternative to the positional form).",
    )
    parser.add_argument(
        "--model",
        dest = "model",
        default = None,
        help = f"Model identifier (env {MODEL_ENV}, default {DEFAULT_MODEL}).",
    )
    parser.add_argument(
        "--base-url",
        dest = "base_url",
        default = None,
        help = f"Completion endpoint base URL (env {BASE_URL_ENV}).",
    )
    parser.add_argument(
        "--max-tokens",
        dest = "max_tokens",
        type = int,
        default = None,
        help = "Per-turn completion token limit (env AGENT_MAX_TOKENS).",
    )
    parser.add_argument(
        "--show-llm-response",
        dest = "show_llm_response",
        action = argparse.BooleanOptionalAction,
        default = None,
        help = "Show per-turn LLM assistant/tool-call trace logs.",
    )


def runtime_options_from_args(args: Any) -> RuntimeOptions:
    """
    Build runtime options with CLI > ENV > default precedence.

    Raises:
        ConfigError: The prompt or the API key is missing or empty.
    """
    prompt = getattr(args, "prompt_flag", None) or getattr(args, "prompt", None)
    if prompt is None or not str(prompt).strip():
        raise ConfigError("error: a prompt is required (positional argument or -p flag)")

    api_key = _resolve_str(cli_value = None, env_name = API_KEY_ENV, default = "")
    if not api_key:
        raise ConfigError(f"{API_KEY_ENV} is not set")

    max_tokens = _resolve_int(
        cli_value = getattr(args, "max_tokens", None),
        env_name = "AGENT_MAX_TOKENS",
        default = None,
    )
    if max_tokens is not None and max_tokens <= 0:
        max_tokens = None

    return RuntimeOptions(
        prompt = str(prompt),
        api_key = api_key,
        base_url = _resolve_str(
            cli_value = getattr(args, "base_url", None),
            env_name = BASE_URL_ENV,
            default = DEFAULT_BASE_URL,
        ),
        model = _resolve_str(
            cli_value = getattr(args, "model", None),
            env_name = MODEL_ENV,
            default = DEFAULT_MODEL,
        ),
        max_tokens = max_tokens,
        show_llm_response = _resolve_bool(
            cli_value = getattr(args, "show_llm_response", None),
            env_name = "AGENT_SHOW_LLM_RESPONSE",
            default = False,
        ),
    )


def _resolve_bool(cli_value: Any, env_name: str, default: bool) -> bool:
    """Resolve bool with CLI > ENV > default precedence."""
    if cli_value is not None:
        return bool(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is None:
        return default

    normalized = raw_env.strip().lower()
    if normalized in BOOL_TRUE:
        return True
    if normalized in BOOL_FALSE:
        return False
    return default


def _resolve_int(cli_value: Any, env_name: str, default: Optional[int]) -> Optional[int]:
    """Resolve int option with fallback to default on parse failure."""
    if cli_value is not None:
        return int(cli_value)

    raw_env = os.getenv(env_name)
    if raw_env is None or not raw_env.strip():
        return default

    try:
        return int(raw_env.strip())
    except ValueError:
        return default


def _resolve_str(cli_value: Any, env_name: str, default: str) -> str:
    """Resolve string option with CLI > ENV > default precedence; blanks count as unset."""
    if cli_value is not None and str(cli_value).strip():
        return str(cli_value).strip()

    raw_env = os.getenv(env_name)
    if raw_env is not None and raw_env.strip():
        return raw_env.strip()

    return default


def _mask(secret: str) -> str:
    if len(secret) <= 8:
        return "***"
    return secret[:4] + "..." + secret[-4:]
