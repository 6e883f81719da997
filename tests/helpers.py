"""
Shared test utilities.

Provides:
1) A scripted model client that replays canned turns and records requests
2) Builders for choices and tool calls in the normalized client format
3) Common test runner
"""

import json
import traceback

from agent_utils.llm_call import ModelChoice, ModelResponse


def tool_call(call_id, name, arguments, call_type = "function"):
    """
    Build one normalized tool call.

    Parameters:
        call_id: Opaque id the model would assign.
        name: Tool name.
        arguments: Dict (encoded to JSON) or raw string payload.
    """
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": call_id,
        "type": call_type,
        "function": {
            "name": name,
            "arguments": arguments,
        },
    }


def tool_turn(*calls, content = None):
    return ModelResponse(
        choices = (ModelChoice(content = content, tool_calls = tuple(calls), finish_reason = "tool_calls"),),
    )


def stop_turn(content):
    return ModelResponse(
        choices = (ModelChoice(content = content, tool_calls = (), finish_reason = "stop"),),
    )


def finish_turn(finish_reason, content = None):
    return ModelResponse(
        choices = (ModelChoice(content = content, tool_calls = (), finish_reason = finish_reason),),
    )


class ScriptedModelClient:
    """Returns queued responses in order and keeps every request it received."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Model client called more times than scripted")
        return self.responses.pop(0)


def run_tests(test_functions):
    """
    Run test callables and print a compact summary.

    Parameters:
        test_functions: List of test functions.
    """
    failed = []
    for test_function in test_functions:
        print(f"\n{'=' * 60}")
        print(f"Running: {test_function.__name__}")
        print("=" * 60)
        try:
            if not test_function():
                failed.append(test_function.__name__)
        except Exception as exc:
            print(f"FAILED: {exc}")
            traceback.print_exc()
            failed.append(test_function.__name__)

    passed = len(test_functions) - len(failed)
    print(f"\n{'=' * 60}")
    print(f"Results: {passed}/{len(test_functions)} passed")
    print("=" * 60)
    if failed:
        print(f"FAILED: {failed}")
        return False
    print("All tests passed!")
    return True
