"""CLI tests: exit codes and stdout for each way a run can end."""

import contextlib
import io
import os
import sys
from unittest import mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from tests.helpers import ScriptedModelClient, finish_turn, run_tests, stop_turn, tool_call, tool_turn
from coding_agent import main as cli


def _run_cli(argv, responses, api_key = "sk-test"):
    """Run ``main`` with a scripted client; returns (exit_code, stdout, client, build_mock)."""
    client = ScriptedModelClient(responses)
    env = {"OPENROUTER_API_KEY": api_key} if api_key is not None else {}
    stdout = io.StringIO()

    with mock.patch.dict(os.environ, env, clear = True), \
            mock.patch.object(cli, "load_dotenv"), \
            mock.patch.object(cli, "build_chat_client", return_value = client) as build_mock, \
            contextlib.redirect_stdout(stdout):
        exit_code = cli.main(argv)

    return exit_code, stdout.getvalue(), client, build_mock


def test_stop_prints_content_and_exits_zero():
    exit_code, output, client, build_mock = _run_cli(["-p", "hello"], [stop_turn("Hi there")])

    assert exit_code == 0
    assert output == "Hi there\n"
    build_mock.assert_called_once_with(
        api_key = "sk-test",
        base_url = "https://openrouter.ai/api/v1",
        max_tokens = None,
    )
    assert client.requests[0].model == "anthropic/claude-haiku-4.5"

    print("PASS: test_stop_prints_content_and_exits_zero")
    return True


def test_tool_run_prints_only_final_summary():
    exit_code, output, _, _ = _run_cli(
        ["List files"],
        [
            tool_turn(tool_call("c1", "Bash", {"command": "echo listing"})),
            stop_turn("Summary of files"),
        ],
    )

    assert exit_code == 0
    assert output == "Summary of files\n", f"Tool output must not reach stdout: {output!r}"

    print("PASS: test_tool_run_prints_only_final_summary")
    return True


def test_missing_api_key_exits_before_client():
    exit_code, output, _, build_mock = _run_cli(["hello"], [], api_key = None)

    assert exit_code == 1
    assert output == ""
    build_mock.assert_not_called()

    print("PASS: test_missing_api_key_exits_before_client")
    return True


def test_missing_prompt_exits_nonzero():
    exit_code, _, _, build_mock = _run_cli([], [])

    assert exit_code == 1
    build_mock.assert_not_called()

    print("PASS: test_missing_prompt_exits_nonzero")
    return True


def test_protocol_error_exits_nonzero():
    exit_code, output, _, _ = _run_cli(["hello"], [tool_turn()])

    assert exit_code == 1
    assert output == ""

    print("PASS: test_protocol_error_exits_nonzero")
    return True


def test_unknown_tool_exits_nonzero():
    exit_code, _, _, _ = _run_cli(["hello"], [tool_turn(tool_call("c1", "Nope", {}))])

    assert exit_code == 1

    print("PASS: test_unknown_tool_exits_nonzero")
    return True


def test_unexpected_finish_reason_exits_zero_without_output():
    exit_code, output, _, _ = _run_cli(["hello"], [finish_turn("content_filter", content = "cut")])

    assert exit_code == 0
    assert output == ""

    print("PASS: test_unexpected_finish_reason_exits_zero_without_output")
    return True


def test_client_exception_exits_nonzero():
    class _BrokenClient:
        def complete(self, request):
            raise ConnectionError("endpoint unreachable")

    with mock.patch.dict(os.environ, {"OPENROUTER_API_KEY": "sk-test"}, clear = True), \
            mock.patch.object(cli, "load_dotenv"), \
            mock.patch.object(cli, "build_chat_client", return_value = _BrokenClient()):
        exit_code = cli.main(["hello"])

    assert exit_code == 1

    print("PASS: test_client_exception_exits_nonzero")
    return True


if __name__ == "__main__":
    sys.exit(0 if run_tests([
        test_stop_prints_content_and_exits_zero,
        test_tool_run_prints_only_final_summary,
        test_missing_api_key_exits_before_client,
        test_missing_prompt_exits_nonzero,
        test_protocol_error_exits_nonzero,
        test_unknown_tool_exits_nonzero,
        test_unexpected_finish_reason_exits_zero_without_output,
        test_client_exception_exits_nonzero,
    ]) else 1)
