"""
Local tools the model may call: Read, Write and Bash.

Every executor returns plain text and never raises; IO and subprocess
failures are reported as text so the model can adapt.
"""

import logging
import os
import signal
import subprocess
import tempfile
from pathlib import Path

from coding_agent.registry import ToolDescriptor, ToolField, ToolRegistry


logger = logging.getLogger("Coding-Agent-Tools")

BASH_WORKSPACE_PREFIX = "coding-agent-bash-"
OUTPUT_LOG_NAME = "output.log"
ERROR_LOG_NAME = "error.log"

BASH_REPORT = """Executed command: {command}
Exit Code: {exit_code}

--- output log ---
{stdout}

--- error log ---
{stderr}
"""


READ_TOOL = ToolDescriptor(
    name = "Read",
    description = "Read and return the contents of a file",
    fields = (
        ToolField(name = "file_path", type = "string", description = "The path to the file to read"),
    ),
)

WRITE_TOOL = ToolDescriptor(
    name = "Write",
    description = "Write content to a file",
    fields = (
        ToolField(name = "file_path", type = "string", description = "The path of the file to write to"),
        ToolField(name = "content", type = "string", description = "The content to write to the file"),
    ),
)

BASH_TOOL = ToolDescriptor(
    name = "Bash",
    description = "Execute a shell command",
    fields = (
        ToolField(name = "command", type = "string", description = "The command to execute"),
    ),
)


def read_file(file_path: str) -> str:
    """
    Read a UTF-8 text file.

    Parameters:
        file_path: The path to the file to read.
    """
    try:
        return Path(file_path).read_text(encoding = "utf-8")
    except (OSError, ValueError) as exc:
        return f"The file could not be read: {exc}"


def write_file(file_path: str, content: str) -> str:
    """
    Write content to a file as UTF-8 bytes, replacing any previous content.

    Parameters:
        file_path: The path of the file to write to.
        content: The content to write to the file.
    """
    try:
        data = content.encode("utf-8")
        Path(file_path).write_bytes(data)
    except (OSError, ValueError) as exc:
        return f"The file could not be written: {exc}"
    return f"Wrote {len(data)} bytes"


def run_bash(command: str) -> str:
    """
    Run a shell command and report its exit code and captured output.

    stdout and stderr are redirected to log files in a fresh temporary
    directory, which is removed on every exit path; cleanup errors are
    ignored.

    Parameters:
        command: The command to execute.
    """
    try:
        with tempfile.TemporaryDirectory(
            prefix = BASH_WORKSPACE_PREFIX,
            ignore_cleanup_errors = True,
        ) as log_dir:
            return _run_with_log_files(command = command, log_dir = Path(log_dir))
    except OSError as exc:
        return f"The command could not be started: {exc}"


def _run_with_log_files(command: str, log_dir: Path) -> str:
    output_log = log_dir / OUTPUT_LOG_NAME
    error_log = log_dir / ERROR_LOG_NAME

    try:
        with output_log.open("wb") as stdout_file, error_log.open("wb") as stderr_file:
            process = subprocess.Popen(
                command,
                shell = True,
                stdin = subprocess.DEVNULL,
                stdout = stdout_file,
                stderr = stderr_file,
                start_new_session = True,
            )
            try:
                exit_code = process.wait()
            except KeyboardInterrupt:
                logger.warning(f"Interrupted while waiting for: {command}")
                _kill_process_group(process)
                process.wait()
                return f"The command was interrupted: {command}"
    except (OSError, ValueError) as exc:
        return f"The command could not be started: {exc}"

    try:
        stdout = output_log.read_text(encoding = "utf-8", errors = "replace")
        stderr = error_log.read_text(encoding = "utf-8", errors = "replace")
    except OSError as exc:
        return f"The command output could not be read: {exc}"

    return BASH_REPORT.format(
        command = command,
        exit_code = exit_code,
        stdout = stdout,
        stderr = stderr,
    )


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the shell and every process it started."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        # Group already exited.
        pass


def build_default_registry() -> ToolRegistry:
    """Registry with the Read, Write and Bash tools."""
    registry = ToolRegistry()
    registry.register(READ_TOOL, read_file)
    registry.register(WRITE_TOOL, write_file)
    registry.register(BASH_TOOL, run_bash)
    return registry
