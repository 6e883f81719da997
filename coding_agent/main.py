import sys
import logging
from typing import List, Optional

from dotenv import load_dotenv

from agent_utils.llm_call import build_chat_client
from agent_utils.runtime_config import ConfigError, add_runtime_args, runtime_options_from_args
from agent_utils.trace_logger import TraceLogger
from coding_agent.agent_loop import AgentLoop, AgentState
from coding_agent.tools import build_default_registry


logger = logging.getLogger("Coding-Agent")


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed CLI arguments.
    """
    import argparse

    parser = argparse.ArgumentParser(
        description = "Coding Agent - relay a prompt to an LLM that can read, write and run commands",
    )
    add_runtime_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one prompt through the agent loop.

    Returns:
        int: Process exit code.
    """
    logging.basicConfig(
        level = logging.INFO,
        format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers = [logging.StreamHandler()],
    )
    load_dotenv()

    args = parse_args(argv)
    try:
        options = runtime_options_from_args(args)
    except ConfigError as exc:
        logger.error(f"Configuration error: {exc}")
        return 1

    logger.info(f"Runtime options: {options.as_dict()}")

    client = build_chat_client(
        api_key = options.api_key,
        base_url = options.base_url,
        max_tokens = options.max_tokens,
    )
    agent = AgentLoop(
        client = client,
        registry = build_default_registry(),
        model = options.model,
        trace_logger = TraceLogger(enabled = options.show_llm_response, logger = logger),
    )

    try:
        result = agent.run(options.prompt)
    except Exception as exc:
        logger.error(f"Error: {exc}")
        return 1

    if result.state is AgentState.DONE:
        if result.output:
            print(result.output)
        return 0

    if result.error is not None:
        return 1

    # The model ended on an unexpected finish indicator; already warned about.
    return 0


if __name__ == "__main__":
    sys.exit(main())
