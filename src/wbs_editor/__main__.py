"""cli entrypoint for the wbs editor shell."""

import argparse
import logging

from .core.client import ClaudeClient, DEFAULT_MODEL, MockClient
from .core.planner import ClaudePlanner
from .core.session import EditorSession
from .core.templates import blank_tree, initial_tree
from .tui.app import run


def main():
    parser = argparse.ArgumentParser(
        description="wbs editor - restructure a work-breakdown structure with short commands"
    )
    parser.add_argument(
        "--mock",
        "-m",
        action="store_true",
        help="use mock client (no api calls, for testing)",
    )
    parser.add_argument(
        "--blank",
        action="store_true",
        help="start from an empty project instead of the default tree",
    )
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help=f"model for the online assistant (default: {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "--log-file",
        help="write debug logs to this file",
    )

    args = parser.parse_args()
    if args.log_file:
        logging.basicConfig(filename=args.log_file, level=logging.DEBUG)

    client = MockClient() if args.mock else ClaudeClient(model=args.model)
    session = EditorSession(
        tree=blank_tree() if args.blank else initial_tree(),
        planner=ClaudePlanner(client),
    )
    run(session)


if __name__ == "__main__":
    main()
