import argparse
import json
import logging
from typing import Optional

from rich.console import Console

from src.container import container
from src.entities.ToolCall import ToolCall
from src.utils.log import configure_logging


def main(argv: list[str] | None = None, console: Optional[Console] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="spectre-tool",
        description="Run a single coding tool call and print its result.",
    )
    parser.add_argument("name", nargs="?", help="Tool name (see --list)")
    parser.add_argument(
        "arguments",
        nargs="?",
        default="{}",
        help="Tool arguments as a JSON object (default: {})",
    )
    parser.add_argument(
        "--list", action="store_true", help="List available tools and exit"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Log tool execution at debug level"
    )

    args = parser.parse_args(argv)
    if not args.list and not args.name:
        parser.error("a tool name is required unless --list is given")

    configure_logging(args.debug)
    if args.debug:
        container.settings.debug = True
        container.reset()
    else:
        logging.getLogger().setLevel(logging.WARNING)

    console = console or Console(soft_wrap=True)
    handler = container.get_tools_handler()

    if args.list:
        console.print_json(
            json.dumps(handler.available_tools(), ensure_ascii=False)
        )
        return 0

    result = handler.execute(ToolCall(id="cli", name=args.name, arguments=args.arguments))
    console.print(result, markup=False, highlight=False, soft_wrap=True)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
