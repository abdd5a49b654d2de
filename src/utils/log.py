"""
Logging helpers shared by the CLI and the tool layer.

Levels used by the tool layer: info, success, warning, error. `success` is not
a standard logging level, so it is registered here as SUCCESS (25).
"""

import logging

from rich.logging import RichHandler

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a completed filesystem mutation."""
    logger.log(SUCCESS, message)


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for the terminal.

    Args:
        debug: Also emit DEBUG records (tool execution traces)
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # keep HTTP client chatter out of the conversation
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
