"""Logging setup for the API server and CLI."""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "todo_api.console"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stdout handler on the root logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Logging level name, e.g. "INFO" or "DEBUG"
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console_handler)

    # Keep client libraries quiet unless something goes wrong
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
