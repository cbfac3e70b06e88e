"""Logging setup shared by every log_bundler module.

Modules obtain loggers with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to route records through a rich console handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "log_bundler"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package root logger."""
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, rich_output: bool = True) -> logging.Logger:
    """Configure the package root logger.

    Args:
        level: Logging level name or number.
        rich_output: Render records with rich; plain stderr formatting otherwise.

    Returns:
        The configured package root logger.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    for handler in list(root.handlers):
        if not isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    return root
