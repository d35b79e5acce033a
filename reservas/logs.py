"""
Logging setup shared by the server and the CLI.
"""

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "INFO") -> None:
    """
    Route standard-library logging through Rich.

    Safe to call more than once; later calls only change the level.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
        root.addHandler(handler)
