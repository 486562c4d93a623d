"""
Logging configuration for the command line.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str, console: Console) -> None:
    """Route log records through rich on ``console`` at ``level``."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
