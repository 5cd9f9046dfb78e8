"""Logging setup for the fallpy package."""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname).1s] %(module_name)s: %(message)s"


class ModuleNameFormatter(logging.Formatter):
    """Shows `engine` instead of `fallpy.engine`."""

    def format(self, record: logging.LogRecord) -> str:
        record.module_name = record.name.rpartition(".")[2]
        return super().format(record)


def setup_logging(level: str = "info") -> None:
    """Route the fallpy loggers to stderr at the given level."""
    root = logging.getLogger("fallpy")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(ModuleNameFormatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(console)
    root.propagate = False
