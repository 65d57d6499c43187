"""Shared logging configuration.

Call ``configure_logging()`` once at a CLI or server entry point. Library
modules only create loggers and never add handlers themselves.
"""
import logging


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger with a console handler.

    Only configures if the root logger has no handlers (idempotent); the
    level is applied either way so ``--verbose`` can lower it.
    """
    root = logging.getLogger()
    if not root.handlers:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)
    root.setLevel(level)
