# app/core/logging_conf.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Send application logs to stdout.

    Safe to call more than once (API startup + CLI job): the stdout
    handler is only attached the first time.
    """
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, "_catalog_stdout", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._catalog_stdout = True  # type: ignore[attr-defined]
    root.addHandler(handler)
