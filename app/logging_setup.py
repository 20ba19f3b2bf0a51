from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "taskflow-console"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow every app.* record
    - uvicorn access/error logs at INFO and above
    - any other third-party logger only at WARNING and above
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "app" or name.startswith("app."):
            return True
        if name.startswith("uvicorn"):
            return record.levelno >= logging.INFO
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Attach one console handler to the root logger.

    Safe to call more than once: the handler is installed only if it is not
    already there, and handlers owned by someone else (pytest, uvicorn) are
    left alone.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(min(root.level or logging.WARNING, level))
    logging.getLogger("app").setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.set_name(_HANDLER_NAME)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
