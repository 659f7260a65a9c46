"""
Console logging setup for the EventGo API.

Modules log through ``logging.getLogger(__name__)``; this only installs the
root handler once, at application import.
"""
import logging
import os
import sys
from typing import Optional

_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "eventgo"


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # uvicorn --reload re-imports the app; keep a single handler
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
