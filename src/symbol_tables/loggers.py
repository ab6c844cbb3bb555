import logging
from logging import Logger
from typing import Optional

_DEFAULT_LOGGER_NAME = "symbol_tables"


def get_logger(name: Optional[str] = None) -> Logger:
    base = logging.getLogger(_DEFAULT_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return base if name is None else base.getChild(str(name))


def set_verbose(enabled: bool) -> None:
    get_logger().setLevel(logging.DEBUG if enabled else logging.INFO)
