from __future__ import annotations
import logging
import os
from typing import Optional


_DEFAULT_ENCODING = "utf-8"
_DEFAULT_LOG_LEVEL = "WARNING"


def env_value(var: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def get_source_encoding() -> str:
    """Encoding used to decode byte sources handed to the interpreter."""
    return env_value("MINILISP_SOURCE_ENCODING", _DEFAULT_ENCODING)


def get_log_level() -> int:
    name = env_value("MINILISP_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    # getLevelName returns a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_prelude() -> Optional[str]:
    """Source evaluated by a new Interpreter when no prelude is passed explicitly."""
    return env_value("MINILISP_PRELUDE")


def configure_logging(level: Optional[int] = None) -> None:
    """Attach a stderr handler to the package logger; for hosts and front ends."""
    logger = logging.getLogger("minilisp")
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level if level is not None else get_log_level())
