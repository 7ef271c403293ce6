"""Module that holds the request log side channel as a module-global.

Handlers call `log_to_file()` with a plain string describing what they are
about to do. The server keeps the default sink (the `wordpress.requests`
logger, which ends up in the server log file); tests install their own with
`set_log_sink()`.
"""
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class LogSink(Protocol):
    def write(self, message: str) -> None: ...


class LoggerSink:
    """Forward messages to a standard library logger."""

    def __init__(self, name: str = "wordpress.requests"):
        self._logger = logging.getLogger(name)

    def write(self, message: str) -> None:
        self._logger.info(message)


log_sink: LogSink = LoggerSink()


def set_log_sink(sink: LogSink) -> None:
    global log_sink
    log_sink = sink


def get_log_sink() -> LogSink:
    return log_sink


def log_to_file(message: str) -> None:
    """Fire-and-forget write; a failing sink never reaches the caller."""
    try:
        log_sink.write(message)
    except Exception:
        logger.exception("Log sink failed to write message")
