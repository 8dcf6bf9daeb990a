# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Helpers for logging with some added context info.
"""
import contextlib
import logging
import sys
import typing as t

from taintinfo.config import get_config
from taintinfo.format import Style

ROOT_LOGGER = "taintinfo"


class PrependedLoggerAdapter(logging.LoggerAdapter):
    __context: t.List[t.Tuple[str, t.Any]]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.__context = []

    @contextlib.contextmanager
    def add_context(self, **kwargs: t.Any) -> t.Iterator[None]:
        self.__context.extend(kwargs.items())
        try:
            yield
        finally:
            del self.__context[-len(kwargs) :]

    def process(
        self, message: str, kwargs: t.MutableMapping[str, t.Any]
    ) -> t.Tuple[str, t.MutableMapping[str, str]]:
        if not self.__context:
            return message, kwargs
        pfx = " ".join(f"[{k}={str(v)}]" for k, v in self.__context)
        return (
            f"{pfx} {message}",
            kwargs,
        )


def get_logger(name: str) -> PrependedLoggerAdapter:
    return PrependedLoggerAdapter(logging.getLogger(name), {})


class AlertFormatter(logging.Formatter):
    """
    Colors log messages for the terminal by level

    Warnings get a "Warning:" prefix and the warning color, errors and worse
    are shown in the alert color. Anything below a warning is left alone.
    """

    def __init__(self, style: Style):
        super().__init__("%(message)s")
        self.style = style

    def format(self, rec: logging.LogRecord) -> str:
        msg = super().format(rec)
        if rec.levelno >= logging.ERROR:
            return self.style.alert(msg)
        elif rec.levelno >= logging.WARNING:
            return self.style.warn(f"Warning: {msg}")
        return msg


class _TaintInfoHandler(logging.StreamHandler):
    pass


def setup_logging(
    style: Style, stream: t.Optional[t.TextIO] = None
) -> logging.Logger:
    """
    Send taintinfo log messages to stderr, formatted for the terminal

    The level is read from the ``level`` setting of the ``[logging]`` section
    of the configuration. Errors are always shown, even if a higher level is
    configured. Calling this again replaces the handler installed by
    an earlier call.

    :param style: controls whether messages are colored
    :param stream: stream to write to, stderr by default
    :returns: the package logger
    """
    log = logging.getLogger(ROOT_LOGGER)
    level = get_config().get("logging", "level", fallback="WARNING")
    log.setLevel(level.upper())
    if log.level > logging.ERROR:
        log.setLevel(logging.ERROR)
    for handler in list(log.handlers):
        if isinstance(handler, _TaintInfoHandler):
            log.removeHandler(handler)
    handler = _TaintInfoHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(AlertFormatter(style))
    log.addHandler(handler)
    return log
