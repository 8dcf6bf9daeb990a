# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Terminal formatting helpers for taint reports
"""
import os
import sys
from typing import Optional
from typing import TextIO

from taintinfo.config import get_config
from taintinfo.taint import Severity

F_INFO = "\x1b[0;32m"
F_WARN = "\x1b[1;33m"
F_ALERT = "\x1b[1;31m"
F_BOLD = "\x1b[1m"
F_RESET = "\x1b[0m"

_SEVERITY_FORMATS = {
    Severity.INFO: F_INFO,
    Severity.WARN: F_WARN,
    Severity.ALERT: F_ALERT,
}

COLOR_MODES = ("always", "never", "auto")


def severity_format(severity: Severity) -> str:
    """Return the escape sequence used to display a severity"""
    return _SEVERITY_FORMATS[severity]


def format_hex(value: int) -> str:
    """Format a 64-bit value as 16 uppercase hex digits, zero padded"""
    return f"{value & 0xFFFFFFFFFFFFFFFF:016X}"


class Style:
    """
    Wraps text in ANSI escape sequences, unless disabled

    :param enabled: when False, every method returns its text unchanged
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def wrap(self, fmt: str, text: str) -> str:
        if not self.enabled:
            return text
        return f"{fmt}{text}{F_RESET}"

    def severity(self, severity: Severity, text: str) -> str:
        return self.wrap(severity_format(severity), text)

    def bold(self, text: str) -> str:
        return self.wrap(F_BOLD, text)

    def alert(self, text: str) -> str:
        return self.wrap(F_ALERT, text)

    def warn(self, text: str) -> str:
        return self.wrap(F_WARN, text)


def make_style(stream: Optional[TextIO] = None) -> Style:
    """
    Create a :class:`Style` according to the configuration

    The ``color`` setting of the ``[taintinfo]`` section selects "always",
    "never" or "auto". In "auto" mode, color is used only when ``stream``
    (stdout by default) is a terminal. Setting ``NO_COLOR`` in the
    environment always disables color.
    """
    if os.environ.get("NO_COLOR") is not None:
        return Style(False)
    mode = get_config().get("taintinfo", "color", fallback="always").lower()
    if mode not in COLOR_MODES:
        raise ValueError(
            f"invalid color mode {mode!r}, expected one of: "
            + ", ".join(COLOR_MODES)
        )
    if mode == "auto":
        if stream is None:
            stream = sys.stdout
        return Style(stream.isatty())
    return Style(mode == "always")
