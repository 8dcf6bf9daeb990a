# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Decode, list and query kernel taint flags
"""
import logging
from typing import Iterable
from typing import List
from typing import Optional
from typing import Sequence

from taintinfo.format import format_hex
from taintinfo.format import Style
from taintinfo.logging import get_logger
from taintinfo.taint import Severity
from taintinfo.taint import SPACER
from taintinfo.taint import Taint
from taintinfo.taint import TAINT_FLAGS
from taintinfo.taint import TaintFlagDef

log = get_logger(__name__)

NOT_TAINTED = "(Kernel is not tainted)"


def decode_and_render(
    value: int,
    style: Optional[Style] = None,
    flags: Sequence[TaintFlagDef] = TAINT_FLAGS,
) -> List[str]:
    """
    Render a report of the taint flags in a taint mask

    The report begins with a summary containing one character per known flag,
    followed by the numeric value and a line for each flag which is set. Flags
    whose clear state is notable (for example, "G" for GPL-only modules) get a
    line when they are clear, unless the mask is 0: then the kernel is simply
    reported as not tainted. Bits with no known flag are not reported.

    :param value: the taint mask
    :param style: formatting for the report, plain text if not given
    :param flags: the taint flag table
    :returns: the lines of the report
    """
    if style is None:
        style = Style(False)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("decoding taint value %d: %s", value, Taint.decode(value))

    summary = []
    details = []
    for flag in flags:
        if value & flag.value:
            summary.append(style.severity(flag.severity, flag.set_char))
            details.append(
                "- {} {} ({})".format(
                    style.severity(flag.severity, flag.set_char),
                    flag.set_description,
                    flag.value,
                )
            )
        elif flag.has_unset_char:
            summary.append(style.severity(flag.severity, flag.unset_char))
            if flag.unset_description is not None:
                details.append(
                    "- {} {} ({} unset)".format(
                        style.severity(Severity.INFO, flag.unset_char),
                        flag.unset_description,
                        flag.value,
                    )
                )
        else:
            summary.append(SPACER)

    lines = [
        style.bold("Taint flags:            ") + "".join(summary),
        style.bold("Numeric representation: ")
        + f"{value} / 0x{format_hex(value)}",
        "",
    ]
    if value == 0:
        lines.append(NOT_TAINTED)
    else:
        lines.extend(details)
    lines.append("")
    return lines


def show_taint(value: int, style: Optional[Style] = None) -> None:
    for line in decode_and_render(value, style):
        print(line)


def list_flags(flags: Sequence[TaintFlagDef] = TAINT_FLAGS) -> List[str]:
    """
    List every known taint flag and its description

    :param flags: the taint flag table
    :returns: one line per flag, plus a line for each notable clear state
    """
    lines = []
    for flag in flags:
        if flag.has_unset_char and flag.unset_description is not None:
            lines.append(
                f"- {flag.unset_char}: {flag.unset_description} "
                f"({flag.value} unset)"
            )
        lines.append(f"- {flag.set_char}: {flag.set_description} ({flag.value})")
    return lines


def show_flags() -> None:
    for line in list_flags():
        print(line)


def _match_flag(
    char: str, flags: Sequence[TaintFlagDef]
) -> Optional[TaintFlagDef]:
    # The first entry whose set or unset character matches wins
    for flag in flags:
        if char == flag.set_char:
            return flag
        if flag.has_unset_char and char == flag.unset_char:
            return flag
    return None


def parse_query(
    chars: Iterable[str], flags: Sequence[TaintFlagDef] = TAINT_FLAGS
) -> int:
    """
    Convert a string of taint flag characters into a taint mask

    Characters are matched case-insensitively. A character naming the clear
    state of a flag (e.g. "G") sets nothing. Unknown characters are ignored
    with a warning, and so is a clear-state character given along with the
    character which sets the same flag: the flag ends up set.

    :param chars: the flag characters, e.g. ``"PMEOL"``
    :param flags: the taint flag table
    :returns: the taint mask
    """
    # Case folding is ASCII only, so no other letter can turn into a flag
    query = [c.upper() if c.isascii() else c for c in chars]
    value = 0
    with log.add_context(query="".join(query)):
        for char in query:
            flag = _match_flag(char, flags)
            if flag is None:
                log.warning("Unknown taint flag '%s' ignored.", char)
            elif char == flag.set_char:
                value |= flag.value

        for char in query:
            for flag in flags:
                if (
                    flag.has_unset_char
                    and char == flag.unset_char
                    and value & flag.value
                ):
                    log.warning(
                        "Conflicting taint flags '%s' and '%s', "
                        "using taint-enabling flag '%s'",
                        flag.set_char,
                        flag.unset_char,
                        flag.set_char,
                    )
    return value
