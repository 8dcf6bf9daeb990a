# Copyright (c) 2024, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
The taintinfo CLI entry point.

Usage: taintinfo { current | list | taint=<flags> }
"""
import argparse
import os
import sys
from typing import List
from typing import Optional

from taintinfo.decoder import parse_query
from taintinfo.decoder import show_flags
from taintinfo.decoder import show_taint
from taintinfo.format import make_style
from taintinfo.format import Style
from taintinfo.logging import get_logger
from taintinfo.logging import setup_logging
from taintinfo.source import read_taint_file
from taintinfo.source import TaintSourceError

try:
    from taintinfo._version import __version__
except ImportError:
    __version__ = "UNKNOWN"  # uncommon, but guard against it

EXIT_NORM = 0
EXIT_ERR_GENERIC = 1
EXIT_ERR_MEM_ALLOC = 2

PRM_CURRENT = "current"
PRM_LIST = "list"
PRM_FLAGS = "taint="

PROGRAM = "taintinfo"

log = get_logger(__name__)


class _ArgparseEscapeException(Exception):
    pass


def _make_parser(program: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=program, add_help=False)

    # Any argument error, including extra arguments, just means we print our
    # own syntax summary. Trap argparse's attempts to print and exit.
    def exit(*args, **kwargs):
        raise _ArgparseEscapeException()

    def error(*args, **kwargs):
        raise _ArgparseEscapeException()

    parser.exit = exit  # type: ignore
    parser.error = error  # type: ignore
    parser.add_argument("command", nargs="?")
    return parser


def print_syntax(program: str) -> None:
    print(f"Syntax: {program} {{ current | list | taint=<flags> }}")
    print(
        "        current      Display information about the current taint "
        "status of the running kernel"
    )
    print(
        "        list         List all known taint flags and their "
        "descriptions"
    )
    print(
        "        taint=flags  Display information about the specified taint "
        "flags"
    )
    print()


def _dispatch(
    argv: List[str], style: Style, taint_file: Optional[str], program: str
) -> int:
    try:
        command = _make_parser(program).parse_args(argv).command
    except _ArgparseEscapeException:
        command = None

    if command == PRM_CURRENT:
        try:
            value = read_taint_file(taint_file)
        except TaintSourceError as e:
            log.error("%s", e)
            return EXIT_ERR_GENERIC
        show_taint(value, style)
    elif command == PRM_LIST:
        show_flags()
    elif command is not None and command.startswith(PRM_FLAGS):
        value = parse_query(command[len(PRM_FLAGS) :])
        show_taint(value, style)
    else:
        print_syntax(program)
        return EXIT_ERR_GENERIC
    return EXIT_NORM


def run(
    argv: List[str],
    taint_file: Optional[str] = None,
    program: str = PROGRAM,
) -> int:
    """
    Run the taintinfo command line and return its exit status

    :param argv: command line arguments, not including the program name
    :param taint_file: taint status file for "current", instead of the
      configured one
    :param program: name of the program for messages
    :returns: the process exit status
    """
    try:
        style = make_style()
        setup_logging(make_style(sys.stderr))
    except ValueError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERR_GENERIC
    log.debug("%s version %s", program, __version__)

    try:
        return _dispatch(argv, style, taint_file, program)
    except MemoryError:
        log.error("%s: Out of memory", program)
        return EXIT_ERR_MEM_ALLOC


def main() -> None:
    program = os.path.basename(sys.argv[0]) if sys.argv[0] else PROGRAM
    sys.exit(run(sys.argv[1:], program=program))


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("interrupted")
    except BrokenPipeError:
        pass
