# Copyright (c) 2024, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Decode the taint status of a kernel core dump (or live kernel) with drgn

Unlike ``taintinfo current``, which reads procfs of the running system, this
reads the ``tainted_mask`` variable straight out of kernel memory. That makes
it possible to check the taint of a vmcore after the fact.
"""
import argparse
import logging
import os
import sys
from typing import List
from typing import Optional

import drgn
from drgn import Program

from taintinfo.decoder import show_taint
from taintinfo.format import make_style
from taintinfo.logging import setup_logging
from taintinfo.source import read_program_taint
from taintinfo.source import TaintSourceError


def load_program(vmcore: str) -> Program:
    """
    Open a vmcore, or /proc/kcore for the live kernel

    Debuginfo is loaded if it can be found, but it is not required: the
    ``tainted_mask`` symbol is present in the kernel's symbol table.
    """
    prog = Program()
    try:
        prog.set_core_dump(vmcore)
    except PermissionError:
        if vmcore == "/proc/kcore":
            try:
                from drgn.internal.sudohelper import open_via_sudo

                prog.set_core_dump(open_via_sudo(vmcore, os.O_RDONLY))
            except ImportError:
                sys.exit("error: no permission to open /proc/kcore")
            except OSError as e:
                sys.exit(f"error: cannot open /proc/kcore: {e}")
        else:
            sys.exit(f"error: no permission to open {vmcore}")
    except (OSError, ValueError) as e:
        sys.exit(f"error: cannot open {vmcore}: {e}")

    drgnlog = logging.getLogger("drgn")
    old_level = drgnlog.getEffectiveLevel()
    try:
        drgnlog.setLevel(logging.ERROR)
        prog.load_default_debug_info()
    except drgn.MissingDebugInfoError:
        pass
    finally:
        drgnlog.setLevel(old_level)
    return prog


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Decode the taint status of a kernel core dump",
    )
    parser.add_argument(
        "vmcore",
        help="vmcore to open (use /proc/kcore for the running kernel)",
    )
    args = parser.parse_args(argv)

    try:
        style = make_style()
        setup_logging(make_style(sys.stderr))
    except ValueError as e:
        sys.exit(f"error: invalid configuration: {e}")

    prog = load_program(args.vmcore)
    try:
        value = read_program_taint(prog)
    except (TaintSourceError, drgn.FaultError) as e:
        sys.exit(f"error: {e}")
    show_taint(value, style)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit("interrupted")
    except BrokenPipeError:
        pass
