# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Contains definitions for kernel taint values
"""
import enum
from enum import IntEnum
from typing import NamedTuple
from typing import Optional
from typing import Tuple

from drgn.helpers.common.format import decode_flags

SPACER = "."


class Taint(IntEnum):
    """
    Kernel taint flags

    These flags are not recorded in any enum type, only preprocessor
    definitions, since they need to be used in assembly listings in the kernel.
    Record them here. They can be found at ``include/linux/panic.h`` or for
    older kernels, ``include/linux/kernel.h``.
    """

    PROPRIETARY_MODULE = 0
    FORCED_MODULE = 1
    CPU_OUT_OF_SPEC = 2
    FORCED_RMMOD = 3
    MACHINE_CHECK = 4
    BAD_PAGE = 5
    USER = 6
    DIE = 7
    OVERRIDDEN_ACPI_TABLE = 8
    WARN = 9
    CRAP = 10
    FIRMWARE_WORKAROUND = 11
    OOT_MODULE = 12
    UNSIGNED_MODULE = 13
    SOFTLOCKUP = 14
    LIVEPATCH = 15
    AUX = 16
    RANDSTRUCT = 17

    @classmethod
    def decode(cls, value: int) -> str:
        fields = [(v.name, v) for v in cls]
        return decode_flags(value, fields, bit_numbers=True)


class Severity(enum.Enum):
    """How much a taint flag matters to someone supporting the kernel"""

    INFO = 0
    WARN = 1
    ALERT = 2


class TaintFlagDef(NamedTuple):
    """
    Describes one bit of the kernel taint mask

    :param bit_position: shift amount of the bit within the mask
    :param severity: the display severity of the flag
    :param set_char: character shown when the bit is set
    :param unset_char: character shown when the bit is clear, or
      :data:`SPACER` if the clear state has no character of its own
    :param set_description: description of the bit being set
    :param unset_description: description of the bit being clear, if the
      clear state is worth reporting at all
    """

    bit_position: Taint
    severity: Severity
    set_char: str
    unset_char: str
    set_description: str
    unset_description: Optional[str] = None

    @property
    def value(self) -> int:
        return flag_value(self.bit_position)

    @property
    def has_unset_char(self) -> bool:
        return self.unset_char != SPACER


def flag_value(bit_position: int) -> int:
    """Return the mask value of a single taint bit"""
    return 1 << bit_position


TAINT_FLAGS: Tuple[TaintFlagDef, ...] = (
    TaintFlagDef(
        Taint.PROPRIETARY_MODULE,
        Severity.INFO,
        "P",
        "G",
        "Proprietary modules were loaded",
        "Only GPL modules were loaded",
    ),
    TaintFlagDef(
        Taint.FORCED_MODULE,
        Severity.WARN,
        "F",
        SPACER,
        "Module was force loaded (e.g., insmod -f)",
    ),
    TaintFlagDef(
        Taint.CPU_OUT_OF_SPEC,
        Severity.WARN,
        "S",
        SPACER,
        "SMP kernel oops on an officially SMP incapable processor",
    ),
    TaintFlagDef(
        Taint.FORCED_RMMOD,
        Severity.ALERT,
        "R",
        SPACER,
        "Module was force unloaded (e.g., rmmod -f)",
    ),
    TaintFlagDef(
        Taint.MACHINE_CHECK,
        Severity.ALERT,
        "M",
        SPACER,
        "Processor reported a Machine Check Exception (hardware error)",
    ),
    TaintFlagDef(
        Taint.BAD_PAGE,
        Severity.ALERT,
        "B",
        SPACER,
        "Bad memory page referenced, or unexpected page flags encountered "
        "(possible hardware error)",
    ),
    TaintFlagDef(
        Taint.USER,
        Severity.WARN,
        "U",
        SPACER,
        "Taint requested by a userspace application",
    ),
    TaintFlagDef(
        Taint.DIE,
        Severity.ALERT,
        "D",
        SPACER,
        "Kernel OOPS or BUG triggered taint",
    ),
    TaintFlagDef(
        Taint.OVERRIDDEN_ACPI_TABLE,
        Severity.WARN,
        "A",
        SPACER,
        "ACPI Differentiated System Description Table overriden by user",
    ),
    TaintFlagDef(
        Taint.WARN,
        Severity.WARN,
        "W",
        SPACER,
        "Kernel warning triggered taint",
    ),
    TaintFlagDef(
        Taint.CRAP,
        Severity.WARN,
        "C",
        SPACER,
        "Module from drivers/staging was loaded",
    ),
    TaintFlagDef(
        Taint.FIRMWARE_WORKAROUND,
        Severity.WARN,
        "I",
        SPACER,
        "Workaround for a bug in platform firmware was applied",
    ),
    TaintFlagDef(
        Taint.OOT_MODULE,
        Severity.INFO,
        "O",
        SPACER,
        "Externally-built (out-of-tree) module was loaded",
    ),
    TaintFlagDef(
        Taint.UNSIGNED_MODULE,
        Severity.INFO,
        "E",
        SPACER,
        "Unsigned module was loaded",
    ),
    TaintFlagDef(
        Taint.SOFTLOCKUP,
        Severity.ALERT,
        "L",
        SPACER,
        "Soft lockup occurred",
    ),
    TaintFlagDef(
        Taint.LIVEPATCH,
        Severity.WARN,
        "K",
        SPACER,
        "Kernel was live-patched",
    ),
    TaintFlagDef(
        Taint.AUX,
        Severity.WARN,
        "X",
        SPACER,
        "Auxiliary taint (depending on Linux distribution)",
    ),
    TaintFlagDef(
        Taint.RANDSTRUCT,
        Severity.INFO,
        "T",
        SPACER,
        "Kernel was built with the struct randomization plugin",
    ),
)
