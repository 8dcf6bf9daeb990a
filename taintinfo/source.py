# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Helpers for reading the kernel taint status
"""
from typing import Optional
from typing import Union

from drgn import Program

from taintinfo.config import get_config

TAINT_INFO_FILE = "/proc/sys/kernel/tainted"

# The procfs file holds a single decimal number, this is plenty
BFR_SIZE = 64

U64_MAX = (1 << 64) - 1


class TaintSourceError(Exception):
    """
    Base class for failures to acquire a taint value

    :param source: the file (or other source) the value was read from
    """

    message = "Cannot get taint status from \"{source}\""

    def __init__(
        self,
        source: str,
        detail: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(source, detail)
        self.source = source
        self.detail = detail
        if message is not None:
            self.message = message

    def __str__(self) -> str:
        msg = self.message.format(source=self.source)
        if self.detail:
            msg += f": {self.detail}"
        return msg


class SourceUnavailable(TaintSourceError):
    message = "Cannot open input file \"{source}\""


class SourceUnreadable(TaintSourceError):
    message = "Cannot read taint status from input file \"{source}\""


class SourceMalformed(TaintSourceError):
    message = "Input file \"{source}\" contains unparsable data"


def default_taint_file() -> str:
    """Return the taint status file, as configured"""
    return get_config().get(
        "taintinfo", "taint_file", fallback=TAINT_INFO_FILE
    )


def parse_taint_value(data: Union[bytes, str], source: str = "<input>") -> int:
    """
    Parse the contents of the taint status file

    Only the first line is considered. It must consist solely of decimal
    digits, and the value must fit in 64 bits.

    :param data: file contents
    :param source: name of the data's origin, for error messages
    :returns: the taint mask
    """
    if isinstance(data, str):
        data = data.encode("ascii", errors="replace")
    line = data.split(b"\n", 1)[0]
    # bytes.isdigit() only accepts ASCII digits, so signs, whitespace and
    # unicode digits are all rejected here
    if not line or not line.isdigit():
        raise SourceMalformed(source)
    value = int(line)
    if value > U64_MAX:
        raise SourceMalformed(source)
    return value


def read_taint_file(path: Optional[str] = None) -> int:
    """
    Read and parse the taint status file

    :param path: file to read, or the configured file if not given
    :returns: the taint mask
    :raises SourceUnavailable: the file could not be opened
    :raises SourceUnreadable: an I/O error occurred reading the file
    :raises SourceMalformed: the file contents are not a valid taint value
    """
    if path is None:
        path = default_taint_file()
    try:
        f = open(path, "rb")
    except OSError as e:
        raise SourceUnavailable(path) from e
    with f:
        try:
            data = f.read(BFR_SIZE - 1)
        except OSError as e:
            raise SourceUnreadable(path, "I/O error") from e
    return parse_taint_value(data, path)


def read_program_taint(prog: Program) -> int:
    """
    Read the taint mask of a kernel via drgn

    :param prog: the kernel (live or core dump)
    :returns: the value of the ``tainted_mask`` variable
    :raises SourceUnavailable: the kernel has no ``tainted_mask`` symbol
    """
    try:
        return int(prog["tainted_mask"]) & U64_MAX
    except KeyError:
        pass
    # Without debuginfo there is no type for the variable, but the ELF symbol
    # table still locates it. It is an unsigned long.
    try:
        address = prog.symbol("tainted_mask").address
    except LookupError as e:
        raise SourceUnavailable(
            "tainted_mask", message="Cannot find kernel variable \"{source}\""
        ) from e
    return prog.read_word(address) & U64_MAX
