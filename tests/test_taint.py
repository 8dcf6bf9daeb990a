# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
from taintinfo.taint import flag_value
from taintinfo.taint import Severity
from taintinfo.taint import SPACER
from taintinfo.taint import Taint
from taintinfo.taint import TAINT_FLAGS


def test_table_order():
    bits = [flag.bit_position for flag in TAINT_FLAGS]
    assert bits == sorted(set(bits))
    assert bits == list(Taint)


def test_table_chars():
    chars = [flag.set_char for flag in TAINT_FLAGS]
    assert "".join(chars) == "PFSRMBUDAWCIOELKXT"
    for flag in TAINT_FLAGS:
        assert len(flag.set_char) == 1
        assert flag.set_char.isupper()
        assert flag.set_description


def test_only_gpl_flag_has_unset_state():
    with_unset = [flag for flag in TAINT_FLAGS if flag.has_unset_char]
    assert len(with_unset) == 1
    gpl = with_unset[0]
    assert gpl.bit_position == Taint.PROPRIETARY_MODULE
    assert gpl.unset_char == "G"
    assert gpl.unset_description == "Only GPL modules were loaded"
    for flag in TAINT_FLAGS[1:]:
        assert flag.unset_char == SPACER
        assert flag.unset_description is None


def test_severities():
    alerts = {f.set_char for f in TAINT_FLAGS if f.severity == Severity.ALERT}
    assert alerts == {"R", "M", "B", "D", "L"}
    infos = {f.set_char for f in TAINT_FLAGS if f.severity == Severity.INFO}
    assert infos == {"P", "O", "E", "T"}


def test_flag_value():
    assert flag_value(0) == 1
    assert flag_value(14) == 16384
    assert flag_value(63) == 1 << 63
    assert TAINT_FLAGS[12].value == 4096


def test_decode_names():
    value = (1 << Taint.PROPRIETARY_MODULE) | (1 << Taint.OOT_MODULE)
    assert Taint.decode(value) == "PROPRIETARY_MODULE|OOT_MODULE"
