# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
import io

import pytest

from taintinfo import format
from taintinfo.taint import Severity


def test_format_hex():
    assert format.format_hex(0) == "0000000000000000"
    assert format.format_hex(0x491) == "0000000000000491"
    assert format.format_hex(0xDEADBEEF) == "00000000DEADBEEF"
    assert format.format_hex((1 << 64) - 1) == "FFFFFFFFFFFFFFFF"


def test_severity_format():
    assert format.severity_format(Severity.INFO) == format.F_INFO
    assert format.severity_format(Severity.WARN) == format.F_WARN
    assert format.severity_format(Severity.ALERT) == format.F_ALERT
    for sev in Severity:
        assert format.severity_format(sev)


def test_style():
    style = format.Style(True)
    assert style.bold("x") == "\x1b[1mx\x1b[0m"
    assert style.severity(Severity.ALERT, "D") == "\x1b[1;31mD\x1b[0m"
    plain = format.Style(False)
    assert plain.bold("x") == "x"
    assert plain.severity(Severity.ALERT, "D") == "D"


def test_make_style_default():
    assert format.make_style().enabled


def test_make_style_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "")
    assert not format.make_style().enabled


@pytest.mark.parametrize(
    "mode,enabled", [("always", True), ("never", False), ("Never", False)]
)
def test_make_style_config(mode, enabled, config_file):
    config_file(f"[taintinfo]\ncolor = {mode}\n")
    assert format.make_style().enabled == enabled


def test_make_style_auto(config_file):
    config_file("[taintinfo]\ncolor = auto\n")
    assert not format.make_style(io.StringIO()).enabled


def test_make_style_invalid(config_file):
    config_file("[taintinfo]\ncolor = sometimes\n")
    with pytest.raises(ValueError):
        format.make_style()
