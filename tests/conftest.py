# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
import logging
from pathlib import Path
from typing import Callable
from typing import Union

import pytest

import taintinfo.config as taint_config
from taintinfo.format import Style
from taintinfo.logging import ROOT_LOGGER


LIVE = False


def pytest_addoption(parser):
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Also run tests which read the running kernel's taint status",
    )


def pytest_configure(config):
    global LIVE
    # Most tests only exercise the decoder against fixed values. Tests which
    # read /proc/sys/kernel/tainted are marked live and only run with --live.
    config.addinivalue_line("markers", "live: requires the running kernel")
    LIVE = config.getoption("live")


def pytest_runtest_setup(item: pytest.Item):
    if not LIVE and any(m.name == "live" for m in item.iter_markers()):
        pytest.skip("test reads the running kernel, use --live")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    # Don't let the configuration of the machine running the tests leak in
    monkeypatch.setattr(taint_config, "CONFIG_PATHS", [])
    monkeypatch.delenv("NO_COLOR", raising=False)
    taint_config.get_config.cache_clear()
    yield
    taint_config.get_config.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    log = logging.getLogger(ROOT_LOGGER)
    for handler in list(log.handlers):
        log.removeHandler(handler)
    log.setLevel(logging.NOTSET)


@pytest.fixture
def config_file(tmp_path, monkeypatch) -> Callable[[str], Path]:
    """Write an ini file and make it the only configuration file"""

    def write(text: str) -> Path:
        path = tmp_path / "taintinfo.ini"
        path.write_text(text)
        monkeypatch.setattr(taint_config, "CONFIG_PATHS", [path])
        taint_config.get_config.cache_clear()
        return path

    return write


@pytest.fixture
def taint_file(tmp_path) -> Callable[[Union[str, bytes]], str]:
    """Create a stand-in for /proc/sys/kernel/tainted"""

    def write(data: Union[str, bytes]) -> str:
        path = tmp_path / "tainted"
        if isinstance(data, str):
            path.write_text(data)
        else:
            path.write_bytes(data)
        return str(path)

    return write


@pytest.fixture
def no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def plain_style() -> Style:
    return Style(False)


@pytest.fixture
def color_style() -> Style:
    return Style(True)
