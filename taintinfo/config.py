# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
"""
Configuration support

The taint utility needs almost no configuration, but the location of the taint
status file, terminal colors and the log level can be set in an ini file:

.. code-block:: ini

    [taintinfo]
    taint_file = /proc/sys/kernel/tainted
    color = always

    [logging]
    level = WARNING
"""
import configparser
from functools import lru_cache
from pathlib import Path

__all__ = ("get_config",)


CONFIG_PATHS = [
    Path("/etc/taintinfo.ini"),
    Path.home() / ".config/taintinfo.ini",
]


@lru_cache(maxsize=1)
def get_config() -> configparser.ConfigParser:
    """
    Return taintinfo configuration information
    """
    config = configparser.ConfigParser()
    config.read(CONFIG_PATHS)
    return config
