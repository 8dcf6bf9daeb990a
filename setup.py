# Copyright (c) 2023, Oracle and/or its affiliates.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/
import os.path
import shutil
import subprocess

from setuptools import setup

long_description = "Decode and display the Linux kernel taint status"

VERSION = "1.0.0"
VERSION_PY = "taintinfo/_version.py"


def get_version():
    # In a git checkout, record the commit so that development builds can be
    # told apart. An sdist already carries its _version.py.
    version = VERSION
    if os.path.exists(".git") and shutil.which("git"):
        try:
            commit = subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
                universal_newlines=True,
            ).strip()
        except subprocess.CalledProcessError:
            commit = ""
        if commit:
            version += f"+g{commit}"
    elif os.path.exists(VERSION_PY):
        return _read_version() or version

    new_version_py = f'__version__ = "{version}"\n'
    if _read_version() != version:
        with open(VERSION_PY, "w") as f:
            f.write(new_version_py)
    return version


def _read_version():
    prefix = '__version__ = "'
    try:
        with open(VERSION_PY, "r") as f:
            line = f.readline().strip()
    except FileNotFoundError:
        return None
    if line.startswith(prefix) and line.endswith('"'):
        return line[len(prefix) : -1]
    return None


setup(
    name="taintinfo",
    version=get_version(),
    description="Kernel taint query utility",
    long_description=long_description,
    install_requires=[
        "drgn>=0.0.24",
    ],
    extras_require={
        "test": ["pytest"],
    },
    author="Oracle Linux Sustaining Engineering Team",
    license="UPL",
    packages=["taintinfo"],
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Universal Permissive License (UPL)",
    ],
    keywords="kernel taint",
    entry_points={
        "console_scripts": [
            "taintinfo=taintinfo.cli:main",
            "taintinfo-vmcore=taintinfo.vmcore:main",
        ],
    },
)
