"""
Package version, from the installed distribution or the source tree.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "timelock-sdk"
PYPROJECT = pathlib.Path(__file__).parent.parent / "pyproject.toml"
UNKNOWN_VERSION = "0.0.0"


def _read_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        pass

    # running from a checkout
    try:
        with PYPROJECT.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return UNKNOWN_VERSION


__version__ = _read_version()
