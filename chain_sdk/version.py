"""
Version information for the Chain SDK.
"""
import importlib.metadata
import pathlib

import tomli

DEFAULT_VERSION = "1.2.0"

# Installed package metadata wins; a source checkout reads pyproject.toml
try:
    __version__ = importlib.metadata.version("chain-sdk")
except importlib.metadata.PackageNotFoundError:
    try:
        path = pathlib.Path(__file__).parent.parent / "pyproject.toml"
        with path.open("rb") as f:
            data = tomli.load(f)
        __version__ = data["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        __version__ = DEFAULT_VERSION
