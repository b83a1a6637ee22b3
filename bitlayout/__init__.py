"""Bitlayout - Field descriptors for packed binary packets."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bitlayout")
except PackageNotFoundError:
    __version__ = "(local)"
