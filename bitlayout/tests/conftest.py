"""Unit tests configuration file."""

import pytest

from bitlayout.item import DataType, Endianness, StructureItem


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def make_item():
    """Build a big endian UINT item, overriding any attribute by keyword."""

    def _make(name="test", bit_offset=0, bit_size=8, **kwargs):
        data_type = kwargs.pop("data_type", DataType.UINT)
        endianness = kwargs.pop("endianness", Endianness.BIG_ENDIAN)
        array_size = kwargs.pop("array_size", None)
        return StructureItem(
            name, bit_offset, bit_size, data_type, endianness, array_size, **kwargs
        )

    return _make
