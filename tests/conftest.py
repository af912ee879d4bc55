"""Shared pytest fixtures for the UHMLX test suite."""

import copy
import logging

import pytest

from uhmlx.errors import UhmlxLoaderError
from uhmlx.lang.parser import parse_source


class MemoryLoaders:
    """In-memory component and data loaders that record every call."""

    def __init__(self, components=None, data=None):
        self.components = dict(components or {})
        self.data = dict(data or {})
        self.component_calls = []
        self.data_calls = []

    def load_component(self, reference):
        self.component_calls.append(reference)
        if reference not in self.components:
            raise UhmlxLoaderError(f"Unknown component {reference}")
        return [parse_source(self.components[reference], path=reference)]

    def load_data(self, reference):
        self.data_calls.append(reference)
        if reference not in self.data:
            raise UhmlxLoaderError(f"Unknown data file {reference}")
        return copy.deepcopy(self.data[reference])


@pytest.fixture
def memory_loaders():
    """Factory building :class:`MemoryLoaders` instances."""
    return MemoryLoaders


@pytest.fixture
def items_data():
    return {
        "data/items.json": {
            "items": [
                {"Name": "Item 1", "Flag": True},
                {"Name": "Item 2", "Flag": False},
                {"Name": "Item 3", "Flag": True},
            ]
        }
    }


@pytest.fixture(autouse=True)
def restore_package_logger():
    """The CLI reconfigures the ``uhmlx`` logger; undo it after each test."""
    package_logger = logging.getLogger("uhmlx")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
