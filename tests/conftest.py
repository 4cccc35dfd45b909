"""Pytest configuration and shared fixtures for the panbridge test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import copy
import logging
from typing import Any, Generator

import pytest
from utils import SAMPLE_DOCUMENT, FakePandocEngine

from panbridge.ast import PandocAst


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - require a pandoc executable")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def fake_engine() -> FakePandocEngine:
    """Provide an engine with canned extension lists for every supported dialect."""
    return FakePandocEngine()


@pytest.fixture
def sample_document_data() -> dict[str, Any]:
    """Provide a fresh copy of the sample pandoc JSON document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_ast(sample_document_data) -> PandocAst:
    """Provide the sample document converted to tokens."""
    return PandocAst.from_dict(sample_document_data)


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Remove handlers installed by configure_logging and restore logger levels."""
    root = logging.getLogger()
    level = root.level
    asyncio_level = logging.getLogger("asyncio").level
    try:
        yield root
    finally:
        for handler in list(root.handlers):
            # pytest's own capture handlers are subclasses and stay in place
            if type(handler) in (logging.StreamHandler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
        logging.getLogger("asyncio").setLevel(asyncio_level)
