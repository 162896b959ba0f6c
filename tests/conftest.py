"""Shared fixtures."""

import io

import pytest
from hypothesis import HealthCheck, settings

from refinedfloats.analysis.catalog import DEFAULT_CATALOG
from refinedfloats.core.classification import Classification
from refinedfloats.core.sign import SignRange
from refinedfloats.logging import LogLevel, configure_logging, get_logger, set_logger

settings.register_profile(
    "refinedfloats",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("refinedfloats")


@pytest.fixture(autouse=True)
def quiet_logger():
    """Route the global logger to a buffer for the duration of a test."""
    previous = get_logger()
    buffer = io.StringIO()
    logger = configure_logging(level=LogLevel.NORMAL, color=False, stream=buffer)
    yield logger
    logger.close()
    set_logger(previous)


@pytest.fixture
def log_buffer(quiet_logger):
    return quiet_logger._stream


@pytest.fixture
def catalog():
    return DEFAULT_CATALOG


@pytest.fixture
def spf():
    """Strictly positive finite."""
    return Classification(range=SignRange.POSITIVE_ONLY)


@pytest.fixture
def snf():
    """Strictly negative finite."""
    return Classification(range=SignRange.NEGATIVE_ONLY)
