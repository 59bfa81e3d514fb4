"""Pytest configuration, Hypothesis profiles and shared fixtures."""

import pytest
from hypothesis import settings

from effectcenter.core.center import EffectCenter, MissingHandlerMode

# Register Hypothesis profiles
settings.register_profile("ci", max_examples=100)
settings.register_profile("dev", max_examples=20)

# Load dev profile by default, CI can override via --hypothesis-profile=ci
settings.load_profile("dev")


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio as the async backend for pytest-asyncio."""
    return "asyncio"


@pytest.fixture(autouse=True)
def fresh_singleton():
    """Give every test its own process-wide EffectCenter and clean it up afterwards."""
    EffectCenter._instance = None
    yield
    if EffectCenter._instance is not None:
        EffectCenter._instance.reset()
    EffectCenter._instance = None


@pytest.fixture
def center():
    """An isolated EffectCenter that fails loudly without a handler."""
    center = EffectCenter(missing_handler_mode=MissingHandlerMode.FAIL)
    yield center
    center.reset()
