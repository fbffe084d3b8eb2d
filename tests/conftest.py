"""
Shared fixtures for the triage test suite.

The packaged scenario library is loaded once per session; engines are
built with the simulated delay disabled so async tests run instantly.
"""

from datetime import datetime, timezone

import pytest

from src.email_triage import (
    FallbackExtractor,
    ResponseTemplateGenerator,
    ScenarioLibrary,
    TriageEngine,
)

FIXED_TIME = datetime(2024, 3, 15, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def library():
    """The scenario library shipped with the package."""
    return ScenarioLibrary.load()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def engine(library, fixed_clock):
    """Engine with no artificial latency and a frozen fallback clock."""
    return TriageEngine(
        library,
        fallback=FallbackExtractor(clock=fixed_clock),
        templates=ResponseTemplateGenerator(clock=lambda: datetime(2024, 3, 15, 9, 30, 0)),
        delay_window=(0.0, 0.0),
    )


@pytest.fixture
def billing_email(library):
    return library.example_input("support-billing")


@pytest.fixture
def technical_email(library):
    return library.example_input("technical-support")
