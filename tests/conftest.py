"""Shared fixtures: a temp config store and fake collaborators."""

import pytest

from modelgate.config.store import ConfigStore
from modelgate.providers import ValidationOutcome
from modelgate.providers.errors import FailureKind

from .helpers import RecordingClient, SlowClient, StubValidator


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / "config.json")


@pytest.fixture
def ok_validator():
    return StubValidator(ValidationOutcome.success())


@pytest.fixture
def failing_validator():
    return StubValidator(
        ValidationOutcome.failure(
            "Invalid API key or unauthorized",
            FailureKind.UNAUTHORIZED,
        ),
    )


@pytest.fixture
def recording_client():
    return RecordingClient()


@pytest.fixture
def slow_client():
    return SlowClient()
