"""Shared test fixtures for the Hazel test suite."""

import pytest

from hazel import Registry


class ErrorRecorder:
    """Error handler that remembers every error it receives."""

    def __init__(self):
        self.errors = []

    def __call__(self, registry, error):
        self.errors.append(error)

    @property
    def last(self):
        return self.errors[-1] if self.errors else None


def reflect(registry, x=None):
    return x


def noop(registry, *args):
    pass


@pytest.fixture
def registry():
    """Create an empty registry."""
    return Registry()


@pytest.fixture
def recorder(registry):
    """Register an error handler on the registry and return it."""
    recorder = ErrorRecorder()
    assert registry.set("error", recorder)
    return recorder
