import os

# Keep game loggers quiet unless a test asks otherwise
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest


class FixedSource:
    """Random source that always draws the same value and records each call."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.value


@pytest.fixture
def fixed_source():
    return FixedSource
