"""Pytest fixtures for multisource tests."""

import pytest

from multisource import Composite


class Walker:
    """Plain object source with an instance attribute and a method."""

    def __init__(self):
        self.legs = 2

    def walk(self):
        return "walking"


class Swimmer:
    """Plain object source sharing ``legs`` with Walker."""

    def __init__(self):
        self.legs = 0
        self.fins = 2

    def swim(self):
        return "swimming"


@pytest.fixture
def source_a():
    """Mapping source defining foo and a."""
    return {"foo": "A.foo", "a": 1}


@pytest.fixture
def source_b():
    """Mapping source defining foo and b."""
    return {"foo": "B.foo", "b": 2}


@pytest.fixture
def composite(source_a, source_b):
    """Composite over [source_a, source_b] with default flags."""
    return Composite([source_a, source_b])


@pytest.fixture
def walker():
    return Walker()


@pytest.fixture
def swimmer():
    return Swimmer()


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run in an empty directory with no MULTISOURCE_* variables set."""
    import os

    for name in list(os.environ):
        if name.startswith("MULTISOURCE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
