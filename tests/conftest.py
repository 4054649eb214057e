"""Shared fixtures for orgmap tests."""

import pytest

from orgmap.models.channel import Channel
from orgmap.models.identity import Identity
from orgmap.resolution.diagnostics import ErrorCollector


@pytest.fixture
def identities():
    """A small user directory."""
    return [
        Identity(handle="alice", id="U001", display_name="Alice Anders"),
        Identity(handle="bob", id="U002", display_name="Bob Berg"),
        Identity(handle="carol", id="U003", display_name="Carol Cruz"),
        Identity(handle="erin", id="U005", display_name="Erin Eke"),
    ]


@pytest.fixture
def errors():
    return ErrorCollector()


@pytest.fixture
def directory_rows():
    """Lead table rows: Alice leads Bob and Carol, Carol leads Erin."""
    return [
        ["Alice Anders", "alice", ""],
        ["Bob Berg", "bob", "Alice Anders"],
        ["Carol Cruz", "carol", "Alice Anders"],
        ["Erin Eke", "erin", "Carol Cruz"],
    ]


@pytest.fixture
def channels():
    return [
        Channel(name="f-raiders", topic="lead @bob backup @carol", members=["bob", "carol", "dave"]),
        Channel(name="g-python", topic="Owner: @alice", members=["U001", "U005"]),
        Channel(name="x-other", topic="@alice", members=["alice"]),
    ]
