# -*- coding: utf-8 -*-

"""
Shared fixtures for Tether tests.

Nothing here touches the network: definitions use an inline echo adapter
or a recording perform operation instead of the default httpx adapter.
"""

from dataclasses import replace

import pytest


class RecordingPerform:
    """Perform operation that records (api, client, descriptor) and returns the descriptor."""

    def __init__(self):
        self.calls = []

    def __call__(self, api, client, descriptor):
        self.calls.append((api, client, descriptor))
        return descriptor

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def recording_perform():
    """Fresh RecordingPerform for each test."""
    return RecordingPerform()


@pytest.fixture
def echo_adapter():
    """Inline adapter answering 200 and echoing the request body."""

    def adapter(env):
        return replace(env, status=200, headers=(("x-echo", "1"),))

    return adapter


@pytest.fixture
def no_default_adapter(monkeypatch):
    """Point the process-wide default adapter at a unit that needs no network."""

    class StubAdapter:
        @staticmethod
        def call(env, options):
            return replace(env, status=204)

    monkeypatch.setattr("tether.config.DEFAULT_ADAPTER", StubAdapter)
    return StubAdapter
