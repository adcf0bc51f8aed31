# -*- coding: utf-8 -*-

"""
Unit tests for the reference execution engine.
Tests step ordering, unit/function invocation and Env construction.
"""

from dataclasses import replace

from tether.client import Client
from tether.engine import env_from_descriptor, execute, run, run_adapter
from tether.models import CallFunction, CallUnit, Env, RequestDescriptor


def _trace(env, name):
    return replace(env, opts=env.opts + (("trace", name),))


class Tag:
    """Middleware unit tagging the env before and after the rest of the chain."""

    @staticmethod
    def call(env, next, options):
        env = _trace(env, f"{options}:in")
        env = next(env)
        return _trace(env, f"{options}:out")


class RecordingAdapter:
    @staticmethod
    def call(env, options):
        return replace(_trace(env, f"adapter:{options}"), status=200)


class FakeApi:
    """Minimal stand-in for ApiClient as seen by execute()."""

    name = "FakeApi"

    def __init__(self, middleware, adapter):
        self.middleware = middleware
        self.adapter = adapter


def _traces(env):
    return [value for key, value in env.opts if key == "trace"]


class TestRun:
    """Tests for run() and run_adapter()."""

    def test_units_wrap_the_rest_of_the_chain(self):
        """
        What it does: Verifies units run outer-to-inner and unwind in reverse.
        """
        env = Env(method="get", url="/")
        steps = (CallUnit(Tag, "a"), CallUnit(Tag, "b"))

        result = run(env, steps, CallUnit(RecordingAdapter, "x"))

        print(f"Trace: {_traces(result)}")
        assert _traces(result) == ["a:in", "b:in", "adapter:x", "b:out", "a:out"]
        assert result.status == 200

    def test_inline_function_runs_before_the_rest(self):
        """
        What it does: Verifies inline middleware transforms the env then continues.
        """
        env = Env(method="get", url="/")
        steps = (CallFunction(lambda e: _trace(e, "fn")), CallUnit(Tag, "a"))

        result = run(env, steps, CallUnit(RecordingAdapter, None))

        assert _traces(result) == ["fn", "a:in", "adapter:None", "a:out"]

    def test_inline_adapter(self):
        """
        What it does: Verifies an inline adapter is called with the env only.
        """
        result = run_adapter(Env(method="get", url="/"), CallFunction(lambda e: replace(e, status=418)))

        assert result.status == 418


class TestExecute:
    """Tests for execute()."""

    def test_client_steps_surround_definition_middleware(self):
        """
        What it does: Verifies pre -> middleware -> post -> adapter ordering.
        """
        api = FakeApi((CallUnit(Tag, "mw"),), CallUnit(RecordingAdapter, "default"))
        client = Client(pre=(CallUnit(Tag, "pre"),), post=(CallUnit(Tag, "post"),))
        descriptor = RequestDescriptor(method="get", url="/users")

        result = execute(api, client, descriptor)

        assert _traces(result) == [
            "pre:in",
            "mw:in",
            "post:in",
            "adapter:default",
            "post:out",
            "mw:out",
            "pre:out",
        ]
        assert result.api is api
        assert result.client is client

    def test_env_from_descriptor(self):
        """
        What it does: Verifies absent descriptor fields become empty pairs.
        """
        descriptor = RequestDescriptor(
            method="post",
            url="/users",
            headers=(("accept", "application/json"),),
            body={"name": "Jon"},
        )

        env = env_from_descriptor(descriptor)

        assert env.method == "post"
        assert env.query == ()
        assert env.headers == (("accept", "application/json"),)
        assert env.body == {"name": "Jon"}
        assert env.status is None
