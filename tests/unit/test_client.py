# -*- coding: utf-8 -*-

"""
Unit tests for runtime client composition.
Tests compose(), Client.wrap() and Client.plan().
"""

import pytest

from tether.client import DEFAULT_CLIENT, Client, compose
from tether.errors import DeprecatedHeaderShape, UnresolvedLocalReference
from tether.models import CallFunction, CallUnit


class BaseUrl:
    @staticmethod
    def call(env, next, options):
        return next(env)


class Headers:
    accepts_headers = True

    @staticmethod
    def call(env, next, options):
        return next(env)


class Logger(BaseUrl):
    pass


def stamp(env):
    return env


class TestCompose:
    """Tests for compose(pre, post)."""

    def test_pre_and_post_compiled_in_order(self):
        """
        What it does: Verifies both lists are compiled without reordering.
        Purpose: pre/post read back exactly as declared.
        """
        client = compose(
            [(BaseUrl, "https://api.example.com"), (Headers, [("authorization", "token xyz")])],
            [Logger, stamp],
        )

        print(f"pre={client.pre} post={client.post}")
        assert client.pre == (
            CallUnit(BaseUrl, "https://api.example.com"),
            CallUnit(Headers, [("authorization", "token xyz")]),
        )
        assert client.post == (CallUnit(Logger, None), CallFunction(stamp))

    def test_lists_do_not_leak_into_each_other(self):
        """
        What it does: Verifies an empty post stays empty when pre is populated.
        """
        client = compose([Logger])

        assert client.pre == (CallUnit(Logger, None),)
        assert client.post == ()

    def test_compose_twice_is_equal(self):
        """
        What it does: Verifies composition is deterministic.
        """
        assert compose([Logger], [stamp]) == compose([Logger], [stamp])

    def test_client_is_frozen(self):
        """
        What it does: Verifies a composed Client cannot be modified.
        """
        client = compose([Logger])

        with pytest.raises(AttributeError):
            client.pre = ()

    def test_local_name_fails_at_compose_site(self):
        """
        What it does: Verifies errors point at the compose() call.
        """
        with pytest.raises(UnresolvedLocalReference) as exc_info:
            compose(["json"])

        assert exc_info.value.site.filename == __file__
        assert exc_info.value.site.scope == "test_local_name_fails_at_compose_site"

    def test_explicit_scope(self):
        """
        What it does: Verifies a scope name can be given for diagnostics.
        """
        with pytest.raises(UnresolvedLocalReference) as exc_info:
            compose([], ["json"], scope="github_client")

        assert exc_info.value.site.scope == "github_client"

    def test_header_mapping_rejected(self):
        """
        What it does: Verifies the header shape rule also applies to compose().
        """
        with pytest.raises(DeprecatedHeaderShape):
            compose([(Headers, {"authorization": "token xyz"})])


class TestClientLayering:
    """Tests for Client.wrap() and Client.plan()."""

    def test_wrap_outer_pre_first_outer_post_last(self):
        """
        What it does: Verifies nested clients form an onion.
        Purpose: outer.pre, inner.pre ... inner.post, outer.post.
        """
        outer = Client(pre=(CallUnit("outer-pre"),), post=(CallUnit("outer-post"),))
        inner = Client(pre=(CallUnit("inner-pre"),), post=(CallUnit("inner-post"),))

        nested = outer.wrap(inner)

        assert nested.pre == (CallUnit("outer-pre"), CallUnit("inner-pre"))
        assert nested.post == (CallUnit("inner-post"), CallUnit("outer-post"))

    def test_plan_surrounds_definition_middleware(self):
        """
        What it does: Verifies plan() is pre + middleware + post.
        """
        client = Client(pre=(CallUnit("pre"),), post=(CallUnit("post"),))

        plan = client.plan((CallUnit("mw1"), CallUnit("mw2")))

        assert plan == (CallUnit("pre"), CallUnit("mw1"), CallUnit("mw2"), CallUnit("post"))

    def test_default_client_adds_nothing(self):
        """
        What it does: Verifies the default client leaves the plan unchanged.
        """
        middleware = (CallUnit("mw1"),)

        assert DEFAULT_CLIENT.plan(middleware) == middleware
