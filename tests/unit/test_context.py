"""
Tests for ExpansionContext.
"""

import pytest

from dimexpand.shared.errors import TemplateShadowingError


class TestBindings:
    def test_bind_and_release(self, ctx):
        with ctx.bind("d", 3):
            assert ctx.is_bound("d")
            assert ctx.value_of("d") == 3
            assert ctx.depth == 1
        assert not ctx.is_bound("d")
        assert ctx.value_of("d") is None

    def test_nested_distinct_binders(self, ctx):
        with ctx.bind("d", 1):
            with ctx.bind("e", 2):
                assert ctx.active_bindings() == {"d": 1, "e": 2}
            assert ctx.active_bindings() == {"d": 1}

    def test_rebinding_raises(self, ctx):
        with ctx.bind("d", 1):
            with pytest.raises(TemplateShadowingError):
                with ctx.bind("d", 2):
                    pass
            assert ctx.value_of("d") == 1

    def test_released_on_exception(self, ctx):
        with pytest.raises(RuntimeError):
            with ctx.bind("d", 1):
                raise RuntimeError("boom")
        assert ctx.depth == 0


class TestGensym:
    def test_fresh_and_verbatim(self, ctx):
        first = ctx.gensym("acc")
        second = ctx.gensym("acc")
        assert first != second
        assert first.verbatim
        assert first.name.startswith("__acc")
