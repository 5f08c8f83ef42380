"""
Tests for the error taxonomy and its messages.
"""

import pytest

from dimexpand.shared.errors import (
    DimExpandError, DimExpandImplementationError, ExpansionError,
    ExtractionArityError, InvalidDimensionality, MalformedIndexedName,
    ShapeQueryFailed, TemplateShadowingError, TemplateSyntaxError,
)
from dimexpand.shared.source_location import SourceLocation


class TestHierarchy:
    @pytest.mark.parametrize("error_class", [
        InvalidDimensionality, MalformedIndexedName, ShapeQueryFailed, TemplateShadowingError,
    ])
    def test_expansion_errors(self, error_class):
        assert issubclass(error_class, ExpansionError)
        assert issubclass(error_class, DimExpandError)

    def test_runtime_and_front_end_errors_are_not_expansion_errors(self):
        assert not issubclass(ExtractionArityError, ExpansionError)
        assert not issubclass(TemplateSyntaxError, ExpansionError)
        assert issubclass(ExtractionArityError, DimExpandError)
        assert issubclass(TemplateSyntaxError, DimExpandError)

    def test_implementation_error_is_separate(self):
        assert not issubclass(DimExpandImplementationError, DimExpandError)

    def test_error_codes_are_distinct(self):
        codes = [cls.error_code for cls in (
            InvalidDimensionality, MalformedIndexedName, TemplateShadowingError,
            ShapeQueryFailed, ExtractionArityError, TemplateSyntaxError,
        )]
        assert len(set(codes)) == len(codes)


class TestMessages:
    def test_invalid_dimensionality(self):
        err = InvalidDimensionality(0, "nref")
        assert err.n == 0
        assert err.directive == "nref"
        assert "nref" in str(err)
        assert "positive integer" in str(err)

    def test_malformed_indexed_name_with_location(self):
        err = MalformedIndexedName("q_x", "no binder", SourceLocation("t.tpl", 1, 6))
        text = str(err)
        assert text.startswith("error[E0102]: malformed indexed name 'q_x'")
        assert "--> t.tpl:1:6" in text

    def test_message_without_location(self):
        err = TemplateShadowingError("d")
        assert err.location is None
        assert "'d'" in str(err)
        assert "-->" not in str(err)

    def test_shape_query_failed(self):
        err = ShapeQueryFailed("size", 2, "boom")
        assert str(err) == "shape query 'size' failed for dimension 2: boom"
        assert ShapeQueryFailed("dimension_count").dimension is None

    def test_extraction_arity(self):
        err = ExtractionArityError(3, 2)
        assert (err.expected, err.actual) == (3, 2)
        assert "3" in str(err) and "2" in str(err)

    def test_implementation_error(self):
        assert str(DimExpandImplementationError("broken")) == "[E9999] broken"


class TestSourceLocation:
    def test_str(self):
        assert str(SourceLocation("f.tpl", 3, 9)) == "f.tpl:3:9"

    def test_frozen(self):
        loc = SourceLocation("f.tpl", 1, 1)
        with pytest.raises(Exception):
            loc.line = 2
