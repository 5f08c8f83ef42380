"""
Pytest configuration and shared fixtures for all dimexpand tests.

The template parser builds its Lark table once per session (and caches it
on disk); shape doubles are cheap and created per test.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from dimexpand.frontend.parser import TemplateParser
from dimexpand.passes.base import ExpansionContext
from dimexpand.runtime.shape import NumpyShape, StaticShape, SymbolicShape


# =============================================================================
# Session-scoped fixtures
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """Stateless between parses; safe to share across all tests."""
    return TemplateParser()


@pytest.fixture
def parser(session_parser):
    return session_parser


@pytest.fixture
def tpl(session_parser):
    """Shorthand: tpl("d -> i_d") parses a template."""
    return session_parser.parse_template


@pytest.fixture
def expr(session_parser):
    """Shorthand: expr("A[i1, i2]") parses any expression."""
    return session_parser.parse


# =============================================================================
# Expansion state and shapes
# =============================================================================

@pytest.fixture
def ctx():
    return ExpansionContext()


@pytest.fixture
def static_shape():
    """4 x 5 x 6, column-major strides 1, 4, 20."""
    return StaticShape([4, 5, 6])


@pytest.fixture
def numpy_array():
    return np.arange(4 * 5 * 6).reshape((4, 5, 6), order="F")


@pytest.fixture
def numpy_shape(numpy_array):
    return NumpyShape(numpy_array)


@pytest.fixture
def symbolic_shape():
    return SymbolicShape("A")
