"""
End-to-end: expand templates, compile them with the Python backend and run
the result against numpy arrays.
"""

import numpy as np
import pytest

from dimexpand.backends.python import compile_function
from dimexpand.expanders import nall, nexprs, nextract, nif, nlinear, nloops, nref, ntuple
from dimexpand.runtime.cartesian import CartesianEnumerator, cartesian_indices
from dimexpand.runtime.shape import NumpyShape, StaticShape, SymbolicShape
from dimexpand.shared.errors import ExtractionArityError
from dimexpand.shared.nodes import Assign, Block, IndexAccess, Literal, Symbol, TupleExpr
from tests.test_utils import run_expansion


def zero_based(index):
    return tuple(i - 1 for i in index)


class TestLoops:
    def test_sum_with_numpy_shape(self, expr, numpy_array):
        body = expr("s = s + A[i1, i2, i3]")
        loops = nloops(3, "i", "A", body, shape=NumpyShape(numpy_array))
        total = run_expansion(Block([Assign(Symbol("s"), Literal(0)), loops]),
                              params=["A"], args=[numpy_array], returns=Symbol("s"))
        assert total == numpy_array.sum()

    @pytest.mark.parametrize("shape", [(2, 3), (4, 1), (1, 5)])
    def test_symbolic_shape_adapts_at_run_time(self, expr, shape):
        body = expr("s = s + A[i1, i2]")
        loops = nloops(2, "i", "A", body, shape=SymbolicShape("A"))
        array = np.arange(int(np.prod(shape))).reshape(shape)
        total = run_expansion(Block([Assign(Symbol("s"), Literal(0)), loops]),
                              params=["A"], args=[array], returns=Symbol("s"))
        assert total == array.sum()

    def test_visit_order_matches_enumerator(self, expr):
        body = expr("seen = seen + ((i1, i2, i3),)")
        loops = nloops(3, "i", "A", body, shape=StaticShape([2, 3, 2]))
        seen = run_expansion(Block([Assign(Symbol("seen"), TupleExpr([])), loops]),
                             returns=Symbol("seen"))
        assert list(seen) == list(cartesian_indices([2, 3, 2]))

    def test_pre_and_post_hooks(self, tpl, expr):
        # Column sums: r is reset before each pass over i1 and collected after it
        body = expr("r = r + A[i1, i2]")
        loops = nloops(2, "i", tpl("d -> 1..size(A, d)"), body,
                       pre=tpl("d -> d == 2 ? r = 0 : {}"),
                       post=tpl("d -> d == 2 ? out = out + (r,) : {}"))
        array = np.arange(12).reshape(3, 4)
        out = run_expansion(Block([Assign(Symbol("out"), TupleExpr([])), loops]),
                            params=["A"], args=[array], returns=Symbol("out"))
        assert list(out) == list(array.sum(axis=0))


class TestIndexing:
    def test_nref(self, numpy_array):
        fn_args = ["A", "i1", "i2", "i3"]
        for index in [(1, 1, 1), (2, 3, 4), (4, 5, 6)]:
            value = run_expansion(nref(3, "A", "i"), params=fn_args, args=[numpy_array, *index])
            assert value == numpy_array[zero_based(index)]

    @pytest.mark.parametrize("order", ["F", "C"])
    def test_linear_offset_matches_nary_access(self, order):
        array = np.arange(4 * 5 * 6).reshape((4, 5, 6), order=order)
        flat = np.ravel(array, order=order)
        base, offset = nlinear(3, "flat", "i", NumpyShape(array))
        fn = compile_function(IndexAccess(base, [offset]), params=["flat", "i1", "i2", "i3"])
        for index in cartesian_indices(array.shape):
            assert fn(flat, *index) == array[zero_based(index)]

    def test_linear_offset_with_run_time_strides(self):
        array = np.arange(24).reshape((2, 3, 4), order="F")
        flat = np.ravel(array, order="F")
        _, offset = nlinear(3, "A", "i", SymbolicShape("A"))
        access = IndexAccess(Symbol("flat"), [offset])
        for index in [(1, 1, 1), (2, 1, 3), (2, 3, 4)]:
            value = run_expansion(access, params=["A", "flat", "i1", "i2", "i3"],
                                  args=[array, flat, *index])
            assert value == array[zero_based(index)]


class TestSequences:
    def test_nextract(self):
        body = nextract(3, "x", "v")
        assert run_expansion(body, params=["v"], args=[[7, 8, 9]], returns=ntuple(3, "x")) == (7, 8, 9)

    def test_nextract_arity_error(self):
        with pytest.raises(ExtractionArityError):
            run_expansion(nextract(3, "x", "v"), params=["v"], args=[[1, 2]], returns=ntuple(3, "x"))

    def test_nexprs(self, tpl):
        body = nexprs(3, tpl("d -> s_d = A[d] * d"))
        result = run_expansion(body, params=["A"], args=[[10, 20, 30]], returns=ntuple(3, "s"))
        assert result == (10, 40, 90)


class TestConditions:
    def test_nall(self, tpl):
        predicate = nall(3, tpl("d -> i_d > 1"))
        params = ["i1", "i2", "i3"]
        assert run_expansion(predicate, params=params, args=[2, 2, 2]) is True
        assert run_expansion(predicate, params=params, args=[2, 1, 2]) is False

    def test_nif_bounds_check(self, tpl):
        # index of the first dimension out of bounds, 0 when all are in bounds
        chain = nif(3, tpl("d -> i_d > n_d"), tpl("d -> d"), tpl("d -> i_d > n_d ? d : 0"))
        params = ["i1", "i2", "i3", "n1", "n2", "n3"]
        assert run_expansion(chain, params=params, args=[1, 1, 1, 2, 2, 2]) == 0
        assert run_expansion(chain, params=params, args=[1, 3, 3, 2, 2, 2]) == 2
        assert run_expansion(chain, params=params, args=[1, 1, 3, 2, 2, 2]) == 3


class TestRuntimeEnumeration:
    def test_sum_over_rank_unknown_until_run_time(self):
        for shape in [(3,), (2, 3), (2, 2, 2, 2)]:
            array = np.arange(int(np.prod(shape))).reshape(shape)
            total = 0
            for counter in CartesianEnumerator(array.shape):
                total += array[tuple(counter - 1)]
            assert total == array.sum()
