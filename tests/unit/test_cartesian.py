"""
Tests for the run-time Cartesian enumerator.
"""

import numpy as np
import pytest

from dimexpand.runtime.cartesian import CartesianEnumerator, EnumeratorState, cartesian_indices


class TestOrder:
    def test_five_by_three(self):
        indices = list(cartesian_indices([5, 3]))
        assert len(indices) == 15
        assert indices == [(i, j) for j in range(1, 4) for i in range(1, 6)]
        assert indices[:6] == [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1), (1, 2)]

    def test_three_dimensions_first_fastest(self):
        indices = list(cartesian_indices([2, 2, 2]))
        assert indices == [
            (1, 1, 1), (2, 1, 1), (1, 2, 1), (2, 2, 1),
            (1, 1, 2), (2, 1, 2), (1, 2, 2), (2, 2, 2),
        ]

    def test_single_dimension(self):
        assert list(cartesian_indices([3])) == [(1,), (2,), (3,)]

    def test_unit_sizes(self):
        assert list(cartesian_indices([1, 1, 1])) == [(1, 1, 1)]

    def test_matches_numpy_fortran_order(self):
        shape = (3, 4, 2)
        expected = [tuple(int(c) + 1 for c in np.unravel_index(k, shape, order="F"))
                    for k in range(int(np.prod(shape)))]
        assert list(cartesian_indices(shape)) == expected


class TestEmpty:
    @pytest.mark.parametrize("sizes", [[0], [5, 0], [0, 3, 4], [3, -1], []])
    def test_no_counters(self, sizes):
        it = CartesianEnumerator(sizes)
        assert it.is_empty()
        assert len(it) == 0
        assert list(cartesian_indices(sizes)) == []
        assert not it.advance()
        assert it.done


class TestStateMachine:
    def test_lifecycle(self):
        it = CartesianEnumerator([2])
        assert it.state is EnumeratorState.UNINITIALIZED
        assert it.advance()
        assert it.state is EnumeratorState.READY
        assert list(it.counter) == [1]
        assert it.advance()
        assert list(it.counter) == [2]
        assert not it.advance()
        assert it.state is EnumeratorState.DONE
        assert not it.advance()

    def test_counter_unavailable_outside_ready(self):
        it = CartesianEnumerator([2, 2])
        with pytest.raises(RuntimeError):
            it.counter
        list(it)
        with pytest.raises(RuntimeError):
            it.counter

    def test_start_restarts(self):
        it = CartesianEnumerator([2, 3])
        assert sum(1 for _ in it) == 6
        assert it.start()
        assert list(it.counter) == [1, 1]

    def test_len_and_properties(self):
        it = CartesianEnumerator([5, 3])
        assert len(it) == 15
        assert it.ndim == 2
        assert it.sizes == (5, 3)


class TestCounterView:
    def test_read_only(self):
        it = CartesianEnumerator([3, 3])
        it.advance()
        with pytest.raises(ValueError):
            it.counter[0] = 2

    def test_same_view_every_step(self):
        it = CartesianEnumerator([2, 2])
        views = [counter for counter in it]
        assert all(v is views[0] for v in views)

    def test_snapshot_requires_copy(self):
        it = CartesianEnumerator([3])
        it.advance()
        kept = it.counter
        snapshot = it.counter.copy()
        it.advance()
        assert list(kept) == [2]
        assert list(snapshot) == [1]

    def test_sizes_do_not_track_caller_list(self):
        sizes = [2, 2]
        it = CartesianEnumerator(sizes)
        sizes[0] = 10
        assert len(it) == 4
