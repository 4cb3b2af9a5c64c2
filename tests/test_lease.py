"""Tests for exclusive borrowing of sequences by the engines."""

import gc

import numpy as np
import pytest

from permutohedron import BorrowError, Heap, heap_recursive
from permutohedron._lease import acquire, is_leased, lease, release


class TestHeapBorrowing:
    def test_second_engine_rejected(self):
        data = [1, 2, 3]
        first = Heap(data)
        with pytest.raises(BorrowError, match="already borrowed"):
            Heap(data)
        first.release()

    def test_release_allows_new_engine(self):
        data = [1, 2, 3]
        first = Heap(data)
        first.release()
        assert first.released
        with Heap(data) as second:
            assert second.next_permutation() == [1, 2, 3]

    def test_context_manager_releases(self):
        data = [1, 2]
        with Heap(data):
            assert is_leased(data)
        assert not is_leased(data)

    def test_garbage_collection_releases(self):
        data = [1, 2]
        heap = Heap(data)
        assert is_leased(data)
        del heap
        gc.collect()
        assert not is_leased(data)

    def test_released_engine_refuses_to_step(self):
        heap = Heap([1, 2])
        heap.release()
        with pytest.raises(BorrowError, match="released"):
            heap.next_permutation()

    def test_release_is_idempotent(self):
        heap = Heap([1, 2])
        heap.release()
        heap.release()
        assert heap.released

    def test_equal_but_distinct_sequences_are_independent(self):
        a, b = [1, 2, 3], [1, 2, 3]
        with Heap(a), Heap(b):
            assert is_leased(a) and is_leased(b)

    def test_stale_finaliser_does_not_drop_new_lease(self):
        data = [1, 2, 3]
        first = Heap(data)
        first.release()
        second = Heap(data)
        del first
        gc.collect()
        assert is_leased(data)
        with pytest.raises(BorrowError):
            Heap(data)
        second.release()
        assert not is_leased(data)

    def test_failed_construction_leaves_no_lease(self):
        data = list(range(17))
        with pytest.raises(ValueError):
            Heap(data)
        assert not is_leased(data)


class TestLeaseRegistry:
    def test_acquire_release_roundtrip(self):
        data = [0]
        token = acquire(data, owner="test")
        assert is_leased(data)
        release(id(data), token)
        assert not is_leased(data)

    def test_wrong_token_ignored(self):
        data = [0]
        token = acquire(data, owner="test")
        release(id(data), object())
        assert is_leased(data)
        release(id(data), token)

    def test_conflict_names_owner(self):
        data = [0]
        with lease(data, owner="first-owner"):
            with pytest.raises(BorrowError, match="first-owner"):
                acquire(data, owner="second-owner")
        assert not is_leased(data)


class TestNumpyViewBorrowing:
    """Arrays that share memory with a leased array are themselves leased."""

    def test_full_view_rejected(self):
        arr = np.arange(4)
        with Heap(arr):
            with pytest.raises(BorrowError, match="already borrowed"):
                Heap(arr[:])
        np.testing.assert_array_equal(arr, [0, 1, 2, 3])

    def test_base_rejected_while_view_leased(self):
        arr = np.arange(6)
        with Heap(arr[1:4]):
            assert is_leased(arr)
            with pytest.raises(BorrowError):
                Heap(arr)

    def test_reshaped_view_rejected_by_recursive_engine(self):
        arr = np.arange(6)
        with Heap(arr.reshape(3, 2)):
            with pytest.raises(BorrowError):
                heap_recursive(arr, lambda xs: None)

    def test_disjoint_slices_are_independent(self):
        arr = np.arange(6)
        with Heap(arr[:3]) as left, Heap(arr[3:]) as right:
            left.next_permutation()
            right.next_permutation()
            left.next_permutation()
            right.next_permutation()
        np.testing.assert_array_equal(arr, [1, 0, 2, 4, 3, 5])

    def test_copy_is_independent(self):
        arr = np.arange(3)
        with Heap(arr), Heap(arr.copy()):
            pass

    def test_view_free_after_release(self):
        arr = np.arange(3)
        with Heap(arr):
            pass
        with Heap(arr[:]) as heap:
            assert heap.next_permutation() is not None
