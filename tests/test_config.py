"""Tests for the maximum-length configuration."""

import os

import pytest

from permutohedron import Heap, heap_recursive
from permutohedron._config import MAXHEAP, get_max_length, set_max_length

_ENV = "PERMUTOHEDRON_MAX_LENGTH"


def _reset_state():
    import permutohedron._config as _cfg

    _cfg._max_length_override = None
    os.environ.pop(_ENV, None)


class TestGetMaxLength:
    """Tests for get_max_length() resolution order."""

    def setup_method(self):
        """Reset state before each test."""
        _reset_state()

    def teardown_method(self):
        """Reset state after each test."""
        _reset_state()

    def test_default(self):
        assert get_max_length() == MAXHEAP == 16

    def test_env_var_overrides_default(self):
        os.environ[_ENV] = "20"
        assert get_max_length() == 20

    def test_env_var_whitespace_tolerated(self):
        os.environ[_ENV] = " 8 "
        assert get_max_length() == 8

    @pytest.mark.parametrize("bad", ["lots", "0", "256", "-3"])
    def test_invalid_env_var_warns_and_falls_back(self, bad):
        os.environ[_ENV] = bad
        with pytest.warns(UserWarning, match="Ignoring PERMUTOHEDRON_MAX_LENGTH"):
            assert get_max_length() == MAXHEAP

    def test_programmatic_override_wins_over_env(self):
        os.environ[_ENV] = "20"
        set_max_length(10)
        assert get_max_length() == 10

    def test_auto_restores_default(self):
        set_max_length(10)
        assert get_max_length() == 10
        set_max_length("auto")
        assert get_max_length() == MAXHEAP
        set_max_length(10)
        set_max_length(None)
        assert get_max_length() == MAXHEAP


class TestSetMaxLength:
    """Tests for set_max_length() validation."""

    def setup_method(self):
        _reset_state()

    def teardown_method(self):
        _reset_state()

    @pytest.mark.parametrize("value", [1, 16, 255])
    def test_accepts_valid_limits(self, value):
        set_max_length(value)
        assert get_max_length() == value

    def test_auto_case_insensitive(self):
        set_max_length(5)
        set_max_length("AUTO")
        assert get_max_length() == MAXHEAP

    @pytest.mark.parametrize("bad", [0, 256, -1, 3.0, "12", True])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValueError, match="max_length must"):
            set_max_length(bad)


class TestLimitIntegration:
    """The engines read the limit at call time."""

    def setup_method(self):
        _reset_state()

    def teardown_method(self):
        _reset_state()

    def test_raised_limit_admits_longer_sequence(self):
        set_max_length(20)
        data = list(range(20))
        with Heap(data) as heap:
            assert heap._counters.shape == (20,)
            heap.next_permutation()
            assert heap.next_permutation() == [1, 0] + list(range(2, 20))

    def test_lowered_limit_rejects(self):
        set_max_length(3)
        with pytest.raises(ValueError, match="exceeds the maximum of 3"):
            Heap([1, 2, 3, 4])
        with pytest.raises(ValueError, match="exceeds the maximum of 3"):
            heap_recursive([1, 2, 3, 4], lambda xs: None)

    def test_env_limit_applies(self):
        os.environ[_ENV] = "2"
        with pytest.raises(ValueError, match="maximum of 2"):
            Heap([1, 2, 3])

    def test_public_api_exports(self):
        import permutohedron

        assert hasattr(permutohedron, "get_max_length")
        assert hasattr(permutohedron, "set_max_length")
