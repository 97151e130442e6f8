"""Tests for array_move."""

import pytest

from tackboard.utils import array_move


class TestArrayMove:
    """Tests for relocating one element."""

    def test_move_forward(self):
        """Element moves later, others shift left."""
        assert array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]

    def test_move_backward(self):
        """Element moves earlier, others shift right."""
        assert array_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]

    def test_same_index_returns_equal_copy(self):
        """from == to returns an elementwise-equal new list."""
        seq = ["a", "b", "c"]
        result = array_move(seq, 1, 1)
        assert result == seq
        assert result is not seq

    def test_does_not_mutate_input(self):
        """The input sequence is left untouched."""
        seq = ["a", "b", "c"]
        array_move(seq, 0, 2)
        assert seq == ["a", "b", "c"]

    def test_accepts_tuples(self):
        """Any sequence is accepted; a list comes back."""
        assert array_move(("a", "b"), 0, 1) == ["b", "a"]

    @pytest.mark.parametrize("i,j", [(0, 3), (3, 0), (1, 2), (2, 1), (0, 1)])
    def test_inverse_restores_original(self, i, j):
        """move(move(seq, i, j), j, i) == seq."""
        seq = ["a", "b", "c", "d"]
        assert array_move(array_move(seq, i, j), j, i) == seq

    @pytest.mark.parametrize("i,j", [(0, 4), (4, 0), (-1, 0), (0, -1)])
    def test_out_of_range_raises(self, i, j):
        """Invalid indices fail loudly instead of clamping."""
        with pytest.raises(IndexError):
            array_move(["a", "b", "c", "d"], i, j)

    def test_empty_sequence_raises(self):
        """There is no valid index in an empty sequence."""
        with pytest.raises(IndexError):
            array_move([], 0, 0)
