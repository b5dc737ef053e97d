import numpy as np
import pytest
from linalign import AlignmentInvariantError
from linalign.core.alphabet import Alphabet
from linalign.engines.pairwise import nw_matrix, nw_traceback, nw_score, reverse, split_point

DEFAULT = (1, -1, -1)
ENC = Alphabet.ANY.encode


class TestNWMatrix:
    def test_borders(self):
        M = nw_matrix(ENC('ACG'), ENC('AC'), *DEFAULT)
        assert M.shape == (4, 3)
        np.testing.assert_array_equal(M[:, 0], [0, -1, -2, -3])
        np.testing.assert_array_equal(M[0, :], [0, -1, -2])

    def test_borders_custom_gap(self):
        M = nw_matrix(ENC('AC'), ENC('ACGT'), 2, -1, -3)
        np.testing.assert_array_equal(M[0, :], [0, -3, -6, -9, -12])
        np.testing.assert_array_equal(M[:, 0], [0, -3, -6])

    def test_known_matrix(self):
        M = nw_matrix(ENC('AGTACGCA'), ENC('TATGC'), *DEFAULT)
        np.testing.assert_array_equal(M[4], [-4, -2, 0, -1, -1, -2])
        np.testing.assert_array_equal(M[7], [-7, -5, -3, -3, -1, 1])
        np.testing.assert_array_equal(M[8], [-8, -6, -4, -4, -2, 0])

    def test_empty(self):
        M = nw_matrix(ENC(''), ENC(''), *DEFAULT)
        assert M.shape == (1, 1)
        assert M[0, 0] == 0


class TestNWTraceback:
    def _align(self, x, y, params=DEFAULT):
        a, b = ENC(x), ENC(y)
        M = nw_matrix(a, b, *params)
        first, second = nw_traceback(M, a, b, *params, ord('-'))
        return Alphabet.ANY.decode(first), Alphabet.ANY.decode(second)

    def test_known_alignment(self):
        assert self._align('AGTACGCA', 'TATGC') == ('AGTACGCA', '--TATGC-')

    def test_prefers_up_over_left(self):
        # At (2, 2) both the up and left cases reproduce the cell; up (gap in y) is checked first
        assert self._align('AC', 'CA') == ('-AC', 'CA-')

    def test_prefers_diagonal(self):
        # A mismatch (-1) beats two gaps (-2)
        assert self._align('A', 'C') == ('A', 'C')

    def test_empty_inputs(self):
        assert self._align('', 'ACG') == ('---', 'ACG')
        assert self._align('ACG', '') == ('ACG', '---')
        assert self._align('', '') == ('', '')

    def test_output_dtype(self):
        a, b = ENC('AC'), ENC('A')
        first, second = nw_traceback(nw_matrix(a, b, *DEFAULT), a, b, *DEFAULT, ord('-'))
        assert first.dtype == np.uint32
        assert second.dtype == np.uint32


class TestNWScore:
    def test_matches_last_matrix_row(self, small_sequences):
        for x in small_sequences[::3]:
            for y in small_sequences[::5]:
                a, b = ENC(x), ENC(y)
                np.testing.assert_array_equal(nw_score(a, b, *DEFAULT), nw_matrix(a, b, *DEFAULT)[-1])

    def test_known_row(self):
        np.testing.assert_array_equal(nw_score(ENC('AGTA'), ENC('TATGC'), *DEFAULT), [-4, -2, 0, -1, -1, -2])

    def test_reversed_row(self):
        row = nw_score(reverse(ENC('CGCA')), reverse(ENC('TATGC')), *DEFAULT)
        np.testing.assert_array_equal(row, [-4, -2, 0, 0, -1, -2])

    def test_empty_x(self):
        np.testing.assert_array_equal(nw_score(ENC(''), ENC('ACG'), *DEFAULT), [0, -1, -2, -3])

    def test_empty_y(self):
        np.testing.assert_array_equal(nw_score(ENC('ACG'), ENC(''), *DEFAULT), [-3])

    def test_length(self):
        assert len(nw_score(ENC('ACGTACGT'), ENC('ACG'), *DEFAULT)) == 4


class TestSplitPoint:
    def test_known_split(self):
        left = np.array([-4, -2, 0, -1, -1, -2])
        right = np.array([-4, -2, 0, 0, -1, -2])
        assert split_point(left, right) == 2

    def test_first_maximum_wins(self):
        assert split_point(np.array([0, 0, 0]), np.array([0, 0, 0])) == 0
        assert split_point(np.array([0, 1, 1]), np.array([0, 0, 0])) == 1

    def test_length_mismatch(self):
        with pytest.raises(AlignmentInvariantError, match="differ in length"):
            split_point(np.array([0, 1]), np.array([0, 1, 2]))

    def test_reverse_is_contiguous(self):
        r = reverse(ENC('ACGT'))
        assert r.flags.c_contiguous
        assert Alphabet.ANY.decode(r) == 'TGCA'
