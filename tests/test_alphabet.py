import numpy as np
import pytest
from linalign import MissingInputError
from linalign.core.alphabet import Alphabet, AlphabetError


class TestAlphabetInit:
    def test_valid_init(self):
        alpha = Alphabet('ACGT')
        assert alpha.symbols == 'ACGT'
        assert alpha.gap == '-'
        assert alpha.gap_code == ord('-')
        assert 'A' in alpha
        assert 'Z' not in alpha
        assert '-' not in alpha

    def test_any(self):
        assert Alphabet.ANY.symbols is None
        assert 'Z' in Alphabet.ANY
        assert '-' not in Alphabet.ANY

    def test_init_duplicates(self):
        with pytest.raises(AlphabetError, match="duplicate"):
            Alphabet('AACGT')

    def test_init_duplicates_case_insensitive(self):
        with pytest.raises(AlphabetError, match="duplicate"):
            Alphabet('Aa', case_sensitive=False)

    def test_gap_in_symbols(self):
        with pytest.raises(AlphabetError, match="cannot be an alphabet symbol"):
            Alphabet('AC-')

    @pytest.mark.parametrize('gap', ['', '--', None])
    def test_invalid_gap(self, gap):
        with pytest.raises(AlphabetError, match="single character"):
            Alphabet('ACGT', gap=gap)

    def test_equality(self):
        assert Alphabet('ACGT', case_sensitive=False) == Alphabet.DNA
        assert Alphabet('ACGT') != Alphabet.DNA
        assert hash(Alphabet('ACGU', case_sensitive=False)) == hash(Alphabet.RNA)


class TestAlphabetEncoding:
    def test_encode_decode_roundtrip(self):
        codes = Alphabet.ANY.encode('ACGT')
        np.testing.assert_array_equal(codes, [65, 67, 71, 84])
        assert codes.dtype == np.uint32
        assert Alphabet.ANY.decode(codes) == 'ACGT'

    def test_encode_is_writeable(self):
        assert Alphabet.ANY.encode('AC').flags.writeable

    def test_encode_bytes(self):
        np.testing.assert_array_equal(Alphabet.ANY.encode(b'AC'), [65, 67])

    def test_encode_non_ascii_bytes(self):
        with pytest.raises(AlphabetError, match="ASCII"):
            Alphabet.ANY.encode(b'AC\xff')

    def test_encode_unicode(self):
        assert Alphabet.ANY.decode(Alphabet.ANY.encode('αβγ')) == 'αβγ'

    def test_encode_empty(self):
        codes = Alphabet.DNA.encode('')
        assert len(codes) == 0

    def test_encode_mixed_case(self):
        np.testing.assert_array_equal(Alphabet.DNA.encode('acgt'), Alphabet.DNA.encode('ACGT'))

    def test_case_sensitive_any(self):
        assert Alphabet.ANY.decode(Alphabet.ANY.encode('acgt')) == 'acgt'

    def test_encode_invalid_chars(self):
        with pytest.raises(AlphabetError, match="not in alphabet: 'XZ'"):
            Alphabet.DNA.encode('ACZGTX')

    def test_encode_gap(self):
        with pytest.raises(AlphabetError, match="gap symbol"):
            Alphabet.ANY.encode('AC-GT')

    def test_encode_none(self):
        with pytest.raises(MissingInputError):
            Alphabet.DNA.encode(None)

    def test_encode_lone_surrogate(self):
        # argv carries undecodable bytes as surrogate escapes
        with pytest.raises(AlphabetError, match="cannot be encoded"):
            Alphabet.ANY.encode('AC\udcffGT')

    def test_encode_wrong_type(self):
        with pytest.raises(AlphabetError, match="type list"):
            Alphabet.ANY.encode(['A', 'C'])

    def test_gaps(self):
        alpha = Alphabet('AC', gap='.')
        assert alpha.decode(alpha.gaps(3)) == '...'
        assert len(alpha.gaps(0)) == 0
