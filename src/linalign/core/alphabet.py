"""
Module for encoding symbol sequences into integer arrays for the alignment kernels
"""
from typing import Union, Final, ClassVar

import numpy as np

from linalign import MissingInputError, AlignmentError


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlphabetError(AlignmentError, ValueError):
    """Raised when a sequence cannot be encoded with an alphabet."""


# Classes --------------------------------------------------------------------------------------------------------------
class Alphabet:
    """
    A set of valid symbols plus the gap symbol used in alignment output.

    Symbols are stored as Unicode code points, so any character can take part in an
    alignment. With ``symbols=None`` every character except the gap is accepted.

    Examples:
        >>> Alphabet.DNA.encode('acgt')
        array([65, 67, 71, 84], dtype=uint32)
    """
    __slots__ = ('_symbols', '_codes', '_gap', '_gap_code', '_case_sensitive')
    DTYPE: Final = np.dtype('<u4')
    ENCODING: Final = 'utf-32-le'

    ANY: ClassVar['Alphabet']
    DNA: ClassVar['Alphabet']
    RNA: ClassVar['Alphabet']
    AMINO: ClassVar['Alphabet']

    def __init__(self, symbols: str = None, gap: str = '-', case_sensitive: bool = True):
        """
        Initializes an Alphabet.

        Args:
            symbols: The valid symbols, or None to accept any character.
            gap: The single character written where a gap is inserted.
            case_sensitive: If False, symbols and inputs are upper-cased before encoding.

        Raises:
            AlphabetError: If the gap is not a single character, symbols contain duplicates,
                or the gap is one of the symbols.
        """
        if not isinstance(gap, str) or len(gap) != 1: raise AlphabetError('Gap symbol must be a single character')
        self._gap = gap
        self._gap_code = ord(gap)
        self._case_sensitive = case_sensitive
        self._symbols = None
        self._codes = None
        if symbols is not None:
            if not case_sensitive: symbols = symbols.upper()
            if len(set(symbols)) != len(symbols): raise AlphabetError('Alphabet contains duplicate symbols')
            if gap in symbols: raise AlphabetError(f'Gap symbol {gap!r} cannot be an alphabet symbol')
            self._symbols = symbols
            self._codes = np.sort(self._to_codes(symbols))

    def __contains__(self, item):
        if not isinstance(item, str) or len(item) != 1 or item == self._gap: return False
        if not self._case_sensitive: item = item.upper()
        return self._symbols is None or item in self._symbols

    def __repr__(self):
        return f"Alphabet({self._symbols!r}, gap={self._gap!r})"

    def __eq__(self, other):
        if self is other: return True
        if not isinstance(other, Alphabet): return False
        return (self._symbols, self._gap, self._case_sensitive) == (other._symbols, other._gap, other._case_sensitive)

    def __hash__(self):
        return hash((self._symbols, self._gap, self._case_sensitive))

    @property
    def symbols(self) -> Union[str, None]: return self._symbols
    @property
    def gap(self) -> str: return self._gap
    @property
    def gap_code(self) -> int: return self._gap_code
    @property
    def case_sensitive(self) -> bool: return self._case_sensitive

    @classmethod
    def _to_codes(cls, text: str) -> np.ndarray:
        # copy: frombuffer arrays are read-only
        return np.frombuffer(text.encode(cls.ENCODING), dtype=cls.DTYPE).copy()

    def encode(self, seq: Union[str, bytes]) -> np.ndarray:
        """
        Encodes a sequence into an array of code points.

        Args:
            seq: The sequence as a str or ASCII bytes.

        Returns:
            A uint32 array with one element per symbol.

        Raises:
            MissingInputError: If ``seq`` is None.
            AlphabetError: If ``seq`` is not text, holds lone surrogates, contains the gap symbol, or contains
                symbols outside the alphabet.
        """
        if seq is None: raise MissingInputError('Sequence is missing')
        if isinstance(seq, (bytes, bytearray)):
            try: seq = seq.decode('ascii')
            except UnicodeDecodeError as e: raise AlphabetError('Byte sequences must be valid ASCII') from e
        if not isinstance(seq, str): raise AlphabetError(f'Cannot encode object of type {type(seq).__name__}')
        if not self._case_sensitive: seq = seq.upper()
        if self._gap in seq: raise AlphabetError(f'Sequence contains the gap symbol {self._gap!r}')
        try: codes = self._to_codes(seq)
        except UnicodeEncodeError as e:
            raise AlphabetError(f'Sequence cannot be encoded: {e.reason} at position {e.start}') from e
        if self._codes is not None and len(codes):
            invalid = ~np.isin(codes, self._codes)
            if np.any(invalid):
                bad = ''.join(sorted(set(self.decode(codes[invalid]))))
                raise AlphabetError(f'Sequence contains symbols not in alphabet: {bad!r}')
        return codes

    def decode(self, codes: np.ndarray) -> str:
        """Decodes an array of code points (gaps included) back into a str."""
        return np.ascontiguousarray(codes, dtype=self.DTYPE).tobytes().decode(self.ENCODING)

    def gaps(self, n: int) -> np.ndarray:
        """Returns an encoded run of ``n`` gap symbols."""
        return np.full(n, self._gap_code, dtype=self.DTYPE)


Alphabet.ANY = Alphabet()
Alphabet.DNA = Alphabet('ACGT', case_sensitive=False)
Alphabet.RNA = Alphabet('ACGU', case_sensitive=False)
Alphabet.AMINO = Alphabet('ACDEFGHIKLMNPQRSTVWY', case_sensitive=False)
