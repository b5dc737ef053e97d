"""
Module for managing alignments.
"""
from typing import NamedTuple

import numpy as np

from linalign import AlignmentInvariantError
from linalign.align.scoring import Scoring
from linalign.core.alphabet import Alphabet
from linalign.utils.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
GAP = '-'


# Classes --------------------------------------------------------------------------------------------------------------
class AlignmentPair(NamedTuple):
    """
    Two equal-length gapped sequences describing a pairwise alignment.

    Adding two pairs concatenates them component-wise, which is how partial alignments
    from the divide-and-conquer recursion are stitched together.

    Examples:
        >>> AlignmentPair('AG', '-G') + AlignmentPair('T', 'T')
        AlignmentPair(first='AGT', second='-GT')
    """
    first: str
    second: str

    def __add__(self, other):
        return AlignmentPair(self.first + other[0], self.second + other[1])

    def __str__(self):
        return f'{self.first}\n{self.second}'

    @classmethod
    def empty(cls) -> 'AlignmentPair': return cls('', '')

    @classmethod
    def from_codes(cls, first: np.ndarray, second: np.ndarray, alphabet: Alphabet = None) -> 'AlignmentPair':
        """Builds a pair from two encoded (gapped) arrays."""
        alphabet = alphabet or Alphabet.ANY
        return cls(alphabet.decode(first), alphabet.decode(second))

    @property
    def length(self) -> int:
        """Number of alignment columns."""
        return len(self.first)

    def validate(self, gap: str = GAP) -> 'AlignmentPair':
        """
        Checks the pair is a well-formed alignment.

        Returns:
            The pair itself, so calls can be chained.

        Raises:
            AlignmentInvariantError: If the sequences differ in length or a column is gap against gap.
        """
        if len(self.first) != len(self.second):
            raise AlignmentInvariantError(
                f'Aligned sequences differ in length ({len(self.first)} != {len(self.second)})'
            )
        for k, (a, b) in enumerate(zip(self.first, self.second)):
            if a == gap and b == gap: raise AlignmentInvariantError(f'Column {k} aligns a gap against a gap')
        return self

    def score(self, scoring: Scoring = None, gap: str = GAP) -> int:
        """Re-scores the alignment column by column."""
        scoring = scoring or Scoring.DEFAULT
        return sum(scoring.column_score(a, b, gap) for a, b in zip(self.first, self.second))

    def n_matches(self, gap: str = GAP) -> int:
        return sum(a == b != gap for a, b in zip(self.first, self.second))

    def identity(self, gap: str = GAP) -> float:
        """Fraction of columns that are matches; 0.0 for an empty alignment."""
        return self.n_matches(gap) / self.length if self.length else 0.0

    def ungapped(self, gap: str = GAP) -> tuple[str, str]:
        """Recovers the two input sequences."""
        return self.first.replace(gap, ''), self.second.replace(gap, '')

    def cigar(self, gap: str = GAP, extended: bool = False) -> str:
        """
        Run-length encodes the alignment as a CIGAR string with ``first`` as the query.

        A gap in ``second`` is an insertion (I), a gap in ``first`` a deletion (D). Aligned
        columns are M, or =/X when ``extended`` is True.
        """
        if not self.first: return ''
        to_codes = Alphabet._to_codes
        counts, ops = _cigar_rle_kernel(to_codes(self.first), to_codes(self.second), ord(gap), extended)
        return ''.join(f'{c}{_CIGAR_SYMBOLS[o]}' for c, o in zip(counts, ops))


class Alignment:
    """
    The result of aligning two sequences.

    Attributes:
        pair (AlignmentPair): The gapped sequences.
        score (int): The optimal global alignment score.
        method (str): Name of the algorithm that produced the alignment.
    """
    __slots__ = ('pair', 'score', 'method')

    def __init__(self, pair: AlignmentPair, score: int, method: str = ''):
        self.pair = pair
        self.score = score
        self.method = method

    @property
    def first(self) -> str: return self.pair.first
    @property
    def second(self) -> str: return self.pair.second

    def __repr__(self):
        return f"Alignment({self.pair.first!r}, {self.pair.second!r}, score={self.score})"

    def __eq__(self, other):
        if isinstance(other, self.__class__): return self.pair == other.pair and self.score == other.score
        return NotImplemented

    def __hash__(self): return hash((self.pair, self.score))


# Kernels --------------------------------------------------------------------------------------------------------------
_CIGAR_SYMBOLS = 'MID=X'


@jit(nopython=True, cache=True, nogil=True)
def _cigar_rle_kernel(query, target, gap_code, extended):
    n = len(query)
    counts = np.empty(n, dtype=np.int32)
    ops = np.empty(n, dtype=np.uint8)
    idx = 0
    curr_op = 255
    curr_count = 0
    for i in range(n):
        q = query[i]
        t = target[i]
        if q == gap_code:
            op = 2  # D
        elif t == gap_code:
            op = 1  # I
        elif extended:
            op = 3 if q == t else 4  # = / X
        else:
            op = 0  # M
        if op == curr_op:
            curr_count += 1
        else:
            if curr_count:
                counts[idx] = curr_count
                ops[idx] = curr_op
                idx += 1
            curr_op = op
            curr_count = 1
    if curr_count:
        counts[idx] = curr_count
        ops[idx] = curr_op
        idx += 1
    return counts[:idx], ops[:idx]


def combine(left: tuple[np.ndarray, np.ndarray], right: tuple[np.ndarray, np.ndarray]) -> tuple[np.ndarray, np.ndarray]:
    """Component-wise concatenation of two encoded alignment pairs."""
    return np.concatenate((left[0], right[0])), np.concatenate((left[1], right[1]))
