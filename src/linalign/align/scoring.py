"""
Scoring primitives for linear gap global alignment.
"""
from dataclasses import dataclass, replace
from numbers import Integral
from typing import ClassVar

from linalign import AlignmentError
from linalign.utils.resources import jit


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class ScoringError(AlignmentError, ValueError):
    """Raised when a scoring parameter is not an integer."""


# Constants ------------------------------------------------------------------------------------------------------------
GAP_PENALTY = -1
MISMATCH_SCORE = -1
MATCH_SCORE = 1


# Functions ------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def match_score(c1, c2, match=MATCH_SCORE, mismatch=MISMATCH_SCORE):
    """Score of aligning ``c1`` against ``c2``: ``match`` if equal, else ``mismatch``."""
    return match if c1 == c2 else mismatch


@jit(nopython=True, cache=True, nogil=True)
def max3(a, b, c):
    """Maximum of three values; on ties the first listed wins."""
    if a >= b and a >= c: return a
    if b >= c: return b
    return c


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(frozen=True)
class Scoring:
    """
    Match, mismatch and gap scores shared by every aligner.

    Attributes:
        match (int): Score for two identical symbols.
        mismatch (int): Score for two different symbols.
        gap (int): Score for a symbol aligned against a gap (usually negative).

    Examples:
        >>> Scoring(match=2, mismatch=-1, gap=-2).match_score('A', 'C')
        -1
    """
    match: int = MATCH_SCORE
    mismatch: int = MISMATCH_SCORE
    gap: int = GAP_PENALTY

    DEFAULT: ClassVar['Scoring']

    def __post_init__(self):
        for name in ('match', 'mismatch', 'gap'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ScoringError(f'{name} score must be an integer, got {value!r}')
            object.__setattr__(self, name, int(value))

    def replace(self, **changes) -> 'Scoring':
        """Returns a copy with the given scores changed."""
        return replace(self, **changes)

    def match_score(self, c1, c2) -> int:
        return match_score(c1, c2, self.match, self.mismatch)

    def column_score(self, a, b, gap_symbol='-') -> int:
        """Scores one alignment column, where either side may be the gap symbol."""
        if a == gap_symbol or b == gap_symbol: return self.gap
        return self.match_score(a, b)

    @property
    def params(self) -> tuple[int, int, int]:
        """(match, mismatch, gap) in the order the DP kernels take them."""
        return self.match, self.mismatch, self.gap


Scoring.DEFAULT = Scoring()
