"""
Global pairwise aligners: Needleman-Wunsch and Hirschberg's linear-space divide-and-conquer.
"""
from typing import Union
from enum import IntEnum

import numpy as np

from linalign.align.alignment import Alignment, AlignmentPair, combine
from linalign.align.scoring import Scoring, GAP_PENALTY, MATCH_SCORE, MISMATCH_SCORE
from linalign.core.alphabet import Alphabet
from linalign.engines.pairwise import nw_matrix, nw_traceback, nw_score, reverse, split_point


# Constants ------------------------------------------------------------------------------------------------------------
class AlignmentMethod(IntEnum):
    """Algorithm used to reconstruct the alignment."""
    NEEDLEMAN_WUNSCH = 0
    HIRSCHBERG = 1


# Classes --------------------------------------------------------------------------------------------------------------
class Aligner:
    """
    Global aligner for two symbol sequences under linear match/mismatch/gap scoring.

    Both reconstruction methods return an optimal alignment. Where several optima exist they
    break ties the same way: the traceback prefers diagonal, then up (gap in the second
    sequence), then left; the divide step picks the first column maximising the split score.

    Attributes:
        scoring (Scoring): The match, mismatch and gap scores.
        alphabet (Alphabet): Validates and encodes inputs; supplies the gap symbol.

    Examples:
        >>> aligner = Aligner(match=1, mismatch=-1, gap=-1)
        >>> aligner.align_linear_space('AGTACGCA', 'TATGC')
        AlignmentPair(first='AGTACGCA', second='--TATGC-')
    """
    __slots__ = ('scoring', 'alphabet')

    def __init__(self, scoring: Scoring = None, alphabet: Alphabet = None, *, match: int = None,
                 mismatch: int = None, gap: int = None):
        """
        Initializes the aligner.

        Args:
            scoring: Base scores, defaults to match=+1, mismatch=-1, gap=-1.
            alphabet: Alphabet used to validate inputs, defaults to any character with '-' as the gap.
            match: Overrides ``scoring.match``.
            mismatch: Overrides ``scoring.mismatch``.
            gap: Overrides ``scoring.gap``.

        Raises:
            ScoringError: If a score is not an integer.
        """
        scoring = scoring or Scoring.DEFAULT
        if overrides := {k: v for k, v in (('match', match), ('mismatch', mismatch), ('gap', gap)) if v is not None}:
            scoring = scoring.replace(**overrides)
        self.scoring = scoring
        self.alphabet = alphabet or Alphabet.ANY

    def __repr__(self):
        return f"Aligner({self.scoring!r}, {self.alphabet!r})"

    def _encode(self, x, y) -> tuple[np.ndarray, np.ndarray]:
        return self.alphabet.encode(x), self.alphabet.encode(y)

    def _decode(self, first: np.ndarray, second: np.ndarray) -> AlignmentPair:
        return AlignmentPair.from_codes(first, second, self.alphabet)

    def score_row(self, x, y) -> np.ndarray:
        """
        Scores ``x`` against every prefix of ``y`` in O(len(y)) memory.

        Returns:
            The last row of the Needleman-Wunsch matrix, of length ``len(y) + 1``.
        """
        return nw_score(*self._encode(x, y), *self.scoring.params)

    def score_matrix(self, x, y) -> np.ndarray:
        """Returns the full (len(x)+1, len(y)+1) Needleman-Wunsch score matrix."""
        return nw_matrix(*self._encode(x, y), *self.scoring.params)

    def align_full(self, x, y) -> tuple[AlignmentPair, int]:
        """
        Aligns with Needleman-Wunsch over the full score matrix (O(nm) time and memory).

        Returns:
            The alignment pair and its score.

        Raises:
            MissingInputError: If either sequence is None.
            AlphabetError: If either sequence cannot be encoded.
        """
        first, second, score = self._needleman_wunsch(*self._encode(x, y))
        return self._decode(first, second), score

    def align_linear_space(self, x, y) -> AlignmentPair:
        """
        Aligns with Hirschberg's algorithm (O(nm) time, linear memory).

        Raises:
            MissingInputError: If either sequence is None.
            AlphabetError: If either sequence cannot be encoded.
        """
        return self._decode(*self._hirschberg(*self._encode(x, y)))

    def align(self, x, y, method: Union[str, AlignmentMethod] = AlignmentMethod.HIRSCHBERG) -> Alignment:
        """
        Aligns two sequences and reports the score alongside the pair.

        Args:
            x: First sequence.
            y: Second sequence.
            method: 'hirschberg' or 'needleman-wunsch' (or an AlignmentMethod).

        Returns:
            An Alignment holding the pair, its score and the method name.
        """
        method = self.method(method)
        if method == AlignmentMethod.NEEDLEMAN_WUNSCH:
            pair, score = self.align_full(x, y)
        else:
            pair = self.align_linear_space(x, y)
            score = pair.score(self.scoring, self.alphabet.gap)
        return Alignment(pair, score, method.name.lower().replace('_', '-'))

    @staticmethod
    def method(method: Union[str, AlignmentMethod]) -> AlignmentMethod:
        """Resolves a method name such as 'needleman-wunsch' to an AlignmentMethod."""
        if isinstance(method, str):
            try: return AlignmentMethod[method.upper().replace('-', '_')]
            except KeyError: raise ValueError(f'Unknown alignment method: {method!r}') from None
        return AlignmentMethod(method)

    def _needleman_wunsch(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray, int]:
        params = self.scoring.params
        M = nw_matrix(x, y, *params)
        first, second = nw_traceback(M, x, y, *params, self.alphabet.gap_code)
        return first, second, int(M[-1, -1])

    def _hirschberg(self, x: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n, m = len(x), len(y)
        # 1. Base cases
        if n == 0: return self.alphabet.gaps(m), y.copy()
        if m == 0: return x.copy(), self.alphabet.gaps(n)
        if n == 1 or m == 1:
            first, second, _ = self._needleman_wunsch(x, y)
            return first, second

        # 2. Divide: split x in half and find where an optimal path crosses the middle row
        params = self.scoring.params
        xmid = n // 2
        x_left, x_right = x[:xmid], x[xmid:]
        score_left = nw_score(x_left, y, *params)
        score_right = nw_score(reverse(x_right), reverse(y), *params)
        ymid = split_point(score_left, score_right)

        # 3. Conquer
        return combine(self._hirschberg(x_left, y[:ymid]), self._hirschberg(x_right, y[ymid:]))


# Functions ------------------------------------------------------------------------------------------------------------
def align_full(x, y, match: int = MATCH_SCORE, mismatch: int = MISMATCH_SCORE, gap: int = GAP_PENALTY,
               alphabet: Alphabet = None) -> tuple[AlignmentPair, int]:
    """
    Needleman-Wunsch global alignment.

    Examples:
        >>> align_full('GATTACA', 'GATCA')
        (AlignmentPair(first='GATTACA', second='GA-T-CA'), 3)
    """
    return Aligner(Scoring(match, mismatch, gap), alphabet).align_full(x, y)


def align_linear_space(x, y, match: int = MATCH_SCORE, mismatch: int = MISMATCH_SCORE, gap: int = GAP_PENALTY,
                       alphabet: Alphabet = None) -> AlignmentPair:
    """
    Hirschberg linear-space global alignment.

    Examples:
        >>> align_linear_space('', 'ACGT')
        AlignmentPair(first='----', second='ACGT')
    """
    return Aligner(Scoring(match, mismatch, gap), alphabet).align_linear_space(x, y)


def score_row(x, y, match: int = MATCH_SCORE, mismatch: int = MISMATCH_SCORE, gap: int = GAP_PENALTY,
              alphabet: Alphabet = None) -> np.ndarray:
    """Last row of the Needleman-Wunsch matrix (length ``len(y) + 1``)."""
    return Aligner(Scoring(match, mismatch, gap), alphabet).score_row(x, y)


def score_matrix(x, y, match: int = MATCH_SCORE, mismatch: int = MISMATCH_SCORE, gap: int = GAP_PENALTY,
                 alphabet: Alphabet = None) -> np.ndarray:
    """Full Needleman-Wunsch score matrix."""
    return Aligner(Scoring(match, mismatch, gap), alphabet).score_matrix(x, y)


def align(x, y, method: Union[str, AlignmentMethod] = AlignmentMethod.HIRSCHBERG, match: int = MATCH_SCORE,
          mismatch: int = MISMATCH_SCORE, gap: int = GAP_PENALTY, alphabet: Alphabet = None) -> Alignment:
    """Aligns two sequences and returns an Alignment with its score."""
    return Aligner(Scoring(match, mismatch, gap), alphabet).align(x, y, method)
