"""
Top-level module: linear-space global pairwise alignment.

Two aligners are provided over the same linear gap scoring scheme:

* ``align_full``: Needleman-Wunsch on the complete (n+1)x(m+1) score matrix.
* ``align_linear_space``: Hirschberg's divide-and-conquer, which only ever keeps two score rows alive.

Examples:
    >>> from linalign import align_linear_space
    >>> align_linear_space('AGTACGCA', 'TATGC')
    AlignmentPair(first='AGTACGCA', second='--TATGC-')
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class LinalignWarning(Warning): pass


class AlignmentError(Exception):
    """Base class for all errors raised by this package."""


class MissingInputError(AlignmentError, ValueError):
    """Raised when one or both sequences are absent at a public entry point."""


class AlignmentInvariantError(AlignmentError, AssertionError):
    """Raised when an internal invariant is violated (e.g. score rows of differing length)."""


# Public API -----------------------------------------------------------------------------------------------------------
from linalign.align.scoring import Scoring, ScoringError, GAP_PENALTY, MATCH_SCORE, MISMATCH_SCORE
from linalign.core.alphabet import Alphabet, AlphabetError
from linalign.align.alignment import Alignment, AlignmentPair
from linalign.align.pairwise import (Aligner, AlignmentMethod, align, align_full, align_linear_space, score_row,
                                     score_matrix)

__all__ = [
    'LinalignWarning', 'AlignmentError', 'MissingInputError', 'AlignmentInvariantError', 'ScoringError',
    'AlphabetError', 'Scoring', 'Alphabet', 'Alignment', 'AlignmentPair', 'Aligner', 'AlignmentMethod', 'align',
    'align_full', 'align_linear_space', 'score_row', 'score_matrix', 'GAP_PENALTY', 'MATCH_SCORE', 'MISMATCH_SCORE'
]
