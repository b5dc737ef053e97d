"""Needleman-Wunsch dynamic programming kernels with a linear gap penalty."""
import numpy as np

from linalign import AlignmentInvariantError
from linalign.align.scoring import match_score, max3
from linalign.utils.resources import jit


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def nw_matrix(x, y, match, mismatch, gap):
    """
    Fills the complete (n+1, m+1) Needleman-Wunsch score matrix.

    Cell (i, j) holds the best score of ``x[:i]`` against ``y[:j]``. Row 0 and column 0 are
    cumulative gap penalties.
    """
    n = len(x)
    m = len(y)
    M = np.empty((n + 1, m + 1), dtype=np.int64)
    M[0, 0] = 0
    for i in range(1, n + 1): M[i, 0] = i * gap
    for j in range(1, m + 1): M[0, j] = j * gap

    for i in range(1, n + 1):
        xi = x[i - 1]
        for j in range(1, m + 1):
            M[i, j] = max3(M[i - 1, j - 1] + match_score(xi, y[j - 1], match, mismatch),  # Diagonal
                           M[i, j - 1] + gap,  # Left: gap in x
                           M[i - 1, j] + gap)  # Up: gap in y
    return M


@jit(nopython=True, cache=True, nogil=True)
def nw_traceback(M, x, y, match, mismatch, gap, gap_code):
    """
    Walks back from (n, m) to (0, 0) re-deriving which case produced each cell.

    Cases are checked diagonal first, then up, then left as the unconditional fallback.
    Columns are appended in reverse and the buffers are flipped once at the end.
    """
    i = len(x)
    j = len(y)
    first = np.empty(i + j, dtype=np.uint32)
    second = np.empty(i + j, dtype=np.uint32)
    k = 0

    while i > 0 or j > 0:
        if i > 0 and j > 0 and M[i, j] == M[i - 1, j - 1] + match_score(x[i - 1], y[j - 1], match, mismatch):
            first[k] = x[i - 1]
            second[k] = y[j - 1]
            i -= 1
            j -= 1
        elif i > 0 and M[i, j] == M[i - 1, j] + gap:
            first[k] = x[i - 1]
            second[k] = gap_code
            i -= 1
        else:
            first[k] = gap_code
            second[k] = y[j - 1]
            j -= 1
        k += 1

    return first[:k][::-1].copy(), second[:k][::-1].copy()


@jit(nopython=True, cache=True, nogil=True)
def nw_score(x, y, match, mismatch, gap):
    """
    Computes only the last row of the Needleman-Wunsch matrix of ``x`` against ``y``.

    Two rows of length m+1 are swapped between iterations so memory stays O(m).
    """
    m = len(y)
    previous = np.empty(m + 1, dtype=np.int64)
    current = np.empty(m + 1, dtype=np.int64)
    for j in range(m + 1): previous[j] = j * gap

    for i in range(1, len(x) + 1):
        xi = x[i - 1]
        current[0] = previous[0] + gap
        for j in range(1, m + 1):
            current[j] = max3(current[j - 1] + gap,
                              previous[j] + gap,
                              previous[j - 1] + match_score(xi, y[j - 1], match, mismatch))
        previous, current = current, previous

    return previous


# Functions ------------------------------------------------------------------------------------------------------------
def reverse(codes: np.ndarray) -> np.ndarray:
    """Returns a contiguous reversed copy, keeping the kernels on a single array layout."""
    return np.ascontiguousarray(codes[::-1])


def split_point(score_left: np.ndarray, score_right: np.ndarray) -> int:
    """
    Finds the column where an optimal path crosses the middle row.

    Args:
        score_left: Last row of the forward pass over the top half.
        score_right: Last row of the pass over the reversed bottom half against the reversed target.

    Returns:
        The first index maximising ``score_left[j] + score_right[m - j]``.

    Raises:
        AlignmentInvariantError: If the rows differ in length.
    """
    if len(score_left) != len(score_right):
        raise AlignmentInvariantError(
            f'Score rows differ in length ({len(score_left)} != {len(score_right)})'
        )
    # np.argmax returns the first occurrence of the maximum
    return int(np.argmax(score_left + score_right[::-1]))
