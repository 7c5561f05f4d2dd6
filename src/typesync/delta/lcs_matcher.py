"""Longest Common Subsequence matching over array item identities.

Uses the standard dynamic-programming LCS algorithm to find the longest
sequence of items that keep their relative order between the old and the
new array.  Items outside the subsequence are reported by the differ as
added, removed or moved.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence


def lcs_match(
    old_ids: Sequence[Hashable],
    new_ids: Sequence[Hashable],
) -> list[tuple[int, int]]:
    """Compute LCS-based matched pairs between two identity sequences.

    Parameters
    ----------
    old_ids:
        Identities of the items in the old array.
    new_ids:
        Identities of the items in the new array.

    Returns
    -------
    list[tuple[int, int]]
        ``(old_idx, new_idx)`` pairs of matched items, ascending in both
        indices.
    """
    m = len(old_ids)
    n = len(new_ids)

    if m == 0 or n == 0:
        return []

    # dp[i][j] is the LCS length of old_ids[:i] and new_ids[:j].
    dp: list[list[int]] = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if old_ids[i - 1] == new_ids[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    pairs: list[tuple[int, int]] = []
    i, j = m, n
    while i > 0 and j > 0:
        if old_ids[i - 1] == new_ids[j - 1]:
            pairs.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif dp[i - 1][j] >= dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    pairs.reverse()
    return pairs
