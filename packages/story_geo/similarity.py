from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance; insert, delete and substitute each cost 1."""
    rows = len(a) + 1
    cols = len(b) + 1
    matrix = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
    return matrix[-1][-1]


def similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    # Rounded so threshold comparisons at 0.85 / 0.95 are exact.
    return round(1.0 - levenshtein_distance(a, b) / longest, 4)
