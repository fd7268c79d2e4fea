"""Exact linear algebra over fractions.

Matrices are ``numpy`` object arrays whose entries are :class:`fractions.Fraction`,
so every row operation stays exact.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import List, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class RowEchelon:
    """Reduced row-echelon form of a matrix.

    Attributes:
        matrix: The reduced matrix (a new array; the input is left untouched).
        pivot_columns: Column index of the leading 1 of each non-zero row.
        rank: Number of pivots.
    """

    matrix: np.ndarray
    pivot_columns: Tuple[int, ...]

    @property
    def rank(self) -> int:
        return len(self.pivot_columns)


def fraction_matrix(rows: Sequence[Sequence[int | Fraction]]) -> np.ndarray:
    """Build an object array of fractions from nested integer/fraction rows."""
    width = len(rows[0]) if rows else 0
    matrix = np.empty((len(rows), width), dtype=object)
    for i, row in enumerate(rows):
        for j, value in enumerate(row):
            matrix[i, j] = Fraction(value)
    return matrix


def rref(matrix: np.ndarray) -> RowEchelon:
    """Gauss-Jordan elimination with magnitude pivoting.

    In each column the unprocessed row holding the entry of largest absolute
    value becomes the pivot row, which keeps intermediate fractions small.
    """
    reduced = matrix.copy()
    rows, cols = reduced.shape
    pivot_columns: List[int] = []
    pivot_row = 0

    for col in range(cols):
        if pivot_row >= rows:
            break
        best = max(range(pivot_row, rows), key=lambda r: abs(reduced[r, col]))
        if reduced[best, col] == 0:
            continue
        if best != pivot_row:
            reduced[[pivot_row, best]] = reduced[[best, pivot_row]]

        reduced[pivot_row] = reduced[pivot_row] / reduced[pivot_row, col]
        for row in range(rows):
            factor = reduced[row, col]
            if row != pivot_row and factor != 0:
                reduced[row] = reduced[row] - factor * reduced[pivot_row]

        pivot_columns.append(col)
        pivot_row += 1

    return RowEchelon(matrix=reduced, pivot_columns=tuple(pivot_columns))


def nullspace(matrix: np.ndarray) -> List[np.ndarray]:
    """Basis of ``{x : matrix @ x == 0}``, one vector per free column.

    Each vector sets its free column to 1, the other free columns to 0 and
    back-substitutes the pivot columns. An empty list means only the zero
    vector solves the system.
    """
    echelon = rref(matrix)
    cols = matrix.shape[1]
    free_columns = [col for col in range(cols) if col not in echelon.pivot_columns]

    basis = []
    for free in free_columns:
        vector = np.array([Fraction(0)] * cols, dtype=object)
        vector[free] = Fraction(1)
        for row, pivot in enumerate(echelon.pivot_columns):
            vector[pivot] = -echelon.matrix[row, free]
        basis.append(vector)
    return basis


def residual(matrix: np.ndarray, vector: Sequence[int | Fraction]) -> List[Fraction]:
    """Exact ``matrix @ vector``; all zeros when the vector balances the system."""
    rows, cols = matrix.shape
    return [
        sum((matrix[i, j] * Fraction(vector[j]) for j in range(cols)), Fraction(0))
        for i in range(rows)
    ]
