"""Selection of minimal strictly positive integer coefficients from a nullspace."""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from chembalance.constants import COMBINATION_WEIGHT_LIMIT, MAX_COMBINATION_VECTORS, SCORE_WEIGHT
from chembalance.errors import NoIntegerSolution, NoSolution
from chembalance.rational import to_integers

logger = logging.getLogger(__name__)


def score(coefficients: Sequence[int]) -> int:
    """Smaller is better: prefer a small largest coefficient, then a small total."""
    return max(coefficients) * SCORE_WEIGHT + sum(coefficients)


def select_coefficients(
    basis: Sequence[np.ndarray],
    reactant_count: int,
    max_vectors: int = MAX_COMBINATION_VECTORS,
    weight_limit: int = COMBINATION_WEIGHT_LIMIT,
) -> List[int]:
    """Pick the best strictly positive integer vector spanned by ``basis``.

    Each basis vector and its negation are tried first. Only when none of them
    is positive everywhere, and more than one vector exists, are integer
    combinations of the first ``max_vectors`` vectors with weights in
    ``[-weight_limit, weight_limit]`` searched. The search is bounded, so a
    balanceable system needing larger weights still fails.

    Raises:
        NoSolution: The basis is empty.
        NoIntegerSolution: No candidate has every coefficient >= 1.
    """
    if len(basis) == 0:
        raise NoSolution("No solution exists: the elements cannot balance as written.")

    best = _best_candidate(
        candidate for vector in basis for candidate in (vector, -vector)
    )

    if best is None and len(basis) > 1:
        vectors = list(basis[:max_vectors])
        weights = range(-weight_limit, weight_limit + 1)
        logger.debug("No single basis vector is positive; searching %d-vector combinations", len(vectors))
        best = _best_candidate(
            sum((weight * vector for weight, vector in zip(combination, vectors)), start=np.zeros_like(vectors[0]))
            for combination in itertools.product(weights, repeat=len(vectors))
            if any(combination)
        )

    if best is None:
        raise NoIntegerSolution(
            "No strictly positive integer coefficients found "
            f"({reactant_count} reactants, {len(basis[0]) - reactant_count} products, "
            f"{len(basis)} free variables).",
            suggestions=("Check that every species can actually be produced or consumed.",),
        )

    logger.debug("Selected coefficients %s (score %d)", best, score(best))
    return best


def _best_candidate(candidates: Iterable[np.ndarray]) -> List[int] | None:
    best: Tuple[int, List[int]] | None = None
    for candidate in candidates:
        integers = to_integers(list(candidate))
        if not all(value > 0 for value in integers):
            continue
        candidate_score = score(integers)
        if best is None or candidate_score < best[0]:
            best = (candidate_score, integers)
    return best[1] if best else None
