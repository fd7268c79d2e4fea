"""Charge-imbalance diagnosis for equations that fail in redox mode."""

from __future__ import annotations

import logging
from typing import List, Sequence

from chembalance.coefficients import select_coefficients
from chembalance.constants import COMBINATION_WEIGHT_LIMIT, MAX_COMBINATION_VECTORS
from chembalance.errors import ChargeImbalance, NoIntegerSolution
from chembalance.linalg import nullspace
from chembalance.matrix import build_matrix
from chembalance.models import Species

logger = logging.getLogger(__name__)


def diagnose_charge(
    reactants: Sequence[Species],
    products: Sequence[Species],
    max_vectors: int = MAX_COMBINATION_VECTORS,
    weight_limit: int = COMBINATION_WEIGHT_LIMIT,
) -> ChargeImbalance | None:
    """Retry without the charge row and describe the remaining charge gap.

    Returns ``None`` when the elements cannot balance either, in which case the
    caller should surface its original error.
    """
    stoichiometry = build_matrix(reactants, products, include_charge=False)
    try:
        coefficients = select_coefficients(
            nullspace(stoichiometry.matrix), len(reactants), max_vectors, weight_limit
        )
    except NoIntegerSolution:
        logger.debug("Element-only retry failed as well")
        return None

    count = len(reactants)
    reactant_charge = sum(c * s.charge for c, s in zip(coefficients[:count], reactants))
    product_charge = sum(c * s.charge for c, s in zip(coefficients[count:], products))
    gap = reactant_charge - product_charge
    if gap == 0:
        return None

    logger.debug("Elements balance with %s but charge is off by %+d", coefficients, gap)
    return ChargeImbalance(
        f"Elements balance but charge does not: reactants carry {reactant_charge:+d}, "
        f"products carry {product_charge:+d}.",
        coefficients=coefficients,
        reactant_charge=reactant_charge,
        product_charge=product_charge,
        suggestions=suggest_counter_ions(gap),
    )


def suggest_counter_ions(gap: int) -> List[str]:
    """Ions (or electrons) that would cancel a reactant-minus-product charge gap."""
    if gap == 0:
        return []
    size = abs(gap)
    # A positive gap needs negative charge added to the reactants or positive
    # charge added to the products.
    lower, raise_ = ("reactant", "product") if gap > 0 else ("product", "reactant")
    suggestions = [
        f"+{size} Cl^- on the {lower} side",
        f"+{size} Na^+ on the {raise_} side",
    ]
    if size % 2 == 0:
        suggestions += [
            f"+{size // 2} SO4^2- on the {lower} side",
            f"+{size // 2} Ca^2+ on the {raise_} side",
        ]
    suggestions.append(f"+{size} e^- on the {lower} side")
    return suggestions
