"""Balancing pipeline.

``balance`` runs the whole chain for one equation string:

1. Preprocess the text into reactant and product species.
2. Validate the species against the balancing mode.
3. Build the stoichiometric matrix and compute its exact nullspace.
4. Select minimal strictly positive integer coefficients.
5. In redox mode, retry without the charge row to explain a failure.
6. Classify the reaction by comparing oxidation numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from chembalance.coefficients import select_coefficients
from chembalance.constants import COMBINATION_WEIGHT_LIMIT, MAX_COMBINATION_VECTORS
from chembalance.diagnostics import diagnose_charge
from chembalance.equation import input_hints, preprocess
from chembalance.errors import ModeValidationError, NoIntegerSolution
from chembalance.linalg import nullspace, residual
from chembalance.matrix import build_matrix
from chembalance.models import BalanceMode, BalanceResult, Species
from chembalance.oxidation import analyze_redox

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceOptions:
    """Knobs for a single balancing call.

    Attributes:
        mode: ``STANDARD`` rejects charged species, ``REDOX`` conserves charge.
        max_combination_vectors: Basis vectors mixed by the fallback search.
        combination_weight_limit: Largest absolute weight tried per vector.
        analyze_redox: Attach oxidation-number analysis to the result.
    """

    mode: BalanceMode = BalanceMode.STANDARD
    max_combination_vectors: int = MAX_COMBINATION_VECTORS
    combination_weight_limit: int = COMBINATION_WEIGHT_LIMIT
    analyze_redox: bool = True


def balance(
    equation: str,
    mode: BalanceMode | str | None = None,
    options: BalanceOptions | None = None,
) -> BalanceResult:
    """Balance a chemical equation given as text.

    Args:
        equation: Reactants and products separated by one arrow, e.g.
            ``"H2 + O2 -> H2O"``.
        mode: Overrides ``options.mode`` when given.
        options: Search bounds and mode; defaults to :class:`BalanceOptions`.

    Raises:
        BalanceError: Any parse, validation or solver failure.
    """
    options = options or BalanceOptions()
    mode = BalanceMode(mode) if mode is not None else options.mode
    parsed = preprocess(equation)
    try:
        result = balance_species(parsed.reactants, parsed.products, mode=mode, options=options)
    except NoIntegerSolution as error:
        error.suggestions += tuple(input_hints(equation, mode))
        raise
    if parsed.canceled_spectators:
        result = replace(result, canceled_spectators=parsed.canceled_spectators)
    return result


def balance_species(
    reactants: Sequence[Species],
    products: Sequence[Species],
    mode: BalanceMode | str = BalanceMode.STANDARD,
    options: BalanceOptions | None = None,
) -> BalanceResult:
    """Balance already-parsed species. Terms the user counted are ignored."""
    mode = BalanceMode(mode)
    options = options or BalanceOptions(mode=mode)
    reactants, products = tuple(reactants), tuple(products)

    if mode is BalanceMode.STANDARD:
        charged = [species.render() for species in reactants + products if species.charge]
        if charged:
            raise ModeValidationError(
                f"Charged species are not allowed in standard mode: {', '.join(charged)}.",
                species=charged,
            )

    stoichiometry = build_matrix(
        reactants, products, include_charge=True if mode is BalanceMode.REDOX else None
    )
    basis = nullspace(stoichiometry.matrix)
    logger.debug(
        "Matrix %s over %s (charge row: %s), %d free variables",
        stoichiometry.shape,
        ", ".join(stoichiometry.elements),
        stoichiometry.has_charge_row,
        len(basis),
    )

    try:
        coefficients = select_coefficients(
            basis,
            len(reactants),
            max_vectors=options.max_combination_vectors,
            weight_limit=options.combination_weight_limit,
        )
    except NoIntegerSolution as error:
        if not stoichiometry.has_charge_row:
            raise
        logger.debug("Balancing with the charge row failed (%s); retrying without it", error.kind)
        imbalance = diagnose_charge(
            reactants,
            products,
            max_vectors=options.max_combination_vectors,
            weight_limit=options.combination_weight_limit,
        )
        if imbalance is not None:
            raise imbalance from error
        raise

    if any(residual(stoichiometry.matrix, coefficients)):
        raise NoIntegerSolution(
            f"Selected coefficients {coefficients} do not satisfy the conservation rows."
        )

    redox = analyze_redox(reactants, products) if options.analyze_redox else None
    return BalanceResult(
        coefficients=tuple(coefficients),
        reactants=reactants,
        products=products,
        is_redox=redox.is_redox if redox else False,
        redox_detail=redox,
        mode=mode,
    )
