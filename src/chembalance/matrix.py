"""Stoichiometric matrix assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from chembalance.errors import EmptyComposition
from chembalance.linalg import fraction_matrix
from chembalance.models import Species


@dataclass(frozen=True)
class StoichiometricMatrix:
    """Conservation constraints for one balancing attempt.

    Row ``i`` holds the signed count of ``elements[i]`` in every species
    (reactants negative, products positive); the last row holds signed charges
    when ``has_charge_row`` is set. Columns are reactants followed by products.
    """

    matrix: np.ndarray
    elements: Tuple[str, ...]
    has_charge_row: bool
    reactant_count: int

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape


def build_matrix(
    reactants: Sequence[Species],
    products: Sequence[Species],
    include_charge: bool | None = None,
) -> StoichiometricMatrix:
    """Assemble the constraint matrix.

    Args:
        reactants: Left-hand species.
        products: Right-hand species.
        include_charge: Force the charge row on or off. ``None`` adds it only
            when some species is charged.
    """
    columns = [(-1, species) for species in reactants] + [(1, species) for species in products]

    elements: List[str] = []
    for _, species in columns:
        if not species.composition:
            raise EmptyComposition(species.formula)
        for element in species.composition:
            if element not in elements:
                elements.append(element)

    rows = [
        [sign * species.composition.get(element, 0) for sign, species in columns]
        for element in elements
    ]

    if include_charge is None:
        include_charge = any(species.charge for _, species in columns)
    if include_charge:
        rows.append([sign * species.charge for sign, species in columns])

    return StoichiometricMatrix(
        matrix=fraction_matrix(rows),
        elements=tuple(elements),
        has_charge_row=include_charge,
        reactant_count=len(reactants),
    )
