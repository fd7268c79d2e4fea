"""Molar masses and mass-based stoichiometry.

Masses are exact fractions built from the decimal strings in
:mod:`chembalance.periodic`; convert with :func:`chembalance.rational.as_decimal`
for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Mapping, Tuple

from chembalance.models import BalanceResult, Species
from chembalance.parser import parse_species
from chembalance.periodic import ATOMIC_WEIGHTS, ISOTOPE_MASSES, base_element


@dataclass(frozen=True)
class MolarMass:
    """Molar mass of one species.

    Attributes:
        total: g/mol.
        breakdown: Contribution of each composition key (count * atomic mass).
    """

    total: Fraction
    breakdown: Mapping[str, Fraction]


@dataclass(frozen=True)
class SpeciesAmount:
    species: Species
    coefficient: int
    moles: Fraction
    grams: Fraction


def atomic_mass(key: str) -> Fraction:
    """Mass of one atom key such as ``"Fe"`` or ``"C-13"``.

    Isotopes without a tabulated exact mass fall back to the element's standard
    atomic weight.
    """
    if key in ISOTOPE_MASSES:
        return Fraction(ISOTOPE_MASSES[key])
    element = base_element(key)
    if element not in ATOMIC_WEIGHTS:
        raise ValueError(f"Unknown element: {key}")
    return Fraction(ATOMIC_WEIGHTS[element])


def molar_mass(species: Species | str) -> MolarMass:
    if isinstance(species, str):
        species = parse_species(species)
    breakdown: Dict[str, Fraction] = {
        key: atomic_mass(key) * count for key, count in species.composition.items()
    }
    return MolarMass(total=sum(breakdown.values(), Fraction(0)), breakdown=breakdown)


def stoichiometric_amounts(
    result: BalanceResult, reference_index: int, grams: Fraction | int | str
) -> List[SpeciesAmount]:
    """Scale every species of a balanced equation from a known mass of one of them.

    Args:
        result: A balanced equation.
        reference_index: Position of the known species, counting reactants
            first and then products.
        grams: Mass of the reference species.
    """
    grams = Fraction(grams)
    if grams <= 0:
        raise ValueError("Reference mass must be positive.")

    species: Tuple[Species, ...] = result.reactants + result.products
    if not 0 <= reference_index < len(species):
        raise ValueError(
            f"Reference index {reference_index} is out of range for {len(species)} species."
        )

    reference_moles = grams / molar_mass(species[reference_index]).total
    per_coefficient = reference_moles / result.coefficients[reference_index]

    amounts = []
    for item, coefficient in zip(species, result.coefficients, strict=True):
        moles = per_coefficient * coefficient
        amounts.append(
            SpeciesAmount(
                species=item,
                coefficient=coefficient,
                moles=moles,
                grams=moles * molar_mass(item).total,
            )
        )
    return amounts
