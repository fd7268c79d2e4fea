"""Oxidation-number assignment and redox detection.

Oxidation numbers are assigned per species with a fixed priority of rules:

1. A single-element species gets ``charge / count`` (0 for free elements).
2. Group 1 metals +1, Group 2 metals +2, fluorine -1.
3. Hydrogen +1, or -1 when every other element is a Group 1/2 metal.
4. Oxygen -2, or -1 in peroxide-like compositions; left open next to fluorine.
5. Other halogens -1 unless oxygen is present.

Whatever remains is solved from the species' net charge: directly for a single
unknown, by a depth-bounded search over common oxidation states for two or
three, and by falling back to each element's most common state otherwise. Elements
missing from the state table get a guess from their group, worked out from the
atomic number.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, List, Mapping, Sequence

from chembalance.constants import MAX_OXIDATION_UNKNOWNS
from chembalance.models import ElementChange, RedoxAnalysis, Species
from chembalance.periodic import (
    ALKALI_METALS,
    ALKALINE_EARTH_METALS,
    ATOMIC_NUMBERS,
    COMMON_OXIDATION_STATES,
    DEFAULT_OXIDATION_RANGE,
    HALOGENS,
    base_element,
)

_GROUP_METALS = ALKALI_METALS | ALKALINE_EARTH_METALS
# First atomic number of each period from 2 on, mapped to the period length.
_PERIOD_LENGTHS = {3: 8, 11: 8, 19: 18, 37: 18, 55: 32, 87: 32}
_PERIOD_STARTS = tuple(_PERIOD_LENGTHS)
# Typical states for groups 13 to 18.
_MAIN_GROUP_STATES = (3, 4, -3, -2, -1, 0)


def assign_oxidation_states(species: Species) -> Dict[str, Fraction]:
    """Map every composition key of ``species`` to its oxidation number."""
    composition = species.composition
    if not composition:
        return {}
    if len(composition) == 1:
        (key, count), = composition.items()
        return {key: Fraction(species.charge, count)}

    elements = {key: base_element(key) for key in composition}
    present = set(elements.values())
    if len(present) == 1:
        # Isotopic mixtures of one element, e.g. HD.
        total = sum(composition.values())
        return {key: Fraction(species.charge, total) for key in composition}
    states: Dict[str, Fraction] = {}

    for key, element in elements.items():
        if element in ALKALI_METALS:
            states[key] = Fraction(1)
        elif element in ALKALINE_EARTH_METALS:
            states[key] = Fraction(2)
        elif element == "F":
            states[key] = Fraction(-1)

    hydride = (present - {"H"}) <= _GROUP_METALS
    for key, element in elements.items():
        if element == "H":
            states[key] = Fraction(-1 if hydride else 1)

    if "F" not in present:
        oxygen_keys = [key for key, element in elements.items() if element == "O"]
        peroxide = False
        if oxygen_keys and (present - {"O", "H"}) <= _GROUP_METALS:
            oxygen_count = sum(composition[key] for key in oxygen_keys)
            peroxide = species.charge - _known_total(states, composition) == -oxygen_count
        for key in oxygen_keys:
            states[key] = Fraction(-1 if peroxide else -2)

    if "O" not in present:
        for key, element in elements.items():
            if element in HALOGENS and element != "F":
                states[key] = Fraction(-1)

    unknown = [key for key in composition if key not in states]
    remaining = species.charge - _known_total(states, composition)

    if len(unknown) == 1:
        states[unknown[0]] = remaining / composition[unknown[0]]
    elif unknown:
        found = None
        if len(unknown) <= MAX_OXIDATION_UNKNOWNS:
            found = _search_states(unknown, composition, remaining)
        if found is None:
            found = {key: Fraction(_most_common_state(elements[key])) for key in unknown}
        states.update(found)

    return states


def analyze_redox(reactants: Sequence[Species], products: Sequence[Species]) -> RedoxAnalysis:
    """Compare oxidation-number ranges per element across both sides."""
    reactant_states = tuple(assign_oxidation_states(species) for species in reactants)
    product_states = tuple(assign_oxidation_states(species) for species in products)

    ordered: List[str] = []
    for states in reactant_states + product_states:
        ordered.extend(key for key in states if key not in ordered)

    changes: Dict[str, ElementChange] = {}
    electron_transfer = Fraction(0)
    for key in ordered:
        before = [states[key] for states in reactant_states if key in states]
        after = [states[key] for states in product_states if key in states]
        if not before or not after:
            continue
        reactant_range = (min(before), max(before))
        product_range = (min(after), max(after))
        if reactant_range == product_range:
            continue
        change = ElementChange(
            reactant_range=reactant_range,
            product_range=product_range,
            oxidized=product_range[0] > reactant_range[1],
            reduced=product_range[1] < reactant_range[0],
        )
        changes[key] = change
        if change.oxidized:
            electron_transfer += product_range[1] - reactant_range[0]

    return RedoxAnalysis(
        changes=changes,
        electron_transfer=electron_transfer,
        reactant_states=reactant_states,
        product_states=product_states,
    )


def _known_total(states: Mapping[str, Fraction], composition: Mapping[str, int]) -> Fraction:
    return sum((state * composition[key] for key, state in states.items()), Fraction(0))


def _search_states(
    keys: Sequence[str], composition: Mapping[str, int], target: Fraction
) -> Dict[str, Fraction] | None:
    """Depth-first search for common states whose weighted sum equals ``target``."""
    if not keys:
        return {} if target == 0 else None
    key, rest = keys[0], keys[1:]
    for state in COMMON_OXIDATION_STATES.get(base_element(key), DEFAULT_OXIDATION_RANGE):
        found = _search_states(rest, composition, target - state * composition[key])
        if found is not None:
            return {key: Fraction(state), **found}
    return None


def _most_common_state(element: str) -> int:
    """First tabulated state, else a guess from the element's place in the table."""
    if element in COMMON_OXIDATION_STATES:
        return COMMON_OXIDATION_STATES[element][0]
    number = ATOMIC_NUMBERS.get(element, 0)
    if number <= 2:
        return 0
    start = max(s for s in _PERIOD_STARTS if s <= number)
    offset = number - start
    length = _PERIOD_LENGTHS[start]
    if offset < 2:
        return offset + 1
    # Main groups 13-18 fill the last six places of every period.
    main_group = offset - (length - 6)
    if main_group >= 0:
        return _MAIN_GROUP_STATES[main_group]
    # f-block rows sit right after group 2 in periods 6 and 7.
    if length == 32 and offset < 17:
        return 3
    return 2
