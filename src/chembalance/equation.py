"""Equation preprocessing: normalization, splitting, merging and spectator removal."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Sequence, Tuple

from chembalance.constants import (
    ARROW_PATTERN,
    HYDRATE_DOTS,
    MINUS_GLYPHS,
    SUBSCRIPT_DIGITS,
    SUPERSCRIPT_CHARS,
    SUPERSCRIPT_RUN,
)
from chembalance.errors import MalformedEquation
from chembalance.models import BalanceMode, Equation, Species, Term
from chembalance.parser import parse_term

logger = logging.getLogger(__name__)

_PLUS_PLACEHOLDER = "\x00"
# "^2+", "^+3", "^++"
_CARET_CHARGE = re.compile(r"\^\d*\++\d*")
# "H+ ", "Fe3+(aq)", "Fe+3 ", "Fe++" directly attached to a formula.
_ATTACHED_CHARGE = re.compile(r"(?<=[A-Za-z0-9)\]])\++(?=\d*(?:\s|$|\(|\.))")
_STRONG_ACIDS = re.compile(r"\b(H2SO4|HNO3|HClO4)\b")


def normalize(text: str) -> str:
    """Rewrite Unicode chemistry notation into the ASCII input grammar."""
    text = text.translate(SUBSCRIPT_DIGITS)
    text = re.sub(SUPERSCRIPT_RUN, lambda match: "^" + match.group().translate(SUPERSCRIPT_CHARS), text)
    for glyph in MINUS_GLYPHS:
        text = text.replace(glyph, "-")
    for glyph in HYDRATE_DOTS:
        text = text.replace(glyph, ".")
    return text.strip()


def split_equation(text: str) -> Tuple[str, str]:
    arrows = list(re.finditer(ARROW_PATTERN, text))
    if len(arrows) != 1:
        found = "no" if not arrows else f"{len(arrows)}"
        raise MalformedEquation(
            f"Expected exactly one arrow between reactants and products, found {found}.",
            suggestions=input_hints(text),
        )
    arrow = arrows[0]
    left, right = text[: arrow.start()].strip(), text[arrow.end() :].strip()
    if not left or not right:
        raise MalformedEquation("Both sides of the equation must contain at least one species.")
    return left, right


def split_side(side: str) -> List[str]:
    """Split one side on its top-level ``+`` signs, leaving charge signs in place."""

    def protect(match: re.Match) -> str:
        return match.group().replace("+", _PLUS_PLACEHOLDER)

    protected = _CARET_CHARGE.sub(protect, side)
    protected = _ATTACHED_CHARGE.sub(protect, protected)

    pieces = [piece.replace(_PLUS_PLACEHOLDER, "+").strip() for piece in protected.split("+")]
    if any(not piece for piece in pieces):
        raise MalformedEquation(f'Empty species in "{side}".')
    return pieces


def merge_duplicates(terms: Sequence[Term]) -> List[Term]:
    merged: Dict[tuple, Term] = {}
    for term in terms:
        key = term.species.key
        if key in merged:
            merged[key] = Term(merged[key].species, merged[key].count + term.count)
        else:
            merged[key] = term
    return list(merged.values())


def cancel_spectators(
    reactants: Sequence[Term], products: Sequence[Term]
) -> Tuple[List[Term], List[Term], List[Species]]:
    """Remove species that appear unchanged on both sides.

    Both lists must already be merged so each key occurs at most once per side.
    """
    remaining_reactants = list(reactants)
    remaining_products = list(products)
    canceled: List[Species] = []

    for i, reactant in enumerate(remaining_reactants):
        for j, product in enumerate(remaining_products):
            if reactant.species.key != product.species.key:
                continue
            shared = min(reactant.count, product.count)
            canceled.append(reactant.species)
            logger.debug("Canceled %d x %s on both sides", shared, reactant.species.render())
            reactant = Term(reactant.species, reactant.count - shared)
            remaining_reactants[i] = reactant
            remaining_products[j] = Term(product.species, product.count - shared)

    return (
        [term for term in remaining_reactants if term.count > 0],
        [term for term in remaining_products if term.count > 0],
        canceled,
    )


def preprocess(text: str) -> Equation:
    """Parse a full equation string into an :class:`Equation` ready for balancing."""
    left, right = split_equation(normalize(text))
    reactants = merge_duplicates([parse_term(piece) for piece in split_side(left)])
    products = merge_duplicates([parse_term(piece) for piece in split_side(right)])
    reactants, products, canceled = cancel_spectators(reactants, products)

    if not reactants or not products:
        raise MalformedEquation("Nothing is left to balance after canceling spectator species.")

    return Equation(
        reactants=tuple(term.species for term in reactants),
        products=tuple(term.species for term in products),
        canceled_spectators=tuple(canceled),
    )


def input_hints(text: str, mode: BalanceMode | None = None) -> List[str]:
    """Tips for common input mistakes. Never raises."""
    hints = []
    if not re.search(ARROW_PATTERN, text):
        hints.append("Use =, -> or → to separate reactants and products.")
    elif len(re.findall(ARROW_PATTERN, text)) > 1:
        hints.append("Write a single arrow; multi-step reactions must be balanced one step at a time.")
    if mode is BalanceMode.STANDARD and _STRONG_ACIDS.search(text):
        hints.append("Consider redox mode for reactions involving oxidizing acids.")
    return hints
