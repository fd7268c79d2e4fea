"""Recursive-descent parser turning formula tokens into species.

Grammar::

    Species      := Count? Core ChargeSuffix? (Dot Count? Core)* Phase?
    Core         := (Element Count? | Isotope Count? | Group Count?)+
    Group        := '(' Core ')' | '[' Core ']'
    Isotope      := '[' Digits Element ']'
    ChargeSuffix := Charge+

Every helper takes the token tuple and a cursor and returns its result together
with the advanced cursor, so no parser state is shared between calls.
"""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Tuple

from chembalance.errors import ParseError
from chembalance.lexer import Token, TokenType, tokenize
from chembalance.models import Phase, Species, Term
from chembalance.periodic import is_element

Tokens = Tuple[Token, ...]

_CLOSERS = {TokenType.LPAREN: TokenType.RPAREN, TokenType.LBRACKET: TokenType.RBRACKET}
_CLOSER_TEXT = {TokenType.RPAREN: ")", TokenType.RBRACKET: "]"}


def parse_species(formula: str) -> Species:
    """Parse a single formula such as ``"CuSO4.5H2O(s)"`` or ``"Fe^3+"``."""
    return parse_term(formula).species


def parse_term(text: str) -> Term:
    """Parse a formula with an optional leading coefficient.

    The coefficient is returned on the :class:`Term` only as a hint; it never
    becomes part of the species.
    """
    if not text.strip():
        raise ParseError("empty formula", 0, text)
    tokens = tokenize(text)
    try:
        return _parse_term(tokens, text)
    except ParseError as error:
        if error.formula is not None:
            raise
        raise ParseError(str(error), error.position, text) from None


def _parse_term(tokens: Tokens, text: str) -> Term:
    count, cursor = _parse_count(tokens, 0)
    core_start = tokens[cursor].position if count else 0

    composition, cursor = _parse_core(tokens, cursor, allow_empty=True)

    charge = 0
    while tokens[cursor].type is TokenType.CHARGE:
        token = tokens[cursor]
        if token.value is None:
            raise ParseError("charge is missing its sign", token.position)
        charge += token.value
        cursor += 1

    while tokens[cursor].type is TokenType.DOT:
        multiplier, cursor = _parse_count(tokens, cursor + 1)
        segment, cursor = _parse_core(tokens, cursor)
        composition = _combine(composition, segment, multiplier or 1)

    core_end = len(text)
    phase = None
    if tokens[cursor].type is TokenType.PHASE:
        core_end = tokens[cursor].position
        phase = Phase(tokens[cursor].value)
        cursor += 1

    if tokens[cursor].type is not TokenType.EOF:
        token = tokens[cursor]
        raise ParseError(f"unexpected {token.type.value} token {token.value!r}", token.position)

    isotopes = sorted(key for key in composition if "-" in key)
    species = Species(
        formula=text[core_start:core_end].strip(),
        composition=MappingProxyType(dict(composition)),
        charge=charge,
        phase=phase,
        isotope_label=", ".join(isotopes) if isotopes else None,
    )
    return Term(species=species, count=count or 1)


def _parse_count(tokens: Tokens, cursor: int) -> Tuple[int | None, int]:
    token = tokens[cursor]
    if token.type is not TokenType.NUMBER:
        return None, cursor
    if token.value == 0:
        raise ParseError("counts must be positive", token.position)
    return token.value, cursor + 1


def _parse_core(tokens: Tokens, cursor: int, allow_empty: bool = False) -> Tuple[Counter, int]:
    composition: Counter = Counter()
    start = tokens[cursor]

    while True:
        token = tokens[cursor]
        if token.type is TokenType.ELEMENT:
            if not is_element(token.value):
                raise ParseError(f"unknown element {token.value!r}", token.position)
            part, cursor = Counter({token.value: 1}), cursor + 1
        elif token.type is TokenType.LBRACKET and tokens[cursor + 1].type is TokenType.NUMBER:
            part, cursor = _parse_isotope(tokens, cursor)
        elif token.type in _CLOSERS:
            part, cursor = _parse_group(tokens, cursor)
        else:
            break
        multiplier, cursor = _parse_count(tokens, cursor)
        composition = _combine(composition, part, multiplier or 1)

    if not composition and not allow_empty:
        raise ParseError("expected an element, isotope or group", start.position)
    return composition, cursor


def _parse_group(tokens: Tokens, cursor: int) -> Tuple[Counter, int]:
    opener = tokens[cursor]
    closer = _CLOSERS[opener.type]
    inner, cursor = _parse_core(tokens, cursor + 1)
    if tokens[cursor].type is not closer:
        raise ParseError(
            f"missing closing {_CLOSER_TEXT[closer]!r} for group opened at {opener.position}",
            tokens[cursor].position,
        )
    return inner, cursor + 1


def _parse_isotope(tokens: Tokens, cursor: int) -> Tuple[Counter, int]:
    opener = tokens[cursor]
    mass = tokens[cursor + 1].value
    element = tokens[cursor + 2]
    if element.type is not TokenType.ELEMENT or not is_element(element.value):
        raise ParseError("expected an element symbol after the isotope mass", element.position)
    closer = tokens[cursor + 3]
    if closer.type is not TokenType.RBRACKET:
        raise ParseError(f"missing closing ']' for isotope opened at {opener.position}", closer.position)
    return Counter({f"{element.value}-{mass}": 1}), cursor + 4


def _combine(total: Counter, part: Counter, multiplier: int) -> Counter:
    combined = Counter(total)
    for key, count in part.items():
        combined[key] += count * multiplier
    return combined
