"""Tokenizer for single chemical formulas.

The lexer never raises: characters it does not understand are skipped and the
stream always ends with an EOF token. Deciding whether the tokens form a valid
formula is the parser's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from chembalance.constants import PHASE_LABELS

logger = logging.getLogger(__name__)

_SIGNS = "+-"


class TokenType(Enum):
    ELEMENT = "ELEMENT"
    NUMBER = "NUMBER"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    CHARGE = "CHARGE"
    DOT = "DOT"
    PHASE = "PHASE"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str | int | None
    position: int


def tokenize(formula: str) -> Tuple[Token, ...]:
    tokens: List[Token] = []
    position = 0
    length = len(formula)

    while position < length:
        char = formula[position]

        if char.isspace():
            position += 1
        elif char.isdigit():
            position = _read_number(formula, position, tokens)
        elif "A" <= char <= "Z":
            end = position + 1
            while end < length and end - position < 3 and "a" <= formula[end] <= "z":
                end += 1
            tokens.append(Token(TokenType.ELEMENT, formula[position:end], position))
            position = end
        elif char in _SIGNS or char == "^":
            position = _read_charge(formula, position, tokens)
        elif char == "(":
            close = formula.find(")", position)
            label = formula[position + 1 : close].lower() if close != -1 else None
            if label in PHASE_LABELS:
                tokens.append(Token(TokenType.PHASE, label, position))
                position = close + 1
            else:
                tokens.append(Token(TokenType.LPAREN, char, position))
                position += 1
        elif char == ")":
            tokens.append(Token(TokenType.RPAREN, char, position))
            position += 1
        elif char == "[":
            tokens.append(Token(TokenType.LBRACKET, char, position))
            position += 1
        elif char == "]":
            tokens.append(Token(TokenType.RBRACKET, char, position))
            position += 1
        elif char == ".":
            tokens.append(Token(TokenType.DOT, char, position))
            position += 1
        else:
            logger.debug("Skipping unrecognized character %r at %d in %r", char, position, formula)
            position += 1

    tokens.append(Token(TokenType.EOF, None, length))
    return tuple(tokens)


def _read_number(formula: str, start: int, tokens: List[Token]) -> int:
    end = start
    while end < len(formula) and formula[end].isdigit():
        end += 1
    digits = formula[start:end]

    if end < len(formula) and formula[end] in _SIGNS and _sign_is_terminal(formula, end):
        count_digits, charge_digits = _split_charge_digits(digits, tokens)
        if count_digits:
            tokens.append(Token(TokenType.NUMBER, int(count_digits), start))
        sign_end = _sign_run_end(formula, end)
        magnitude = int(charge_digits) if charge_digits else sign_end - end
        sign = 1 if formula[end] == "+" else -1
        tokens.append(Token(TokenType.CHARGE, sign * magnitude, start + len(count_digits)))
        return sign_end

    tokens.append(Token(TokenType.NUMBER, int(digits), start))
    return end


def _read_charge(formula: str, start: int, tokens: List[Token]) -> int:
    position = start
    caret = formula[position] == "^"
    if caret:
        position += 1

    digits_start = position
    while position < len(formula) and formula[position].isdigit():
        position += 1
    digits = formula[digits_start:position]

    if position >= len(formula) or formula[position] not in _SIGNS:
        # "^3" has a magnitude but no sign.
        tokens.append(Token(TokenType.CHARGE, None, start))
        return position

    sign = 1 if formula[position] == "+" else -1
    sign_end = _sign_run_end(formula, position)
    run_length = sign_end - position
    position = sign_end

    if not digits:
        trailing_start = position
        while position < len(formula) and formula[position].isdigit():
            position += 1
        digits = formula[trailing_start:position]

    magnitude = int(digits) if digits else run_length
    tokens.append(Token(TokenType.CHARGE, sign * magnitude, start))
    return position


def _sign_run_end(formula: str, position: int) -> int:
    sign = formula[position]
    end = position
    while end < len(formula) and formula[end] == sign:
        end += 1
    return end


def _sign_is_terminal(formula: str, position: int) -> bool:
    end = _sign_run_end(formula, position)
    return end >= len(formula) or formula[end].isspace() or formula[end] in "(."


def _split_charge_digits(digits: str, tokens: List[Token]) -> Tuple[str, str]:
    """Decide which digits in front of a trailing sign belong to the charge.

    ``Fe3+`` and ``[Fe(CN)6]4-`` carry the whole run as charge, ``SO42-``
    gives only its last digit to the charge and ``NH4+`` keeps its digit as a
    count.
    """
    kinds = [token.type for token in tokens]
    if kinds and kinds[0] is TokenType.NUMBER:
        kinds = kinds[1:]
    if kinds == [TokenType.ELEMENT] or (kinds and kinds[-1] is TokenType.RBRACKET):
        return "", digits
    if len(digits) > 1:
        return digits[:-1], digits[-1]
    return digits, ""
