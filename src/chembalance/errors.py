"""Exception types raised while parsing and balancing equations."""

from __future__ import annotations

from typing import Sequence


class BalanceError(ValueError):
    """Base class for every failure surfaced by the balancer.

    Attributes:
        suggestions: Human-readable hints attached by the raising stage.
    """

    kind = "BalanceError"

    def __init__(self, message: str, suggestions: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.suggestions = tuple(suggestions)


class ParseError(BalanceError):
    kind = "ParseError"

    def __init__(self, message: str, position: int = 0, formula: str | None = None) -> None:
        if formula is not None:
            message = f'Parse error in "{formula}" at position {position}: {message}'
        super().__init__(message)
        self.position = position
        self.formula = formula


class MalformedEquation(BalanceError):
    kind = "MalformedEquation"


class ModeValidationError(BalanceError):
    kind = "ModeValidationError"

    def __init__(self, message: str, species: Sequence[str] = ()) -> None:
        super().__init__(
            message,
            suggestions=("Use redox mode to balance equations with charged species.",),
        )
        self.species = tuple(species)


class EmptyComposition(BalanceError):
    kind = "EmptyComposition"

    def __init__(self, formula: str) -> None:
        super().__init__(f'Species "{formula}" contains no elements.')
        self.formula = formula


class NoIntegerSolution(BalanceError):
    """A nullspace exists but no strictly positive integer vector was found."""

    kind = "NoIntegerSolution"


class NoSolution(NoIntegerSolution):
    """The nullspace is trivial, so no non-zero coefficients exist at all."""

    kind = "NoSolution"


class ChargeImbalance(BalanceError):
    """Elements balance but the net charge does not."""

    kind = "ChargeImbalance"

    def __init__(
        self,
        message: str,
        coefficients: Sequence[int],
        reactant_charge: int,
        product_charge: int,
        suggestions: Sequence[str] = (),
    ) -> None:
        super().__init__(message, suggestions=suggestions)
        self.coefficients = tuple(coefficients)
        self.reactant_charge = reactant_charge
        self.product_charge = product_charge

    @property
    def charge_gap(self) -> int:
        return self.reactant_charge - self.product_charge
