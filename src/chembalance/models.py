"""Data structures for species, equations and balancing results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Mapping, Tuple


class Phase(str, Enum):
    SOLID = "s"
    LIQUID = "l"
    GAS = "g"
    AQUEOUS = "aq"


class BalanceMode(str, Enum):
    STANDARD = "standard"
    REDOX = "redox"


@dataclass(frozen=True)
class Species:
    """A parsed formula.

    ``composition`` is left out of equality and hashing; species that share a
    formula share a composition.
    """

    formula: str
    composition: Mapping[str, int] = field(compare=False)
    charge: int = 0
    phase: Phase | None = None
    isotope_label: str | None = None

    @property
    def key(self) -> Tuple[str, int, Phase | None]:
        """Identity used when merging duplicates and canceling spectators."""
        return (self.formula, self.charge, self.phase)

    def render(self) -> str:
        phase = f"({self.phase.value})" if self.phase else ""
        return f"{self.formula}{phase}"


@dataclass(frozen=True)
class Term:
    """A species together with the coefficient the user typed in front of it."""

    species: Species
    count: int = 1


@dataclass(frozen=True)
class Equation:
    reactants: Tuple[Species, ...]
    products: Tuple[Species, ...]
    canceled_spectators: Tuple[Species, ...] = ()

    @property
    def species(self) -> Tuple[Species, ...]:
        return self.reactants + self.products


@dataclass(frozen=True)
class ElementChange:
    reactant_range: Tuple[Fraction, Fraction]
    product_range: Tuple[Fraction, Fraction]
    oxidized: bool
    reduced: bool


@dataclass(frozen=True)
class RedoxAnalysis:
    """Oxidation-number comparison between both sides of an equation.

    Attributes:
        changes: Elements whose oxidation-number range differs between sides.
        electron_transfer: Sum of range deltas over oxidized elements.
        reactant_states: Oxidation assignment per reactant species.
        product_states: Oxidation assignment per product species.
    """

    changes: Mapping[str, ElementChange]
    electron_transfer: Fraction
    reactant_states: Tuple[Mapping[str, Fraction], ...] = ()
    product_states: Tuple[Mapping[str, Fraction], ...] = ()

    @property
    def is_redox(self) -> bool:
        return bool(self.changes)

    @property
    def oxidized(self) -> Tuple[str, ...]:
        return tuple(element for element, change in self.changes.items() if change.oxidized)

    @property
    def reduced(self) -> Tuple[str, ...]:
        return tuple(element for element, change in self.changes.items() if change.reduced)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changes": {
                element: {
                    "reactant_range": [str(bound) for bound in change.reactant_range],
                    "product_range": [str(bound) for bound in change.product_range],
                    "oxidized": change.oxidized,
                    "reduced": change.reduced,
                }
                for element, change in self.changes.items()
            },
            "electron_transfer": str(self.electron_transfer),
        }


@dataclass(frozen=True)
class BalanceResult:
    coefficients: Tuple[int, ...]
    reactants: Tuple[Species, ...]
    products: Tuple[Species, ...]
    is_redox: bool = False
    redox_detail: RedoxAnalysis | None = None
    canceled_spectators: Tuple[Species, ...] = field(default=())
    mode: BalanceMode = BalanceMode.STANDARD

    @property
    def reactant_coefficients(self) -> Tuple[int, ...]:
        return self.coefficients[: len(self.reactants)]

    @property
    def product_coefficients(self) -> Tuple[int, ...]:
        return self.coefficients[len(self.reactants) :]

    @property
    def balanced_equation(self) -> str:
        left = _render_side(self.reactants, self.reactant_coefficients)
        right = _render_side(self.products, self.product_coefficients)
        return f"{left} -> {right}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "balanced_equation": self.balanced_equation,
            "coefficients": list(self.coefficients),
            "is_redox": self.is_redox,
            "redox_detail": self.redox_detail.to_dict() if self.redox_detail else None,
            "canceled_spectators": [species.render() for species in self.canceled_spectators],
            "mode": self.mode.value,
        }


def _render_side(species: Tuple[Species, ...], coefficients: Tuple[int, ...]) -> str:
    terms = []
    for item, coefficient in zip(species, coefficients, strict=True):
        prefix = str(coefficient) if coefficient != 1 else ""
        terms.append(f"{prefix}{item.render()}")
    return " + ".join(terms)
