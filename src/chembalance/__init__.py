"""chembalance core package."""

from chembalance.balancer import BalanceOptions, balance, balance_species
from chembalance.errors import (
    BalanceError,
    ChargeImbalance,
    EmptyComposition,
    MalformedEquation,
    ModeValidationError,
    NoIntegerSolution,
    NoSolution,
    ParseError,
)
from chembalance.mass import molar_mass, stoichiometric_amounts
from chembalance.models import BalanceMode, BalanceResult, Phase, RedoxAnalysis, Species
from chembalance.oxidation import analyze_redox, assign_oxidation_states
from chembalance.parser import parse_species

__all__ = [
    "BalanceOptions",
    "balance",
    "balance_species",
    "BalanceError",
    "ChargeImbalance",
    "EmptyComposition",
    "MalformedEquation",
    "ModeValidationError",
    "NoIntegerSolution",
    "NoSolution",
    "ParseError",
    "molar_mass",
    "stoichiometric_amounts",
    "BalanceMode",
    "BalanceResult",
    "Phase",
    "RedoxAnalysis",
    "Species",
    "analyze_redox",
    "assign_oxidation_states",
    "parse_species",
]
