"""Shared constants for parsing and balancing."""

from __future__ import annotations

PHASE_LABELS = ("s", "l", "g", "aq")

# Arrow spellings accepted between reactants and products.
ARROW_PATTERN = r"<=>|<->|->|=>|=|→|⟶|⇒|⇌"

# Candidate score = max coefficient * SCORE_WEIGHT + sum of coefficients.
SCORE_WEIGHT = 1000
MAX_COMBINATION_VECTORS = 3
COMBINATION_WEIGHT_LIMIT = 3

# Depth bound for the oxidation-state search over common states.
MAX_OXIDATION_UNKNOWNS = 3

SUBSCRIPT_DIGITS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")
SUPERSCRIPT_CHARS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻", "0123456789+-")
SUPERSCRIPT_RUN = r"[⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻]+"
HYDRATE_DOTS = "·•∙⋅*"
MINUS_GLYPHS = "−–"
