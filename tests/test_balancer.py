import unittest
from unittest import mock
from collections import Counter
from math import gcd
from functools import reduce

from chembalance.balancer import BalanceOptions, balance, balance_species
from chembalance.errors import (
    ChargeImbalance,
    EmptyComposition,
    MalformedEquation,
    ModeValidationError,
    NoIntegerSolution,
    ParseError,
)
from chembalance.models import BalanceMode
from chembalance.parser import parse_species

MOLECULAR = [
    "H2 + O2 -> H2O",
    "Fe + O2 -> Fe2O3",
    "C3H8 + O2 -> CO2 + H2O",
    "KMnO4 + HCl -> KCl + MnCl2 + H2O + Cl2",
    "Ca(OH)2 + H3PO4 -> Ca3(PO4)2 + H2O",
    "Al + H2SO4 -> Al2(SO4)3 + H2",
]

IONIC = [
    "MnO4^- + Fe^2+ + H^+ -> Mn^2+ + Fe^3+ + H2O",
    "Cr2O7^2- + Fe^2+ + H^+ -> Cr^3+ + Fe^3+ + H2O",
    "Cu + Ag^+ -> Cu^2+ + Ag",
]


def side_totals(species, coefficients):
    atoms = Counter()
    charge = 0
    for item, coefficient in zip(species, coefficients):
        for key, count in item.composition.items():
            atoms[key] += count * coefficient
        charge += item.charge * coefficient
    return atoms, charge


class TestScenarios(unittest.TestCase):
    def test_water(self):
        result = balance("H2 + O2 -> H2O")
        self.assertEqual(result.coefficients, (2, 1, 2))
        self.assertEqual(result.balanced_equation, "2H2 + O2 -> 2H2O")
        self.assertIs(result.mode, BalanceMode.STANDARD)

    def test_rust(self):
        self.assertEqual(balance("Fe + O2 -> Fe2O3").coefficients, (4, 3, 2))

    def test_permanganate(self):
        result = balance("MnO4^- + Fe^2+ + H^+ -> Mn^2+ + Fe^3+ + H2O", mode=BalanceMode.REDOX)
        self.assertEqual(result.coefficients, (1, 5, 8, 1, 5, 4))
        self.assertTrue(result.is_redox)
        self.assertEqual(result.redox_detail.reduced, ("Mn",))
        self.assertEqual(result.redox_detail.oxidized, ("Fe",))
        self.assertEqual(
            result.balanced_equation, "MnO4^- + 5Fe^2+ + 8H^+ -> Mn^2+ + 5Fe^3+ + 4H2O"
        )

    def test_dichromate(self):
        result = balance("Cr2O7^2- + Fe^2+ + H^+ -> Cr^3+ + Fe^3+ + H2O", mode="redox")
        self.assertEqual(result.coefficients, (1, 6, 14, 2, 6, 7))

    def test_hypochlorite_never_balances_wrongly(self):
        with self.assertRaises((NoIntegerSolution, ChargeImbalance)):
            balance("ClO^- + Fe^2+ -> Cl^- + Fe^3+", mode=BalanceMode.REDOX)

    def test_ions_rejected_in_standard_mode(self):
        with self.assertRaises(ModeValidationError) as ctx:
            balance("Na^+ + Cl^- -> NaCl")
        self.assertEqual(ctx.exception.species, ("Na^+", "Cl^-"))
        self.assertTrue(ctx.exception.suggestions)


class TestProperties(unittest.TestCase):
    def check_conserved(self, result, charge=False):
        left_atoms, left_charge = side_totals(result.reactants, result.reactant_coefficients)
        right_atoms, right_charge = side_totals(result.products, result.product_coefficients)
        self.assertEqual(left_atoms, right_atoms)
        if charge:
            self.assertEqual(left_charge, right_charge)

    def test_mass_conservation(self):
        for text in MOLECULAR:
            with self.subTest(equation=text):
                self.check_conserved(balance(text))

    def test_charge_conservation(self):
        for text in IONIC:
            with self.subTest(equation=text):
                self.check_conserved(balance(text, mode=BalanceMode.REDOX), charge=True)

    def test_minimal_and_positive(self):
        for text in MOLECULAR:
            with self.subTest(equation=text):
                coefficients = balance(text).coefficients
                self.assertTrue(all(c > 0 for c in coefficients))
                self.assertEqual(reduce(gcd, coefficients), 1)

    def test_known_results(self):
        self.assertEqual(balance(MOLECULAR[2]).coefficients, (1, 5, 3, 4))
        self.assertEqual(balance(MOLECULAR[3]).coefficients, (2, 16, 2, 2, 8, 5))
        self.assertEqual(balance(MOLECULAR[4]).coefficients, (3, 2, 1, 6))

    def test_idempotent(self):
        first = balance("Fe + O2 -> Fe2O3")
        second = balance(first.balanced_equation)
        self.assertEqual(first.coefficients, second.coefficients)

    def test_user_counts_are_ignored(self):
        self.assertEqual(balance("7H2 + 3O2 -> H2O").coefficients, (2, 1, 2))

    def test_spectator_invariance(self):
        result = balance("H2 + O2 + N2 -> H2O + N2")
        self.assertEqual(result.coefficients, (2, 1, 2))
        self.assertEqual([s.formula for s in result.canceled_spectators], ["N2"])
        self.assertEqual(result.to_dict()["canceled_spectators"], ["N2"])

    def test_duplicates_merge(self):
        self.assertEqual(balance("H2 + H2 + O2 -> H2O").coefficients, (2, 1, 2))

    def test_several_free_variables(self):
        self.assertEqual(balance("H2 + O2 + N2 -> H2O + NH3").coefficients, (5, 1, 1, 2, 2))


class TestInputForms(unittest.TestCase):
    def test_unicode(self):
        self.assertEqual(balance("H₂ + O₂ → H₂O").coefficients, (2, 1, 2))
        result = balance("MnO₄⁻ + Fe²⁺ + H⁺ → Mn²⁺ + Fe³⁺ + H₂O", mode=BalanceMode.REDOX)
        self.assertEqual(result.coefficients, (1, 5, 8, 1, 5, 4))

    def test_hydrate(self):
        result = balance("CuSO4·5H2O -> CuSO4 + H2O")
        self.assertEqual(result.coefficients, (1, 1, 5))
        self.assertEqual(result.balanced_equation, "CuSO4.5H2O -> CuSO4 + 5H2O")

    def test_isotopes(self):
        self.assertEqual(balance("[2H]2 + O2 -> [2H]2O").coefficients, (2, 1, 2))

    def test_phases_are_rendered(self):
        result = balance("H2(g) + O2(g) = H2O(l)")
        self.assertEqual(result.balanced_equation, "2H2(g) + O2(g) -> 2H2O(l)")

    def test_compact_ions(self):
        result = balance("Fe3+ + Cu -> Fe2+ + Cu2+", mode=BalanceMode.REDOX)
        self.assertEqual(result.coefficients, (2, 1, 2, 1))


class TestFailures(unittest.TestCase):
    def test_parse_error(self):
        with self.assertRaises(ParseError):
            balance("Fe(OH -> Fe")

    def test_malformed(self):
        with self.assertRaises(MalformedEquation):
            balance("H2 + O2")

    def test_empty_composition(self):
        with self.assertRaises(EmptyComposition):
            balance("Fe^3+ + e- -> Fe^2+", mode=BalanceMode.REDOX)

    def test_charge_imbalance(self):
        with self.assertRaises(ChargeImbalance) as ctx:
            balance("Fe^2+ -> Fe^3+", mode=BalanceMode.REDOX)
        self.assertEqual(ctx.exception.coefficients, (1, 1))
        self.assertEqual(ctx.exception.charge_gap, -1)

    def test_no_solution(self):
        with self.assertRaises(NoIntegerSolution):
            balance("H2 -> O2")

    def test_inconsistent_coefficients_are_rejected(self):
        with mock.patch("chembalance.balancer.select_coefficients", return_value=[1, 1, 1]):
            with self.assertRaises(NoIntegerSolution):
                balance("H2 + O2 -> H2O")

    def test_acid_failure_suggests_redox_mode(self):
        with self.assertRaises(NoIntegerSolution) as ctx:
            balance("Cu + H2SO4 -> CuSO4 + H2O")
        self.assertTrue(any("redox mode" in hint for hint in ctx.exception.suggestions))


class TestBalanceSpecies(unittest.TestCase):
    def test_mode_given_as_text(self):
        ions = [parse_species("Na^+"), parse_species("Cl^-")]
        with self.assertRaises(ModeValidationError):
            balance_species(ions, [parse_species("NaCl")], mode="standard")

        result = balance_species(
            [parse_species("Cu"), parse_species("Ag^+")],
            [parse_species("Cu^2+"), parse_species("Ag")],
            mode="redox",
        )
        self.assertEqual(result.coefficients, (1, 2, 1, 2))
        self.assertIs(result.mode, BalanceMode.REDOX)

    def test_text_redox_mode_adds_charge_row(self):
        with self.assertRaises(ChargeImbalance):
            balance_species([parse_species("Fe^2+")], [parse_species("Fe^3+")], mode="redox")


class TestOptions(unittest.TestCase):
    def test_skip_redox_analysis(self):
        result = balance("H2 + O2 -> H2O", options=BalanceOptions(analyze_redox=False))
        self.assertIsNone(result.redox_detail)
        self.assertFalse(result.is_redox)

    def test_mode_from_options(self):
        result = balance("Cu + Ag^+ -> Cu^2+ + Ag", options=BalanceOptions(mode=BalanceMode.REDOX))
        self.assertEqual(result.coefficients, (1, 2, 1, 2))
        self.assertIs(result.mode, BalanceMode.REDOX)

    def test_combination_bound_is_configurable(self):
        text = "H2 + O2 + N2 -> H2O + NH3"
        with self.assertRaises(NoIntegerSolution):
            balance(text, options=BalanceOptions(max_combination_vectors=1))
        result = balance(text, options=BalanceOptions(max_combination_vectors=2))
        self.assertEqual(result.coefficients, (5, 1, 1, 2, 2))

    def test_to_dict(self):
        payload = balance("H2 + O2 -> H2O").to_dict()
        self.assertEqual(payload["coefficients"], [2, 1, 2])
        self.assertEqual(payload["mode"], "standard")
        self.assertTrue(payload["is_redox"])


if __name__ == '__main__':
    unittest.main()
