import unittest
from fractions import Fraction

from chembalance.oxidation import analyze_redox, assign_oxidation_states
from chembalance.parser import parse_species


def states(formula):
    return assign_oxidation_states(parse_species(formula))


def species(*formulas):
    return [parse_species(formula) for formula in formulas]


class TestOxidationStates(unittest.TestCase):
    def test_free_elements_and_monatomic_ions(self):
        self.assertEqual(states("O2"), {"O": 0})
        self.assertEqual(states("Fe"), {"Fe": 0})
        self.assertEqual(states("Fe^3+"), {"Fe": 3})
        self.assertEqual(states("Cl^-"), {"Cl": -1})

    def test_single_unknown(self):
        self.assertEqual(states("MnO4^-")["Mn"], 7)
        self.assertEqual(states("Cr2O7^2-")["Cr"], 6)
        self.assertEqual(states("NH4^+")["N"], -3)
        self.assertEqual(states("ClO^-")["Cl"], 1)
        self.assertEqual(states("H2SO4")["S"], 6)

    def test_fractional_state(self):
        self.assertEqual(states("Fe3O4")["Fe"], Fraction(8, 3))

    def test_priority_rules(self):
        self.assertEqual(states("NaCl"), {"Na": 1, "Cl": -1})
        self.assertEqual(states("CaCl2"), {"Ca": 2, "Cl": -1})
        self.assertEqual(states("H2O"), {"H": 1, "O": -2})

    def test_hydride(self):
        self.assertEqual(states("NaH"), {"Na": 1, "H": -1})

    def test_peroxide(self):
        self.assertEqual(states("H2O2")["O"], -1)
        self.assertEqual(states("Na2O2")["O"], -1)

    def test_oxygen_next_to_fluorine(self):
        self.assertEqual(states("OF2"), {"F": -1, "O": 2})

    def test_two_unknowns_use_common_states(self):
        self.assertEqual(states("PbS"), {"Pb": 2, "S": -2})

    def test_three_unknowns_use_common_states(self):
        self.assertEqual(states("CuFeS2"), {"Cu": 2, "Fe": 2, "S": -2})

    def test_failed_search_falls_back_to_common_states(self):
        # No tabulated pair for Fe and S sums to zero in FeS2.
        self.assertEqual(states("FeS2"), {"Fe": 3, "S": 6})

    def test_many_unknowns_fall_back_to_common_states(self):
        self.assertEqual(states("CuFeSnS4"), {"Cu": 2, "Fe": 3, "Sn": 4, "S": 6})

    def test_untabulated_elements_use_their_group(self):
        self.assertEqual(states("Cu2ZnGeSe4"), {"Cu": 2, "Zn": 2, "Ge": 4, "Se": -2})
        self.assertEqual(states("CuZnLaTl"), {"Cu": 2, "Zn": 2, "La": 3, "Tl": 3})

    def test_isotopes_follow_their_element(self):
        self.assertEqual(states("[2H]2O"), {"H-2": 1, "O": -2})
        self.assertEqual(states("H[2H]"), {"H": 0, "H-2": 0})

    def test_empty_composition(self):
        self.assertEqual(states("e-"), {})


class TestRedox(unittest.TestCase):
    def test_permanganate_iron(self):
        analysis = analyze_redox(
            species("MnO4^-", "Fe^2+", "H^+"), species("Mn^2+", "Fe^3+", "H2O")
        )
        self.assertTrue(analysis.is_redox)
        self.assertEqual(analysis.reduced, ("Mn",))
        self.assertEqual(analysis.oxidized, ("Fe",))
        self.assertEqual(analysis.electron_transfer, 1)
        self.assertEqual(analysis.changes["Mn"].reactant_range, (7, 7))
        self.assertEqual(analysis.changes["Mn"].product_range, (2, 2))

    def test_not_redox(self):
        analysis = analyze_redox(species("NaOH", "HCl"), species("NaCl", "H2O"))
        self.assertFalse(analysis.is_redox)
        self.assertEqual(analysis.changes, {})
        self.assertEqual(analysis.electron_transfer, 0)

    def test_combustion(self):
        analysis = analyze_redox(species("H2", "O2"), species("H2O"))
        self.assertEqual(analysis.oxidized, ("H",))
        self.assertEqual(analysis.reduced, ("O",))

    def test_to_dict(self):
        payload = analyze_redox(species("Fe", "O2"), species("Fe2O3")).to_dict()
        self.assertEqual(payload["changes"]["Fe"]["product_range"], ["3", "3"])
        self.assertEqual(payload["electron_transfer"], "3")


if __name__ == '__main__':
    unittest.main()
