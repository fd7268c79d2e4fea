import unittest
from fractions import Fraction

from chembalance.linalg import fraction_matrix, nullspace, residual, rref
from chembalance.rational import as_decimal, gcd_all, lcm_all, to_integers


class TestRational(unittest.TestCase):
    def test_to_integers(self):
        self.assertEqual(to_integers([Fraction(1, 2), Fraction(1, 3)]), [3, 2])
        self.assertEqual(to_integers([2, 4, 6]), [1, 2, 3])
        self.assertEqual(to_integers([Fraction(-1, 2), Fraction(1)]), [-1, 2])

    def test_gcd_lcm(self):
        self.assertEqual(gcd_all([4, -6, 8]), 2)
        self.assertEqual(lcm_all([2, 3, 4]), 12)

    def test_as_decimal(self):
        self.assertAlmostEqual(as_decimal(Fraction(8, 3)), 2.6666666, places=6)


class TestLinalg(unittest.TestCase):
    def test_fraction_matrix(self):
        matrix = fraction_matrix([[1, 2], [3, 4]])
        self.assertIsInstance(matrix[1, 0], Fraction)

    def test_rref_rank(self):
        echelon = rref(fraction_matrix([[1, 2], [2, 4]]))
        self.assertEqual(echelon.rank, 1)
        self.assertEqual(echelon.pivot_columns, (0,))
        self.assertEqual(list(echelon.matrix[0]), [1, 2])
        self.assertEqual(list(echelon.matrix[1]), [0, 0])

    def test_rref_leaves_input_alone(self):
        matrix = fraction_matrix([[2, 4], [1, 3]])
        rref(matrix)
        self.assertEqual(list(matrix[0]), [2, 4])

    def test_nullspace(self):
        # H2 + O2 -> H2O
        matrix = fraction_matrix([[-2, 0, 2], [0, -2, 1]])
        basis = nullspace(matrix)
        self.assertEqual(len(basis), 1)
        self.assertEqual(list(basis[0]), [1, Fraction(1, 2), 1])
        self.assertEqual(residual(matrix, basis[0]), [0, 0])

    def test_trivial_nullspace(self):
        self.assertEqual(nullspace(fraction_matrix([[1, 0], [0, 1]])), [])

    def test_residual(self):
        matrix = fraction_matrix([[-2, 0, 2], [0, -2, 1]])
        self.assertEqual(residual(matrix, [2, 1, 2]), [0, 0])
        self.assertEqual(residual(matrix, [1, 1, 1]), [0, -1])


if __name__ == '__main__':
    unittest.main()
