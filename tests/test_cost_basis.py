import unittest

from services.portfolio.cost_basis import new_basis


class TestNewBasis(unittest.TestCase):
    def test_first_lot_takes_its_price(self):
        self.assertEqual(new_basis(0, 0, 0.2, 50000), 50000)

    def test_weighted_by_quantity(self):
        self.assertAlmostEqual(new_basis(1, 100, 3, 200), 175)

    def test_equal_prices_are_stable(self):
        self.assertAlmostEqual(new_basis(2.5, 42.0, 7.5, 42.0), 42.0)

    def test_zero_total_short_circuits(self):
        self.assertEqual(new_basis(0, 123, 0, 77), 77)

    def test_stale_basis_on_empty_holding_is_ignored(self):
        # basis left over from a holding that was fully sent away
        self.assertEqual(new_basis(0, 99999, 1, 10), 10)


if __name__ == "__main__":
    unittest.main()
