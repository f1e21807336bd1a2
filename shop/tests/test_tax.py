import unittest
from decimal import Decimal

from shop.domain.Category import Category
from shop.domain.Province import all_jurisdictions, rate_for
from shop.logic.tax.calculator import calculate_tax, calculate_total, sanitize_amount
from shop.logic.tax.classifier import group_categories_by_taxability, is_taxable


class TestClassifier(unittest.TestCase):

    def test_exempt_names(self):
        for name in ("Food", "Medication", "Basic Groceries", "Prescription Medication"):
            self.assertFalse(is_taxable(name), name)

    def test_match_is_case_sensitive(self):
        self.assertTrue(is_taxable("food"))
        self.assertTrue(is_taxable("FOOD"))

    def test_uncategorized_is_taxable(self):
        self.assertTrue(is_taxable(None))
        self.assertTrue(is_taxable(""))
        self.assertTrue(is_taxable("Cleaning"))

    def test_grouping_uses_category_flag(self):
        cats = [
            Category("Toys", is_taxable=True),
            Category("Food", is_taxable=False),
            Category("Baby Formula", is_taxable=False),
            Category("Cleaning", is_taxable=True),
        ]
        groups = group_categories_by_taxability(cats)
        self.assertEqual([c.name for c in groups["exempt"]], ["Baby Formula", "Food"])
        self.assertEqual([c.name for c in groups["taxable"]], ["Cleaning", "Toys"])
        # The flag does not change item tax math
        self.assertTrue(is_taxable("Baby Formula"))


class TestCalculator(unittest.TestCase):

    def setUp(self):
        self.ontario = rate_for("Ontario")

    def test_ontario_taxable(self):
        self.assertEqual(calculate_tax(Decimal("10.00"), True, self.ontario), Decimal("1.3000"))
        self.assertEqual(calculate_total(Decimal("10.00"), True, self.ontario), Decimal("11.3000"))

    def test_non_taxable_is_zero(self):
        for j in all_jurisdictions():
            self.assertEqual(calculate_tax(Decimal("42.50"), False, j), 0)
            self.assertEqual(calculate_total(Decimal("42.50"), False, j), Decimal("42.50"))

    def test_total_is_amount_plus_tax(self):
        for j in all_jurisdictions():
            for amount in (Decimal("0"), Decimal("0.01"), Decimal("19.99"), Decimal("1234.56")):
                tax = calculate_tax(amount, True, j)
                self.assertEqual(calculate_total(amount, True, j), amount + tax)
                self.assertGreaterEqual(tax, 0)

    def test_tax_is_linear(self):
        quebec = rate_for("Quebec")
        a, b = Decimal("3.33"), Decimal("7.77")
        self.assertEqual(calculate_tax(a + b, True, quebec),
                         calculate_tax(a, True, quebec) + calculate_tax(b, True, quebec))

    def test_zero_amount(self):
        self.assertEqual(calculate_tax(0, True, self.ontario), 0)

    def test_negative_amount_is_clamped(self):
        with self.assertLogs("shop.logic.tax.calculator", level="WARNING"):
            self.assertEqual(calculate_tax(Decimal("-5"), True, self.ontario), 0)

    def test_non_finite_amount_is_clamped(self):
        with self.assertLogs("shop.logic.tax.calculator", level="WARNING"):
            self.assertEqual(sanitize_amount(Decimal("NaN")), 0)
        with self.assertLogs("shop.logic.tax.calculator", level="WARNING"):
            self.assertEqual(sanitize_amount("Infinity"), 0)

    def test_float_input_keeps_decimal_value(self):
        self.assertEqual(sanitize_amount(4.99), Decimal("4.99"))


if __name__ == "__main__":
    unittest.main()
