from __future__ import annotations

import unittest

from vdview_script.scene import Point
from vdview_script.symbols import DuplicateLabelError, SymbolTable, SymbolTableOverflowError, label_hash


class LabelHashTests(unittest.TestCase):
    def test_polynomial_hash_reduces_each_byte(self) -> None:
        self.assertEqual(label_hash("A", 1009), 65)
        self.assertEqual(label_hash("AB", 1009), (31 * 65 + 66) % 1009)
        self.assertEqual(label_hash("", 7), 0)

    def test_hash_uses_utf8_bytes(self) -> None:
        expected = 0
        for byte in "é".encode("utf-8"):
            expected = (31 * expected + byte) % 13
        self.assertEqual(label_hash("é", 13), expected)

    def test_hash_rejects_non_positive_capacity(self) -> None:
        with self.assertRaises(ValueError):
            label_hash("A", 0)


class SymbolTableTests(unittest.TestCase):
    def test_rejects_invalid_capacity(self) -> None:
        for bad in (0, -3, True):
            with self.assertRaises(ValueError):
                SymbolTable(bad)

    def test_insert_then_lookup_returns_point(self) -> None:
        table = SymbolTable(11)
        table.insert("A", Point(1, 2, "A"))
        table.insert("B", Point(-3, 4, "B"))
        self.assertEqual(table.lookup("A"), Point(1, 2, "A"))
        self.assertEqual(table.lookup("B"), Point(-3, 4, "B"))
        self.assertIsNone(table.lookup("C"))
        self.assertEqual(len(table), 2)
        self.assertIn("A", table)
        self.assertNotIn("a", table)

    def test_colliding_labels_are_probed_linearly(self) -> None:
        table = SymbolTable(3)
        # "A" (65) and "D" (68) share slot 2 when capacity is 3.
        self.assertEqual(label_hash("A", 3), label_hash("D", 3))
        table.insert("A", Point(0, 0, "A"))
        table.insert("D", Point(1, 1, "D"))
        self.assertEqual(table.labels(), ["D", "A"])
        self.assertEqual(table.lookup("D"), Point(1, 1, "D"))
        self.assertEqual(table.lookup("A"), Point(0, 0, "A"))

    def test_duplicate_label_is_rejected(self) -> None:
        table = SymbolTable(5)
        table.insert("A", Point(0, 0, "A"))
        with self.assertRaises(DuplicateLabelError):
            table.insert("A", Point(9, 9, "A"))
        self.assertEqual(table.lookup("A"), Point(0, 0, "A"))
        self.assertEqual(len(table), 1)

    def test_full_table_raises_instead_of_probing_forever(self) -> None:
        table = SymbolTable(2)
        table.insert("A", Point(0, 0, "A"))
        table.insert("B", Point(1, 1, "B"))
        with self.assertRaises(SymbolTableOverflowError):
            table.insert("C", Point(2, 2, "C"))

    def test_lookup_in_full_table_is_bounded(self) -> None:
        table = SymbolTable(2)
        table.insert("A", Point(0, 0, "A"))
        table.insert("B", Point(1, 1, "B"))
        self.assertIsNone(table.lookup("C"))


if __name__ == "__main__":
    unittest.main()
