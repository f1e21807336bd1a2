import csv
import io
import json
import shutil
import tempfile
import unittest
import zipfile
from decimal import Decimal
from pathlib import Path

from shop.infra.pdf_utils import generate_pdf_for_list
from shop.infra.store import ShopStore
from shop.logic.shopping.summary import summarize
from shop.utilities.export_import import DataExporter


class TestDataExporter(unittest.TestCase):

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.store = ShopStore(self.tmp)
        self.store.settings.update(selected_province="Quebec")
        self.lst = self.store.lists.create("Weekly", "20")
        self.store.items.create(self.lst.id, "Bread", Decimal("4.99"), quantity=2, category_name="Food")
        self.store.items.create(self.lst.id, "Soap", Decimal("5.99"), category_name="Cleaning",
                                notes="unscented")
        self.exporter = DataExporter(self.store)

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_lists_report(self):
        report = self.exporter.build_lists_report()
        self.assertEqual(report["province"], "Quebec")
        self.assertEqual(report["tax"], "GST 5% + PST 9.98%")
        entry = report["lists"][0]
        self.assertEqual(entry["name"], "Weekly")
        self.assertEqual(entry["summary"]["subtotal"], "15.97")
        taxable = {i["name"]: i["taxable"] for i in entry["items"]}
        self.assertEqual(taxable, {"Bread": False, "Soap": True})

    def test_csv(self):
        rows = list(csv.DictReader(io.StringIO(self.exporter.export_lists_csv())))
        self.assertEqual(len(rows), 2)
        soap = next(r for r in rows if r["item"] == "Soap")
        self.assertEqual(soap["line_total"], "5.99")
        self.assertEqual(soap["taxable"], "True")
        self.assertEqual(soap["notes"], "unscented")

    def test_export_all_writes_zip(self):
        target = self.exporter.export_all(self.tmp / "backup.zip")
        with zipfile.ZipFile(target) as zf:
            metadata = json.loads(zf.read("metadata.json"))
            stored_items = json.loads(zf.read("items.json"))
        self.assertIn("lists.json", metadata["files"])
        self.assertEqual(len(stored_items), 2)


class TestListPdf(unittest.TestCase):

    def test_pdf_bytes(self):
        tmp = Path(tempfile.mkdtemp())
        try:
            store = ShopStore(tmp)
            lst = store.lists.create("Party", "5")
            store.items.create(lst.id, "Cake", "12.00", is_purchased=True)
            items = store.items.for_list(lst.id)
            jurisdiction = store.jurisdiction("Ontario")
            pdf = generate_pdf_for_list(lst, items, summarize(items, jurisdiction, lst.budget), jurisdiction)
            self.assertTrue(pdf.startswith(b"%PDF"))
        finally:
            shutil.rmtree(tmp, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
