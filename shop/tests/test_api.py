import io
import shutil
import tempfile
import unittest
import zipfile
from decimal import Decimal
from pathlib import Path

from fastapi.testclient import TestClient

from shop.api.api_run import app
from shop.api.dependencies import get_store
from shop.domain.Province import rate_for
from shop.events import web_observers
from shop.infra.store import ShopStore
from shop.logic.shopping.summary import summarize


class ApiTestCase(unittest.TestCase):
    """Every test gets its own data directory."""

    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())
        self.store = ShopStore(self.tmp)
        self.store.settings.update(selected_province="Ontario", show_purchased_items=True)
        app.dependency_overrides[get_store] = lambda: self.store
        web_observers.start()
        web_observers.clear()

    def tearDown(self):
        app.dependency_overrides.clear()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def create_list(self, name="Weekly", budget=None):
        resp = self.client.post('/api/lists', json={"name": name, "budget": budget})
        self.assertEqual(resp.status_code, 201)
        return resp.json()

    def add_item(self, list_id, **fields):
        resp = self.client.post(f'/api/lists/{list_id}/items', json=fields)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestListsAPI(ApiTestCase):

    def test_create_and_fetch_list(self):
        lst = self.create_list("Weekly", "20")
        self.assertEqual(lst["budget"], "20")
        self.assertEqual(lst["badge"], "Remaining: $20.00")

        self.add_item(lst["id"], name="Bread", price="4.99", quantity=2, category_name="Food")
        self.add_item(lst["id"], name="Aspirin", price="8.99", category_name="Medication")

        resp = self.client.get(f'/api/lists/{lst["id"]}')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual([g["category"] for g in data["groups"]], ["Food", "Medication"])
        self.assertEqual(data["summary"]["subtotal"], "18.97")
        self.assertEqual(data["summary"]["display"]["budget"], "Remaining: $1.03")
        self.assertFalse(data["groups"][0]["items"][0]["taxable"])

    def test_overview_rows(self):
        lst = self.create_list("Party", "10")
        self.add_item(lst["id"], name="Soap", price="5.99", quantity=2, category_name="Cleaning",
                      is_purchased=True)
        rows = self.client.get('/api/lists').json()["lists"]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["badge"], "Over budget!")
        self.assertEqual(rows[0]["spent"], "11.98")
        self.assertEqual(rows[0]["summary"]["display"]["total"], "$13.54")

    def test_summary_matches_core(self):
        lst = self.create_list()
        self.add_item(lst["id"], name="Soap", price="5.99", quantity=2, category_name="Cleaning")
        self.add_item(lst["id"], name="Cable", price="12.49")
        resp = self.client.get(f'/api/lists/{lst["id"]}/summary', params={"province": "Quebec"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["province"], "Quebec")
        expected = summarize(self.store.items.for_list(lst["id"]), rate_for("Quebec"))
        self.assertEqual(Decimal(data["total"]), expected.total)

    def test_hidden_purchased_items_still_counted(self):
        lst = self.create_list()
        item = self.add_item(lst["id"], name="Milk", price="3.00")["item"]
        self.add_item(lst["id"], name="Eggs", price="4.00")
        self.client.post(f'/api/items/{item["id"]}/toggle')
        self.client.put('/api/settings', json={"show_purchased_items": False})

        data = self.client.get(f'/api/lists/{lst["id"]}').json()
        shown = [i["name"] for g in data["groups"] for i in g["items"]]
        self.assertEqual(shown, ["Eggs"])
        self.assertEqual(data["summary"]["item_count"], 2)
        self.assertEqual(data["summary"]["percent_complete"], 50)

    def test_update_and_clear_budget(self):
        lst = self.create_list("Weekly", "50")
        resp = self.client.put(f'/api/lists/{lst["id"]}', json={"name": "Renamed"})
        self.assertEqual(resp.json()["budget"], "50")
        resp = self.client.put(f'/api/lists/{lst["id"]}', json={"budget": None})
        self.assertEqual(resp.json()["name"], "Renamed")
        self.assertIsNone(resp.json()["budget"])
        self.assertIsNone(resp.json()["badge"])

    def test_delete_list_cascades(self):
        lst = self.create_list()
        item = self.add_item(lst["id"], name="Milk", price="3.00")["item"]
        self.assertEqual(self.client.delete(f'/api/lists/{lst["id"]}').status_code, 200)
        self.assertEqual(self.client.get(f'/api/lists/{lst["id"]}').status_code, 404)
        self.assertIsNone(self.store.items.get(item["id"]))

    def test_missing_list_is_404(self):
        self.assertEqual(self.client.get('/api/lists/nope').status_code, 404)
        resp = self.client.post('/api/lists/nope/items', json={"name": "X", "price": "1"})
        self.assertEqual(resp.status_code, 404)

    def test_invalid_amounts_rejected(self):
        self.assertEqual(self.client.post('/api/lists', json={"name": "X", "budget": "-5"}).status_code, 422)
        lst = self.create_list()
        resp = self.client.post(f'/api/lists/{lst["id"]}/items', json={"name": "X", "price": "-1"})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post(f'/api/lists/{lst["id"]}/items', json={"name": "X", "price": "1", "quantity": 0})
        self.assertEqual(resp.status_code, 422)

    def test_oversized_or_sub_cent_price_rejected_and_list_still_loads(self):
        lst = self.create_list("Weekly", "50")
        for fields in ({"price": "1e999999", "quantity": 99}, {"price": "1000000"}, {"price": "4.999"}):
            resp = self.client.post(f'/api/lists/{lst["id"]}/items', json=dict(fields, name="X"))
            self.assertEqual(resp.status_code, 422, fields)
        self.assertEqual(self.client.post('/api/lists', json={"name": "Y", "budget": "1e999999"}).status_code, 422)

        resp = self.client.get(f'/api/lists/{lst["id"]}')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["summary"]["item_count"], 0)
        self.assertEqual(self.client.get('/api/lists').status_code, 200)

        item = self.add_item(lst["id"], name="Soap", price="5.99")["item"]
        resp = self.client.put(f'/api/items/{item["id"]}', json={"price": "1e999999"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.store.items.get(item["id"]).price, Decimal("5.99"))

    def test_pdf_export(self):
        lst = self.create_list("Weekly", "30")
        self.add_item(lst["id"], name="Soap", price="5.99", category_name="Cleaning")
        resp = self.client.get(f'/api/lists/{lst["id"]}/export.pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))


class TestItemsAPI(ApiTestCase):

    def test_edit_item(self):
        lst = self.create_list()
        item = self.add_item(lst["id"], name="Soap", price="5.99", category_name="Cleaning")["item"]
        resp = self.client.put(f'/api/items/{item["id"]}', json={"quantity": 2, "category_name": None})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["item"]["quantity"], 2)
        self.assertIsNone(data["item"]["category_name"])
        self.assertEqual(data["summary"]["subtotal"], "11.98")

    def test_toggle_and_delete(self):
        lst = self.create_list()
        item = self.add_item(lst["id"], name="Soap", price="5.99")["item"]
        resp = self.client.post(f'/api/items/{item["id"]}/toggle')
        self.assertTrue(resp.json()["item"]["is_purchased"])
        self.assertEqual(resp.json()["summary"]["purchased_count"], 1)
        resp = self.client.delete(f'/api/items/{item["id"]}')
        self.assertEqual(resp.json()["summary"]["item_count"], 0)
        self.assertEqual(self.client.delete(f'/api/items/{item["id"]}').status_code, 404)


class TestAlertsAPI(ApiTestCase):

    def test_over_budget_alert_published_once(self):
        lst = self.create_list("Weekly", "10")
        self.add_item(lst["id"], name="Soap", price="5.99", category_name="Cleaning")
        self.assertEqual(self.client.get('/api/alerts').json()["events"], [])

        item = self.add_item(lst["id"], name="Sponge", price="5.00", category_name="Cleaning")["item"]
        self.add_item(lst["id"], name="Brush", price="1.00", category_name="Cleaning")
        alerts = self.client.get('/api/alerts').json()
        self.assertEqual(len(alerts["events"]), 1)
        event = alerts["events"][0]
        self.assertEqual(event["type"], "list.over_budget")
        self.assertEqual(event["list_name"], "Weekly")
        self.assertTrue(event["message"].startswith("Over by: $"))

        self.client.delete(f'/api/items/{item["id"]}')
        newer = self.client.get('/api/alerts', params={"since": alerts["next_cursor"]}).json()
        self.assertEqual([e["type"] for e in newer["events"]], ["list.within_budget"])

    def test_raising_budget_clears_alert(self):
        lst = self.create_list("Weekly", "1")
        self.add_item(lst["id"], name="Soap", price="5.99")
        self.client.put(f'/api/lists/{lst["id"]}', json={"budget": "100"})
        types = [e["type"] for e in self.client.get('/api/alerts').json()["events"]]
        self.assertEqual(types, ["list.over_budget", "list.within_budget"])


class TestCategoriesAPI(ApiTestCase):

    def test_listing_seeds_defaults(self):
        data = self.client.get('/api/categories').json()
        self.assertEqual([c["name"] for c in data["exempt"]], ["Food", "Medication"])
        self.assertEqual(len(data["taxable"]), 4)
        self.assertEqual(self.client.post('/api/categories/defaults').json()["created"], 0)

    def test_create_duplicate_and_edit(self):
        resp = self.client.post('/api/categories', json={"name": "Toys", "color_hex": "#123456"})
        self.assertEqual(resp.status_code, 201)
        cat = resp.json()
        self.assertEqual(self.client.post('/api/categories', json={"name": "Toys"}).status_code, 400)
        self.assertEqual(self.client.post('/api/categories', json={"name": "Bad", "color_hex": "blue"}).status_code, 422)

        resp = self.client.put(f'/api/categories/{cat["id"]}', json={"is_taxable": False})
        self.assertFalse(resp.json()["is_taxable"])
        self.assertEqual(self.client.put('/api/categories/nope', json={"name": "X"}).status_code, 404)
        self.assertEqual(self.client.delete(f'/api/categories/{cat["id"]}').status_code, 200)

    def test_options(self):
        data = self.client.get('/api/categories/options').json()
        self.assertIn("#4CAF50", data["colors"])
        self.assertIn("folder.fill", data["icons"])


class TestSettingsAndCalculatorAPI(ApiTestCase):

    def test_provinces(self):
        data = self.client.get('/api/provinces').json()
        self.assertEqual(len(data), 10)
        quebec = next(p for p in data if p["name"] == "Quebec")
        self.assertEqual(quebec["description"], "GST 5% + PST 9.98%")
        self.assertEqual(quebec["total_rate_label"], "14.98%")

    def test_settings_update(self):
        resp = self.client.put('/api/settings', json={"selected_province": "Alberta"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["jurisdiction"]["description"], "GST 5%")
        self.assertEqual(self.client.put('/api/settings', json={"selected_province": "Yukon"}).status_code, 422)
        self.assertEqual(self.client.get('/api/settings').json()["selected_province"], "Alberta")

    def test_calculator(self):
        resp = self.client.get('/api/calculator', params={"amount": "10", "province": "Ontario"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["display"]["tax"], "$1.30")
        self.assertEqual(data["display"]["total"], "$11.30")

        exempt = self.client.get('/api/calculator', params={"amount": "10", "taxable": "false"}).json()
        self.assertEqual(exempt["display"]["total"], "$10.00")
        self.assertEqual(self.client.get('/api/calculator', params={"amount": "-3"}).status_code, 422)
        self.assertEqual(self.client.get('/api/calculator', params={"amount": "9.99e999999"}).status_code, 422)
        self.assertEqual(self.client.get('/api/calculator', params={"amount": "999999.99"}).status_code, 200)


class TestDataAPI(ApiTestCase):

    def test_export_zip(self):
        lst = self.create_list("Weekly")
        self.add_item(lst["id"], name="Soap", price="5.99")
        resp = self.client.get('/api/data/export')
        self.assertEqual(resp.status_code, 200)
        with zipfile.ZipFile(io.BytesIO(resp.content)) as zf:
            names = set(zf.namelist())
        self.assertTrue({"lists.json", "items.json", "metadata.json", "lists_report.json"} <= names)

    def test_reset(self):
        lst = self.create_list("Weekly")
        self.client.put('/api/settings', json={"selected_province": "Quebec"})
        self.assertEqual(self.client.post('/api/data/reset').status_code, 200)
        self.assertEqual(self.client.get('/api/lists').json()["lists"], [])
        self.assertEqual(self.client.get(f'/api/lists/{lst["id"]}').status_code, 404)
        self.assertEqual(self.client.get('/api/settings').json()["selected_province"], "Quebec")


if __name__ == "__main__":
    unittest.main()
