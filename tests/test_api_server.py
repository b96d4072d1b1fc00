"""Tests for the ledger API server."""
import json

import pytest
from fastapi.testclient import TestClient

from inventory_ledger import api_server
from inventory_ledger.validation import INVALID_RANGE_MESSAGE, MISSING_FIELD_MESSAGE


@pytest.fixture
def ledger_file(tmp_path, monkeypatch):
    """Point the server at a ledger file in a temporary directory."""
    path = tmp_path / "ledger.json"
    monkeypatch.setenv("INVENTORY_LEDGER", str(path))
    return path


@pytest.fixture
def client(ledger_file):
    with TestClient(api_server.app) as test_client:
        yield test_client


def add(client, stock, price):
    return client.post("/api/items", data={"stock": stock, "price": price})


class TestItems:
    """Tests for the /api/items endpoints."""

    def test_add_item(self, client, ledger_file):
        response = add(client, "5", "2.00")

        assert response.status_code == 200
        item = response.json()
        assert item["name"] == "Item 1"
        assert item["total"] == 10.0

        stored = json.loads(ledger_file.read_text(encoding='utf-8'))
        assert stored["item_counter"] == "2"
        assert stored["inventory_items"][0]["id"] == item["id"]

    def test_add_invalid_item(self, client):
        response = add(client, "-1", "2")

        assert response.status_code == 400
        assert response.json()["detail"] == INVALID_RANGE_MESSAGE
        assert client.get("/api/items").json()["total_items"] == 0

    def test_add_missing_field(self, client):
        response = client.post("/api/items", data={"price": "2"})

        assert response.status_code == 400
        assert response.json()["detail"] == MISSING_FIELD_MESSAGE

    def test_list_search_and_paging(self, client):
        for n in range(1, 13):
            add(client, str(n), "1")

        first = client.get("/api/items").json()
        assert first["total_pages"] == 2
        assert len(first["items"]) == 10
        assert (first["first_index"], first["last_index"]) == (1, 10)

        second = client.get("/api/items", params={"page": 2}).json()
        assert [item["name"] for item in second["items"]] == ["Item 11", "Item 12"]

        found = client.get("/api/items", params={"q": "item 1"}).json()
        assert found["matching"] == 4
        assert found["total_items"] == 12

    def test_out_of_range_page_is_clamped(self, client):
        add(client, "1", "1")

        page = client.get("/api/items", params={"page": 99}).json()

        assert page["page"] == 1
        assert len(page["items"]) == 1

    def test_remove_item(self, client):
        item = add(client, "5", "2").json()

        response = client.delete(f"/api/items/{item['id']}")
        assert response.json() == {"success": True, "removed": True, "id": item["id"]}

        again = client.delete(f"/api/items/{item['id']}")
        assert again.status_code == 200
        assert again.json()["removed"] is False

    def test_remove_with_id_read_as_float(self, client):
        """An id parsed as a double by a browser still removes its item."""
        response = add(client, "5", "2")
        item = json.loads(response.text, parse_int=float)

        removed = client.delete(f"/api/items/{int(item['id'])}").json()

        assert removed["removed"] is True
        assert client.get("/api/items").json()["total_items"] == 0

    def test_ledger_survives_restart(self, ledger_file):
        with TestClient(api_server.app) as first:
            add(first, "5", "2.00")
            add(first, "3", "4.00")

        with TestClient(api_server.app) as second:
            items = second.get("/api/items").json()["items"]
            assert [item["name"] for item in items] == ["Item 1", "Item 2"]
            assert add(second, "1", "1").json()["name"] == "Item 3"


class TestSummaryAndExports:
    """Tests for summary and export endpoints."""

    def test_summary(self, client):
        add(client, "5", "2.00")
        add(client, "3", "4.00")

        summary = client.get("/api/summary").json()

        assert summary["item_count"] == 2
        assert summary["total_value"] == 22.0
        assert summary["average_price"] == 2.75
        assert [share["name"] for share in summary["distribution"]] == ["Item 1", "Item 2"]

    def test_empty_summary(self, client):
        summary = client.get("/api/summary").json()

        assert summary["average_price"] == 0.0
        assert summary["distribution"] == []

    def test_export_csv(self, client):
        add(client, "5", "2.00")

        response = client.get("/api/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "inventory_data_" in response.headers["content-disposition"]
        assert response.text == "Name,Quantity,Price,Total Value\nItem 1,5,2.00,10.00\n"

    def test_export_report(self, client):
        add(client, "5", "2.00")

        response = client.get("/api/export/report")

        assert response.status_code == 200
        assert "inventory_report_" in response.headers["content-disposition"]
        assert "Total value $10.00" in response.text


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client, ledger_file):
        add(client, "1", "1")

        health = client.get("/health").json()

        assert health["status"] == "ok"
        assert health["ledger_loaded"] is True
        assert health["ledger_path"] == str(ledger_file)
        assert health["item_count"] == 1
