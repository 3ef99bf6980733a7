"""Tests for table and QR code management."""

import base64
import uuid

from conftest import bearer


class TestTables:
    def test_create_assigns_qr_code(self, client, auth_headers, owner):
        response = client.post("/api/tables", headers=auth_headers, json={"tableNumber": "Patio A", "location": "Terrace"})
        assert response.status_code == 201
        data = response.json()
        assert data["tableNumber"] == "Patio A"
        assert data["ownerId"] == owner.id
        assert uuid.UUID(data["qrCodeId"]).version == 4
        assert data["qrCodeUrl"].endswith(f"/customer-menu?table={data['id']}")

    def test_table_number_required(self, client, auth_headers):
        assert client.post("/api/tables", headers=auth_headers, json={}).status_code == 400
        assert client.post("/api/tables", headers=auth_headers, json={"tableNumber": "   "}).status_code == 400

    def test_table_number_too_long(self, client, auth_headers):
        response = client.post("/api/tables", headers=auth_headers, json={"tableNumber": "x" * 51})
        assert response.status_code == 400

    def test_duplicate_number_conflicts(self, client, auth_headers):
        client.post("/api/tables", headers=auth_headers, json={"tableNumber": "Table 7"})
        response = client.post("/api/tables", headers=auth_headers, json={"tableNumber": "Table 7"})
        assert response.status_code == 409

    def test_same_number_in_other_restaurant(self, client, auth_headers, other_owner):
        client.post("/api/tables", headers=auth_headers, json={"tableNumber": "Table 7"})
        response = client.post("/api/tables", headers=bearer(other_owner), json={"tableNumber": "Table 7"})
        assert response.status_code == 201

    def test_list_own_tables(self, client, auth_headers, table, other_owner):
        client.post("/api/tables", headers=bearer(other_owner), json={"tableNumber": "Elsewhere"})
        response = client.get("/api/tables", headers=auth_headers)
        assert [t["tableNumber"] for t in response.json()] == ["Table 1"]

    def test_delete(self, client, auth_headers, table):
        assert client.delete(f"/api/tables/{table.id}", headers=auth_headers).status_code == 200
        assert client.get(f"/api/public/table/{table.id}").status_code == 404

    def test_delete_foreign_table_forbidden(self, client, table, other_owner):
        response = client.delete(f"/api/tables/{table.id}", headers=bearer(other_owner))
        assert response.status_code == 403

    def test_delete_unknown_table(self, client, auth_headers):
        assert client.delete("/api/tables/999", headers=auth_headers).status_code == 404


class TestTableQRCode:
    def test_png(self, client, auth_headers, table):
        response = client.get(f"/api/tables/{table.id}/qr", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "png"
        assert data["url"] == table.qr_code_url
        assert base64.b64decode(data["qrData"]).startswith(b"\x89PNG")

    def test_svg(self, client, auth_headers, table):
        data = client.get(f"/api/tables/{table.id}/qr", headers=auth_headers, params={"format": "svg"}).json()
        assert "<svg" in data["qrData"]

    def test_unknown_format(self, client, auth_headers, table):
        response = client.get(f"/api/tables/{table.id}/qr", headers=auth_headers, params={"format": "gif"})
        assert response.status_code == 422

    def test_foreign_table(self, client, table, other_owner):
        assert client.get(f"/api/tables/{table.id}/qr", headers=bearer(other_owner)).status_code == 404
