"""Users, business units, tags and custom field endpoints."""
from __future__ import annotations

import pytest


class TestUserEndpoints:
    def test_list_users_hides_password(self, client, user):
        resp = client.get("/api/users")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data) == 1
        assert data[0]["username"] == "jsmith"
        assert data[0]["fullName"] == "John Smith"
        assert "password" not in data[0]

    def test_get_user_404(self, client):
        resp = client.get("/api/users/999")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User not found"


class TestBusinessUnitEndpoints:
    def test_crud_cycle(self, client):
        resp = client.post("/api/business-units", json={"name": "Eng", "color": "#000"})
        assert resp.status_code == 201
        unit = resp.json()
        assert unit["name"] == "Eng"

        resp = client.put(f"/api/business-units/{unit['id']}", json={"color": "#fff"})
        assert resp.status_code == 200
        assert resp.json() == {"id": unit["id"], "name": "Eng", "color": "#fff"}

        assert client.get("/api/business-units").json()[0]["color"] == "#fff"

        resp = client.delete(f"/api/business-units/{unit['id']}")
        assert resp.status_code == 204
        assert client.get("/api/business-units").json() == []

    def test_missing_color_is_400(self, client):
        resp = client.post("/api/business-units", json={"name": "Eng"})
        assert resp.status_code == 400
        assert "color" in resp.json()["detail"]

    def test_duplicate_name_is_400(self, client, business_unit):
        resp = client.post("/api/business-units", json={"name": "Eng", "color": "#111"})
        assert resp.status_code == 400

    def test_update_and_delete_unknown_404(self, client):
        assert client.put("/api/business-units/42", json={"name": "X"}).status_code == 404
        assert client.delete("/api/business-units/42").status_code == 404

    def test_delete_unit_keeps_deals(self, client, business_unit):
        from tests.conftest import create_deal

        deal = create_deal(client, businessUnitId=business_unit.id)
        assert client.delete(f"/api/business-units/{business_unit.id}").status_code == 204

        resp = client.get(f"/api/deals/{deal['id']}")
        assert resp.status_code == 200
        assert resp.json()["businessUnit"] is None
        assert resp.json()["businessUnitId"] is None


class TestTagEndpoints:
    def test_crud_cycle(self, client):
        resp = client.post("/api/tags", json={"name": "VIP"})
        assert resp.status_code == 201
        tag_id = resp.json()["id"]

        resp = client.put(f"/api/tags/{tag_id}", json={"name": "Key Account"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Key Account"

        assert client.get(f"/api/tags/{tag_id}").json()["name"] == "Key Account"
        assert client.delete(f"/api/tags/{tag_id}").status_code == 204
        assert client.get(f"/api/tags/{tag_id}").status_code == 404

    def test_duplicate_name_is_400(self, client, vip_tag):
        assert client.post("/api/tags", json={"name": "VIP"}).status_code == 400

    def test_deleting_tag_unlinks_it(self, client, vip_tag):
        from tests.conftest import create_deal

        deal = create_deal(client, tagIds=[vip_tag.id])
        assert client.delete(f"/api/tags/{vip_tag.id}").status_code == 204
        assert client.get(f"/api/deals/{deal['id']}").json()["tags"] == []


class TestCustomFieldEndpoints:
    def test_create_enum_field(self, client):
        resp = client.post(
            "/api/custom-fields",
            json={"name": "Region", "type": "enum", "required": True, "options": ["EMEA", "APAC"]},
        )
        assert resp.status_code == 201
        assert resp.json()["options"] == ["EMEA", "APAC"]
        assert resp.json()["required"] is True

    def test_enum_without_options_is_400(self, client):
        resp = client.post("/api/custom-fields", json={"name": "Region", "type": "enum"})
        assert resp.status_code == 400

    def test_options_dropped_for_non_enum(self, client):
        resp = client.post(
            "/api/custom-fields", json={"name": "Score", "type": "number", "options": ["x"]}
        )
        assert resp.status_code == 201
        assert resp.json()["options"] is None

    def test_unknown_type_is_400(self, client):
        resp = client.post("/api/custom-fields", json={"name": "When", "type": "date"})
        assert resp.status_code == 400

    def test_update_switch_to_enum_requires_options(self, client):
        field = client.post("/api/custom-fields", json={"name": "Tier", "type": "text"}).json()

        resp = client.put(f"/api/custom-fields/{field['id']}", json={"type": "enum"})
        assert resp.status_code == 400

        resp = client.put(
            f"/api/custom-fields/{field['id']}", json={"type": "enum", "options": ["Gold"]}
        )
        assert resp.status_code == 200
        assert resp.json()["options"] == ["Gold"]

    def test_delete(self, client):
        field = client.post("/api/custom-fields", json={"name": "Tier", "type": "text"}).json()
        assert client.delete(f"/api/custom-fields/{field['id']}").status_code == 204
        assert client.delete(f"/api/custom-fields/{field['id']}").status_code == 404


@pytest.mark.parametrize(
    "path, body, label",
    [
        ("/api/business-units", {"color": "#000"}, "Business unit"),
        ("/api/tags", {}, "Tag"),
        ("/api/custom-fields", {"type": "text"}, "Custom field"),
    ],
)
def test_duplicate_names_rejected_on_create_and_rename(client, path, body, label):
    first = client.post(path, json={"name": "Alpha", **body}).json()
    second = client.post(path, json={"name": "Beta", **body}).json()

    resp = client.post(path, json={"name": "Alpha", **body})
    assert resp.status_code == 400
    assert resp.json()["detail"] == f"{label} 'Alpha' already exists"

    resp = client.put(f"{path}/{second['id']}", json={"name": "Alpha"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == f"{label} 'Alpha' already exists"

    # The failed rename left both rows intact
    assert client.get(f"{path}/{first['id']}").json()["name"] == "Alpha"
    assert client.get(f"{path}/{second['id']}").json()["name"] == "Beta"
