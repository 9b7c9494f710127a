"""Deal CRUD, relation assembly, tag links and cascade deletes."""
from __future__ import annotations

from dealtracker.models import ActivityLog, Comment, DealTag, Resource
from tests.conftest import create_deal


class TestCreateDeal:
    def test_scenario_business_unit_resolved(self, client):
        unit = client.post("/api/business-units", json={"name": "Eng", "color": "#000"}).json()
        deal = create_deal(
            client, company="Acme", dealType="Vendor", businessUnitId=unit["id"], stage="Following"
        )

        resp = client.get(f"/api/deals/{deal['id']}")
        assert resp.status_code == 200
        assert resp.json()["businessUnit"]["name"] == "Eng"

    def test_defaults_and_shape(self, client):
        resp = client.post("/api/deals", json={"company": "Acme", "dealType": "Vendor"})
        assert resp.status_code == 201
        deal = resp.json()
        assert deal["stage"] == "Following"
        assert deal["aiSummary"] is None
        assert deal["aiMarketReportLink"] is None
        assert deal["tags"] == []
        assert deal["resources"] == []
        assert deal["businessUnit"] is None
        assert deal["leadOwner"] is None
        assert deal["customFieldValues"] == {}
        assert deal["lastUpdated"]
        assert deal["createdAt"]

    def test_missing_required_fields_is_400(self, client):
        resp = client.post("/api/deals", json={"website": "https://acme.test"})
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert "company" in detail
        assert "dealType" in detail

    def test_empty_company_is_400(self, client):
        resp = client.post("/api/deals", json={"company": "", "dealType": "Vendor"})
        assert resp.status_code == 400

    def test_unknown_references_are_400(self, client):
        assert client.post(
            "/api/deals", json={"company": "A", "dealType": "V", "businessUnitId": 99}
        ).status_code == 400
        assert client.post(
            "/api/deals", json={"company": "A", "dealType": "V", "leadOwnerId": 99}
        ).status_code == 400
        assert client.post(
            "/api/deals", json={"company": "A", "dealType": "V", "tagIds": [99]}
        ).status_code == 400
        assert client.get("/api/deals").json() == []

    def test_tags_and_lead_owner_attached(self, client, user, vip_tag):
        deal = create_deal(client, leadOwnerId=user.id, tagIds=[vip_tag.id, vip_tag.id])
        assert [tag["name"] for tag in deal["tags"]] == ["VIP"]
        assert deal["leadOwner"]["username"] == "jsmith"
        assert "password" not in deal["leadOwner"]

    def test_logs_created_activity(self, client, db, user):
        deal = create_deal(client, userId=user.id)
        entries = db.query(ActivityLog).filter(ActivityLog.deal_id == deal["id"]).all()
        assert [entry.action for entry in entries] == ["Created deal"]
        assert entries[0].user_id == user.id
        assert entries[0].details["deal"]["company"] == "Acme"


class TestGetDeal:
    def test_not_found(self, client):
        resp = client.get("/api/deals/12345")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Deal not found"

    def test_includes_comments_with_authors(self, client, user):
        deal = create_deal(client)
        client.post(f"/api/deals/{deal['id']}/comments", json={"userId": user.id, "content": "First"})
        client.post(f"/api/deals/{deal['id']}/comments", json={"userId": user.id, "content": "Second"})

        data = client.get(f"/api/deals/{deal['id']}").json()
        assert {c["content"] for c in data["comments"]} == {"First", "Second"}
        assert all(c["user"]["fullName"] == "John Smith" for c in data["comments"])

    def test_list_entries_have_no_comments_key(self, client):
        create_deal(client)
        data = client.get("/api/deals").json()
        assert "comments" not in data[0]
        assert {"businessUnit", "leadOwner", "tags", "resources"} <= set(data[0])


class TestUpdateDeal:
    def test_partial_update_leaves_other_fields(self, client):
        deal = create_deal(client, website="https://acme.test", investmentSize=1000)
        resp = client.put(f"/api/deals/{deal['id']}", json={"stage": "Discovery"})
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["stage"] == "Discovery"
        assert updated["website"] == "https://acme.test"
        assert updated["investmentSize"] == 1000

    def test_update_refreshes_last_updated(self, client):
        deal = create_deal(client)
        updated = client.put(f"/api/deals/{deal['id']}", json={}).json()
        assert updated["lastUpdated"] > deal["lastUpdated"]

    def test_update_unknown_deal_is_404(self, client):
        assert client.put("/api/deals/999", json={"stage": "Discovery"}).status_code == 404

    def test_null_company_is_400(self, client):
        deal = create_deal(client)
        assert client.put(f"/api/deals/{deal['id']}", json={"company": None}).status_code == 400

    def test_tag_ids_replace_tag_set(self, client, db):
        tags = [client.post("/api/tags", json={"name": name}).json() for name in ("A", "B", "C")]
        deal = create_deal(client, tagIds=[tags[0]["id"], tags[1]["id"]])

        resp = client.put(f"/api/deals/{deal['id']}", json={"tagIds": [tags[1]["id"], tags[2]["id"]]})
        assert resp.status_code == 200
        assert sorted(tag["name"] for tag in resp.json()["tags"]) == ["B", "C"]

        resp = client.put(f"/api/deals/{deal['id']}", json={"tagIds": []})
        assert resp.json()["tags"] == []
        assert db.query(DealTag).count() == 0

    def test_update_without_tag_ids_keeps_tags(self, client, vip_tag):
        deal = create_deal(client, tagIds=[vip_tag.id])
        resp = client.put(f"/api/deals/{deal['id']}", json={"stage": "Proposal"})
        assert [tag["name"] for tag in resp.json()["tags"]] == ["VIP"]

    def test_logs_updated_activity(self, client, db, user):
        deal = create_deal(client)
        client.put(f"/api/deals/{deal['id']}", json={"stage": "Proposal", "userId": user.id})
        entry = (
            db.query(ActivityLog)
            .filter(ActivityLog.action == "Updated deal")
            .one()
        )
        assert entry.user_id == user.id
        assert entry.details["changes"] == {"stage": "Proposal"}


class TestDeleteDeal:
    def test_cascade_removes_owned_rows(self, client, db, user, vip_tag):
        deal = create_deal(client, tagIds=[vip_tag.id], userId=user.id)
        deal_id = deal["id"]
        client.post(
            f"/api/deals/{deal_id}/resources",
            json={"name": "Deck", "url": "https://docs.test/deck", "type": "link"},
        )
        client.post(f"/api/deals/{deal_id}/comments", json={"userId": user.id, "content": "Hi"})

        assert client.delete(f"/api/deals/{deal_id}").status_code == 204
        assert client.get(f"/api/deals/{deal_id}").status_code == 404

        db.expire_all()
        for model in (Resource, Comment, DealTag, ActivityLog):
            assert db.query(model).filter(model.deal_id == deal_id).count() == 0
        # The tag itself survives
        assert client.get(f"/api/tags/{vip_tag.id}").status_code == 200

    def test_delete_unknown_is_404(self, client):
        assert client.delete("/api/deals/999").status_code == 404


class TestDealTags:
    def test_add_tag_twice_keeps_single_link(self, client, db, vip_tag):
        deal = create_deal(client)
        first = client.post(f"/api/deals/{deal['id']}/tags/{vip_tag.id}")
        second = client.post(f"/api/deals/{deal['id']}/tags/{vip_tag.id}")

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["id"] == second.json()["id"]
        assert first.json()["dealId"] == deal["id"]
        assert first.json()["tagId"] == vip_tag.id
        assert db.query(DealTag).filter(DealTag.deal_id == deal["id"]).count() == 1

    def test_list_deal_tags(self, client, vip_tag):
        deal = create_deal(client, tagIds=[vip_tag.id])
        resp = client.get(f"/api/deals/{deal['id']}/tags")
        assert resp.status_code == 200
        assert [tag["name"] for tag in resp.json()] == ["VIP"]

    def test_link_unknown_deal_or_tag_is_404(self, client, vip_tag):
        deal = create_deal(client)
        assert client.post(f"/api/deals/999/tags/{vip_tag.id}").status_code == 404
        assert client.post(f"/api/deals/{deal['id']}/tags/999").status_code == 404

    def test_remove_tag(self, client, vip_tag):
        deal = create_deal(client, tagIds=[vip_tag.id])
        assert client.delete(f"/api/deals/{deal['id']}/tags/{vip_tag.id}").status_code == 204
        assert client.get(f"/api/deals/{deal['id']}").json()["tags"] == []

    def test_remove_missing_link_is_404(self, client, vip_tag):
        deal = create_deal(client)
        resp = client.delete(f"/api/deals/{deal['id']}/tags/{vip_tag.id}")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Deal tag not found"


class TestDealCustomFieldValues:
    def test_values_validated_and_coerced(self, client):
        client.post("/api/custom-fields", json={"name": "Headcount", "type": "number"})
        client.post(
            "/api/custom-fields",
            json={"name": "Region", "type": "enum", "required": True, "options": ["EMEA", "APAC"]},
        )

        deal = create_deal(client, customFieldValues={"Headcount": "120", "Region": "EMEA"})
        assert deal["customFieldValues"] == {"Headcount": 120, "Region": "EMEA"}

    def test_invalid_values_are_400(self, client):
        client.post(
            "/api/custom-fields",
            json={"name": "Region", "type": "enum", "required": True, "options": ["EMEA"]},
        )

        missing = client.post("/api/deals", json={"company": "A", "dealType": "V"})
        assert missing.status_code == 400
        assert "Region" in missing.json()["detail"]

        bad_option = client.post(
            "/api/deals",
            json={"company": "A", "dealType": "V", "customFieldValues": {"Region": "LATAM"}},
        )
        assert bad_option.status_code == 400

        unknown = client.post(
            "/api/deals",
            json={"company": "A", "dealType": "V", "customFieldValues": {"Region": "EMEA", "Color": "red"}},
        )
        assert unknown.status_code == 400
        assert "Color" in unknown.json()["detail"]

    def test_update_replaces_values(self, client):
        client.post("/api/custom-fields", json={"name": "Tier", "type": "text"})
        deal = create_deal(client, customFieldValues={"Tier": "Gold"})

        resp = client.put(f"/api/deals/{deal['id']}", json={"customFieldValues": {}})
        assert resp.status_code == 200
        assert resp.json()["customFieldValues"] == {}

    def test_non_finite_number_is_400(self, client):
        client.post("/api/custom-fields", json={"name": "Score", "type": "number", "required": True})

        for value in ("nan", "inf", "1e400"):
            resp = client.post(
                "/api/deals",
                json={"company": "A", "dealType": "V", "customFieldValues": {"Score": value}},
            )
            assert resp.status_code == 400
            assert "Score" in resp.json()["detail"]
        assert client.get("/api/deals").json() == []
