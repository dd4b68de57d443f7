"""Tests for user profile endpoints."""

import pytest


@pytest.fixture
def alice_profile(client, alice_headers):
    response = client.post("/api/v1/user", headers=alice_headers, json={"display_name": "Alice A."})
    assert response.status_code == 201
    return response.json()


class TestSelfService:
    """Users manage their own profile."""

    def test_upsert_creates_then_updates(self, client, alice_headers, alice_profile):
        assert alice_profile["email"] == "alice@example.com"
        assert alice_profile["currency"] == "EUR"
        assert alice_profile["status"] == "active"
        assert alice_profile["roles"] == []

        response = client.post("/api/v1/user", headers=alice_headers, json={"locale": "de-DE"})
        assert response.status_code == 200
        assert response.json()["display_name"] == "Alice A."
        assert response.json()["locale"] == "de-DE"

    def test_upsert_without_body(self, client, bob_headers):
        response = client.post("/api/v1/user", headers=bob_headers)
        assert response.status_code == 201
        assert response.json()["email"] == "bob@example.com"

    def test_new_profile_seeds_categories(self, client, bob_headers, test_settings, monkeypatch):
        monkeypatch.setattr(test_settings, "seed_default_categories", True)
        client.post("/api/v1/user", headers=bob_headers, json={})

        tree = client.get("/api/v1/categories/tree", headers=bob_headers).json()
        names = [node["name"] for node in tree["items"]]
        assert names[0] == "Income"
        assert "Food" in names
        food = next(node for node in tree["items"] if node["name"] == "Food")
        assert {child["name"] for child in food["children"]} == {"Groceries", "Restaurants"}

    def test_get_me_merges_provider_account(self, client, alice_headers):
        response = client.get("/api/v1/user/me", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["display_name"] == "Alice"

    def test_get_me_unknown(self, client, bob_headers):
        response = client.get("/api/v1/user/me", headers=bob_headers)
        assert response.status_code == 404

    def test_update_me(self, client, alice_headers, alice_profile, identity_provider):
        response = client.patch("/api/v1/user/me", headers=alice_headers, json={
            "display_name": "Ally",
            "currency": "chf",
        })
        assert response.status_code == 200
        assert response.json()["display_name"] == "Ally"
        assert response.json()["currency"] == "CHF"
        assert ("alice-uid", {"display_name": "Ally"}) in identity_provider.updates

    def test_clearing_fields_reaches_provider(self, client, alice_headers, alice_profile, identity_provider):
        response = client.patch("/api/v1/user/me", headers=alice_headers, json={
            "display_name": None,
            "photo_url": None,
        })
        assert response.status_code == 200
        assert ("alice-uid", {"display_name": None, "photo_url": None}) in identity_provider.updates

    def test_update_me_rejects_privileged_fields(self, client, alice_headers, alice_profile):
        response = client.put("/api/v1/user/me", headers=alice_headers, json={"roles": ["admin"]})
        assert response.status_code == 400

        response = client.put("/api/v1/user/me", headers=alice_headers, json={"status": "active"})
        assert response.status_code == 400

    def test_sync_failure_does_not_fail_update(self, client, alice_headers, alice_profile, identity_provider, caplog):
        identity_provider.fail_sync = True
        response = client.patch("/api/v1/user/me", headers=alice_headers, json={"display_name": "Ally"})
        assert response.status_code == 200
        assert response.json()["display_name"] == "Ally"
        assert "Identity provider sync failed" in caplog.text


class TestAdmin:
    """Admins manage any profile."""

    def test_grant_role(self, client, admin_headers, alice_headers, alice_profile):
        response = client.patch("/api/v1/user/alice-uid", headers=admin_headers, json={"roles": ["admin", "admin"]})
        assert response.status_code == 200
        assert response.json()["roles"] == ["admin"]

        response = client.get("/api/v1/user/bob-uid", headers=alice_headers)
        assert response.status_code == 404

    def test_disable_syncs_provider(self, client, admin_headers, alice_headers, alice_profile, identity_provider):
        response = client.put("/api/v1/user/alice-uid", headers=admin_headers, json={"status": "disabled"})
        assert response.status_code == 200
        assert response.json()["status"] == "disabled"
        assert ("alice-uid", {"disabled": True}) in identity_provider.updates

        assert client.get("/api/v1/user/me", headers=alice_headers).status_code == 403

    def test_update_missing_profile(self, client, admin_headers):
        response = client.patch("/api/v1/user/ghost", headers=admin_headers, json={"locale": "en"})
        assert response.status_code == 404

    def test_soft_delete(self, client, admin_headers, alice_profile, store, identity_provider):
        response = client.delete("/api/v1/user/alice-uid", headers=admin_headers)
        assert response.status_code == 204
        assert store.get_user("alice-uid")["status"] == "deleted"
        assert ("alice-uid", {"disabled": True}) in identity_provider.updates
        assert identity_provider.deleted == []

    def test_hard_delete(self, client, admin_headers, alice_profile, store, identity_provider):
        response = client.delete("/api/v1/user/alice-uid", headers=admin_headers, params={"hard": "true"})
        assert response.status_code == 204
        assert store.get_user("alice-uid") is None
        assert identity_provider.deleted == ["alice-uid"]

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/v1/user/ghost", headers=admin_headers)
        assert response.status_code == 404
