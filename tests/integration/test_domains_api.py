"""Integration tests for the domain endpoints"""

import pytest

from mailconfig.models.allow_deny import AllowDenyList


pytestmark = pytest.mark.integration


class TestListDomains:
    def test_lists_own_domains_with_flags(self, alice_client, example_domain):
        response = alice_client.get("/api/domain/list")

        assert response.status_code == 200
        assert response.json() == {
            "domains": {
                "example.com": {
                    "sender-verify": True,
                    "grey-listing": False,
                    "virus-check": True,
                    "spamcheck-threshold": 100,
                }
            }
        }

    def test_other_users_domains_not_listed(self, bob_client, example_domain):
        assert bob_client.get("/api/domain/list").json() == {"domains": {}}


class TestSetFlags:
    def test_owner_sets_flags(self, alice_client, example_domain):
        response = alice_client.post("/api/domain/set-flags", json={
            "domain-name": "example.com",
            "remote-mx": "mx.relay.test",
            "grey-listing": True,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["remote-mx"] == "mx.relay.test"
        assert body["grey-listing"] is True

    def test_non_owner_denied(self, bob_client, example_domain):
        response = bob_client.post("/api/domain/set-flags", json={
            "domain-name": "example.com",
            "grey-listing": True,
        })

        assert response.status_code == 403
        assert response.json()["error"] == {
            "kind": "permission-denied",
            "category": "forbidden",
            "why": "example.com",
            "message": "Permission denied accessing: example.com",
        }

    def test_owner_cannot_give_domain_away(self, alice_client, example_domain, bob):
        response = alice_client.post("/api/domain/set-flags", json={
            "domain-name": "example.com",
            "owner": "bob",
        })

        assert response.status_code == 403

    def test_superuser_reassigns_owner(self, root_client, alice_client, bob_client, example_domain):
        response = root_client.post("/api/domain/set-flags", json={
            "domain-name": "example.com",
            "owner": "bob",
        })

        assert response.status_code == 200
        assert "example.com" in bob_client.get("/api/domain/list").json()["domains"]
        assert alice_client.get("/api/domain/list").json()["domains"] == {}

    def test_unknown_domain(self, alice_client):
        response = alice_client.post("/api/domain/set-flags", json={"domain-name": "nowhere.test"})

        assert response.status_code == 404
        assert response.json()["error"]["item"] == "nowhere.test"

    def test_unknown_field_rejected(self, alice_client, example_domain):
        response = alice_client.post("/api/domain/set-flags", json={
            "domain-name": "example.com",
            "colour": "blue",
        })

        assert response.status_code == 422

    def test_snake_case_keys_rejected(self, alice_client, example_domain):
        response = alice_client.post("/api/domain/set-flags", json={
            "domain_name": "example.com",
            "grey_listing": True,
        })

        assert response.status_code == 422
        assert alice_client.get("/api/domain/list").json()["domains"]["example.com"]["grey-listing"] is False


class TestCreateDomain:
    def test_superuser_creates_domain_for_user(self, root_client, alice_client):
        response = root_client.post("/api/domain/new", json={"domain-name": "fresh.test", "owner": "alice"})

        assert response.status_code == 200
        assert response.json() == {
            "sender-verify": True,
            "grey-listing": False,
            "virus-check": True,
            "spamcheck-threshold": 100,
        }
        assert "fresh.test" in alice_client.get("/api/domain/list").json()["domains"]

    def test_ordinary_user_denied(self, alice_client):
        response = alice_client.post("/api/domain/new", json={"domain-name": "fresh.test"})

        assert response.status_code == 403
        assert response.json()["error"]["why"] == "You are not permitted to create domains"

    def test_unknown_owner(self, root_client):
        response = root_client.post("/api/domain/new", json={"domain-name": "fresh.test", "owner": "mallory"})

        assert response.status_code == 404
        assert response.json()["error"]["item"] == "Unknown user mallory"

    def test_duplicate_domain(self, root_client, example_domain):
        response = root_client.post("/api/domain/new", json={"domain-name": "example.com"})

        assert response.status_code == 500
        assert response.json()["error"]["kind"] == "database-error"


class TestAllowDeny:
    def test_lists_rules(self, alice_client, db_session, example_domain):
        db_session.add(AllowDenyList(maildomain=example_domain.id, allow=True, value="friend@x"))
        db_session.add(AllowDenyList(maildomain=example_domain.id, allow=False, value="spam@x"))
        db_session.commit()

        response = alice_client.get("/api/domain/allow-deny/example.com")

        assert response.status_code == 200
        assert response.json() == {"allow": ["friend@x"], "deny": ["spam@x"]}

    def test_non_owner_denied(self, bob_client, example_domain):
        assert bob_client.get("/api/domain/allow-deny/example.com").status_code == 403
