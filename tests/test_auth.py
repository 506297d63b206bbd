from types import SimpleNamespace

from app.core.auth import policy
from conftest import ADMIN_EMAIL, OTHER_EMAIL, USER_EMAIL, auth, make_parcel


def test_missing_token_is_401(client):
    response = client.get("/parcels")
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "unauthenticated"


def test_rejected_token_is_403(client):
    response = client.get("/parcels", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 403
    assert response.json()["error_code"] == "forbidden"


def test_unregistered_caller_cannot_use_admin_routes(client):
    response = client.get("/riders", headers=auth("stranger@example.com"))
    assert response.status_code == 403


def test_plain_user_cannot_use_admin_routes(client, sender):
    response = client.get("/riderApplications", headers=auth(USER_EMAIL))
    assert response.status_code == 403


def test_admin_route_allows_admin(client, admin):
    response = client.get("/riders", headers=auth(ADMIN_EMAIL))
    assert response.status_code == 200
    assert response.json()["count"] == 0


def test_public_endpoints(client):
    assert client.get("/").json()["message"] == "Parcel Delivery Server is Running"
    health = client.get("/health").json()
    assert health["status"] == "healthy"


def test_validation_errors_are_400(client, sender, db):
    response = client.post("/parcels", json={"title": "x"}, headers=auth(USER_EMAIL))
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "validation_error"
    assert body["details"]


class TestPolicy:
    def test_is_allowed_requires_a_role(self):
        assert not policy.is_allowed(None, ["admin"])
        assert policy.is_allowed("admin", ["rider", "admin"])
        assert not policy.is_allowed("user", ["rider", "admin"])

    def test_can_act_for(self):
        assert policy.can_act_for(USER_EMAIL, "user", None)
        assert policy.can_act_for(USER_EMAIL, "user", USER_EMAIL.upper())
        assert not policy.can_act_for(USER_EMAIL, "user", OTHER_EMAIL)
        assert policy.can_act_for(ADMIN_EMAIL, "admin", OTHER_EMAIL)

    def test_parcel_rules(self):
        parcel = SimpleNamespace(created_by=USER_EMAIL, assigned_rider_email="rider@example.com")

        assert policy.can_view_parcel(USER_EMAIL, "user", parcel)
        assert policy.can_view_parcel("rider@example.com", "rider", parcel)
        assert not policy.can_view_parcel(OTHER_EMAIL, "user", parcel)

        assert policy.can_manage_parcel(USER_EMAIL, "user", parcel)
        assert not policy.can_manage_parcel("rider@example.com", "rider", parcel)

        assert policy.can_update_delivery("rider@example.com", "rider", parcel)
        assert not policy.can_update_delivery(OTHER_EMAIL, "rider", parcel)
        assert not policy.can_update_delivery(USER_EMAIL, "user", parcel)
        assert policy.can_update_delivery(ADMIN_EMAIL, "admin", parcel)

    def test_unassigned_parcel_has_no_rider(self, db):
        parcel = make_parcel(db)
        assert not policy.is_assigned_rider("rider@example.com", parcel)
