from app.shared.database.models import User
from conftest import ADMIN_EMAIL, OTHER_EMAIL, USER_EMAIL, auth, make_user


def test_first_login_creates_user(client, db):
    response = client.post("/users", json={"name": "Sender", "photo_url": "https://img.example.com/a.png"},
                           headers=auth(USER_EMAIL))

    assert response.status_code == 201
    body = response.json()
    assert body["inserted"] is True
    assert body["user"]["email"] == USER_EMAIL
    assert body["user"]["role"] == "user"
    assert db.query(User).count() == 1


def test_second_login_does_not_duplicate(client, db):
    client.post("/users", json={}, headers=auth(USER_EMAIL))
    response = client.post("/users", json={"name": "Renamed"}, headers=auth(USER_EMAIL))

    assert response.status_code == 200
    assert response.json()["inserted"] is False
    assert db.query(User).count() == 1


def test_email_comes_from_token(client, db):
    response = client.post("/users", json={"name": "Someone"}, headers=auth("Mixed.Case@Example.com"))
    assert response.json()["user"]["email"] == "mixed.case@example.com"


def test_get_own_role(client, sender):
    response = client.get(f"/users/{USER_EMAIL}/role", headers=auth(USER_EMAIL))
    assert response.status_code == 200
    assert response.json() == {"email": USER_EMAIL, "role": "user"}


def test_cannot_read_other_users_role(client, sender, db):
    make_user(db, OTHER_EMAIL)
    response = client.get(f"/users/{OTHER_EMAIL}/role", headers=auth(USER_EMAIL))
    assert response.status_code == 403


def test_admin_reads_any_role_and_unknown_is_404(client, admin, sender):
    assert client.get(f"/users/{USER_EMAIL}/role", headers=auth(ADMIN_EMAIL)).json()["role"] == "user"
    assert client.get("/users/ghost@example.com/role", headers=auth(ADMIN_EMAIL)).status_code == 404


def test_search_is_case_insensitive_and_limited(client, admin, db):
    for i in range(12):
        make_user(db, f"customer{i}@example.com")

    response = client.get("/users/search", params={"email": "CUSTOMER"}, headers=auth(ADMIN_EMAIL))

    assert response.status_code == 200
    assert response.json()["count"] == 10


def test_search_requires_admin(client, sender):
    response = client.get("/users/search", params={"email": "a"}, headers=auth(USER_EMAIL))
    assert response.status_code == 403


def test_admin_changes_role(client, admin, sender, db):
    response = client.patch(f"/users/{sender.id}/role", json={"role": "admin"}, headers=auth(ADMIN_EMAIL))

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    db.expire_all()
    assert db.get(User, sender.id).role == "admin"


def test_change_role_rejects_unknown_role(client, admin, sender):
    response = client.patch(f"/users/{sender.id}/role", json={"role": "superuser"}, headers=auth(ADMIN_EMAIL))
    assert response.status_code == 400


def test_change_role_unknown_user(client, admin):
    response = client.patch("/users/999/role", json={"role": "rider"}, headers=auth(ADMIN_EMAIL))
    assert response.status_code == 404
