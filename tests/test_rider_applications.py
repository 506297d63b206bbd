from app.shared.database.models import RiderApplication, User
from conftest import ADMIN_EMAIL, RIDER_EMAIL, USER_EMAIL, auth, make_parcel, make_rider, make_user, reload


APPLICATION_PAYLOAD = {
    "name": "Karim",
    "phone": "01700000000",
    "age": 27,
    "national_id": "1990123456789",
    "region": "Dhaka",
    "district": "Mirpur",
    "bike_brand": "Yamaha",
    "bike_registration": "DHA-LA-1234",
    "identity_document_url": "https://files.example.com/nid.png",
}


def test_submit_application(client, sender, db):
    response = client.post("/riderApplications", json=APPLICATION_PAYLOAD, headers=auth(USER_EMAIL))

    assert response.status_code == 201
    application = response.json()["application"]
    assert application["email"] == USER_EMAIL
    assert application["status"] == "pending"
    assert application["work_status"] is None


def test_duplicate_application_is_rejected(client, sender, db):
    client.post("/riderApplications", json=APPLICATION_PAYLOAD, headers=auth(USER_EMAIL))
    response = client.post("/riderApplications", json=APPLICATION_PAYLOAD, headers=auth(USER_EMAIL))

    assert response.status_code == 409
    assert db.query(RiderApplication).count() == 1


def test_reapply_after_rejection(client, sender, db):
    make_rider(db, email=USER_EMAIL, status="rejected", work_status=None)
    response = client.post("/riderApplications", json=APPLICATION_PAYLOAD, headers=auth(USER_EMAIL))
    assert response.status_code == 201


def test_list_applications_by_status(client, admin, db):
    make_rider(db, email="a@example.com", status="pending", work_status=None)
    make_rider(db, email="b@example.com")

    pending = client.get("/riderApplications", params={"status": "pending"}, headers=auth(ADMIN_EMAIL))

    assert pending.status_code == 200
    assert [a["email"] for a in pending.json()["applications"]] == ["a@example.com"]
    assert client.get("/riderApplications", headers=auth(ADMIN_EMAIL)).json()["count"] == 2


def test_get_application(client, admin, rider):
    assert client.get(f"/riderApplications/{rider.id}", headers=auth(ADMIN_EMAIL)).status_code == 200
    assert client.get("/riderApplications/999", headers=auth(ADMIN_EMAIL)).status_code == 404


def test_approval_makes_user_a_rider(client, admin, db):
    applicant = make_user(db, RIDER_EMAIL)
    application = make_rider(db, status="pending", work_status=None)

    response = client.patch(f"/riderApplications/{application.id}/status", json={"status": "approved"},
                            headers=auth(ADMIN_EMAIL))

    assert response.status_code == 200
    body = response.json()
    assert body["previous_status"] == "pending"
    assert body["user_role"] == "rider"
    assert body["application"]["work_status"] == "available"
    assert reload(db, applicant).role == "rider"


def test_deactivation_returns_role_to_user(client, admin, rider_user, rider, db):
    response = client.patch(f"/riderApplications/{rider.id}/status", json={"status": "inactive"},
                            headers=auth(ADMIN_EMAIL))

    assert response.status_code == 200
    assert reload(db, rider).work_status is None
    assert reload(db, rider_user).role == "user"


def test_rider_in_delivery_cannot_be_deactivated(client, admin, rider_user, db):
    rider = make_rider(db, work_status="in-delivery")
    make_parcel(db, delivery_status="in_transit", rider=rider)

    response = client.patch(f"/riderApplications/{rider.id}/status", json={"status": "rejected"},
                            headers=auth(ADMIN_EMAIL))

    assert response.status_code == 409
    assert reload(db, rider).status == "approved"
    assert db.query(User).filter(User.email == RIDER_EMAIL).one().role == "rider"


def test_review_requires_admin(client, sender, rider):
    response = client.patch(f"/riderApplications/{rider.id}/status", json={"status": "approved"},
                            headers=auth(USER_EMAIL))
    assert response.status_code == 403


def test_cannot_reapprove_while_another_application_is_active(client, admin, db):
    old = make_rider(db, status="rejected", work_status=None)
    make_rider(db)

    response = client.patch(f"/riderApplications/{old.id}/status", json={"status": "approved"},
                            headers=auth(ADMIN_EMAIL))

    assert response.status_code == 409
    assert reload(db, old).status == "rejected"
    assert db.query(RiderApplication).filter(RiderApplication.status == "approved").count() == 1


def test_cannot_reopen_while_another_application_is_active(client, admin, db):
    old = make_rider(db, status="rejected", work_status=None)
    make_rider(db, status="pending", work_status=None)

    response = client.patch(f"/riderApplications/{old.id}/status", json={"status": "pending"},
                            headers=auth(ADMIN_EMAIL))

    assert response.status_code == 409


def test_reapproving_the_same_application_is_allowed(client, admin, rider):
    response = client.patch(f"/riderApplications/{rider.id}/status", json={"status": "approved"},
                            headers=auth(ADMIN_EMAIL))
    assert response.status_code == 200
