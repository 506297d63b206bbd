from conftest import USER_EMAIL, auth, make_parcel


def add_event(client, **overrides):
    payload = {
        "tracking_id": "PCL-TRACK-1",
        "status": "Parcel picked up",
        "location": "Mirpur hub",
        "updated_by": "rider@example.com",
    }
    payload.update(overrides)
    return client.post("/tracking", json=payload, headers=auth(USER_EMAIL))


def test_history_is_newest_first(client, sender):
    first = add_event(client)
    second = add_event(client, status="In transit", location="Dhaka sorting center")

    assert first.status_code == 201
    assert second.status_code == 201

    response = client.get("/tracking/PCL-TRACK-1", headers=auth(USER_EMAIL))

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [e["status"] for e in body["events"]] == ["In transit", "Parcel picked up"]


def test_history_is_per_tracking_id(client, sender):
    add_event(client)
    add_event(client, tracking_id="PCL-TRACK-2")
    assert client.get("/tracking/PCL-TRACK-2", headers=auth(USER_EMAIL)).json()["count"] == 1


def test_unknown_tracking_id_is_404(client, sender):
    assert client.get("/tracking/PCL-NOPE", headers=auth(USER_EMAIL)).status_code == 404


def test_event_can_reference_a_parcel(client, sender, db):
    parcel = make_parcel(db)
    response = add_event(client, tracking_id=parcel.tracking_id, parcel_id=parcel.id)
    assert response.status_code == 201
    assert response.json()["event"]["parcel_id"] == parcel.id

    assert add_event(client, parcel_id=999).status_code == 404


def test_missing_fields_are_400(client, sender):
    response = client.post("/tracking", json={"tracking_id": "PCL-TRACK-1"}, headers=auth(USER_EMAIL))
    assert response.status_code == 400


def test_tracking_requires_authentication(client):
    assert client.get("/tracking/PCL-TRACK-1").status_code == 401
