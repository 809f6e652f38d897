from conftest import auth_headers


def test_register_creates_owner(client):
    response = client.post("/api/users", json={
        "full_name": "New Owner", "email": "new@example.com", "password": "pw12345",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "owner"
    assert body["is_active"] is True

    login = client.post("/api/auth/login", json={"email": "new@example.com", "password": "pw12345"})
    assert login.status_code == 200


def test_register_duplicate_email(client, owner):
    response = client.post("/api/users", json={
        "full_name": "Dup", "email": owner.email, "password": "x",
    })
    assert response.status_code == 400


def test_register_missing_fields_is_bad_request(client):
    response = client.post("/api/users", json={"email": "x@example.com"})
    assert response.status_code == 400


def test_me(client, owner, headers):
    response = client.get("/api/users/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["id"] == owner.id


def test_list_users_admin_only(client, owner, admin, headers):
    assert client.get("/api/users", headers=headers).status_code == 403

    response = client.get("/api/users", headers=auth_headers(admin))
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {owner.email, admin.email}


def test_owner_cannot_read_other_user(client, other_owner, headers):
    response = client.get(f"/api/users/{other_owner.id}", headers=headers)
    assert response.status_code == 403


def test_update_keeps_unspecified_fields(client, owner, headers):
    response = client.put(f"/api/users/{owner.id}", json={"full_name": "Renamed"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["full_name"] == "Renamed"
    assert response.json()["email"] == owner.email


def test_owner_cannot_change_own_role(client, owner, headers):
    response = client.put(f"/api/users/{owner.id}", json={"role": "admin"}, headers=headers)
    assert response.status_code == 403


def test_soft_delete_user(client, db, owner, admin):
    response = client.delete(f"/api/users/{owner.id}", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["user"]["is_active"] is False

    db.refresh(owner)
    assert owner.is_active is False
    assert client.get(f"/api/users/{owner.id}", headers=auth_headers(admin)).status_code == 404
    # Token of a deactivated user no longer works
    assert client.get("/api/users/me", headers=auth_headers(owner)).status_code == 403
