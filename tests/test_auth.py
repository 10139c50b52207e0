from classroom_api.models.user import Role, UserModel
from tests.conftest import PASSWORD, auth


def test_signup_returns_token_for_new_teacher(client, signup):
    user_id, headers = signup("tina", 3, name="Tina")
    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    body = me.json()
    assert body["id"] == user_id
    assert body["roleId"] == 3
    assert body["name"] == "Tina"
    assert body["classroomId"] is None
    assert "passwordHash" not in body


def test_signup_rejects_student_role(client):
    resp = client.post(
        "/auth/signup", json={"username": "kid", "password": PASSWORD, "roleId": 1}
    )
    assert resp.status_code == 400
    assert "Invalid role" in resp.json()["message"]


def test_signup_rejects_duplicate_username(client, signup):
    signup("dup", 2)
    resp = client.post(
        "/auth/signup", json={"username": "dup", "password": PASSWORD, "roleId": 3}
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Username already exists"}


def test_signup_with_missing_fields_is_a_validation_error(client):
    resp = client.post("/auth/signup", json={"username": "nopass"})
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_login(client, signup):
    signup("lena", 2)
    ok = client.post("/auth/login", json={"username": "lena", "password": PASSWORD})
    assert ok.status_code == 200
    assert ok.json()["token"]

    bad = client.post("/auth/login", json={"username": "lena", "password": "wrong"})
    assert bad.status_code == 401
    assert bad.json() == {"message": "Invalid credentials"}

    unknown = client.post("/auth/login", json={"username": "ghost", "password": PASSWORD})
    assert unknown.status_code == 401


def test_missing_and_invalid_tokens(client):
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token provided"}

    resp = client.get("/auth/me", headers=auth("not-a-jwt"))
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_register_child_links_student_to_parent(client, parent):
    parent_id, headers = parent
    resp = client.post(
        "/auth/register-child",
        headers=headers,
        json={"username": "kiddo", "password": PASSWORD, "name": "Kim"},
    )
    assert resp.status_code == 201
    child = resp.json()["child"]
    assert child["roleId"] == 1
    assert child["username"] == "kiddo"

    children = client.get("/parent/children", headers=headers).json()
    assert [c["id"] for c in children] == [child["id"]]


def test_register_child_requires_parent(client, teacher):
    _, headers = teacher
    resp = client.post(
        "/auth/register-child",
        headers=headers,
        json={"username": "kiddo", "password": PASSWORD},
    )
    assert resp.status_code == 403
    assert resp.json() == {"message": "Only parents can perform this action"}


def test_register_child_with_taken_username_creates_nothing(client, parent, register_child):
    _, headers = parent
    register_child(headers, "twin")
    resp = client.post(
        "/auth/register-child", headers=headers, json={"username": "twin", "password": PASSWORD}
    )
    assert resp.status_code == 400
    assert len(client.get("/parent/children", headers=headers).json()) == 1


def test_role_is_read_from_store_not_token(client, db, parent):
    parent_id, headers = parent
    assert client.get("/users", headers=headers).status_code == 403

    user = db.query(UserModel).filter(UserModel.id == parent_id).one()
    user.role_id = int(Role.TEACHER)
    db.commit()

    assert client.get("/users", headers=headers).status_code == 200


def test_token_of_deleted_user_is_rejected(client, db, parent):
    parent_id, headers = parent
    db.query(UserModel).filter(UserModel.id == parent_id).delete()
    db.commit()

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["name"] == "Classroom API"


def test_unknown_route_renders_message(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert "message" in resp.json()
