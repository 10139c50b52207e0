import pytest

from classroom_api import config


@pytest.fixture()
def lesson(client, teacher, enrolled):
    _, headers = teacher
    resp = client.post(
        "/lessons",
        headers=headers,
        json={"name": "Fractions", "description": "Halves", "classroomId": enrolled["id"]},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _upload(client, headers, lesson_id, name="notes.txt", content=b"hello"):
    return client.post(
        f"/lessons/{lesson_id}/summary",
        headers=headers,
        files={"file": (name, content, "text/plain")},
    )


def test_lesson_crud(client, teacher, student, lesson, enrolled):
    _, headers = teacher
    _, student_headers = student
    assert lesson["gameIds"] == []
    assert lesson["classroomId"] == enrolled["id"]

    listed = client.get(f"/lessons/classroom/{enrolled['id']}", headers=student_headers).json()
    assert [item["id"] for item in listed] == [lesson["id"]]
    assert client.get(f"/lessons/{lesson['id']}", headers=student_headers).status_code == 200

    resp = client.put(f"/lessons/{lesson['id']}", headers=headers, json={"name": "Decimals"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Decimals"
    assert resp.json()["description"] == "Halves"

    assert client.delete(f"/lessons/{lesson['id']}", headers=headers).status_code == 200
    assert client.get(f"/lessons/{lesson['id']}", headers=headers).status_code == 404


def test_lesson_games_must_exist(client, teacher, lesson, enrolled):
    _, headers = teacher
    game = client.post("/games", headers=headers, json={"name": "Quiz"}).json()

    resp = client.post(
        "/lessons",
        headers=headers,
        json={"name": "Bad", "classroomId": enrolled["id"], "gameIds": ["nope"]},
    )
    assert resp.status_code == 400

    resp = client.put(f"/lessons/{lesson['id']}", headers=headers, json={"gameIds": [game["id"]]})
    assert resp.json()["gameIds"] == [game["id"]]


def test_lesson_permissions(client, signup, student, lesson, enrolled):
    _, student_headers = student
    _, outsider_headers = signup("outsider", 3)

    assert client.get(f"/lessons/{lesson['id']}", headers=outsider_headers).status_code == 403
    assert client.get(f"/lessons/classroom/{enrolled['id']}", headers=outsider_headers).status_code == 403
    resp = client.put(f"/lessons/{lesson['id']}", headers=outsider_headers, json={"name": "x"})
    assert resp.status_code == 403
    resp = client.post(
        "/lessons", headers=student_headers, json={"name": "x", "classroomId": enrolled["id"]}
    )
    assert resp.status_code == 403
    resp = client.post(
        "/lessons", headers=outsider_headers, json={"name": "x", "classroomId": "missing"}
    )
    assert resp.status_code == 404


def test_summary_upload_download_and_replace(client, teacher, student, lesson, tmp_path):
    _, headers = teacher
    _, student_headers = student
    upload_dir = tmp_path / "uploads"

    resp = _upload(client, headers, lesson["id"])
    assert resp.status_code == 201
    assert resp.json()["fileName"] == "notes.txt"

    resp = client.get(f"/lessons/{lesson['id']}/summary", headers=student_headers)
    assert resp.status_code == 200
    assert resp.content == b"hello"
    assert "notes.txt" in resp.headers["content-disposition"]

    assert _upload(client, headers, lesson["id"], "v2.txt", b"second").status_code == 201
    assert len(list(upload_dir.iterdir())) == 1
    assert client.get(f"/lessons/{lesson['id']}/summary", headers=headers).content == b"second"

    assert _upload(client, student_headers, lesson["id"]).status_code == 403
    assert client.delete(f"/lessons/{lesson['id']}/summary", headers=headers).status_code == 200
    assert list(upload_dir.iterdir()) == []
    assert client.get(f"/lessons/{lesson['id']}/summary", headers=headers).status_code == 404


def test_empty_or_missing_upload_is_rejected(client, teacher, lesson):
    _, headers = teacher
    resp = _upload(client, headers, lesson["id"], content=b"")
    assert resp.status_code == 400
    resp = client.post(f"/lessons/{lesson['id']}/summary", headers=headers)
    assert resp.status_code == 400


def test_oversized_upload_keeps_previous_summary(client, teacher, lesson, monkeypatch):
    _, headers = teacher
    _upload(client, headers, lesson["id"], content=b"small")
    monkeypatch.setattr(config, "MAX_UPLOAD_SIZE", 4)

    resp = _upload(client, headers, lesson["id"], content=b"too large")
    assert resp.status_code == 400
    assert client.get(f"/lessons/{lesson['id']}/summary", headers=headers).content == b"small"


def test_deleting_lesson_removes_summary_file(client, teacher, lesson, tmp_path):
    _, headers = teacher
    _upload(client, headers, lesson["id"])
    assert client.delete(f"/lessons/{lesson['id']}", headers=headers).status_code == 200
    assert list((tmp_path / "uploads").iterdir()) == []
