def test_game_crud(client, teacher, student):
    _, headers = teacher
    _, student_headers = student

    created = client.post("/games", headers=headers, json={"name": "Quiz"})
    assert created.status_code == 201
    game = created.json()

    assert client.get("/games", headers=student_headers).json() == [game]
    assert client.get(f"/games/{game['id']}", headers=student_headers).json() == game

    renamed = client.put(f"/games/{game['id']}", headers=headers, json={"name": "Trivia"})
    assert renamed.json()["name"] == "Trivia"

    assert client.delete(f"/games/{game['id']}", headers=headers).status_code == 200
    assert client.get(f"/games/{game['id']}", headers=headers).status_code == 404
    assert client.delete(f"/games/{game['id']}", headers=headers).status_code == 404


def test_only_teachers_write_games(client, student):
    _, headers = student
    assert client.post("/games", headers=headers, json={"name": "Quiz"}).status_code == 403
    assert client.get("/games").status_code == 401


def test_deleting_game_detaches_it_from_lessons(client, teacher, enrolled):
    _, headers = teacher
    keep = client.post("/games", headers=headers, json={"name": "Keep"}).json()
    drop = client.post("/games", headers=headers, json={"name": "Drop"}).json()
    lesson = client.post(
        "/lessons",
        headers=headers,
        json={"name": "L", "classroomId": enrolled["id"], "gameIds": [keep["id"], drop["id"]]},
    ).json()
    client.post("/leaderboard", headers=headers, json={"gameId": drop["id"], "value": 5})

    client.delete(f"/games/{drop['id']}", headers=headers)

    assert client.get(f"/lessons/{lesson['id']}", headers=headers).json()["gameIds"] == [keep["id"]]
    scores = client.get(f"/leaderboard/classroom/{enrolled['id']}", headers=headers).json()
    assert scores["pagination"]["total"] == 0


def test_tags(client, teacher, parent):
    _, headers = teacher
    _, parent_headers = parent

    resp = client.post("/tags", headers=headers, json={"name": "algebra"})
    assert resp.status_code == 201
    tag = resp.json()

    dup = client.post("/tags", headers=headers, json={"name": "algebra"})
    assert dup.status_code == 400
    assert dup.json() == {"message": "Tag name already exists"}

    assert client.post("/tags", headers=parent_headers, json={"name": "x"}).status_code == 403
    assert client.get("/tags", headers=parent_headers).json() == [tag]
