import pytest

from classroom_api.core.exceptions import ConflictError
from classroom_api.models.classroom import ROLE_STUDENT, ClassroomMembershipModel
from classroom_api.models.user import Role
from classroom_api.utils.classroom_manager import ClassroomManager
from classroom_api.utils.user_manager import UserManager


def _details(client, classroom_id, headers):
    resp = client.get(f"/classroom/{classroom_id}/details", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def _me(client, headers):
    return client.get("/auth/me", headers=headers).json()


def test_create_add_and_remove_student(client, teacher, student):
    teacher_id, headers = teacher
    student_id, student_headers = student

    resp = client.post("/classroom", headers=headers, json={"name": "Math"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["name"] == "Math"
    assert created["adminsId"] == [teacher_id]
    assert created["studentsId"] == []
    assert _me(client, headers)["classroomId"] == created["id"]

    resp = client.post(
        f"/classroom/{created['id']}/users", headers=headers, json={"userIds": [student_id]}
    )
    assert resp.status_code == 200
    assert resp.json()["studentsId"] == [student_id]

    details = _details(client, created["id"], headers)
    assert [s["id"] for s in details["students"]] == [student_id]
    assert [a["id"] for a in details["admins"]] == [teacher_id]
    assert _me(client, student_headers)["classroomId"] == created["id"]

    resp = client.request(
        "DELETE",
        f"/classroom/{created['id']}/users",
        headers=headers,
        json={"userIds": [student_id]},
    )
    assert resp.status_code == 200
    assert resp.json()["studentsId"] == []
    assert _details(client, created["id"], headers)["students"] == []
    assert _me(client, student_headers)["classroomId"] is None


def test_add_users_places_by_role_and_ignores_parents(
    client, signup, teacher, parent, student, classroom
):
    _, headers = teacher
    parent_id, parent_headers = parent
    student_id, _ = student
    co_teacher_id, _ = signup("coteacher", 3)

    resp = client.post(
        f"/classroom/{classroom['id']}/users",
        headers=headers,
        json={"userIds": [student_id, co_teacher_id, parent_id, 9999, student_id]},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["adminsId"] == [classroom["adminsId"][0], co_teacher_id]
    assert body["studentsId"] == [student_id]
    assert not set(body["adminsId"]) & set(body["studentsId"])
    assert _me(client, parent_headers)["classroomId"] is None


def test_add_users_is_idempotent(client, teacher, student, enrolled):
    _, headers = teacher
    student_id, _ = student
    resp = client.post(
        f"/classroom/{enrolled['id']}/users", headers=headers, json={"userIds": [student_id]}
    )
    assert resp.json()["studentsId"] == [student_id]


def test_adding_moves_student_between_classrooms(
    client, signup, teacher, student, enrolled
):
    student_id, student_headers = student
    first_headers = teacher[1]
    _, other_headers = signup("other", 3)
    second = client.post("/classroom", headers=other_headers, json={"name": "Art"}).json()

    resp = client.post(
        f"/classroom/{second['id']}/users", headers=other_headers, json={"userIds": [student_id]}
    )
    assert resp.json()["studentsId"] == [student_id]
    assert _details(client, enrolled["id"], first_headers)["studentsId"] == []
    assert _me(client, student_headers)["classroomId"] == second["id"]


def test_removing_twice_is_a_no_op(client, teacher, student, enrolled):
    _, headers = teacher
    student_id, _ = student
    url = f"/classroom/{enrolled['id']}/users"
    first = client.request("DELETE", url, headers=headers, json={"userIds": [student_id]})
    second = client.request("DELETE", url, headers=headers, json={"userIds": [student_id]})
    assert first.status_code == second.status_code == 200
    assert first.json()["adminsId"] == second.json()["adminsId"]
    assert first.json()["studentsId"] == second.json()["studentsId"] == []


def test_student_can_leave_but_not_remove_others(
    client, parent, register_child, teacher, student, enrolled
):
    _, headers = teacher
    _, parent_headers = parent
    student_id, student_headers = student
    other_id, _ = register_child(parent_headers, "sibling")
    client.post(f"/classroom/{enrolled['id']}/users", headers=headers, json={"userIds": [other_id]})
    url = f"/classroom/{enrolled['id']}/users"

    resp = client.request("DELETE", url, headers=student_headers, json={"userIds": [other_id]})
    assert resp.status_code == 403

    resp = client.request("DELETE", url, headers=student_headers, json={"userIds": [student_id]})
    assert resp.status_code == 200
    assert resp.json()["studentsId"] == [other_id]


def test_only_classroom_admins_manage_members(client, signup, student, classroom):
    student_id, student_headers = student
    _, outsider_headers = signup("outsider", 3)
    url = f"/classroom/{classroom['id']}/users"

    resp = client.post(url, headers=outsider_headers, json={"userIds": [student_id]})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Only classroom admins can perform this action"}

    resp = client.post(url, headers=student_headers, json={"userIds": [student_id]})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Only teachers can perform this action"}


def test_empty_user_list_is_rejected(client, teacher, classroom):
    _, headers = teacher
    resp = client.post(f"/classroom/{classroom['id']}/users", headers=headers, json={"userIds": []})
    assert resp.status_code == 400


def test_missing_classroom_is_404(client, teacher):
    _, headers = teacher
    assert client.get("/classroom/missing/details", headers=headers).status_code == 404
    resp = client.post("/classroom/missing/users", headers=headers, json={"userIds": [1]})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Classroom not found"}


def test_details_require_membership(client, signup, student, classroom):
    _, student_headers = student
    _, outsider_headers = signup("outsider", 3)
    assert client.get(f"/classroom/{classroom['id']}/details", headers=student_headers).status_code == 403
    assert client.get(f"/classroom/{classroom['id']}/details", headers=outsider_headers).status_code == 403


def test_teacher_classrooms_and_blank_name(client, teacher, classroom):
    _, headers = teacher
    listed = client.get("/classroom/teacher", headers=headers).json()
    assert [c["id"] for c in listed] == [classroom["id"]]

    resp = client.post("/classroom", headers=headers, json={"name": "   "})
    assert resp.status_code == 400


def test_delete_classroom_detaches_members_and_removes_lessons(
    client, teacher, student, enrolled
):
    _, headers = teacher
    _, student_headers = student
    lesson = client.post(
        "/lessons", headers=headers, json={"name": "Fractions", "classroomId": enrolled["id"]}
    ).json()

    assert client.delete(f"/classroom/{enrolled['id']}", headers=student_headers).status_code == 403
    resp = client.delete(f"/classroom/{enrolled['id']}", headers=headers)
    assert resp.status_code == 200

    assert _me(client, student_headers)["classroomId"] is None
    assert _me(client, headers)["classroomId"] is None
    assert client.get(f"/lessons/{lesson['id']}", headers=headers).status_code == 404
    assert client.get(f"/classroom/{enrolled['id']}/details", headers=headers).status_code == 404


def test_classroom_users_listing(client, teacher, student, enrolled):
    teacher_id, headers = teacher
    student_id, _ = student
    users = client.get(f"/users/classroom/{enrolled['id']}", headers=headers).json()
    assert sorted(u["id"] for u in users) == sorted([teacher_id, student_id])

    resp = client.get(f"/users/{student_id}", headers=headers)
    assert resp.json()["classroomId"] == enrolled["id"]
    assert client.get("/users/4242", headers=headers).status_code == 404


def test_teacher_administers_several_classrooms(client, teacher):
    teacher_id, headers = teacher
    first = client.post("/classroom", headers=headers, json={"name": "Math"}).json()
    second = client.post("/classroom", headers=headers, json={"name": "Art"}).json()

    listed = client.get("/classroom/teacher", headers=headers).json()
    assert sorted(c["id"] for c in listed) == sorted([first["id"], second["id"]])
    assert _details(client, first["id"], headers)["adminsId"] == [teacher_id]
    assert _me(client, headers)["classroomId"] == second["id"]

    assert client.delete(f"/classroom/{first['id']}", headers=headers).status_code == 200
    assert _me(client, headers)["classroomId"] == second["id"]
    assert client.delete(f"/classroom/{second['id']}", headers=headers).status_code == 200
    assert _me(client, headers)["classroomId"] is None
    assert client.get("/classroom/teacher", headers=headers).json() == []


def test_co_admin_keeps_own_classroom(client, signup, teacher, classroom):
    owner_id, owner_headers = teacher
    co_id, co_headers = signup("coteacher", 3)
    own = client.post("/classroom", headers=co_headers, json={"name": "Art"}).json()

    resp = client.post(
        f"/classroom/{classroom['id']}/users", headers=owner_headers, json={"userIds": [co_id]}
    )
    assert resp.json()["adminsId"] == [owner_id, co_id]
    assert _details(client, own["id"], co_headers)["adminsId"] == [co_id]
    assert _me(client, co_headers)["classroomId"] == classroom["id"]
    listed = client.get("/classroom/teacher", headers=co_headers).json()
    assert sorted(c["id"] for c in listed) == sorted([classroom["id"], own["id"]])

    # Leaving the joined classroom points the teacher back at their own
    client.request(
        "DELETE",
        f"/classroom/{classroom['id']}/users",
        headers=owner_headers,
        json={"userIds": [co_id]},
    )
    assert _me(client, co_headers)["classroomId"] == own["id"]
    assert client.delete(f"/classroom/{own['id']}", headers=co_headers).status_code == 200


def test_deleting_shared_classroom_repoints_co_admin(client, signup, teacher, classroom):
    _, owner_headers = teacher
    co_id, co_headers = signup("coteacher", 3)
    own = client.post("/classroom", headers=co_headers, json={"name": "Art"}).json()
    client.post(
        f"/classroom/{classroom['id']}/users", headers=owner_headers, json={"userIds": [co_id]}
    )

    assert client.delete(f"/classroom/{classroom['id']}", headers=co_headers).status_code == 200
    assert _me(client, co_headers)["classroomId"] == own["id"]
    assert _me(client, owner_headers)["classroomId"] is None


def test_conflicting_membership_rows_raise_conflict(db):
    users = UserManager(db)
    teacher = users.create_user("t", "pw", Role.TEACHER)
    student = users.create_user("s", "pw", Role.STUDENT)
    manager = ClassroomManager(db)
    first = manager.create_classroom("Math", teacher.id)
    second = manager.create_classroom("Art", teacher.id)
    manager.add_members(first.id, [student.id])

    # A second student row for the same user, as a concurrent writer would insert
    db.add(
        ClassroomMembershipModel(
            classroom_id=second.id, user_id=student.id, role_in_class=ROLE_STUDENT
        )
    )
    with pytest.raises(ConflictError):
        manager._commit()

    assert manager.list_members(first.id)[1][0].id == student.id
    assert manager.list_members(second.id)[1] == []
