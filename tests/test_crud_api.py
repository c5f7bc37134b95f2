# ==========================================================
# groups
# ==========================================================

def test_group_duplicate_name_conflicts(client, group):
    resp = client.post("/v1/groups/", json={"name": "Group A"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"


def test_group_listing_counts_students(client, group, student):
    client.post("/v1/groups/", json={"name": "Group B"})
    data = client.get("/v1/groups/").json()["data"]
    assert [(g["name"], g["studentCount"]) for g in data] == [("Group A", 1), ("Group B", 0)]


def test_group_with_students_cannot_be_deleted(client, group, student):
    resp = client.delete(f"/v1/groups/{group['id']}")
    assert resp.status_code == 400

    client.delete(f"/v1/students/{student['id']}")
    assert client.delete(f"/v1/groups/{group['id']}").status_code == 200


def test_group_rename(client, group):
    other = client.post("/v1/groups/", json={"name": "Group B"}).json()["data"]
    assert client.put(f"/v1/groups/{other['id']}", json={"name": "Group A"}).status_code == 409
    data = client.put(f"/v1/groups/{other['id']}", json={"name": "Group C"}).json()["data"]
    assert data["name"] == "Group C"


# ==========================================================
# students
# ==========================================================

def test_student_search_is_case_insensitive(client, group, student):
    client.post("/v1/students/", json={"fullName": "Anna Smirnova", "groupId": group["id"]})
    data = client.get("/v1/students/", params={"q": "ANNA"}).json()["data"]
    assert [s["fullName"] for s in data] == ["Anna Smirnova"]

    data = client.get("/v1/students/", params={"groupId": group["id"]}).json()["data"]
    assert [s["fullName"] for s in data] == ["Anna Smirnova", "Ivan Petrov"]
    assert data[0]["gradeCount"] == 0


def test_student_requires_existing_group(client):
    resp = client.post("/v1/students/", json={"fullName": "Nobody", "groupId": 42})
    assert resp.status_code == 404


def test_student_partial_update(client, student):
    data = client.put(f"/v1/students/{student['id']}", json={"notes": "likes drama"}).json()["data"]
    assert data["notes"] == "likes drama"
    assert data["fullName"] == "Ivan Petrov"


def test_student_detail_includes_group(client, student):
    data = client.get(f"/v1/students/{student['id']}").json()["data"]
    assert data["group"]["name"] == "Group A"
    assert data["grades"] == []


# ==========================================================
# years / criteria / grade scales
# ==========================================================

def test_year_defaults_months(client):
    data = client.post("/v1/years/", json={"year": "2025/2026"}).json()["data"]
    assert len(data["months"]) == 10


def test_year_update_months(client, year):
    data = client.put(f"/v1/years/{year['id']}", json={"months": ["Jan"]}).json()["data"]
    assert data["months"] == ["Jan"]
    assert data["year"] == "2024/2025"


def test_criterion_weight_out_of_range(client):
    resp = client.post("/v1/criteria/", json={"name": "Bad", "weight": 1.5, "scale": "1-4"})
    assert resp.status_code == 422


def test_criteria_listed_in_order(client):
    client.post("/v1/criteria/", json={"name": "Second", "weight": 0.5, "scale": "1-4", "order": 2})
    client.post("/v1/criteria/", json={"name": "First", "weight": 0.5, "scale": "1-4", "order": 1})
    assert [c["name"] for c in client.get("/v1/criteria/").json()["data"]] == ["First", "Second"]


def test_grade_scale_listing_and_duplicates(client, grade_scale):
    data = client.get("/v1/grade-scales/").json()["data"]
    assert [s["letter"] for s in data] == ["A", "B", "C", "D"]
    assert client.post("/v1/grade-scales/", json={"letter": "A", "minScore": 4}).status_code == 409


# ==========================================================
# attendance / lessons / schedule
# ==========================================================

def test_attendance_upsert_and_filters(client, student, group):
    mark = {"studentId": student["id"], "date": "2025-09-02", "status": "present", "groupId": group["id"]}
    client.post("/v1/attendance/", json=mark)
    client.post("/v1/attendance/", json={**mark, "status": "late"})
    client.post("/v1/attendance/", json={**mark, "date": "2025-09-04", "status": "absent"})

    data = client.get("/v1/attendance/", params={"studentId": student["id"]}).json()["data"]
    assert [(r["date"], r["status"]) for r in data] == [("2025-09-04", "absent"), ("2025-09-02", "late")]

    data = client.get("/v1/attendance/", params={"dateTo": "2025-09-03"}).json()["data"]
    assert len(data) == 1


def test_attendance_rejects_unknown_status(client, student):
    resp = client.post("/v1/attendance/", json={"studentId": student["id"], "date": "2025-09-02", "status": "sick"})
    assert resp.status_code == 422


def test_attendance_delete(client, student):
    client.post("/v1/attendance/", json={"studentId": student["id"], "date": "2025-09-02", "status": "present"})
    resp = client.delete("/v1/attendance/", params={"studentId": student["id"], "date": "2025-09-02"})
    assert resp.json()["data"]["deleted"] == 1
    assert client.get("/v1/attendance/").json()["data"] == []


def test_lesson_crud(client, group):
    lesson = client.post("/v1/lessons/", json={
        "date": "2025-09-02", "topic": "Greetings", "groupId": group["id"],
    }).json()["data"]
    assert lesson["group"] == {"name": "Group A"}

    updated = client.put(f"/v1/lessons/{lesson['id']}", json={"homework": "Page 5"}).json()["data"]
    assert updated["homework"] == "Page 5"
    assert updated["topic"] == "Greetings"

    assert len(client.get("/v1/lessons/", params={"groupId": group["id"]}).json()["data"]) == 1
    client.delete(f"/v1/lessons/{lesson['id']}")
    assert client.get(f"/v1/lessons/{lesson['id']}").status_code == 404


def test_schedule_settings_default_and_save(client, group):
    data = client.get("/v1/group-schedule-settings/", params={"groupId": group["id"]}).json()["data"]
    assert data["weekdays"] == "2,4"

    client.post("/v1/group-schedule-settings/", json={"groupId": group["id"], "weekdays": "1,3,5"})
    data = client.get("/v1/group-schedule-settings/", params={"groupId": group["id"]}).json()["data"]
    assert data["weekdays"] == "1,3,5"


# ==========================================================
# 공통
# ==========================================================

def test_health_and_latency_header(client):
    resp = client.get("/health")
    assert resp.json()["status"] == "ok"
    assert "x-latency-ms" in resp.headers


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_year_delete_removes_its_grades(client, student, year, criteria, grade_scale):
    grade = client.post("/v1/grades/", json={
        "studentId": student["id"],
        "yearId": year["id"],
        "month": "Sep",
        "criteriaGrades": [{"criterionId": criteria[0], "value": 3}],
    }).json()["data"]

    assert client.delete(f"/v1/years/{year['id']}").status_code == 200
    assert client.get(f"/v1/grades/{grade['id']}").status_code == 404
    assert client.get("/v1/grades/", params={"studentId": student["id"]}).json()["data"] == []


# ==========================================================
# teacher schedules
# ==========================================================

def test_teacher_schedule_upsert_and_order(client):
    client.post("/v1/teacher-schedules/", json={"teacherId": "t1", "day": 2, "time": "14", "groupName": "Group A"})
    client.post("/v1/teacher-schedules/", json={"teacherId": "t1", "day": 0, "time": "11", "groupName": " Group B "})
    client.post("/v1/teacher-schedules/", json={"teacherId": "t1", "day": 2, "time": "14", "groupName": "Group C"})
    client.post("/v1/teacher-schedules/", json={"teacherId": "t2", "day": 1, "time": "12", "groupName": "Group A"})

    data = client.get("/v1/teacher-schedules/", params={"teacherId": "t1"}).json()["data"]
    assert [(s["day"], s["time"], s["groupName"]) for s in data] == [(0, "11", "Group B"), (2, "14", "Group C")]


def test_teacher_schedule_empty_group_name_clears_slot(client):
    slot = {"teacherId": "t1", "day": 3, "time": "15"}
    client.post("/v1/teacher-schedules/", json={**slot, "groupName": "Group A"})

    resp = client.post("/v1/teacher-schedules/", json={**slot, "groupName": "   "})
    assert resp.status_code == 200
    assert resp.json()["data"] is None
    assert client.get("/v1/teacher-schedules/", params={"teacherId": "t1"}).json()["data"] == []


def test_teacher_schedule_delete(client):
    client.post("/v1/teacher-schedules/", json={"teacherId": "t1", "day": 4, "time": "18", "groupName": "Group A"})
    resp = client.delete("/v1/teacher-schedules/", params={"teacherId": "t1", "day": 4, "time": "18"})
    assert resp.json()["data"]["deleted"] == 1
    assert client.get("/v1/teacher-schedules/", params={"teacherId": "t1"}).json()["data"] == []


def test_teacher_schedule_requires_teacher_id(client):
    assert client.get("/v1/teacher-schedules/").status_code == 422
    resp = client.post("/v1/teacher-schedules/", json={"day": 1, "time": "11", "groupName": "Group A"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
