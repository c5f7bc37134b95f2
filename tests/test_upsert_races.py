import datetime

import routers.attendance as attendance_router
import services.grade_service as grade_service
from models.attendance import Attendance as AttendanceModel
from models.grades import Grade as GradeModel


def _insert_once(session_factory, make_row):
    """첫 번째 호출 때만 다른 세션으로 같은 키의 행을 먼저 커밋"""
    inserted = []

    def insert():
        if inserted:
            return
        other = session_factory()
        other.add(make_row())
        other.commit()
        inserted.append(True)
        other.close()

    return insert


def test_grade_upsert_retries_after_concurrent_insert(client, session_factory, student, year, criteria, grade_scale, monkeypatch):
    real_apply = grade_service._apply
    calls = []
    concurrent_insert = _insert_once(session_factory, lambda: GradeModel(
        student_id=student["id"], year_id=year["id"], month="Sep",
        total_score=1.0, grade_letter="D", comment="first writer",
    ))

    def racing_apply(db, payload, *args):
        grade = real_apply(db, payload, *args)
        calls.append(payload.month)
        concurrent_insert()
        return grade

    monkeypatch.setattr(grade_service, "_apply", racing_apply)

    resp = client.post("/v1/grades/", json={
        "studentId": student["id"],
        "yearId": year["id"],
        "month": "Sep",
        "comment": "second writer",
        "criteriaGrades": [{"criterionId": cid, "value": 3} for cid in criteria],
    })

    assert resp.status_code == 200
    assert len(calls) == 2
    data = resp.json()["data"]
    assert data["comment"] == "second writer"
    assert data["totalScore"] == 3.0
    assert data["grade"] == "B"
    assert len(data["criteriaGrades"]) == 4

    listing = client.get("/v1/grades/", params={"studentId": student["id"]}).json()["data"]
    assert len(listing) == 1
    assert listing[0]["id"] == data["id"]
    assert listing[0]["comment"] == "second writer"


def test_attendance_upsert_retries_after_concurrent_insert(client, session_factory, student, monkeypatch):
    real_apply = attendance_router._apply_mark
    calls = []
    concurrent_insert = _insert_once(session_factory, lambda: AttendanceModel(
        student_id=student["id"], date=datetime.date(2025, 9, 2), status="absent",
    ))

    def racing_apply(db, mark):
        record = real_apply(db, mark)
        calls.append(mark.status)
        concurrent_insert()
        return record

    monkeypatch.setattr(attendance_router, "_apply_mark", racing_apply)

    resp = client.post("/v1/attendance/", json={"studentId": student["id"], "date": "2025-09-02", "status": "late"})

    assert resp.status_code == 200
    assert len(calls) == 2
    assert resp.json()["data"]["status"] == "late"

    records = client.get("/v1/attendance/", params={"studentId": student["id"]}).json()["data"]
    assert [(r["date"], r["status"]) for r in records] == [("2025-09-02", "late")]
