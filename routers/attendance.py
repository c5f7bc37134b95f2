import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import get_db
from models.attendance import Attendance as AttendanceModel
from models.students import Student as StudentModel
from schemas.attendance import AttendanceMark

router = APIRouter(prefix="/attendance", tags=["attendance"])

logger = logging.getLogger(__name__)


def _attendance_to_dict(r: AttendanceModel):
    return {
        "id": r.id,
        "studentId": r.student_id,
        "groupId": r.group_id,
        "date": str(r.date),
        "status": r.status,
    }


def _apply_mark(db: Session, mark: AttendanceMark) -> AttendanceModel:
    record = (
        db.query(AttendanceModel)
        .filter(AttendanceModel.student_id == mark.student_id, AttendanceModel.date == mark.date)
        .first()
    )
    if record is None:
        record = AttendanceModel(student_id=mark.student_id, date=mark.date)
        db.add(record)
    record.status = mark.status
    record.group_id = mark.group_id
    return record


# ==========================================================
# [1단계] 조회 라우터
# ==========================================================

# ✅ [READ] 출결 기록 조회 (학생/그룹/기간 필터, 최신순)
@router.get("/")
def read_attendance_list(
    student_id: Optional[int] = Query(None, alias="studentId"),
    group_id: Optional[int] = Query(None, alias="groupId"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="시작 날짜 (예: 2025-09-01)"),
    date_to: Optional[date] = Query(None, alias="dateTo", description="종료 날짜 (예: 2025-09-30)"),
    db: Session = Depends(get_db),
):
    query = db.query(AttendanceModel)
    if student_id is not None:
        query = query.filter(AttendanceModel.student_id == student_id)
    if group_id is not None:
        query = query.filter(AttendanceModel.group_id == group_id)
    if date_from is not None:
        query = query.filter(AttendanceModel.date >= date_from)
    if date_to is not None:
        query = query.filter(AttendanceModel.date <= date_to)

    records = query.order_by(AttendanceModel.date.desc(), AttendanceModel.id.asc()).all()
    return {"success": True, "data": [_attendance_to_dict(r) for r in records]}


# ==========================================================
# [2단계] 기록/삭제 라우터
# ==========================================================

# ✅ [UPSERT] 출결 기록 (같은 학생/날짜면 덮어씀)
@router.post("/")
def mark_attendance(mark: AttendanceMark, db: Session = Depends(get_db)):
    if db.query(StudentModel.id).filter(StudentModel.id == mark.student_id).first() is None:
        raise HTTPException(status_code=404, detail="Student not found")

    try:
        record = _apply_mark(db, mark)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("attendance upsert raced for student=%s date=%s", mark.student_id, mark.date)
        record = _apply_mark(db, mark)
        db.commit()

    db.refresh(record)
    return {
        "success": True,
        "data": _attendance_to_dict(record),
        "message": "Attendance saved successfully"
    }


# ✅ [DELETE] 특정 학생/날짜 출결 삭제
@router.delete("/")
def delete_attendance(
    student_id: int = Query(..., alias="studentId"),
    date: date = Query(...),
    db: Session = Depends(get_db),
):
    deleted = (
        db.query(AttendanceModel)
        .filter(AttendanceModel.student_id == student_id, AttendanceModel.date == date)
        .delete(synchronize_session=False)
    )
    db.commit()
    return {
        "success": True,
        "data": {"studentId": student_id, "date": str(date), "deleted": deleted},
        "message": "Attendance record deleted"
    }
