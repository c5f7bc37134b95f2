import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import get_db
from models.teacher_schedules import TeacherSchedule as ScheduleModel
from schemas.teacher_schedules import TeacherScheduleSlot

router = APIRouter(prefix="/teacher-schedules", tags=["schedule"])

logger = logging.getLogger(__name__)


def _slot_to_dict(s: ScheduleModel):
    return {
        "id": s.id,
        "teacherId": s.teacher_id,
        "day": s.day,
        "time": s.time,
        "groupName": s.group_name,
    }


def _slot_query(db: Session, teacher_id: str, day: int, time: str):
    return db.query(ScheduleModel).filter(
        ScheduleModel.teacher_id == teacher_id,
        ScheduleModel.day == day,
        ScheduleModel.time == time,
    )


def _apply_slot(db: Session, slot: TeacherScheduleSlot, group_name: str) -> ScheduleModel:
    record = _slot_query(db, slot.teacher_id, slot.day, slot.time).first()
    if record is None:
        record = ScheduleModel(teacher_id=slot.teacher_id, day=slot.day, time=slot.time)
        db.add(record)
    record.group_name = group_name
    return record


# ==========================================================
# 교사 주간 시간표 (교사 + 요일 + 시간 → 그룹)
# ==========================================================

# ✅ [READ] 교사 시간표 (요일, 시간 순)
@router.get("/")
def read_teacher_schedule(teacher_id: str = Query(..., alias="teacherId", min_length=1), db: Session = Depends(get_db)):
    records = (
        db.query(ScheduleModel)
        .filter(ScheduleModel.teacher_id == teacher_id)
        .order_by(ScheduleModel.day.asc(), ScheduleModel.time.asc())
        .all()
    )
    return {"success": True, "data": [_slot_to_dict(s) for s in records]}


# ✅ [UPSERT] 시간표 칸 저장 (groupName 이 비어 있으면 칸 삭제)
@router.post("/")
def save_teacher_schedule_slot(slot: TeacherScheduleSlot, db: Session = Depends(get_db)):
    group_name = (slot.group_name or "").strip()
    if not group_name:
        _slot_query(db, slot.teacher_id, slot.day, slot.time).delete(synchronize_session=False)
        db.commit()
        return {"success": True, "data": None, "message": "Schedule slot deleted"}

    try:
        record = _apply_slot(db, slot, group_name)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("teacher schedule upsert raced for teacher=%s day=%s time=%s", slot.teacher_id, slot.day, slot.time)
        record = _apply_slot(db, slot, group_name)
        db.commit()

    db.refresh(record)
    return {
        "success": True,
        "data": _slot_to_dict(record),
        "message": "Schedule slot saved"
    }


# ✅ [DELETE] 시간표 칸 삭제
@router.delete("/")
def delete_teacher_schedule_slot(
    teacher_id: str = Query(..., alias="teacherId", min_length=1),
    day: int = Query(...),
    time: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    deleted = _slot_query(db, teacher_id, day, time).delete(synchronize_session=False)
    db.commit()
    return {
        "success": True,
        "data": {"teacherId": teacher_id, "day": day, "time": time, "deleted": deleted},
        "message": "Schedule slot deleted"
    }
