from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.db import get_db
from models.groups import Group as GroupModel
from models.schedule_settings import GroupScheduleSettings as SettingsModel, DEFAULT_WEEKDAYS
from schemas.schedule_settings import ScheduleSettingsSave

router = APIRouter(prefix="/group-schedule-settings", tags=["schedule"])


# ✅ [READ] 그룹 수업 요일 (설정이 없으면 기본값 화/목)
@router.get("/")
def read_schedule_settings(group_id: int = Query(..., alias="groupId"), db: Session = Depends(get_db)):
    settings_row = db.query(SettingsModel).filter(SettingsModel.group_id == group_id).first()
    weekdays = settings_row.weekdays if settings_row else DEFAULT_WEEKDAYS
    return {"success": True, "data": {"groupId": group_id, "weekdays": weekdays}}


# ✅ [UPSERT] 그룹 수업 요일 저장
@router.post("/")
def save_schedule_settings(payload: ScheduleSettingsSave, db: Session = Depends(get_db)):
    if db.query(GroupModel.id).filter(GroupModel.id == payload.group_id).first() is None:
        raise HTTPException(status_code=404, detail="Group not found")

    settings_row = db.query(SettingsModel).filter(SettingsModel.group_id == payload.group_id).first()
    if settings_row is None:
        settings_row = SettingsModel(group_id=payload.group_id)
        db.add(settings_row)
    settings_row.weekdays = payload.weekdays
    db.commit()
    db.refresh(settings_row)
    return {
        "success": True,
        "data": {"groupId": settings_row.group_id, "weekdays": settings_row.weekdays},
        "message": "Schedule settings saved"
    }
