from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from database.db import get_db
from models.lessons import Lesson as LessonModel
from schemas.lessons import LessonCreate, LessonUpdate

router = APIRouter(prefix="/lessons", tags=["lessons"])


def _lesson_to_dict(lesson: LessonModel):
    return {
        "id": lesson.id,
        "date": str(lesson.date),
        "topic": lesson.topic,
        "homework": lesson.homework,
        "comment": lesson.comment,
        "groupId": lesson.group_id,
        "group": {"name": lesson.group.name} if lesson.group else None,
    }


def _get_lesson_or_404(db: Session, lesson_id: int) -> LessonModel:
    lesson = db.query(LessonModel).filter(LessonModel.id == lesson_id).first()
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 수업 목록 (그룹 필터, 최신순)
@router.get("/")
def read_lessons(group_id: Optional[int] = Query(None, alias="groupId"), db: Session = Depends(get_db)):
    query = db.query(LessonModel).options(selectinload(LessonModel.group))
    if group_id is not None:
        query = query.filter(LessonModel.group_id == group_id)
    records = query.order_by(LessonModel.date.desc(), LessonModel.id.desc()).all()
    return {"success": True, "data": [_lesson_to_dict(r) for r in records]}


# ✅ [CREATE] 수업 추가
@router.post("/", status_code=201)
def create_lesson(lesson: LessonCreate, db: Session = Depends(get_db)):
    db_lesson = LessonModel(**lesson.model_dump())
    db.add(db_lesson)
    db.commit()
    db.refresh(db_lesson)
    return {
        "success": True,
        "data": _lesson_to_dict(db_lesson),
        "message": "Lesson created successfully"
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 수업 조회
@router.get("/{lesson_id}")
def read_lesson(lesson_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": _lesson_to_dict(_get_lesson_or_404(db, lesson_id))}


# ✅ [UPDATE] 수업 수정 (보낸 필드만 반영)
@router.put("/{lesson_id}")
def update_lesson(lesson_id: int, updated: LessonUpdate, db: Session = Depends(get_db)):
    lesson = _get_lesson_or_404(db, lesson_id)
    for key, value in updated.model_dump(exclude_unset=True).items():
        if key in ("date", "topic") and not value:
            continue
        setattr(lesson, key, value)
    db.commit()
    db.refresh(lesson)
    return {
        "success": True,
        "data": _lesson_to_dict(lesson),
        "message": "Lesson updated successfully"
    }


# ✅ [DELETE] 수업 삭제
@router.delete("/{lesson_id}")
def delete_lesson(lesson_id: int, db: Session = Depends(get_db)):
    lesson = _get_lesson_or_404(db, lesson_id)
    db.delete(lesson)
    db.commit()
    return {
        "success": True,
        "data": {"lessonId": lesson_id},
        "message": "Lesson deleted successfully"
    }
