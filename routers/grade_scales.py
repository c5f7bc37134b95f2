from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.grading import get_grading_cache
from models.grade_scales import GradeScale as GradeScaleModel
from schemas.grade_scales import GradeScaleCreate, GradeScaleUpdate
from services.grading_cache import GradingCache

router = APIRouter(prefix="/grade-scales", tags=["grade-scales"])


def _scale_to_dict(s: GradeScaleModel):
    return {
        "id": s.id,
        "letter": s.letter,
        "minScore": s.min_score,
        "description": s.description,
    }


def _get_scale_or_404(db: Session, scale_id: int) -> GradeScaleModel:
    scale = db.query(GradeScaleModel).filter(GradeScaleModel.id == scale_id).first()
    if scale is None:
        raise HTTPException(status_code=404, detail="Grade scale entry not found")
    return scale


def _ensure_unique_letter(db: Session, letter: str, exclude_id: int = None):
    query = db.query(GradeScaleModel).filter(GradeScaleModel.letter == letter)
    if exclude_id is not None:
        query = query.filter(GradeScaleModel.id != exclude_id)
    if query.first() is not None:
        raise HTTPException(status_code=409, detail=f"Grade letter '{letter}' already exists")


# ✅ [READ] 등급표 (하한 점수 내림차순)
@router.get("/")
def read_grade_scales(db: Session = Depends(get_db)):
    records = db.query(GradeScaleModel).order_by(GradeScaleModel.min_score.desc()).all()
    return {"success": True, "data": [_scale_to_dict(s) for s in records]}


# ✅ [CREATE] 등급 추가
@router.post("/", status_code=201)
def create_grade_scale(
    scale: GradeScaleCreate,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    _ensure_unique_letter(db, scale.letter)
    db_scale = GradeScaleModel(**scale.model_dump())
    db.add(db_scale)
    db.commit()
    db.refresh(db_scale)
    cache.invalidate()
    return {
        "success": True,
        "data": _scale_to_dict(db_scale),
        "message": "Grade scale entry created successfully"
    }


# ✅ [UPDATE] 등급 수정
@router.put("/{scale_id}")
def update_grade_scale(
    scale_id: int,
    updated: GradeScaleUpdate,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    scale = _get_scale_or_404(db, scale_id)
    if updated.letter and updated.letter != scale.letter:
        _ensure_unique_letter(db, updated.letter, exclude_id=scale_id)
    for key, value in updated.model_dump(exclude_none=True).items():
        setattr(scale, key, value)
    db.commit()
    db.refresh(scale)
    cache.invalidate()
    return {
        "success": True,
        "data": _scale_to_dict(scale),
        "message": "Grade scale entry updated successfully"
    }


# ✅ [DELETE] 등급 삭제
@router.delete("/{scale_id}")
def delete_grade_scale(
    scale_id: int,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    scale = _get_scale_or_404(db, scale_id)
    db.delete(scale)
    db.commit()
    cache.invalidate()
    return {
        "success": True,
        "data": {"gradeScaleId": scale_id},
        "message": "Grade scale entry deleted successfully"
    }
