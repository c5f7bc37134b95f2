from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.grading import get_grading_cache
from models.criteria import Criterion as CriterionModel
from schemas.criteria import CriterionCreate, CriterionUpdate
from services.grade_service import criterion_to_dict
from services.grading_cache import GradingCache

router = APIRouter(prefix="/criteria", tags=["criteria"])


def _get_criterion_or_404(db: Session, criterion_id: int) -> CriterionModel:
    criterion = db.query(CriterionModel).filter(CriterionModel.id == criterion_id).first()
    if criterion is None:
        raise HTTPException(status_code=404, detail="Criterion not found")
    return criterion


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 평가 기준 목록 (order 순)
@router.get("/")
def read_criteria(db: Session = Depends(get_db)):
    records = db.query(CriterionModel).order_by(CriterionModel.order.asc(), CriterionModel.id.asc()).all()
    return {"success": True, "data": [criterion_to_dict(c) for c in records]}


# ✅ [CREATE] 평가 기준 추가
@router.post("/", status_code=201)
def create_criterion(
    criterion: CriterionCreate,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    db_criterion = CriterionModel(**criterion.model_dump())
    db.add(db_criterion)
    db.commit()
    db.refresh(db_criterion)
    cache.invalidate()
    return {
        "success": True,
        "data": criterion_to_dict(db_criterion),
        "message": "Criterion created successfully"
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 평가 기준 조회
@router.get("/{criterion_id}")
def read_criterion(criterion_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": criterion_to_dict(_get_criterion_or_404(db, criterion_id))}


# ✅ [UPDATE] 평가 기준 수정 (보낸 필드만 반영)
@router.put("/{criterion_id}")
def update_criterion(
    criterion_id: int,
    updated: CriterionUpdate,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    criterion = _get_criterion_or_404(db, criterion_id)
    for key, value in updated.model_dump(exclude_none=True).items():
        setattr(criterion, key, value)
    db.commit()
    db.refresh(criterion)
    cache.invalidate()
    return {
        "success": True,
        "data": criterion_to_dict(criterion),
        "message": "Criterion updated successfully"
    }


# ✅ [DELETE] 평가 기준 삭제 (기존 점수는 기준 없이 남음)
@router.delete("/{criterion_id}")
def delete_criterion(
    criterion_id: int,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    criterion = _get_criterion_or_404(db, criterion_id)
    db.delete(criterion)
    db.commit()
    cache.invalidate()
    return {
        "success": True,
        "data": {"criterionId": criterion_id},
        "message": "Criterion deleted successfully"
    }
