import json

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.years import Year as YearModel
from schemas.years import YearCreate, YearUpdate

router = APIRouter(prefix="/years", tags=["years"])


def _year_to_dict(y: YearModel):
    return {
        "id": y.id,
        "year": y.year,
        "months": y.month_list,
        "createdAt": y.created_at.isoformat() if y.created_at else None,
    }


def _get_year_or_404(db: Session, year_id: int) -> YearModel:
    year = db.query(YearModel).filter(YearModel.id == year_id).first()
    if year is None:
        raise HTTPException(status_code=404, detail="Year not found")
    return year


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 학년도 목록 (최신순)
@router.get("/")
def read_years(db: Session = Depends(get_db)):
    records = db.query(YearModel).order_by(YearModel.year.desc()).all()
    return {"success": True, "data": [_year_to_dict(y) for y in records]}


# ✅ [CREATE] 학년도 추가 (months 없으면 기본 월 목록)
@router.post("/", status_code=201)
def create_year(year: YearCreate, db: Session = Depends(get_db)):
    months = year.months or settings.DEFAULT_YEAR_MONTHS
    db_year = YearModel(year=year.year, months=json.dumps(months, ensure_ascii=False))
    db.add(db_year)
    db.commit()
    db.refresh(db_year)
    return {
        "success": True,
        "data": _year_to_dict(db_year),
        "message": "Year created successfully"
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 학년도 조회
@router.get("/{year_id}")
def read_year(year_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": _year_to_dict(_get_year_or_404(db, year_id))}


# ✅ [UPDATE] 학년도 수정
@router.put("/{year_id}")
def update_year(year_id: int, updated: YearUpdate, db: Session = Depends(get_db)):
    year = _get_year_or_404(db, year_id)
    if updated.year:
        year.year = updated.year
    if updated.months:
        year.months = json.dumps(updated.months, ensure_ascii=False)
    db.commit()
    db.refresh(year)
    return {
        "success": True,
        "data": _year_to_dict(year),
        "message": "Year updated successfully"
    }


# ✅ [DELETE] 학년도 삭제
@router.delete("/{year_id}")
def delete_year(year_id: int, db: Session = Depends(get_db)):
    year = _get_year_or_404(db, year_id)
    db.delete(year)
    db.commit()
    return {
        "success": True,
        "data": {"yearId": year_id},
        "message": "Year deleted successfully"
    }
