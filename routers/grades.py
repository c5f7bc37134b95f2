from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from database.db import get_db
from dependencies.grading import get_grading_cache
from models.grades import Grade as GradeModel, CriterionGrade as CriterionGradeModel
from models.students import Student as StudentModel
from models.years import Year as YearModel
from schemas.grades import GradeSubmit, GradePreviewRequest
from services.grade_service import grade_to_dict, score_ratings, submit_grade
from services.grading import round_score
from services.grading_cache import GradingCache

router = APIRouter(prefix="/grades", tags=["grades"])


def _grade_query(db: Session):
    return db.query(GradeModel).options(
        selectinload(GradeModel.student),
        selectinload(GradeModel.criteria_grades).selectinload(CriterionGradeModel.criterion),
    )


def _get_grade_or_404(db: Session, grade_id: int) -> GradeModel:
    grade = _grade_query(db).filter(GradeModel.id == grade_id).first()
    if grade is None:
        raise HTTPException(status_code=404, detail="Grade not found")
    return grade


# ==========================================================
# [1단계] 조회 / 제출 라우터
# ==========================================================

# ✅ [READ] 성적 목록 (학생/학년도/월 필터)
@router.get("/")
def read_grades(
    student_id: Optional[int] = Query(None, alias="studentId"),
    year_id: Optional[int] = Query(None, alias="yearId"),
    month: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = _grade_query(db)
    if student_id is not None:
        query = query.filter(GradeModel.student_id == student_id)
    if year_id is not None:
        query = query.filter(GradeModel.year_id == year_id)
    if month:
        query = query.filter(GradeModel.month == month)

    records = query.order_by(GradeModel.year_id.asc(), GradeModel.id.asc()).all()
    return {"success": True, "data": [grade_to_dict(g) for g in records]}


# ✅ [UPSERT] 월별 성적 제출 (같은 학생/학년도/월이면 덮어씀)
@router.post("/")
def submit(
    payload: GradeSubmit,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    if db.query(StudentModel.id).filter(StudentModel.id == payload.student_id).first() is None:
        raise HTTPException(status_code=404, detail="Student not found")
    if db.query(YearModel.id).filter(YearModel.id == payload.year_id).first() is None:
        raise HTTPException(status_code=404, detail="Year not found")

    grade = submit_grade(db, cache, payload)
    return {
        "success": True,
        "data": grade_to_dict(_get_grade_or_404(db, grade.id)),
        "message": "Grade saved successfully"
    }


# ✅ [PREVIEW] 저장 없이 종합 점수/등급만 계산
@router.post("/preview")
def preview(
    payload: GradePreviewRequest,
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    total_score, grade_letter = score_ratings(db, cache, payload.criteria_grades)
    return {
        "success": True,
        "data": {"totalScore": round_score(total_score), "grade": grade_letter},
    }


# ==========================================================
# [2단계] 완전 동적 라우터
# ==========================================================

# ✅ [READ] 특정 성적 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": grade_to_dict(_get_grade_or_404(db, grade_id))}


# ✅ [DELETE] 성적 삭제 (기준별 점수 함께 삭제)
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = _get_grade_or_404(db, grade_id)
    db.delete(grade)
    db.commit()
    return {
        "success": True,
        "data": {"gradeId": grade_id},
        "message": "Grade deleted successfully"
    }
