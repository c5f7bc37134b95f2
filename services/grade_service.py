"""
services/grade_service.py

월별 평가 기록 저장(upsert) 및 응답 직렬화.

- (student_id, year_id, month) 가 같으면 기존 기록을 덮어씀
- 종합 점수/등급은 services.grading 으로 계산, 기준/등급표는 GradingCache 에서 조회
- 동시에 같은 기간 키로 INSERT 가 경합하면 IntegrityError 후 한 번 재시도하여
  나중에 들어온 요청이 최종값이 됨
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.grades import Grade as GradeModel, CriterionGrade as CriterionGradeModel
from schemas.criteria import Criterion
from schemas.grades import CriterionRating, GradeSubmit
from services.grading import compute_composite, derive_label, round_score
from services.grading_cache import GradingCache

logger = logging.getLogger(__name__)


def score_ratings(
    db: Session,
    cache: GradingCache,
    ratings: Optional[Sequence[Optional[CriterionRating]]],
    criteria: Optional[Sequence[Criterion]] = None,
):
    """(종합 점수, 등급) 반환. 점수가 0이면(채점된 기준 없음) 등급은 None"""
    if not ratings:
        return 0.0, None
    if criteria is None:
        criteria = cache.get_criteria(db)
    total_score = compute_composite(criteria, ratings)
    grade_letter = derive_label(total_score, cache.get_scales(db)) if total_score > 0 else None
    return total_score, grade_letter


def _valid_ratings(criteria: Sequence[Criterion], ratings: Sequence[Optional[CriterionRating]]) -> List[CriterionRating]:
    known = {c.id for c in criteria}
    return [
        r for r in ratings
        if r is not None and r.value is not None and r.criterion_id in known
    ]


def _apply(db: Session, payload: GradeSubmit, total_score, grade_letter, ratings) -> GradeModel:
    grade = (
        db.query(GradeModel)
        .filter(
            GradeModel.student_id == payload.student_id,
            GradeModel.year_id == payload.year_id,
            GradeModel.month == payload.month,
        )
        .first()
    )
    if grade is None:
        grade = GradeModel(student_id=payload.student_id, year_id=payload.year_id, month=payload.month)
        db.add(grade)

    grade.attendance = payload.attendance or None
    grade.homework = payload.homework or None
    grade.comment = payload.comment or None
    grade.recommendations = payload.recommendations or None
    grade.total_score = total_score
    grade.grade_letter = grade_letter

    # 점수 목록이 비어 있으면 기존 기준별 점수는 유지
    if ratings:
        grade.criteria_grades = [
            CriterionGradeModel(criterion_id=r.criterion_id, value=r.value) for r in ratings
        ]
    return grade


def submit_grade(db: Session, cache: GradingCache, payload: GradeSubmit) -> GradeModel:
    submitted = payload.ratings or []
    # 점수 계산과 저장할 점수 필터링은 같은 기준 스냅샷으로
    criteria = cache.get_criteria(db) if submitted else []
    total_score, grade_letter = score_ratings(db, cache, submitted, criteria)
    ratings = _valid_ratings(criteria, submitted)

    try:
        grade = _apply(db, payload, total_score, grade_letter, ratings)
        db.commit()
    except IntegrityError:
        # 다른 요청이 먼저 같은 기간 키로 INSERT 함 → 그 행을 덮어씀
        db.rollback()
        logger.info(
            "grade upsert raced for student=%s year=%s month=%s, retrying as update",
            payload.student_id, payload.year_id, payload.month,
        )
        grade = _apply(db, payload, total_score, grade_letter, ratings)
        db.commit()

    db.refresh(grade)
    logger.info(
        "grade saved: id=%s student=%s month=%s total=%.4f grade=%s",
        grade.id, grade.student_id, grade.month, total_score, grade_letter,
    )
    return grade


# ==========================================================
# 직렬화
# ==========================================================

def criterion_to_dict(c):
    if c is None:
        return None
    return {
        "id": c.id,
        "name": c.name,
        "weight": c.weight,
        "scale": c.scale,
        "order": c.order,
    }


def grade_to_dict(g: GradeModel, include_student: bool = True):
    data = {
        "id": g.id,
        "studentId": g.student_id,
        "yearId": g.year_id,
        "month": g.month,
        "attendance": g.attendance,
        "homework": g.homework,
        "comment": g.comment,
        "recommendations": g.recommendations,
        "totalScore": round_score(g.total_score),
        "grade": g.grade_letter,
        "criteriaGrades": [
            {
                "id": cg.id,
                "criterionId": cg.criterion_id,
                "value": cg.value,
                "criterion": criterion_to_dict(cg.criterion),
            }
            for cg in g.criteria_grades
        ],
        "createdAt": g.created_at.isoformat() if g.created_at else None,
        "updatedAt": g.updated_at.isoformat() if g.updated_at else None,
    }
    if include_student and g.student is not None:
        data["student"] = {
            "id": g.student.id,
            "fullName": g.student.full_name,
            "groupId": g.student.group_id,
        }
    return data
