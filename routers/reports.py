from collections import Counter, defaultdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from database.db import get_db
from dependencies.grading import get_grading_cache
from models.attendance import Attendance as AttendanceModel
from models.grades import Grade as GradeModel, CriterionGrade as CriterionGradeModel
from models.students import Student as StudentModel
from models.years import Year as YearModel
from services.grade_service import grade_to_dict
from services.grading import derive_label, round_score
from services.grading_cache import GradingCache

router = APIRouter(prefix="/reports", tags=["reports"])


def _month_sort_key(grade: GradeModel, month_order: dict):
    # 학년도 월 목록 순서대로, 목록에 없는 월은 뒤로
    return (grade.year_id, month_order.get((grade.year_id, grade.month), len(month_order)), grade.id)


# ==========================================================
# [학생 리포트] 월별 성적 + 평균 + 출결 요약
# ==========================================================

# ✅ [REPORT] 학생 개인 리포트
@router.get("/students/{student_id}")
def get_student_report(
    student_id: int,
    year_id: Optional[int] = Query(None, alias="yearId"),
    db: Session = Depends(get_db),
    cache: GradingCache = Depends(get_grading_cache),
):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")

    query = (
        db.query(GradeModel)
        .options(selectinload(GradeModel.criteria_grades).selectinload(CriterionGradeModel.criterion))
        .filter(GradeModel.student_id == student_id)
    )
    if year_id is not None:
        query = query.filter(GradeModel.year_id == year_id)
    grades = query.all()

    # 월 순서표: (year_id, month) → 인덱스
    year_ids = {g.year_id for g in grades}
    month_order = {}
    if year_ids:
        for year in db.query(YearModel).filter(YearModel.id.in_(year_ids)).all():
            for idx, month in enumerate(year.month_list):
                month_order[(year.id, month)] = idx
    grades.sort(key=lambda g: _month_sort_key(g, month_order))

    # 채점된(점수 > 0) 달의 평균
    scored = [g.total_score for g in grades if g.total_score and g.total_score > 0]
    average = sum(scored) / len(scored) if scored else 0.0
    average_grade = derive_label(average, cache.get_scales(db)) if average > 0 else None

    # 기준별 평균 (삭제된 기준은 제외)
    per_criterion = defaultdict(list)
    names = {}
    for g in grades:
        for cg in g.criteria_grades:
            if cg.criterion is None:
                continue
            per_criterion[cg.criterion_id].append(cg.value)
            names[cg.criterion_id] = cg.criterion.name
    criteria_averages = [
        {
            "criterionId": cid,
            "name": names[cid],
            "average": round_score(sum(values) / len(values)),
        }
        for cid, values in per_criterion.items()
    ]

    # 출결 요약
    statuses = Counter(
        status for (status,) in db.query(AttendanceModel.status).filter(AttendanceModel.student_id == student_id)
    )
    total_marks = sum(statuses.values())
    attended = statuses.get("present", 0) + statuses.get("late", 0)
    rate = round(attended / total_marks * 100, 1) if total_marks else 0

    return {
        "success": True,
        "data": {
            "student": {
                "id": student.id,
                "fullName": student.full_name,
                "groupId": student.group_id,
                "groupName": student.group.name if student.group else None,
            },
            "grades": [grade_to_dict(g, include_student=False) for g in grades],
            "averageScore": round_score(average),
            "averageGrade": average_grade,
            "criteriaAverages": criteria_averages,
            "attendance": {
                "total": total_marks,
                "present": statuses.get("present", 0),
                "absent": statuses.get("absent", 0),
                "late": statuses.get("late", 0),
                "attendanceRate": f"{rate}%",
            },
        },
    }
