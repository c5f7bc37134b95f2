from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import func

from database.db import get_db
from models.students import Student as StudentModel
from models.groups import Group as GroupModel
from models.grades import Grade as GradeModel, CriterionGrade as CriterionGradeModel
from schemas.students import StudentCreate, StudentUpdate
from services.grade_service import grade_to_dict

router = APIRouter(prefix="/students", tags=["students"])


def _student_to_dict(s: StudentModel):
    return {
        "id": s.id,
        "fullName": s.full_name,
        "groupId": s.group_id,
        "notes": s.notes,
        "group": {"id": s.group.id, "name": s.group.name} if s.group else None,
        "createdAt": s.created_at.isoformat() if s.created_at else None,
    }


def _get_student_or_404(db: Session, student_id: int) -> StudentModel:
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


def _ensure_group(db: Session, group_id: int):
    if db.query(GroupModel.id).filter(GroupModel.id == group_id).first() is None:
        raise HTTPException(status_code=404, detail="Group not found")


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 학생 목록 (그룹 필터, 이름 검색, 성적 개수 포함)
@router.get("/")
def read_students(
    group_id: Optional[int] = Query(None, alias="groupId"),
    q: Optional[str] = None,
    db: Session = Depends(get_db),
):
    grade_count = (
        db.query(GradeModel.student_id, func.count(GradeModel.id).label("cnt"))
        .group_by(GradeModel.student_id)
        .subquery()
    )
    query = (
        db.query(StudentModel, grade_count.c.cnt)
        .outerjoin(grade_count, grade_count.c.student_id == StudentModel.id)
        .options(selectinload(StudentModel.group))
    )
    if group_id is not None:
        query = query.filter(StudentModel.group_id == group_id)
    if q:
        query = query.filter(func.lower(StudentModel.full_name).contains(q.lower()))

    records = query.order_by(StudentModel.full_name.asc()).all()
    data = []
    for student, cnt in records:
        item = _student_to_dict(student)
        item["gradeCount"] = cnt or 0
        data.append(item)
    return {"success": True, "data": data}


# ✅ [CREATE] 학생 추가
@router.post("/", status_code=201)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    _ensure_group(db, student.group_id)
    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {
        "success": True,
        "data": _student_to_dict(db_student),
        "message": "Student created successfully"
    }


# ==========================================================
# [2단계] 완전 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회 (그룹 + 월별 성적 포함)
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)
    grades = (
        db.query(GradeModel)
        .options(selectinload(GradeModel.criteria_grades).selectinload(CriterionGradeModel.criterion))
        .filter(GradeModel.student_id == student_id)
        .order_by(GradeModel.month.asc())
        .all()
    )
    data = _student_to_dict(student)
    data["grades"] = [grade_to_dict(g, include_student=False) for g in grades]
    return {"success": True, "data": data}


# ✅ [UPDATE] 학생 정보 수정 (보낸 필드만 반영)
@router.put("/{student_id}")
def update_student(student_id: int, updated: StudentUpdate, db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)

    if updated.full_name:
        student.full_name = updated.full_name
    if updated.group_id:
        _ensure_group(db, updated.group_id)
        student.group_id = updated.group_id
    if updated.notes is not None:
        student.notes = updated.notes

    db.commit()
    db.refresh(student)
    return {
        "success": True,
        "data": _student_to_dict(student),
        "message": "Student updated successfully"
    }


# ✅ [DELETE] 학생 삭제 (성적/출결 함께 삭제)
@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db)):
    student = _get_student_or_404(db, student_id)
    db.delete(student)
    db.commit()
    return {
        "success": True,
        "data": {"studentId": student_id},
        "message": "Student deleted successfully"
    }
