from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import func

from database.db import get_db
from models.groups import Group as GroupModel
from models.students import Student as StudentModel
from schemas.groups import GroupCreate, GroupUpdate

router = APIRouter(prefix="/groups", tags=["groups"])


def _group_to_dict(g: GroupModel, student_count: int = None):
    data = {
        "id": g.id,
        "name": g.name,
        "description": g.description,
        "createdAt": g.created_at.isoformat() if g.created_at else None,
    }
    if student_count is not None:
        data["studentCount"] = student_count
    return data


def _get_group_or_404(db: Session, group_id: int) -> GroupModel:
    group = db.query(GroupModel).filter(GroupModel.id == group_id).first()
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    return group


def _ensure_unique_name(db: Session, name: str, exclude_id: int = None):
    query = db.query(GroupModel).filter(GroupModel.name == name)
    if exclude_id is not None:
        query = query.filter(GroupModel.id != exclude_id)
    if query.first() is not None:
        raise HTTPException(status_code=409, detail="Group with this name already exists")


def _student_count(db: Session, group_id: int) -> int:
    return db.query(func.count(StudentModel.id)).filter(StudentModel.group_id == group_id).scalar() or 0


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 전체 그룹 조회 (학생 수 포함, 이름순)
@router.get("/")
def read_groups(db: Session = Depends(get_db)):
    rows = (
        db.query(GroupModel, func.count(StudentModel.id))
        .outerjoin(StudentModel, StudentModel.group_id == GroupModel.id)
        .group_by(GroupModel.id)
        .order_by(GroupModel.name.asc())
        .all()
    )
    return {
        "success": True,
        "data": [_group_to_dict(g, count) for g, count in rows],
    }


# ✅ [CREATE] 그룹 추가
@router.post("/", status_code=201)
def create_group(group: GroupCreate, db: Session = Depends(get_db)):
    _ensure_unique_name(db, group.name)
    db_group = GroupModel(**group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return {
        "success": True,
        "data": _group_to_dict(db_group, 0),
        "message": "Group created successfully"
    }


# ==========================================================
# [2단계] 동적 라우터
# ==========================================================

# ✅ [READ] 특정 그룹 조회 (학생 목록 포함)
@router.get("/{group_id}")
def read_group(group_id: int, db: Session = Depends(get_db)):
    group = _get_group_or_404(db, group_id)
    data = _group_to_dict(group, len(group.students))
    data["students"] = [
        {"id": s.id, "fullName": s.full_name, "notes": s.notes}
        for s in group.students
    ]
    return {"success": True, "data": data}


# ✅ [UPDATE] 그룹 수정 (이름 변경 시 중복 검사)
@router.put("/{group_id}")
def update_group(group_id: int, updated: GroupUpdate, db: Session = Depends(get_db)):
    group = _get_group_or_404(db, group_id)

    if updated.name and updated.name != group.name:
        _ensure_unique_name(db, updated.name, exclude_id=group_id)
        group.name = updated.name
    if updated.description is not None:
        group.description = updated.description

    db.commit()
    db.refresh(group)
    return {
        "success": True,
        "data": _group_to_dict(group, _student_count(db, group_id)),
        "message": "Group updated successfully"
    }


# ✅ [DELETE] 그룹 삭제 (학생이 남아 있으면 거부)
@router.delete("/{group_id}")
def delete_group(group_id: int, db: Session = Depends(get_db)):
    group = _get_group_or_404(db, group_id)

    count = _student_count(db, group_id)
    if count > 0:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot delete group with {count} students. Move students to another group first.",
        )

    db.delete(group)
    db.commit()
    return {
        "success": True,
        "data": {"groupId": group_id},
        "message": "Group deleted successfully"
    }
