import math
from typing import List, Optional
from pydantic import Field, field_validator

from schemas.common import CamelModel

class CriterionRating(CamelModel):
    """기준별 점수 한 건 (값/ID 누락·형식 오류는 계산에서 건너뜀)"""
    criterion_id: Optional[int] = None
    value: Optional[float] = None

    @field_validator("criterion_id", "value", mode="before")
    @classmethod
    def _drop_malformed(cls, v, info):
        # 숫자로 해석 안 되는 값은 None 으로 (요청 전체를 거부하지 않음)
        if v is None or isinstance(v, bool):
            return None
        try:
            number = float(v)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        if info.field_name == "criterion_id":
            return int(number) if number.is_integer() else None
        return number

def _drop_non_objects(items):
    # 객체가 아닌 항목(null, 숫자, 문자열)은 None 으로 두고 계산에서 건너뜀
    if not isinstance(items, list):
        return items
    return [item if isinstance(item, (dict, CriterionRating)) else None for item in items]

# ✅ 입력용 (POST, upsert)
# - criteriaGrades / criteria 둘 다 허용 (프론트 구버전 호환)
class GradeSubmit(CamelModel):
    student_id: int
    year_id: int
    month: str = Field(..., min_length=1)
    criteria_grades: Optional[List[Optional[CriterionRating]]] = None
    criteria: Optional[List[Optional[CriterionRating]]] = None
    attendance: Optional[str] = None
    homework: Optional[str] = None
    comment: Optional[str] = None
    recommendations: Optional[str] = None

    @field_validator("criteria_grades", "criteria", mode="before")
    @classmethod
    def _skip_non_objects(cls, v):
        return _drop_non_objects(v)

    @property
    def ratings(self) -> Optional[List[Optional[CriterionRating]]]:
        if self.criteria_grades is not None:
            return self.criteria_grades
        return self.criteria

# ✅ 미리보기 입력 (저장 없이 계산만)
class GradePreviewRequest(CamelModel):
    criteria_grades: List[Optional[CriterionRating]] = []

    @field_validator("criteria_grades", mode="before")
    @classmethod
    def _skip_non_objects(cls, v):
        return _drop_non_objects(v)
