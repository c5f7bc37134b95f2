from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST, upsert) - groupName 이 비어 있으면 해당 칸 삭제
class TeacherScheduleSlot(CamelModel):
    teacher_id: str = Field(..., min_length=1)
    day: int = Field(..., ge=0, le=6)
    time: str = Field(..., min_length=1, max_length=10)
    group_name: Optional[str] = None
