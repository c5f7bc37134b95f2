from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST)
class StudentCreate(CamelModel):
    full_name: str = Field(..., min_length=1)   # 학생 이름
    group_id: int                               # 소속 그룹 ID
    notes: Optional[str] = None                 # 메모

# ✅ 수정용 (PUT, 부분 수정)
class StudentUpdate(CamelModel):
    full_name: Optional[str] = None
    group_id: Optional[int] = None
    notes: Optional[str] = None
