import datetime
from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST)
class LessonCreate(CamelModel):
    date: datetime.date                         # 수업 날짜
    topic: str = Field(..., min_length=1)       # 주제
    homework: Optional[str] = None              # 숙제
    comment: Optional[str] = None               # 코멘트
    group_id: Optional[int] = None              # 그룹 ID

# ✅ 수정용 (PUT, 부분 수정)
class LessonUpdate(CamelModel):
    date: Optional[datetime.date] = None
    topic: Optional[str] = None
    homework: Optional[str] = None
    comment: Optional[str] = None
    group_id: Optional[int] = None
