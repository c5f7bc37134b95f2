from typing import List, Optional
from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST) - months 생략 시 기본 월 목록 사용
class YearCreate(CamelModel):
    year: str = Field(..., min_length=1)     # 학년도 라벨 (예: 2024/2025)
    months: Optional[List[str]] = None       # 월 목록

# ✅ 수정용 (PUT)
class YearUpdate(CamelModel):
    year: Optional[str] = None
    months: Optional[List[str]] = None
