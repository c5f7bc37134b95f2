from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

class Criterion(CamelModel):
    """평가 기준 스냅샷 (캐시/계산용)"""
    id: int
    name: str
    weight: float
    scale: str
    order: int = 0

# ✅ 입력용 (POST) - 가중치는 0~1
class CriterionCreate(CamelModel):
    name: str = Field(..., min_length=1)
    weight: float = Field(..., ge=0, le=1)
    scale: str = Field(..., min_length=1)
    order: int = 0

# ✅ 수정용 (PUT, 부분 수정)
class CriterionUpdate(CamelModel):
    name: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0, le=1)
    scale: Optional[str] = None
    order: Optional[int] = None
