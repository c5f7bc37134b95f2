from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

class GradeScaleEntry(CamelModel):
    """등급표 한 줄: min_score 이상이면 letter"""
    letter: str
    min_score: float

# ✅ 입력용 (POST)
class GradeScaleCreate(CamelModel):
    letter: str = Field(..., min_length=1, max_length=10)
    min_score: float
    description: Optional[str] = None

# ✅ 수정용 (PUT)
class GradeScaleUpdate(CamelModel):
    letter: Optional[str] = Field(default=None, min_length=1, max_length=10)
    min_score: Optional[float] = None
    description: Optional[str] = None
