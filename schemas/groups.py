from typing import Optional
from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST)
class GroupCreate(CamelModel):
    name: str = Field(..., min_length=1)     # 그룹 이름
    description: Optional[str] = None        # 설명

# ✅ 수정용 (PUT, 부분 수정)
class GroupUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
