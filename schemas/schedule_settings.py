from pydantic import Field

from schemas.common import CamelModel

# ✅ 입력용 (POST, upsert) - "2,4" 처럼 콤마 구분 요일 번호
class ScheduleSettingsSave(CamelModel):
    group_id: int
    weekdays: str = Field(..., pattern=r"^$|^[1-7](,[1-7])*$")
