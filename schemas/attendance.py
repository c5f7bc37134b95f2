import datetime
from typing import Literal, Optional

from schemas.common import CamelModel

AttendanceStatus = Literal["present", "absent", "late"]

# ✅ 입력용 (POST, upsert)
class AttendanceMark(CamelModel):
    student_id: int                  # 학생 ID
    date: datetime.date              # 날짜
    status: AttendanceStatus         # 출결 상태
    group_id: Optional[int] = None   # 그룹 ID
