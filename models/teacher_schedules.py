from sqlalchemy import Column, Integer, String, UniqueConstraint
from database.db import Base

class TeacherSchedule(Base):
    __tablename__ = "teacher_schedules"  # 교사 주간 시간표 칸
    __table_args__ = (
        # 교사 + 요일 + 시간 칸에는 그룹 하나만
        UniqueConstraint("teacher_id", "day", "time", name="uq_teacher_schedules_slot"),
    )

    id = Column(Integer, primary_key=True, index=True)
    teacher_id = Column(String(100), nullable=False, index=True)  # 교사 식별자 (계정 연동 없음)
    day = Column(Integer, nullable=False)                         # 요일 인덱스 (0=월)
    time = Column(String(10), nullable=False)                     # 시작 시각 (예: "11", "14:30")
    group_name = Column(String(100), nullable=False)              # 칸에 배정된 그룹 이름
