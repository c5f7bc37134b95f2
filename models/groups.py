from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database.db import Base

class Group(Base):
    __tablename__ = "groups"  # 학습 그룹(반) 테이블

    id = Column(Integer, primary_key=True, index=True)               # 그룹 고유 ID (PK)
    name = Column(String(100), nullable=False, unique=True)          # 그룹 이름 (중복 불가)
    description = Column(String(500))                                # 설명
    created_at = Column(DateTime, default=datetime.utcnow)           # 생성 시각

    # ✅ 소속 학생 목록 (1:N)
    students = relationship("Student", back_populates="group", order_by="Student.full_name")

    # ✅ 요일 설정 (1:1)
    schedule_settings = relationship(
        "GroupScheduleSettings",
        back_populates="group",
        uselist=False,
        cascade="all, delete-orphan",
    )
