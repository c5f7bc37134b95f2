from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                          # 고유 학생 ID (PK)
    full_name = Column(String(200), nullable=False)                             # 학생 이름
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)         # 소속 그룹 ID (FK)
    notes = Column(String(1000))                                                # 메모
    created_at = Column(DateTime, default=datetime.utcnow)                      # 생성 시각

    # ✅ 관계 설정
    group = relationship("Group", back_populates="students")
    grades = relationship(
        "Grade",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="Grade.id",
    )
    attendance = relationship("Attendance", back_populates="student", cascade="all, delete-orphan")
