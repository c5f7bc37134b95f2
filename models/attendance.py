from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class Attendance(Base):
    __tablename__ = "attendance"  # 출결 기록 테이블
    __table_args__ = (
        UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
    )

    id = Column(Integer, primary_key=True, index=True)                                           # 출결 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)  # 학생 ID
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True)      # 그룹 ID
    date = Column(Date, nullable=False)                                                          # 날짜
    status = Column(String(20), nullable=False)                                                  # 출결 상태 (present, absent, late)

    student = relationship("Student", back_populates="attendance")
