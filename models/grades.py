from datetime import datetime

from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 월별 평가 기록 테이블
    __table_args__ = (
        # 학생 + 학년도 + 월 조합은 하나만 존재 (upsert 키)
        UniqueConstraint("student_id", "year_id", "month", name="uq_grades_student_period"),
    )

    id = Column(Integer, primary_key=True, index=True)                                           # 성적 고유 ID (PK)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)  # 학생 ID
    year_id = Column(Integer, ForeignKey("years.id", ondelete="CASCADE"), nullable=False)        # 학년도 ID
    month = Column(String(20), nullable=False)                                                   # 월 라벨
    attendance = Column(String(50))                                                              # 출석률 메모 (예: 95%)
    homework = Column(String(500))                                                               # 숙제 메모
    comment = Column(String(2000))                                                               # 코멘트
    recommendations = Column(String(2000))                                                       # 권고 사항
    total_score = Column(Float, nullable=False, default=0.0)                                     # 가중 평균 점수
    grade_letter = Column(String(10))                                                            # 등급 (예: A, B)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # ✅ 관계 설정
    student = relationship("Student", back_populates="grades")
    year = relationship("Year", back_populates="grades")
    criteria_grades = relationship(
        "CriterionGrade",
        back_populates="grade",
        cascade="all, delete-orphan",
        order_by="CriterionGrade.id",
    )


class CriterionGrade(Base):
    __tablename__ = "criterion_grades"  # 기준별 점수 테이블

    id = Column(Integer, primary_key=True, index=True)
    grade_id = Column(Integer, ForeignKey("grades.id", ondelete="CASCADE"), nullable=False)
    # 기준이 삭제되면 NULL로 남음 (과거 점수는 보존)
    criterion_id = Column(Integer, ForeignKey("criteria.id", ondelete="SET NULL"), nullable=True)
    value = Column(Float, nullable=False)

    grade = relationship("Grade", back_populates="criteria_grades")
    criterion = relationship("Criterion", back_populates="ratings")
