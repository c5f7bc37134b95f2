from sqlalchemy import Column, Integer, String, Float
from database.db import Base

class GradeScale(Base):
    __tablename__ = "grade_scales"  # 등급 기준표 테이블

    id = Column(Integer, primary_key=True, index=True)              # 고유 ID (PK)
    letter = Column(String(10), nullable=False, unique=True)        # 등급 문자 (예: A, B)
    min_score = Column(Float, nullable=False)                       # 등급 하한 점수
    description = Column(String(200))                               # 설명 (예: 우수)
