from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship
from database.db import Base

class Criterion(Base):
    __tablename__ = "criteria"  # 평가 기준 테이블

    id = Column(Integer, primary_key=True, index=True)     # 기준 고유 ID (PK)
    name = Column(String(200), nullable=False)             # 표시 이름 (중복 허용)
    weight = Column(Float, nullable=False, default=0.0)    # 가중치 (합계가 1일 필요 없음)
    scale = Column(String(50), nullable=False)             # 점수 범위 설명 (예: 1-4), 계산에는 미사용
    order = Column(Integer, nullable=False, default=0)     # 표시/입력 순서

    # ✅ 이 기준으로 매겨진 점수들 (기준 삭제 시 criterion_id 는 NULL 로 남음)
    ratings = relationship("CriterionGrade", back_populates="criterion")
