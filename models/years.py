import json
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from database.db import Base

class Year(Base):
    __tablename__ = "years"  # 학년도 테이블

    id = Column(Integer, primary_key=True, index=True)          # 학년도 고유 ID (PK)
    year = Column(String(20), nullable=False)                   # 학년도 라벨 (예: 2024/2025)
    months = Column(Text, nullable=False)                       # 월 목록 (JSON 배열 문자열)
    created_at = Column(DateTime, default=datetime.utcnow)      # 생성 시각

    # ✅ 관계 설정 (학년도 삭제 시 해당 성적도 함께 삭제)
    grades = relationship("Grade", back_populates="year", cascade="all, delete-orphan")

    @property
    def month_list(self):
        """저장된 JSON 문자열을 리스트로 변환 (깨진 값이면 빈 리스트)"""
        try:
            value = json.loads(self.months or "[]")
        except ValueError:
            return []
        return value if isinstance(value, list) else []
