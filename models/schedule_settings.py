from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

# 설정이 없을 때 기본 수업 요일 (화, 목)
DEFAULT_WEEKDAYS = "2,4"

class GroupScheduleSettings(Base):
    __tablename__ = "group_schedule_settings"  # 그룹별 수업 요일 설정

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, unique=True)
    weekdays = Column(String(20), nullable=False, default=DEFAULT_WEEKDAYS)  # 콤마 구분 요일 번호 (1=월)

    group = relationship("Group", back_populates="schedule_settings")
