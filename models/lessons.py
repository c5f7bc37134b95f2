from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)                                       # 수업 고유 ID (PK)
    date = Column(Date, nullable=False)                                                      # 수업 날짜
    topic = Column(String(200), nullable=False)                                              # 수업 주제
    homework = Column(String(500), nullable=True)                                            # 숙제
    comment = Column(String(1000), nullable=True)                                            # 코멘트
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True)  # 그룹 ID

    group = relationship("Group")
