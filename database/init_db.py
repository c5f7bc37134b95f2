import logging

from database.db import Base, engine

# ✅ 관계 문자열("Student", "Grade" 등)이 해석되도록 모든 모델을 먼저 import
from models.groups import Group  # noqa: F401
from models.students import Student  # noqa: F401
from models.years import Year  # noqa: F401
from models.criteria import Criterion  # noqa: F401
from models.grade_scales import GradeScale  # noqa: F401
from models.grades import Grade, CriterionGrade  # noqa: F401
from models.attendance import Attendance  # noqa: F401
from models.lessons import Lesson  # noqa: F401
from models.schedule_settings import GroupScheduleSettings  # noqa: F401
from models.teacher_schedules import TeacherSchedule  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """테이블이 없으면 생성 (마이그레이션 도구 없이 create_all)"""
    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("database tables ensured on %s", target.url.render_as_string(hide_password=True))
