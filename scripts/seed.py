import json
import logging

from sqlalchemy.orm import Session

from config.settings import settings
from database.db import SessionLocal
from database.init_db import init_db
from models.criteria import Criterion as CriterionModel
from models.grade_scales import GradeScale as GradeScaleModel
from models.years import Year as YearModel

logger = logging.getLogger(__name__)

# ✅ 기본 평가 기준 (1-4 척도, 동일 가중치)
DEFAULT_CRITERIA = [
    {"name": "🎭 Драматика / произношение", "weight": 0.25, "scale": "1-4", "order": 1},
    {"name": "🗣 Говорение / общение", "weight": 0.25, "scale": "1-4", "order": 2},
    {"name": "📝 Домашнее задание", "weight": 0.25, "scale": "1-4", "order": 3},
    {"name": "🚀 Вовлечённость и активность", "weight": 0.25, "scale": "1-4", "order": 4},
]

# ✅ 기본 등급표 (1-4 척도 기준)
DEFAULT_GRADE_SCALES = [
    {"letter": "A", "min_score": 3.5, "description": "Отлично"},
    {"letter": "B", "min_score": 2.5, "description": "Хорошо"},
    {"letter": "C", "min_score": 1.5, "description": "Удовлетворительно"},
    {"letter": "D", "min_score": 1.0, "description": "Неудовлетворительно"},
]

DEMO_YEAR = "2024/2025"


def seed(db: Session) -> dict:
    """이미 있는 항목은 건너뛰고 기본 데이터만 추가 (여러 번 실행해도 안전)"""
    created = {"criteria": 0, "grade_scales": 0, "years": 0}

    for item in DEFAULT_CRITERIA:
        if db.query(CriterionModel).filter(CriterionModel.name == item["name"]).first() is None:
            db.add(CriterionModel(**item))
            created["criteria"] += 1

    for item in DEFAULT_GRADE_SCALES:
        if db.query(GradeScaleModel).filter(GradeScaleModel.letter == item["letter"]).first() is None:
            db.add(GradeScaleModel(**item))
            created["grade_scales"] += 1

    if db.query(YearModel).filter(YearModel.year == DEMO_YEAR).first() is None:
        db.add(YearModel(year=DEMO_YEAR, months=json.dumps(settings.DEFAULT_YEAR_MONTHS, ensure_ascii=False)))
        created["years"] += 1

    db.commit()
    return created


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    db: Session = SessionLocal()
    try:
        created = seed(db)
    finally:
        db.close()
    logger.info("✅ 기본 데이터 시드 완료: %s", created)


if __name__ == "__main__":
    main()
