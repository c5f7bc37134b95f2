from models.criteria import Criterion as CriterionModel
from models.grade_scales import GradeScale as GradeScaleModel
from models.years import Year as YearModel
from scripts.seed import DEFAULT_CRITERIA, seed


def test_seed_is_idempotent(db_session):
    first = seed(db_session)
    second = seed(db_session)

    assert first == {"criteria": 4, "grade_scales": 4, "years": 1}
    assert second == {"criteria": 0, "grade_scales": 0, "years": 0}
    assert db_session.query(CriterionModel).count() == len(DEFAULT_CRITERIA)
    assert db_session.query(GradeScaleModel).count() == 4
    assert len(db_session.query(YearModel).one().month_list) == 10


def test_seeded_weights_sum_to_one(db_session):
    seed(db_session)
    total = sum(c.weight for c in db_session.query(CriterionModel).all())
    assert abs(total - 1.0) < 1e-9
