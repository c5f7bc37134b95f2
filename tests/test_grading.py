import pytest

from schemas.criteria import Criterion
from schemas.grade_scales import GradeScaleEntry
from schemas.grades import CriterionRating
from services.grading import DEFAULT_GRADE_LETTER, compute_composite, derive_label, round_score


def make_criteria(*weights):
    return [
        Criterion(id=i, name=f"c{i}", weight=w, scale="1-4", order=i)
        for i, w in enumerate(weights, start=1)
    ]


def make_ratings(*pairs):
    return [CriterionRating(criterion_id=cid, value=v) for cid, v in pairs]


SCALE = [
    GradeScaleEntry(letter="A", min_score=3.5),
    GradeScaleEntry(letter="B", min_score=2.5),
    GradeScaleEntry(letter="C", min_score=1.5),
    GradeScaleEntry(letter="D", min_score=1.0),
]


# ==========================================================
# compute_composite
# ==========================================================

def test_empty_ratings_yield_zero():
    assert compute_composite(make_criteria(1, 1), []) == 0


def test_no_matching_criterion_yields_zero():
    ratings = make_ratings((10, 4), (11, 3))
    assert compute_composite(make_criteria(1, 1), ratings) == 0


def test_single_criterion_reduces_to_raw_value():
    assert compute_composite(make_criteria(0.3, 0.7), make_ratings((2, 3.25))) == pytest.approx(3.25)


def test_equal_weights_average():
    criteria = make_criteria(1, 1, 1, 1)
    ratings = make_ratings((1, 4), (2, 3), (3, 2), (4, 1))
    assert compute_composite(criteria, ratings) == pytest.approx(2.5)


def test_weighted_average():
    criteria = make_criteria(0.75, 0.25)
    ratings = make_ratings((1, 4), (2, 2))
    assert compute_composite(criteria, ratings) == pytest.approx(3.5)


def test_invariant_under_uniform_weight_scaling():
    ratings = make_ratings((1, 4), (2, 1), (3, 3))
    base = compute_composite(make_criteria(0.1, 0.2, 0.7), ratings)
    scaled = compute_composite(make_criteria(10, 20, 70), ratings)
    assert scaled == pytest.approx(base)


def test_unknown_criterion_excluded_not_zero_filled():
    criteria = make_criteria(1, 1)
    ratings = make_ratings((1, 4), (99, 1))
    assert compute_composite(criteria, ratings) == pytest.approx(4.0)


def test_partial_submission_not_penalised():
    criteria = make_criteria(1, 1, 1, 1)
    assert compute_composite(criteria, make_ratings((1, 3), (2, 3))) == pytest.approx(3.0)


def test_missing_values_are_skipped():
    criteria = make_criteria(1, 1)
    ratings = [CriterionRating(criterion_id=1, value=None), CriterionRating(criterion_id=None, value=2),
               CriterionRating(criterion_id=2, value=2)]
    assert compute_composite(criteria, ratings) == pytest.approx(2.0)


def test_zero_total_weight_yields_zero():
    assert compute_composite(make_criteria(0, 0), make_ratings((1, 4), (2, 4))) == 0


# ==========================================================
# derive_label
# ==========================================================

@pytest.mark.parametrize("score,expected", [
    (4.0, "A"),
    (3.5, "A"),
    (2.5, "B"),
    (2.49, "C"),
    (1.0, "D"),
    (0.5, "F"),
    (0, "F"),
])
def test_derive_label(score, expected):
    assert derive_label(score, SCALE) == expected


def test_derive_label_ignores_input_order():
    assert derive_label(2.6, list(reversed(SCALE))) == "B"


def test_derive_label_empty_scale_falls_back():
    assert derive_label(4.0, []) == DEFAULT_GRADE_LETTER


def test_derive_label_is_monotonic():
    ranks = {"A": 4, "B": 3, "C": 2, "D": 1, "F": 0}
    scores = [i / 20 for i in range(0, 101)]
    labels = [ranks[derive_label(s, SCALE)] for s in scores]
    assert labels == sorted(labels)


def test_round_score():
    assert round_score(2.3456) == 2.35
    assert round_score(None) is None


def test_rating_coerces_malformed_input_to_none():
    rating = CriterionRating.model_validate({"criterionId": "1.5", "value": "nan"})
    assert rating.criterion_id is None
    assert rating.value is None

    rating = CriterionRating.model_validate({"criterionId": "2", "value": "3.5"})
    assert (rating.criterion_id, rating.value) == (2, 3.5)
