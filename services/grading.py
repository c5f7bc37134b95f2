"""
services/grading.py

평가 기준별 점수 → 가중 평균(종합 점수) → 등급 문자 변환.

- compute_composite: 기준 목록(가중치)과 제출된 점수 목록으로 가중 평균 계산
- derive_label: 등급표(letter, min_score)를 min_score 내림차순으로 훑어 첫 번째로
  min_score <= 점수 인 등급을 반환, 없으면 'F'
- 두 함수 모두 입력만 읽는 순수 함수이며 예외를 던지지 않음
  (일부 기준만 채점된 제출도 정상 처리되어야 함)
"""

from typing import Iterable, Optional, Sequence

from schemas.criteria import Criterion
from schemas.grade_scales import GradeScaleEntry
from schemas.grades import CriterionRating

# 어떤 등급표 항목도 만족하지 못할 때의 기본 등급
DEFAULT_GRADE_LETTER = "F"


def compute_composite(criteria: Sequence[Criterion], ratings: Iterable[CriterionRating]) -> float:
    """
    가중 평균 = Σ(value × weight) / Σ(weight)

    - 기준 목록에 없는 criterion_id 의 점수는 분자/분모 모두에서 제외 (0점 처리 아님)
    - value 또는 criterion_id 가 없는 항목은 건너뜀
    - 일치하는 기준이 없거나 가중치 합이 0이면 0.0
    """
    weights = {c.id: c.weight for c in criteria}

    numerator = 0.0
    denominator = 0.0
    for rating in ratings or ():
        if rating is None or rating.criterion_id is None or rating.value is None:
            continue
        weight = weights.get(rating.criterion_id)
        if weight is None:
            continue
        numerator += rating.value * weight
        denominator += weight

    return numerator / denominator if denominator > 0 else 0.0


def derive_label(score: float, scale: Iterable[GradeScaleEntry]) -> str:
    """등급표를 min_score 내림차순으로 검사해 첫 번째 충족 등급 반환"""
    for entry in sorted(scale, key=lambda e: e.min_score, reverse=True):
        if entry.min_score <= score:
            return entry.letter
    return DEFAULT_GRADE_LETTER


def round_score(score: Optional[float]) -> Optional[float]:
    """화면 표시용 소수 둘째 자리 반올림"""
    return round(score, 2) if score is not None else None
