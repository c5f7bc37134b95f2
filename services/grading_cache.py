"""
services/grading_cache.py

평가 기준 / 등급표 스냅샷 캐시.

- 모듈 전역 변수가 아니라 앱이 소유하는 객체(app.state.grading_cache)
- TTL 이 지나면 다음 조회 때 DB에서 다시 읽음
- 기준/등급표가 추가·수정·삭제되면 라우터에서 invalidate() 호출
- DB 에서 읽은 ORM 객체 대신 pydantic 스냅샷(불변 리스트)을 보관하므로
  세션이 닫힌 뒤에도 안전하게 공유 가능
"""

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from sqlalchemy.orm import Session

from models.criteria import Criterion as CriterionModel
from models.grade_scales import GradeScale as GradeScaleModel
from schemas.criteria import Criterion
from schemas.grade_scales import GradeScaleEntry

logger = logging.getLogger(__name__)


class GradingCache:
    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # invalidate() 마다 증가, 조회 도중 무효화되면 읽은 스냅샷은 버림
        self._generation = 0
        self._criteria: Optional[Tuple[float, List[Criterion]]] = None
        self._scales: Optional[Tuple[float, List[GradeScaleEntry]]] = None

    def _fresh(self, entry) -> bool:
        return entry is not None and self._clock() < entry[0]

    def get_criteria(self, db: Session) -> List[Criterion]:
        """order 오름차순 기준 목록"""
        with self._lock:
            if self._fresh(self._criteria):
                return self._criteria[1]
            generation = self._generation

        rows = db.query(CriterionModel).order_by(CriterionModel.order.asc(), CriterionModel.id.asc()).all()
        snapshot = [Criterion.model_validate(r) for r in rows]
        with self._lock:
            if generation == self._generation:
                self._criteria = (self._clock() + self.ttl_seconds, snapshot)
        logger.debug("criteria cache refreshed: %d entries", len(snapshot))
        return snapshot

    def get_scales(self, db: Session) -> List[GradeScaleEntry]:
        """min_score 내림차순 등급표"""
        with self._lock:
            if self._fresh(self._scales):
                return self._scales[1]
            generation = self._generation

        rows = db.query(GradeScaleModel).order_by(GradeScaleModel.min_score.desc()).all()
        snapshot = [GradeScaleEntry.model_validate(r) for r in rows]
        with self._lock:
            if generation == self._generation:
                self._scales = (self._clock() + self.ttl_seconds, snapshot)
        logger.debug("grade scale cache refreshed: %d entries", len(snapshot))
        return snapshot

    def invalidate(self) -> None:
        with self._lock:
            self._generation += 1
            self._criteria = None
            self._scales = None
        logger.info("grading cache invalidated")
