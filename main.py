from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.init_db import init_db
from services.grading_cache import GradingCache

# ✅ 로그 레벨은 설정에서
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    attendance, criteria, grade_scales, grades, groups,
    lessons, reports, schedule_settings, students, teacher_schedules, years,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# ✅ 평가 기준/등급표 캐시 (앱 단위 소유, 기준 수정 시 라우터에서 무효화)
app.state.grading_cache = GradingCache(ttl_seconds=settings.GRADING_CACHE_TTL_SECONDS)

# ✅ CORS 설정 (프론트엔드 연동)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(groups.router,            prefix="/v1")
app.include_router(students.router,          prefix="/v1")
app.include_router(years.router,             prefix="/v1")
app.include_router(criteria.router,          prefix="/v1")
app.include_router(grade_scales.router,      prefix="/v1")
app.include_router(grades.router,            prefix="/v1")
app.include_router(attendance.router,        prefix="/v1")
app.include_router(lessons.router,           prefix="/v1")
app.include_router(schedule_settings.router, prefix="/v1")
app.include_router(teacher_schedules.router, prefix="/v1")
app.include_router(reports.router,           prefix="/v1")

# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": "Teacher Gradebook API"}
