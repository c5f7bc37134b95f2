from fastapi import Request

from services.grading_cache import GradingCache

def get_grading_cache(request: Request) -> GradingCache:
    """앱 시작 시 생성된 캐시(app.state.grading_cache)를 요청 단위로 전달"""
    return request.app.state.grading_cache
