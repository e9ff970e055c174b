"""
헬스체크 엔드포인트
서버 및 외부 서비스 설정 상태 확인
"""
from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """헬스체크 응답"""

    status: Literal["healthy", "degraded"]
    document_store: str
    google_login: Literal["configured", "unconfigured"]
    active_sessions: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    서버 상태 확인

    Returns:
        HealthResponse: 저장소 종류, 로그인 설정 여부, 활성 세션 수
    """
    app_state = request.app.state
    # 만료된 세션을 정리한 뒤 집계
    await app_state.session_registry.clear_expired()
    active_sessions = await app_state.session_registry.get_active_count()

    login_configured = (
        app_state.oauth_service.is_configured() and app_state.identity_service.is_configured()
    )

    return HealthResponse(
        status="healthy" if login_configured else "degraded",
        document_store=app_state.document_store.backend_name,
        google_login="configured" if login_configured else "unconfigured",
        active_sessions=active_sessions,
    )
