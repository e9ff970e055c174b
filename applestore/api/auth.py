"""
인증 API 엔드포인트
구글 로그인 및 세션 토큰 관리
"""

import secrets
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from applestore.dependencies.auth import get_current_session, get_session_registry
from applestore.services.session_registry import SessionEntry, SessionRegistry

router = APIRouter(prefix="/auth", tags=["인증"])


# ==================== Response Models ====================
class UserResponse(BaseModel):
    """사용자 정보 응답"""

    id: str
    email: Optional[str]
    display_name: Optional[str]


class TokenResponse(BaseModel):
    """토큰 응답"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class SessionResponse(BaseModel):
    """세션 상태 응답"""

    state: str
    user: Optional[UserResponse]


def _user_response(entry: SessionEntry) -> Optional[UserResponse]:
    user = entry.manager.user
    if user is None:
        return None
    return UserResponse(id=user.id, email=user.email, display_name=user.display_name)


# ==================== 구글 로그인 ====================
@router.get("/google")
async def google_login(
    request: Request,
    registry: SessionRegistry = Depends(get_session_registry),
):
    """구글 로그인 시작 - 구글 인증 페이지로 리다이렉트"""
    state = secrets.token_urlsafe(32)
    await registry.create_session(oauth_state=state)

    auth_url = request.app.state.oauth_service.get_authorization_url(state)
    return RedirectResponse(url=auth_url)


@router.get("/google/callback", response_model=TokenResponse)
async def google_callback(
    request: Request,
    state: str = Query(...),
    code: Optional[str] = Query(None),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """구글 로그인 콜백 처리"""
    # state 검증 (없거나 만료된 세션이면 거부)
    entry = await registry.claim_oauth_state(state)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="유효하지 않거나 만료된 state입니다",
        )
    session_id = entry.session_id

    if not await entry.manager.sign_in_with_google(code):
        error_message = entry.manager.error_message
        await registry.delete_session(session_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"구글 로그인 실패: {error_message}",
        )

    jwt_service = request.app.state.jwt_service
    access_token = jwt_service.create_access_token(entry.manager.user_id, session_id)

    return TokenResponse(
        access_token=access_token,
        expires_in=jwt_service.expire_minutes * 60,
        user=_user_response(entry),
    )


# ==================== 세션 관리 ====================
@router.get("/me", response_model=SessionResponse)
async def get_me(entry: SessionEntry = Depends(get_current_session)):
    """현재 로그인 세션 조회"""
    return SessionResponse(state=entry.manager.state.value, user=_user_response(entry))


@router.post("/logout", status_code=204)
async def logout(
    entry: SessionEntry = Depends(get_current_session),
    registry: SessionRegistry = Depends(get_session_registry),
):
    """로그아웃 (세션 및 상품 목록 폐기)"""
    await registry.delete_session(entry.session_id)
