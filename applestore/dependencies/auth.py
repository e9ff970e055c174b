"""
인증 의존성
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from applestore.services.item_store import ItemStore
from applestore.services.session_registry import SessionEntry, SessionRegistry

# Bearer 토큰 스키마
security = HTTPBearer(auto_error=False)


def get_session_registry(request: Request) -> SessionRegistry:
    """앱 수명주기에서 생성된 세션 저장소"""
    return request.app.state.session_registry


async def get_current_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionEntry:
    """
    현재 로그인된 세션 조회 (필수)
    토큰이 없거나 유효하지 않으면 401 에러
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증이 필요합니다",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = request.app.state.jwt_service.verify_token(credentials.credentials)
    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 토큰입니다",
            headers={"WWW-Authenticate": "Bearer"},
        )

    entry = await registry.get_session(token_data.session_id)
    if (
        entry is None
        or not entry.manager.is_authenticated
        or entry.manager.user_id != token_data.user_id
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="세션이 만료되었습니다",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return entry


async def get_item_store(entry: SessionEntry = Depends(get_current_session)) -> ItemStore:
    """현재 세션의 상품 저장소"""
    item_store = entry.manager.item_store
    if item_store is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="세션이 만료되었습니다",
        )
    return item_store
