"""
인증 세션 관리
외부 제공자(구글) 로그인 후 Firebase 자격 증명 교환

세션이 인증되면 세션 전용 ItemStore를 만들고, 로그아웃 시 폐기합니다.
"""
import logging
from enum import Enum
from typing import Optional

import httpx

from applestore.services.document_store import BaseDocumentStore
from applestore.services.identity import (
    AuthUser,
    FirebaseAuthService,
    IdentityError,
    ProviderCredential,
)
from applestore.services.item_store import ItemStore
from applestore.services.oauth.base import BaseOAuthService

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    """인증 상태"""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthManager:
    """인증 세션 관리자"""

    def __init__(
        self,
        oauth_service: BaseOAuthService,
        identity_service: FirebaseAuthService,
        document_store: BaseDocumentStore,
    ) -> None:
        self._oauth_service = oauth_service
        self._identity_service = identity_service
        self._document_store = document_store

        self.state = AuthState.UNAUTHENTICATED
        self.user: Optional[AuthUser] = None
        self.error_message: Optional[str] = None
        self.item_store: Optional[ItemStore] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED

    def _fail(self, message: str) -> bool:
        self.state = AuthState.UNAUTHENTICATED
        self.user = None
        self.item_store = None
        self.error_message = message
        logger.warning(f"[AuthManager] 로그인 실패: {message}")
        return False

    async def sign_in_with_google(self, authorization_code: Optional[str]) -> bool:
        """
        구글 로그인

        Args:
            authorization_code: 구글 로그인 화면에서 돌아온 인증 코드

        Returns:
            bool: 성공 여부 (예외를 밖으로 던지지 않음)
        """
        self.state = AuthState.AUTHENTICATING
        self.error_message = None

        if not (self._oauth_service.is_configured() and self._identity_service.is_configured()):
            logger.critical("[AuthManager] 구글/Firebase 클라이언트 설정이 없습니다")
            return self._fail("로그인 설정이 없습니다")

        if not authorization_code:
            return self._fail("로그인 화면 정보가 없습니다")

        try:
            tokens = await self._oauth_service.exchange_code(authorization_code)
        except (httpx.HTTPError, ValueError) as e:
            return self._fail(f"{self._oauth_service.provider_name} 토큰 교환 실패: {e}")

        if not tokens.id_token:
            return self._fail("ID 토큰이 없습니다")

        credential = ProviderCredential(
            provider_id=self._oauth_service.provider_id,
            id_token=tokens.id_token,
            access_token=tokens.access_token,
        )
        try:
            user = await self._identity_service.sign_in(credential)
        except IdentityError as e:
            return self._fail(str(e))

        self.user = user
        self.item_store = ItemStore(self._document_store)
        self.state = AuthState.AUTHENTICATED
        logger.info(f"[AuthManager] 로그인 성공: {user.id} ({user.email})")
        return True

    def sign_out(self) -> None:
        """세션 종료 (상품 저장소 폐기)"""
        if self.user:
            logger.info(f"[AuthManager] 로그아웃: {self.user.id}")
        self.state = AuthState.UNAUTHENTICATED
        self.user = None
        self.error_message = None
        self.item_store = None
