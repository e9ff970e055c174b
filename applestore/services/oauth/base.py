"""
OAuth 베이스 클래스
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class OAuthTokens:
    """OAuth 토큰 교환 결과"""

    id_token: Optional[str]
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class BaseOAuthService(ABC):
    """OAuth 서비스 베이스 클래스"""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """제공자 이름"""
        pass

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """인증 백엔드에 전달할 제공자 ID (예: google.com)"""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """클라이언트 설정 여부"""
        pass

    @abstractmethod
    def get_authorization_url(self, state: str) -> str:
        """인증 URL 생성"""
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> OAuthTokens:
        """인증 코드로 토큰 교환"""
        pass
