"""
구글 OAuth 서비스
https://developers.google.com/identity/protocols/oauth2/web-server
"""

from typing import Optional
from urllib.parse import urlencode

import httpx

from applestore.config import Settings
from applestore.services.oauth.base import BaseOAuthService, OAuthTokens


class GoogleOAuthService(BaseOAuthService):
    """구글 OAuth 서비스"""

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client_id = settings.google_client_id
        self._client_secret = settings.google_client_secret
        self._redirect_uri = settings.google_redirect_uri
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def provider_id(self) -> str:
        return "google.com"

    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret and self._redirect_uri)

    def get_authorization_url(self, state: str) -> str:
        """구글 로그인 인증 URL 생성"""
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> OAuthTokens:
        """
        인증 코드로 토큰 교환

        Returns:
            OAuthTokens: id_token이 없을 수 있으므로 호출 측에서 확인

        Raises:
            httpx.HTTPError: 토큰 엔드포인트 오류
            ValueError: 응답이 JSON 객체가 아닌 경우
        """
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                self.TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "redirect_uri": self._redirect_uri,
                    "code": code,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"토큰 응답이 객체가 아닙니다: {type(data).__name__}")

        return OAuthTokens(
            id_token=data.get("id_token"),
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
        )
