"""
인증 백엔드 서비스
Firebase Authentication (Identity Toolkit REST)
https://firebase.google.com/docs/reference/rest/auth#section-sign-in-with-oauth-credential
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import httpx

from applestore.config import Settings

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """인증 백엔드 오류 (자격 증명 거부, 네트워크 오류)"""


@dataclass
class ProviderCredential:
    """외부 제공자가 발급한 자격 증명"""

    provider_id: str
    id_token: str
    access_token: Optional[str] = None


@dataclass
class AuthUser:
    """인증된 사용자"""

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class FirebaseAuthService:
    """Firebase 인증 서비스"""

    SIGN_IN_WITH_IDP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithIdp"

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = settings.firebase_api_key
        self._request_uri = settings.firebase_request_uri
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def sign_in(self, credential: ProviderCredential) -> AuthUser:
        """제공자 자격 증명으로 로그인"""
        post_body = {"id_token": credential.id_token, "providerId": credential.provider_id}
        if credential.access_token:
            post_body["access_token"] = credential.access_token

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.SIGN_IN_WITH_IDP_URL,
                    params={"key": self._api_key},
                    json={
                        "postBody": urlencode(post_body),
                        "requestUri": self._request_uri,
                        "returnSecureToken": True,
                        "returnIdpCredential": True,
                    },
                )
                response.raise_for_status()
                data = response.json()

            user_id = data.get("localId")
            email = data.get("email")
            display_name = data.get("displayName")
        except httpx.HTTPStatusError as e:
            raise IdentityError(f"자격 증명이 거부되었습니다: {_error_message(e.response)}") from e
        except httpx.HTTPError as e:
            raise IdentityError(f"인증 서버 연결 실패: {e}") from e
        except (ValueError, TypeError, AttributeError) as e:
            raise IdentityError(f"인증 응답 형식 오류: {e}") from e

        if not user_id or not isinstance(user_id, str):
            raise IdentityError("인증 응답에 사용자 ID가 없습니다")

        return AuthUser(id=user_id, email=email, display_name=display_name)


def _error_message(response: httpx.Response) -> str:
    """Identity Toolkit 오류 메시지 추출"""
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"
