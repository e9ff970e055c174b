"""
JWT 토큰 서비스
로그인 세션을 식별하는 액세스 토큰 발급/검증
"""

from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from applestore.config import Settings


class TokenData(BaseModel):
    """토큰 데이터"""

    user_id: str
    session_id: str
    exp: datetime


class JWTService:
    """JWT 토큰 서비스"""

    def __init__(self, settings: Settings):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.expire_minutes = settings.jwt_expire_minutes

    def create_access_token(
        self,
        user_id: str,
        session_id: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """액세스 토큰 생성"""
        if expires_delta:
            expire = datetime.utcnow() + expires_delta
        else:
            expire = datetime.utcnow() + timedelta(minutes=self.expire_minutes)

        payload = {
            "sub": user_id,
            "sid": session_id,
            "exp": expire,
            "iat": datetime.utcnow(),
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[TokenData]:
        """토큰 검증 및 디코딩"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        user_id = payload.get("sub")
        session_id = payload.get("sid")
        exp = payload.get("exp")

        if user_id is None or session_id is None:
            return None

        return TokenData(
            user_id=user_id,
            session_id=session_id,
            exp=datetime.fromtimestamp(exp),
        )
