"""
환경변수 설정 모듈
Pydantic Settings를 사용하여 환경변수를 관리합니다.
모든 설정은 .env 파일에서 가져옵니다.
"""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========== 문서 저장소 설정 ==========
    document_store_backend: Literal["firestore", "memory"] = "firestore"
    firestore_project_id: str = ""
    firestore_database: str = "(default)"
    firestore_access_token: Optional[str] = None
    # None이면 httpx 기본 타임아웃 사용
    firestore_timeout_seconds: Optional[float] = None

    @property
    def firestore_documents_url(self) -> str:
        """Firestore REST 문서 루트 URL"""
        return (
            "https://firestore.googleapis.com/v1/"
            f"projects/{self.firestore_project_id}"
            f"/databases/{self.firestore_database}/documents"
        )

    # ========== Firebase 인증 설정 ==========
    firebase_api_key: str = ""
    firebase_request_uri: str = "http://localhost"

    # ========== 구글 로그인 설정 ==========
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = ""

    # ========== 세션 설정 ==========
    session_ttl_minutes: int = 60

    # ========== JWT 인증 설정 ==========
    jwt_secret_key: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # ========== 서버 설정 ==========
    api_host: str = ""
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # ========== CORS 설정 ==========
    cors_origins: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """CORS origins를 리스트로 변환"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """캐싱된 설정 인스턴스 반환"""
    return Settings()
