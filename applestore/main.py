"""
FastAPI 메인 애플리케이션
애플스토어 클론 상품 카탈로그 백엔드
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from applestore.api import auth, health, items
from applestore.config import Settings, get_settings
from applestore.services.auth_manager import AuthManager
from applestore.services.document_store import BaseDocumentStore, build_document_store
from applestore.services.identity import FirebaseAuthService
from applestore.services.jwt_service import JWTService
from applestore.services.oauth.base import BaseOAuthService
from applestore.services.oauth.google import GoogleOAuthService
from applestore.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """애플리케이션 생명주기 관리"""
    logger.info(f"🍎 applestore 서버 시작 (저장소: {app.state.document_store.backend_name})")

    yield

    # 종료 시 모든 세션 정리
    await app.state.session_registry.clear()
    logger.info("🍎 applestore 서버 종료")


def create_app(
    settings: Optional[Settings] = None,
    document_store: Optional[BaseDocumentStore] = None,
    oauth_service: Optional[BaseOAuthService] = None,
    identity_service: Optional[FirebaseAuthService] = None,
) -> FastAPI:
    """FastAPI 앱 팩토리"""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="applestore",
        description="애플스토어 클론 상품 카탈로그 API - 구글 로그인, 상품 CRUD, 카테고리 필터",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # 외부 서비스 (앱 단위로 생성, 요청에서는 app.state로 접근)
    app.state.settings = settings
    app.state.document_store = document_store or build_document_store(settings)
    app.state.oauth_service = oauth_service or GoogleOAuthService(settings)
    app.state.identity_service = identity_service or FirebaseAuthService(settings)
    app.state.jwt_service = JWTService(settings)

    def manager_factory() -> AuthManager:
        return AuthManager(
            oauth_service=app.state.oauth_service,
            identity_service=app.state.identity_service,
            document_store=app.state.document_store,
        )

    app.state.session_registry = SessionRegistry(
        manager_factory=manager_factory,
        ttl_minutes=settings.session_ttl_minutes,
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(auth.router, prefix="/api", tags=["Auth"])
    app.include_router(items.router, prefix="/api", tags=["Items"])

    # Docker healthcheck용 루트 레벨 헬스체크
    @app.get("/health")
    async def root_health():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "applestore.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.port,
        reload=settings.debug,
    )
