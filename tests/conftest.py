"""
pytest 공통 fixture
"""
import pytest

from applestore.config import Settings
from applestore.models.item import Item
from applestore.services.auth_manager import AuthManager
from applestore.services.document_store import InMemoryDocumentStore
from applestore.services.identity import FirebaseAuthService
from applestore.services.oauth.google import GoogleOAuthService
from helpers import FailingDocumentStore, make_auth_transport


@pytest.fixture
def settings():
    """테스트 설정 (.env 미사용)"""
    return Settings(
        _env_file=None,
        document_store_backend="memory",
        firestore_project_id="demo",
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_redirect_uri="http://localhost:8000/api/auth/google/callback",
        firebase_api_key="api-key",
        jwt_secret_key="test-secret",
    )


@pytest.fixture
def document_store():
    """인메모리 문서 저장소"""
    return InMemoryDocumentStore()


@pytest.fixture
def failing_store():
    """실패하는 문서 저장소"""
    return FailingDocumentStore()


@pytest.fixture
def auth_transport():
    """정상 로그인 transport"""
    return make_auth_transport()


@pytest.fixture
def auth_manager(settings, document_store, auth_transport):
    """테스트용 AuthManager"""
    return AuthManager(
        oauth_service=GoogleOAuthService(settings, transport=auth_transport),
        identity_service=FirebaseAuthService(settings, transport=auth_transport),
        document_store=document_store,
    )


@pytest.fixture
def sample_items():
    """카테고리 A, X, X, B 상품"""
    return [
        Item(
            item_id="item-a",
            name="iPhone 16",
            category="A",
            price=1250000,
            description="6.1형 디스플레이",
            stock_quantity=10,
            image_url="https://example.com/iphone.png",
            color="블랙",
            is_available=True,
        ),
        Item(
            item_id="item-x1",
            name="MacBook Air",
            category="X",
            price=1590000,
            description="M3 칩",
            stock_quantity=3,
            image_url="https://example.com/mba.png",
            color="미드나이트",
            is_available=True,
        ),
        Item(
            item_id="item-x2",
            name="MacBook Pro",
            category="X",
            price=2390000,
            description="M3 Pro 칩",
            stock_quantity=0,
            image_url="https://example.com/mbp.png",
            color="스페이스 블랙",
            is_available=False,
        ),
        Item(
            item_id="item-b",
            name="AirPods Pro",
            category="B",
            price=359000,
            description="노이즈 캔슬링",
            stock_quantity=25,
            image_url="https://example.com/airpods.png",
            color="화이트",
            is_available=True,
        ),
    ]
