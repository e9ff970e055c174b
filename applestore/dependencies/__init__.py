"""
FastAPI 의존성 모듈
"""

from applestore.dependencies.auth import (
    get_current_session,
    get_item_store,
    get_session_registry,
)

__all__ = ["get_current_session", "get_item_store", "get_session_registry"]
