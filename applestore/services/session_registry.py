"""
세션 저장소
세션 ID별 AuthManager 관리 (asyncio.Lock 사용)

로그인 대기 중인 세션은 OAuth state로 찾습니다.
새 세션을 만들 때마다 만료된 세션을 정리합니다.
"""
import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from applestore.services.auth_manager import AuthManager


@dataclass
class SessionEntry:
    """세션 항목"""

    session_id: str
    manager: AuthManager
    # 콜백 전까지만 유지되는 CSRF state
    oauth_state: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_expired(self, ttl: timedelta) -> bool:
        return datetime.utcnow() - self.created_at > ttl


class SessionRegistry:
    """인메모리 세션 저장소"""

    def __init__(self, manager_factory: Callable[[], AuthManager], ttl_minutes: int) -> None:
        self._manager_factory = manager_factory
        self._ttl = timedelta(minutes=ttl_minutes)
        self._sessions: Dict[str, SessionEntry] = {}
        self._lock = asyncio.Lock()

    def _pop_expired(self) -> List[SessionEntry]:
        """만료된 세션 제거 (락 안에서 호출)"""
        expired_ids = [
            sid for sid, entry in self._sessions.items() if entry.is_expired(self._ttl)
        ]
        return [self._sessions.pop(sid) for sid in expired_ids]

    async def create_session(self, oauth_state: Optional[str] = None) -> SessionEntry:
        """새 세션 생성 (만료된 세션 정리 포함)"""
        session_id = f"sess_{uuid.uuid4().hex[:12]}"
        entry = SessionEntry(
            session_id=session_id,
            manager=self._manager_factory(),
            oauth_state=oauth_state,
        )

        async with self._lock:
            expired = self._pop_expired()
            self._sessions[session_id] = entry

        for old in expired:
            old.manager.sign_out()
        return entry

    async def get_session(self, session_id: str) -> Optional[SessionEntry]:
        """세션 조회 (만료 시 종료 처리)"""
        async with self._lock:
            entry = self._sessions.get(session_id)

            if entry and entry.is_expired(self._ttl):
                del self._sessions[session_id]
                entry.manager.sign_out()
                return None

            return entry

    async def claim_oauth_state(self, oauth_state: str) -> Optional[SessionEntry]:
        """
        OAuth state로 로그인 대기 세션 조회

        state는 한 번만 사용할 수 있습니다.
        """
        async with self._lock:
            entry = next(
                (e for e in self._sessions.values() if e.oauth_state == oauth_state),
                None,
            )
            if entry is None:
                return None

            entry.oauth_state = None
            if entry.is_expired(self._ttl):
                del self._sessions[entry.session_id]
                entry.manager.sign_out()
                return None

            return entry

    async def delete_session(self, session_id: str) -> bool:
        """세션 삭제"""
        async with self._lock:
            entry = self._sessions.pop(session_id, None)

        if entry is None:
            return False
        entry.manager.sign_out()
        return True

    async def clear_expired(self) -> int:
        """만료된 세션 정리"""
        async with self._lock:
            expired = self._pop_expired()

        for entry in expired:
            entry.manager.sign_out()
        return len(expired)

    async def clear(self) -> None:
        """전체 세션 종료"""
        async with self._lock:
            entries = list(self._sessions.values())
            self._sessions.clear()

        for entry in entries:
            entry.manager.sign_out()

    async def get_active_count(self) -> int:
        """활성 세션 수 반환"""
        async with self._lock:
            return len(self._sessions)
