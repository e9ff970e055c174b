"""
테스트 헬퍼
가짜 저장소와 외부 API transport
"""
import asyncio
from typing import Any, Dict, List

import httpx

from applestore.services.document_store import (
    DocumentStoreError,
    InMemoryDocumentStore,
    RemoteDocument,
)


def run(coro):
    """코루틴 실행 헬퍼"""
    return asyncio.run(coro)


class FailingDocumentStore(InMemoryDocumentStore):
    """모든 원격 호출이 실패하는 저장소"""

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[tuple] = []

    async def get_documents(self, collection_path: str) -> List[RemoteDocument]:
        self.calls.append(("get", collection_path))
        raise DocumentStoreError("permission denied")

    async def set_document(
        self, collection_path: str, document_id: str, data: Dict[str, Any]
    ) -> None:
        self.calls.append(("set", collection_path, document_id))
        raise DocumentStoreError("network unreachable")

    async def delete_document(self, collection_path: str, document_id: str) -> None:
        self.calls.append(("delete", collection_path, document_id))
        raise DocumentStoreError("network unreachable")


def make_auth_transport(
    id_token: str = "google-id-token",
    reject: bool = False,
    user_id: str = "user-1",
) -> httpx.MockTransport:
    """구글 토큰 엔드포인트와 Identity Toolkit을 흉내내는 transport"""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "oauth2.googleapis.com":
            body: Dict[str, Any] = {"access_token": "google-access-token"}
            if id_token:
                body["id_token"] = id_token
            return httpx.Response(200, json=body)

        if request.url.host == "identitytoolkit.googleapis.com":
            if reject:
                return httpx.Response(
                    400, json={"error": {"code": 400, "message": "INVALID_IDP_RESPONSE"}}
                )
            return httpx.Response(
                200,
                json={
                    "localId": user_id,
                    "email": "tester@example.com",
                    "displayName": "테스터",
                },
            )

        return httpx.Response(404)

    return httpx.MockTransport(handler)


