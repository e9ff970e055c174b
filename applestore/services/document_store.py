"""
원격 문서 저장소
Cloud Firestore REST API 클라이언트 및 인메모리 구현
https://firebase.google.com/docs/firestore/reference/rest
"""
import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from applestore.config import Settings

logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """원격 문서 저장소 오류 (네트워크, 권한, 응답 형식)"""


@dataclass
class RemoteDocument:
    """원격 문서"""

    document_id: str
    data: Dict[str, Any] = field(default_factory=dict)


class BaseDocumentStore(ABC):
    """문서 저장소 베이스 클래스"""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """저장소 이름"""
        pass

    @abstractmethod
    async def get_documents(self, collection_path: str) -> List[RemoteDocument]:
        """컬렉션의 전체 문서 조회"""
        pass

    @abstractmethod
    async def set_document(
        self, collection_path: str, document_id: str, data: Dict[str, Any]
    ) -> None:
        """문서 저장 (전체 덮어쓰기)"""
        pass

    @abstractmethod
    async def delete_document(self, collection_path: str, document_id: str) -> None:
        """문서 삭제"""
        pass


# ========== Firestore 값 인코딩 ==========


def encode_value(value: Any) -> Dict[str, Any]:
    """파이썬 값을 Firestore Value로 변환"""
    if value is None:
        return {"nullValue": None}
    # bool은 int보다 먼저 검사
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        # Firestore는 RFC 3339 (시간대 포함) 형식만 허용, naive 값은 UTC로 간주
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"timestampValue": value.isoformat()}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"지원하지 않는 값 타입: {type(value).__name__}")


def encode_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: encode_value(value) for key, value in data.items()}


def _decode_timestamp(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def decode_value(value: Any) -> Any:
    """Firestore Value를 파이썬 값으로 변환 (알 수 없는 타입, 잘못된 형식은 None)"""
    if not isinstance(value, dict):
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "booleanValue" in value:
        return value["booleanValue"]
    if "integerValue" in value:
        try:
            return int(value["integerValue"])
        except (TypeError, ValueError):
            return None
    if "doubleValue" in value:
        try:
            return float(value["doubleValue"])
        except (TypeError, ValueError):
            return None
    if "timestampValue" in value:
        return _decode_timestamp(value["timestampValue"])
    if "arrayValue" in value:
        array = value["arrayValue"]
        values = array.get("values") if isinstance(array, dict) else None
        if not isinstance(values, list):
            return []
        return [decode_value(v) for v in values]
    if "mapValue" in value:
        mapping = value["mapValue"]
        return decode_fields(mapping.get("fields") if isinstance(mapping, dict) else None)
    return None


def decode_fields(fields: Any) -> Dict[str, Any]:
    """문서 fields 변환 (fields가 없거나 dict가 아니면 빈 문서)"""
    if not isinstance(fields, dict):
        return {}
    return {key: decode_value(value) for key, value in fields.items()}


class FirestoreDocumentStore(BaseDocumentStore):
    """Cloud Firestore REST 문서 저장소"""

    PAGE_SIZE = 300

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = settings.firestore_documents_url
        self._access_token = settings.firestore_access_token
        self._timeout = settings.firestore_timeout_seconds
        self._transport = transport

    @property
    def backend_name(self) -> str:
        return "firestore"

    def _client(self) -> httpx.AsyncClient:
        headers = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        kwargs: Dict[str, Any] = {"headers": headers, "transport": self._transport}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return httpx.AsyncClient(**kwargs)

    def _url(self, *segments: str) -> str:
        return "/".join([self._base_url, *segments])

    async def get_documents(self, collection_path: str) -> List[RemoteDocument]:
        """컬렉션 전체 조회 (nextPageToken을 따라 끝까지 읽음)"""
        documents: List[RemoteDocument] = []
        params: Dict[str, Any] = {"pageSize": self.PAGE_SIZE}

        try:
            async with self._client() as client:
                while True:
                    response = await client.get(self._url(collection_path), params=params)
                    response.raise_for_status()
                    data = response.json()
                    if not isinstance(data, dict):
                        raise TypeError(f"응답이 객체가 아닙니다: {type(data).__name__}")

                    for raw in data.get("documents") or []:
                        documents.append(
                            RemoteDocument(
                                document_id=raw["name"].rsplit("/", 1)[-1],
                                data=decode_fields(raw.get("fields")),
                            )
                        )

                    page_token = data.get("nextPageToken")
                    if not page_token:
                        break
                    params["pageToken"] = page_token
        except httpx.HTTPError as e:
            raise DocumentStoreError(f"문서 조회 실패 ({collection_path}): {e}") from e
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DocumentStoreError(f"응답 형식 오류 ({collection_path}): {e}") from e

        return documents

    async def set_document(
        self, collection_path: str, document_id: str, data: Dict[str, Any]
    ) -> None:
        """updateMask 없이 PATCH하면 문서 전체가 교체됨"""
        try:
            async with self._client() as client:
                response = await client.patch(
                    self._url(collection_path, document_id),
                    json={"fields": encode_fields(data)},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise DocumentStoreError(
                f"문서 저장 실패 ({collection_path}/{document_id}): {e}"
            ) from e

    async def delete_document(self, collection_path: str, document_id: str) -> None:
        try:
            async with self._client() as client:
                response = await client.delete(self._url(collection_path, document_id))
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise DocumentStoreError(
                f"문서 삭제 실패 ({collection_path}/{document_id}): {e}"
            ) from e


class InMemoryDocumentStore(BaseDocumentStore):
    """인메모리 문서 저장소 (로컬 개발/테스트용)"""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    async def get_documents(self, collection_path: str) -> List[RemoteDocument]:
        collection = self._collections.get(collection_path, {})
        return [
            RemoteDocument(document_id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in collection.items()
        ]

    async def set_document(
        self, collection_path: str, document_id: str, data: Dict[str, Any]
    ) -> None:
        collection = self._collections.setdefault(collection_path, {})
        collection[document_id] = copy.deepcopy(data)

    async def delete_document(self, collection_path: str, document_id: str) -> None:
        # 없는 문서 삭제도 성공으로 처리 (Firestore와 동일)
        self._collections.get(collection_path, {}).pop(document_id, None)

    def get(self, collection_path: str, document_id: str) -> Optional[Dict[str, Any]]:
        """저장된 문서 데이터 조회"""
        return self._collections.get(collection_path, {}).get(document_id)


def build_document_store(settings: Settings) -> BaseDocumentStore:
    """설정에 따라 문서 저장소 생성"""
    if settings.document_store_backend == "memory":
        logger.info("[DocumentStore] 인메모리 저장소 사용")
        return InMemoryDocumentStore()

    logger.info(f"[DocumentStore] Firestore 사용 (project: {settings.firestore_project_id})")
    return FirestoreDocumentStore(settings)
