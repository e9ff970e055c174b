"""
상품 카탈로그 저장소
인메모리 상품 목록과 원격 문서 저장소 동기화

모든 변경 작업은 하나의 이벤트 루프 안에서만 호출해야 합니다.
목록 자체에는 락을 두지 않습니다.
"""
import logging
from typing import Callable, List, Sequence

from applestore.models.item import Item
from applestore.services.document_store import BaseDocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

ITEM_COLLECTION = "Item"
USER_COLLECTION = "User"

ItemsListener = Callable[[List[Item]], None]


def owner_item_collection(owner_id: str) -> str:
    """사용자별 상품 컬렉션 경로 (User/{ownerId}/Item)"""
    return f"{USER_COLLECTION}/{owner_id}/{ITEM_COLLECTION}"


class ItemStore:
    """상품 카탈로그 저장소"""

    def __init__(self, document_store: BaseDocumentStore) -> None:
        self._document_store = document_store
        self._items: List[Item] = []
        self._listeners: List[ItemsListener] = []

    @property
    def items(self) -> List[Item]:
        """현재 상품 목록 (복사본)"""
        return self.snapshot()

    def snapshot(self) -> List[Item]:
        """현재 상품 목록의 스냅샷 반환"""
        return [item.model_copy() for item in self._items]

    def subscribe(self, listener: ItemsListener) -> Callable[[], None]:
        """
        목록 변경 구독

        Returns:
            구독 해제 함수
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        """구독자에게 현재 스냅샷 전달"""
        for listener in list(self._listeners):
            try:
                listener(self.snapshot())
            except Exception as e:
                logger.error(f"[ItemStore] 구독자 알림 실패: {e}", exc_info=True)

    async def load(self) -> bool:
        """
        원격 Item 컬렉션 전체를 읽어 목록 교체

        실패 시 기존 목록을 그대로 유지합니다.
        """
        try:
            documents = await self._document_store.get_documents(ITEM_COLLECTION)
        except DocumentStoreError as e:
            logger.error(f"[ItemStore] 상품 조회 실패: {e}", exc_info=True)
            return False

        self._items = [Item.from_document(doc.document_id, doc.data) for doc in documents]
        logger.info(f"[ItemStore] 상품 조회 완료 - {len(self._items)}개")
        self._publish()
        return True

    async def add(self, item: Item, owner_id: str) -> bool:
        """
        상품 추가

        목록에 먼저 반영한 뒤 원격에 저장합니다.
        원격 저장이 실패해도 목록은 되돌리지 않습니다.
        """
        self._items.append(item.model_copy())
        self._publish()

        logger.info(f"[ItemStore] 상품 추가 - owner: {owner_id}, itemId: {item.item_id}")
        try:
            await self._document_store.set_document(
                ITEM_COLLECTION, item.item_id, item.to_document()
            )
        except DocumentStoreError as e:
            logger.error(f"[ItemStore] 상품 저장 실패: {e}", exc_info=True)
            return False

        logger.info(f"[ItemStore] 상품 저장 완료: {item.item_id}")
        return True

    async def update(self, item: Item) -> bool:
        """
        상품 수정 (전체 필드 덮어쓰기)

        원격 저장 결과와 관계없이 같은 item_id를 가진 모든 항목을 수정합니다.
        """
        success = True
        try:
            await self._document_store.set_document(
                ITEM_COLLECTION, item.item_id, item.to_document()
            )
            logger.info(f"[ItemStore] 상품 수정 저장 완료: {item.item_id}")
        except DocumentStoreError as e:
            logger.error(f"[ItemStore] 상품 수정 저장 실패: {e}", exc_info=True)
            success = False

        matched = 0
        for existing in self._items:
            if existing.item_id == item.item_id:
                existing.apply_changes(item)
                matched += 1

        if matched == 0:
            logger.warning(f"[ItemStore] 목록에 없는 상품 수정: {item.item_id}")
        self._publish()
        return success

    async def delete(self, item: Item, owner_id: str) -> bool:
        """
        상품 삭제

        User/{ownerId}/Item/{itemId} 문서를 삭제한 뒤
        목록에서 처음 일치하는 항목 하나만 제거합니다.
        """
        collection_path = owner_item_collection(owner_id)
        try:
            await self._document_store.delete_document(collection_path, item.item_id)
        except DocumentStoreError as e:
            logger.error(f"[ItemStore] 상품 삭제 실패: {e}", exc_info=True)
            return False

        logger.info(f"[ItemStore] 상품 삭제 완료: {collection_path}/{item.item_id}")
        for index, existing in enumerate(self._items):
            if existing.item_id == item.item_id:
                del self._items[index]
                break

        self._publish()
        return True

    def filter_by_category(self, items: Sequence[Item], category: str) -> None:
        """
        카테고리 필터

        주어진 목록에서 카테고리가 일치하는 상품만 남겨 현재 목록을 교체합니다.
        """
        self._items = [item.model_copy() for item in items if item.category == category]
        self._publish()
