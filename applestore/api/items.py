"""
상품 카탈로그 API
로그인 세션의 상품 목록 조회/추가/수정/삭제/필터

원격 저장소 오류는 5xx로 바꾸지 않고 success 플래그로 전달합니다.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from applestore.dependencies.auth import get_current_session, get_item_store
from applestore.models.item import Item
from applestore.services.item_store import ItemStore
from applestore.services.session_registry import SessionEntry

router = APIRouter()


# ========== Schemas ==========


class ItemListResponse(BaseModel):
    """상품 목록 응답"""

    items: List[Item]


class ItemMutationResponse(BaseModel):
    """상품 변경 응답"""

    success: bool = Field(..., description="원격 저장소 반영 여부")
    items: List[Item]


class CategoryFilterRequest(BaseModel):
    """카테고리 필터 요청"""

    category: str = Field(..., min_length=1, max_length=100)


# ========== Endpoints ==========


@router.get("/items", response_model=ItemListResponse)
async def get_items(item_store: ItemStore = Depends(get_item_store)):
    """현재 상품 목록 조회"""
    return ItemListResponse(items=item_store.snapshot())


@router.post("/items/load", response_model=ItemMutationResponse)
async def load_items(item_store: ItemStore = Depends(get_item_store)):
    """원격 저장소에서 상품 목록 다시 읽기"""
    success = await item_store.load()
    return ItemMutationResponse(success=success, items=item_store.snapshot())


@router.post("/items", response_model=ItemMutationResponse, status_code=201)
async def add_item(
    item: Item,
    entry: SessionEntry = Depends(get_current_session),
    item_store: ItemStore = Depends(get_item_store),
):
    """상품 추가"""
    success = await item_store.add(item, entry.manager.user_id)
    return ItemMutationResponse(success=success, items=item_store.snapshot())


@router.put("/items/{item_id}", response_model=ItemMutationResponse)
async def update_item(
    item_id: str,
    item: Item,
    item_store: ItemStore = Depends(get_item_store),
):
    """상품 수정 (전체 필드 덮어쓰기)"""
    success = await item_store.update(item.model_copy(update={"item_id": item_id}))
    return ItemMutationResponse(success=success, items=item_store.snapshot())


@router.delete("/items/{item_id}", response_model=ItemMutationResponse)
async def delete_item(
    item_id: str,
    entry: SessionEntry = Depends(get_current_session),
    item_store: ItemStore = Depends(get_item_store),
):
    """상품 삭제"""
    target = next((item for item in item_store.snapshot() if item.item_id == item_id), None)
    if target is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")

    success = await item_store.delete(target, entry.manager.user_id)
    return ItemMutationResponse(success=success, items=item_store.snapshot())


@router.post("/items/filter", response_model=ItemListResponse)
async def filter_items(
    data: CategoryFilterRequest,
    item_store: ItemStore = Depends(get_item_store),
):
    """
    카테고리 필터

    현재 목록을 필터 결과로 교체합니다.
    전체 목록이 다시 필요하면 /items/load를 호출하세요.
    """
    item_store.filter_by_category(item_store.snapshot(), data.category)
    return ItemListResponse(items=item_store.snapshot())
