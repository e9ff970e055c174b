"""
상품 모델 정의
카탈로그 상품과 원격 문서 간 변환
"""
import uuid
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, computed_field

from applestore.utils.formatting import format_price

# 원격 문서 필드별 기본값 (누락되거나 타입이 맞지 않으면 사용)
STRING_FIELD_DEFAULT = ""
INT_FIELD_DEFAULT = 0
AVAILABILITY_DEFAULT = True

# 업데이트 시 덮어쓰는 필드 (item_id 제외)
MUTABLE_FIELDS = (
    "name",
    "category",
    "color",
    "description",
    "image_url",
    "price",
    "stock_quantity",
    "is_available",
)


def _string_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else STRING_FIELD_DEFAULT


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    # bool은 int의 하위 타입이므로 제외
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return INT_FIELD_DEFAULT
    return value


def _bool_field(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else AVAILABILITY_DEFAULT


class Item(BaseModel):
    """카탈로그 상품 모델"""

    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        alias="itemId",
        description="상품 ID (원격 문서 ID와 동일)",
    )
    name: str = Field(..., description="상품명")
    category: str = Field(..., description="카테고리")
    price: int = Field(..., ge=0, description="가격 (원)")
    description: str = Field(..., description="상세설명")
    stock_quantity: int = Field(..., ge=0, alias="stockQuantity", description="재고수량")
    image_url: str = Field(..., alias="imageURL", description="이미지 URL")
    color: str = Field(..., description="색상")
    # 재고수량과 별개로 관리 (품절/판매중)
    is_available: bool = Field(..., alias="isAvailable", description="판매 상태")

    @computed_field(alias="formattedPrice")  # type: ignore[prop-decorator]
    @property
    def formatted_price(self) -> str:
        """천 단위 구분된 가격"""
        return format_price(self.price)

    def to_document(self) -> Dict[str, Any]:
        """원격 문서 필드로 변환 (item_id는 문서 키이므로 제외)"""
        return {
            "name": self.name,
            "category": self.category,
            "color": self.color,
            "description": self.description,
            "imageURL": self.image_url,
            "price": self.price,
            "stockQuantity": self.stock_quantity,
            "isAvailable": self.is_available,
        }

    @classmethod
    def from_document(cls, document_id: str, data: Mapping[str, Any]) -> "Item":
        """
        원격 문서를 상품으로 변환

        필드가 없거나 타입이 다르면 기본값을 사용합니다.
        (문자열: "", 가격/재고: 0, 판매 상태: True)
        """
        return cls(
            item_id=document_id,
            name=_string_field(data, "name"),
            category=_string_field(data, "category"),
            color=_string_field(data, "color"),
            description=_string_field(data, "description"),
            image_url=_string_field(data, "imageURL"),
            price=_int_field(data, "price"),
            stock_quantity=_int_field(data, "stockQuantity"),
            is_available=_bool_field(data, "isAvailable"),
        )

    def apply_changes(self, source: "Item") -> None:
        """item_id를 제외한 필드를 source 값으로 덮어쓰기"""
        for field_name in MUTABLE_FIELDS:
            setattr(self, field_name, getattr(source, field_name))
