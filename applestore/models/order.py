"""
주문 모델 정의
주문 시점의 상품 정보를 스냅샷으로 보관
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from applestore.utils.formatting import format_korean_datetime


class Order(BaseModel):
    """주문 모델"""

    model_config = ConfigDict(populate_by_name=True)

    tracking_number: str = Field(..., alias="trackingNumber", description="운송장 번호")
    order_date: datetime = Field(..., alias="orderDate", description="주문 날짜")
    nickname: str = Field(..., description="닉네임")
    shipping_address: str = Field(..., alias="shippingAddress", description="배송지")
    phone_number: str = Field(..., alias="phoneNumber", description="전화번호")

    # 주문 시점 상품 정보 (상품이 삭제되어도 유지)
    product_name: str = Field(..., alias="productName", description="상품명")
    image_url: str = Field(..., alias="imageURL", description="이미지 URL")
    color: str = Field(..., description="색상")
    item_id: str = Field(..., alias="itemId", description="상품 ID")

    has_apple_care_plus: bool = Field(
        default=False, alias="hasAppleCarePlus", description="애플 케어 플러스 유무"
    )
    quantity: int = Field(..., ge=1, description="수량")
    unit_price: int = Field(..., ge=0, alias="unitPrice", description="단가")

    bank_name: str = Field(..., alias="bankName", description="은행명")
    account_number: str = Field(..., alias="accountNumber", description="계좌번호")

    @computed_field(alias="totalPrice")  # type: ignore[prop-decorator]
    @property
    def total_price(self) -> int:
        """
        총 결제 금액

        애플 케어 플러스 선택 시 (수량 // 10) * 수량 을 더합니다.
        추가 금액이 단가와 무관하게 계산되는 점은 기존 계산식 그대로입니다.
        """
        base = self.quantity * self.unit_price
        if self.has_apple_care_plus:
            return base + (self.quantity // 10) * self.quantity
        return base

    @computed_field(alias="formattedOrder")  # type: ignore[prop-decorator]
    @property
    def formatted_order(self) -> str:
        """주문 날짜 (MM월 dd일 HH시 mm분)"""
        return format_korean_datetime(self.order_date)
