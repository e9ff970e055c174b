"""
고객 모델 정의
고객 프로필과 주문 이력
"""
import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, computed_field

from applestore.models.order import Order
from applestore.utils.formatting import format_korean_datetime


class ProfileInfo(BaseModel):
    """고객 프로필"""

    model_config = ConfigDict(populate_by_name=True)

    nickname: str = Field(..., description="닉네임")
    email: str = Field(..., description="이메일")
    registration_date: datetime = Field(
        ..., alias="registrationDate", description="가입 날짜"
    )
    recently_viewed_products: List[str] = Field(
        default_factory=list,
        alias="recentlyViewedProducts",
        description="최근 본 상품 ID 목록",
    )

    @computed_field(alias="formattedRegistration")  # type: ignore[prop-decorator]
    @property
    def formatted_registration(self) -> str:
        """가입 날짜 (MM월 dd일 HH시 mm분)"""
        return format_korean_datetime(self.registration_date)


class UserProfile(BaseModel):
    """고객 ID별 주문 이력과 프로필"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="고객 ID")
    orders: List[Order] = Field(default_factory=list, alias="order")
    profile_info: ProfileInfo = Field(..., alias="profileInfo")

    @property
    def total_spent(self) -> int:
        """전체 주문 금액 합계"""
        return sum(order.total_price for order in self.orders)
