"""
엔티티 모델 유닛 테스트
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from applestore.models import Item, Order, ProfileInfo, UserProfile


def make_order(**overrides) -> Order:
    data = dict(
        tracking_number="TRK-0001",
        order_date=datetime(2024, 3, 5, 14, 7),
        nickname="사과농부",
        shipping_address="서울시 강남구",
        phone_number="010-1234-5678",
        product_name="iPhone 16",
        image_url="https://example.com/iphone.png",
        color="블랙",
        item_id="item-a",
        has_apple_care_plus=False,
        quantity=1,
        unit_price=1000,
        bank_name="국민은행",
        account_number="123-456-789",
    )
    data.update(overrides)
    return Order(**data)


class TestItem:
    """상품 모델 테스트"""

    @pytest.mark.parametrize(
        "price,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (1234567, "1,234,567"),
            (1250000, "1,250,000"),
        ],
    )
    def test_formatted_price(self, sample_items, price: int, expected: str):
        """천 단위 구분 가격"""
        item = sample_items[0].model_copy(update={"price": price})
        assert item.formatted_price == expected

    def test_item_id_generated_when_absent(self):
        """item_id 미지정 시 새 ID 생성"""
        fields = dict(
            name="iPad",
            category="태블릿",
            price=499000,
            description="",
            stock_quantity=1,
            image_url="",
            color="실버",
            is_available=True,
        )
        first = Item(**fields)
        second = Item(**fields)
        assert first.item_id
        assert first.item_id != second.item_id

    def test_negative_price_rejected(self):
        """음수 가격 거부"""
        with pytest.raises(ValidationError):
            Item(
                name="iPad",
                category="태블릿",
                price=-1,
                description="",
                stock_quantity=0,
                image_url="",
                color="",
                is_available=True,
            )

    def test_to_document_excludes_item_id(self, sample_items):
        """문서 필드에는 item_id가 없어야 함"""
        document = sample_items[0].to_document()
        assert set(document) == {
            "name",
            "category",
            "color",
            "description",
            "imageURL",
            "price",
            "stockQuantity",
            "isAvailable",
        }
        assert document["price"] == 1250000
        assert document["imageURL"] == "https://example.com/iphone.png"

    def test_from_document_full(self):
        """모든 필드가 있는 문서 변환"""
        item = Item.from_document(
            "doc-1",
            {
                "name": "Apple Watch",
                "category": "워치",
                "color": "스타라이트",
                "description": "GPS",
                "imageURL": "https://example.com/watch.png",
                "price": 599000,
                "stockQuantity": 7,
                "isAvailable": False,
            },
        )
        assert item.item_id == "doc-1"
        assert item.name == "Apple Watch"
        assert item.stock_quantity == 7
        assert item.is_available is False

    def test_from_document_defaults(self):
        """누락 필드 기본값: 문자열 "", 숫자 0, 판매 상태 True"""
        item = Item.from_document("doc-2", {})
        assert item.item_id == "doc-2"
        assert item.name == ""
        assert item.category == ""
        assert item.image_url == ""
        assert item.price == 0
        assert item.stock_quantity == 0
        assert item.is_available is True

    def test_from_document_wrong_types_defaulted(self):
        """타입이 맞지 않는 필드는 기본값으로 처리"""
        item = Item.from_document(
            "doc-3",
            {"name": 123, "price": "1000", "stockQuantity": True, "isAvailable": "no"},
        )
        assert item.name == ""
        assert item.price == 0
        assert item.stock_quantity == 0
        assert item.is_available is True

    def test_camel_case_aliases(self):
        """원본 필드명(camelCase)으로 생성 및 직렬화"""
        item = Item.model_validate(
            {
                "itemId": "item-z",
                "name": "HomePod",
                "category": "오디오",
                "price": 439000,
                "description": "",
                "stockQuantity": 2,
                "imageURL": "",
                "color": "화이트",
                "isAvailable": True,
            }
        )
        dumped = item.model_dump(by_alias=True)
        assert dumped["itemId"] == "item-z"
        assert dumped["formattedPrice"] == "439,000"


class TestOrder:
    """주문 모델 테스트"""

    @pytest.mark.parametrize(
        "quantity,unit_price,expected",
        [
            (1, 1000, 1000),
            (25, 1000, 25000),
            (10, 0, 0),
        ],
    )
    def test_total_price_without_apple_care(self, quantity, unit_price, expected):
        """애플 케어 미선택: 수량 * 단가"""
        order = make_order(quantity=quantity, unit_price=unit_price)
        assert order.total_price == expected

    @pytest.mark.parametrize(
        "quantity,unit_price,expected",
        [
            (25, 1000, 25050),  # 25000 + (25 // 10) * 25
            (9, 1000, 9000),  # 10개 미만은 추가 금액 없음
            (10, 1000, 10010),
            (30, 500, 15090),
        ],
    )
    def test_total_price_with_apple_care(self, quantity, unit_price, expected):
        """애플 케어 선택: 수량 * 단가 + (수량 // 10) * 수량"""
        order = make_order(has_apple_care_plus=True, quantity=quantity, unit_price=unit_price)
        assert order.total_price == expected

    def test_formatted_order(self):
        """주문 날짜 포맷 (24시간제)"""
        order = make_order(order_date=datetime(2024, 3, 5, 14, 7))
        assert order.formatted_order == "03월 05일 14시 07분"

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_order(quantity=0)


class TestProfile:
    """고객 모델 테스트"""

    def test_formatted_registration(self):
        profile = ProfileInfo(
            nickname="사과농부",
            email="farmer@example.com",
            registration_date=datetime(2023, 12, 31, 9, 30),
            recently_viewed_products=["item-b", "item-a"],
        )
        assert profile.formatted_registration == "12월 31일 09시 30분"
        assert profile.recently_viewed_products == ["item-b", "item-a"]

    def test_user_profile_orders(self):
        """주문은 상품을 ID로만 참조 (삭제된 상품이어도 유지)"""
        profile = ProfileInfo(
            nickname="사과농부",
            email="farmer@example.com",
            registration_date=datetime(2023, 12, 31, 9, 30),
        )
        user = UserProfile(
            orders=[
                make_order(quantity=2, unit_price=1000),
                make_order(item_id="deleted-item", quantity=25, unit_price=1000, has_apple_care_plus=True),
            ],
            profile_info=profile,
        )
        assert user.id
        assert user.orders[1].item_id == "deleted-item"
        assert user.total_spent == 2000 + 25050
