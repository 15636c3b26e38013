"""Pydantic request/response schemas for the Shop API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Member Schemas ---


class RegisterMemberRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "userA",
                    "city": "Seoul",
                    "street": "1 Main St",
                    "zipcode": "11111",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    city: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    zipcode: str | None = Field(None, max_length=20)


class RenameMemberRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "userB"}]}}

    name: str = Field(..., min_length=1, max_length=100)


class AddressResponse(BaseModel):
    city: str | None = None
    street: str | None = None
    zipcode: str | None = None


class MemberResponse(BaseModel):
    id: str
    name: str
    address: AddressResponse | None = None


class MemberNameResponse(BaseModel):
    name: str


class MemberListResponse(BaseModel):
    count: int
    data: list[MemberNameResponse]


# --- Item Schemas ---


class AddItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "JPA1 BOOK",
                    "price": 10000,
                    "stock_quantity": 100,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)


class ItemResponse(BaseModel):
    id: str
    name: str
    price: int
    stock_quantity: int


class ItemListResponse(BaseModel):
    count: int
    data: list[ItemResponse]


# --- Order Schemas ---


class OrderLineRequest(BaseModel):
    item_id: str
    count: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "member_id": "member-001",
                    "items": [
                        {"item_id": "item-001", "count": 1},
                        {"item_id": "item-002", "count": 2},
                    ],
                }
            ]
        }
    }

    member_id: str
    items: list[OrderLineRequest] = Field(default_factory=list)


class OrderItemResponse(BaseModel):
    item_name: str | None = None
    order_price: int
    count: int


class SimpleOrderResponse(BaseModel):
    order_id: str
    name: str | None = None
    order_date: datetime
    order_status: str
    address: AddressResponse | None = None

    @classmethod
    def from_result(cls, result) -> SimpleOrderResponse:
        return cls(
            order_id=result.order_id,
            name=result.name,
            order_date=result.order_date,
            order_status=result.order_status,
            address=_address(result.address),
        )


class OrderResponse(SimpleOrderResponse):
    order_items: list[OrderItemResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result) -> OrderResponse:
        return cls(
            order_id=result.order_id,
            name=result.name,
            order_date=result.order_date,
            order_status=result.order_status,
            address=_address(result.address),
            order_items=[
                OrderItemResponse(item_name=item.item_name, order_price=item.order_price, count=item.count)
                for item in result.order_items
            ],
        )


# --- Shared ---


class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"


def _address(address) -> AddressResponse | None:
    if address is None:
        return None
    return AddressResponse(city=address.city, street=address.street, zipcode=address.zipcode)
