"""FastAPI endpoints for the Shop domain."""

import json

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from shop.api.schemas import (
    AddItemRequest,
    AddressResponse,
    IdResponse,
    ItemListResponse,
    ItemResponse,
    MemberListResponse,
    MemberNameResponse,
    MemberResponse,
    OrderResponse,
    PlaceOrderRequest,
    RegisterMemberRequest,
    RenameMemberRequest,
    SimpleOrderResponse,
    StatusResponse,
)
from shop.item.stocking import AddItem, find_items
from shop.member.lookup import find_member, find_members
from shop.member.registration import register_member
from shop.member.rename import rename_member
from shop.order.cancellation import CancelOrder
from shop.order.order import OrderStatus
from shop.order.placement import PlaceOrder
from shop.order_query import OrderQueryStrategy, find_orders, find_simple_orders

member_router = APIRouter(prefix="/members", tags=["members"])
item_router = APIRouter(prefix="/items", tags=["items"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _member_response(member) -> MemberResponse:
    address = None
    if member.address is not None:
        address = AddressResponse(
            city=member.address.city,
            street=member.address.street,
            zipcode=member.address.zipcode,
        )
    return MemberResponse(id=str(member.id), name=member.name, address=address)


# --- Member endpoints ---


@member_router.post("", status_code=201, response_model=IdResponse)
async def create_member(body: RegisterMemberRequest) -> IdResponse:
    member_id = register_member(
        name=body.name,
        city=body.city,
        street=body.street,
        zipcode=body.zipcode,
    )
    return IdResponse(id=member_id)


@member_router.get("", response_model=MemberListResponse)
async def list_members() -> MemberListResponse:
    members = find_members()
    return MemberListResponse(
        count=len(members),
        data=[MemberNameResponse(name=member.name) for member in members],
    )


@member_router.get("/{member_id}", response_model=MemberResponse)
async def get_member(member_id: str) -> MemberResponse:
    return _member_response(find_member(member_id))


@member_router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(member_id: str, body: RenameMemberRequest) -> MemberResponse:
    return _member_response(rename_member(member_id, body.name))


# --- Item endpoints ---


@item_router.post("", status_code=201, response_model=IdResponse)
async def add_item(body: AddItemRequest) -> IdResponse:
    command = AddItem(
        name=body.name,
        price=body.price,
        stock_quantity=body.stock_quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@item_router.get("", response_model=ItemListResponse)
async def list_items() -> ItemListResponse:
    items = find_items()
    return ItemListResponse(
        count=len(items),
        data=[
            ItemResponse(id=str(item.id), name=item.name, price=item.price, stock_quantity=item.stock_quantity)
            for item in items
        ],
    )


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=IdResponse)
async def place_order(body: PlaceOrderRequest) -> IdResponse:
    command = PlaceOrder(
        member_id=body.member_id,
        items=json.dumps([line.model_dump() for line in body.items]),
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@order_router.post("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str) -> StatusResponse:
    current_domain.process(CancelOrder(order_id=order_id), asynchronous=False)
    return StatusResponse(status=OrderStatus.CANCELED.value)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    strategy: OrderQueryStrategy = OrderQueryStrategy.BATCHED,
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
) -> list[OrderResponse]:
    results = find_orders(strategy=strategy, offset=offset, limit=limit)
    return [OrderResponse.from_result(result) for result in results]


@order_router.get("/simple", response_model=list[SimpleOrderResponse])
async def list_simple_orders(
    offset: int = Query(0, ge=0),
    limit: int | None = Query(None, ge=1),
) -> list[SimpleOrderResponse]:
    return [SimpleOrderResponse.from_result(result) for result in find_simple_orders(offset=offset, limit=limit)]
