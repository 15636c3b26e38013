"""Immutable result types returned by the order query layer."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AddressData:
    city: str | None = None
    street: str | None = None
    zipcode: str | None = None

    @classmethod
    def from_parts(cls, city, street, zipcode):
        """Build an address from loose columns; ``None`` when every part is empty."""
        if city is None and street is None and zipcode is None:
            return None
        return cls(city=city, street=street, zipcode=zipcode)

    @classmethod
    def from_value(cls, address):
        """Copy an ``Address`` value object, or return ``None`` for no address."""
        if address is None:
            return None
        return cls.from_parts(address.city, address.street, address.zipcode)


@dataclass(frozen=True)
class OrderFlatRow:
    """One order/item pair as produced by the flat join."""

    order_id: str
    name: str
    order_date: datetime
    order_status: str
    address: AddressData | None
    item_name: str
    order_price: int
    count: int


@dataclass(frozen=True)
class OrderItemQueryResult:
    item_name: str
    order_price: int
    count: int


@dataclass(frozen=True)
class OrderQueryResult:
    """An order with its member name, delivery address and items."""

    order_id: str
    name: str
    order_date: datetime
    order_status: str
    address: AddressData | None
    order_items: tuple[OrderItemQueryResult, ...] = ()

    @property
    def total_price(self):
        return sum(item.order_price * item.count for item in self.order_items)


@dataclass(frozen=True)
class OrderSimpleQueryResult:
    """An order with its to-one relations only."""

    order_id: str
    name: str
    order_date: datetime
    order_status: str
    address: AddressData | None
