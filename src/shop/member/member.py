"""Member aggregate root."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, ValueObject

from shop.domain import shop
from shop.shared.address import Address


@shop.aggregate
class Member:
    """A person who can place orders.

    Names are unique across members. The field is declared ``unique`` so SQL
    providers carry a unique constraint and the store rejects a concurrent
    duplicate at commit. A member does not hold its orders; they are found by
    querying order read models on ``member_id``.
    """

    name: String(required=True, max_length=100, unique=True)
    address: ValueObject(Address)
    joined_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def join(cls, name, city=None, street=None, zipcode=None):
        from shop.member.events import MemberJoined

        address = None
        if city or street or zipcode:
            address = Address(city=city, street=street, zipcode=zipcode)

        now = datetime.now(UTC)
        member = cls(name=name, address=address, joined_at=now)
        member.raise_(
            MemberJoined(
                member_id=member.id,
                name=name,
                city=city,
                street=street,
                zipcode=zipcode,
                joined_at=now,
            )
        )
        return member

    def rename(self, name):
        from shop.member.events import MemberRenamed

        if not name or not name.strip():
            raise ValidationError({"name": ["Name cannot be blank"]})
        if name == self.name:
            return

        previous = self.name
        self.name = name
        self.raise_(
            MemberRenamed(
                member_id=self.id,
                previous_name=previous,
                name=name,
            )
        )
