"""Domain events for the Member aggregate."""

from protean.fields import DateTime, Identifier, String

from shop.domain import shop


@shop.event(part_of="Member")
class MemberJoined:
    """A new member was registered."""

    __version__ = 1

    member_id: Identifier(required=True)
    name: String(required=True)
    city: String()
    street: String()
    zipcode: String()
    joined_at: DateTime(required=True)


@shop.event(part_of="Member")
class MemberRenamed:
    """A member changed their name; read models that copy it must follow."""

    __version__ = 1

    member_id: Identifier(required=True)
    previous_name: String(required=True)
    name: String(required=True)
