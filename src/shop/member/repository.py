"""Repository for the Member aggregate."""

from shop.domain import custom_setting, shop
from shop.member.member import Member


@shop.repository(part_of=Member)
class MemberRepository:
    """Member lookups beyond the base CRUD operations."""

    def find_by_name(self, name: str) -> list[Member]:
        """All members holding ``name``; at most one once the unique constraint holds."""
        return self._dao.query.filter(name=name).limit(custom_setting("max_query_rows", 1000)).all().items

    def list_all(self) -> list[Member]:
        """Members in the order they joined."""
        return self._dao.query.order_by("joined_at").limit(custom_setting("max_query_rows", 1000)).all().items
