"""Read-side member lookups used by the API."""

from protean.utils.globals import current_domain

from shop.member.member import Member


def find_member(member_id) -> Member:
    """Load a member by id; raises ``ObjectNotFoundError`` when missing."""
    return current_domain.repository_for(Member).get(member_id)


def find_members() -> list[Member]:
    return current_domain.repository_for(Member).list_all()


def find_members_by_name(name) -> list[Member]:
    return current_domain.repository_for(Member).find_by_name(name)
