"""Member rename — command, handler and the guarded entry point."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.member.member import Member
from shop.member.uniqueness import claiming_name, ensure_name_available


@shop.command(part_of="Member")
class RenameMember:
    """Change a member's name, keeping names unique."""

    member_id: Identifier(required=True)
    name: String(required=True, max_length=100)


@shop.command_handler(part_of=Member)
class RenameMemberHandler:
    @handle(RenameMember)
    def rename_member(self, command):
        repo = current_domain.repository_for(Member)
        member = repo.get(command.member_id)

        ensure_name_available(command.name, member_id=member.id)

        member.rename(command.name)
        repo.add(member)


def rename_member(member_id, name) -> Member:
    """Rename a member and return the reloaded aggregate."""
    with claiming_name(name):
        current_domain.process(RenameMember(member_id=member_id, name=name), asynchronous=False)

    return current_domain.repository_for(Member).get(member_id)
