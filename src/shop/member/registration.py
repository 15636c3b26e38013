"""Member registration — command, handler and the guarded entry point."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.member.member import Member
from shop.member.uniqueness import claiming_name, ensure_name_available
from shop.utils.logging import get_logger

logger = get_logger(__name__)


@shop.command(part_of="Member")
class RegisterMember:
    """Register a new member under a name no other member holds."""

    name: String(required=True, max_length=100)
    city: String(max_length=100)
    street: String(max_length=255)
    zipcode: String(max_length=20)


@shop.command_handler(part_of=Member)
class RegisterMemberHandler:
    @handle(RegisterMember)
    def register_member(self, command):
        ensure_name_available(command.name)

        member = Member.join(
            name=command.name,
            city=command.city,
            street=command.street,
            zipcode=command.zipcode,
        )
        current_domain.repository_for(Member).add(member)
        return str(member.id)


def register_member(name, city=None, street=None, zipcode=None) -> str:
    """Register a member and return its id.

    Raises ``DuplicateNameError`` when the name is taken, including when a
    concurrent registration commits the same name first.
    """
    command = RegisterMember(name=name, city=city, street=street, zipcode=zipcode)
    with claiming_name(name):
        member_id = current_domain.process(command, asynchronous=False)

    logger.info("member_registered", member_id=member_id)
    return member_id
