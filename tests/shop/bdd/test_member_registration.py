"""BDD tests for member registration."""

from pytest_bdd import parsers, scenarios, then, when
from shop.member.lookup import find_member
from shop.member.registration import register_member
from shop.member.rename import rename_member
from shop.shared.exceptions import DuplicateNameError

scenarios("features/member_registration.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('a member registers with name "{name}" in city "{city}"'),
    target_fixture="member_id",
)
def register_with_name(name, city, error):
    try:
        return register_member(name=name, city=city)
    except DuplicateNameError as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('"{current}" renames to "{name}"'))
def rename(current, name, members, error):
    try:
        rename_member(members[current], name)
    except DuplicateNameError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the registration succeeds")
def registration_succeeds(member_id, error):
    assert error["exc"] is None
    assert member_id is not None


@then(parsers.cfparse('the member "{name}" can be found by the returned id'))
def member_found(member_id, name):
    assert find_member(member_id).name == name
