"""Shared BDD fixtures and step definitions for the Shop domain."""

import pytest
from pytest_bdd import given, parsers, then
from shop.member.lookup import find_members_by_name
from shop.member.registration import register_member
from shop.shared.exceptions import DuplicateNameError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def members():
    """Member ids by name, filled in by Given steps."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a member named "{name}" is registered'))
def member_is_registered(name, members):
    members[name] = register_member(name=name)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the registration fails because the name is taken")
def registration_fails_on_name(error):
    assert error["exc"] is not None, "Expected a duplicate name error but none was raised"
    assert isinstance(error["exc"], DuplicateNameError)


@then(parsers.cfparse('exactly {count:d} member is named "{name}"'))
def members_named(count, name):
    assert len(find_members_by_name(name)) == count
