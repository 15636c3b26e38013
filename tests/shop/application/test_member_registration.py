"""Application tests for member registration and rename."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from shop.domain import shop
from shop.member.lookup import find_member, find_members, find_members_by_name
from shop.member.member import Member
from shop.member.registration import RegisterMember, register_member
from shop.member.rename import rename_member
from shop.member.uniqueness import claiming_name
from shop.shared.exceptions import DuplicateNameError
from sqlalchemy.exc import IntegrityError


class TestRegisterMember:
    def test_registered_member_is_retrievable_by_id(self):
        member_id = register_member(name="kim", city="Seoul", street="1 Main St", zipcode="11111")

        member = find_member(member_id)
        assert str(member.id) == member_id
        assert member.name == "kim"
        assert member.address.city == "Seoul"

    def test_register_through_command(self):
        member_id = current_domain.process(RegisterMember(name="lee"), asynchronous=False)

        member = current_domain.repository_for(Member).get(member_id)
        assert member.name == "lee"
        assert member.address is None

    def test_duplicate_name_is_rejected(self):
        register_member(name="kim")

        with pytest.raises(DuplicateNameError) as exc:
            register_member(name="kim", city="Busan")

        assert exc.value.name == "kim"
        assert len(find_members_by_name("kim")) == 1

    def test_duplicate_name_is_a_validation_error(self):
        register_member(name="kim")

        with pytest.raises(ValidationError) as exc:
            register_member(name="kim")
        assert "name" in exc.value.messages

    def test_different_names_coexist(self):
        register_member(name="kim")
        register_member(name="park")

        assert sorted(member.name for member in find_members()) == ["kim", "park"]

    def test_unknown_member_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            find_member("does-not-exist")


class TestRenameMember:
    def test_rename(self):
        member_id = register_member(name="kim")

        member = rename_member(member_id, "kim2")

        assert member.name == "kim2"
        assert find_members_by_name("kim") == []

    def test_rename_to_taken_name_is_rejected(self):
        register_member(name="kim")
        park_id = register_member(name="park")

        with pytest.raises(DuplicateNameError):
            rename_member(park_id, "kim")

        assert find_member(park_id).name == "park"

    def test_rename_to_own_name_is_allowed(self):
        member_id = register_member(name="kim")

        assert rename_member(member_id, "kim").name == "kim"

    def test_rename_unknown_member(self):
        with pytest.raises(ObjectNotFoundError):
            rename_member("does-not-exist", "nobody")

    def test_released_name_can_be_registered_again(self):
        member_id = register_member(name="kim")
        rename_member(member_id, "kim2")

        register_member(name="kim")

        assert len(find_members_by_name("kim")) == 1


def _skip_name_check(monkeypatch):
    monkeypatch.setattr("shop.member.registration.ensure_name_available", lambda name, member_id=None: None)


class TestStoreLevelNameConflicts:
    def test_store_rejection_on_register_surfaces_as_duplicate_name(self, monkeypatch):
        register_member(name="kim")
        _skip_name_check(monkeypatch)

        with pytest.raises(DuplicateNameError) as exc:
            register_member(name="kim")

        assert exc.value.name == "kim"
        assert isinstance(exc.value.__cause__, ValidationError)
        assert not isinstance(exc.value.__cause__, DuplicateNameError)
        assert len(find_members_by_name("kim")) == 1

    def test_unique_constraint_violation_on_name_is_translated(self):
        violation = IntegrityError("INSERT INTO member", {}, Exception("UNIQUE constraint failed: member.name"))

        with pytest.raises(DuplicateNameError) as exc:
            with claiming_name("kim"):
                raise violation

        assert exc.value.__cause__ is violation

    def test_postgres_unique_violation_on_name_is_translated(self):
        violation = IntegrityError(
            "INSERT INTO member",
            {},
            Exception('duplicate key value violates unique constraint "member_name_key"'),
        )

        with pytest.raises(DuplicateNameError):
            with claiming_name("kim"):
                raise violation

    @pytest.mark.parametrize(
        "message",
        [
            "NOT NULL constraint failed: member.name",
            "FOREIGN KEY constraint failed",
            'duplicate key value violates unique constraint "member_pkey"',
        ],
    )
    def test_other_integrity_errors_pass_through(self, message):
        violation = IntegrityError("INSERT INTO member", {}, Exception(message))

        with pytest.raises(IntegrityError) as exc:
            with claiming_name("kim"):
                raise violation

        assert exc.value is violation


class TestConcurrentRegistration:
    WORKERS = 8

    def _register_all_at_once(self, name):
        barrier = threading.Barrier(self.WORKERS)

        def attempt(_):
            with shop.domain_context():
                barrier.wait()
                try:
                    return register_member(name=name)
                except DuplicateNameError as exc:
                    return exc

        with ThreadPoolExecutor(max_workers=self.WORKERS) as pool:
            return list(pool.map(attempt, range(self.WORKERS)))

    def test_exactly_one_registration_wins(self):
        outcomes = self._register_all_at_once("kim")

        winners = [outcome for outcome in outcomes if isinstance(outcome, str)]
        losers = [outcome for outcome in outcomes if isinstance(outcome, DuplicateNameError)]
        assert len(winners) == 1
        assert len(losers) == self.WORKERS - 1
        assert [str(member.id) for member in find_members_by_name("kim")] == winners
