"""Member-name uniqueness.

The authoritative guard is the store: ``Member.name`` is declared unique, so
SQL providers create a unique constraint and a concurrent duplicate fails at
commit. Protean also checks unique fields on save, but with a read that can
race, so within one process the check and the commit run under a lock.
Whichever layer notices the conflict, callers see ``DuplicateNameError``.
"""

import threading
from contextlib import contextmanager

from protean.exceptions import ProteanException, ValidationError
from protean.utils.globals import current_domain
from sqlalchemy.exc import IntegrityError

from shop.shared.exceptions import DuplicateNameError
from shop.utils.logging import get_logger

logger = get_logger(__name__)

_name_claims = threading.Lock()


def _causes(exc):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def _violates_name_constraint(exc) -> bool:
    text = str(getattr(exc, "orig", None) or exc).lower()
    return "name" in text and ("unique" in text or "duplicate" in text)


def is_name_conflict(exc) -> bool:
    for cause in _causes(exc):
        if isinstance(cause, DuplicateNameError):
            return True
        if isinstance(cause, IntegrityError):
            return _violates_name_constraint(cause)
        if isinstance(cause, ValidationError):
            messages = getattr(cause, "messages", None)
            if isinstance(messages, dict) and "name" in messages:
                return any("already" in str(message) for message in messages["name"])
    return False


def ensure_name_available(name, member_id=None):
    """Raise ``DuplicateNameError`` if a member other than ``member_id`` holds ``name``."""
    from shop.member.member import Member

    holders = current_domain.repository_for(Member).find_by_name(name)
    if any(str(holder.id) != str(member_id) for holder in holders):
        raise DuplicateNameError(name)


@contextmanager
def claiming_name(name):
    """Run a name-changing command as one check-and-commit unit."""
    with _name_claims:
        try:
            yield
        except DuplicateNameError:
            logger.info("member_name_conflict", name=name)
            raise
        except (ProteanException, IntegrityError) as exc:
            if not is_name_conflict(exc):
                raise
            logger.info("member_name_conflict", name=name, detected_by="store")
            raise DuplicateNameError(name) from exc
