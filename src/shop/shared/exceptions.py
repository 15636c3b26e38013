"""Errors raised by the shop domain beyond Protean's own.

Lookups that miss raise Protean's ``ObjectNotFoundError`` and malformed input
raises Protean's ``ValidationError``; both are translated at the API boundary.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError

NotFoundError = ObjectNotFoundError


class DuplicateNameError(ValidationError):
    """A member name is already held by another member."""

    def __init__(self, name):
        self.name = name
        super().__init__({"name": [f"Member name '{name}' is already taken"]})
