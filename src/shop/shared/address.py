"""Address value object shared by members and deliveries."""

from protean.fields import String

from shop.domain import shop


@shop.value_object
class Address:
    """A postal address with no identity of its own.

    Members and deliveries each hold their own copy; changing a member's
    address never rewrites where an existing order is shipped.
    """

    city: String(max_length=100)
    street: String(max_length=255)
    zipcode: String(max_length=20)
