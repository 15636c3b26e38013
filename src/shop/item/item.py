"""Item aggregate, something a member can order, with a stock level."""

from protean.exceptions import ValidationError
from protean.fields import Integer, String

from shop.domain import shop


@shop.aggregate
class Item:
    name: String(required=True, max_length=255)
    price: Integer(required=True, min_value=0)
    stock_quantity: Integer(default=0, min_value=0)

    def add_stock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"stock_quantity": ["Quantity to add must be positive"]})
        self.stock_quantity += quantity

    def remove_stock(self, quantity):
        if quantity <= 0:
            raise ValidationError({"stock_quantity": ["Quantity to remove must be positive"]})

        remaining = self.stock_quantity - quantity
        if remaining < 0:
            raise ValidationError({"stock_quantity": [f"Not enough stock for '{self.name}': {self.stock_quantity} left"]})
        self.stock_quantity = remaining
