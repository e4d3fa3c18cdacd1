import numbers
from typing import List, Tuple

from utils.exceptions import OrderError


class Product:
    """Priced line item."""

    def __init__(self, name: str, price: float, quantity: int):
        if price < 0:
            raise OrderError(f"Product '{name}' price must be non-negative, got {price}")
        self.name = name
        self.price = float(price)
        self.quantity = 0
        self.set_quantity(quantity)

    def set_quantity(self, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, numbers.Integral):
            raise OrderError(f"Product '{self.name}' quantity must be a whole number, got {quantity!r}")
        if quantity < 0:
            raise OrderError(f"Product '{self.name}' quantity must be non-negative, got {quantity}")
        self.quantity = int(quantity)

    def total(self) -> float:
        return self.price * self.quantity

    def duplicate(self) -> "Product":
        return Product(self.name, self.price, self.quantity)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} ({self.price})"

    __repr__ = __str__


class Discount:
    """Flat amount subtracted from an order total."""

    def __init__(self, name: str, amount: float):
        if amount < 0:
            raise OrderError(f"Discount '{name}' amount must be non-negative, got {amount}")
        self.name = name
        self.amount = float(amount)

    def duplicate(self) -> "Discount":
        return Discount(self.name, self.amount)

    def __str__(self) -> str:
        return f"{self.name} (-{self.amount})"

    __repr__ = __str__


class Order:
    """
    Order snapshot acting as a prototype.

    ``duplicate()`` copies every nested product and discount, so edits made to
    the copy (quantities, new discounts, delivery, payment) never reach the
    original.
    """

    def __init__(self, delivery_cost: float, payment_method: str):
        self._products: List[Product] = []
        self._discounts: List[Discount] = []
        self.delivery_cost = 0.0
        self.set_delivery_cost(delivery_cost)
        self.payment_method = payment_method

    @property
    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products)

    @property
    def discounts(self) -> Tuple[Discount, ...]:
        return tuple(self._discounts)

    def product(self, index: int) -> Product:
        """Live line item at ``index`` for in-place edits."""
        return self._products[index]

    def add_product(self, product: Product) -> None:
        self._products.append(product)

    def add_discount(self, discount: Discount) -> None:
        self._discounts.append(discount)

    def set_delivery_cost(self, delivery_cost: float) -> None:
        if delivery_cost < 0:
            raise OrderError(f"Delivery cost must be non-negative, got {delivery_cost}")
        self.delivery_cost = float(delivery_cost)

    def set_payment_method(self, payment_method: str) -> None:
        self.payment_method = payment_method

    def total(self) -> float:
        amount = self.delivery_cost
        amount += sum(p.total() for p in self._products)
        amount -= sum(d.amount for d in self._discounts)
        return max(0.0, amount)

    def duplicate(self) -> "Order":
        copy = Order(self.delivery_cost, self.payment_method)
        for product in self._products:
            copy.add_product(product.duplicate())
        for discount in self._discounts:
            copy.add_discount(discount.duplicate())
        return copy

    def __str__(self) -> str:
        products = ", ".join(str(p) for p in self._products)
        discounts = ", ".join(str(d) for d in self._discounts)
        return (
            f"Order{{products=[{products}], discounts=[{discounts}], "
            f"deliveryCost={self.delivery_cost}, paymentMethod='{self.payment_method}', "
            f"total={self.total()}}}"
        )
