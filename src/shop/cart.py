from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from db.models import LineItem, Product
from utils.logger import get_logger

_logger = get_logger(__name__)


@dataclass(frozen=True)
class Cart:
    """
    Immutable cart snapshot: one line item per product id, in the order
    products were first added.
    """

    items: Tuple[LineItem, ...] = ()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> float:
        return sum(item.unit_price * item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get(self, product_id: int) -> Optional[LineItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


CartListener = Callable[[Cart], None]


class CartManager:
    """
    Owns the current cart snapshot. Every mutation replaces the snapshot and
    returns the new one; listeners are told about each replacement.
    """

    def __init__(self, cart: Optional[Cart] = None) -> None:
        self._cart = cart or Cart()
        self._listeners: List[CartListener] = []

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def item_count(self) -> int:
        return self._cart.item_count

    @property
    def subtotal(self) -> float:
        return self._cart.subtotal

    def on_change(self, listener: CartListener) -> None:
        self._listeners.append(listener)

    def _commit(self, cart: Cart) -> Cart:
        self._cart = cart
        for listener in list(self._listeners):
            listener(cart)
        return cart

    def add_item(self, product: Product) -> Cart:
        """Add one unit of product, creating its line item if needed."""
        existing = self._cart.get(product.id)
        if existing:
            items = tuple(
                replace(item, quantity=item.quantity + 1)
                if item.product_id == product.id
                else item
                for item in self._cart.items
            )
        else:
            items = self._cart.items + (LineItem(product=product, quantity=1),)
        _logger.debug(f"add_item: product {product.id}")
        return self._commit(Cart(items))

    def remove_item(self, product_id: int) -> Cart:
        if self._cart.get(product_id) is None:
            return self._cart
        items = tuple(i for i in self._cart.items if i.product_id != product_id)
        _logger.debug(f"remove_item: product {product_id}")
        return self._commit(Cart(items))

    def set_quantity(self, product_id: int, quantity: int) -> Cart:
        """Set an exact quantity; zero or below removes the line item."""
        if quantity <= 0:
            return self.remove_item(product_id)
        if self._cart.get(product_id) is None:
            return self._cart
        items = tuple(
            replace(item, quantity=quantity) if item.product_id == product_id else item
            for item in self._cart.items
        )
        _logger.debug(f"set_quantity: product {product_id} -> {quantity}")
        return self._commit(Cart(items))

    def clear(self) -> Cart:
        _logger.debug("clear cart")
        return self._commit(Cart())
