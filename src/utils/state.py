from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from db.models import PlacedOrder
from shop.cart import CartManager
from shop.checkout import Checkout
from shop.router import Location, Page, Route, RouteDispatcher
from shop.session import IdentityRepository, SessionManager, StorageIdentityRepository


@dataclass
class AppState:
    """
    Application state handed to every screen.

    Fields:
      - session: registered identities and the active session
      - cart: the in-memory cart (not persisted)
      - router: current route, kept in sync with the location fragment
      - checkout: order hand-off over the cart
      - placed_order: confirmation snapshot, kept until the user leaves checkout
      - search_query: shop filter text shared by the header and shop page
    """

    session: SessionManager
    cart: CartManager = field(default_factory=CartManager)
    router: RouteDispatcher = field(default_factory=RouteDispatcher)
    checkout: Checkout = field(init=False)
    placed_order: Optional[PlacedOrder] = None
    search_query: str = ""

    def __post_init__(self) -> None:
        self.checkout = Checkout(self.cart)
        self.router.subscribe(self._forget_order_off_checkout)

    @classmethod
    def create(
        cls,
        repository: Optional[IdentityRepository] = None,
        fragment: str = "#/",
    ) -> "AppState":
        return cls(
            session=SessionManager(repository or StorageIdentityRepository()),
            router=RouteDispatcher(Location(fragment)),
        )

    async def start(self) -> None:
        """Restore persisted identity state."""
        await self.session.load()

    def _forget_order_off_checkout(self, route: Route, external: bool) -> None:
        if route.page is not Page.CHECKOUT:
            self.placed_order = None
