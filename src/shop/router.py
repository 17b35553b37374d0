"""
Fragment routing.

A route is a pure function of the location fragment (``#/shop``,
``#/product/42``, ...). The Location keeps the fragment and a back/forward
history; the RouteDispatcher mirrors it into a typed Route.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from utils.logger import get_logger

_logger = get_logger(__name__)


class Page(str, Enum):
    HOME = "home"
    SHOP = "shop"
    ABOUT = "about"
    CONTACT = "contact"
    CHECKOUT = "checkout"
    AUTH = "auth"
    REFUND_POLICY = "refund-policy"
    PRIVACY_POLICY = "privacy-policy"
    TERMS = "terms"
    PRODUCT = "product"


STATIC_FRAGMENTS = {
    "#/": Page.HOME,
    "#/shop": Page.SHOP,
    "#/about": Page.ABOUT,
    "#/contact": Page.CONTACT,
    "#/checkout": Page.CHECKOUT,
    "#/auth": Page.AUTH,
    "#/refund-policy": Page.REFUND_POLICY,
    "#/privacy-policy": Page.PRIVACY_POLICY,
    "#/terms": Page.TERMS,
}

_PRODUCT_PATTERN = re.compile(r"#/product/([0-9]+)")


@dataclass(frozen=True)
class Route:
    page: Page
    product_id: Optional[int] = None

    @property
    def fragment(self) -> str:
        if self.page is Page.PRODUCT:
            return f"#/product/{self.product_id}"
        if self.page is Page.HOME:
            return "#/"
        return f"#/{self.page.value}"

    @classmethod
    def product(cls, product_id: int) -> "Route":
        return cls(Page.PRODUCT, product_id)


HOME = Route(Page.HOME)


def parse_route(fragment: Optional[str]) -> Route:
    """Map a fragment to its Route; anything unrecognised is the home page."""
    fragment = fragment or "#/"
    match = _PRODUCT_PATTERN.fullmatch(fragment)
    if match:
        return Route.product(int(match.group(1)))
    page = STATIC_FRAGMENTS.get(fragment)
    if page is None:
        _logger.debug(f"Unknown fragment {fragment!r}, falling back to home")
        return HOME
    return Route(page)


LocationListener = Callable[[str], None]


class Location:
    """
    Current fragment with a browser-style history.

    assign() is app-initiated and does not notify listeners; back() and
    forward() change the fragment from outside the app and do.
    """

    def __init__(self, fragment: str = "#/") -> None:
        self._fragment = fragment or "#/"
        self._back: List[str] = []
        self._forward: List[str] = []
        self._listeners: List[LocationListener] = []

    @property
    def fragment(self) -> str:
        return self._fragment

    @property
    def can_go_back(self) -> bool:
        return bool(self._back)

    @property
    def can_go_forward(self) -> bool:
        return bool(self._forward)

    def add_listener(self, listener: LocationListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: LocationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def assign(self, fragment: str) -> None:
        if fragment == self._fragment:
            return
        self._back.append(self._fragment)
        self._forward.clear()
        self._fragment = fragment

    def back(self) -> bool:
        if not self._back:
            return False
        self._forward.append(self._fragment)
        self._fragment = self._back.pop()
        self._notify()
        return True

    def forward(self) -> bool:
        if not self._forward:
            return False
        self._back.append(self._fragment)
        self._fragment = self._forward.pop()
        self._notify()
        return True

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._fragment)


RouteListener = Callable[[Route, bool], None]


class RouteDispatcher:
    """
    Keeps the current Route in sync with a Location.

    Subscribers receive (route, external); external is True when the change
    came from back/forward rather than set_route. External changes also
    call on_scroll_top.
    """

    def __init__(
        self,
        location: Optional[Location] = None,
        on_scroll_top: Optional[Callable[[], None]] = None,
    ) -> None:
        self.location = location or Location()
        self.on_scroll_top = on_scroll_top
        self._route = parse_route(self.location.fragment)
        self._subscribers: List[RouteListener] = []
        self.location.add_listener(self._handle_location_change)

    @property
    def route(self) -> Route:
        return self._route

    def subscribe(self, callback: RouteListener) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: RouteListener) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def set_route(self, target: Union[Route, str]) -> Route:
        """Navigate to a Route or a raw fragment string."""
        fragment = target.fragment if isinstance(target, Route) else target
        self.location.assign(fragment)
        return self._apply(fragment, external=False)

    def _handle_location_change(self, fragment: str) -> None:
        self._apply(fragment, external=True)
        if self.on_scroll_top is not None:
            self.on_scroll_top()

    def _apply(self, fragment: str, external: bool) -> Route:
        route = parse_route(fragment)
        self._route = route
        _logger.debug(f"route -> {route.fragment} (external={external})")
        for callback in list(self._subscribers):
            callback(route, external)
        return route

    def close(self) -> None:
        self.location.remove_listener(self._handle_location_change)
