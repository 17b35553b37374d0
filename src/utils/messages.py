from textual.message import Message

from shop.router import Route


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class SessionChangedMessage(Message):
    """
    Fired after login, registration or logout so the header can refresh
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired whenever the cart snapshot is replaced.
    Posted at App level; screens refresh badges and totals from it.
    """

    bubble = True


class NavigateMessage(Message):
    """
    Ask the app to go to a route. Widgets post this instead of touching the
    router so navigation always goes through one place.
    """

    bubble = True

    def __init__(self, route: Route) -> None:
        super().__init__()
        self.route = route


class RouteChangedMessage(Message):
    """
    fired whenever the current route changes
    must be fired from app level
    """

    bubble = True

    def __init__(self, route: Route, external: bool) -> None:
        super().__init__()
        self.route = route
        self.external = external
