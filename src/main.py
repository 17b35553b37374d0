import sys

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen, Screen
from textual.widgets import LoadingIndicator

from shop.router import Page, Route
from utils import config
from utils.logger import get_logger
from utils.messages import (
    CartChangedMessage,
    NavigateMessage,
    QuitRequestedMessage,
    RouteChangedMessage,
    SessionChangedMessage,
)
from utils.state import AppState
from views.scr_auth import AuthScreen
from views.scr_checkout import CheckoutScreen
from views.scr_contact import ContactScreen
from views.scr_home import HomeScreen
from views.scr_info import PAGES as INFO_PAGES
from views.scr_info import InfoScreen
from views.scr_product import ProductScreen
from views.scr_shop import ShopScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    TITLE = config.STORE_NAME

    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    PAGE_SCREENS = {
        Page.HOME: HomeScreen,
        Page.SHOP: ShopScreen,
        Page.CONTACT: ContactScreen,
        Page.CHECKOUT: CheckoutScreen,
        Page.AUTH: AuthScreen,
    }

    CSS_PATH = [
        "styles/index.tcss",
        "styles/cart.tcss",
        "styles/forms.tcss",
    ]

    state: AppState

    def __init__(self, state: AppState | None = None):
        super().__init__()
        self.state = state or AppState.create()
        self._scroll_pending = False
        self.state.router.on_scroll_top = self.request_scroll_top
        self.state.router.subscribe(self.handle_route)
        self.state.cart.on_change(lambda _cart: self.post_message(CartChangedMessage()))

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        await self.state.start()
        await self.push_screen(self.build_screen(self.state.router.route))

    def build_screen(self, route: Route) -> Screen:
        if route.page is Page.PRODUCT:
            return ProductScreen(route.product_id)
        if route.page in INFO_PAGES:
            return InfoScreen(route.page)
        return self.PAGE_SCREENS[route.page]()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    def handle_route(self, route: Route, external: bool) -> None:
        self.post_message(RouteChangedMessage(route, external))

    def request_scroll_top(self) -> None:
        self._scroll_pending = True

    @on(NavigateMessage)
    def handle_navigate(self, message: NavigateMessage) -> None:
        self.state.router.set_route(message.route)

    @on(RouteChangedMessage)
    async def handle_route_changed(self, message: RouteChangedMessage) -> None:
        while isinstance(self.screen, ModalScreen):
            await self.pop_screen()
        await self.switch_screen(self.build_screen(message.route))
        if self._scroll_pending:
            self._scroll_pending = False
            self.call_after_refresh(self.screen.scroll_to_top)

    @on(CartChangedMessage)
    @on(SessionChangedMessage)
    def handle_state_changed(self) -> None:
        for screen in self.screen_stack:
            sync = getattr(screen, "sync_state", None)
            if sync is not None:
                sync()

    @on(QuitRequestedMessage)
    def handle_quit(self) -> None:
        _logger.info("Quit requested")
        self.exit()


def run(argv=None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    fragment = argv[0] if argv else "#/"
    StorefrontApp(AppState.create(fragment=fragment)).run()


if __name__ == "__main__":
    run()
