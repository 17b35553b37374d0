from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label

from shop.router import Route, parse_route
from utils.messages import NavigateMessage, SessionChangedMessage
from views.modal_cart import CartModal
from views.modal_dialog import DialogModal, QuitDialogModal


class NavBar(Horizontal):
    """Top navigation: page links, greeting, account and cart buttons."""

    NAV_LINKS = {
        "nav-home": ("Home", "#/"),
        "nav-shop": ("Shop", "#/shop"),
        "nav-about": ("About", "#/about"),
        "nav-contact": ("Contact", "#/contact"),
    }

    def compose(self) -> ComposeResult:
        for button_id, (text, _) in self.NAV_LINKS.items():
            yield Button(text, id=button_id, classes="nav-link")
        yield Label("", id="label-greeting")
        yield Button("Login", id="btn-account")
        yield Button("Cart (0)", id="btn-cart", variant="success")

    def on_mount(self) -> None:
        self.refresh_state()

    def refresh_state(self) -> None:
        state = self.app.state
        current = state.session.current
        greeting = self.query_one("#label-greeting", Label)
        account = self.query_one("#btn-account", Button)
        if current:
            greeting.update(f"Hi, {current.name}")
            account.label = "Logout"
        else:
            greeting.update("")
            account.label = "Login"
        self.query_one("#btn-cart", Button).label = f"Cart ({state.cart.item_count})"

        fragment = state.router.route.fragment
        for button_id, (_, target) in self.NAV_LINKS.items():
            self.query_one(f"#{button_id}", Button).set_class(
                fragment == target, "-active"
            )

    @on(Button.Pressed, ".nav-link")
    def handle_nav(self, event: Button.Pressed) -> None:
        _, fragment = self.NAV_LINKS[event.button.id]
        self.post_message(NavigateMessage(parse_route(fragment)))

    @on(Button.Pressed, "#btn-cart")
    def handle_cart(self) -> None:
        self.screen.action_open_cart()

    @on(Button.Pressed, "#btn-account")
    @work()
    async def handle_account(self) -> None:
        state = self.app.state
        if not state.session.is_authenticated:
            self.post_message(NavigateMessage(parse_route("#/auth")))
            return

        if not await self.app.push_screen_wait(
            DialogModal(
                "Are you sure you want to log out?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        ):
            return
        if not await state.session.logout():
            self.notify("Could not log out, the local store is unavailable.", severity="error")
            return
        self.app.post_message(SessionChangedMessage())
        self.notify("Logout successful.")
        self.post_message(NavigateMessage(parse_route("#/")))


class BaseScreen(Screen):
    """
    Inherited by all page screens, contains common elements like
    header, navigation bar, footer, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
        Binding("f2", "open_cart", "Cart", show=True),
        Binding("f3", "go('#/shop')", "Shop", show=True),
        Binding("f4", "go('#/')", "Home", show=False),
        Binding("alt+left", "history_back", "Back", show=True),
        Binding("alt+right", "history_forward", "Forward", show=False),
    ]

    page_title = "Home"

    def compose(self) -> ComposeResult:
        yield Header()
        yield NavBar()
        with VerticalScroll(id="page-body"):
            yield from self.compose_body()
        yield Footer(show_command_palette=False)

    def compose_body(self) -> ComposeResult:
        yield from ()

    def on_mount(self) -> None:
        self.sub_title = self.page_title

    def navigate(self, target) -> None:
        route = target if isinstance(target, Route) else parse_route(target)
        self.post_message(NavigateMessage(route))

    def action_go(self, fragment: str) -> None:
        self.navigate(fragment)

    def scroll_to_top(self) -> None:
        self.query_one("#page-body", VerticalScroll).scroll_home(animate=False)

    def sync_state(self) -> None:
        """Called by the app whenever the cart or session changes."""
        if not self.is_mounted:
            return
        self.query_one(NavBar).refresh_state()
        self.refresh_page()

    def refresh_page(self) -> None:
        """Override to redraw page content from the current state."""

    @work()
    async def action_open_cart(self) -> None:
        if await self.app.push_screen_wait(CartModal()):
            self.navigate("#/checkout")

    def action_history_back(self) -> None:
        if not self.app.state.router.location.back():
            self.notify("Nothing to go back to.", severity="warning")

    def action_history_forward(self) -> None:
        self.app.state.router.location.forward()

    @work()
    async def action_quit(self) -> None:
        await self.app.push_screen_wait(QuitDialogModal())
