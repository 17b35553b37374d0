from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, HorizontalGroup, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Rule

from db.models import LineItem
from utils.pure import format_price


class CartLineWidget(HorizontalGroup):
    """One line item with quantity controls."""

    def __init__(self, item: LineItem) -> None:
        super().__init__(classes="cart-line")
        self.item = item

    def compose(self) -> ComposeResult:
        with Container(classes="cart-line-info"):
            yield Label(self.item.name, classes="cart-line-name")
            yield Label(format_price(self.item.unit_price), classes="cart-line-unit")
        yield Button("-", classes="btn-dec qty-button")
        yield Label(str(self.item.quantity), classes="cart-line-qty")
        yield Button("+", classes="btn-inc qty-button")
        yield Label(format_price(self.item.line_total), classes="cart-line-total")
        yield Button("Remove", classes="btn-remove", variant="error")

    @on(Button.Pressed, ".btn-dec")
    def handle_dec(self) -> None:
        self.app.state.cart.set_quantity(self.item.product_id, self.item.quantity - 1)

    @on(Button.Pressed, ".btn-inc")
    def handle_inc(self) -> None:
        self.app.state.cart.set_quantity(self.item.product_id, self.item.quantity + 1)

    @on(Button.Pressed, ".btn-remove")
    def handle_remove(self) -> None:
        self.app.state.cart.remove_item(self.item.product_id)
        self.notify("Item removed from cart.", severity="information")


class CartModal(ModalScreen[bool]):
    """
    Cart side panel. Dismisses with True when the user asks to check out.
    """

    def compose(self) -> ComposeResult:
        with Container(id="div-cart"):
            yield Label("Your Cart", id="label-cart-title")
            yield VerticalScroll(id="vertscroll-cart")
            yield Rule(line_style="dashed")
            yield Label("Subtotal: Rs 0", id="label-cart-total")
            with Horizontal(id="hort-cart-buttons"):
                yield Button("Close", id="btn-close")
                yield Button("Proceed to Checkout", id="btn-checkout", variant="primary")

    def on_mount(self) -> None:
        self.sync_state()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    def sync_state(self) -> None:
        self.render_cart()

    @work(exclusive=True)  # exclusive, or overlapping redraws duplicate rows
    async def render_cart(self) -> None:
        cart = self.app.state.cart.cart
        content = self.query_one("#vertscroll-cart", VerticalScroll)
        await content.remove_children()
        if cart.is_empty:
            await content.mount(Label("Your cart is empty.", classes="empty-note"))
        else:
            await content.mount_all([CartLineWidget(item) for item in cart.items])

        self.query_one("#label-cart-total", Label).update(
            f"Subtotal: {format_price(cart.subtotal)}"
        )
        self.query_one("#btn-checkout", Button).disabled = cart.is_empty

    @on(Button.Pressed, "#btn-checkout")
    def handle_checkout(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#btn-close")
    def handle_close(self) -> None:
        self.dismiss(False)
