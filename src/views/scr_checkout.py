from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, Markdown

from db.models import LineItem, PlacedOrder
from shop.cart import Cart
from shop.checkout import BILLING_FIELDS, Channel, billing_from_form, receipt_links
from utils.pure import format_price, generate_markdown_table
from views.base_screen import BaseScreen
from views.modal_dialog import DeepLinkModal

PLACEHOLDERS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "email": "Email Address",
    "phone": "Phone Number (e.g., +923...)",
    "address": "Address",
    "city": "City",
    "state": "State",
    "zip": "ZIP Code",
}


def summary_markdown(items: tuple[LineItem, ...], total: float) -> str:
    rows = [[i.name, i.quantity, format_price(i.line_total)] for i in items]
    md = "### Order Summary\n\n"
    md += generate_markdown_table(["Product", "Quantity", "Price"], rows, ["l", "c", "r"])
    md += f"\n\nSubtotal: {format_price(total)}  \nShipping: Free  \n"
    md += f"**Total: {format_price(total)}**"
    return md


def cart_summary_markdown(cart: Cart) -> str:
    return summary_markdown(cart.items, cart.subtotal)


class CheckoutScreen(BaseScreen):
    """
    Billing form plus order summary. Ordering opens a WhatsApp or email
    deep link for the store, empties the cart and switches to the
    confirmation view, which stays until the user leaves this page.
    """

    page_title = "Checkout"

    def compose_body(self) -> ComposeResult:
        state = self.app.state
        if state.placed_order is not None:
            yield from self.compose_confirmation(state.placed_order)
        elif state.cart.cart.is_empty:
            yield Label("Your cart is empty", classes="page-heading")
            yield Button("Continue Shopping", id="btn-continue", variant="primary")
        else:
            yield from self.compose_form()

    def compose_form(self) -> ComposeResult:
        yield Label("Checkout", classes="page-heading")
        with Horizontal(id="hort-checkout"):
            with Vertical(classes="form", id="div-billing"):
                yield Label("Billing Details")
                for name in BILLING_FIELDS:
                    yield Input(placeholder=PLACEHOLDERS[name], id=f"input-{name}")
                yield Label("", id="label-billing-error", classes="form-error")
                yield Button(
                    "Order via WhatsApp", id="btn-order-whatsapp", variant="success"
                )
                yield Button("Order via Email", id="btn-order-email", variant="primary")
            yield Markdown(cart_summary_markdown(self.app.state.cart.cart), id="md-summary")

    def compose_confirmation(self, order: PlacedOrder) -> ComposeResult:
        yield Label("Thank you for your purchase!", classes="page-heading")
        yield Label(
            "Your order has been submitted successfully. "
            "We will contact you shortly to confirm the details."
        )
        yield Markdown(summary_markdown(order.items, order.total), id="md-confirmation")
        yield Label("Get a copy of your receipt:")
        with Horizontal(classes="form-buttons"):
            yield Button("Send to my WhatsApp", id="btn-receipt-whatsapp", variant="success")
            yield Button("Send to my Email", id="btn-receipt-email", variant="primary")
        yield Button("← Continue Shopping", id="btn-continue")

    def on_mount(self) -> None:
        if self.query("#input-first_name"):
            self.query_one("#input-first_name", Input).focus()

    def refresh_page(self) -> None:
        # the cart can change underneath the form from the cart panel
        summary = self.query("#md-summary")
        if summary:
            summary.first(Markdown).update(
                cart_summary_markdown(self.app.state.cart.cart)
            )

    def read_form(self) -> dict:
        return {
            name: self.query_one(f"#input-{name}", Input).value
            for name in BILLING_FIELDS
        }

    @on(Button.Pressed, "#btn-order-whatsapp")
    def handle_order_whatsapp(self) -> None:
        self.place_order("whatsapp")

    @on(Button.Pressed, "#btn-order-email")
    def handle_order_email(self) -> None:
        self.place_order("email")

    @work(exclusive=True)
    async def place_order(self, via: Channel) -> None:
        state = self.app.state
        try:
            details = billing_from_form(self.read_form())
        except ValueError:
            self.query_one("#label-billing-error", Label).update(
                "Please fill in all billing details."
            )
            self.notify("Please fill in all billing details.", severity="error")
            for name, value in self.read_form().items():
                if not value.strip():
                    self.query_one(f"#input-{name}", Input).add_class("-invalid")
            return

        if state.cart.cart.is_empty:
            self.notify("Your cart is empty.", severity="warning")
            return

        link, order = state.checkout.place_order(details, via)
        state.placed_order = order
        self.app.open_url(link)
        await self.recompose()
        channel = "WhatsApp" if via == "whatsapp" else "your mail client"
        self.app.push_screen(DeepLinkModal(f"Order opened in {channel}", link))

    @on(Button.Pressed, "#btn-receipt-whatsapp")
    def handle_receipt_whatsapp(self) -> None:
        self._send_receipt(receipt_links(self.app.state.placed_order).whatsapp)

    @on(Button.Pressed, "#btn-receipt-email")
    def handle_receipt_email(self) -> None:
        self._send_receipt(receipt_links(self.app.state.placed_order).email)

    def _send_receipt(self, link: str) -> None:
        self.app.open_url(link)
        self.app.push_screen(DeepLinkModal("Receipt link", link))

    @on(Button.Pressed, "#btn-continue")
    def handle_continue(self) -> None:
        self.navigate("#/shop")
