"""
Order and inquiry messages, and the deep links that hand them to a
messaging app or mail client. Nothing here delivers anything.
"""
from __future__ import annotations

import re
from typing import Iterable, Literal, Optional
from urllib.parse import quote

from db.models import BillingDetails, DeepLinks, Inquiry, LineItem, PlacedOrder
from shop.cart import Cart, CartManager
from utils import config
from utils.logger import get_logger
from utils.pure import format_amount

_logger = get_logger(__name__)

Channel = Literal["whatsapp", "email"]

ORDER_SUBJECT = f"New Order from {config.STORE_NAME}"
CONFIRMATION_SUBJECT = f"Your {config.STORE_NAME} Order Confirmation"
INQUIRY_SUBJECT = "New Website Inquiry"


def encode_component(text: str) -> str:
    """Percent-encode like encodeURIComponent: only A-Za-z0-9 -_.!~*'() pass."""
    return quote(text, safe="-_.!~*'()")


def strip_emphasis(text: str) -> str:
    return text.replace("*", "")


def clean_phone(phone: str) -> str:
    return re.sub(r"[^0-9+]", "", phone)


def whatsapp_link(phone: str, message: str) -> str:
    return f"https://wa.me/{clean_phone(phone)}?text={encode_component(message)}"


def mailto_link(address: str, subject: str, message: str) -> str:
    return (
        f"mailto:{address}"
        f"?subject={encode_component(subject)}"
        f"&body={encode_component(strip_emphasis(message))}"
    )


BILLING_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "state",
    "zip",
)


def billing_from_form(form: dict) -> BillingDetails:
    """
    Build BillingDetails from raw form values. Raises ValueError naming the
    blank fields; every field is required.
    """
    values = {name: str(form.get(name) or "").strip() for name in BILLING_FIELDS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Missing billing fields: {', '.join(missing)}")
    return BillingDetails(**values)


def _summary_lines(items: Iterable[LineItem]) -> str:
    cur = config.CURRENCY
    return "".join(
        f"- {item.name} (x{item.quantity}) - {cur} {format_amount(item.line_total)}\n"
        for item in items
    )


def compose_order_message(details: BillingDetails, cart: Cart) -> str:
    """Order summary sent to the store."""
    message = f"*New Order from {config.STORE_NAME}*\n\n"
    message += "*Customer Details:*\n"
    message += f"Name: {details.full_name}\n"
    message += f"Email: {details.email}\n"
    message += f"Phone: {details.phone}\n"
    message += f"Address: {details.full_address}\n\n"
    message += "*Order Summary:*\n"
    message += _summary_lines(cart.items)
    message += f"\n*Total: {config.CURRENCY} {format_amount(cart.subtotal)}*"
    return message


def compose_confirmation_message(order: PlacedOrder) -> str:
    """Receipt the customer can send to themselves."""
    message = f"Hello {order.details.first_name},\n\n"
    message += (
        f"Thank you for your purchase from {config.STORE_NAME}! We have received "
        "your order and will contact you shortly to confirm the details.\n\n"
    )
    message += "*Order Summary:*\n"
    message += _summary_lines(order.items)
    message += f"\n*Total: {config.CURRENCY} {format_amount(order.total)}*\n\n"
    message += "*Shipping to:*\n"
    message += f"{order.details.full_address}\n\n"
    message += "We appreciate your business!"
    return message


def compose_inquiry_message(inquiry: Inquiry) -> str:
    message = f"*New Inquiry from {config.STORE_NAME} Website*\n\n"
    message += "*Contact Details:*\n"
    message += f"Name: {inquiry.name}\n"
    message += f"Email: {inquiry.email}\n"
    message += f"Phone: {inquiry.phone}\n\n"
    message += f"*Message:*\n{inquiry.comments or 'No comments provided.'}"
    return message


def inquiry_links(inquiry: Inquiry) -> DeepLinks:
    message = compose_inquiry_message(inquiry)
    return DeepLinks(
        whatsapp=whatsapp_link(config.STORE_PHONE, message),
        email=mailto_link(config.STORE_EMAIL, INQUIRY_SUBJECT, message),
    )


def receipt_links(order: PlacedOrder) -> DeepLinks:
    """Links addressed to the customer's own phone and mailbox."""
    message = compose_confirmation_message(order)
    return DeepLinks(
        whatsapp=whatsapp_link(order.details.phone, message),
        email=mailto_link(order.details.email, CONFIRMATION_SUBJECT, message),
    )


class Checkout:
    """
    Turns the current cart into a store order link, then snapshots the
    order and empties the cart.
    """

    def __init__(
        self,
        cart_manager: CartManager,
        store_phone: Optional[str] = None,
        store_email: Optional[str] = None,
    ) -> None:
        self.cart_manager = cart_manager
        self.store_phone = store_phone or config.STORE_PHONE
        self.store_email = store_email or config.STORE_EMAIL

    def order_link(self, details: BillingDetails, via: Channel) -> str:
        message = compose_order_message(details, self.cart_manager.cart)
        if via == "whatsapp":
            return whatsapp_link(self.store_phone, message)
        if via == "email":
            return mailto_link(self.store_email, ORDER_SUBJECT, message)
        raise ValueError(f"Unknown order channel: {via!r}")

    def place_order(
        self, details: BillingDetails, via: Channel
    ) -> tuple[str, PlacedOrder]:
        """
        Return (link to open, confirmation snapshot). The cart is cleared
        once the link has been built.
        """
        cart = self.cart_manager.cart
        if cart.is_empty:
            raise ValueError("Cannot place an order with an empty cart.")
        link = self.order_link(details, via)
        order = PlacedOrder(details=details, items=cart.items, total=cart.subtotal)
        self.cart_manager.clear()
        _logger.info(
            f"Order handed off via {via}: {cart.item_count} item(s), "
            f"total {config.CURRENCY} {format_amount(order.total)}"
        )
        return link, order
