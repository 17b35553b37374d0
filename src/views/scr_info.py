from textual.app import ComposeResult
from textual.widgets import Markdown

from shop.router import Page
from utils import config
from views.base_screen import BaseScreen

# placeholder copy; the full policy texts live with the site content
PAGES = {
    Page.ABOUT: (
        "About",
        f"# About {config.STORE_NAME}\n\n"
        "We bring pure, ethically sourced organic products from the valleys of "
        "Skardu to health-conscious people everywhere, working with local "
        "farmers who practice sustainable agriculture.",
    ),
    Page.REFUND_POLICY: (
        "Refund Policy",
        "# Refund Policy\n\n"
        "Items can be returned within 7 days of delivery. Contact us before "
        "sending anything back; returns sent without a request are not accepted.",
    ),
    Page.PRIVACY_POLICY: (
        "Privacy Policy",
        "# Privacy Policy\n\n"
        "Contact and shipping details are used only to process and deliver "
        "your orders.",
    ),
    Page.TERMS: (
        "Terms & Conditions",
        "# Terms & Conditions\n\n"
        "Shipping and delivery times are estimates only and cannot be guaranteed.",
    ),
}


class InfoScreen(BaseScreen):
    """Static content pages."""

    def __init__(self, page: Page) -> None:
        super().__init__()
        self.page = page
        self.page_title, self.body = PAGES[page]

    def compose_body(self) -> ComposeResult:
        yield Markdown(self.body, classes="info-body")
