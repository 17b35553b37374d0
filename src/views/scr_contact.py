from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, TextArea

from db.models import Inquiry
from shop.checkout import inquiry_links
from utils import config
from views.base_screen import BaseScreen
from views.modal_dialog import DeepLinkModal


class ContactScreen(BaseScreen):
    """
    Inquiry form. Submitting builds WhatsApp and email links to the store;
    the user picks one to send.
    """

    page_title = "Contact"

    def compose_body(self) -> ComposeResult:
        yield Label("Get in Touch", classes="page-heading")
        yield Label(f"Email: {config.STORE_EMAIL}    Phone: +{config.STORE_PHONE}")
        with Vertical(classes="form"):
            yield Label("Full Name")
            yield Input(id="input-name")
            yield Label("Email Address")
            yield Input(id="input-email")
            yield Label("Contact Number")
            yield Input(id="input-phone")
            yield Label("Comments")
            yield TextArea(id="textarea-comments")
            yield Label("", id="label-contact-error", classes="form-error")
            yield Button("Send Message", id="btn-submit", variant="primary")
        with Horizontal(id="hort-send", classes="hidden form-buttons"):
            yield Button("Send via WhatsApp", id="btn-send-whatsapp", variant="success")
            yield Button("Send via Email", id="btn-send-email", variant="primary")

    def read_inquiry(self) -> Inquiry:
        return Inquiry(
            name=self.query_one("#input-name", Input).value.strip(),
            email=self.query_one("#input-email", Input).value.strip(),
            phone=self.query_one("#input-phone", Input).value.strip(),
            comments=self.query_one("#textarea-comments", TextArea).text.strip(),
        )

    @on(Button.Pressed, "#btn-submit")
    def handle_submit(self) -> None:
        inquiry = self.read_inquiry()
        if not inquiry.name or not inquiry.email or not inquiry.phone:
            self.query_one("#label-contact-error", Label).update(
                "Name, email and phone are required."
            )
            return
        self.query_one("#label-contact-error", Label).update("")
        self.query_one("#hort-send").remove_class("hidden")
        self.notify("Thank you! Choose how to send your message.")

    @on(Button.Pressed, "#btn-send-whatsapp")
    def handle_send_whatsapp(self) -> None:
        self._open(inquiry_links(self.read_inquiry()).whatsapp)

    @on(Button.Pressed, "#btn-send-email")
    def handle_send_email(self) -> None:
        self._open(inquiry_links(self.read_inquiry()).email)

    def _open(self, link: str) -> None:
        self.app.open_url(link)
        self.app.push_screen(DeepLinkModal("Inquiry link", link))
