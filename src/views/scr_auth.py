from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from utils.messages import SessionChangedMessage
from views.base_screen import BaseScreen

INVALID_CREDENTIALS = "Invalid email or password."
EMAIL_TAKEN = "An account with this email already exists."
STORE_UNAVAILABLE = "Could not save to the local store. Please try again."


class AuthScreen(BaseScreen):
    """
    Login and sign-up tabs. Both go back to the home page on success and
    show an inline error otherwise.
    """

    page_title = "Login"

    def compose_body(self) -> ComposeResult:
        with TabbedContent(id="tabs-auth"):
            with TabPane("Login", id="tab-login"):
                with Vertical(classes="form"):
                    yield Label("Email Address")
                    yield Input(placeholder="user@example.com", id="input-login-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    yield Label("", id="label-login-error", classes="form-error")
                    with Horizontal(classes="form-buttons"):
                        yield Button("Login", id="btn-login", variant="primary")

            with TabPane("Sign up", id="tab-signup"):
                with Vertical(classes="form"):
                    yield Label("Full Name")
                    yield Input(placeholder="Jane Doe", id="input-reg-name")
                    yield Label("Email Address")
                    yield Input(placeholder="user@example.com", id="input-reg-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-reg-pwd"
                    )
                    yield Label("", id="label-reg-error", classes="form-error")
                    with Horizontal(classes="form-buttons"):
                        yield Button("Create Account", id="btn-reg", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#input-login-email").focus()

    @on(Input.Submitted, "#input-login-pwd")
    def handle_login_enter(self) -> None:
        self.handle_login_submit()

    @on(Input.Submitted, "#input-reg-pwd")
    def handle_reg_enter(self) -> None:
        self.handle_registration_submit()

    def _show_error(self, label_id: str, message: str) -> None:
        self.query_one(label_id, Label).update(message)
        self.notify(message, severity="error")

    def _signed_in(self) -> None:
        session = self.app.state.session.current
        self.app.post_message(SessionChangedMessage())
        self.notify(f"Hello {session.name}!")
        self.navigate("#/")

    @on(Button.Pressed, "#btn-login")
    @work(exclusive=True)
    async def handle_login_submit(self) -> None:
        email = self.query_one("#input-login-email", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value

        if not email or not pwd:
            self._show_error("#label-login-error", "Email and password are required.")
            return

        if await self.app.state.session.login(email, pwd):
            self._signed_in()
            return

        if self.app.state.session.store_failed:
            self._show_error("#label-login-error", STORE_UNAVAILABLE)
            return

        self._show_error("#label-login-error", INVALID_CREDENTIALS)
        input_pwd = self.query_one("#input-login-pwd", Input)
        input_pwd.value = ""
        input_pwd.focus()
        input_pwd.add_class("-invalid")

    @on(Button.Pressed, "#btn-reg")
    @work(exclusive=True)
    async def handle_registration_submit(self) -> None:
        name = self.query_one("#input-reg-name", Input).value.strip()
        email = self.query_one("#input-reg-email", Input).value.strip()
        pwd = self.query_one("#input-reg-pwd", Input).value

        if not name or not email or not pwd:
            self._show_error("#label-reg-error", "Make sure all inputs are filled.")
            return

        if await self.app.state.session.register(name, email, pwd):
            self._signed_in()
            return

        if self.app.state.session.store_failed:
            self._show_error("#label-reg-error", STORE_UNAVAILABLE)
            return

        self._show_error("#label-reg-error", EMAIL_TAKEN)
        input_email = self.query_one("#input-reg-email", Input)
        input_email.focus()
        input_email.add_class("-invalid")
