from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Label, Markdown

from db.catalog import featured_products
from utils import config
from views.base_screen import BaseScreen
from views.scr_shop import ProductTable

HERO_MD = f"""\
# {config.STORE_NAME}

Pure, natural products from the valleys of Skardu, Gilgit-Baltistan.
"""

PERKS_MD = """\
| Free Shipping | 100% Organic | Best Prices | Easy Returns |
|:---:|:---:|:---:|:---:|
| Above Rs 2000 | Sourced locally | Direct from farms | Within 7 days |
"""


class HomeScreen(BaseScreen):
    page_title = "Home"

    def compose_body(self) -> ComposeResult:
        yield Markdown(HERO_MD, id="md-hero")
        with Horizontal(classes="hero-actions"):
            yield Button("Shop Now", id="btn-shop-now", variant="primary")
        yield Markdown(PERKS_MD, id="md-perks")
        yield Label("Featured Products", classes="page-heading")
        yield ProductTable(id="table-featured")

    def on_mount(self) -> None:
        self.query_one(ProductTable).show(featured_products())

    @on(Button.Pressed, "#btn-shop-now")
    def handle_shop_now(self) -> None:
        self.navigate("#/shop")
