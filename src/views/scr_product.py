from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button, Label, Markdown, TabbedContent, TabPane

from db.catalog import get_product
from db.models import Product
from utils.pure import format_price, generate_markdown_table
from views.base_screen import BaseScreen

SHIPPING_MD = """\
### Shipping & Delivery

We offer free shipping on all orders above Rs 2000. For orders below this
amount, a standard shipping fee of Rs 200 will be applied.

Orders are typically processed and shipped within 1-2 business days.
"""


def product_markdown(product: Product) -> str:
    rows = [
        ["Category", product.category],
        ["Price", format_price(product.price)],
        ["Rating", "★" * product.rating + "☆" * (5 - product.rating)],
    ]
    if product.on_sale:
        rows.insert(2, ["Was", format_price(product.original_price)])
    md = f"# {product.name}\n\n"
    md += generate_markdown_table(["Detail", "Value"], rows, ["l", "l"])
    if product.benefits:
        md += "\n\n**Benefits**\n\n"
        md += "\n".join(f"- {b}" for b in product.benefits)
    if product.image_urls:
        md += "\n\n**Images:** " + ", ".join(product.image_urls)
    return md


class ProductScreen(BaseScreen):
    """
    Product detail for the #/product/<id> route, or a not-found page when
    the id is not in the catalog.
    """

    page_title = "Product"

    def __init__(self, product_id: int) -> None:
        super().__init__()
        self.product_id = product_id
        self.product = get_product(product_id)
        self.page_title = self.product.name if self.product else "Product not found"

    def compose_body(self) -> ComposeResult:
        if self.product is None:
            yield Label("Product not found", classes="page-heading")
            yield Button("Back to Shop", id="btn-back-shop", variant="primary")
            return

        p = self.product
        yield Label(f"Home / Shop / {p.name}", id="label-breadcrumbs")
        yield Markdown(product_markdown(p), id="md-product")
        with Horizontal(classes="product-actions"):
            yield Button("Add to Cart", id="btn-addcart", variant="primary")
            yield Button("Back to Shop", id="btn-back-shop")
        with TabbedContent(id="tabs-product"):
            with TabPane("Description", id="tab-description"):
                yield Markdown(f"### Product Description\n\n{p.description}")
            with TabPane("Reviews (0)", id="tab-reviews"):
                yield Markdown("### Customer Reviews\n\nThere are no reviews yet.")
            with TabPane("Shipping & Delivery", id="tab-shipping"):
                yield Markdown(SHIPPING_MD)

    @on(Button.Pressed, "#btn-addcart")
    def handle_addcart(self) -> None:
        self.app.state.cart.add_item(self.product)
        self.notify(f"Added {self.product.name} to cart.")
        self.action_open_cart()

    @on(Button.Pressed, "#btn-back-shop")
    def handle_back(self) -> None:
        self.navigate("#/shop")
