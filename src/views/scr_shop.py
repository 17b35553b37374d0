from typing import Iterable

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Input, Label

from db.catalog import get_product, search_products
from db.models import Product
from shop.router import Route
from utils.messages import NavigateMessage
from utils.pure import format_price
from views.base_screen import BaseScreen


class ProductTable(DataTable):
    """
    Product listing. Enter opens the product page, 'a' adds the highlighted
    product to the cart.
    """

    BINDINGS = [
        Binding("enter", "select_cursor", "View Product", show=True, key_display="⏎"),
        Binding("a", "add_to_cart", "Add to Cart", show=True),
    ]

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=True, **kwargs)
        self.add_columns("Product", "Category", "Price", "Rating")

    def show(self, products: Iterable[Product]) -> None:
        self.clear()
        for p in products:
            price = format_price(p.price)
            if p.on_sale:
                price = f"{price} (was {format_price(p.original_price)}) SALE"
            self.add_row(
                p.name, p.category, price, "★" * p.rating, key=str(p.id)
            )

    def highlighted_product(self) -> Product | None:
        if self.row_count == 0:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return get_product(int(row_key.value))

    def action_add_to_cart(self) -> None:
        product = self.highlighted_product()
        if product is None:
            return
        self.app.state.cart.add_item(product)
        self.notify(f"Added {product.name} to cart.")

    @on(DataTable.RowSelected)
    def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.post_message(NavigateMessage(Route.product(int(event.row_key.value))))


class ShopScreen(BaseScreen):
    """
    Catalog with a live search over product name and category.
    """

    page_title = "Shop"

    def compose_body(self) -> ComposeResult:
        yield Label("Our Products", classes="page-heading")
        yield Input(
            id="input-search",
            placeholder="Search products...",
            value=self.app.state.search_query,
        )
        yield ProductTable(id="table-products")
        yield Label(
            "No Products Found. Try adjusting your search terms.",
            id="label-no-results",
            classes="hidden",
        )

    def on_mount(self) -> None:
        self.update_results()
        self.query_one("#input-search", Input).focus()

    @on(Input.Changed, "#input-search")
    def handle_search(self, event: Input.Changed) -> None:
        self.app.state.search_query = event.value
        self.update_results()

    def update_results(self) -> None:
        products = search_products(self.app.state.search_query)
        self.query_one(ProductTable).show(products)
        self.query_one("#label-no-results").set_class(bool(products), "hidden")
