import os
import sys
import unittest

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from db.models import Product  # noqa: E402
from shop.cart import Cart, CartManager  # noqa: E402


def make_product(pid: int, price: float) -> Product:
    return Product(
        id=pid,
        name=f"Product {pid}",
        category="Test",
        price=price,
        rating=4,
        image_url="",
        description="",
    )


class CartTestCase(unittest.TestCase):
    def setUp(self):
        self.p1 = make_product(1, 500)
        self.p2 = make_product(2, 1200)
        self.manager = CartManager()

    def test_empty_cart(self):
        self.assertTrue(self.manager.cart.is_empty)
        self.assertEqual(self.manager.item_count, 0)
        self.assertEqual(self.manager.subtotal, 0)

    def test_subtotal_and_item_count(self):
        self.manager.add_item(self.p1)
        self.manager.add_item(self.p1)
        self.manager.add_item(self.p2)

        self.assertEqual(self.manager.subtotal, 2200)
        self.assertEqual(self.manager.item_count, 3)
        self.assertEqual(len(self.manager.cart), 2)

    def test_add_keeps_one_line_per_product_in_insertion_order(self):
        self.manager.add_item(self.p2)
        self.manager.add_item(self.p1)
        self.manager.add_item(self.p2)

        self.assertEqual([i.product_id for i in self.manager.cart], [2, 1])
        self.assertEqual(self.manager.cart.get(2).quantity, 2)

    def test_set_quantity_zero_is_remove(self):
        self.manager.add_item(self.p1)
        self.manager.add_item(self.p2)
        removed = CartManager(self.manager.cart)

        self.manager.set_quantity(1, 0)
        removed.remove_item(1)

        self.assertEqual(self.manager.cart, removed.cart)
        self.assertIsNone(self.manager.cart.get(1))
        self.assertEqual(self.manager.item_count, 1)
        self.assertEqual(self.manager.subtotal, 1200)

    def test_set_quantity_negative_removes(self):
        self.manager.add_item(self.p1)
        self.manager.set_quantity(1, -3)
        self.assertTrue(self.manager.cart.is_empty)

    def test_set_quantity_exact(self):
        self.manager.add_item(self.p1)
        self.manager.set_quantity(1, 5)
        self.assertEqual(self.manager.item_count, 5)
        self.assertEqual(self.manager.subtotal, 2500)

    def test_unknown_ids_are_no_ops(self):
        self.manager.add_item(self.p1)
        before = self.manager.cart
        seen = []
        self.manager.on_change(seen.append)

        self.assertIs(self.manager.remove_item(99), before)
        self.assertIs(self.manager.set_quantity(99, 3), before)
        self.assertEqual(seen, [])

    def test_mutations_return_new_snapshots(self):
        first = self.manager.add_item(self.p1)
        second = self.manager.add_item(self.p1)

        self.assertIsNot(first, second)
        self.assertEqual(first.get(1).quantity, 1)
        self.assertEqual(second.get(1).quantity, 2)

    def test_clear_notifies_listeners(self):
        seen = []
        self.manager.on_change(seen.append)
        self.manager.add_item(self.p1)
        self.manager.clear()

        self.assertEqual(len(seen), 2)
        self.assertEqual(seen[-1], Cart())
        self.assertTrue(self.manager.cart.is_empty)


if __name__ == "__main__":
    unittest.main()
