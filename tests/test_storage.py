import os
import sys
import tempfile
import unittest
from unittest import mock

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import aiosqlite  # noqa: E402

from db import database as db_database  # noqa: E402
from db import storage  # noqa: E402
from db.models import Identity, Session  # noqa: E402
from shop.session import (  # noqa: E402
    CURRENT_USER_KEY,
    USERS_KEY,
    SessionManager,
    StorageIdentityRepository,
)


class StorageTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Point the DB to a temporary file and force re-initialization
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.temp_dir.name, "nested", "test.sqlite")
        db_database.DB_PATH = self.db_path
        db_database._initialized = False

    def tearDown(self):
        self.temp_dir.cleanup()

    # ---------- key-value store ----------

    async def test_creates_store_on_first_use(self):
        self.assertIsNone(await storage.get_item("missing"))
        self.assertTrue(os.path.exists(self.db_path))

    async def test_set_get_overwrite_remove(self):
        await storage.set_item("k", "one")
        await storage.set_item("k", "two")
        self.assertEqual(await storage.get_item("k"), "two")

        await storage.remove_item("k")
        self.assertIsNone(await storage.get_item("k"))
        # removing again is fine
        await storage.remove_item("k")

    async def test_all_items_and_clear(self):
        await storage.set_item("b", "2")
        await storage.set_item("a", "1")
        self.assertEqual(await storage.all_items(), {"a": "1", "b": "2"})

        await storage.clear()
        self.assertEqual(await storage.all_items(), {})

    # ---------- identity repository ----------

    async def test_registry_and_session_persist(self):
        manager = SessionManager(StorageIdentityRepository())
        await manager.load()
        await manager.register("Ali", "ali@example.com", "pw")

        restored = SessionManager(StorageIdentityRepository())
        await restored.load()
        self.assertEqual(restored.registry, (Identity("Ali", "ali@example.com", "pw"),))
        self.assertEqual(restored.current, Session("Ali", "ali@example.com"))

    async def test_session_record_has_no_password(self):
        manager = SessionManager(StorageIdentityRepository())
        await manager.load()
        await manager.register("Ali", "ali@example.com", "secret")

        raw = await storage.get_item(CURRENT_USER_KEY)
        self.assertNotIn("secret", raw)

    async def test_logout_removes_current_user(self):
        manager = SessionManager(StorageIdentityRepository())
        await manager.load()
        await manager.register("Ali", "ali@example.com", "pw")
        await manager.logout()

        self.assertIsNone(await storage.get_item(CURRENT_USER_KEY))
        self.assertIsNotNone(await storage.get_item(USERS_KEY))

    async def test_corrupted_users_loads_empty(self):
        await storage.set_item(USERS_KEY, "{not json")
        repo = StorageIdentityRepository()
        self.assertEqual(await repo.load_registry(), [])

    async def test_malformed_records_load_empty(self):
        await storage.set_item(USERS_KEY, '[{"name": "no email"}]')
        await storage.set_item(CURRENT_USER_KEY, '"just a string"')
        manager = SessionManager(StorageIdentityRepository())
        await manager.load()

        self.assertEqual(manager.registry, ())
        self.assertIsNone(manager.current)

    # ---------- failure paths ----------

    async def test_unreachable_store_loads_empty(self):
        # a regular file where the database directory should be
        blocker = os.path.join(self.temp_dir.name, "blocker")
        with open(blocker, "w") as f:
            f.write("")
        db_database.DB_PATH = os.path.join(blocker, "db.sqlite")

        manager = SessionManager(StorageIdentityRepository())
        await manager.load()

        self.assertEqual(manager.registry, ())
        self.assertIsNone(manager.current)

    async def test_unreachable_store_rejects_register_without_raising(self):
        manager = SessionManager(StorageIdentityRepository())
        await manager.load()
        blocker = os.path.join(self.temp_dir.name, "blocker")
        with open(blocker, "w") as f:
            f.write("")
        db_database.DB_PATH = os.path.join(blocker, "db.sqlite")

        self.assertFalse(await manager.register("Ali", "ali@example.com", "pw"))
        self.assertTrue(manager.store_failed)
        self.assertEqual(manager.registry, ())
        self.assertIsNone(manager.current)

    async def test_connection_closed_when_init_fails(self):
        closed = []
        real_close = aiosqlite.Connection.close

        async def tracking_close(conn):
            closed.append(conn)
            await real_close(conn)

        failing_check = mock.patch.object(
            db_database, "_table_exists", side_effect=aiosqlite.OperationalError("boom")
        )
        with mock.patch.object(aiosqlite.Connection, "close", tracking_close), failing_check:
            with self.assertRaises(aiosqlite.OperationalError):
                async with db_database.connect():
                    pass

        self.assertEqual(len(closed), 1)
        self.assertFalse(db_database._initialized)


if __name__ == "__main__":
    unittest.main()
