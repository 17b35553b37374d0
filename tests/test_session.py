import os
import sqlite3
import sys
import unittest
from typing import List, Optional

# Ensure project src/ is on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(ROOT, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from db.models import Identity, Session  # noqa: E402
from shop.session import SessionManager  # noqa: E402


class FakeRepository:
    """In-memory IdentityRepository."""

    def __init__(self, identities=None, session=None):
        self.identities: List[Identity] = list(identities or [])
        self.session: Optional[Session] = session
        self.registry_saves = 0

    async def load_registry(self) -> List[Identity]:
        return list(self.identities)

    async def save_registry(self, identities: List[Identity]) -> None:
        self.registry_saves += 1
        self.identities = list(identities)

    async def load_session(self) -> Optional[Session]:
        return self.session

    async def save_session(self, session: Optional[Session]) -> None:
        self.session = session


class FailingRepository(FakeRepository):
    """Reads work, every write fails."""

    async def save_registry(self, identities: List[Identity]) -> None:
        raise sqlite3.OperationalError("database is locked")

    async def save_session(self, session: Optional[Session]) -> None:
        raise sqlite3.OperationalError("database is locked")


class SessionManagerTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.repo = FakeRepository()
        self.manager = SessionManager(self.repo)
        await self.manager.load()

    async def test_starts_anonymous(self):
        self.assertIsNone(self.manager.current)
        self.assertFalse(self.manager.is_authenticated)

    async def test_register_logs_in_and_persists(self):
        ok = await self.manager.register("Ali", "ali@example.com", "pw")

        self.assertTrue(ok)
        self.assertEqual(self.manager.current, Session("Ali", "ali@example.com"))
        self.assertEqual(self.repo.identities, [Identity("Ali", "ali@example.com", "pw")])
        self.assertEqual(self.repo.session, Session("Ali", "ali@example.com"))

    async def test_duplicate_email_rejected(self):
        await self.manager.register("Ali", "ali@example.com", "pw")
        await self.manager.logout()

        ok = await self.manager.register("Other", "ali@example.com", "x")

        self.assertFalse(ok)
        self.assertIsNone(self.manager.current)
        self.assertEqual(len(self.manager.registry), 1)
        self.assertEqual(self.repo.registry_saves, 1)

    async def test_wrong_password_keeps_session(self):
        await self.manager.register("Ali", "ali@example.com", "pw")

        self.assertFalse(await self.manager.login("ali@example.com", "nope"))
        self.assertEqual(self.manager.current.email, "ali@example.com")

        await self.manager.logout()
        self.assertFalse(await self.manager.login("ali@example.com", "nope"))
        self.assertIsNone(self.manager.current)

    async def test_login_round_trip(self):
        await self.manager.register("Ali", "ali@example.com", "pw")
        await self.manager.logout()

        self.assertTrue(await self.manager.login("ali@example.com", "pw"))
        self.assertEqual(self.manager.current.name, "Ali")

    async def test_login_is_exact_match(self):
        await self.manager.register("Ali", "ali@example.com", "pw")
        await self.manager.logout()

        self.assertFalse(await self.manager.login("ALI@example.com", "pw"))
        self.assertFalse(await self.manager.login("ali@example.com", "PW"))

    async def test_logout(self):
        await self.manager.register("Ali", "ali@example.com", "pw")
        await self.manager.logout()

        self.assertIsNone(self.manager.current)
        self.assertIsNone(self.repo.session)

    async def test_logout_when_anonymous_is_no_op(self):
        await self.manager.logout()
        self.assertIsNone(self.manager.current)

    async def test_load_restores_session(self):
        repo = FakeRepository(
            identities=[Identity("Sara", "sara@example.com", "pw")],
            session=Session("Sara", "sara@example.com"),
        )
        manager = SessionManager(repo)
        await manager.load()

        self.assertTrue(manager.is_authenticated)
        self.assertTrue(manager.email_taken("sara@example.com"))
        self.assertFalse(manager.email_taken("ali@example.com"))


class FailedWriteTestCase(unittest.IsolatedAsyncioTestCase):
    async def test_register_keeps_registry_unchanged(self):
        manager = SessionManager(FailingRepository())
        await manager.load()

        self.assertFalse(await manager.register("A", "a@x", "pw"))
        self.assertTrue(manager.store_failed)
        self.assertEqual(manager.registry, ())
        self.assertIsNone(manager.current)

    async def test_login_stays_anonymous(self):
        manager = SessionManager(
            FailingRepository(identities=[Identity("A", "a@x", "pw")])
        )
        await manager.load()

        self.assertFalse(await manager.login("a@x", "pw"))
        self.assertTrue(manager.store_failed)
        self.assertIsNone(manager.current)

    async def test_logout_keeps_session(self):
        manager = SessionManager(
            FailingRepository(
                identities=[Identity("A", "a@x", "pw")], session=Session("A", "a@x")
            )
        )
        await manager.load()

        self.assertFalse(await manager.logout())
        self.assertEqual(manager.current, Session("A", "a@x"))

    async def test_wrong_password_is_not_a_store_failure(self):
        manager = SessionManager(FailingRepository())
        await manager.load()

        self.assertFalse(await manager.login("a@x", "pw"))
        self.assertFalse(manager.store_failed)


if __name__ == "__main__":
    unittest.main()
