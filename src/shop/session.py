from __future__ import annotations

import json
from typing import List, Optional, Protocol, Tuple

import aiosqlite

from db import storage
from db.models import Identity, Session
from utils.logger import get_logger

_logger = get_logger(__name__)

# failures the persisted store can raise on read or write
STORE_ERRORS = (aiosqlite.Error, OSError)

USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"


class IdentityRepository(Protocol):
    """Persistence boundary for the user registry and the active session."""

    async def load_registry(self) -> List[Identity]: ...

    async def save_registry(self, identities: List[Identity]) -> None: ...

    async def load_session(self) -> Optional[Session]: ...

    async def save_session(self, session: Optional[Session]) -> None: ...


class StorageIdentityRepository:
    """
    IdentityRepository over the persisted key-value store.

    Reads are best effort: unreadable or malformed values are logged and
    treated as empty, so a corrupted store never stops the app from starting.
    """

    def __init__(
        self, users_key: str = USERS_KEY, session_key: str = CURRENT_USER_KEY
    ) -> None:
        self.users_key = users_key
        self.session_key = session_key

    async def _read_json(self, key: str):
        try:
            raw = await storage.get_item(key)
        except STORE_ERRORS:
            _logger.exception(f"Failed to read '{key}' from store")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            _logger.warning(f"Failed to parse '{key}' from store: {e}")
            return None

    async def load_registry(self) -> List[Identity]:
        data = await self._read_json(self.users_key)
        if data is None:
            return []
        try:
            return [Identity.from_dict(entry) for entry in data]
        except (TypeError, KeyError, AttributeError) as e:
            _logger.warning(f"Ignoring malformed user registry: {e!r}")
            return []

    async def save_registry(self, identities: List[Identity]) -> None:
        payload = json.dumps([i.to_dict() for i in identities])
        await storage.set_item(self.users_key, payload)

    async def load_session(self) -> Optional[Session]:
        data = await self._read_json(self.session_key)
        if data is None:
            return None
        try:
            return Session.from_dict(data)
        except (TypeError, KeyError, AttributeError) as e:
            _logger.warning(f"Ignoring malformed session record: {e!r}")
            return None

    async def save_session(self, session: Optional[Session]) -> None:
        if session is None:
            await storage.remove_item(self.session_key)
        else:
            await storage.set_item(self.session_key, json.dumps(session.to_dict()))


class SessionManager:
    """
    Registered identities plus the single active session.

    The session is either anonymous (current is None) or authenticated.
    Failed login or registration never changes it. Writes go to the
    repository first; memory is only updated once they succeed, and a
    failed write sets store_failed instead of raising.
    """

    def __init__(self, repository: IdentityRepository) -> None:
        self._repository = repository
        self._identities: List[Identity] = []
        self._current: Optional[Session] = None
        self.store_failed = False  # set by the last register/login/logout

    @property
    def current(self) -> Optional[Session]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def registry(self) -> Tuple[Identity, ...]:
        return tuple(self._identities)

    async def load(self) -> None:
        """Restore the registry and any persisted session."""
        self._identities = await self._repository.load_registry()
        self._current = await self._repository.load_session()
        _logger.info(
            f"Loaded {len(self._identities)} registered user(s); "
            f"session: {self._current.email if self._current else 'anonymous'}"
        )

    def email_taken(self, email: str) -> bool:
        return any(i.email == email for i in self._identities)

    def find_identity(self, email: str, password: str) -> Optional[Identity]:
        """Exact, case-sensitive match on both email and password."""
        for identity in self._identities:
            if identity.email == email and identity.password == password:
                return identity
        return None

    async def register(self, name: str, email: str, password: str) -> bool:
        """
        Create an identity and log it in. Returns False if the email is
        already registered or the store could not be written.
        """
        self.store_failed = False
        if self.email_taken(email):
            _logger.info(f"Registration rejected, email exists: {email}")
            return False
        identities = [*self._identities, Identity(name, email, password)]
        try:
            await self._repository.save_registry(identities)
        except STORE_ERRORS:
            _logger.exception(f"Failed to save registration for {email}")
            self.store_failed = True
            return False
        self._identities = identities
        _logger.info(f"Registered {email}")
        return await self.login(email, password)

    async def login(self, email: str, password: str) -> bool:
        self.store_failed = False
        identity = self.find_identity(email, password)
        if identity is None:
            _logger.info(f"Login failed for {email}")
            return False
        session = Session.of(identity)
        try:
            await self._repository.save_session(session)
        except STORE_ERRORS:
            _logger.exception(f"Failed to save session for {email}")
            self.store_failed = True
            return False
        self._current = session
        _logger.info(f"Logged in {email}")
        return True

    async def logout(self) -> bool:
        """End the session. Returns False only if the store could not be written."""
        self.store_failed = False
        if self._current is None:
            return True
        email = self._current.email
        try:
            await self._repository.save_session(None)
        except STORE_ERRORS:
            _logger.exception(f"Failed to clear session for {email}")
            self.store_failed = True
            return False
        self._current = None
        _logger.info(f"Logged out {email}")
        return True
