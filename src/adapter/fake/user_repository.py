"""In-memory implementation of UserRepository for testing."""

import threading
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any

from domain.model.errors import ConflictError
from domain.model.user import PROFILE_FIELDS, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Stands in for the unique email index.
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, full_name: str) -> User | None:
        with self._lock:
            if any(u.email == email for u in self.store.values()):
                raise ConflictError("User already exists with this email")

            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)

            user = User(
                id=user_id,
                full_name=full_name,
                email=email,
                created_at=now,
                updated_at=now,
                password_hash=password_hash,
            )
            self.store[user_id] = user
            return deepcopy(user)

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        now = datetime.now(timezone.utc)
        user.last_login = now
        user.updated_at = now
        return True

    def update_profile(self, user_id: str, fields: dict[str, Any]) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        for key, value in fields.items():
            if key in PROFILE_FIELDS:
                setattr(user, key, deepcopy(value))
        user.updated_at = datetime.now(timezone.utc)
        return deepcopy(user)

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return deepcopy(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return deepcopy(user) if user else None
