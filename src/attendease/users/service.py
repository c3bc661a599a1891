from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from ..common.identity import new_id
from ..common.validators import is_blank, require_non_negative
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NoMatchingRecordError,
    NotFoundError,
    ValidationError,
)
from ..guards.identity import IdentityChangeGuard
from ..snapshot.model import Snapshot
from ..storage.repository import SnapshotStore
from .credentials import generate_random_password
from .model import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserForm:
    """Fields an admin edits on a user account."""

    name: str
    email: str
    phone_number: str
    role: Role = Role.TRAINEE
    password: str = ""
    profile_image: Optional[str] = None
    credits: int = 0


@dataclass(frozen=True)
class ProfileForm:
    """Fields a trainer or trainee edits on their own account."""

    name: str
    email: str
    phone_number: str
    password: str
    profile_image: Optional[str] = None


def _find_by_email(users: Sequence[User], email: str) -> Optional[User]:
    wanted = (email or "").strip().lower()
    return next((u for u in users if u.email.lower() == wanted), None)


class AuthService:
    """Use case: login and password-reset eligibility.

    Credentials are compared as stored; hashing is not part of this system.
    """

    def __init__(self, store: SnapshotStore):
        self._store = store

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = _find_by_email(self._store.load().users, email)
        if not user or user.password != password:
            return None
        return user

    def login(self, email: str, password: str) -> User:
        user = self.authenticate(email, password)
        if not user:
            raise AuthenticationError("Invalid email or password")
        logger.info("User %s logged in", user.id, extra={"role": user.role.value})
        return user

    def can_reset(self, email: str, phone_number: str) -> bool:
        user = _find_by_email(self._store.load().users, email)
        return bool(user) and user.phone_number == phone_number

    def request_reset(self, email: str, phone_number: str) -> None:
        if not self.can_reset(email, phone_number):
            raise NoMatchingRecordError("No account matches this email and phone number")


class UserService:
    """Use case: manage users (admin) and self profile edits."""

    def __init__(self, store: SnapshotStore, *, id_factory: Callable[[str], str] = new_id):
        self._store = store
        self._new_id = id_factory

    def list_users(self) -> tuple[User, ...]:
        return self._store.load().users

    def get(self, user_id: str) -> User:
        return self._require_user(self._store.load(), user_id)

    def create_user(self, *, current_role: Role, form: UserForm) -> Snapshot:
        self._require_admin(current_role)
        self._require_contact_fields(form.name, form.email, form.phone_number)
        require_non_negative(form.credits, "Credits")

        snapshot = self._store.load()
        user = User(
            id=self._new_id("u"),
            email=form.email.strip(),
            name=form.name.strip(),
            phone_number=form.phone_number.strip(),
            password=form.password or generate_random_password(),
            role=form.role,
            credits=int(form.credits),
            profile_image=form.profile_image or None,
        )
        logger.info("Created %s account %s", user.role.value, user.id)
        return self._store.save(replace(snapshot, users=snapshot.users + (user,)))

    def update_user(self, *, current_role: Role, user_id: str, form: UserForm, guard: IdentityChangeGuard) -> Snapshot:
        """Admin edit. ``credits`` on the form is ignored: only the ledger moves balances."""
        self._require_admin(current_role)
        self._require_contact_fields(form.name, form.email, form.phone_number)

        snapshot = self._store.load()
        user = self._require_user(snapshot, user_id)
        guard.confirm_save(form.email)

        updated = replace(
            user,
            name=form.name,
            email=form.email,
            phone_number=form.phone_number,
            role=form.role,
            password=form.password or user.password,
            profile_image=form.profile_image or None,
        )
        return self._store.save(snapshot.with_user(updated))

    def update_profile(self, *, user_id: str, form: ProfileForm, guard: IdentityChangeGuard) -> Snapshot:
        snapshot = self._store.load()
        user = self._require_user(snapshot, user_id)
        guard.confirm_save(form.email)

        updated = replace(
            user,
            name=form.name,
            email=form.email,
            phone_number=form.phone_number,
            password=form.password,
            profile_image=form.profile_image or None,
        )
        logger.info("Profile of %s updated", user.id)
        return self._store.save(snapshot.with_user(updated))

    def delete_user(self, *, current_role: Role, user_id: str) -> Snapshot:
        # Attendance, sessions and logs keep their references (orphan tolerant).
        self._require_admin(current_role)

        snapshot = self._store.load()
        self._require_user(snapshot, user_id)
        logger.info("Deleted user %s", user_id)
        return self._store.save(replace(snapshot, users=tuple(u for u in snapshot.users if u.id != user_id)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

    @staticmethod
    def _require_contact_fields(name: str, email: str, phone_number: str) -> None:
        if is_blank(name) or is_blank(email) or is_blank(phone_number):
            raise ValidationError("Name, Email, and Phone are required.")

    @staticmethod
    def _require_user(snapshot: Snapshot, user_id: str) -> User:
        user = snapshot.find_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
