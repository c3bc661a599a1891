from __future__ import annotations

import math
from dataclasses import replace
from typing import Callable

from ..common.identity import new_id
from ..common.validators import is_blank
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..snapshot.model import Snapshot
from ..storage.repository import SnapshotStore
from .model import CreditPackage


class PackageService:
    """Use case: credit package catalog (admin)."""

    def __init__(self, store: SnapshotStore, *, id_factory: Callable[[str], str] = new_id):
        self._store = store
        self._new_id = id_factory

    def list_all(self) -> tuple[CreditPackage, ...]:
        return self._store.load().packages

    def create(self, *, current_role: Role, name: str, credits: int, price: float) -> Snapshot:
        self._require_admin(current_role)
        self._validate(name, credits, price)

        snapshot = self._store.load()
        package = CreditPackage(id=self._new_id("p"), name=name.strip(), credits=int(credits), price=price)
        return self._store.save(replace(snapshot, packages=snapshot.packages + (package,)))

    def update(self, *, current_role: Role, package_id: str, name: str, credits: int, price: float) -> Snapshot:
        self._require_admin(current_role)
        self._validate(name, credits, price)

        snapshot = self._store.load()
        if not snapshot.find_package(package_id):
            raise NotFoundError("Package not found")

        updated = CreditPackage(id=package_id, name=name.strip(), credits=int(credits), price=price)
        return self._store.save(
            replace(snapshot, packages=tuple(updated if p.id == package_id else p for p in snapshot.packages))
        )

    def delete(self, *, current_role: Role, package_id: str) -> Snapshot:
        self._require_admin(current_role)

        snapshot = self._store.load()
        if not snapshot.find_package(package_id):
            raise NotFoundError("Package not found")
        return self._store.save(replace(snapshot, packages=tuple(p for p in snapshot.packages if p.id != package_id)))

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Permission denied")

    @staticmethod
    def _validate(name: str, credits, price) -> None:
        if is_blank(name):
            raise ValidationError("Invalid package details.")
        if any(isinstance(v, bool) or not isinstance(v, (int, float)) for v in (credits, price)):
            raise ValidationError("Invalid package details.")
        if not math.isfinite(price) or not math.isfinite(credits) or credits != int(credits):
            raise ValidationError("Invalid package details.")
        if credits < 0 or price < 0:
            raise ValidationError("Invalid package details.")
