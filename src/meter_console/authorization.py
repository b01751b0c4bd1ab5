from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .models import Permission, User

SUPERUSER_USERNAME = "root"


@dataclass(frozen=True)
class EffectivePermissions:
    """Permission set resolved for one user snapshot.

    A universal set allows every permission name, including names the catalog
    has never heard of. It is always truthy, but iterating it or taking its
    ``len`` only covers explicitly granted names, which is none; use
    ``allows`` or ``in`` for checks.
    """

    permissions: tuple[Permission, ...] = ()
    universal: bool = False
    names: frozenset[str] = field(init=False)

    def __post_init__(self) -> None:
        names = frozenset(p.permission_name for p in self.permissions if p.permission_name)
        object.__setattr__(self, "names", names)

    @classmethod
    def everything(cls) -> "EffectivePermissions":
        return cls(universal=True)

    @property
    def is_universal(self) -> bool:
        return self.universal

    @property
    def permission_ids(self) -> frozenset[int]:
        return frozenset(p.permission_id for p in self.permissions)

    def allows(self, permission_name: str) -> bool:
        return self.universal or permission_name in self.names

    def allows_any(self, *permission_names: str) -> bool:
        return any(self.allows(name) for name in permission_names)

    def allows_all(self, *permission_names: str) -> bool:
        return all(self.allows(name) for name in permission_names)

    def __contains__(self, permission_name: object) -> bool:
        return isinstance(permission_name, str) and self.allows(permission_name)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names))

    def __len__(self) -> int:
        return len(self.names)

    def __bool__(self) -> bool:
        return self.universal or bool(self.names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EffectivePermissions):
            return NotImplemented
        if self.universal or other.universal:
            return self.universal == other.universal
        return self.permission_ids == other.permission_ids and self.names == other.names

    def __hash__(self) -> int:
        return hash((self.universal, self.permission_ids, self.names))


class AuthorizationResolver:
    def __init__(self, superuser_username: str = SUPERUSER_USERNAME) -> None:
        self.superuser_username = superuser_username

    def is_superuser(self, user: User | None) -> bool:
        return user is not None and user.username == self.superuser_username

    def effective_permissions(self, user: User | None) -> EffectivePermissions:
        if user is None:
            return EffectivePermissions()
        if self.is_superuser(user):
            return EffectivePermissions.everything()
        sources: list[Iterable[Permission]] = [user.permissions]
        sources.extend(role.permissions or [] for role in user.roles)
        return EffectivePermissions(permissions=_dedupe(sources))


def _dedupe(sources: Iterable[Iterable[Permission]]) -> tuple[Permission, ...]:
    by_id: dict[int, Permission] = {}
    for source in sources:
        for permission in source:
            known = by_id.get(permission.permission_id)
            # prefer a fully populated record over a bare id
            if known is None or (not known.is_hydrated and permission.is_hydrated):
                by_id[permission.permission_id] = permission
    return tuple(by_id[key] for key in sorted(by_id))


_default_resolver = AuthorizationResolver()


def effective_permissions(user: User | None) -> EffectivePermissions:
    return _default_resolver.effective_permissions(user)
