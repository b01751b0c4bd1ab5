from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .clients.permissions import PermissionsClient
from .clients.role_permissions import RolePermissionsClient
from .exceptions import AssignmentNotFoundError
from .logger import log_action
from .models import Permission, RolePermissionLink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RolePermissionAssignment:
    assigned: list[Permission]
    all: list[Permission]


@dataclass(frozen=True)
class ReconcileResult:
    added: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def filter_links_for_role(links: Iterable[RolePermissionLink], rol_id: int) -> list[RolePermissionLink]:
    target = int(rol_id)
    return [link for link in links if int(link.rol_id) == target]


def find_link(links: Iterable[RolePermissionLink], rol_id: int, permission_id: int) -> RolePermissionLink | None:
    target = int(permission_id)
    for link in filter_links_for_role(links, rol_id):
        if int(link.permission_id) == target:
            return link
    return None


def hydrate_links(links: Iterable[RolePermissionLink], catalog: Iterable[Permission]) -> list[Permission]:
    """Resolve each link to a full permission record.

    Links whose permission is missing from the catalog are kept as a bare
    ``Permission`` carrying only the id.
    """
    by_id = {int(permission.permission_id): permission for permission in catalog}
    hydrated: list[Permission] = []
    for link in links:
        if link.permission is not None and link.permission.is_hydrated:
            hydrated.append(link.permission)
            continue
        match = by_id.get(int(link.permission_id))
        hydrated.append(match if match is not None else Permission(permission_id=int(link.permission_id)))
    return hydrated


class RolePermissionReconciler:
    """Assigns and revokes permissions on a role through the link table.

    The backend can only list the whole table and delete by link id, so every
    operation reads the table fresh before acting. Nothing is cached.
    """

    def __init__(self, permissions_client: PermissionsClient, links_client: RolePermissionsClient) -> None:
        self.permissions_client = permissions_client
        self.links_client = links_client

    async def get_assigned_and_available(self, rol_id: int) -> RolePermissionAssignment:
        catalog, links = await asyncio.gather(
            self.permissions_client.find_all(),
            self.links_client.list_links(),
        )
        assigned = hydrate_links(filter_links_for_role(links, rol_id), catalog)
        return RolePermissionAssignment(assigned=assigned, all=list(catalog))

    async def assign(self, rol_id: int, permission_id: int) -> bool:
        links = await self.links_client.list_links()
        if find_link(links, rol_id, permission_id) is not None:
            logger.info("permission_already_assigned", extra={"rol_id": rol_id, "permission_id": permission_id})
            return False
        await self.links_client.create_link(rol_id, permission_id)
        log_action(logger, "roles", "assign_permission", "success", rol_id=rol_id, permission_id=permission_id)
        return True

    async def unassign(self, rol_id: int, permission_id: int) -> int:
        links = await self.links_client.list_links()
        link = find_link(links, rol_id, permission_id)
        if link is None:
            log_action(logger, "roles", "unassign_permission", "not_found", rol_id=rol_id, permission_id=permission_id)
            raise AssignmentNotFoundError(rol_id, permission_id)
        await self.links_client.delete_link(link.id)
        log_action(
            logger, "roles", "unassign_permission", "success", rol_id=rol_id, permission_id=permission_id, link_id=link.id
        )
        return link.id

    async def reconcile(self, rol_id: int, desired_permission_ids: Iterable[int]) -> ReconcileResult:
        desired = {int(value) for value in desired_permission_ids}
        current = {int(link.permission_id): link for link in filter_links_for_role(await self.links_client.list_links(), rol_id)}
        to_add = sorted(desired - current.keys())
        to_remove = sorted(current.keys() - desired)
        for permission_id in to_add:
            await self.links_client.create_link(rol_id, permission_id)
        for permission_id in to_remove:
            await self.links_client.delete_link(current[permission_id].id)
        log_action(logger, "roles", "reconcile_permissions", "success", rol_id=rol_id, added=to_add, removed=to_remove)
        return ReconcileResult(added=to_add, removed=to_remove)


class RolePermissionEditor:
    """Presentation state for the role permission screen."""

    def __init__(self, reconciler: RolePermissionReconciler, rol_id: int) -> None:
        self.reconciler = reconciler
        self.rol_id = rol_id
        self.assigned: list[Permission] = []
        self.all: list[Permission] = []
        self.loading = False

    def is_assigned(self, permission_id: int) -> bool:
        target = int(permission_id)
        return any(int(permission.permission_id) == target for permission in self.assigned)

    async def load(self) -> RolePermissionAssignment:
        self.loading = True
        try:
            result = await self.reconciler.get_assigned_and_available(self.rol_id)
        finally:
            self.loading = False
        self.assigned, self.all = result.assigned, result.all
        return result

    async def assign(self, permission_id: int) -> bool:
        if self.is_assigned(permission_id):
            return False
        created = await self.reconciler.assign(self.rol_id, permission_id)
        await self.load()
        return created

    async def unassign(self, permission_id: int) -> int:
        link_id = await self.reconciler.unassign(self.rol_id, permission_id)
        await self.load()
        return link_id

    async def toggle(self, permission_id: int) -> bool:
        """Flip the assignment; returns whether the permission is now assigned."""
        if self.is_assigned(permission_id):
            await self.unassign(permission_id)
        else:
            await self.assign(permission_id)
        return self.is_assigned(permission_id)
