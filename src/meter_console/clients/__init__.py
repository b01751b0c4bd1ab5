from .auth import AuthClient
from .base import BaseClient
from .permissions import PermissionsClient
from .reports import ReportsClient
from .role_permissions import RolePermissionsClient
from .roles import RolesClient
from .users import UsersClient

__all__ = [
    "AuthClient",
    "BaseClient",
    "PermissionsClient",
    "ReportsClient",
    "RolePermissionsClient",
    "RolesClient",
    "UsersClient",
]
