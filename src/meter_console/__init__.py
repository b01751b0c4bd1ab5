from .auth_store import AuthStore, StoredSession
from .authorization import SUPERUSER_USERNAME, AuthorizationResolver, EffectivePermissions, effective_permissions
from .clients import (
    AuthClient,
    PermissionsClient,
    ReportsClient,
    RolePermissionsClient,
    RolesClient,
    UsersClient,
)
from .config import ClientConfig, ConfigError, load_config
from .dashboard import build_daily_report_orchestrator, build_dashboard_orchestrator
from .date_service import ReportingDateService
from .exceptions import (
    ApiError,
    AssignmentNotFoundError,
    AuthenticationFailedError,
    ConflictError,
    FetchCycleFailedError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RefreshFailedError,
    ServerError,
    SessionExpiredError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import ApiResponse, HttpClient
from .models import AuthSession, LoginCredentials, Permission, Role, RolePermissionLink, User
from .orchestrator import PollingFetchOrchestrator, ReportSnapshot
from .role_permissions import (
    ReconcileResult,
    RolePermissionAssignment,
    RolePermissionEditor,
    RolePermissionReconciler,
    filter_links_for_role,
    hydrate_links,
)
from .session_store import SessionStatus, SessionStore
from .sorting import SortableDataset, SortConfig, sort_rows
from .ui_errors import UserFacingError, present_error

__all__ = [
    "ApiError",
    "ApiResponse",
    "AssignmentNotFoundError",
    "AuthClient",
    "AuthSession",
    "AuthStore",
    "AuthenticationFailedError",
    "AuthorizationResolver",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "EffectivePermissions",
    "FetchCycleFailedError",
    "ForbiddenError",
    "HttpClient",
    "LoginCredentials",
    "NotFoundError",
    "Permission",
    "PermissionsClient",
    "PollingFetchOrchestrator",
    "RateLimitError",
    "ReconcileResult",
    "RefreshFailedError",
    "ReportSnapshot",
    "ReportingDateService",
    "ReportsClient",
    "Role",
    "RolePermissionAssignment",
    "RolePermissionEditor",
    "RolePermissionLink",
    "RolePermissionReconciler",
    "RolePermissionsClient",
    "RolesClient",
    "SUPERUSER_USERNAME",
    "ServerError",
    "SessionExpiredError",
    "SessionStatus",
    "SessionStore",
    "SortConfig",
    "SortableDataset",
    "StoredSession",
    "TransportError",
    "UnauthorizedError",
    "User",
    "UserFacingError",
    "UsersClient",
    "ValidationError",
    "build_daily_report_orchestrator",
    "build_dashboard_orchestrator",
    "effective_permissions",
    "filter_links_for_role",
    "hydrate_links",
    "load_config",
    "present_error",
    "sort_rows",
]
