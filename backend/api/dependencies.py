"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Every service shares one JsonDocumentStore, so the per-document locks
cover all writers in the process.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.admin.interfaces import IAdminService, IAdminSessionGuard
    from modules.admin.repository import AdminRepository
    from modules.auth.interfaces import IPlexClient, ISessionBroker
    from modules.fulfillment.interfaces import IFulfillmentDispatcher
    from modules.permissions.interfaces import IPermissionService
    from modules.requests.interfaces import IRequestLedger
    from shared.store import JsonDocumentStore


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear all cached services for
    testing.
    """

    def __init__(self) -> None:
        self._store: "JsonDocumentStore | None" = None
        self._permissions: "IPermissionService | None" = None
        self._dispatcher: "IFulfillmentDispatcher | None" = None
        self._ledger: "IRequestLedger | None" = None
        self._plex: "IPlexClient | None" = None
        self._sessions: "ISessionBroker | None" = None
        self._admin_accounts: "AdminRepository | None" = None
        self._admin_guard: "IAdminSessionGuard | None" = None
        self._admins: "IAdminService | None" = None

    @property
    def store(self) -> "JsonDocumentStore":
        """Get the document store instance."""
        if self._store is None:
            from shared.store import JsonDocumentStore
            self._store = JsonDocumentStore(get_settings().data_dir)
        return self._store

    @property
    def permissions(self) -> "IPermissionService":
        """Get the permission service instance."""
        if self._permissions is None:
            from modules.permissions.repository import PermissionRepository
            from modules.permissions.service import PermissionService
            self._permissions = PermissionService(PermissionRepository(self.store))
        return self._permissions

    @property
    def dispatcher(self) -> "IFulfillmentDispatcher":
        """Get the fulfillment dispatcher instance."""
        if self._dispatcher is None:
            from modules.fulfillment.service import ArrClient, FulfillmentDispatcher
            self._dispatcher = FulfillmentDispatcher(ArrClient.from_settings(get_settings()))
        return self._dispatcher

    @property
    def ledger(self) -> "IRequestLedger":
        """Get the request ledger instance."""
        if self._ledger is None:
            from modules.requests.repository import RequestRepository
            from modules.requests.service import RequestLedger
            self._ledger = RequestLedger(
                repository=RequestRepository(self.store),
                permissions=self.permissions,
                dispatcher=self.dispatcher,
            )
        return self._ledger

    @property
    def plex(self) -> "IPlexClient":
        """Get the Plex client instance."""
        if self._plex is None:
            from modules.auth.plex import PlexClient
            self._plex = PlexClient(get_settings().plex)
        return self._plex

    @property
    def sessions(self) -> "ISessionBroker":
        """Get the Plex session broker instance."""
        if self._sessions is None:
            from modules.auth.repository import UserRepository
            from modules.auth.service import PlexSessionBroker
            self._sessions = PlexSessionBroker(
                plex=self.plex,
                users=UserRepository(self.store),
                default_background=get_settings().default_background,
            )
        return self._sessions

    @property
    def admin_accounts(self) -> "AdminRepository":
        """Get the admin account repository instance."""
        if self._admin_accounts is None:
            from modules.admin.repository import AdminRepository
            self._admin_accounts = AdminRepository(self.store)
        return self._admin_accounts

    @property
    def admin_guard(self) -> "IAdminSessionGuard":
        """Get the admin session guard instance."""
        if self._admin_guard is None:
            from modules.admin.sessions import AdminSessionGuard
            settings = get_settings()
            self._admin_guard = AdminSessionGuard(
                self.admin_accounts,
                secret=settings.admin_session_secret,
                ttl=timedelta(minutes=settings.admin_session_ttl_minutes),
            )
        return self._admin_guard

    @property
    def admins(self) -> "IAdminService":
        """Get the admin service instance."""
        if self._admins is None:
            from modules.admin.service import AdminService
            self._admins = AdminService(self.admin_accounts, self.admin_guard)
        return self._admins

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self.__init__()


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_permission_service() -> "IPermissionService":
    """FastAPI dependency for the permission service."""
    return get_container().permissions


def get_request_ledger() -> "IRequestLedger":
    """FastAPI dependency for the request ledger."""
    return get_container().ledger


def get_session_broker() -> "ISessionBroker":
    """FastAPI dependency for the Plex session broker."""
    return get_container().sessions


def get_admin_service() -> "IAdminService":
    """FastAPI dependency for the admin service."""
    return get_container().admins


def get_admin_guard() -> "IAdminSessionGuard":
    """FastAPI dependency for the admin session guard."""
    return get_container().admin_guard
